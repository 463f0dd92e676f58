"""
TODOTREE - Reporting
====================
Human-readable rendering of a task tree.
"""

from typing import Optional

from .schema import NodeKind, Root, Item, View, completion_pct
from .store import ToDoList, ROOT_ID

STATUS_ICONS = {
    "open": "⬜",
    "completed": "✅",
    NodeKind.VIEW.value: "📁",
}


def progress_pct(store: ToDoList) -> int:
    """Share of completed items, 0 when there are none"""
    items = (store.get(node_id) for node_id in store)
    return completion_pct(item for item in items if item is not None)


def progress_bar(pct: int) -> str:
    return f"{'█' * (pct // 10)}{'░' * (10 - pct // 10)} {pct}%"


def _line(store: ToDoList, node_id: int, depth: int) -> str:
    node = store.get_node(node_id)
    indent = "  " * depth
    if isinstance(node, Item):
        icon = STATUS_ICONS["completed" if node.completed else "open"]
        return f"{indent}{icon} [{node_id}] {node.label}"
    if isinstance(node, View):
        return f"{indent}{STATUS_ICONS[NodeKind.VIEW.value]} [{node_id}] {node.name}"
    if isinstance(node, Root):
        raise ValueError(f"Root found at depth {depth}")
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def render_tree(store: ToDoList, title: Optional[str] = None) -> str:
    """Indented listing of every node with id and status icon"""
    pct = progress_pct(store)
    lines = [
        f"📋 {title or 'Task tree'}",
        f"Progress: {progress_bar(pct)}",
        "",
    ]

    # (node id, depth) pairs, preorder
    pending = [(child, 0) for child in reversed(store.children(ROOT_ID))]
    if not pending:
        lines.append("  (empty)")
    while pending:
        node_id, depth = pending.pop()
        lines.append(_line(store, node_id, depth))
        pending.extend((child, depth + 1) for child in reversed(store.children(node_id)))

    return "\n".join(lines)
