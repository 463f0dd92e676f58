"""
TODOTREE - Outline Conversion
=============================
Converts a live ToDoList to and from its two serializable forms:
- OutlineNode: nested and id-free; ids are reassigned in preorder on rebuild
- NodeRecord: flat and id-ordered; ids survive a rebuild unchanged

Only the store's public operations are used.
"""

from typing import List, Optional

from .schema import Root, Item, View, OutlineNode, NodeRecord
from .store import ToDoList, ROOT_ID


def export_outline(store: ToDoList, node_id: int = ROOT_ID) -> List[OutlineNode]:
    """Nested copy of everything below node_id, in insertion order"""
    outline = []
    for child_id in store.children(node_id):
        node = store.get_node(child_id)
        if isinstance(node, (Item, View)):
            payload = node.model_copy()
        elif isinstance(node, Root):
            raise ValueError(f"Root found below node {node_id}")
        else:
            raise TypeError(f"Unknown node type: {type(node).__name__}")
        outline.append(OutlineNode(node=payload, children=export_outline(store, child_id)))
    return outline


def build_store(outline: List[OutlineNode], store: Optional[ToDoList] = None) -> ToDoList:
    """Replay an outline into a store (a new one unless given) under its root"""
    if store is None:
        store = ToDoList()

    # (entry, parent id) pairs; reversed so siblings are added first-to-last
    pending = [(entry, ROOT_ID) for entry in reversed(outline)]
    while pending:
        entry, parent_id = pending.pop()
        node_id = store.add(entry.node, parent_id)
        pending.extend((child, node_id) for child in reversed(entry.children))
    return store


def export_records(store: ToDoList) -> List[NodeRecord]:
    """Flat dump of every non-root node in id order"""
    records = []
    for node_id in store:
        if node_id == ROOT_ID:
            continue
        node = store.get_node(node_id)
        if not isinstance(node, (Item, View)):
            raise TypeError(f"Unexpected node at {node_id}: {type(node).__name__}")
        records.append(NodeRecord(parent=store.parent(node_id), node=node.model_copy()))
    return records


def build_from_records(records: List[NodeRecord]) -> ToDoList:
    """
    Replay a flat dump. Ids come back exactly as exported, since each
    record's parent was added before it.
    """
    store = ToDoList()
    for record in records:
        store.add(record.node, record.parent)
    return store
