"""
TODOTREE - Hierarchical Task Tree
=================================

In-memory task tree: a single root with nested task items and named views.

Usage:
    from todotree import ToDoList, Item

    todo = ToDoList()
    work = todo.add_view("work")
    todo.add(Item(label="write report"), work)
    todo.add(Item(label="book flights"))

    todo.children(0)        # [1, 3]
    todo.get(2).label       # "write report"
    todo.remove(1)          # 1 -- "book flights" is now id 1

Ids are dense and shift down when a subtree is removed.
"""

from .schema import (
    NodeKind,
    Root,
    Item,
    View,
    Node,
    OutlineNode,
    NodeRecord,
    TreeDocument,
)

from .errors import (
    TodoTreeError,
    UnknownParentError,
    NodeNotFoundError,
    DocumentNotFoundError,
    DocumentReadError,
)

from .store import ToDoList, ROOT_ID
from .outline import export_outline, build_store, export_records, build_from_records
from .manager import TreeManager
from .report import render_tree, progress_pct

__version__ = "0.1.0"
__all__ = [
    "ToDoList",
    "ROOT_ID",
    "NodeKind",
    "Root",
    "Item",
    "View",
    "Node",
    "OutlineNode",
    "NodeRecord",
    "TreeDocument",
    "TodoTreeError",
    "UnknownParentError",
    "NodeNotFoundError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "export_outline",
    "build_store",
    "export_records",
    "build_from_records",
    "TreeManager",
    "render_tree",
    "progress_pct",
]
