"""
TODOTREE - Task Tree Store
==========================
In-memory tree of task items and views under a single root.

Node ids are dense: after any mutation the live ids are exactly
0..node_count-1, so removing a subtree renumbers the nodes after it.
Callers holding an id across a remove() must re-resolve it (see
removal_plan()).

Usage:
    from todotree import ToDoList, Item

    todo = ToDoList()
    groceries = todo.add(Item(label="groceries"))
    todo.add(Item(label="milk"), groceries)
    todo.children(0)          # [1]
    todo.deep_children(1)     # [1, 2]
    todo.remove(1)            # 1, only the root is left
"""

import logging
from typing import Optional, List, Dict, Iterator, Union

from .errors import UnknownParentError
from .schema import Node, Root, Item, View, describe

logger = logging.getLogger("todotree")

ROOT_ID = 0


class ToDoList:
    """
    Task tree store

    Nodes live in a flat list indexed by id. Each node keeps its parent id
    and its child ids in insertion order; the root has no parent.

    Not thread-safe: one mutator at a time.
    """

    def __init__(self):
        self._nodes: List[Node] = [Root()]
        self._parents: List[Optional[int]] = [None]
        self._children: List[List[int]] = [[]]

    # ========================================
    # SIZE / MEMBERSHIP
    # ========================================

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(kids) for kids in self._children)

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, node_id) -> bool:
        return self._is_live(node_id)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.node_count))

    def _is_live(self, node_id) -> bool:
        # bool is an int subclass; negative ints would index from the end
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            return False
        return 0 <= node_id < len(self._nodes)

    # ========================================
    # INSERTION
    # ========================================

    def add(self, item: Union[Item, View], parent: Optional[int] = None) -> int:
        """Attach a new item or view below parent (default: root), return its id"""
        if isinstance(item, Root):
            raise TypeError("The root cannot be added to a tree")
        if not isinstance(item, (Item, View)):
            raise TypeError(f"Unknown node type: {type(item).__name__}")

        parent_id = ROOT_ID if parent is None else parent
        if not self._is_live(parent_id):
            raise UnknownParentError(parent_id)

        # Own copy: no two nodes, and no caller, share a payload
        item = item.model_copy()
        node_id = len(self._nodes)
        self._nodes.append(item)
        self._parents.append(parent_id)
        self._children.append([])
        self._children[parent_id].append(node_id)

        logger.debug(f"Added {item.kind} {describe(item)!r} as {node_id} under {parent_id}")
        return node_id

    def add_view(self, name: str, parent: Optional[int] = None) -> int:
        return self.add(View(name=name), parent)

    # ========================================
    # LOOKUP
    # ========================================

    def get(self, node_id: int) -> Optional[Item]:
        """Item payload at node_id; None for the root, views and dead ids"""
        node = self.get_node(node_id)
        if isinstance(node, Item):
            return node
        return None

    def get_node(self, node_id: int) -> Optional[Node]:
        if not self._is_live(node_id):
            return None
        return self._nodes[node_id]

    def parent(self, node_id: int) -> Optional[int]:
        if not self._is_live(node_id):
            return None
        return self._parents[node_id]

    def children(self, node_id: int) -> List[int]:
        """Direct children in the order they were added"""
        if not self._is_live(node_id):
            return []
        return list(self._children[node_id])

    def deep_children(self, node_id: int) -> List[int]:
        """
        Depth-first preorder from node_id, node_id itself first.

        Earlier-added branches are exhausted before later ones.
        """
        if not self._is_live(node_id):
            return []

        visited = []
        seen = set()
        stack = [node_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            visited.append(current)
            # Reversed so the first-added child is popped first
            for child in reversed(self._children[current]):
                if child not in seen:
                    stack.append(child)
        return visited

    # ========================================
    # UPDATE
    # ========================================

    def set_completed(self, node_id: int, completed: bool = True) -> Optional[Item]:
        item = self.get(node_id)
        if item is None:
            return None
        item.completed = completed
        logger.debug(f"Item {node_id} completed={completed}")
        return item

    # ========================================
    # REMOVAL
    # ========================================

    def removal_plan(self, node_id: int) -> Optional[Dict[int, Optional[int]]]:
        """
        Map every current id to its id after remove(node_id).

        Removed ids map to None. A survivor with old id i moves down by the
        number of removed ids below i. Returns None when nothing would be
        removed (root or dead id).

        Survivors shift down instead of the last node being swapped into
        the hole, so relative id order and child order are preserved.
        """
        if node_id == ROOT_ID or not self._is_live(node_id):
            return None

        doomed = set(self.deep_children(node_id))
        plan: Dict[int, Optional[int]] = {}
        next_id = 0
        for old_id in range(len(self._nodes)):
            if old_id in doomed:
                plan[old_id] = None
            else:
                plan[old_id] = next_id
                next_id += 1
        return plan

    def remove(self, node_id: int) -> Optional[int]:
        """
        Delete node_id and all of its descendants, then compact the ids.

        Returns node_id, the slot the removed node vacated (occupied by the
        next survivor if there is one). Returns None and changes nothing for
        the root or a dead id.
        """
        if node_id == ROOT_ID and self._is_live(node_id):
            logger.debug("Refusing to remove the root")
            return None

        plan = self.removal_plan(node_id)
        if plan is None:
            logger.debug(f"Nothing to remove at {node_id!r}")
            return None

        survivors = [old_id for old_id, new_id in plan.items() if new_id is not None]
        nodes = [self._nodes[old_id] for old_id in survivors]
        parents = []
        children = []
        for old_id in survivors:
            old_parent = self._parents[old_id]
            parents.append(None if old_parent is None else plan[old_parent])
            children.append([plan[c] for c in self._children[old_id] if plan[c] is not None])

        self._nodes, self._parents, self._children = nodes, parents, children

        removed = len(plan) - len(survivors)
        shifted = sum(1 for old_id, new_id in plan.items() if new_id is not None and new_id != old_id)
        logger.debug(f"Removed {removed} node(s) at {node_id}; renumbered {shifted} survivor(s)")
        return node_id
