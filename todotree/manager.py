"""
TODOTREE - Tree Manager
=======================
File-backed named task trees. Each tree is kept as
{trees_dir}/{document_id}.json and loaded into a live ToDoList.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any
import logging

from .errors import DocumentReadError, NodeNotFoundError
from .outline import build_from_records, export_records
from .schema import Item, View, TreeDocument
from .store import ToDoList

logger = logging.getLogger("todotree.manager")

DEFAULT_TREES_DIR = ".todotree"


class TreeManager:
    """
    Task tree manager

    Storage: {trees_dir}/{document_id}.json

    Every mutation goes through the loaded ToDoList and is saved right
    away, so the file always reflects the live tree.
    """

    def __init__(self, trees_dir: str = DEFAULT_TREES_DIR):
        self.trees_dir = Path(trees_dir)
        self.trees_dir.mkdir(parents=True, exist_ok=True)
        self._document: Optional[TreeDocument] = None
        self._store: Optional[ToDoList] = None

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def _get_tree_file(self, document_id: str) -> Path:
        return self.trees_dir / f"{document_id}.json"

    @property
    def document(self) -> Optional[TreeDocument]:
        return self._document

    @property
    def store(self) -> ToDoList:
        if self._store is None:
            raise ValueError("No task tree loaded")
        return self._store

    def create(self, name: str, description: Optional[str] = None) -> TreeDocument:
        """Create an empty tree, save it and make it current"""
        document = TreeDocument(name=name, description=description)
        self._document = document
        self._store = ToDoList()
        self.save()

        logger.info(f"🚀 Created task tree: {document.name} ({document.id})")
        return document

    def save(self) -> None:
        """Write the current tree to its file"""
        if self._document is None:
            raise ValueError("No task tree loaded")

        document = self._document
        document.nodes = export_records(self.store)
        document.updated_at = datetime.utcnow()

        file_path = self._get_tree_file(document.id)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(document.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"✅ Saved task tree: {document.id} ({document.progress_pct}% complete)")

    def load(self, document_id: str) -> Optional[TreeDocument]:
        """
        Load a tree from its file and make it current.

        Returns None if the file does not exist; raises DocumentReadError if
        it cannot be parsed.
        """
        file_path = self._get_tree_file(document_id)

        if not file_path.exists():
            logger.warning(f"Task tree not found: {document_id}")
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                document = TreeDocument.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning(f"Error reading {file_path}: {e}")
            raise DocumentReadError(document_id, str(e)) from e

        self._document = document
        self._store = build_from_records(document.nodes)

        logger.info(f"📂 Loaded task tree: {document.id} ({document.progress_pct}% complete)")
        return document

    def list_trees(self) -> List[Dict[str, Any]]:
        """Summaries of all saved trees, most recently updated first"""
        trees = []

        for file_path in self.trees_dir.glob("*.json"):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    document = TreeDocument.model_validate(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Error reading {file_path}: {e}")
                continue
            trees.append({
                "id": document.id,
                "name": document.name,
                "progress": f"{document.progress_pct}%",
                "updated_at": document.updated_at.isoformat(),
                "summary": document.status_summary,
            })

        return sorted(trees, key=lambda x: x["updated_at"], reverse=True)

    def latest_id(self) -> Optional[str]:
        trees = self.list_trees()
        if not trees:
            return None
        return trees[0]["id"]

    # ========================================
    # TREE OPERATIONS
    # ========================================

    def add_item(self, label: str, parent: Optional[int] = None) -> int:
        node_id = self.store.add(Item(label=label), parent)
        self.save()
        logger.info(f"➕ Added item [{node_id}] {label}")
        return node_id

    def add_view(self, name: str, parent: Optional[int] = None) -> int:
        node_id = self.store.add(View(name=name), parent)
        self.save()
        logger.info(f"📁 Added view [{node_id}] {name}")
        return node_id

    def complete(self, node_id: int, completed: bool = True) -> Item:
        """Set an item's completion flag"""
        item = self.store.set_completed(node_id, completed)
        if item is None:
            raise NodeNotFoundError(node_id, expected="item")
        self.save()
        logger.info(f"{'✅ Completed' if completed else '↩️ Reopened'} item [{node_id}] {item.label}")
        return item

    def remove(self, node_id: int) -> Optional[Dict[int, int]]:
        """
        Remove a node and its subtree.

        Returns {old_id: new_id} for every survivor whose id changed, or
        None if nothing was removed (the root, or an unknown id).
        """
        plan = self.store.removal_plan(node_id)
        if self.store.remove(node_id) is None:
            if node_id in self.store:
                logger.warning("⛔ The root cannot be removed")
            else:
                logger.warning(f"Node not found: {node_id}")
            return None

        self.save()
        renumbered = {
            old_id: new_id
            for old_id, new_id in plan.items()
            if new_id is not None and new_id != old_id
        }
        removed = sum(1 for new_id in plan.values() if new_id is None)
        logger.info(f"🗑️ Removed {removed} node(s) at [{node_id}], {len(renumbered)} renumbered")
        return renumbered
