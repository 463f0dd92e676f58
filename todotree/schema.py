"""
TODOTREE - Node Schema Definition
=================================
Node payloads stored in a task tree, plus the id-free document models
used when a tree is written to disk.
"""

from enum import Enum
from typing import Optional, List, Dict, Iterable, Union, Literal, Annotated
from datetime import datetime
from pydantic import BaseModel, Field
import uuid


class NodeKind(str, Enum):
    """Node variants"""
    ROOT = "root"   # Singleton, always id 0
    ITEM = "item"   # Task with label + completion flag
    VIEW = "view"   # Named grouping container


class Root(BaseModel):
    """The single root of a tree"""
    kind: Literal["root"] = "root"


class Item(BaseModel):
    """A task entry"""
    kind: Literal["item"] = "item"
    label: str
    completed: bool = False


class View(BaseModel):
    """A named grouping of items and other views"""
    kind: Literal["view"] = "view"
    name: str


Node = Annotated[Union[Root, Item, View], Field(discriminator="kind")]

# Payloads a caller may attach below an existing node
Payload = Annotated[Union[Item, View], Field(discriminator="kind")]


def describe(node: Union[Root, Item, View]) -> str:
    """Short human-readable text for any node kind"""
    if isinstance(node, Root):
        return "(root)"
    if isinstance(node, Item):
        return node.label
    if isinstance(node, View):
        return node.name
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def completion_pct(items: Iterable[Item]) -> int:
    """Share of completed items, 0 when there are none"""
    items = list(items)
    if not items:
        return 0
    completed = sum(1 for item in items if item.completed)
    return int((completed / len(items)) * 100)


# ============================================================
# DOCUMENT MODELS
# ============================================================

class OutlineNode(BaseModel):
    """Nested, id-free rendition of one subtree"""
    node: Payload
    children: List["OutlineNode"] = Field(default_factory=list)


class NodeRecord(BaseModel):
    """One non-root node of a flat, id-ordered dump"""
    parent: int = Field(ge=0)
    node: Payload


class TreeDocument(BaseModel):
    """A named task tree as kept on disk"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4())[:12])
    name: str
    description: Optional[str] = None

    # Metadata
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Node i+1 of the tree is nodes[i]; parents always precede children
    nodes: List[NodeRecord] = Field(default_factory=list)

    def iter_items(self):
        for record in self.nodes:
            if isinstance(record.node, Item):
                yield record.node

    @property
    def progress_pct(self) -> int:
        return completion_pct(self.iter_items())

    @property
    def status_summary(self) -> Dict[str, int]:
        summary = {"open": 0, "completed": 0}
        for item in self.iter_items():
            summary["completed" if item.completed else "open"] += 1
        return summary


OutlineNode.model_rebuild()
