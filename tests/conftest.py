# tests/conftest.py

from pathlib import Path

import pytest

from todotree import Item, ToDoList, TreeManager


@pytest.fixture()
def todo() -> ToDoList:
    return ToDoList()


@pytest.fixture()
def flat_list() -> ToDoList:
    """root(0) with item1(1), item2(2), item3(3)"""
    store = ToDoList()
    for label in ("item1", "item2", "item3"):
        store.add(Item(label=label), 0)
    return store


@pytest.fixture()
def branchy_list() -> ToDoList:
    """
    0 root
    ├── 1 item1
    │   └── 2 item2
    │       ├── 3 item3
    │       │   └── 5 item5
    │       └── 4 item4
    """
    store = ToDoList()
    store.add(Item(label="item1"), 0)
    store.add(Item(label="item2"), 1)
    store.add(Item(label="item3"), 2)
    store.add(Item(label="item4"), 2)
    store.add(Item(label="item5"), 3)
    return store


@pytest.fixture()
def manager(tmp_path: Path) -> TreeManager:
    return TreeManager(trees_dir=str(tmp_path / "trees"))
