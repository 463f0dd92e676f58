# tests/test_store.py

import pytest

from todotree import Item, Root, ToDoList, UnknownParentError, View


def labels_by_id(store: ToDoList) -> dict:
    return {node_id: store.get(node_id).label for node_id in store if store.get(node_id)}


# ---- construction ----

def test_new_store_has_only_root(todo: ToDoList) -> None:
    assert todo.node_count == 1
    assert todo.edge_count == 0
    assert isinstance(todo.get_node(0), Root)
    assert todo.parent(0) is None


def test_get_on_empty_store_finds_nothing(todo: ToDoList) -> None:
    assert todo.get(1) is None
    assert todo.get(0) is None


# ---- add / get ----

def test_children_keep_insertion_order(flat_list: ToDoList) -> None:
    children = flat_list.children(0)
    assert children == [1, 2, 3]
    assert [flat_list.get(c).label for c in children] == ["item1", "item2", "item3"]


def test_add_defaults_to_root(todo: ToDoList) -> None:
    node_id = todo.add(Item(label="loose"))
    assert node_id == 1
    assert todo.parent(node_id) == 0
    assert todo.children(0) == [1]


def test_add_then_get_returns_payload(todo: ToDoList) -> None:
    payload = Item(label="write tests", completed=True)
    node_id = todo.add(payload)
    assert todo.get(node_id) == payload
    assert todo.get(node_id).completed is True


def test_same_payload_added_twice_gives_independent_nodes(todo: ToDoList) -> None:
    payload = Item(label="water plants")
    first = todo.add(payload)
    second = todo.add(payload)

    todo.set_completed(first)

    assert todo.get(first).completed is True
    assert todo.get(second).completed is False
    assert payload.completed is False


def test_editing_payload_after_add_leaves_store_alone(todo: ToDoList) -> None:
    payload = Item(label="x")
    node_id = todo.add(payload)

    payload.label = "changed"

    assert todo.get(node_id).label == "x"


def test_ids_are_assigned_densely(todo: ToDoList) -> None:
    ids = [todo.add(Item(label=f"t{i}")) for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert todo.node_count == 6
    assert todo.edge_count == 5


def test_add_under_unknown_parent_fails_without_changes(flat_list: ToDoList) -> None:
    with pytest.raises(UnknownParentError) as exc:
        flat_list.add(Item(label="orphan"), 42)
    assert exc.value.parent_id == 42
    assert flat_list.node_count == 4
    assert flat_list.edge_count == 3

    with pytest.raises(UnknownParentError):
        flat_list.add(Item(label="orphan"), -1)
    assert flat_list.node_count == 4


def test_add_under_removed_parent_fails(flat_list: ToDoList) -> None:
    flat_list.remove(3)
    with pytest.raises(UnknownParentError):
        flat_list.add(Item(label="late"), 3)


def test_add_rejects_root_payload(todo: ToDoList) -> None:
    with pytest.raises(TypeError):
        todo.add(Root())
    assert todo.node_count == 1


def test_views_hold_children_but_are_not_items(todo: ToDoList) -> None:
    work = todo.add_view("work")
    report = todo.add(Item(label="report"), work)
    nested = todo.add(View(name="later"), work)

    assert todo.get(work) is None
    assert todo.get(nested) is None
    assert todo.get_node(work) == View(name="work")
    assert todo.get(report).label == "report"
    assert todo.children(work) == [report, nested]


# ---- invalid ids ----

@pytest.mark.parametrize("bad_id", [-1, 4, 100, True, "1", None, 1.0])
def test_invalid_ids_find_nothing(flat_list: ToDoList, bad_id) -> None:
    assert flat_list.get(bad_id) is None
    assert flat_list.get_node(bad_id) is None
    assert flat_list.children(bad_id) == []
    assert flat_list.deep_children(bad_id) == []
    assert flat_list.parent(bad_id) is None
    assert bad_id not in flat_list


@pytest.mark.parametrize("bad_id", [-1, 4, 100, True])
def test_remove_invalid_id_is_a_no_op(flat_list: ToDoList, bad_id) -> None:
    assert flat_list.remove(bad_id) is None
    assert flat_list.node_count == 4
    assert flat_list.edge_count == 3
    assert labels_by_id(flat_list) == {1: "item1", 2: "item2", 3: "item3"}


# ---- deep children ----

def test_deep_children_is_depth_first_self_first(branchy_list: ToDoList) -> None:
    assert branchy_list.deep_children(2) == [2, 3, 5, 4]


def test_deep_children_of_root_covers_all(branchy_list: ToDoList) -> None:
    assert branchy_list.deep_children(0) == [0, 1, 2, 3, 5, 4]


def test_deep_children_of_leaf_is_itself(branchy_list: ToDoList) -> None:
    assert branchy_list.deep_children(5) == [5]


def test_children_follow_deep_children_order(todo: ToDoList) -> None:
    a = todo.add(Item(label="a"))
    b = todo.add(Item(label="b"))
    a1 = todo.add(Item(label="a1"), a)
    b1 = todo.add(Item(label="b1"), b)
    a2 = todo.add(Item(label="a2"), a)
    assert todo.children(a) == [a1, a2]
    assert todo.deep_children(0) == [0, a, a1, a2, b, b1]


# ---- removal ----

def test_remove_returns_vacated_slot_and_compacts(flat_list: ToDoList) -> None:
    assert flat_list.remove(2) == 2

    assert flat_list.node_count == 3
    assert flat_list.edge_count == 2
    assert flat_list.get(1).label == "item1"
    assert flat_list.get(2).label == "item3"
    assert flat_list.get(3) is None
    assert flat_list.children(0) == [1, 2]


def test_remove_root_is_refused(flat_list: ToDoList) -> None:
    for _ in range(3):
        assert flat_list.remove(0) is None
        assert flat_list.node_count == 4
        assert flat_list.edge_count == 3


def test_remove_takes_whole_subtree(todo: ToDoList) -> None:
    todo.add(Item(label="item1"), 0)
    todo.add(Item(label="item2"), 1)
    todo.add(Item(label="item3"), 2)

    assert todo.remove(1) == 1
    assert todo.node_count == 1
    assert todo.edge_count == 0
    assert todo.children(0) == []


def test_remove_last_node_leaves_slot_empty(flat_list: ToDoList) -> None:
    assert flat_list.remove(3) == 3
    assert 3 not in flat_list
    assert labels_by_id(flat_list) == {1: "item1", 2: "item2"}


def test_compaction_shifts_by_removed_ids_below(todo: ToDoList) -> None:
    # 0 ── 1 a ── 3 a1
    #  │      └── 5 a2
    #  ├── 2 b ── 4 b1
    #  └── 6 c
    a = todo.add(Item(label="a"))
    b = todo.add(Item(label="b"))
    todo.add(Item(label="a1"), a)
    todo.add(Item(label="b1"), b)
    todo.add(Item(label="a2"), a)
    todo.add(Item(label="c"))

    plan = todo.removal_plan(a)
    assert plan == {0: 0, 1: None, 2: 1, 3: None, 4: 2, 5: None, 6: 3}

    assert todo.remove(a) == 1
    assert labels_by_id(todo) == {1: "b", 2: "b1", 3: "c"}
    assert todo.children(0) == [1, 3]
    assert todo.children(1) == [2]
    assert todo.parent(2) == 1
    assert todo.edge_count == 3


def test_cached_id_points_elsewhere_after_remove(flat_list: ToDoList) -> None:
    cached = 3
    assert flat_list.get(cached).label == "item3"
    flat_list.remove(1)
    assert flat_list.get(cached) is None
    assert flat_list.get(2).label == "item3"


def test_add_after_remove_reuses_next_dense_id(flat_list: ToDoList) -> None:
    flat_list.remove(1)
    assert flat_list.add(Item(label="item4")) == 3
    assert flat_list.children(0) == [1, 2, 3]


def test_removal_plan_does_not_mutate(branchy_list: ToDoList) -> None:
    assert branchy_list.removal_plan(0) is None
    assert branchy_list.removal_plan(9) is None
    branchy_list.removal_plan(3)
    assert branchy_list.node_count == 6


# ---- completion ----

def test_set_completed_only_touches_items(todo: ToDoList) -> None:
    view = todo.add_view("home")
    item = todo.add(Item(label="dishes"), view)

    assert todo.set_completed(item).completed is True
    assert todo.get(item).completed is True
    assert todo.set_completed(item, False).completed is False

    assert todo.set_completed(view) is None
    assert todo.set_completed(0) is None
    assert todo.set_completed(99) is None
