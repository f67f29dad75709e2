import random

import pytest

from spdist.errors import EmptyFrontierError
from spdist.frontier import PriorityFrontier


def _drain(frontier):
    out = []
    while frontier:
        out.append(frontier.pop_min())
    return out


def test_empty_frontier():
    frontier = PriorityFrontier()
    assert len(frontier) == 0
    assert not frontier
    assert "A" not in frontier


def test_pop_min_on_empty_raises():
    frontier = PriorityFrontier()
    with pytest.raises(EmptyFrontierError):
        frontier.pop_min()
    # still an IndexError, like popping an empty heapq list
    with pytest.raises(IndexError):
        frontier.peek_min()


def test_insert_and_pop_in_key_order():
    frontier = PriorityFrontier()
    for node, key in [("C", 3.0), ("A", 1.0), ("D", 4.0), ("B", 2.0)]:
        frontier.insert(node, key)

    assert len(frontier) == 4
    assert frontier.peek_min() == ("A", 1.0)
    assert _drain(frontier) == [("A", 1.0), ("B", 2.0), ("C", 3.0), ("D", 4.0)]


def test_insert_duplicate_raises():
    frontier = PriorityFrontier()
    frontier.insert("A", 1.0)
    with pytest.raises(ValueError, match="already in the frontier"):
        frontier.insert("A", 0.5)


def test_ties_pop_in_insertion_order():
    frontier = PriorityFrontier()
    for node in ("x", "y", "z", "w"):
        frontier.insert(node, 5)
    frontier.insert("first", 1)

    assert [node for node, _ in _drain(frontier)] == ["first", "x", "y", "z", "w"]


def test_unorderable_nodes_are_never_compared():
    frontier = PriorityFrontier()
    a, b = object(), object()
    frontier.insert(a, 1.0)
    frontier.insert(b, 1.0)
    assert frontier.pop_min() == (a, 1.0)
    assert frontier.pop_min() == (b, 1.0)


def test_decrease_key_moves_node_forward():
    frontier = PriorityFrontier()
    frontier.insert("A", 1.0)
    frontier.insert("B", 5.0)
    frontier.insert("C", 3.0)

    frontier.decrease_key("B", 0.5)
    assert frontier.key_of("B") == 0.5
    assert _drain(frontier) == [("B", 0.5), ("A", 1.0), ("C", 3.0)]


def test_decrease_key_to_equal_key_is_allowed():
    frontier = PriorityFrontier()
    frontier.insert("A", 2.0)
    frontier.decrease_key("A", 2.0)
    assert frontier.key_of("A") == 2.0


def test_decrease_key_rejects_larger_key():
    frontier = PriorityFrontier()
    frontier.insert("A", 2.0)
    with pytest.raises(ValueError, match="larger than"):
        frontier.decrease_key("A", 3.0)
    assert frontier.key_of("A") == 2.0


def test_decrease_key_missing_node_raises():
    frontier = PriorityFrontier()
    with pytest.raises(KeyError):
        frontier.decrease_key("A", 1.0)


def test_reinsert_restores_popped_node_ahead_of_ties():
    frontier = PriorityFrontier()
    frontier.insert("A", 3.0)
    frontier.insert("B", 3.0)

    node, key = frontier.pop_min()
    assert node == "A"
    frontier.reinsert(node, key)

    assert "A" in frontier
    assert _drain(frontier) == [("A", 3.0), ("B", 3.0)]


def test_reinsert_present_node_raises():
    frontier = PriorityFrontier()
    frontier.insert("A", 1.0)
    with pytest.raises(ValueError):
        frontier.reinsert("A", 1.0)


def test_clear_and_iter():
    frontier = PriorityFrontier()
    frontier.insert("A", 1.0)
    frontier.insert("B", 2.0)
    assert set(frontier) == {"A", "B"}

    frontier.clear()
    assert len(frontier) == 0
    frontier.insert("A", 4.0)
    assert frontier.pop_min() == ("A", 4.0)


def test_random_operations_match_sorted_order():
    rng = random.Random(7)
    frontier = PriorityFrontier()
    keys = {}
    for i in range(300):
        key = rng.uniform(0, 100)
        frontier.insert(i, key)
        keys[i] = key
    for i in rng.sample(range(300), 120):
        keys[i] = keys[i] - rng.uniform(0, keys[i])
        frontier.decrease_key(i, keys[i])

    popped = _drain(frontier)
    assert [key for _, key in popped] == sorted(keys.values())
    assert {node: key for node, key in popped} == keys
