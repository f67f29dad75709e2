"""Indexed binary min-heap keyed by tentative distance.

`PriorityFrontier` keeps the heap as a list of ``(key, seq, node)`` entries and
a node -> heap-position dict, which is what makes ``decrease_key`` O(log n).
The ``seq`` component is a monotonically increasing insertion counter: entries
with equal keys pop in insertion order and nodes themselves are never
compared, so they only need to be hashable.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterator, List, Tuple

from spdist.errors import EmptyFrontierError

NodeID = Hashable
Key = float
HeapEntry = Tuple[Key, int, NodeID]


class PriorityFrontier:
    """Min-priority structure over nodes with decrease-key support."""

    __slots__ = ("_heap", "_pos", "_next_seq", "_restore_seq")

    def __init__(self) -> None:
        self._heap: List[HeapEntry] = []
        self._pos: Dict[NodeID, int] = {}
        self._next_seq: int = 0
        # Restored nodes get negative sequence numbers so they win ties
        # against everything inserted after they were first queued.
        self._restore_seq: int = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, node: object) -> bool:
        return node in self._pos

    def __iter__(self) -> Iterator[NodeID]:
        """Iterate over queued nodes in heap (not priority) order."""
        return (entry[2] for entry in self._heap)

    def __repr__(self) -> str:
        return f"PriorityFrontier(size={len(self._heap)})"

    def key_of(self, node: NodeID) -> Key:
        """Return the current key of a queued node.

        Raises:
            KeyError: If the node is not queued.
        """
        return self._heap[self._pos[node]][0]

    def insert(self, node: NodeID, key: Key) -> None:
        """Queue a node that is not already present.

        Raises:
            ValueError: If the node is already queued.
        """
        if node in self._pos:
            raise ValueError(f"Node '{node}' is already in the frontier.")
        seq = self._next_seq
        self._next_seq += 1
        self._push((key, seq, node))

    def reinsert(self, node: NodeID, key: Key) -> None:
        """Queue again a node that was just popped.

        Used to undo a pop whose key turned out to exceed a bound. The node
        keeps precedence over nodes with the same key.

        Raises:
            ValueError: If the node is already queued.
        """
        if node in self._pos:
            raise ValueError(f"Node '{node}' is already in the frontier.")
        self._restore_seq -= 1
        self._push((key, self._restore_seq, node))

    def decrease_key(self, node: NodeID, new_key: Key) -> None:
        """Lower the key of a queued node.

        Raises:
            KeyError: If the node is not queued.
            ValueError: If ``new_key`` is larger than the current key.
        """
        if node not in self._pos:
            raise KeyError(f"Node '{node}' is not in the frontier.")
        idx = self._pos[node]
        old_key, seq, _ = self._heap[idx]
        if new_key > old_key:
            raise ValueError(
                f"New key {new_key} for node '{node}' is larger than "
                f"current key {old_key}."
            )
        self._heap[idx] = (new_key, seq, node)
        self._sift_up(idx)

    def peek_min(self) -> Tuple[NodeID, Key]:
        """Return the ``(node, key)`` pair with the smallest key without removing it."""
        if not self._heap:
            raise EmptyFrontierError("peek on an empty frontier")
        key, _, node = self._heap[0]
        return node, key

    def pop_min(self) -> Tuple[NodeID, Key]:
        """Remove and return the ``(node, key)`` pair with the smallest key.

        Raises:
            EmptyFrontierError: If the frontier is empty.
        """
        heap = self._heap
        if not heap:
            raise EmptyFrontierError("pop from an empty frontier")
        last = heap.pop()
        if heap:
            top = heap[0]
            heap[0] = last
            self._pos[last[2]] = 0
            self._sift_down(0)
        else:
            top = last
        key, _, node = top
        del self._pos[node]
        return node, key

    def clear(self) -> None:
        self._heap.clear()
        self._pos.clear()

    #
    # Heap maintenance
    #
    def _push(self, entry: HeapEntry) -> None:
        self._heap.append(entry)
        idx = len(self._heap) - 1
        self._pos[entry[2]] = idx
        self._sift_up(idx)

    def _sift_up(self, idx: int) -> None:
        heap = self._heap
        pos = self._pos
        entry = heap[idx]
        rank = entry[:2]
        while idx > 0:
            parent_idx = (idx - 1) >> 1
            parent = heap[parent_idx]
            if rank >= parent[:2]:
                break
            heap[idx] = parent
            pos[parent[2]] = idx
            idx = parent_idx
        heap[idx] = entry
        pos[entry[2]] = idx

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        pos = self._pos
        size = len(heap)
        entry = heap[idx]
        rank = entry[:2]
        while True:
            child_idx = 2 * idx + 1
            if child_idx >= size:
                break
            right_idx = child_idx + 1
            if right_idx < size and heap[right_idx][:2] < heap[child_idx][:2]:
                child_idx = right_idx
            child = heap[child_idx]
            if rank <= child[:2]:
                break
            heap[idx] = child
            pos[child[2]] = idx
            idx = child_idx
        heap[idx] = entry
        pos[entry[2]] = idx
