"""Per-source distance caches.

A `DistanceIndex` holds everything needed to pause and resume Dijkstra's
algorithm for one source node:

  - ``finalized``: insertion-ordered dict of settled distances. Values are
    nondecreasing in insertion order.
  - ``tentative``: best-known distances of queued nodes.
  - ``frontier``: a `PriorityFrontier` over exactly the keys of ``tentative``.
  - ``reached_bound``: set once a bound cut the expansion short.
  - ``last_finalized_distance``: distance of the most recently settled node.

Nodes are plain keys into these tables; no record points back at another.
`SourceTable` maps source nodes to their index for one engine instance.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterator, Optional, Tuple

from spdist.frontier import PriorityFrontier
from spdist.logging import get_logger

logger = get_logger(__name__)

NodeID = Hashable
Distance = float


class DistanceIndex:
    """Resumable shortest-path state for a single source node."""

    __slots__ = (
        "source",
        "finalized",
        "tentative",
        "frontier",
        "reached_bound",
        "last_finalized_distance",
    )

    def __init__(self, source: NodeID) -> None:
        self.source = source
        self.finalized: Dict[NodeID, Distance] = {}
        self.tentative: Dict[NodeID, Distance] = {source: 0.0}
        self.frontier = PriorityFrontier()
        self.frontier.insert(source, 0.0)
        self.reached_bound: bool = False
        self.last_finalized_distance: Distance = 0.0

    def __repr__(self) -> str:
        return (
            f"DistanceIndex(source={self.source!r}, finalized={len(self.finalized)}, "
            f"tentative={len(self.tentative)}, reached_bound={self.reached_bound})"
        )

    @property
    def is_exhausted(self) -> bool:
        """True when every node reachable from the source has been settled."""
        return not self.frontier

    def relax(self, node: NodeID, candidate: Distance) -> bool:
        """Offer a new path length for ``node``.

        Settled nodes are left alone. An unseen node is queued; a queued node
        is updated only if ``candidate`` strictly improves its estimate.

        Returns:
            True if the node was queued or its estimate lowered.
        """
        if node in self.finalized:
            return False
        current = self.tentative.get(node)
        if current is None:
            self.tentative[node] = candidate
            self.frontier.insert(node, candidate)
            return True
        if candidate < current:
            self.tentative[node] = candidate
            self.frontier.decrease_key(node, candidate)
            return True
        return False

    def pop_next(self) -> Tuple[NodeID, Distance]:
        """Remove the closest queued node from the frontier and tentative table."""
        node, dist = self.frontier.pop_min()
        del self.tentative[node]
        return node, dist

    def finalize(self, node: NodeID, distance: Distance) -> None:
        """Record ``distance`` as the shortest distance to ``node``.

        Raises:
            ValueError: If ``distance`` would break the nondecreasing order.
        """
        if self.finalized and distance < self.last_finalized_distance:
            raise ValueError(
                f"Cannot finalize '{node}' at {distance}: last finalized distance "
                f"is {self.last_finalized_distance}."
            )
        self.tentative.pop(node, None)
        self.finalized[node] = distance
        self.last_finalized_distance = distance

    def unfinalize(self, node: NodeID, distance: Distance) -> None:
        """Put a popped node back on the frontier and mark the bound as reached."""
        self.tentative[node] = distance
        self.frontier.reinsert(node, distance)
        self.reached_bound = True

    restore = unfinalize

    def recompute_bound(self, max_distance: float, max_targets: Optional[int]) -> bool:
        """Re-evaluate ``reached_bound`` against new limits.

        Expansion stays blocked when nodes beyond ``max_distance`` were already
        settled or when the target cap is already met. A node whose distance
        equals ``max_distance`` is still admissible, so equality unblocks.

        Returns:
            The new value of ``reached_bound``.
        """
        at_cap = max_targets is not None and len(self.finalized) >= max_targets
        self.reached_bound = max_distance < self.last_finalized_distance or at_cap
        return self.reached_bound


class SourceTable:
    """Source node -> `DistanceIndex` table owned by one engine."""

    def __init__(self) -> None:
        self._indexes: Dict[NodeID, DistanceIndex] = {}

    def __len__(self) -> int:
        return len(self._indexes)

    def __contains__(self, source: object) -> bool:
        return source in self._indexes

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self._indexes)

    def values(self) -> Iterator[DistanceIndex]:
        return iter(self._indexes.values())

    def get(self, source: NodeID) -> Optional[DistanceIndex]:
        return self._indexes.get(source)

    def get_or_create(self, source: NodeID) -> DistanceIndex:
        """Return the index for ``source``, creating and registering it if needed."""
        index = self._indexes.get(source)
        if index is None:
            index = DistanceIndex(source)
            self._indexes[source] = index
            logger.debug("Created distance index for source %r", source)
        return index

    def discard(self, source: NodeID) -> None:
        """Drop the index for ``source``; a missing entry is not an error."""
        if self._indexes.pop(source, None) is not None:
            logger.debug("Discarded distance index for source %r", source)

    def clear(self) -> None:
        if self._indexes:
            logger.debug("Cleared %d distance index(es)", len(self._indexes))
        self._indexes.clear()

