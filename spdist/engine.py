"""Incremental single-source shortest-path distances with caching and bounds.

`ShortestPathEngine` runs Dijkstra's algorithm lazily. Each source node gets a
`DistanceIndex` that survives between calls (when caching is enabled), so
asking for the 20 closest nodes after the 10 closest only settles the next 10
instead of starting over. Two bounds limit work on large graphs:

  - ``max_distance``: nodes farther than this are never settled.
  - ``max_targets``: at most this many nodes are settled per source.

Returned maps iterate in nondecreasing distance order. Unreachable nodes (and
nodes cut off by a bound) are absent rather than mapped to infinity.

All edge weights that are actually relaxed must be nonnegative; a negative
weight raises `WeightError` only when a query reaches that edge. The engine
does not watch the graph for changes: call `reset_source` or `reset` after
mutating it.

Example:
    >>> import networkx as nx
    >>> g = nx.DiGraph()
    >>> g.add_weighted_edges_from([("A", "B", 1), ("A", "C", 4), ("B", "C", 1)])
    >>> engine = ShortestPathEngine(g, weight="weight")
    >>> engine.get_distance("A", "C")
    2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import (
    Callable,
    Collection,
    Dict,
    Hashable,
    Iterable,
    Optional,
    Protocol,
    Set,
    Union,
)

from spdist.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from spdist.errors import PreconditionError, UnknownNodeError, WeightError
from spdist.graph import GraphLike, NxGraph, WeightFunc, as_graph, resolve_weight
from spdist.index import DistanceIndex, SourceTable
from spdist.logging import get_logger

logger = get_logger(__name__)

NodeID = Hashable
DistanceMap = Dict[NodeID, float]


class Distance(Protocol):
    """Anything able to report shortest-path distances between nodes."""

    def get_distance(self, source: NodeID, target: NodeID) -> Optional[float]: ...

    def get_distance_map(self, source: NodeID) -> DistanceMap: ...


@dataclass
class EngineStats:
    """Cumulative work counters of an engine.

    Attributes:
        queries: Number of distance queries answered.
        finalized: Number of nodes settled.
        relaxed: Number of edge relaxations performed.
    """

    queries: int = 0
    finalized: int = 0
    relaxed: int = 0

    def reset(self) -> None:
        self.queries = 0
        self.finalized = 0
        self.relaxed = 0


class ShortestPathEngine:
    """Cached, boundable Dijkstra distances for one graph.

    Args:
        graph: A NetworkX graph or any object implementing `GraphLike`.
        weight: None for unit weights, the name of an edge attribute
            (NetworkX graphs only), or a callable mapping an edge to its
            weight.
        cached: Whether per-source state is kept between queries.
    """

    def __init__(
        self,
        graph: Union[GraphLike, NxGraph],
        weight: Optional[Union[str, WeightFunc]] = None,
        cached: bool = DEFAULT_ENGINE_CONFIG.cached,
    ) -> None:
        self._graph: GraphLike = as_graph(graph)
        self._weight: WeightFunc = resolve_weight(self._graph, weight)
        self._cached = cached
        self._max_distance: float = DEFAULT_ENGINE_CONFIG.max_distance
        self._max_targets: Optional[int] = DEFAULT_ENGINE_CONFIG.max_targets
        self._sources = SourceTable()
        self.stats = EngineStats()

    @classmethod
    def from_config(
        cls,
        graph: Union[GraphLike, NxGraph],
        config: EngineConfig,
        weight: Optional[Union[str, WeightFunc]] = None,
    ) -> "ShortestPathEngine":
        """Build an engine with the bounds and caching policy of ``config``.

        An explicit ``weight`` takes precedence over ``config.weight_attr``.
        """
        engine = cls(
            graph,
            weight=weight if weight is not None else config.weight_attr,
            cached=config.cached,
        )
        engine.set_max_distance(config.max_distance)
        engine.set_max_targets(config.max_targets)
        return engine

    def __repr__(self) -> str:
        return (
            f"ShortestPathEngine(max_distance={self._max_distance}, "
            f"max_targets={self._max_targets}, cached={self._cached}, "
            f"sources={len(self._sources)})"
        )

    #
    # Properties
    #
    @property
    def graph(self) -> GraphLike:
        return self._graph

    @property
    def max_distance(self) -> float:
        return self._max_distance

    @property
    def max_targets(self) -> Optional[int]:
        return self._max_targets

    @property
    def cached(self) -> bool:
        return self._cached

    @property
    def cached_sources(self) -> Set[NodeID]:
        """Sources that currently hold a cached distance index."""
        return set(self._sources)

    #
    # Queries
    #
    def get_distance(self, source: NodeID, target: NodeID) -> Optional[float]:
        """Return the shortest distance from ``source`` to ``target``.

        Returns:
            The distance, or None if ``target`` is unreachable or lies beyond
            the current bounds.

        Raises:
            UnknownNodeError: If either node is not in the graph.
            WeightError: If a negative edge weight is met on the way.
        """
        self._check_node(target, "target")
        return self.get_distance_map(source, targets=(target,)).get(target)

    def get_distance_map(
        self,
        source: NodeID,
        targets: Optional[Iterable[NodeID]] = None,
        num_dests: Optional[int] = None,
    ) -> DistanceMap:
        """Return distances from ``source``, ordered by nondecreasing distance.

        With neither ``targets`` nor ``num_dests`` every node reachable within
        the bounds is returned, including ``source`` itself at distance 0.

        Args:
            source: Node distances are measured from.
            targets: Nodes whose distances are wanted. Unreachable targets are
                absent from the result.
            num_dests: Return only the ``num_dests`` closest nodes (ties broken
                by discovery order).

        Returns:
            A new dict mapping node to distance.

        Raises:
            UnknownNodeError: If ``source`` or a target is not in the graph.
            PreconditionError: If both ``targets`` and ``num_dests`` are given,
                if ``targets`` holds more than ``max_targets`` nodes, or if
                ``num_dests`` is outside ``[1, |nodes|]`` or above
                ``max_targets``.
            WeightError: If a negative edge weight is met on the way.
        """
        if targets is not None and num_dests is not None:
            raise PreconditionError("Pass either targets or num_dests, not both.")
        self._check_node(source, "source")

        node_count = len(self._graph.nodes())
        if targets is not None:
            wanted = set(targets)
            for target in wanted:
                self._check_node(target, "target")
            if self._max_targets is not None and len(wanted) > self._max_targets:
                raise PreconditionError(
                    f"Size of target set {len(wanted)} exceeds maximum number of "
                    f"targets allowed: {self._max_targets}"
                )
            limit = self._cap(node_count)
            return self._query(
                source, wanted, limit, lambda dists: _restrict(dists, wanted)
            )

        if num_dests is None:
            return self._query(source, None, self._cap(node_count), dict)

        if isinstance(num_dests, bool) or not isinstance(num_dests, int):
            raise PreconditionError(f"num_dests must be an integer, got {num_dests!r}")
        if not 1 <= num_dests <= node_count:
            raise PreconditionError(
                f"Number of destinations must be in [1, {node_count}], got {num_dests}"
            )
        if self._max_targets is not None and num_dests > self._max_targets:
            raise PreconditionError(
                f"Size of target set {num_dests} exceeds maximum number of "
                f"targets allowed: {self._max_targets}"
            )
        return self._query(
            source, None, num_dests, lambda dists: _head(dists, num_dests)
        )

    #
    # Bounds and cache management
    #
    def set_max_distance(self, max_distance: float) -> None:
        """Stop computing distances beyond ``max_distance``.

        Distances already cached beyond the new bound stay in the cache but
        are left out of results while the bound is in force. A negative value
        blocks any further computation.
        """
        if max_distance is None or math.isnan(max_distance):
            raise ValueError(f"max_distance must be a number, got {max_distance!r}")
        self._max_distance = max_distance
        self._recompute_bounds()
        logger.debug("max_distance set to %s", max_distance)

    def set_max_targets(self, max_targets: Optional[int]) -> None:
        """Settle at most ``max_targets`` nodes per source; None lifts the cap.

        A negative value blocks any further computation.
        """
        if max_targets is not None and (
            isinstance(max_targets, bool) or not isinstance(max_targets, int)
        ):
            raise ValueError(
                f"max_targets must be an integer or None, got {max_targets!r}"
            )
        self._max_targets = max_targets
        self._recompute_bounds()
        logger.debug("max_targets set to %s", max_targets)

    def enable_caching(self, enabled: bool) -> None:
        """Turn caching of per-source state on or off.

        Already cached sources are kept; call `reset` to drop them.
        """
        self._cached = enabled
        logger.debug("Caching %s", "enabled" if enabled else "disabled")

    def reset(self) -> None:
        """Drop the cached state of every source.

        Call this whenever the graph or its weights change.
        """
        self._sources.clear()

    def reset_source(self, source: NodeID) -> None:
        """Drop the cached state of ``source`` only."""
        self._sources.discard(source)

    #
    # Internals
    #
    def _check_node(self, node: NodeID, role: str) -> None:
        if node not in self._graph.nodes():
            raise UnknownNodeError(node, role)

    def _cap(self, count: int) -> int:
        if self._max_targets is None:
            return count
        return min(count, self._max_targets)

    def _recompute_bounds(self) -> None:
        for index in self._sources.values():
            index.recompute_bound(self._max_distance, self._max_targets)

    def _query(
        self,
        source: NodeID,
        targets: Optional[Set[NodeID]],
        limit: int,
        shape: Callable[[DistanceMap], DistanceMap],
    ) -> DistanceMap:
        index = self._sources.get_or_create(source)
        try:
            self._expand(index, targets, limit)
            return shape(self._visible(index.finalized))
        finally:
            self.stats.queries += 1
            if not self._cached:
                self._sources.discard(source)

    def _visible(self, finalized: DistanceMap) -> DistanceMap:
        # Cached entries may predate tighter bounds; hide them without
        # touching the cache.
        result: DistanceMap = {}
        cap = self._max_targets
        for node, dist in finalized.items():
            if dist > self._max_distance or (cap is not None and len(result) >= cap):
                break
            result[node] = dist
        return result

    def _expand(
        self, index: DistanceIndex, targets: Optional[Set[NodeID]], limit: int
    ) -> None:
        finalized = index.finalized
        outstanding: Set[NodeID] = set()
        if targets is not None:
            outstanding = {t for t in targets if t not in finalized}

        if (
            index.reached_bound
            or (targets is not None and not outstanding)
            or len(finalized) >= limit
        ):
            return

        graph = self._graph
        weight_of = self._weight
        max_distance = self._max_distance
        max_targets = self._max_targets
        stats = self.stats

        # Target queries end once all targets are settled, not at ``limit``
        while index.frontier and (
            outstanding if targets is not None else len(finalized) < limit
        ):
            node, dist = index.pop_next()
            if dist > max_distance:
                index.unfinalize(node, dist)
                logger.debug(
                    "Source %r reached max_distance %s at %r (%s)",
                    index.source,
                    max_distance,
                    node,
                    dist,
                )
                break
            if max_targets is not None and len(finalized) >= max_targets:
                index.restore(node, dist)
                logger.debug(
                    "Source %r reached max_targets %s", index.source, max_targets
                )
                break

            index.finalize(node, dist)
            stats.finalized += 1
            outstanding.discard(node)

            for neighbor in graph.successors(node):
                if neighbor in finalized:
                    continue
                for edge in graph.edges_connecting(node, neighbor):
                    edge_weight = weight_of(edge)
                    if not edge_weight >= 0:
                        raise WeightError(edge, edge_weight)
                    stats.relaxed += 1
                    index.relax(neighbor, dist + edge_weight)


def _restrict(distances: DistanceMap, wanted: Collection[NodeID]) -> DistanceMap:
    return {node: dist for node, dist in distances.items() if node in wanted}


def _head(distances: DistanceMap, count: int) -> DistanceMap:
    result: DistanceMap = {}
    for node, dist in distances.items():
        if len(result) >= count:
            break
        result[node] = dist
    return result
