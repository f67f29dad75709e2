"""spdist: incremental, cached shortest-path distances.

spdist answers repeated single-source distance queries against the same graph
without restarting Dijkstra's algorithm for every call. Partial results are
kept per source node and extended on demand, and per-engine bounds on
distance and result size keep work predictable on large graphs.

Primary API:
    ShortestPathEngine - Cached, boundable distance queries over one graph
    EngineConfig, load_engine_config() - Engine settings, optionally from YAML
    NetworkXGraph - Adapter for NetworkX graphs (applied automatically)

Example:
    import networkx as nx
    from spdist import ShortestPathEngine

    g = nx.MultiDiGraph()
    g.add_edge("A", "B", cost=1)
    g.add_edge("B", "C", cost=1)
    g.add_edge("A", "C", cost=4)

    engine = ShortestPathEngine(g, weight="cost")
    engine.get_distance("A", "C")          # 2.0
    engine.get_distance_map("A", num_dests=2)  # {"A": 0.0, "B": 1.0}
"""

from __future__ import annotations

from spdist import logging
from spdist._version import __version__
from spdist.config import EngineConfig, load_engine_config
from spdist.engine import Distance, EngineStats, ShortestPathEngine
from spdist.errors import (
    EmptyFrontierError,
    PreconditionError,
    SpdistError,
    UnknownNodeError,
    WeightError,
)
from spdist.frontier import PriorityFrontier
from spdist.graph import GraphLike, NetworkXGraph, as_graph, attr_weight, unit_weight
from spdist.index import DistanceIndex, SourceTable

__all__ = [
    # Version
    "__version__",
    # Engine
    "ShortestPathEngine",
    "Distance",
    "EngineStats",
    "EngineConfig",
    "load_engine_config",
    # Building blocks
    "DistanceIndex",
    "SourceTable",
    "PriorityFrontier",
    # Graph access
    "GraphLike",
    "NetworkXGraph",
    "as_graph",
    "attr_weight",
    "unit_weight",
    # Errors
    "SpdistError",
    "PreconditionError",
    "UnknownNodeError",
    "WeightError",
    "EmptyFrontierError",
    # Utilities
    "logging",
]
