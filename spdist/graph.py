"""Graph access used by the distance engine.

The engine reads a graph through three calls only, captured by the
`GraphLike` protocol:

    nodes() -> collection supporting ``in`` and ``len``
    successors(node) -> iterable of nodes
    edges_connecting(u, v) -> iterable of parallel edges from u to v

`NetworkXGraph` adapts any NetworkX graph class to that protocol. Edges are
identified by ``(u, v, key)`` tuples on multigraphs and ``(u, v)`` tuples on
simple graphs; undirected graphs report neighbors as successors.

Example:
    >>> import networkx as nx
    >>> g = nx.MultiDiGraph()
    >>> g.add_edge("A", "B", cost=2)
    0
    >>> view = as_graph(g)
    >>> list(view.edges_connecting("A", "B"))
    [('A', 'B', 0)]
    >>> attr_weight(view, "cost")(("A", "B", 0))
    2
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Collection,
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

import networkx as nx

NodeID = Hashable
Edge = Hashable
AttrDict = Dict[str, Any]
WeightFunc = Callable[[Any], float]

if TYPE_CHECKING:
    NxGraph = Union[nx.Graph, nx.DiGraph, nx.MultiGraph, nx.MultiDiGraph]
else:
    NxGraph = Any


@runtime_checkable
class GraphLike(Protocol):
    """Read-only graph interface consumed by `ShortestPathEngine`."""

    def nodes(self) -> Collection[NodeID]: ...

    def successors(self, node: NodeID) -> Iterable[NodeID]: ...

    def edges_connecting(self, u: NodeID, v: NodeID) -> Iterable[Edge]: ...


class NetworkXGraph:
    """Adapter exposing a NetworkX graph through `GraphLike`.

    The wrapped graph is referenced, not copied: mutations of the NetworkX
    object are visible immediately, which is why engine caches must be reset
    after the graph changes.

    Attributes:
        nx_graph: The wrapped NetworkX graph.
    """

    def __init__(self, nx_graph: NxGraph) -> None:
        if not isinstance(nx_graph, nx.Graph):
            raise TypeError(
                f"Expected a networkx graph, got {type(nx_graph).__name__}."
            )
        self.nx_graph = nx_graph
        self._directed = nx_graph.is_directed()
        self._multi = nx_graph.is_multigraph()

    def __repr__(self) -> str:
        return (
            f"NetworkXGraph({type(self.nx_graph).__name__}, "
            f"nodes={self.nx_graph.number_of_nodes()}, "
            f"edges={self.nx_graph.number_of_edges()})"
        )

    @property
    def is_directed(self) -> bool:
        return self._directed

    @property
    def is_multigraph(self) -> bool:
        return self._multi

    def nodes(self) -> Collection[NodeID]:
        return self.nx_graph.nodes

    def successors(self, node: NodeID) -> Iterable[NodeID]:
        # ``_adj`` holds successors for directed graphs and neighbors otherwise
        return self.nx_graph._adj[node]

    def edges_connecting(self, u: NodeID, v: NodeID) -> List[Edge]:
        """List the edges from ``u`` to ``v``, or an empty list if none exist."""
        nbrs = self.nx_graph._adj.get(u)
        if nbrs is None or v not in nbrs:
            return []
        if self._multi:
            return [(u, v, key) for key in nbrs[v]]
        return [(u, v)]

    def edge_data(self, edge: Tuple) -> AttrDict:
        """Return the attribute dict of an edge produced by `edges_connecting`.

        Raises:
            KeyError: If the edge does not exist.
        """
        if self._multi:
            u, v, key = edge
            return self.nx_graph._adj[u][v][key]
        u, v = edge
        return self.nx_graph._adj[u][v]


def as_graph(graph: Union[GraphLike, NxGraph]) -> GraphLike:
    """Return ``graph`` as a `GraphLike`, wrapping NetworkX graphs.

    Raises:
        TypeError: If ``graph`` is neither a NetworkX graph nor `GraphLike`.
    """
    if isinstance(graph, nx.Graph):
        return NetworkXGraph(graph)
    if isinstance(graph, GraphLike):
        return graph
    raise TypeError(
        f"Unsupported graph type {type(graph).__name__}: expected a networkx graph "
        "or an object providing nodes(), successors() and edges_connecting()."
    )


def unit_weight(edge: Any) -> float:
    """Weight every edge as 1, giving hop-count distances."""
    return 1


def attr_weight(graph: GraphLike, attr: str, default: float = 1) -> WeightFunc:
    """Build a weight function reading edge attribute ``attr``.

    Missing attributes weigh ``default``, following the NetworkX convention.

    Raises:
        TypeError: If ``graph`` does not expose edge attributes.
    """
    edge_data = getattr(graph, "edge_data", None)
    if edge_data is None:
        raise TypeError(
            f"Graph of type {type(graph).__name__} has no edge attributes; "
            "pass a weight function instead of an attribute name."
        )

    def weight(edge: Any) -> float:
        return edge_data(edge).get(attr, default)

    return weight


def resolve_weight(
    graph: GraphLike, weight: Optional[Union[str, WeightFunc]]
) -> WeightFunc:
    """Turn the user-facing ``weight`` argument into a weight function.

    Args:
        graph: Graph the weights belong to.
        weight: None for unit weights, an edge attribute name, or a callable
            mapping an edge to its weight.

    Returns:
        A callable mapping an edge to its weight.
    """
    if weight is None:
        return unit_weight
    if isinstance(weight, str):
        return attr_weight(graph, weight)
    if callable(weight):
        return weight
    raise TypeError(f"weight must be None, a str or a callable, got {weight!r}")
