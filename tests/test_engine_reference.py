"""Cross-check engine distances against NetworkX's Bellman-Ford."""

import random

import networkx as nx
import pytest

from spdist.engine import ShortestPathEngine
from tests.sample_graphs import create_random_graph


def _reference(graph, source):
    return nx.single_source_bellman_ford_path_length(graph, source, weight="cost")


def test_full_maps_match_bellman_ford(random_graph):
    engine = ShortestPathEngine(random_graph, weight="cost")
    for source in random_graph.nodes:
        result = engine.get_distance_map(source)
        assert result == pytest.approx(_reference(random_graph, source))
        values = list(result.values())
        assert values == sorted(values)


def test_uncached_engine_matches_bellman_ford(random_graph):
    engine = ShortestPathEngine(random_graph, weight="cost", cached=False)
    for source in list(random_graph.nodes)[:10]:
        assert engine.get_distance_map(source) == pytest.approx(
            _reference(random_graph, source)
        )


def test_interleaved_queries_match_reference(random_graph):
    """Mixed narrow and wide queries against a shared cache stay exact."""
    rng = random.Random(11)
    nodes = list(random_graph.nodes)
    engine = ShortestPathEngine(random_graph, weight="cost")
    reference = {source: _reference(random_graph, source) for source in nodes[:8]}

    for _ in range(200):
        source = rng.choice(nodes[:8])
        expected = reference[source]
        choice = rng.random()
        if choice < 0.4:
            target = rng.choice(nodes)
            dist = engine.get_distance(source, target)
            if target in expected:
                assert dist == pytest.approx(expected[target])
            else:
                assert dist is None
        elif choice < 0.7:
            num_dests = rng.randint(1, len(nodes))
            result = engine.get_distance_map(source, num_dests=num_dests)
            assert len(result) == min(num_dests, len(expected))
            for node, dist in result.items():
                assert dist == pytest.approx(expected[node])
            # the closest nodes, not just any nodes
            if len(result) < len(expected):
                cutoff = max(result.values())
                assert all(
                    expected[node] >= cutoff for node in expected if node not in result
                )
        else:
            targets = rng.sample(nodes, 5)
            result = engine.get_distance_map(source, targets=targets)
            assert result == pytest.approx(
                {t: expected[t] for t in targets if t in expected}
            )


@pytest.mark.parametrize("max_distance", [0, 3, 7.5, 15])
def test_max_distance_matches_filtered_reference(random_graph, max_distance):
    engine = ShortestPathEngine(random_graph, weight="cost")
    engine.set_max_distance(max_distance)
    for source in list(random_graph.nodes)[:10]:
        expected = {
            node: dist
            for node, dist in _reference(random_graph, source).items()
            if dist <= max_distance
        }
        assert engine.get_distance_map(source) == pytest.approx(expected)


def test_undirected_multigraph_matches_reference():
    directed = create_random_graph(num_nodes=30, num_edges=80, seed=42)
    graph = nx.MultiGraph(directed)
    engine = ShortestPathEngine(graph, weight="cost")
    for source in list(graph.nodes)[:10]:
        expected = nx.single_source_bellman_ford_path_length(
            graph, source, weight="cost"
        )
        assert engine.get_distance_map(source) == pytest.approx(expected)
