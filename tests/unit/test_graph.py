"""
Unit Tests for Graph Store and Builder
======================================
Tests for Graph, Vertex, GraphBuilder and the record operations
"""
import pytest

from lpgraph.core import (
    DUMMY_LABEL,
    Edge,
    ReservedLabel,
    Seed,
    VertexReferenceError,
)
from lpgraph.graph import (
    Graph,
    GraphBuilder,
    GraphBuilderConfig,
    apply_gold_labels,
    build_adjacency,
    create_graph_builder,
    inject_seed_labels,
    mark_test_nodes,
)


# =============================================================================
# Helper Functions
# =============================================================================
def make_edges(*triples) -> list:
    """Create Edge records from (source, target, weight) tuples"""
    return [Edge(source=s, target=t, weight=w) for s, t, w in triples]


def make_seeds(*triples) -> list:
    """Create Seed records from (vertex, label, score) tuples"""
    return [Seed(vertex=v, label=l, score=s) for v, l, s in triples]


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def chain_edges():
    """a - b - c"""
    return make_edges(("a", "b", 1.0), ("b", "c", 1.0))


@pytest.fixture
def star_graph():
    """Undirected star: hub connected to v0..v5"""
    g = Graph()
    build_adjacency(g, make_edges(*[("hub", f"v{i}", 1.0) for i in range(6)]))
    return g


# =============================================================================
# Test Graph Store
# =============================================================================
class TestGraphStore:
    """Test basic Graph operations"""

    def test_create_empty_graph(self):
        """Test creating an empty graph"""
        g = Graph()
        assert g.total_vertices == 0
        assert g.total_edges == 0
        assert g.seed_injected is False

    def test_add_vertex_get_or_create(self):
        """Test add_vertex returns the existing vertex on repeat"""
        g = Graph()
        first = g.add_vertex("a")
        first.add_neighbor("b", 2.0)
        second = g.add_vertex("a")

        assert first is second
        assert g.total_vertices == 1
        assert second.neighbors == {"b": 2.0}

    def test_new_vertex_carries_dummy_label(self):
        """Test new vertices start with the reserved dummy label"""
        g = Graph()
        vertex = g.add_vertex("a")

        assert vertex.estimated_labels == {DUMMY_LABEL: 1.0}
        assert vertex.gold_labels == {}
        assert vertex.injected_labels == {}
        assert vertex.transition is None

    def test_dummy_label_never_equals_string_label(self):
        """Test the sentinel does not collide with a real label"""
        assert DUMMY_LABEL is ReservedLabel.DUMMY
        assert DUMMY_LABEL != "__DUMMY__"
        assert DUMMY_LABEL != str(DUMMY_LABEL)

    def test_lookup(self):
        """Test vertex lookup helpers"""
        g = Graph()
        g.add_vertex("a")

        assert g.has_vertex("a")
        assert "a" in g
        assert g.get_vertex("missing") is None
        assert g["a"].vertex_id == "a"
        with pytest.raises(KeyError):
            g["missing"]

    def test_iteration(self, star_graph):
        """Test iterating vertices"""
        ids = {v.vertex_id for v in star_graph}
        assert ids == {"hub"} | {f"v{i}" for i in range(6)}
        assert len(star_graph) == 7
        assert sorted(star_graph.vertex_ids()) == sorted(ids)

    def test_vertex_degree_and_weight(self):
        """Test derived vertex properties"""
        g = Graph()
        build_adjacency(g, make_edges(("a", "b", 0.25), ("a", "c", 0.5)), directed=True)

        assert g["a"].degree == 2
        assert g["a"].total_weight == pytest.approx(0.75)
        assert g["b"].is_isolated
        assert not g["a"].is_isolated


# =============================================================================
# Test Adjacency Assembly
# =============================================================================
class TestBuildAdjacency:
    """Test build_adjacency"""

    def test_undirected_symmetry(self):
        """Test every undirected edge appears in both directions"""
        edges = make_edges(("a", "b", 0.3), ("b", "c", 0.7), ("c", "a", 1.5), ("d", "a", 2.0))
        g = Graph()
        build_adjacency(g, edges, directed=False)

        for e in edges:
            assert g[e.source].neighbors[e.target] == g[e.target].neighbors[e.source]

    def test_directed_single_direction(self):
        """Test directed edges add only source -> target"""
        g = Graph()
        build_adjacency(g, make_edges(("a", "b", 1.0)), directed=True)

        assert g["a"].neighbors == {"b": 1.0}
        assert g["b"].neighbors == {}

    def test_edges_create_vertices(self, chain_edges):
        """Test edges create both endpoints"""
        g = Graph()
        consumed = build_adjacency(g, chain_edges)

        assert consumed == 2
        assert g.total_vertices == 3
        assert g.total_edges == 4

    def test_last_write_wins(self):
        """Test repeated pairs overwrite rather than accumulate"""
        g = Graph()
        build_adjacency(g, make_edges(("a", "b", 1.0), ("a", "b", 3.0)))

        assert g["a"].neighbors["b"] == 3.0
        assert g["b"].neighbors["a"] == 3.0

    def test_reverse_edge_overwrites_undirected(self):
        """Test a later reverse edge overwrites both directions"""
        g = Graph()
        build_adjacency(g, make_edges(("a", "b", 1.0), ("b", "a", 5.0)))

        assert g["a"].neighbors["b"] == 5.0
        assert g["b"].neighbors["a"] == 5.0

    def test_empty_edges(self):
        """Test no edges leaves the graph empty"""
        g = Graph()
        assert build_adjacency(g, []) == 0
        assert g.total_vertices == 0


# =============================================================================
# Test Seed Injection
# =============================================================================
class TestSeedInjection:
    """Test inject_seed_labels"""

    def test_inject_marks_seed(self, star_graph):
        """Test injection sets labels and the seed flag"""
        counts = inject_seed_labels(star_graph, make_seeds(("v0", "L1", 0.9)))

        v0 = star_graph["v0"]
        assert v0.injected_labels == {"L1": 0.9}
        assert v0.gold_labels == {"L1": 0.9}
        assert v0.is_seed
        assert counts == {"L1": 1}
        assert star_graph.seed_injected

    def test_cap_per_class(self, star_graph):
        """Test injected count per label never exceeds the cap"""
        seeds = make_seeds(*[(f"v{i}", "L1", 1.0) for i in range(6)], ("hub", "L2", 1.0))
        counts = inject_seed_labels(star_graph, seeds, max_seeds_per_class=2)

        label_counts = star_graph.injected_label_counts()
        assert label_counts["L1"] == 2
        assert label_counts["L2"] == 1
        assert counts == {"L1": 2, "L2": 1}

    def test_cap_follows_record_order(self, star_graph):
        """Test the first records under the cap are the ones injected"""
        seeds = make_seeds(("v3", "L1", 1.0), ("v1", "L1", 1.0), ("v0", "L1", 1.0))
        inject_seed_labels(star_graph, seeds, max_seeds_per_class=2)

        assert star_graph["v3"].is_seed
        assert star_graph["v1"].is_seed
        assert not star_graph["v0"].is_seed

    def test_gold_recorded_when_capped(self, star_graph):
        """Test gold labels are recorded even when injection is capped out"""
        seeds = make_seeds(*[(f"v{i}", "L1", 0.5) for i in range(6)])
        inject_seed_labels(star_graph, seeds, max_seeds_per_class=1)

        for i in range(6):
            assert star_graph[f"v{i}"].gold_labels == {"L1": 0.5}
        assert len(star_graph.get_seed_vertices()) == 1

    def test_zero_cap_injects_nothing(self, star_graph):
        """Test a cap of zero still records gold labels"""
        inject_seed_labels(star_graph, make_seeds(("v0", "L1", 1.0)), max_seeds_per_class=0)

        assert star_graph["v0"].injected_labels == {}
        assert star_graph["v0"].gold_labels == {"L1": 1.0}
        assert star_graph.seed_injected

    def test_duplicate_label_not_counted_twice(self, star_graph):
        """Test re-seeding the same vertex/label neither re-injects nor counts"""
        seeds = make_seeds(("v0", "L1", 1.0), ("v0", "L1", 0.2), ("v1", "L1", 1.0))
        counts = inject_seed_labels(star_graph, seeds, max_seeds_per_class=2)

        assert counts["L1"] == 2
        assert star_graph["v0"].injected_labels == {"L1": 1.0}
        assert star_graph["v0"].gold_labels == {"L1": 0.2}
        assert star_graph["v1"].is_seed

    def test_multiple_labels_per_vertex(self, star_graph):
        """Test a vertex may accumulate several labels"""
        inject_seed_labels(star_graph, make_seeds(("hub", "L1", 1.0), ("hub", "L2", 0.5)))

        assert star_graph["hub"].injected_labels == {"L1": 1.0, "L2": 0.5}

    def test_unknown_vertex_dropped(self, star_graph):
        """Test seeds for missing vertices are silently dropped"""
        counts = inject_seed_labels(star_graph, make_seeds(("nowhere", "L1", 1.0)))

        assert "nowhere" not in star_graph
        assert counts == {"L1": 0}
        assert star_graph.seed_injected

    def test_empty_seeds_leave_flag_unset(self, star_graph):
        """Test the graph flag is only set after non-empty seeds"""
        inject_seed_labels(star_graph, [])
        assert star_graph.seed_injected is False

    def test_counts_are_local(self, star_graph):
        """Test repeated calls do not share hidden state"""
        seeds = make_seeds(("v0", "L1", 1.0), ("v1", "L1", 1.0))
        first = inject_seed_labels(star_graph, seeds, max_seeds_per_class=1)

        other = Graph()
        build_adjacency(other, make_edges(("v0", "v1", 1.0)))
        second = inject_seed_labels(other, seeds, max_seeds_per_class=1)

        assert first == second == {"L1": 1}

    def test_counts_continue_from_previous(self, star_graph):
        """Test passing counts in continues the running total"""
        counts = inject_seed_labels(
            star_graph, make_seeds(("v0", "L1", 1.0)), max_seeds_per_class=1,
        )
        counts = inject_seed_labels(
            star_graph, make_seeds(("v1", "L1", 1.0)), max_seeds_per_class=1, counts=counts,
        )

        assert counts == {"L1": 1}
        assert not star_graph["v1"].is_seed


# =============================================================================
# Test Test-Node Marking and Gold Labels
# =============================================================================
class TestLabelRecords:
    """Test mark_test_nodes and apply_gold_labels"""

    def test_mark_test_nodes(self, star_graph):
        """Test test labels mark vertices and set gold labels"""
        marked = mark_test_nodes(star_graph, make_seeds(("v2", "L1", 1.0)))

        assert marked == 1
        assert star_graph["v2"].is_test
        assert star_graph["v2"].gold_labels == {"L1": 1.0}
        assert not star_graph["v2"].is_seed

    def test_mark_test_node_missing_vertex(self, star_graph):
        """Test a dangling test label is fatal"""
        with pytest.raises(VertexReferenceError) as exc_info:
            mark_test_nodes(star_graph, make_seeds(("ghost", "L1", 1.0)))

        assert exc_info.value.vertex_id == "ghost"
        assert "ghost" in str(exc_info.value)

    def test_seed_and_test_independent(self, star_graph):
        """Test a vertex can be both seed and test"""
        inject_seed_labels(star_graph, make_seeds(("v0", "L1", 1.0)))
        mark_test_nodes(star_graph, make_seeds(("v0", "L2", 1.0)))

        v0 = star_graph["v0"]
        assert v0.is_seed and v0.is_test
        assert v0.gold_labels == {"L1": 1.0, "L2": 1.0}

    def test_apply_gold_labels(self, star_graph):
        """Test gold labels leave injection and flags alone"""
        applied = apply_gold_labels(
            star_graph, make_seeds(("v1", "L1", 0.4), ("ghost", "L1", 1.0))
        )

        assert applied == 1
        assert star_graph["v1"].gold_labels == {"L1": 0.4}
        assert star_graph["v1"].injected_labels == {}
        assert not star_graph["v1"].is_seed
        assert not star_graph["v1"].is_test


# =============================================================================
# Test GraphBuilder
# =============================================================================
class TestGraphBuilder:
    """Test GraphBuilder"""

    def test_create_builder(self):
        """Test creating builder"""
        builder = GraphBuilder()
        assert builder.graph is not None
        assert builder.graph.total_vertices == 0
        assert builder.config.beta == 2.0

    def test_build(self, chain_edges):
        """Test build computes random-walk probabilities"""
        builder = GraphBuilder(GraphBuilderConfig(max_seeds_per_class=5))
        graph = builder.build(chain_edges, make_seeds(("a", "L1", 1.0)))

        assert graph.total_vertices == 3
        assert graph.seed_injected
        for vertex in graph:
            assert vertex.has_random_walk_probabilities

    def test_build_with_pruning(self, chain_edges):
        """Test pruning runs when a threshold is configured"""
        builder = GraphBuilder(GraphBuilderConfig(prune_threshold=2))
        with pytest.warns(UserWarning):
            graph = builder.build(chain_edges)

        assert graph["a"].is_isolated
        assert graph["c"].is_isolated
        assert graph["b"].degree == 2

    def test_builder_keeps_counts_across_calls(self):
        """Test the builder's running counts span add_seeds calls"""
        builder = GraphBuilder(GraphBuilderConfig(max_seeds_per_class=1))
        builder.add_edges(make_edges(("a", "b", 1.0)))
        builder.add_seeds(make_seeds(("a", "L1", 1.0)))
        counts = builder.add_seeds(make_seeds(("b", "L1", 1.0)))

        assert counts == {"L1": 1}
        assert not builder.graph["b"].is_seed

    def test_build_with_test_labels(self, chain_edges):
        """Test build marks test vertices"""
        graph = GraphBuilder().build(chain_edges, test_labels=make_seeds(("c", "L1", 1.0)))
        assert graph["c"].is_test

    def test_create_graph_builder(self):
        """Test factory function"""
        config = GraphBuilderConfig(directed=True)
        builder = create_graph_builder(config=config)
        assert isinstance(builder, GraphBuilder)
        assert builder.config.directed is True


# =============================================================================
# Test Statistics and Export
# =============================================================================
class TestGraphExport:
    """Test statistics and NetworkX export"""

    def test_get_statistics(self, star_graph):
        """Test getting statistics"""
        inject_seed_labels(star_graph, make_seeds(("v0", "L1", 1.0)))
        stats = star_graph.get_statistics()

        assert stats["total_vertices"] == 7
        assert stats["total_edges"] == 12
        assert stats["seed_vertices"] == 1
        assert stats["max_degree"] == 6
        assert stats["injected_labels"] == {"L1": 1}

    def test_to_networkx(self, star_graph):
        """Test export to NetworkX"""
        G = star_graph.to_networkx()

        assert G.number_of_nodes() == star_graph.total_vertices
        assert G.number_of_edges() == star_graph.total_edges
        assert G["hub"]["v0"]["weight"] == 1.0

    def test_to_networkx_carries_transition(self, chain_edges):
        """Test exported edges include transition probabilities once computed"""
        graph = GraphBuilder().build(chain_edges)
        G = graph.to_networkx()

        assert G["b"]["a"]["transition"] == pytest.approx(graph["b"].transition["a"])
        assert G.nodes["b"]["continue_prob"] == graph["b"].continue_prob

    def test_label_set(self, star_graph):
        """Test label_set collects gold and injected labels"""
        inject_seed_labels(star_graph, make_seeds(("v0", "L2", 1.0)))
        apply_gold_labels(star_graph, make_seeds(("v1", "L1", 1.0)))

        assert star_graph.label_set() == ["L1", "L2"]

    def test_repr(self, star_graph):
        """Test repr"""
        assert repr(star_graph) == "Graph(vertices=7, edges=12)"
