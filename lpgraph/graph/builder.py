"""
# ==============================================================================
# Module: lpgraph/graph/builder.py
# ==============================================================================
# Purpose: Graph construction from edge, seed and test-label records
#
# Dependencies:
#   - Internal: lpgraph.graph.store (Graph)
#              lpgraph.graph.weighting (pruning, random-walk probabilities)
#              lpgraph.core.types (Edge, Seed, LabelId)
#
# Input:
#   - Edges: Edge records (source, target, weight)
#   - Seeds: Seed records (vertex, label, score) to inject under a per-class cap
#   - Test labels: Seed records marking evaluation vertices
#   - Gold labels: Seed records setting ground truth only
#
# Output:
#   - Populated Graph instance
# ==============================================================================
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from lpgraph.core.exceptions import VertexReferenceError
from lpgraph.core.types import DUMMY_LABEL, Edge, LabelId, Seed
from lpgraph.graph.store import Graph
from lpgraph.graph.weighting import (
    calculate_random_walk_probabilities,
    prune_low_degree_vertices,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# Record Operations
# ==============================================================================
def build_adjacency(graph: Graph, edges: Iterable[Edge], directed: bool = False) -> int:
    """
    Add edges to the graph, creating vertices on demand

    A repeated (source, target) pair overwrites the earlier weight.

    Args:
        graph: Target graph
        edges: Edge records
        directed: If False, also add target -> source with the same weight

    Returns:
        Number of edge records consumed
    """
    consumed = 0

    for edge in edges:
        # source -> target
        source = graph.add_vertex(edge.source, DUMMY_LABEL)
        target = graph.add_vertex(edge.target, DUMMY_LABEL)
        source.add_neighbor(edge.target, edge.weight)

        # target -> source
        if not directed:
            target.add_neighbor(edge.source, edge.weight)

        consumed += 1

    logger.info(
        f"Built adjacency from {consumed} edges "
        f"({'directed' if directed else 'undirected'}): {graph}"
    )
    return consumed


def inject_seed_labels(
    graph: Graph,
    seeds: Iterable[Seed],
    max_seeds_per_class: Optional[int] = None,
    counts: Optional[Dict[LabelId, int]] = None,
) -> Dict[LabelId, int]:
    """
    Inject seed labels, at most max_seeds_per_class vertices per label

    Gold labels are always recorded; only injection is capped. Seeds naming
    a vertex absent from the graph are dropped.

    Args:
        graph: Target graph
        seeds: Seed records, processed in order
        max_seeds_per_class: Cap per label across the graph (None = unbounded)
        counts: Running per-label injection counts to continue from

    Returns:
        Per-label injection counts after this call
    """
    counts = dict(counts) if counts else {}
    processed = 0
    dropped = 0

    for seed in seeds:
        processed += 1
        if seed.label not in counts:
            counts[seed.label] = 0

        vertex = graph.get_vertex(seed.vertex)
        if vertex is None:
            dropped += 1
            logger.debug(f"Seed for unknown vertex {seed.vertex!r} dropped")
            continue

        vertex.set_gold_label(seed.label, seed.score)

        under_cap = max_seeds_per_class is None or counts[seed.label] < max_seeds_per_class
        if under_cap and seed.label not in vertex.injected_labels:
            vertex.set_injected_label(seed.label, seed.score)
            vertex.is_seed = True
            counts[seed.label] += 1

    if processed:
        graph.set_seed_injected()

    logger.info(
        f"Injected seeds: {sum(counts.values())} labels over {len(counts)} classes "
        f"({processed} records, {dropped} dropped)"
    )
    return counts


def mark_test_nodes(graph: Graph, test_labels: Iterable[Seed]) -> int:
    """
    Mark evaluation vertices and record their gold labels

    Raises:
        VertexReferenceError: A test label names a vertex not in the graph

    Returns:
        Number of test-label records applied
    """
    marked = 0

    for record in test_labels:
        vertex = graph.get_vertex(record.vertex)
        if vertex is None:
            raise VertexReferenceError(record.vertex, context="test label")
        vertex.set_gold_label(record.label, record.score)
        vertex.is_test = True
        marked += 1

    logger.info(f"Marked {marked} test labels")
    return marked


def apply_gold_labels(graph: Graph, gold_labels: Iterable[Seed]) -> int:
    """
    Set gold labels without touching injection or vertex flags

    Returns:
        Number of records applied (records for unknown vertices are skipped)
    """
    applied = 0
    skipped = 0

    for record in gold_labels:
        vertex = graph.get_vertex(record.vertex)
        if vertex is None:
            skipped += 1
            continue
        vertex.set_gold_label(record.label, record.score)
        applied += 1

    if skipped:
        logger.warning(f"{skipped} gold labels reference unknown vertices, skipped")
    logger.info(f"Applied {applied} gold labels")
    return applied


# ==============================================================================
# Builder Configuration
# ==============================================================================
@dataclass
class GraphBuilderConfig:
    """Graph Builder Configuration"""

    directed: bool = False

    # Seed injection
    max_seeds_per_class: Optional[int] = None

    # Degree pruning (None = disabled)
    prune_threshold: Optional[int] = None

    # Random-walk regularization
    beta: float = 2.0


# ==============================================================================
# Graph Builder
# ==============================================================================
class GraphBuilder:
    """
    Graph Builder

    Constructs a label-propagation graph in this order:
    1. Edges -> adjacency (vertices created on demand)
    2. Seeds -> gold + capped injected labels
    3. Test labels -> test vertices
    4. Degree pruning
    5. Random-walk probabilities
    """

    def __init__(self, config: Optional[GraphBuilderConfig] = None):
        """
        Args:
            config: Builder configuration
        """
        self.config = config or GraphBuilderConfig()
        self._graph = Graph()

        # Per-label injection counts, local to this builder
        self._seed_counts: Dict[LabelId, int] = {}

    @property
    def graph(self) -> Graph:
        """Get the graph under construction"""
        return self._graph

    @property
    def seed_counts(self) -> Dict[LabelId, int]:
        return dict(self._seed_counts)

    def add_edges(self, edges: Iterable[Edge]) -> int:
        return build_adjacency(self._graph, edges, directed=self.config.directed)

    def add_seeds(self, seeds: Iterable[Seed]) -> Dict[LabelId, int]:
        self._seed_counts = inject_seed_labels(
            self._graph,
            seeds,
            max_seeds_per_class=self.config.max_seeds_per_class,
            counts=self._seed_counts,
        )
        return self.seed_counts

    def add_test_labels(self, test_labels: Iterable[Seed]) -> int:
        return mark_test_nodes(self._graph, test_labels)

    def add_gold_labels(self, gold_labels: Iterable[Seed]) -> int:
        return apply_gold_labels(self._graph, gold_labels)

    def prune(self) -> int:
        """Apply degree pruning if configured; returns vertices pruned"""
        if self.config.prune_threshold is None:
            return 0
        return len(prune_low_degree_vertices(self._graph, self.config.prune_threshold))

    def build(
        self,
        edges: Iterable[Edge],
        seeds: Iterable[Seed] = (),
        test_labels: Iterable[Seed] = (),
    ) -> Graph:
        """
        Assemble, inject, mark, prune and compute random-walk probabilities

        Returns:
            The constructed Graph
        """
        self.add_edges(edges)

        seeds = list(seeds)
        if seeds:
            self.add_seeds(seeds)

        test_labels = list(test_labels)
        if test_labels:
            self.add_test_labels(test_labels)

        self.prune()

        calculate_random_walk_probabilities(self._graph, self.config.beta)

        stats = self._graph.get_statistics()
        logger.info(f"Graph built: {stats}")
        return self._graph


# ==============================================================================
# Factory Function
# ==============================================================================
def create_graph_builder(
    config: Optional[GraphBuilderConfig] = None,
) -> GraphBuilder:
    """
    Factory function: Create a Graph builder

    Args:
        config: Builder configuration

    Returns:
        GraphBuilder instance
    """
    return GraphBuilder(config=config)
