"""
# ==============================================================================
# Module: lpgraph/graph/__init__.py
# ==============================================================================
# Purpose: Graph module - weighted graph prepared for label propagation
#
# Dependencies:
#   - External: networkx, numpy
#   - Internal: lpgraph.core.types, lpgraph.core.exceptions
#
# Exports:
#   - Graph, Vertex: Graph store
#   - GraphBuilder, GraphBuilderConfig, create_graph_builder: Construction
#   - build_adjacency, inject_seed_labels, mark_test_nodes, apply_gold_labels
#   - set_gaussian_weights, keep_top_k_neighbors, prune_low_degree_vertices,
#     calculate_random_walk_probabilities: Weighting engine
#   - split_train_test, SplitResult: Random train/test splits
#
# Usage:
#   from lpgraph.core import Edge, Seed
#   from lpgraph.graph import GraphBuilder, GraphBuilderConfig
#
#   builder = GraphBuilder(GraphBuilderConfig(max_seeds_per_class=5, beta=2.0))
#   graph = builder.build(edges, seeds)
#
#   vertex = graph["a"]
#   vertex.transition, vertex.injection_prob, vertex.abandon_prob
# ==============================================================================
"""

from lpgraph.graph.store import Graph, Vertex
from lpgraph.graph.builder import (
    GraphBuilder,
    GraphBuilderConfig,
    apply_gold_labels,
    build_adjacency,
    create_graph_builder,
    inject_seed_labels,
    mark_test_nodes,
)
from lpgraph.graph.weighting import (
    RandomWalkProbabilities,
    calculate_random_walk_probabilities,
    compute_vertex_probabilities,
    keep_top_k_neighbors,
    neighbor_entropy,
    prune_low_degree_vertices,
    set_gaussian_weights,
)
from lpgraph.graph.splits import SplitResult, split_train_test

__all__ = [
    # Store
    "Graph",
    "Vertex",
    # Builder
    "GraphBuilder",
    "GraphBuilderConfig",
    "create_graph_builder",
    "build_adjacency",
    "inject_seed_labels",
    "mark_test_nodes",
    "apply_gold_labels",
    # Weighting
    "set_gaussian_weights",
    "keep_top_k_neighbors",
    "prune_low_degree_vertices",
    "calculate_random_walk_probabilities",
    "compute_vertex_probabilities",
    "neighbor_entropy",
    "RandomWalkProbabilities",
    # Splits
    "split_train_test",
    "SplitResult",
]
