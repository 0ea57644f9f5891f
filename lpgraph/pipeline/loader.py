"""
# ==============================================================================
# Module: lpgraph/pipeline/loader.py
# ==============================================================================
# Purpose: End-to-end graph preparation for label propagation
#
# Dependencies:
#   - Internal: lpgraph.config (GraphConfig)
#              lpgraph.graph (GraphBuilder, weighting engine, splits)
#              lpgraph.core.types (Edge, Seed)
#
# Input:
#   - GraphConfig (validated before any graph mutation)
#   - Edge / Seed record iterables produced by external readers
#
# Output:
#   - PipelineResult: finished Graph plus split, degenerate vertices,
#     statistics and warnings
#
# Design Notes:
#   - Step order: assemble -> inject seeds -> mark test vertices -> prune
#     -> gold labels -> Gaussian kernel -> top-K -> split -> random walk
#   - Random-walk probabilities are computed once, after the last step that
#     changes weights or injected labels
#
# Usage:
#   from lpgraph.config import GraphConfig
#   from lpgraph.pipeline import GraphLoader
#
#   loader = GraphLoader(GraphConfig(max_seeds_per_class=5, beta=2.0))
#   result = loader.run(edges, seeds, test_labels=test_labels)
#   graph = result.graph
# ==============================================================================
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from lpgraph.config import GraphConfig
from lpgraph.core.types import Edge, Seed, VertexId
from lpgraph.graph import (
    Graph,
    GraphBuilder,
    SplitResult,
    calculate_random_walk_probabilities,
    keep_top_k_neighbors,
    set_gaussian_weights,
    split_train_test,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# Result
# ==============================================================================
@dataclass
class PipelineResult:
    """Finished graph and what happened while preparing it"""
    graph: Graph
    split: Optional[SplitResult] = None
    pruned_vertices: int = 0
    degenerate_vertices: List[VertexId] = field(default_factory=list)
    statistics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    elapsed_ms: float = 0.0


# ==============================================================================
# Graph Loader
# ==============================================================================
class GraphLoader:
    """
    Graph preparation pipeline

    Validates the configuration, then runs the builder and weighting engine
    in order on a fresh Graph.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        """
        Args:
            config: Pipeline configuration (defaults to GraphConfig())
        """
        self.config = config or GraphConfig()

    def run(
        self,
        edges: Iterable[Edge],
        seeds: Iterable[Seed] = (),
        test_labels: Iterable[Seed] = (),
        gold_labels: Iterable[Seed] = (),
    ) -> PipelineResult:
        """
        Build and weight a graph.

        Args:
            edges: Edge records
            seeds: Seed records to inject
            test_labels: Records marking evaluation vertices
            gold_labels: Ground-truth records (not injected)

        Returns:
            PipelineResult with the finished graph

        Raises:
            ConfigurationError: Invalid configuration (before any mutation)
            VertexReferenceError: A test label names an unknown vertex
        """
        config = self.config
        config.validate()

        start_time = time.time()
        messages: List[str] = []

        logger.info("Going to build graph ...")

        # Step 1: Assemble, inject, mark, prune
        builder = GraphBuilder(config.to_builder_config())
        builder.add_edges(edges)

        seeds = list(seeds)
        if seeds:
            builder.add_seeds(seeds)

        test_labels = list(test_labels)
        if test_labels:
            builder.add_test_labels(test_labels)

        pruned = builder.prune()
        graph = builder.graph

        # Step 2: Gold labels for some or all vertices
        gold_labels = list(gold_labels)
        if gold_labels:
            applied = builder.add_gold_labels(gold_labels)
            if applied < len(gold_labels):
                messages.append(
                    f"{len(gold_labels) - applied} gold labels reference unknown vertices"
                )

        # Step 3: Edge weights are squared distances -> Gaussian kernel
        if config.set_gaussian_weights:
            logger.info("Going to set Gaussian Kernel weights ...")
            set_gaussian_weights(graph, config.sigma_factor)

        # Step 4: kNN
        if config.top_k is not None:
            keep_top_k_neighbors(graph, config.top_k)

        # Step 5: Random train/test split
        split: Optional[SplitResult] = None
        if config.train_fraction is not None:
            split = split_train_test(
                graph,
                config.train_fraction,
                max_seeds_per_class=config.max_seeds_per_class,
                seed=config.split_seed,
            )

        logger.info(f"Seed injected: {graph.seed_injected}")

        # Step 6: Random walk model, after every weight/label change
        degenerate = calculate_random_walk_probabilities(graph, config.beta)
        if degenerate:
            messages.append(f"{len(degenerate)} vertices have zero outgoing weight")

        stats = graph.get_statistics()
        logger.info(f"Graph statistics: {stats}")

        return PipelineResult(
            graph=graph,
            split=split,
            pruned_vertices=pruned,
            degenerate_vertices=degenerate,
            statistics=stats,
            warnings=messages,
            elapsed_ms=(time.time() - start_time) * 1000,
        )


# ==============================================================================
# Convenience Functions
# ==============================================================================
def create_graph_loader(
    config: Optional[Union[GraphConfig, Mapping[str, Any]]] = None,
) -> GraphLoader:
    """
    Factory function to create a graph loader.

    Args:
        config: GraphConfig, or a raw key/value mapping resolved via
            GraphConfig.from_dict

    Returns:
        Configured GraphLoader instance
    """
    if config is not None and not isinstance(config, GraphConfig):
        config = GraphConfig.from_dict(config)
    return GraphLoader(config=config)


def load_graph(
    config: Union[GraphConfig, Mapping[str, Any]],
    edges: Iterable[Edge],
    seeds: Iterable[Seed] = (),
    test_labels: Iterable[Seed] = (),
    gold_labels: Iterable[Seed] = (),
) -> Graph:
    """Run the pipeline and return only the finished graph"""
    loader = create_graph_loader(config)
    return loader.run(edges, seeds, test_labels=test_labels, gold_labels=gold_labels).graph
