"""Random train/test splits over gold-labeled vertices."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lpgraph.core.exceptions import ConfigurationError
from lpgraph.core.types import LabelId, Seed, VertexId
from lpgraph.graph.builder import inject_seed_labels
from lpgraph.graph.store import Graph

logger = logging.getLogger(__name__)


@dataclass
class SplitResult:
    """Vertex ids on each side of a split, plus the per-label seed counts"""
    train_ids: List[VertexId] = field(default_factory=list)
    test_ids: List[VertexId] = field(default_factory=list)
    seed_counts: Dict[LabelId, int] = field(default_factory=dict)


def split_train_test(
    graph: Graph,
    train_fraction: float,
    max_seeds_per_class: Optional[int] = None,
    seed: Optional[int] = None,
) -> SplitResult:
    """
    Re-partition gold-labeled vertices into injected seeds and test vertices.

    Previous injections, seed/test flags and random-walk probabilities are
    cleared first. Training vertices get their gold labels injected under the
    per-class cap; the rest are marked as test vertices. Random-walk
    probabilities must be recomputed afterwards.
    """
    if train_fraction is None or not 0.0 < train_fraction < 1.0:
        raise ConfigurationError(
            f"train_fract must be in (0, 1), got {train_fraction}",
            parameter="train_fraction",
        )

    for vertex in graph.iter_vertices():
        vertex.injected_labels.clear()
        vertex.is_seed = False
        vertex.is_test = False
        vertex.clear_random_walk_probabilities()

    labeled = sorted(v.vertex_id for v in graph.get_gold_labeled_vertices())
    rng = random.Random(seed)
    rng.shuffle(labeled)

    n_train = int(len(labeled) * train_fraction)
    train_ids = labeled[:n_train]
    test_ids = labeled[n_train:]

    train_seeds = [
        Seed(vertex=vid, label=label, score=score)
        for vid in train_ids
        for label, score in graph[vid].gold_labels.items()
    ]
    counts = inject_seed_labels(graph, train_seeds, max_seeds_per_class=max_seeds_per_class)

    for vid in test_ids:
        graph[vid].is_test = True

    graph.set_seed_injected()

    logger.info(
        f"Split {len(labeled)} labeled vertices: {len(train_ids)} train, {len(test_ids)} test"
    )
    return SplitResult(train_ids=train_ids, test_ids=test_ids, seed_counts=counts)
