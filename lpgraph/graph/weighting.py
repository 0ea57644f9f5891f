"""
# ==============================================================================
# Module: lpgraph/graph/weighting.py
# ==============================================================================
# Purpose: Post-processing transforms on an assembled graph
#
# Dependencies:
#   - External: numpy
#   - Internal: lpgraph.graph.store (Graph), lpgraph.core.exceptions
#
# Input:
#   - Graph with raw edge weights
#
# Output:
#   - Graph with reweighted / pruned adjacency and the random-walk model
#     (transition, continue/injection/abandon probabilities) per vertex
#
# Exports:
#   - set_gaussian_weights: Gaussian kernel over squared distances
#   - keep_top_k_neighbors: kNN retention per vertex
#   - prune_low_degree_vertices: Drop outgoing edges of low-degree vertices
#   - calculate_random_walk_probabilities: Random-walk transition model
#
# Design Notes:
#   - Every transform works on outgoing adjacency only and never symmetrizes
#   - set_gaussian_weights is NOT idempotent (sequence it exactly once)
#   - calculate_random_walk_probabilities is idempotent; re-run it after any
#     change to weights or injected labels
# ==============================================================================
"""
from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Dict, List, Tuple, TYPE_CHECKING

import numpy as np

from lpgraph.core.exceptions import ConfigurationError, DegenerateGraphWarning

if TYPE_CHECKING:
    from lpgraph.graph.store import Graph, Vertex

logger = logging.getLogger(__name__)


def _neighbor_arrays(vertex: "Vertex") -> Tuple[List[str], np.ndarray]:
    ids = list(vertex.neighbors.keys())
    weights = np.fromiter(vertex.neighbors.values(), dtype=np.float64, count=len(ids))
    return ids, weights


# ==============================================================================
# Gaussian Kernel
# ==============================================================================
def set_gaussian_weights(graph: "Graph", sigma_factor: float) -> int:
    """
    Replace each edge weight w with exp(-w / (2 * sigma_factor^2)).

    Existing weights are taken to be squared Euclidean distances
    ||x_i - x_j||^2 between the endpoints' feature vectors.

    Args:
        graph: Assembled graph (modified in place)
        sigma_factor: Kernel bandwidth

    Returns:
        Number of adjacency entries reweighted
    """
    if sigma_factor is None or not sigma_factor > 0:
        raise ConfigurationError(
            f"gauss_sigma_factor must be > 0, got {sigma_factor}",
            parameter="sigma_factor",
        )

    denom = 2.0 * sigma_factor * sigma_factor
    updated = 0

    for vertex in graph.iter_vertices():
        if not vertex.neighbors:
            continue
        ids, weights = _neighbor_arrays(vertex)
        kernel = np.exp(-weights / denom)
        vertex.neighbors = dict(zip(ids, kernel.tolist()))
        updated += len(ids)

    logger.info(f"Gaussian kernel weights set on {updated} edges (sigma={sigma_factor})")
    return updated


# ==============================================================================
# kNN Retention
# ==============================================================================
def keep_top_k_neighbors(graph: "Graph", k: int) -> int:
    """
    Keep only the k heaviest outgoing neighbors of every vertex.

    Ties are broken by ascending neighbor id. The result is not symmetrized:
    u -> v may survive while v -> u is dropped by v's own filter.

    Args:
        graph: Assembled graph (modified in place)
        k: Neighbors to keep per vertex

    Returns:
        Number of adjacency entries removed
    """
    if k is None or k < 1:
        raise ConfigurationError(f"top_k_neighbors must be >= 1, got {k}", parameter="top_k")

    removed = 0

    for vertex in graph.iter_vertices():
        if vertex.degree <= k:
            continue
        ids, weights = _neighbor_arrays(vertex)
        # weight descending, then id ascending
        order = sorted(range(len(ids)), key=lambda i: (-weights[i], ids[i]))[:k]
        vertex.neighbors = {ids[i]: float(weights[i]) for i in order}
        removed += len(ids) - k

    logger.info(f"Top-{k} neighbor retention removed {removed} edges")
    return removed


# ==============================================================================
# Degree Pruning
# ==============================================================================
def prune_low_degree_vertices(graph: "Graph", threshold: int) -> List[str]:
    """
    Remove every outgoing edge of vertices whose degree is below threshold.

    All-or-nothing per vertex; the vertex itself stays in the graph.

    Args:
        graph: Graph (modified in place)
        threshold: Minimum outgoing degree to keep a vertex's edges

    Returns:
        Ids of the vertices that lost their edges
    """
    if threshold is None or threshold < 0:
        raise ConfigurationError(
            f"prune_threshold must be >= 0, got {threshold}", parameter="prune_threshold"
        )

    # Decide against the adjacency as it is now, then mutate
    pruned = [
        v.vertex_id for v in graph.iter_vertices()
        if 0 < v.degree < threshold
    ]
    for vertex_id in pruned:
        graph[vertex_id].neighbors.clear()

    logger.info(f"Pruned {len(pruned)} vertices with degree < {threshold}")
    return pruned


# ==============================================================================
# Random-Walk Probabilities
# ==============================================================================
@dataclass
class RandomWalkProbabilities:
    """Per-vertex split of the random-walk probability mass"""
    continue_prob: float
    injection_prob: float
    abandon_prob: float
    transition: Dict[str, float]


def neighbor_entropy(weights: np.ndarray) -> float:
    """
    Shannon entropy (nats) of the normalized neighbor weight distribution.

    Returns 0.0 when the total weight is not positive.
    """
    total = float(weights.sum())
    if total <= 0:
        return 0.0
    p = weights / total
    p = p[p > 0]
    return float(-(p * np.log(p)).sum())


def compute_vertex_probabilities(
    vertex: "Vertex",
    beta: float,
) -> RandomWalkProbabilities:
    """
    Random-walk model for a single vertex.

    c = e^H / (e^H + beta)     0 when the vertex has no outgoing weight
    p_cont = c
    p_inj  = 1 - c  if injected labels, else 0
    p_abnd = 1 - c  if no injected labels, else 0

    where H is the entropy of the neighbor weight distribution. Larger beta
    and lower entropy both move mass from continuation to injection (or
    abandonment for unlabeled vertices).
    """
    ids, weights = _neighbor_arrays(vertex)
    total = math.fsum(weights.tolist())

    if total <= 0:
        c = 0.0
    else:
        entropy = neighbor_entropy(weights)
        # equal to e^H / (e^H + beta)
        c = 1.0 / (1.0 + beta * math.exp(-entropy))

    if vertex.injected_labels:
        p_inj, p_abnd = 1.0 - c, 0.0
    else:
        p_inj, p_abnd = 0.0, 1.0 - c

    transition: Dict[str, float] = {}
    if total > 0:
        transition = {
            nid: c * float(w) / total for nid, w in zip(ids, weights)
        }

    return RandomWalkProbabilities(
        continue_prob=c,
        injection_prob=p_inj,
        abandon_prob=p_abnd,
        transition=transition,
    )


def calculate_random_walk_probabilities(
    graph: "Graph",
    beta: float,
) -> List[str]:
    """
    Compute the random-walk transition model for every vertex.

    Safe to call repeatedly; each call recomputes from the current weights
    and injected labels.

    Args:
        graph: Graph with final weights (modified in place)
        beta: Regularization constant, must be > 0

    Returns:
        Ids of degenerate vertices (zero total outgoing weight)
    """
    if beta is None or not beta > 0:
        raise ConfigurationError(f"beta must be > 0, got {beta}", parameter="beta")

    degenerate: List[str] = []

    for vertex in graph.iter_vertices():
        probs = compute_vertex_probabilities(vertex, beta)
        vertex.continue_prob = probs.continue_prob
        vertex.injection_prob = probs.injection_prob
        vertex.abandon_prob = probs.abandon_prob
        vertex.transition = probs.transition

        if vertex.total_weight <= 0:
            degenerate.append(vertex.vertex_id)

    if degenerate:
        message = f"{len(degenerate)} vertices have zero outgoing weight"
        logger.warning(message)
        warnings.warn(message, DegenerateGraphWarning, stacklevel=2)

    logger.info(
        f"Random walk probabilities computed for {graph.total_vertices} vertices "
        f"(beta={beta})"
    )
    return degenerate
