"""
# ==============================================================================
# Module: lpgraph/graph/store.py
# ==============================================================================
# Purpose: Mutable vertex/adjacency store with per-vertex label distributions
#
# Dependencies:
#   - External: networkx
#   - Internal: lpgraph.core.types (VertexId, LabelId, DUMMY_LABEL)
#
# Input:
#   - Vertex ids (vertices are created on demand by get-or-create)
#
# Output:
#   - Vertex lookups and iteration
#   - Graph statistics
#   - Export: NetworkX DiGraph (read-only copy for downstream consumers)
# ==============================================================================
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import networkx as nx

from lpgraph.core.types import DUMMY_LABEL, LabelId, VertexId

logger = logging.getLogger(__name__)


# ==============================================================================
# Vertex
# ==============================================================================
@dataclass
class Vertex:
    """
    Graph vertex

    Adjacency is keyed by neighbor id, never by object reference.
    """
    vertex_id: VertexId

    # Outgoing adjacency: {neighbor_id: weight}
    neighbors: Dict[VertexId, float] = field(default_factory=dict)

    # Label distributions
    gold_labels: Dict[LabelId, float] = field(default_factory=dict)
    injected_labels: Dict[LabelId, float] = field(default_factory=dict)
    estimated_labels: Dict[LabelId, float] = field(default_factory=dict)

    is_seed: bool = False
    is_test: bool = False

    # Random-walk model (populated by calculate_random_walk_probabilities)
    transition: Optional[Dict[VertexId, float]] = None
    continue_prob: Optional[float] = None
    injection_prob: Optional[float] = None
    abandon_prob: Optional[float] = None

    @property
    def degree(self) -> int:
        """Number of outgoing neighbors"""
        return len(self.neighbors)

    @property
    def total_weight(self) -> float:
        """Sum of outgoing edge weights"""
        return math.fsum(self.neighbors.values())

    @property
    def is_isolated(self) -> bool:
        return not self.neighbors

    @property
    def has_random_walk_probabilities(self) -> bool:
        return self.transition is not None

    def add_neighbor(self, neighbor_id: VertexId, weight: float) -> None:
        """Set the edge weight to a neighbor (last write wins)"""
        self.neighbors[neighbor_id] = weight

    def set_gold_label(self, label: LabelId, score: float) -> None:
        self.gold_labels[label] = score

    def set_injected_label(self, label: LabelId, score: float) -> None:
        self.injected_labels[label] = score

    def clear_random_walk_probabilities(self) -> None:
        self.transition = None
        self.continue_prob = None
        self.injection_prob = None
        self.abandon_prob = None


# ==============================================================================
# Graph
# ==============================================================================
class Graph:
    """
    Label-propagation graph

    Supports:
    - Lazy vertex creation (get-or-create)
    - Directed adjacency with per-edge weights
    - Seed / test / gold label bookkeeping
    - Export to NetworkX
    """

    def __init__(self):
        # Vertex storage: {vertex_id: Vertex}
        self._vertices: Dict[VertexId, Vertex] = {}
        self._seed_injected: bool = False

        logger.debug("Graph initialized")

    # ==========================================================================
    # Properties
    # ==========================================================================
    @property
    def total_vertices(self) -> int:
        """Total number of vertices"""
        return len(self._vertices)

    @property
    def total_edges(self) -> int:
        """Total number of directed adjacency entries"""
        return sum(v.degree for v in self._vertices.values())

    @property
    def seed_injected(self) -> bool:
        """Whether seed labels have been injected into this graph"""
        return self._seed_injected

    def set_seed_injected(self) -> None:
        self._seed_injected = True

    # ==========================================================================
    # Vertex Operations
    # ==========================================================================
    def add_vertex(self, vertex_id: VertexId, label: LabelId = DUMMY_LABEL) -> Vertex:
        """
        Get or create a vertex

        Args:
            vertex_id: Vertex identifier
            label: Initial estimated label for a newly created vertex

        Returns:
            The existing vertex, or the newly created one
        """
        vertex = self._vertices.get(vertex_id)
        if vertex is None:
            vertex = Vertex(vertex_id=vertex_id, estimated_labels={label: 1.0})
            self._vertices[vertex_id] = vertex
        return vertex

    def get_vertex(self, vertex_id: VertexId) -> Optional[Vertex]:
        """Get a vertex by id"""
        return self._vertices.get(vertex_id)

    def has_vertex(self, vertex_id: VertexId) -> bool:
        """Check if vertex exists"""
        return vertex_id in self._vertices

    def iter_vertices(self) -> Iterator[Vertex]:
        """Iterate over vertices"""
        yield from self._vertices.values()

    def vertex_ids(self) -> List[VertexId]:
        return list(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._vertices

    def __getitem__(self, vertex_id: VertexId) -> Vertex:
        return self._vertices[vertex_id]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def __len__(self) -> int:
        return len(self._vertices)

    # ==========================================================================
    # Label Queries
    # ==========================================================================
    def get_seed_vertices(self) -> List[Vertex]:
        return [v for v in self._vertices.values() if v.is_seed]

    def get_test_vertices(self) -> List[Vertex]:
        return [v for v in self._vertices.values() if v.is_test]

    def get_gold_labeled_vertices(self) -> List[Vertex]:
        return [v for v in self._vertices.values() if v.gold_labels]

    def injected_label_counts(self) -> Dict[LabelId, int]:
        """Number of vertices carrying each injected label"""
        counts: Counter = Counter()
        for vertex in self._vertices.values():
            counts.update(vertex.injected_labels.keys())
        return dict(counts)

    def label_set(self) -> List[LabelId]:
        """All labels seen as gold or injected, sorted by string form"""
        labels = set()
        for vertex in self._vertices.values():
            labels.update(vertex.gold_labels)
            labels.update(vertex.injected_labels)
        return sorted(labels, key=str)

    # ==========================================================================
    # Export Methods
    # ==========================================================================
    def to_networkx(self) -> nx.DiGraph:
        """
        Export to NetworkX DiGraph

        Returns:
            DiGraph with vertex flags/labels as node attributes and
            ``weight`` (plus ``transition`` once computed) on edges
        """
        G = nx.DiGraph()

        for vertex in self._vertices.values():
            G.add_node(
                vertex.vertex_id,
                is_seed=vertex.is_seed,
                is_test=vertex.is_test,
                gold_labels=dict(vertex.gold_labels),
                injected_labels=dict(vertex.injected_labels),
                continue_prob=vertex.continue_prob,
                injection_prob=vertex.injection_prob,
                abandon_prob=vertex.abandon_prob,
            )

        for vertex in self._vertices.values():
            for neighbor_id, weight in vertex.neighbors.items():
                attrs: Dict[str, Any] = {"weight": weight}
                if vertex.transition is not None:
                    attrs["transition"] = vertex.transition.get(neighbor_id, 0.0)
                G.add_edge(vertex.vertex_id, neighbor_id, **attrs)

        return G

    # ==========================================================================
    # Statistics
    # ==========================================================================
    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics"""
        degrees = [v.degree for v in self._vertices.values()]
        return {
            "total_vertices": self.total_vertices,
            "total_edges": self.total_edges,
            "seed_vertices": len(self.get_seed_vertices()),
            "test_vertices": len(self.get_test_vertices()),
            "isolated_vertices": sum(1 for d in degrees if d == 0),
            "max_degree": max(degrees) if degrees else 0,
            "mean_degree": (sum(degrees) / len(degrees)) if degrees else 0.0,
            "seed_injected": self._seed_injected,
            "injected_labels": {str(k): c for k, c in self.injected_label_counts().items()},
        }

    def __repr__(self) -> str:
        return f"Graph(vertices={self.total_vertices}, edges={self.total_edges})"
