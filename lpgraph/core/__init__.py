"""
lpgraph Core Module
===================
Record types, reserved labels and the error taxonomy.

Usage:
    from lpgraph.core import Edge, Seed, DUMMY_LABEL
    from lpgraph.core import ConfigurationError, VertexReferenceError
"""

from lpgraph.core.types import (
    DUMMY_LABEL,
    Edge,
    LabelId,
    ReservedLabel,
    Seed,
    VertexId,
)
from lpgraph.core.exceptions import (
    ConfigurationError,
    DegenerateGraphWarning,
    GraphPipelineError,
    VertexReferenceError,
)

__all__ = [
    # Types
    "VertexId",
    "LabelId",
    "ReservedLabel",
    "DUMMY_LABEL",
    "Edge",
    "Seed",
    # Errors
    "GraphPipelineError",
    "VertexReferenceError",
    "ConfigurationError",
    "DegenerateGraphWarning",
]
