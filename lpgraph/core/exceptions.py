"""
lpgraph Errors
==============
Exception and warning taxonomy for graph preparation.

    GraphPipelineError
    ├── VertexReferenceError   test label names a vertex missing from the graph
    └── ConfigurationError     required parameter missing or out of range

    DegenerateGraphWarning     vertex left with zero outgoing weight

Version: 1.0.0
"""
from __future__ import annotations

from typing import Optional


class GraphPipelineError(Exception):
    """Base class for all graph preparation failures"""


class VertexReferenceError(GraphPipelineError, KeyError):
    """A record references a vertex that is not in the graph"""

    def __init__(self, vertex_id: str, context: str = "record"):
        self.vertex_id = vertex_id
        self.context = context
        super().__init__(f"{context} references unknown vertex: {vertex_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ConfigurationError(GraphPipelineError, ValueError):
    """A parameter needed by a requested step is missing or invalid"""

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter
        super().__init__(message)


class DegenerateGraphWarning(UserWarning):
    """Vertices ended up with zero outgoing weight"""
