"""
lpgraph Pipeline Module
=======================
Sequences configuration, builder and weighting engine.

Usage:
    from lpgraph.pipeline import GraphLoader, load_graph
"""

from lpgraph.pipeline.loader import (
    GraphLoader,
    PipelineResult,
    create_graph_loader,
    load_graph,
)

__all__ = [
    "GraphLoader",
    "PipelineResult",
    "create_graph_loader",
    "load_graph",
]
