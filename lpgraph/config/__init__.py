"""
lpgraph Configuration Module
============================
Typed configuration for graph preparation.

Module: lpgraph/config/__init__.py

Components (re-exported):
    From settings:
        - ParameterType: Enum for parameter types
        - ParameterSpec: Single parameter specification
        - GraphConfig: Typed pipeline configuration

Dependencies:
    - yaml: Configuration files
    - Internal: lpgraph.config.settings

Usage:
    from lpgraph.config import GraphConfig

    config = GraphConfig.from_dict({"beta": "2.0", "is_directed": "false"})
    config = GraphConfig.from_yaml("configs/graph.yaml")
    config.save_to_yaml("configs/current.yaml")

Version: 1.0.0
"""

from lpgraph.config.settings import (
    GraphConfig,
    ParameterSpec,
    ParameterType,
)


__all__ = [
    "ParameterType",
    "ParameterSpec",
    "GraphConfig",
]
