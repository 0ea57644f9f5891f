"""
lpgraph Core Types
==================
Record and label types shared by every module.

Version: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# =============================================================================
# Identifiers
# =============================================================================
VertexId = str


class ReservedLabel(Enum):
    """
    Labels reserved by the graph itself

    Plain Enum (no str mixin) so a reserved label never compares equal to a
    label read from a seed file.
    """
    DUMMY = "__DUMMY__"

    def __str__(self) -> str:
        return self.value


LabelId = Union[str, ReservedLabel]

DUMMY_LABEL = ReservedLabel.DUMMY


# =============================================================================
# Records
# =============================================================================
@dataclass(frozen=True)
class Edge:
    """
    Weighted edge record

    source -> target; for undirected graphs the builder adds the reverse entry.
    """
    source: VertexId
    target: VertexId
    weight: float = 1.0


@dataclass(frozen=True)
class Seed:
    """
    Label assertion for a vertex

    Used for seed, test-label and gold-label records alike.
    """
    vertex: VertexId
    label: LabelId
    score: float = 1.0
