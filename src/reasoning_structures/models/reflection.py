"""Reflection report models.

A reflection is a read-only analytics pass over a reasoning structure. Reports
carry counts, a type histogram, and heuristic insights and improvements; they
are intended for display rather than further machine processing.

Reports with ``status == ReflectionStatus.EMPTY`` mean there was nothing to
analyse yet. They are not failures, and they are not ordinary successes either.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from reasoning_structures.models.core import ReflectionStatus, ThoughtType


class ReflectionReport(BaseModel):
    """Fields shared by every reflection report."""

    model_config = ConfigDict(frozen=True)

    status: ReflectionStatus = Field(
        default=ReflectionStatus.OK,
        description="OK when there was something to analyse, EMPTY otherwise",
    )
    type_distribution: dict[str, int] = Field(
        default_factory=dict,
        description="Histogram of node types",
    )
    insights: list[str] = Field(
        default_factory=list,
        description="Observations about the current structure",
    )
    improvements: list[str] = Field(
        default_factory=list,
        description="Heuristic suggestions for improving the structure",
    )
    user_note: str | None = Field(
        default=None,
        description="Free-text note supplied by the caller",
    )

    @property
    def is_empty(self) -> bool:
        """Whether the structure had nothing to report."""
        return self.status == ReflectionStatus.EMPTY


class ChainReflection(ReflectionReport):
    """Reflection over a chain of steps."""

    total_steps: int = Field(default=0, ge=0)


class BranchInfo(BaseModel):
    """Metadata for one leaf below the tree root."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    depth: int = Field(ge=1)
    type: str
    content_length: int = Field(ge=0)


class TreeReflection(ReflectionReport):
    """Reflection over a tree of thoughts."""

    total_nodes: int = Field(default=0, ge=0, description="All nodes, root included")
    explored_nodes: int = Field(default=0, ge=0, description="Nodes below the root")
    max_depth: int = Field(default=0, ge=0)
    leaf_nodes: int = Field(default=0, ge=0)
    branches: list[BranchInfo] = Field(default_factory=list)


class GraphReflection(ReflectionReport):
    """Reflection over a graph of thoughts."""

    total_nodes: int = Field(default=0, ge=0)
    total_edges: int = Field(default=0, ge=0)
    has_cycle: bool = False
    cluster_count: int = Field(
        default=0,
        ge=0,
        description="Number of weakly connected reasoning clusters",
    )


def type_histogram(types: Iterable[ThoughtType]) -> dict[str, int]:
    """Count node types, ordered by ThoughtType declaration order."""
    counts = Counter(types)
    return {str(t): counts[t] for t in ThoughtType if counts[t]}


def format_distribution(distribution: dict[str, int]) -> str:
    """Render a type histogram as ``type:count`` pairs."""
    return ", ".join(f"{name}:{count}" for name, count in distribution.items())


__all__ = [
    "BranchInfo",
    "ChainReflection",
    "GraphReflection",
    "ReflectionReport",
    "TreeReflection",
    "format_distribution",
    "type_histogram",
]
