"""Engine-independent snapshot models for graph serialization.

A GraphSnapshot is a deep copy of a graph's nodes and edges. Its JSON dump is a
plain nested dict/list structure that callers may embed in any persisted
document and later hand back to ``GraphOfThoughts.deserialize``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from reasoning_structures.models.core import ThoughtType


class NodeSnapshot(BaseModel):
    """Serialized form of a graph node."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    content: str
    type: ThoughtType = ThoughtType.ANALYSIS
    score: float = 0.0
    confidence: float = 0.0
    created_at: datetime
    updated_at: datetime


class EdgeSnapshot(BaseModel):
    """Serialized form of a graph edge."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    weight: float = 1.0
    type: str = "depends_on"
    created_at: datetime | None = None


class GraphSnapshot(BaseModel):
    """Serialized form of a whole graph.

    Examples:
        >>> snapshot = GraphSnapshot.model_validate({"nodes": {}, "edges": []})
        >>> snapshot.model_dump(mode="json")
        {'nodes': {}, 'edges': []}
    """

    model_config = ConfigDict(frozen=True)

    nodes: dict[str, NodeSnapshot] = Field(
        default_factory=dict,
        description="Map of node ID to node snapshot",
    )
    edges: list[EdgeSnapshot] = Field(
        default_factory=list,
        description="All edges, in forward-adjacency order",
    )


__all__ = ["EdgeSnapshot", "GraphSnapshot", "NodeSnapshot"]
