"""Thought-node and edge data models.

This module defines the data structures shared by the chain, tree and graph
engines. ThoughtNode is the atomic unit of reasoning; ChainStep and TreeNode
add the ordering and parent/child information their engines need, and
ThoughtEdge is the directed, weighted relation used by graphs.

Unlike the snapshot models, nodes are mutable: scores are updated in place by
``set_score`` and by graph score propagation. The ``id`` field is frozen and
cannot be reassigned after creation.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from reasoning_structures.models.core import ThoughtType
from reasoning_structures.models.suggestions import (
    FULL_SUGGESTIONS,
    TREE_SUGGESTIONS,
    suggestions_for,
)


class ThoughtNode(BaseModel):
    """A single thought in a reasoning structure.

    Examples:
        Create a thought and score it:
        >>> node = ThoughtNode(id="node_1", content="Token expiry is not checked")
        >>> node.type
        <ThoughtType.ANALYSIS: 'analysis'>
        >>> node.set_score(score=0.8, confidence=0.6)
        >>> node.score, node.confidence
        (0.8, 0.6)

        Partial updates keep the other value:
        >>> node.set_score(confidence=0.9)
        >>> node.score
        0.8
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        frozen=True,
        min_length=1,
        description="Identifier, unique within one engine instance",
    )
    content: str = Field(
        description="Opaque thought content supplied by the caller",
    )
    type: ThoughtType = Field(
        default=ThoughtType.ANALYSIS,
        description="Type of thought; selects the generated suggestions",
    )
    score: float = Field(
        default=0.0,
        description="Externally assigned or propagated priority value",
    )
    confidence: float = Field(
        default=0.0,
        description="Caller-assigned confidence; never propagated",
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when this thought was created",
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of the last score or confidence change",
    )

    def set_score(
        self,
        score: float | None = None,
        confidence: float | None = None,
    ) -> None:
        """Update score and/or confidence.

        Omitted values keep their prior value. ``updated_at`` is refreshed on
        every call, even when both values are omitted.

        Args:
            score: New score, or None to keep the current one
            confidence: New confidence, or None to keep the current one
        """
        if score is not None:
            self.score = score
        if confidence is not None:
            self.confidence = confidence
        self.updated_at = datetime.now()

    def generate_suggestions(self) -> list[str]:
        """Return follow-up prompts for this thought's type."""
        return suggestions_for(self.type, FULL_SUGGESTIONS)


class ChainStep(ThoughtNode):
    """A thought in a linear chain, numbered by insertion order."""

    step_number: int = Field(
        ge=1,
        frozen=True,
        description="1-based position of this step in its chain",
    )


class TreeNode(ThoughtNode):
    """A thought in a rooted tree.

    Parent and children are stored as ids so the owning engine keeps a single
    map of nodes. ``depth`` is fixed at creation as the parent's depth plus one.
    """

    parent_id: str | None = Field(
        default=None,
        frozen=True,
        description="ID of the parent node; None for the root",
    )
    children_ids: list[str] = Field(
        default_factory=list,
        description="IDs of child nodes in insertion order",
    )
    depth: int = Field(
        default=0,
        ge=0,
        frozen=True,
        description="Distance from the root (root = 0)",
    )

    @property
    def is_leaf(self) -> bool:
        """Whether this node has no children."""
        return not self.children_ids

    def generate_suggestions(self) -> list[str]:
        """Return the shorter tree-specific follow-up prompts."""
        return suggestions_for(self.type, TREE_SUGGESTIONS)


class ThoughtEdge(BaseModel):
    """A directed, weighted relation between two graph nodes.

    Common relationship types include ``depends_on`` (the default) and
    ``contributes_to`` (used by merges); callers may use any label.

    Examples:
        >>> edge = ThoughtEdge(source="node_1", target="node_2")
        >>> edge.type, edge.weight
        ('depends_on', 1.0)
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="ID of the source node")
    target: str = Field(description="ID of the target node")
    weight: float = Field(default=1.0, description="Strength of the relation")
    type: str = Field(
        default="depends_on",
        min_length=1,
        description="Free-form relationship label",
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when this edge was created",
    )


__all__ = [
    "ChainStep",
    "ThoughtEdge",
    "ThoughtNode",
    "TreeNode",
]
