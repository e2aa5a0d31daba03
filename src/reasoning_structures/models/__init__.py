"""
Data models and type system for reasoning-structures.

This package contains the Pydantic models and enumerations shared by the
chain, tree and graph engines:

- Core enumerations (thought types, structure kinds, statuses)
- Thought nodes, chain steps, tree nodes and graph edges
- Per-type follow-up suggestion tables
- Reflection reports and graph snapshots
- Tool output schema

All models use Pydantic v2 for validation and serialization.
"""

from __future__ import annotations

from reasoning_structures.models.core import (
    GRAPH_THOUGHT_TYPES,
    LINEAR_THOUGHT_TYPES,
    ReflectionStatus,
    StructureKind,
    ThoughtType,
    ToolStatus,
)
from reasoning_structures.models.reflection import (
    BranchInfo,
    ChainReflection,
    GraphReflection,
    ReflectionReport,
    TreeReflection,
)
from reasoning_structures.models.snapshot import EdgeSnapshot, GraphSnapshot, NodeSnapshot
from reasoning_structures.models.suggestions import (
    FULL_SUGGESTIONS,
    GENERIC_SUGGESTION,
    TREE_SUGGESTIONS,
    suggestions_for,
)
from reasoning_structures.models.thought import ChainStep, ThoughtEdge, ThoughtNode, TreeNode
from reasoning_structures.models.tools import ToolOutput

__all__ = [
    # Core enums
    "GRAPH_THOUGHT_TYPES",
    "LINEAR_THOUGHT_TYPES",
    "ReflectionStatus",
    "StructureKind",
    "ThoughtType",
    "ToolStatus",
    # Thought models
    "ChainStep",
    "ThoughtEdge",
    "ThoughtNode",
    "TreeNode",
    # Suggestions
    "FULL_SUGGESTIONS",
    "GENERIC_SUGGESTION",
    "TREE_SUGGESTIONS",
    "suggestions_for",
    # Reflection
    "BranchInfo",
    "ChainReflection",
    "GraphReflection",
    "ReflectionReport",
    "TreeReflection",
    # Snapshots
    "EdgeSnapshot",
    "GraphSnapshot",
    "NodeSnapshot",
    # Tools
    "ToolOutput",
]
