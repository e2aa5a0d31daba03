"""Core enumerations for reasoning-structures.

This module defines the enums shared by every engine: thought types, the
structure kinds a session can hold, reflection statuses, and tool statuses.
"""

from enum import StrEnum


class ThoughtType(StrEnum):
    """Types of thought-nodes.

    The type of a node controls which follow-up suggestions are generated for
    it. Chains and trees accept every type except ``SYNTHESIS``, since merging
    is only available in graphs.
    """

    ANALYSIS = "analysis"
    """Analysis and exploration of the problem."""

    REASONING = "reasoning"
    """Logical deduction and inference."""

    TASK = "task"
    """Actionable implementation step."""

    VALIDATION = "validation"
    """Verification and testing."""

    SYNTHESIS = "synthesis"
    """Combining multiple thoughts or ideas."""


LINEAR_THOUGHT_TYPES: frozenset[ThoughtType] = frozenset(
    {
        ThoughtType.ANALYSIS,
        ThoughtType.REASONING,
        ThoughtType.TASK,
        ThoughtType.VALIDATION,
    }
)
"""Types accepted by chain and tree engines."""

GRAPH_THOUGHT_TYPES: frozenset[ThoughtType] = frozenset(ThoughtType)
"""Types accepted by the graph engine."""


class StructureKind(StrEnum):
    """Topologies a reasoning session can be organised as."""

    CHAIN = "chain"
    TREE = "tree"
    GRAPH = "graph"


class ReflectionStatus(StrEnum):
    """Outcome of a reflection pass.

    ``EMPTY`` is distinct from ``OK``: it means there was nothing to analyse,
    not that the analysis found no issues.
    """

    OK = "ok"
    EMPTY = "empty"


class ToolStatus(StrEnum):
    """Status of a tool invocation."""

    SUCCESS = "success"
    ERROR = "error"
    EMPTY = "empty"


__all__ = [
    "GRAPH_THOUGHT_TYPES",
    "LINEAR_THOUGHT_TYPES",
    "ReflectionStatus",
    "StructureKind",
    "ThoughtType",
    "ToolStatus",
]
