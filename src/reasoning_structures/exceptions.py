"""Exceptions raised by the reasoning-structure engines.

Every engine error is local and recoverable: the engine validates its inputs
before mutating anything, so catching one of these leaves the structure exactly
as it was. The tool layer converts them into structured ``ToolOutput`` results.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Machine-readable classification of engine errors."""

    INVALID_TYPE = "invalid_type"
    DUPLICATE_ID = "duplicate_id"
    PARENT_NOT_FOUND = "parent_not_found"
    MISSING_NODE = "missing_node"
    SELF_LOOP = "self_loop"
    HAS_CYCLE = "has_cycle"
    MISSING_FIELD = "missing_field"
    TOPOLOGY_INVARIANT = "topology_invariant"
    INVALID_ACTION = "invalid_action"
    INVALID_VALUE = "invalid_value"


class ReasoningStructureError(Exception):
    """Base exception for reasoning-structure errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidTypeError(ReasoningStructureError, ValueError):
    """Raised when a node type is not in the recognized set."""

    kind = ErrorKind.INVALID_TYPE

    def __init__(self, node_type: object, valid_types: Iterable[str]) -> None:
        """Initialize the error.

        Args:
            node_type: The rejected type value
            valid_types: Types accepted by the engine, listed in the message
        """
        self.node_type = node_type
        self.valid_types = sorted(valid_types)
        super().__init__(
            f"Invalid node type: {node_type}. Valid types: {', '.join(self.valid_types)}"
        )


class DuplicateIdError(ReasoningStructureError):
    """Raised when a caller-supplied id collides with an existing node."""

    kind = ErrorKind.DUPLICATE_ID

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node id '{node_id}' already exists")


class ParentNotFoundError(ReasoningStructureError, LookupError):
    """Raised when a tree parent id does not exist."""

    kind = ErrorKind.PARENT_NOT_FOUND

    def __init__(self, parent_id: str) -> None:
        self.parent_id = parent_id
        super().__init__(f"Parent node not found: {parent_id}")


class MissingNodeError(ReasoningStructureError, LookupError):
    """Raised when an operation references a node that was never created."""

    kind = ErrorKind.MISSING_NODE

    def __init__(self, node_id: str, role: str = "Node") -> None:
        """Initialize the error.

        Args:
            node_id: The unknown node id
            role: How the node was referenced (e.g. "Source", "Target")
        """
        self.node_id = node_id
        self.role = role
        super().__init__(f"{role} node '{node_id}' does not exist")


class SelfLoopError(ReasoningStructureError, ValueError):
    """Raised when an edge would connect a node to itself."""

    kind = ErrorKind.SELF_LOOP

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Self-loops are not allowed (node '{node_id}')")


class HasCycleError(ReasoningStructureError):
    """Raised when a topological operation is requested on a cyclic graph."""

    kind = ErrorKind.HAS_CYCLE

    def __init__(self) -> None:
        super().__init__("Graph contains cycles, topological sort not possible")


class TopologyInvariantError(ReasoningStructureError, RuntimeError):
    """Raised when Kahn's algorithm does not visit every node of an acyclic graph."""

    kind = ErrorKind.TOPOLOGY_INVARIANT

    def __init__(self, visited: int, expected: int) -> None:
        self.visited = visited
        self.expected = expected
        super().__init__(
            f"Topological sort visited {visited} of {expected} nodes in a graph "
            "reported as acyclic"
        )


class MissingFieldError(ReasoningStructureError, ValueError):
    """Raised when a required field is absent or empty."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, action: str | None = None) -> None:
        self.field = field
        self.action = action
        if action:
            message = f"{field} is required for {action} action"
        else:
            message = f"{field} cannot be empty"
        super().__init__(message)


class InvalidActionError(ReasoningStructureError, ValueError):
    """Raised by the tool layer for an unknown action name."""

    kind = ErrorKind.INVALID_ACTION

    def __init__(self, action: object, valid_actions: Iterable[str]) -> None:
        self.action = action
        self.valid_actions = sorted(valid_actions)
        super().__init__(
            f"Invalid action '{action}'. Valid actions: {', '.join(self.valid_actions)}"
        )


__all__ = [
    "DuplicateIdError",
    "ErrorKind",
    "HasCycleError",
    "InvalidActionError",
    "InvalidTypeError",
    "MissingFieldError",
    "MissingNodeError",
    "ParentNotFoundError",
    "ReasoningStructureError",
    "SelfLoopError",
    "TopologyInvariantError",
]
