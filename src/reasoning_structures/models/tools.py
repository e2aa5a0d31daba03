"""Tool I/O models.

These models are the interface between the host chat integration and the
engines. Every tool invocation returns a ToolOutput, including failed ones, so
engine errors never escape to the host as exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from reasoning_structures.exceptions import ErrorKind
from reasoning_structures.models.core import ToolStatus


class ToolOutput(BaseModel):
    """Result of one tool action.

    Examples:
        >>> ok = ToolOutput.success("Analysis: check token expiry", node_id="node_1")
        >>> ok.status, ok.payload["node_id"]
        (<ToolStatus.SUCCESS: 'success'>, 'node_1')

        >>> failed = ToolOutput.failure("Parent node not found: x", ErrorKind.PARENT_NOT_FOUND)
        >>> failed.is_error
        True
    """

    model_config = ConfigDict(frozen=True)

    status: ToolStatus = Field(description="Outcome of the action")
    data: str = Field(description="Display text for the host to render")
    error_kind: ErrorKind | None = Field(
        default=None,
        description="Classification of the failure when status is error",
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured result values (node ids, orders, snapshots)",
    )

    @property
    def is_error(self) -> bool:
        """Whether the action failed."""
        return self.status == ToolStatus.ERROR

    @classmethod
    def success(cls, data: str, **payload: Any) -> ToolOutput:
        """Build a successful output."""
        return cls(status=ToolStatus.SUCCESS, data=data, payload=payload)

    @classmethod
    def empty(cls, data: str, **payload: Any) -> ToolOutput:
        """Build an output for a structure with nothing to report."""
        return cls(status=ToolStatus.EMPTY, data=data, payload=payload)

    @classmethod
    def failure(cls, data: str, error_kind: ErrorKind) -> ToolOutput:
        """Build a failed output."""
        return cls(status=ToolStatus.ERROR, data=data, error_kind=error_kind)


__all__ = ["ToolOutput"]
