"""Base class for action-dispatching reasoning tools.

A tool wraps one engine and accepts host-style action dictionaries such as
``{"action": "add_step", "content": "...", "step_type": "analysis"}``. It
checks the action name and its required fields, dispatches to the matching
handler, and converts every engine error into a failed ``ToolOutput``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from reasoning_structures.config import Settings, get_settings
from reasoning_structures.exceptions import (
    ErrorKind,
    InvalidActionError,
    MissingFieldError,
    ReasoningStructureError,
)
from reasoning_structures.logging import get_logger
from reasoning_structures.models.tools import ToolOutput

logger = get_logger(__name__)

EngineT = TypeVar("EngineT")

ActionHandler = Callable[[Mapping[str, Any]], ToolOutput]

_text_arguments = TypeAdapter(dict[str, str | None])


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == ()


def _describe_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "value"
    return f"Invalid {location}: {error.get('msg', 'invalid value')}"


class AgentTool(ABC, Generic[EngineT]):
    """Action dispatcher over a single engine.

    Subclasses declare ``name``, ``required_fields`` and ``text_fields`` and
    implement ``actions`` to map action names to handlers. Every field named
    in ``text_fields`` must be a string or None before any handler runs.
    Handlers may raise any ReasoningStructureError; ``handle`` turns it into a
    failed output.

    Examples:
        >>> from reasoning_structures.engines import ChainOfThoughts
        >>> from reasoning_structures.tools import ChainOfThoughtsTool
        >>> tool = ChainOfThoughtsTool(ChainOfThoughts())
        >>> tool.handle({"action": "explode"}).error_kind
        <ErrorKind.INVALID_ACTION: 'invalid_action'>
    """

    name: ClassVar[str]
    required_fields: ClassVar[Mapping[str, tuple[str, ...]]] = {}
    text_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, engine: EngineT, settings: Settings | None = None) -> None:
        self.engine = engine
        self.settings = settings or get_settings()

    @property
    @abstractmethod
    def actions(self) -> Mapping[str, ActionHandler]:
        """Map of action name to handler."""

    def handle(self, args: Mapping[str, Any]) -> ToolOutput:
        """Run one action and return its output.

        Args:
            args: Action dictionary; ``args["action"]`` selects the handler

        Returns:
            The handler's output, or a failed output describing the error
        """
        action = args.get("action")
        try:
            handler = self.actions.get(action) if isinstance(action, str) else None
            if handler is None:
                raise InvalidActionError(action, self.actions)
            for field in self.required_fields.get(action, ()):
                if _is_blank(args.get(field)):
                    raise MissingFieldError(field, action)
            _text_arguments.validate_python(
                {field: args[field] for field in self.text_fields if field in args}
            )
            output = handler(args)
        except ReasoningStructureError as exc:
            logger.debug("%s.%s failed (%s): %s", self.name, action, exc.kind, exc.message)
            return ToolOutput.failure(exc.message, exc.kind)
        except ValidationError as exc:
            message = _describe_validation_error(exc)
            logger.debug("%s.%s rejected a value: %s", self.name, action, message)
            return ToolOutput.failure(message, ErrorKind.INVALID_VALUE)

        logger.debug("%s.%s -> %s", self.name, action, output.status)
        return output


__all__ = ["ActionHandler", "AgentTool"]
