"""Input validation utilities for reasoning-structures."""
from __future__ import annotations

from collections.abc import Collection

from reasoning_structures.exceptions import InvalidTypeError, MissingFieldError
from reasoning_structures.models.core import ThoughtType


def require_text(value: object, field_name: str, action: str | None = None) -> str:
    """Validate that a required text field is a non-empty string.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages
        action: Optional action name for error messages

    Returns:
        The validated string

    Raises:
        MissingFieldError: If the value is None, not a string, or empty
    """
    if not isinstance(value, str) or not value:
        raise MissingFieldError(field_name, action)
    return value


def validate_thought_type(
    node_type: ThoughtType | str | None,
    allowed: Collection[ThoughtType],
    default: ThoughtType = ThoughtType.ANALYSIS,
) -> ThoughtType:
    """Resolve a caller-supplied node type against an engine's accepted set.

    Args:
        node_type: Type name or enum member; None selects ``default``
        allowed: Types the engine accepts
        default: Type used when ``node_type`` is None

    Returns:
        The resolved ThoughtType

    Raises:
        InvalidTypeError: If the type is unknown or not accepted by the engine
    """
    if node_type is None:
        return default
    try:
        resolved = ThoughtType(node_type)
    except ValueError:
        raise InvalidTypeError(node_type, (str(t) for t in allowed)) from None
    if resolved not in allowed:
        raise InvalidTypeError(node_type, (str(t) for t in allowed))
    return resolved


__all__ = ["require_text", "validate_thought_type"]
