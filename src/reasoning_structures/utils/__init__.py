"""Utility modules for reasoning-structures.

Components:
    - graph_utils: NetworkX-backed analysis for GraphOfThoughts
    - validation: Input validation helpers shared by the engines
"""

from reasoning_structures.utils.graph_utils import ThoughtGraphNetworkX
from reasoning_structures.utils.validation import require_text, validate_thought_type

__all__ = [
    # Graph utilities
    "ThoughtGraphNetworkX",
    # Validation utilities
    "require_text",
    "validate_thought_type",
]
