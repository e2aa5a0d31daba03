"""
reasoning-structures: explicit chain, tree and graph structures for reasoning.

This package represents a problem-solving session as an inspectable chain,
tree or directed graph of typed thought-nodes, and provides the operations
that mutate, validate, analyse and summarise those structures: cycle
detection, topological ordering, score propagation, merging and reflection.

Content is always an opaque caller string; nothing here generates or
interprets natural language.
"""

__version__ = "0.1.0"

from reasoning_structures.engines import ChainOfThoughts, GraphOfThoughts, TreeOfThoughts
from reasoning_structures.exceptions import ErrorKind, ReasoningStructureError
from reasoning_structures.models import ThoughtType, ToolOutput
from reasoning_structures.sessions import ReasoningSession, SessionManager

__all__ = [
    "ChainOfThoughts",
    "ErrorKind",
    "GraphOfThoughts",
    "ReasoningSession",
    "ReasoningStructureError",
    "SessionManager",
    "ThoughtType",
    "ToolOutput",
    "TreeOfThoughts",
    "__version__",
]
