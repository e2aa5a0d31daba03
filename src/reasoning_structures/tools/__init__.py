"""Tools module for reasoning-structures.

Each tool wraps one engine and turns host action dictionaries into engine
calls, returning a ToolOutput for every invocation.
"""

from reasoning_structures.tools.base import AgentTool
from reasoning_structures.tools.chain import ChainOfThoughtsTool
from reasoning_structures.tools.formatting import render_reflection
from reasoning_structures.tools.graph import GraphOfThoughtsTool
from reasoning_structures.tools.tree import TreeOfThoughtsTool

__all__ = [
    "AgentTool",
    "ChainOfThoughtsTool",
    "GraphOfThoughtsTool",
    "TreeOfThoughtsTool",
    "render_reflection",
]
