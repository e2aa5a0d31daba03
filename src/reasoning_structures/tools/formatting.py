"""Display formatting for tool outputs.

Reflection reports and engine results are rendered as plain text for the host
to show. Nothing here is meant to be parsed back.
"""

from __future__ import annotations

from collections.abc import Iterable

from reasoning_structures.models.core import ThoughtType
from reasoning_structures.models.reflection import (
    ChainReflection,
    GraphReflection,
    ReflectionReport,
    TreeReflection,
)
from reasoning_structures.models.thought import ThoughtNode

BULLET = "•"
ARROW = "→"


def type_label(node_type: ThoughtType | str) -> str:
    """Capitalize a thought type for display (``analysis`` -> ``Analysis``)."""
    return str(node_type).capitalize()


def bullet_list(items: Iterable[str]) -> list[str]:
    return [f"{BULLET} {item}" for item in items]


def render_path(nodes: Iterable[ThoughtNode]) -> str:
    """Render nodes as ``[type] content`` joined by arrows."""
    return f" {ARROW} ".join(f"[{node.type}] {node.content}" for node in nodes)


def _totals(report: ReflectionReport) -> tuple[str, list[str]]:
    if isinstance(report, ChainReflection):
        return "Reflection Analysis", [f"Total steps: {report.total_steps}"]
    if isinstance(report, TreeReflection):
        return "Tree of Thoughts Reflection", [
            f"Total nodes: {report.total_nodes}",
            f"Explored thoughts: {report.explored_nodes}",
            f"Max depth: {report.max_depth}",
            f"Leaf nodes: {report.leaf_nodes}",
        ]
    if isinstance(report, GraphReflection):
        return "Graph of Thoughts Reflection", [
            f"Total nodes: {report.total_nodes}",
            f"Total connections: {report.total_edges}",
            f"Contains cycles: {'yes' if report.has_cycle else 'no'}",
            f"Reasoning clusters: {report.cluster_count}",
        ]
    return "Reflection", []


def render_reflection(
    report: ReflectionReport,
    extra_lines: Iterable[str] = (),
) -> str:
    """Render a reflection report as display text.

    The layout is a title, the report totals, any ``extra_lines`` supplied by
    the caller, bulleted insights, bulleted improvements and finally the user
    note.

    Args:
        report: Any chain, tree or graph reflection
        extra_lines: Lines placed right after the totals (e.g. a step trace)

    Returns:
        Newline-joined display text

    Examples:
        >>> from reasoning_structures.engines import ChainOfThoughts
        >>> chain = ChainOfThoughts()
        >>> _ = chain.add_step("s1", "find the bug", "analysis")
        >>> print(render_reflection(chain.reflect()).splitlines()[1])
        Total steps: 1
    """
    title, totals = _totals(report)
    parts = [title, *totals, *extra_lines]

    if report.insights:
        parts.append("\nInsights:")
        parts.extend(bullet_list(report.insights))

    if report.improvements:
        parts.append("\nSuggested Improvements:")
        parts.extend(bullet_list(report.improvements))

    if report.user_note:
        parts.append(f"\nUser Reflection:\n{report.user_note}")

    return "\n".join(parts)


__all__ = [
    "ARROW",
    "BULLET",
    "bullet_list",
    "render_path",
    "render_reflection",
    "type_label",
]
