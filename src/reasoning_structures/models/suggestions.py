"""Follow-up suggestion tables keyed by thought type.

Suggestions are a pure function of a node's type: the same type always yields
the same ordered prompts, and content is never inspected.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from reasoning_structures.models.core import ThoughtType

GENERIC_SUGGESTION = (
    "**Next steps**: Consider what logical follow-ups make sense for this thought"
)

_ASSUMPTIONS = "**Assumptions**: What assumptions are being made about this analysis?"
_DATA_NEEDED = "**Data needed**: What information or data would help validate this analysis?"
_IMPLICATIONS = (
    "**Implications**: If this reasoning is correct, what are the logical consequences?"
)
_EVIDENCE = "**Supporting evidence**: What facts or data support this line of reasoning?"
_COUNTER = "**Counter-arguments**: What are potential weaknesses or alternative viewpoints?"
_REASONING_NEXT = "**Next steps**: How can this reasoning lead to actionable conclusions?"
_ALTERNATIVES = "**Alternative approaches**: Consider different ways to accomplish this task"
_SUCCESS_CRITERIA = (
    "**Success criteria**: How will you know when this task is completed successfully?"
)
_TEST_CASES = "**Test cases**: What specific scenarios should be tested?"
_EDGE_CASES = "**Edge cases**: What unusual or boundary conditions might cause issues?"

FULL_SUGGESTIONS: Mapping[ThoughtType, tuple[str, ...]] = MappingProxyType(
    {
        ThoughtType.ANALYSIS: (
            _ASSUMPTIONS,
            _DATA_NEEDED,
            "**Sub-questions**: What specific questions need to be answered?",
            "**Related cases**: Are there similar situations or precedents to consider?",
        ),
        ThoughtType.REASONING: (_IMPLICATIONS, _EVIDENCE, _COUNTER, _REASONING_NEXT),
        ThoughtType.TASK: (
            "**Implementation steps**: Break this task into specific, actionable sub-steps",
            _ALTERNATIVES,
            "**Resources needed**: What tools, skills, or materials are required?",
            _SUCCESS_CRITERIA,
        ),
        ThoughtType.VALIDATION: (
            _TEST_CASES,
            "**Success metrics**: What measurable criteria define success?",
            _EDGE_CASES,
            "**Failure recovery**: What should happen if validation fails?",
        ),
        ThoughtType.SYNTHESIS: (
            "**Integration**: How do the component ideas fit together in this synthesis?",
            "**Trade-offs**: What are the pros and cons of combining these concepts?",
            "**Refinement**: How can this synthesis be improved or optimized?",
            "**Applications**: Where and how can this synthesized idea be applied?",
        ),
    }
)
"""Suggestions used by chain and graph nodes."""

TREE_SUGGESTIONS: Mapping[ThoughtType, tuple[str, ...]] = MappingProxyType(
    {
        ThoughtType.ANALYSIS: (_ASSUMPTIONS, _DATA_NEEDED),
        ThoughtType.REASONING: (_IMPLICATIONS, _EVIDENCE, _COUNTER, _REASONING_NEXT),
        ThoughtType.TASK: (_ALTERNATIVES, _SUCCESS_CRITERIA),
        ThoughtType.VALIDATION: (_TEST_CASES, _EDGE_CASES),
    }
)
"""Shorter suggestions for tree nodes, which tend to be explored in breadth."""


def suggestions_for(
    node_type: ThoughtType | str,
    table: Mapping[ThoughtType, tuple[str, ...]] = FULL_SUGGESTIONS,
) -> list[str]:
    """Return the follow-up suggestions for a node type.

    Args:
        node_type: The thought type to look up
        table: Suggestion table to use

    Returns:
        A fresh list of suggestions, or a single generic suggestion when the
        type has no entry in ``table``
    """
    try:
        key = ThoughtType(node_type)
    except ValueError:
        return [GENERIC_SUGGESTION]
    return list(table.get(key, (GENERIC_SUGGESTION,)))


__all__ = [
    "FULL_SUGGESTIONS",
    "GENERIC_SUGGESTION",
    "TREE_SUGGESTIONS",
    "suggestions_for",
]
