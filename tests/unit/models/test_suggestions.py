"""Tests for the per-type suggestion tables."""

import pytest

from reasoning_structures.models.core import LINEAR_THOUGHT_TYPES, ThoughtType
from reasoning_structures.models.suggestions import (
    FULL_SUGGESTIONS,
    GENERIC_SUGGESTION,
    TREE_SUGGESTIONS,
    suggestions_for,
)


class TestSuggestionTables:
    """Tests for the table contents."""

    def test_full_table_covers_every_type(self):
        """Every thought type has four full suggestions."""
        for node_type in ThoughtType:
            assert len(FULL_SUGGESTIONS[node_type]) == 4

    @pytest.mark.parametrize(
        ("node_type", "expected"),
        [
            (ThoughtType.ANALYSIS, 2),
            (ThoughtType.REASONING, 4),
            (ThoughtType.TASK, 2),
            (ThoughtType.VALIDATION, 2),
        ],
    )
    def test_tree_table_sizes(self, node_type, expected):
        """Tree suggestions are reduced except for reasoning."""
        assert len(TREE_SUGGESTIONS[node_type]) == expected

    def test_tree_table_has_no_synthesis(self):
        """Trees never hold synthesis nodes."""
        assert set(TREE_SUGGESTIONS) == set(LINEAR_THOUGHT_TYPES)

    def test_tables_are_read_only(self):
        """The tables cannot be modified."""
        with pytest.raises(TypeError):
            FULL_SUGGESTIONS[ThoughtType.TASK] = ()  # type: ignore[index]


class TestSuggestionsFor:
    """Tests for suggestions_for()."""

    def test_accepts_strings(self):
        """String type names resolve like enum members."""
        assert suggestions_for("task") == suggestions_for(ThoughtType.TASK)

    def test_unknown_type_gets_generic_prompt(self):
        """An unmapped type yields exactly one generic prompt."""
        assert suggestions_for("musing") == [GENERIC_SUGGESTION]

    def test_type_missing_from_table_gets_generic_prompt(self):
        """A known type absent from the chosen table yields the generic prompt."""
        assert suggestions_for(ThoughtType.SYNTHESIS, TREE_SUGGESTIONS) == [GENERIC_SUGGESTION]

    def test_returns_fresh_list(self):
        """Mutating a result never affects later calls."""
        first = suggestions_for(ThoughtType.ANALYSIS)
        first.append("extra")
        assert "extra" not in suggestions_for(ThoughtType.ANALYSIS)

    def test_deterministic(self):
        """Repeated calls return identical output."""
        assert suggestions_for(ThoughtType.VALIDATION) == suggestions_for(ThoughtType.VALIDATION)
