"""Chain of thoughts: a linear, duplicate-free sequence of reasoning steps."""

from __future__ import annotations

import structlog

from reasoning_structures.exceptions import DuplicateIdError
from reasoning_structures.models.core import LINEAR_THOUGHT_TYPES, ReflectionStatus, ThoughtType
from reasoning_structures.models.reflection import (
    ChainReflection,
    format_distribution,
    type_histogram,
)
from reasoning_structures.models.thought import ChainStep
from reasoning_structures.utils.validation import require_text, validate_thought_type

logger = structlog.get_logger(__name__)

MIN_STEPS_FOR_DEPTH = 2


class ChainOfThoughts:
    """An ordered sequence of uniquely identified reasoning steps.

    Steps keep their insertion order. Ids must be unique across the whole
    chain; a rejected step is never inserted.

    Examples:
        >>> chain = ChainOfThoughts()
        >>> step, suggestions = chain.add_step("s1", "find the bug", "analysis")
        >>> step.step_number
        1
        >>> chain.reflect().total_steps
        1
    """

    node_types = LINEAR_THOUGHT_TYPES

    def __init__(self) -> None:
        self._steps: list[ChainStep] = []
        self._ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._ids

    @property
    def steps(self) -> list[ChainStep]:
        """Steps in insertion order."""
        return list(self._steps)

    def get_step(self, step_id: str) -> ChainStep | None:
        """Return the step with ``step_id``, if any."""
        if step_id not in self._ids:
            return None
        return next(step for step in self._steps if step.id == step_id)

    def add_step(
        self,
        step_id: str,
        content: str,
        step_type: ThoughtType | str | None,
    ) -> tuple[ChainStep, list[str]]:
        """Append a step to the chain.

        Args:
            step_id: Caller-supplied id, unique within the chain
            content: Step content (non-empty)
            step_type: One of analysis, reasoning, task, validation

        Returns:
            The new step and its follow-up suggestions

        Raises:
            MissingFieldError: If the id or content is empty
            InvalidTypeError: If the type is not a chain step type
            DuplicateIdError: If a step with this id already exists
        """
        require_text(step_id, "Step ID")
        require_text(content, "Step content")
        resolved_type = validate_thought_type(step_type, self.node_types)
        if step_id in self._ids:
            raise DuplicateIdError(step_id)

        step = ChainStep(
            id=step_id,
            content=content,
            type=resolved_type,
            step_number=len(self._steps) + 1,
        )
        self._steps.append(step)
        self._ids.add(step_id)

        logger.debug(
            "chain_step_added",
            step_id=step_id,
            step_type=str(resolved_type),
            step_number=step.step_number,
        )
        return step, step.generate_suggestions()

    def reflect(self, user_note: str | None = None) -> ChainReflection:
        """Analyse the chain and suggest improvements.

        Args:
            user_note: Optional free-text note echoed in the report

        Returns:
            A ChainReflection; its status is EMPTY when there are no steps
        """
        if not self._steps:
            return ChainReflection(
                status=ReflectionStatus.EMPTY,
                total_steps=0,
                insights=["No steps to analyze"],
                improvements=["Add reasoning steps to begin analysis"],
                user_note=user_note,
            )

        distribution = type_histogram([step.type for step in self._steps])
        insights = [f"Step distribution: {format_distribution(distribution)}"]
        improvements: list[str] = []

        has_analysis = ThoughtType.ANALYSIS in distribution
        has_reasoning = ThoughtType.REASONING in distribution
        has_tasks = ThoughtType.TASK in distribution

        if has_analysis and has_reasoning and has_tasks:
            insights.append("Good logical progression from analysis to implementation")
        else:
            if not has_analysis:
                improvements.append("Consider adding analysis steps to explore the problem")
            if not has_reasoning:
                improvements.append("Consider adding reasoning steps for logical deduction")
            if not has_tasks:
                improvements.append("Consider adding task steps for actionable implementation")

        if ThoughtType.VALIDATION not in distribution:
            improvements.append("Add validation steps to verify reasoning")

        if len(self._steps) < MIN_STEPS_FOR_DEPTH:
            improvements.append(
                "Consider adding more analysis steps to explore the problem further"
            )

        return ChainReflection(
            total_steps=len(self._steps),
            type_distribution=distribution,
            insights=insights,
            improvements=improvements,
            user_note=user_note,
        )


__all__ = ["ChainOfThoughts"]
