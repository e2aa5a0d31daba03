"""Chain of thoughts tool: ``add_step`` and ``reflect`` actions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reasoning_structures.engines.chain import ChainOfThoughts
from reasoning_structures.models.tools import ToolOutput
from reasoning_structures.tools.base import ActionHandler, AgentTool
from reasoning_structures.tools.formatting import ARROW, render_reflection, type_label


class ChainOfThoughtsTool(AgentTool[ChainOfThoughts]):
    """Sequential reasoning over a ChainOfThoughts.

    Examples:
        >>> tool = ChainOfThoughtsTool(ChainOfThoughts())
        >>> out = tool.handle(
        ...     {"action": "add_step", "step_type": "analysis", "content": "find the bug"}
        ... )
        >>> out.payload["step_id"]
        'step_1'
    """

    name = "chain_of_thoughts"
    required_fields = {
        "add_step": ("content", "step_type"),
    }
    text_fields = ("step_id", "step_type")

    @property
    def actions(self) -> Mapping[str, ActionHandler]:
        return {"add_step": self.add_step, "reflect": self.reflect}

    def trace(self) -> str:
        """Render the most recent steps as ``#n type`` joined by arrows."""
        recent = self.engine.steps[-self.settings.reflection_recent_steps :]
        return f" {ARROW} ".join(f"#{step.step_number} {step.type}" for step in recent)

    def _next_step_id(self) -> str:
        number = len(self.engine) + 1
        while f"step_{number}" in self.engine:
            number += 1
        return f"step_{number}"

    def add_step(self, args: Mapping[str, Any]) -> ToolOutput:
        step_id = args.get("step_id") or self._next_step_id()
        step, suggestions = self.engine.add_step(step_id, args["content"], args["step_type"])
        return ToolOutput.success(
            f"{type_label(step.type)}: {step.content}\nTrace: {self.trace()}",
            step_id=step.id,
            step_number=step.step_number,
            suggestions=suggestions,
        )

    def reflect(self, args: Mapping[str, Any]) -> ToolOutput:
        report = self.engine.reflect(args.get("content") or None)
        extra = [] if report.is_empty else [f"Trace: {self.trace()}"]
        text = render_reflection(report, extra)
        payload = report.model_dump(mode="json")
        if report.is_empty:
            return ToolOutput.empty(text, report=payload)
        return ToolOutput.success(text, report=payload)


__all__ = ["ChainOfThoughtsTool"]
