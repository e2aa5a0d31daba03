"""Tree of thoughts tool: branching exploration below a root problem."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reasoning_structures.engines.tree import ROOT_ALIAS, TreeOfThoughts
from reasoning_structures.models.tools import ToolOutput
from reasoning_structures.tools.base import ActionHandler, AgentTool
from reasoning_structures.tools.formatting import (
    bullet_list,
    render_path,
    render_reflection,
    type_label,
)


class TreeOfThoughtsTool(AgentTool[TreeOfThoughts]):
    """Branching exploration over a TreeOfThoughts.

    ``add_thought`` attaches to the root unless ``parent_id`` names another
    node, and defaults the type to ``analysis``.
    """

    name = "tree_of_thoughts"
    required_fields = {
        "add_thought": ("content",),
        "get_path": ("node_id",),
        "get_siblings": ("node_id",),
    }
    text_fields = ("parent_id", "node_id", "node_type")

    @property
    def actions(self) -> Mapping[str, ActionHandler]:
        return {
            "add_thought": self.add_thought,
            "get_path": self.get_path,
            "get_siblings": self.get_siblings,
            "reflect": self.reflect,
        }

    def add_thought(self, args: Mapping[str, Any]) -> ToolOutput:
        node, suggestions = self.engine.add_thought(
            args.get("parent_id") or ROOT_ALIAS,
            args["content"],
            args.get("node_type"),
        )
        text = "\n".join(
            [
                f"**Added {type_label(node.type)} node:** {node.content}",
                "",
                "**Suggested next steps:**",
                *suggestions,
                "",
                f"**Node ID:** {node.id} (for adding child thoughts)",
            ]
        )
        return ToolOutput.success(
            text,
            node_id=node.id,
            parent_id=node.parent_id,
            depth=node.depth,
            suggestions=suggestions,
        )

    def _node_id(self, args: Mapping[str, Any]) -> str:
        node_id = args["node_id"]
        return self.engine.root.id if node_id == ROOT_ALIAS else node_id

    def get_path(self, args: Mapping[str, Any]) -> ToolOutput:
        path = self.engine.get_path(self._node_id(args))
        return ToolOutput.success(
            f"Path: {render_path(path)}",
            path=[node.id for node in path],
        )

    def get_siblings(self, args: Mapping[str, Any]) -> ToolOutput:
        siblings = self.engine.get_siblings(self._node_id(args))
        if siblings:
            text = "\n".join(
                ["Siblings:", *bullet_list(f"[{n.type}] {n.content} ({n.id})" for n in siblings)]
            )
        else:
            text = "No siblings"
        return ToolOutput.success(text, siblings=[node.id for node in siblings])

    def reflect(self, args: Mapping[str, Any]) -> ToolOutput:
        report = self.engine.reflect(args.get("content") or None)
        text = render_reflection(report, [f"Problem: {self.engine.root.content}"])
        payload = report.model_dump(mode="json")
        if report.is_empty:
            return ToolOutput.empty(text, report=payload)
        return ToolOutput.success(text, report=payload)


__all__ = ["TreeOfThoughtsTool"]
