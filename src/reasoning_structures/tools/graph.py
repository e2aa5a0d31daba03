"""Graph of thoughts tool: nodes, typed edges, merges, scores and ordering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter

from reasoning_structures.engines.graph import DEFAULT_EDGE_TYPE, GraphOfThoughts
from reasoning_structures.exceptions import MissingNodeError, SelfLoopError
from reasoning_structures.models.tools import ToolOutput
from reasoning_structures.tools.base import ActionHandler, AgentTool
from reasoning_structures.tools.formatting import ARROW, render_reflection, type_label

_optional_float = TypeAdapter(float | None)
_id_list = TypeAdapter(list[str])


def _ids(value: Any) -> list[str]:
    """Accept a single id or a list of ids."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return _id_list.validate_python(value)


class GraphOfThoughtsTool(AgentTool[GraphOfThoughts]):
    """Graph-structured reasoning over a GraphOfThoughts.

    Examples:
        >>> tool = GraphOfThoughtsTool(GraphOfThoughts())
        >>> a = tool.handle({"action": "add_node", "content": "token expiry unchecked"})
        >>> b = tool.handle(
        ...     {"action": "add_node", "content": "add check", "node_type": "task"}
        ... )
        >>> tool.handle({"action": "add_edge", "source": "node_1", "target": "node_2"}).status
        <ToolStatus.SUCCESS: 'success'>
    """

    name = "graph_of_thoughts"
    required_fields = {
        "add_node": ("content",),
        "add_edge": ("source", "target"),
        "merge_nodes": ("source_nodes", "merged_content"),
        "set_score": ("node_id",),
        "propagate_scores": ("node_id",),
        "deserialize": ("snapshot",),
    }
    text_fields = ("node_id", "node_type", "source", "target", "edge_type", "merged_id")

    @property
    def actions(self) -> Mapping[str, ActionHandler]:
        return {
            "add_node": self.add_node,
            "add_edge": self.add_edge,
            "merge_nodes": self.merge_nodes,
            "set_score": self.set_score,
            "propagate_scores": self.propagate_scores,
            "topological_sort": self.topological_sort,
            "reflect": self.reflect,
            "serialize": self.serialize,
            "deserialize": self.deserialize,
        }

    def add_node(self, args: Mapping[str, Any]) -> ToolOutput:
        """Add a node, optionally connecting it to existing nodes.

        Every ``connect_to`` target is checked before the node is created, so
        a bad target leaves the graph untouched. Edges run from the new node
        to each target.
        """
        targets = _ids(args.get("connect_to"))
        requested_id = args.get("node_id") or None
        for target in targets:
            if target == requested_id:
                raise SelfLoopError(target)
            if target not in self.engine:
                raise MissingNodeError(target, role="Target")

        node_id = self.engine.add_node(args["content"], requested_id, args.get("node_type"))
        for target in targets:
            self.engine.add_edge(node_id, target)

        node = self.engine.get_node(node_id)
        text = f"{type_label(node.type)}: {node.content}\nNode ID: {node_id} (connect using connect_to)"
        if targets:
            text += f"\nConnected to: {', '.join(targets)}"
        return ToolOutput.success(
            text,
            node_id=node_id,
            connected_to=targets,
            suggestions=node.generate_suggestions(),
        )

    def add_edge(self, args: Mapping[str, Any]) -> ToolOutput:
        weight = _optional_float.validate_python(args.get("weight"))
        edge = self.engine.add_edge(
            args["source"],
            args["target"],
            weight=1.0 if weight is None else weight,
            edge_type=args.get("edge_type") or DEFAULT_EDGE_TYPE,
        )
        return ToolOutput.success(
            f"Connected {edge.source} {ARROW} {edge.target} ({edge.type}, weight {edge.weight:g})",
            source=edge.source,
            target=edge.target,
            weight=edge.weight,
            edge_type=edge.type,
        )

    def merge_nodes(self, args: Mapping[str, Any]) -> ToolOutput:
        sources = _ids(args["source_nodes"])
        merged_id = self.engine.merge_nodes(
            sources,
            args["merged_content"],
            args.get("merged_id") or None,
        )
        merged = self.engine.get_node(merged_id)
        return ToolOutput.success(
            f"Merged {', '.join(sources)} into {merged_id}: {merged.content}\n"
            f"Score: {merged.score:.2f}, confidence: {merged.confidence:.2f}",
            node_id=merged_id,
            sources=sources,
            score=merged.score,
            confidence=merged.confidence,
        )

    def set_score(self, args: Mapping[str, Any]) -> ToolOutput:
        score = _optional_float.validate_python(args.get("score"))
        confidence = _optional_float.validate_python(args.get("confidence"))
        node = self.engine.set_score(args["node_id"], score=score, confidence=confidence)
        return ToolOutput.success(
            f"Updated {node.id}: score={node.score:.2f}, confidence={node.confidence:.2f}",
            node_id=node.id,
            score=node.score,
            confidence=node.confidence,
        )

    def propagate_scores(self, args: Mapping[str, Any]) -> ToolOutput:
        updated = self.engine.propagate_scores(args["node_id"])
        if updated:
            text = f"Propagated score from {args['node_id']} to {', '.join(updated)}"
        else:
            text = f"{args['node_id']} has no successors; nothing to propagate"
        return ToolOutput.success(text, node_id=args["node_id"], updated=updated)

    def topological_sort(self, args: Mapping[str, Any]) -> ToolOutput:
        order = self.engine.topological_sort()
        return ToolOutput.success(
            f"Topological order: {f' {ARROW} '.join(order)}" if order else "Graph is empty",
            order=order,
        )

    def reflect(self, args: Mapping[str, Any]) -> ToolOutput:
        report = self.engine.reflect(args.get("content") or None)
        text = render_reflection(report)
        payload = report.model_dump(mode="json")
        if report.is_empty:
            return ToolOutput.empty(text, report=payload)
        return ToolOutput.success(text, report=payload)

    def serialize(self, args: Mapping[str, Any]) -> ToolOutput:
        snapshot = self.engine.serialize()
        stats = self.engine.get_stats()
        return ToolOutput.success(
            f"Serialized graph with {stats['total_nodes']} nodes and {stats['total_edges']} edges",
            snapshot=snapshot,
        )

    def deserialize(self, args: Mapping[str, Any]) -> ToolOutput:
        self.engine.deserialize(args["snapshot"])
        stats = self.engine.get_stats()
        return ToolOutput.success(
            f"Loaded graph with {stats['total_nodes']} nodes and {stats['total_edges']} edges",
            **stats,
        )


__all__ = ["GraphOfThoughtsTool"]
