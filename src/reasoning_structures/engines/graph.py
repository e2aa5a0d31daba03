"""Graph of thoughts: a directed graph of nodes linked by weighted, typed edges.

Cycles are allowed as data. Operations that need an ordering
(``topological_sort``) refuse to run on a cyclic graph rather than returning a
partial result.

Score propagation is single-hop: ``propagate_scores`` forwards a
fixed fraction of one node's score to its direct successors and nothing more.
Callers who want cascading effects invoke it repeatedly, typically in
topological order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Mapping
from statistics import fmean
from types import MappingProxyType
from typing import Any

import structlog

from reasoning_structures.engines.ids import CounterIdGenerator
from reasoning_structures.exceptions import (
    DuplicateIdError,
    HasCycleError,
    MissingFieldError,
    MissingNodeError,
    SelfLoopError,
    TopologyInvariantError,
)
from reasoning_structures.models.core import GRAPH_THOUGHT_TYPES, ReflectionStatus, ThoughtType
from reasoning_structures.models.reflection import (
    GraphReflection,
    format_distribution,
    type_histogram,
)
from reasoning_structures.models.snapshot import EdgeSnapshot, GraphSnapshot, NodeSnapshot
from reasoning_structures.models.thought import ThoughtEdge, ThoughtNode
from reasoning_structures.utils.graph_utils import ThoughtGraphNetworkX
from reasoning_structures.utils.validation import require_text, validate_thought_type

logger = structlog.get_logger(__name__)

PROPAGATION_INFLUENCE = 0.3
"""Fraction of a node's score added to each direct successor."""

DEFAULT_EDGE_TYPE = "depends_on"
MERGE_EDGE_TYPE = "contributes_to"
MERGE_EDGE_WEIGHT = 1.0
COMPLEX_GRAPH_THRESHOLD = 10


class GraphOfThoughts:
    """A directed graph of thoughts.

    Edges are stored twice, in a forward map ``source -> {target -> edge}``
    and a reverse map ``target -> {source -> edge}``. Both maps are updated
    together on every insertion, so successors and predecessors are O(1)
    lookups. Nodes and edges are never removed.

    Examples:
        >>> graph = GraphOfThoughts()
        >>> a = graph.add_node("token expiry unchecked")
        >>> b = graph.add_node("add expiry check", node_type="task")
        >>> edge = graph.add_edge(a, b)
        >>> graph.topological_sort()
        ['node_1', 'node_2']
        >>> graph.get_node(a).set_score(score=1.0)
        >>> graph.propagate_scores(a)
        ['node_2']
        >>> graph.get_node(b).score
        0.3
    """

    node_types = GRAPH_THOUGHT_TYPES

    def __init__(self, id_generator: CounterIdGenerator | None = None) -> None:
        self._ids = id_generator or CounterIdGenerator()
        self._nodes: dict[str, ThoughtNode] = {}
        self._edges: dict[str, dict[str, ThoughtEdge]] = {}
        self._reverse_edges: dict[str, dict[str, ThoughtEdge]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def nodes(self) -> Mapping[str, ThoughtNode]:
        """Read-only view of the node map."""
        return MappingProxyType(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._edges.values())

    def edges(self) -> Iterator[ThoughtEdge]:
        """Yield every edge in forward-adjacency order."""
        for targets in self._edges.values():
            yield from targets.values()

    def get_node(self, node_id: str) -> ThoughtNode:
        """Return the node with ``node_id``.

        Raises:
            MissingNodeError: If no such node exists
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise MissingNodeError(node_id)
        return node

    def get_edge(self, source: str, target: str) -> ThoughtEdge | None:
        return self._edges.get(source, {}).get(target)

    def successors(self, node_id: str) -> list[str]:
        return list(self._edges.get(node_id, {}))

    def predecessors(self, node_id: str) -> list[str]:
        return list(self._reverse_edges.get(node_id, {}))

    def add_node(
        self,
        content: str,
        node_id: str | None = None,
        node_type: ThoughtType | str | None = None,
    ) -> str:
        """Add a node and return its id.

        Args:
            content: Node content (non-empty)
            node_id: Caller-supplied id; generated as ``node_<n>`` when omitted
            node_type: Any thought type, synthesis included (defaults to analysis)

        Raises:
            MissingFieldError: If content or a supplied id is empty
            InvalidTypeError: If the type is unknown
            DuplicateIdError: If ``node_id`` is already in use
        """
        require_text(content, "Node content")
        resolved_type = validate_thought_type(node_type, self.node_types)
        if node_id is not None:
            require_text(node_id, "Node ID")
            if node_id in self._nodes:
                raise DuplicateIdError(node_id)
        else:
            node_id = self._ids.next(taken=self.__contains__)

        self._nodes[node_id] = ThoughtNode(id=node_id, content=content, type=resolved_type)
        logger.debug("graph_node_added", node_id=node_id, node_type=str(resolved_type))
        return node_id

    def add_edge(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_type: str = DEFAULT_EDGE_TYPE,
    ) -> ThoughtEdge:
        """Add a directed edge, replacing any existing edge for the same pair.

        Raises:
            MissingNodeError: If either endpoint does not exist
            SelfLoopError: If source and target are the same node
        """
        self._check_edge(source, target)
        edge = ThoughtEdge(source=source, target=target, weight=weight, type=edge_type)
        self._insert_edge(edge)
        logger.debug(
            "graph_edge_added",
            source=source,
            target=target,
            weight=weight,
            edge_type=edge_type,
        )
        return edge

    def set_score(
        self,
        node_id: str,
        score: float | None = None,
        confidence: float | None = None,
    ) -> ThoughtNode:
        """Update a node's score and/or confidence.

        Raises:
            MissingNodeError: If no such node exists
        """
        node = self.get_node(node_id)
        node.set_score(score=score, confidence=confidence)
        return node

    def has_cycle(self) -> bool:
        """Return True if any directed cycle exists.

        Three-color depth-first search started from every unvisited node, so
        disconnected components are covered. Iterative to avoid recursion
        limits on long chains.
        """
        visited: set[str] = set()
        on_stack: set[str] = set()

        for start in self._nodes:
            if start in visited:
                continue
            visited.add(start)
            on_stack.add(start)
            stack: list[tuple[str, Iterator[str]]] = [(start, iter(self._edges.get(start, {})))]
            while stack:
                node_id, successors = stack[-1]
                for successor in successors:
                    if successor in on_stack:
                        return True
                    if successor not in visited:
                        visited.add(successor)
                        on_stack.add(successor)
                        stack.append((successor, iter(self._edges.get(successor, {}))))
                        break
                else:
                    on_stack.discard(node_id)
                    stack.pop()
        return False

    def topological_sort(self) -> list[str]:
        """Order all node ids so every edge points forward (Kahn's algorithm).

        Raises:
            HasCycleError: If the graph contains a cycle
            TopologyInvariantError: If the ordering misses nodes of an acyclic graph
        """
        if self.has_cycle():
            raise HasCycleError()

        in_degree = {node_id: 0 for node_id in self._nodes}
        for targets in self._edges.values():
            for target in targets:
                in_degree[target] += 1

        queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
        order: list[str] = []
        while queue:
            node_id = queue.popleft()
            order.append(node_id)
            for successor in self._edges.get(node_id, {}):
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    queue.append(successor)

        if len(order) != len(self._nodes):
            raise TopologyInvariantError(len(order), len(self._nodes))
        return order

    def propagate_scores(self, node_id: str) -> list[str]:
        """Add ``score * PROPAGATION_INFLUENCE`` to each direct successor.

        Returns:
            IDs of the successors that were updated

        Raises:
            MissingNodeError: If no such node exists
        """
        node = self.get_node(node_id)
        increment = node.score * PROPAGATION_INFLUENCE
        updated = self.successors(node_id)
        for successor_id in updated:
            successor = self._nodes[successor_id]
            successor.set_score(score=successor.score + increment)

        logger.debug(
            "graph_scores_propagated",
            node_id=node_id,
            increment=increment,
            successors=len(updated),
        )
        return updated

    def merge_nodes(
        self,
        source_ids: Iterable[str],
        merged_content: str,
        merged_id: str | None = None,
    ) -> str:
        """Create a synthesis node from existing nodes.

        The new node's score and confidence are the unweighted means over
        ``source_ids`` as given, so a repeated id counts once per occurrence.
        Each distinct source gets one ``contributes_to`` edge to the new node.
        Every input is validated before anything is created.

        Args:
            source_ids: IDs of the nodes to merge (at least one)
            merged_content: Content of the new node
            merged_id: Caller-supplied id for the new node

        Returns:
            ID of the new node

        Raises:
            MissingFieldError: If no sources are given or content is empty
            MissingNodeError: If any source does not exist
            DuplicateIdError: If ``merged_id`` is already in use
        """
        given = list(source_ids)
        sources = list(dict.fromkeys(given))
        if not sources:
            raise MissingFieldError("source_nodes", "merge_nodes")
        require_text(merged_content, "Merged content")
        for source_id in sources:
            if source_id not in self._nodes:
                raise MissingNodeError(source_id, role="Source")
        if merged_id is not None:
            require_text(merged_id, "Merged node ID")
            if merged_id in self._nodes:
                raise DuplicateIdError(merged_id)

        nodes = [self._nodes[source_id] for source_id in given]
        new_id = self.add_node(merged_content, merged_id, ThoughtType.SYNTHESIS)
        self._nodes[new_id].set_score(
            score=fmean(node.score for node in nodes),
            confidence=fmean(node.confidence for node in nodes),
        )
        for source_id in sources:
            self._insert_edge(
                ThoughtEdge(
                    source=source_id,
                    target=new_id,
                    weight=MERGE_EDGE_WEIGHT,
                    type=MERGE_EDGE_TYPE,
                )
            )

        logger.debug("graph_nodes_merged", merged_id=new_id, sources=sources)
        return new_id

    def get_stats(self) -> dict[str, int]:
        return {"total_nodes": len(self._nodes), "total_edges": self.edge_count}

    def snapshot(self) -> GraphSnapshot:
        """Return a deep, engine-independent copy of the graph."""
        return GraphSnapshot(
            nodes={
                node_id: NodeSnapshot.model_validate(node.model_dump())
                for node_id, node in self._nodes.items()
            },
            edges=[EdgeSnapshot.model_validate(edge.model_dump()) for edge in self.edges()],
        )

    def serialize(self) -> dict[str, Any]:
        """Return the graph as JSON-safe nested dicts and lists.

        Timestamps are ISO-8601 strings. Pass the result to ``deserialize``
        or ``from_snapshot`` to rebuild an equivalent graph.
        """
        return self.snapshot().model_dump(mode="json")

    def deserialize(self, data: GraphSnapshot | Mapping[str, Any]) -> None:
        """Replace this graph's contents with a serialized snapshot.

        Edges are replayed through ``add_edge`` validation on a scratch graph;
        the receiving graph is only touched once the whole snapshot is valid.

        Raises:
            pydantic.ValidationError: If the snapshot is malformed
            MissingNodeError: If an edge references an unknown node
            SelfLoopError: If an edge connects a node to itself
        """
        snapshot = data if isinstance(data, GraphSnapshot) else GraphSnapshot.model_validate(data)
        staged = GraphOfThoughts()
        for node_id, node in snapshot.nodes.items():
            staged._nodes[node_id] = ThoughtNode.model_validate(
                {**node.model_dump(), "id": node_id}
            )
        for edge in snapshot.edges:
            staged._check_edge(edge.source, edge.target)
            staged._insert_edge(ThoughtEdge.model_validate(edge.model_dump(exclude_none=True)))

        self._nodes = staged._nodes
        self._edges = staged._edges
        self._reverse_edges = staged._reverse_edges
        logger.debug("graph_deserialized", **self.get_stats())

    @classmethod
    def from_snapshot(
        cls,
        data: GraphSnapshot | Mapping[str, Any],
        id_generator: CounterIdGenerator | None = None,
    ) -> GraphOfThoughts:
        """Build a new graph from a serialized snapshot."""
        graph = cls(id_generator=id_generator)
        graph.deserialize(data)
        return graph

    def reflect(self, user_note: str | None = None) -> GraphReflection:
        """Summarise the graph's size, type mix and connectivity.

        Args:
            user_note: Optional free-text note echoed in the report
        """
        total_nodes = len(self._nodes)
        if total_nodes == 0:
            return GraphReflection(
                status=ReflectionStatus.EMPTY,
                insights=["No nodes to analyze"],
                improvements=["Start by adding analysis nodes to explore the problem space"],
                user_note=user_note,
            )

        total_edges = self.edge_count
        distribution = type_histogram([node.type for node in self._nodes.values()])
        cyclic = self.has_cycle()
        cluster_count = len(ThoughtGraphNetworkX(self).get_reasoning_clusters())

        insights: list[str] = []
        if total_nodes > COMPLEX_GRAPH_THRESHOLD:
            insights.append(f"Complex reasoning graph with {total_nodes} interconnected nodes")
        else:
            insights.append(f"Growing reasoning graph with {total_nodes} nodes")
        insights.append(f"Node types: {format_distribution(distribution)}")
        if cyclic:
            insights.append("Graph contains cycles; topological ordering is unavailable")
        if cluster_count > 1:
            insights.append(f"{cluster_count} disconnected reasoning clusters")

        improvements: list[str] = []
        if ThoughtType.VALIDATION not in distribution:
            improvements.append("Add validation nodes to test your reasoning")
        if ThoughtType.SYNTHESIS not in distribution:
            improvements.append("Consider synthesis nodes to create new ideas or knowledge")
        if total_edges == 0 and total_nodes > 1:
            improvements.append("Connect related nodes to show dependencies and relationships")

        return GraphReflection(
            total_nodes=total_nodes,
            total_edges=total_edges,
            has_cycle=cyclic,
            cluster_count=cluster_count,
            type_distribution=distribution,
            insights=insights,
            improvements=improvements,
            user_note=user_note,
        )

    def _check_edge(self, source: str, target: str) -> None:
        if source == target:
            raise SelfLoopError(source)
        if source not in self._nodes:
            raise MissingNodeError(source, role="Source")
        if target not in self._nodes:
            raise MissingNodeError(target, role="Target")

    def _insert_edge(self, edge: ThoughtEdge) -> None:
        self._edges.setdefault(edge.source, {})[edge.target] = edge
        self._reverse_edges.setdefault(edge.target, {})[edge.source] = edge


__all__ = [
    "DEFAULT_EDGE_TYPE",
    "MERGE_EDGE_TYPE",
    "PROPAGATION_INFLUENCE",
    "GraphOfThoughts",
]
