"""
Tests for the graph engine in reasoning_structures.engines.graph.

This module covers:
- Node and edge insertion with id, type and endpoint validation
- Cycle detection and topological sorting
- Single-hop score propagation and node merging
- Snapshot serialization and atomic deserialization
- Reflection heuristics
"""

import pytest
from pydantic import ValidationError

from reasoning_structures.engines.graph import (
    MERGE_EDGE_TYPE,
    PROPAGATION_INFLUENCE,
    GraphOfThoughts,
)
from reasoning_structures.exceptions import (
    DuplicateIdError,
    HasCycleError,
    InvalidTypeError,
    MissingFieldError,
    MissingNodeError,
    SelfLoopError,
)
from reasoning_structures.models.core import ReflectionStatus, ThoughtType


class TestAddNode:
    """Tests for GraphOfThoughts.add_node()."""

    def test_generated_ids(self, graph: GraphOfThoughts):
        assert graph.add_node("a") == "node_1"
        assert graph.add_node("b") == "node_2"

    def test_generated_ids_skip_caller_ids(self, graph: GraphOfThoughts):
        graph.add_node("a", node_id="node_1")
        assert graph.add_node("b") == "node_2"

    def test_caller_id_and_type(self, graph: GraphOfThoughts):
        node_id = graph.add_node("merge ideas", node_id="s", node_type="synthesis")

        node = graph.get_node(node_id)
        assert node_id == "s"
        assert node.type is ThoughtType.SYNTHESIS

    def test_duplicate_id_rejected(self, graph: GraphOfThoughts):
        graph.add_node("a", node_id="x")
        with pytest.raises(DuplicateIdError):
            graph.add_node("b", node_id="x")
        assert graph.get_node("x").content == "a"
        assert len(graph) == 1

    def test_invalid_type_rejected(self, graph: GraphOfThoughts):
        with pytest.raises(InvalidTypeError):
            graph.add_node("a", node_type="musing")
        assert len(graph) == 0

    def test_empty_content_rejected(self, graph: GraphOfThoughts):
        with pytest.raises(MissingFieldError):
            graph.add_node("")

    def test_get_node_missing(self, graph: GraphOfThoughts):
        with pytest.raises(MissingNodeError):
            graph.get_node("nope")

    def test_nodes_view_is_read_only(self, graph: GraphOfThoughts):
        graph.add_node("a")
        with pytest.raises(TypeError):
            graph.nodes["x"] = None  # type: ignore[index]


class TestAddEdge:
    """Tests for GraphOfThoughts.add_edge()."""

    def test_defaults(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")

        edge = graph.add_edge(a, b)

        assert edge.type == "depends_on"
        assert edge.weight == 1.0
        assert graph.successors(a) == [b]
        assert graph.predecessors(b) == [a]
        assert graph.edge_count == 1

    def test_replaces_existing_pair(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.add_edge(a, b)
        graph.add_edge(a, b, weight=0.2, edge_type="supports")

        assert graph.edge_count == 1
        assert graph.get_edge(a, b).type == "supports"
        assert graph.predecessors(b) == [a]

    def test_self_loop_rejected(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        with pytest.raises(SelfLoopError):
            graph.add_edge(a, a)
        assert graph.edge_count == 0

    def test_self_loop_on_unknown_node_reports_self_loop(self, graph: GraphOfThoughts):
        with pytest.raises(SelfLoopError):
            graph.add_edge("ghost", "ghost")

    def test_missing_endpoints(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        with pytest.raises(MissingNodeError, match="Source node 'ghost'"):
            graph.add_edge("ghost", a)
        with pytest.raises(MissingNodeError, match="Target node 'ghost'"):
            graph.add_edge(a, "ghost")
        assert graph.edge_count == 0


class TestCycles:
    """Tests for has_cycle() and topological_sort()."""

    def test_empty_graph(self, graph: GraphOfThoughts):
        assert not graph.has_cycle()
        assert graph.topological_sort() == []

    def test_diamond_order(self, diamond_graph: GraphOfThoughts):
        order = diamond_graph.topological_sort()

        assert order[0] == "a"
        assert order[-1] == "d"
        assert set(order) == {"a", "b", "c", "d"}
        for edge in diamond_graph.edges():
            assert order.index(edge.source) < order.index(edge.target)

    def test_cycle_detected(self, cyclic_graph: GraphOfThoughts):
        assert cyclic_graph.has_cycle()
        with pytest.raises(HasCycleError):
            cyclic_graph.topological_sort()

    def test_cycle_in_disconnected_component(self, diamond_graph: GraphOfThoughts):
        diamond_graph.add_node("x", node_id="x")
        diamond_graph.add_node("y", node_id="y")
        diamond_graph.add_edge("x", "y")
        assert not diamond_graph.has_cycle()

        diamond_graph.add_edge("y", "x")
        assert diamond_graph.has_cycle()

    def test_two_node_cycle(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.add_edge(a, b)
        graph.add_edge(b, a)
        assert graph.has_cycle()

    def test_long_chain_is_not_recursive(self, graph: GraphOfThoughts):
        ids = [graph.add_node(f"n{i}") for i in range(3000)]
        for source, target in zip(ids, ids[1:]):
            graph.add_edge(source, target)

        assert not graph.has_cycle()
        assert graph.topological_sort() == ids


class TestScores:
    """Tests for set_score() and propagate_scores()."""

    def test_set_score(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        node = graph.set_score(a, score=0.8, confidence=0.6)
        assert (node.score, node.confidence) == (0.8, 0.6)

    def test_propagation_is_single_hop(self, diamond_graph: GraphOfThoughts):
        diamond_graph.set_score("a", score=1.0)

        updated = diamond_graph.propagate_scores("a")

        assert sorted(updated) == ["b", "c"]
        assert diamond_graph.get_node("b").score == pytest.approx(PROPAGATION_INFLUENCE)
        assert diamond_graph.get_node("c").score == pytest.approx(0.3)
        assert diamond_graph.get_node("d").score == 0.0

    def test_propagation_accumulates(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.add_edge(a, b)
        graph.set_score(a, score=0.5)
        graph.set_score(b, score=0.2)

        graph.propagate_scores(a)
        graph.propagate_scores(a)

        assert graph.get_node(b).score == pytest.approx(0.5)

    def test_propagation_ignores_edge_weight(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.add_edge(a, b, weight=0.1)
        graph.set_score(a, score=1.0)

        graph.propagate_scores(a)

        assert graph.get_node(b).score == pytest.approx(0.3)

    def test_propagation_without_successors(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        assert graph.propagate_scores(a) == []

    def test_propagation_missing_node(self, graph: GraphOfThoughts):
        with pytest.raises(MissingNodeError):
            graph.propagate_scores("ghost")


class TestMergeNodes:
    """Tests for GraphOfThoughts.merge_nodes()."""

    def test_merge_scores_are_means(self, graph: GraphOfThoughts):
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.set_score(a, score=0.8, confidence=0.6)
        graph.set_score(b, score=0.4, confidence=0.2)

        merged = graph.merge_nodes([a, b], "combined")

        node = graph.get_node(merged)
        assert node.type is ThoughtType.SYNTHESIS
        assert node.score == pytest.approx(0.6)
        assert node.confidence == pytest.approx(0.4)
        assert sorted(graph.predecessors(merged)) == [a, b]
        assert graph.get_edge(a, merged).type == MERGE_EDGE_TYPE
        assert graph.get_edge(a, merged).weight == 1.0

    def test_merge_single_source(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        graph.set_score(a, score=0.9)

        merged = graph.merge_nodes([a], "restated", merged_id="m")

        assert merged == "m"
        assert graph.get_node("m").score == pytest.approx(0.9)

    def test_repeated_source_weighs_each_occurrence(self, graph: GraphOfThoughts):
        """A repeated id counts in the mean but gets a single edge."""
        a, b = graph.add_node("a"), graph.add_node("b")
        graph.set_score(a, score=1.0, confidence=0.9)
        graph.set_score(b, score=0.0, confidence=0.0)

        merged = graph.merge_nodes([a, a, b], "combined")

        node = graph.get_node(merged)
        assert node.score == pytest.approx(2 / 3)
        assert node.confidence == pytest.approx(0.6)
        assert graph.edge_count == 2
        assert sorted(graph.predecessors(merged)) == [a, b]

    def test_merge_with_missing_source_is_atomic(self, graph: GraphOfThoughts):
        a = graph.add_node("a")

        with pytest.raises(MissingNodeError, match="Source node 'ghost'"):
            graph.merge_nodes([a, "ghost"], "combined")

        assert len(graph) == 1
        assert graph.edge_count == 0

    def test_merge_requires_sources(self, graph: GraphOfThoughts):
        with pytest.raises(MissingFieldError):
            graph.merge_nodes([], "combined")

    def test_merge_duplicate_merged_id(self, graph: GraphOfThoughts):
        a = graph.add_node("a")
        with pytest.raises(DuplicateIdError):
            graph.merge_nodes([a], "combined", merged_id=a)
        assert len(graph) == 1


class TestSerialization:
    """Tests for serialize(), deserialize() and from_snapshot()."""

    def test_round_trip(self, diamond_graph: GraphOfThoughts):
        diamond_graph.set_score("a", score=0.7, confidence=0.5)

        restored = GraphOfThoughts.from_snapshot(diamond_graph.serialize())

        assert restored.serialize() == diamond_graph.serialize()
        assert restored.topological_sort() == diamond_graph.topological_sort()
        assert restored.get_edge("a", "c").weight == 0.5

    def test_snapshot_is_independent(self, diamond_graph: GraphOfThoughts):
        data = diamond_graph.serialize()
        diamond_graph.add_node("e", node_id="e")

        assert "e" not in data["nodes"]

    def test_timestamps_are_strings(self, diamond_graph: GraphOfThoughts):
        data = diamond_graph.serialize()
        assert isinstance(data["nodes"]["a"]["created_at"], str)

    def test_restored_graph_generates_fresh_ids(self, graph: GraphOfThoughts):
        graph.add_node("a")
        graph.add_node("b")

        restored = GraphOfThoughts.from_snapshot(graph.serialize())

        assert restored.add_node("c") == "node_3"

    def test_corrupt_edge_leaves_graph_untouched(self, diamond_graph: GraphOfThoughts):
        data = diamond_graph.serialize()
        data["edges"].append({"source": "a", "target": "ghost"})
        target = GraphOfThoughts()
        target.add_node("keep me", node_id="k")

        with pytest.raises(MissingNodeError):
            target.deserialize(data)

        assert list(target.nodes) == ["k"]

    def test_self_loop_in_snapshot_rejected(self, diamond_graph: GraphOfThoughts):
        data = diamond_graph.serialize()
        data["edges"].append({"source": "a", "target": "a"})
        with pytest.raises(SelfLoopError):
            GraphOfThoughts.from_snapshot(data)

    def test_malformed_snapshot(self):
        with pytest.raises(ValidationError):
            GraphOfThoughts.from_snapshot({"nodes": {"a": {"content": "x"}}, "edges": []})

    def test_cyclic_snapshot_loads(self, cyclic_graph: GraphOfThoughts):
        restored = GraphOfThoughts.from_snapshot(cyclic_graph.serialize())
        assert restored.has_cycle()


class TestReflect:
    """Tests for GraphOfThoughts.reflect()."""

    def test_empty_graph(self, graph: GraphOfThoughts):
        report = graph.reflect()

        assert report.status == ReflectionStatus.EMPTY
        assert report.insights == ["No nodes to analyze"]

    def test_unconnected_nodes(self, graph: GraphOfThoughts):
        graph.add_node("a")
        graph.add_node("b")

        report = graph.reflect()

        assert report.insights[0] == "Growing reasoning graph with 2 nodes"
        assert "2 disconnected reasoning clusters" in report.insights
        assert (
            "Connect related nodes to show dependencies and relationships" in report.improvements
        )
        assert report.cluster_count == 2

    def test_complex_graph(self, graph: GraphOfThoughts):
        for i in range(11):
            graph.add_node(f"n{i}")
        report = graph.reflect()
        assert report.insights[0] == "Complex reasoning graph with 11 interconnected nodes"

    def test_cyclic_graph(self, cyclic_graph: GraphOfThoughts):
        report = cyclic_graph.reflect("loop")

        assert report.has_cycle
        assert report.total_edges == 3
        assert report.user_note == "loop"
        assert "Graph contains cycles; topological ordering is unavailable" in report.insights

    def test_complete_type_mix(self, diamond_graph: GraphOfThoughts):
        diamond_graph.add_node("check", node_id="v", node_type="validation")
        diamond_graph.add_edge("d", "v")
        diamond_graph.merge_nodes(["b", "c"], "combined")

        report = diamond_graph.reflect()

        assert report.improvements == []
        assert report.cluster_count == 1
        assert report.type_distribution["synthesis"] == 1
