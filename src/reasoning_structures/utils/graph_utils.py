"""NetworkX adapter for GraphOfThoughts analysis.

This module provides a NetworkX-backed view of a GraphOfThoughts for analyses
the engine does not implement itself: cycle enumeration, reasoning clusters,
centrality and aggregate graph metrics. The engine's own cycle detection and
topological sort remain authoritative; the adapter is read-only.

Example:
    >>> from reasoning_structures.utils.graph_utils import ThoughtGraphNetworkX
    >>> adapter = ThoughtGraphNetworkX(graph)
    >>> is_dag = adapter.is_valid_dag()
    >>> critical = adapter.get_critical_nodes(top_k=5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import networkx as nx

from reasoning_structures.logging import get_logger

if TYPE_CHECKING:
    from reasoning_structures.engines.graph import GraphOfThoughts

logger = get_logger(__name__)


class ThoughtGraphNetworkX:
    """NetworkX-backed analysis for GraphOfThoughts.

    The adapter lazily builds an ``nx.DiGraph`` on first access and caches it.
    Call invalidate_cache() after mutating the underlying graph.

    Examples:
        Find critical thoughts:
        >>> adapter = ThoughtGraphNetworkX(graph)
        >>> for node_id, score in adapter.get_critical_nodes(top_k=3):
        ...     print(f"{node_id}: {score:.3f}")

        Count independent lines of reasoning:
        >>> len(adapter.get_reasoning_clusters())
        2
    """

    def __init__(self, graph: GraphOfThoughts):
        """Initialize the NetworkX adapter.

        Args:
            graph: The GraphOfThoughts to analyze
        """
        self.graph = graph
        self._nx_graph: nx.DiGraph | None = None

    def invalidate_cache(self) -> None:
        """Invalidate the cached NetworkX graph."""
        self._nx_graph = None

    @property
    def nx_graph(self) -> nx.DiGraph:
        """Get or build the NetworkX DiGraph."""
        if self._nx_graph is None:
            self._nx_graph = self._build_nx_graph()
        return self._nx_graph

    def _build_nx_graph(self) -> nx.DiGraph:
        G = nx.DiGraph()

        for node_id, node in self.graph.nodes.items():
            G.add_node(
                node_id,
                content=node.content[:100],
                type=str(node.type),
                score=node.score,
                confidence=node.confidence,
            )

        for edge in self.graph.edges():
            G.add_edge(edge.source, edge.target, type=edge.type, weight=edge.weight)

        return G

    # ==================== DAG Validation ====================

    def is_valid_dag(self) -> bool:
        """Check if the graph is a valid Directed Acyclic Graph.

        Returns:
            True if the graph is a DAG, False if cycles exist
        """
        return cast("bool", nx.is_directed_acyclic_graph(self.nx_graph))

    def find_cycles(self) -> list[list[str]]:
        """Find all elementary cycles in the graph.

        Returns:
            List of cycles, each a list of node IDs (empty for a DAG)
        """
        return [list(cycle) for cycle in nx.simple_cycles(self.nx_graph)]

    # ==================== Centrality Analysis ====================

    def get_critical_nodes(self, top_k: int = 5) -> list[tuple[str, float]]:
        """Find the most critical nodes by betweenness centrality.

        High betweenness marks "bridge" thoughts that connect otherwise
        separate parts of the reasoning.

        Args:
            top_k: Number of top nodes to return

        Returns:
            List of (node_id, centrality_score) tuples, sorted by score descending
        """
        if self.nx_graph.number_of_nodes() == 0:
            return []
        centrality = nx.betweenness_centrality(self.nx_graph)
        sorted_nodes = sorted(centrality.items(), key=lambda x: x[1], reverse=True)
        return sorted_nodes[:top_k]

    # ==================== Component Analysis ====================

    def get_reasoning_clusters(self) -> list[set[str]]:
        """Find weakly connected components (reasoning clusters).

        Returns:
            List of components, largest first, each a set of node IDs
        """
        clusters = list(nx.weakly_connected_components(self.nx_graph))
        return sorted(clusters, key=len, reverse=True)

    # ==================== Graph Metrics ====================

    def get_graph_metrics(self) -> dict[str, Any]:
        """Get aggregate graph metrics.

        Returns:
            Dictionary containing:
            - nodes: Number of nodes
            - edges: Number of edges
            - density: Graph density (0-1)
            - is_dag: Whether graph is a DAG
            - connected_components: Number of weakly connected components
            - avg_out_degree: Average outgoing edges per node
            - sources: Nodes with no incoming edges
            - sinks: Nodes with no outgoing edges
        """
        G = self.nx_graph
        out_degrees = [d for _, d in G.out_degree()]
        avg_out_degree = sum(out_degrees) / len(out_degrees) if out_degrees else 0.0

        metrics = {
            "nodes": G.number_of_nodes(),
            "edges": G.number_of_edges(),
            "density": nx.density(G) if G.number_of_nodes() > 1 else 0.0,
            "is_dag": nx.is_directed_acyclic_graph(G),
            "connected_components": nx.number_weakly_connected_components(G)
            if G.number_of_nodes() > 0
            else 0,
            "avg_out_degree": avg_out_degree,
            "sources": [n for n, d in G.in_degree() if d == 0],
            "sinks": [n for n, d in G.out_degree() if d == 0],
        }
        logger.debug("Computed graph metrics: %d nodes, %d edges", metrics["nodes"], metrics["edges"])
        return metrics


__all__ = ["ThoughtGraphNetworkX"]
