"""Tree of thoughts: a rooted, depth-annotated hierarchy of reasoning nodes."""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from reasoning_structures.engines.ids import CompositeIdGenerator, CounterIdGenerator
from reasoning_structures.exceptions import MissingNodeError, ParentNotFoundError
from reasoning_structures.models.core import LINEAR_THOUGHT_TYPES, ReflectionStatus, ThoughtType
from reasoning_structures.models.reflection import (
    BranchInfo,
    TreeReflection,
    format_distribution,
    type_histogram,
)
from reasoning_structures.models.thought import TreeNode
from reasoning_structures.utils.validation import require_text, validate_thought_type

logger = structlog.get_logger(__name__)

ROOT_ALIAS = "root"
DEFAULT_PROBLEM = "Initial Problem"
MIN_EXPLORATION_DEPTH = 2
MIN_BRANCHES = 2


class TreeOfThoughts:
    """A rooted tree of typed thoughts.

    The root is created with the engine, typed ``analysis`` and holding the
    problem statement. Every other node hangs below it; a node's depth is its
    parent's depth plus one.

    Examples:
        >>> tree = TreeOfThoughts("Fix login bug")
        >>> first, _ = tree.add_thought("root", "check token expiry", "analysis")
        >>> second, _ = tree.add_thought(first.id, "write test", "validation")
        >>> first.depth, second.depth
        (1, 2)
        >>> report = tree.reflect()
        >>> report.max_depth, report.leaf_nodes
        (2, 1)
    """

    node_types = LINEAR_THOUGHT_TYPES

    def __init__(
        self,
        problem: str | None = None,
        id_generator: CompositeIdGenerator | CounterIdGenerator | None = None,
    ) -> None:
        """Create a tree whose root holds ``problem``.

        Args:
            problem: Problem statement stored as the root content
            id_generator: Source of node ids; defaults to timestamp+random ids
        """
        self._ids = id_generator or CompositeIdGenerator()
        self._nodes: dict[str, TreeNode] = {}
        self.root = TreeNode(
            id=self._ids.next(),
            content=problem or DEFAULT_PROBLEM,
            type=ThoughtType.ANALYSIS,
            depth=0,
        )
        self._nodes[self.root.id] = self.root

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def walk(self) -> Iterator[TreeNode]:
        """Yield every node depth-first, children in insertion order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self._nodes[child_id] for child_id in reversed(node.children_ids))

    def find_node(self, node_id: str) -> TreeNode | None:
        """Return the node with ``node_id``, or None if the tree has no such node.

        Node ids are unique per tree, so the first depth-first match is the
        node registered under that id.
        """
        return self._nodes.get(node_id)

    def add_thought(
        self,
        parent_id: str | None,
        content: str,
        node_type: ThoughtType | str | None = None,
    ) -> tuple[TreeNode, list[str]]:
        """Add a thought below ``parent_id``.

        Args:
            parent_id: Parent node id; None or ``"root"`` attaches to the root
            content: Thought content (non-empty)
            node_type: One of analysis, reasoning, task, validation
                (defaults to analysis)

        Returns:
            The new node and its follow-up suggestions

        Raises:
            MissingFieldError: If content is empty
            InvalidTypeError: If the type is not a tree node type
            ParentNotFoundError: If the parent id does not exist
        """
        require_text(content, "Thought content")
        resolved_type = validate_thought_type(node_type, self.node_types)
        parent = self._resolve_parent(parent_id)

        node = TreeNode(
            id=self._ids.next(taken=self.__contains__),
            content=content,
            type=resolved_type,
            parent_id=parent.id,
            depth=parent.depth + 1,
        )
        self._nodes[node.id] = node
        parent.children_ids.append(node.id)

        logger.debug(
            "tree_thought_added",
            node_id=node.id,
            parent_id=parent.id,
            node_type=str(resolved_type),
            depth=node.depth,
        )
        return node, node.generate_suggestions()

    def get_path(self, node: TreeNode | str) -> list[TreeNode]:
        """Return the nodes from the root down to ``node`` (inclusive).

        Raises:
            MissingNodeError: If the node does not belong to this tree
        """
        current: TreeNode | None = self._require(node)
        path: list[TreeNode] = []
        while current is not None:
            path.append(current)
            current = self._nodes.get(current.parent_id) if current.parent_id else None
        path.reverse()
        return path

    def get_siblings(self, node: TreeNode | str) -> list[TreeNode]:
        """Return the other children of ``node``'s parent; empty for the root.

        Raises:
            MissingNodeError: If the node does not belong to this tree
        """
        target = self._require(node)
        if target.parent_id is None:
            return []
        parent = self._nodes[target.parent_id]
        return [self._nodes[cid] for cid in parent.children_ids if cid != target.id]

    def reflect(self, user_note: str | None = None) -> TreeReflection:
        """Analyse the tree in a single depth-first traversal.

        Args:
            user_note: Optional free-text note echoed in the report

        Returns:
            A TreeReflection; its status is EMPTY while only the root exists
        """
        total_nodes = 0
        max_depth = 0
        leaf_nodes = 0
        types: list[ThoughtType] = []
        branches: list[BranchInfo] = []

        for node in self.walk():
            total_nodes += 1
            max_depth = max(max_depth, node.depth)
            types.append(node.type)
            if node.is_leaf:
                leaf_nodes += 1
                if node.depth > 0:
                    branches.append(
                        BranchInfo(
                            node_id=node.id,
                            depth=node.depth,
                            type=str(node.type),
                            content_length=len(node.content),
                        )
                    )

        distribution = type_histogram(types)
        explored = total_nodes - 1

        if explored == 0:
            return TreeReflection(
                status=ReflectionStatus.EMPTY,
                total_nodes=total_nodes,
                explored_nodes=0,
                max_depth=0,
                leaf_nodes=leaf_nodes,
                type_distribution=distribution,
                insights=["No thoughts explored yet"],
                improvements=["Add thoughts below the root to begin exploring"],
                user_note=user_note,
            )

        insights = [f"Explored {explored} different thoughts across {max_depth} depth levels"]
        if leaf_nodes > 1:
            insights.append(f"{leaf_nodes} exploration branches created")
        explored_distribution = type_histogram(types[1:])
        insights.append(f"Node types: {format_distribution(explored_distribution)}")

        improvements: list[str] = []
        if max_depth < MIN_EXPLORATION_DEPTH:
            improvements.append("Consider deeper exploration of promising ideas")
        if leaf_nodes < MIN_BRANCHES:
            improvements.append("Try exploring alternative approaches or solutions")
        if ThoughtType.VALIDATION not in distribution:
            improvements.append("Add validation thoughts to test your reasoning")
        if ThoughtType.TASK not in distribution:
            improvements.append("Include concrete task nodes for implementation steps")

        return TreeReflection(
            total_nodes=total_nodes,
            explored_nodes=explored,
            max_depth=max_depth,
            leaf_nodes=leaf_nodes,
            type_distribution=distribution,
            branches=branches,
            insights=insights,
            improvements=improvements,
            user_note=user_note,
        )

    def _resolve_parent(self, parent_id: str | None) -> TreeNode:
        if parent_id is None or parent_id == ROOT_ALIAS:
            return self.root
        parent = self.find_node(parent_id)
        if parent is None:
            raise ParentNotFoundError(parent_id)
        return parent

    def _require(self, node: TreeNode | str) -> TreeNode:
        node_id = node.id if isinstance(node, TreeNode) else node
        found = self._nodes.get(node_id)
        if found is None or (isinstance(node, TreeNode) and found is not node):
            raise MissingNodeError(node_id)
        return found


__all__ = ["DEFAULT_PROBLEM", "ROOT_ALIAS", "TreeOfThoughts"]
