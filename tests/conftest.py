"""
Pytest configuration and shared fixtures for reasoning-structures tests.

This module provides:
- Settings isolation so environment variables never leak between tests
- Empty and pre-populated chain, tree and graph engines
- Serialized graph snapshots written to temporary files for CLI tests
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from reasoning_structures import config
from reasoning_structures.config import Settings
from reasoning_structures.engines import ChainOfThoughts, GraphOfThoughts, TreeOfThoughts


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    """Reset the global settings instance around every test."""
    monkeypatch.setattr(config, "_settings", None)
    yield
    config._settings = None


@pytest.fixture
def settings() -> Settings:
    """Provide settings that ignore any local .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


# ============================================================================
# ENGINE FIXTURES
# ============================================================================


@pytest.fixture
def chain() -> ChainOfThoughts:
    """Provide an empty chain."""
    return ChainOfThoughts()


@pytest.fixture
def tree() -> TreeOfThoughts:
    """Provide a tree rooted at the login-bug problem."""
    return TreeOfThoughts("Fix login bug")


@pytest.fixture
def graph() -> GraphOfThoughts:
    """Provide an empty graph."""
    return GraphOfThoughts()


@pytest.fixture
def diamond_graph() -> GraphOfThoughts:
    """Provide an acyclic graph a -> b, a -> c, b -> d, c -> d."""
    g = GraphOfThoughts()
    for node_id, node_type in (
        ("a", "analysis"),
        ("b", "reasoning"),
        ("c", "reasoning"),
        ("d", "task"),
    ):
        g.add_node(f"content of {node_id}", node_id=node_id, node_type=node_type)
    g.add_edge("a", "b")
    g.add_edge("a", "c", weight=0.5, edge_type="supports")
    g.add_edge("b", "d")
    g.add_edge("c", "d")
    return g


@pytest.fixture
def cyclic_graph() -> GraphOfThoughts:
    """Provide the three-node cycle a -> b -> c -> a."""
    g = GraphOfThoughts()
    for node_id in ("a", "b", "c"):
        g.add_node(f"content of {node_id}", node_id=node_id)
    g.add_edge("a", "b")
    g.add_edge("b", "c")
    g.add_edge("c", "a")
    return g


# ============================================================================
# SNAPSHOT FIXTURES
# ============================================================================


def write_snapshot(path: Path, data: Any) -> Path:
    """Write ``data`` as JSON to ``path`` and return the path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def diamond_snapshot_file(tmp_path: Path, diamond_graph: GraphOfThoughts) -> Path:
    """Provide a JSON file holding the serialized diamond graph."""
    return write_snapshot(tmp_path / "diamond.json", diamond_graph.serialize())


@pytest.fixture
def cyclic_snapshot_file(tmp_path: Path, cyclic_graph: GraphOfThoughts) -> Path:
    """Provide a JSON file holding the serialized cyclic graph."""
    return write_snapshot(tmp_path / "cyclic.json", cyclic_graph.serialize())
