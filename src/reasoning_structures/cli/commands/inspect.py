"""CLI commands that examine serialized graph snapshots.

Snapshots are loaded through ``GraphOfThoughts.from_snapshot`` so a corrupt
file is rejected by the same validation the engine applies to live edges.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from reasoning_structures.engines.graph import GraphOfThoughts
from reasoning_structures.exceptions import HasCycleError, ReasoningStructureError
from reasoning_structures.tools.formatting import ARROW, render_reflection
from reasoning_structures.utils.graph_utils import ThoughtGraphNetworkX

if TYPE_CHECKING:
    from reasoning_structures.cli.main import CLIContext

console = Console()


def load_snapshot(path: Path) -> GraphOfThoughts:
    """Read a JSON snapshot and rebuild the graph.

    Raises:
        typer.Exit: With code 1 if the file is missing, unreadable or invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        typer.echo(f"Error: Cannot read snapshot {path}: {e}", err=True)
        raise typer.Exit(1) from e
    except UnicodeDecodeError as e:
        typer.echo(f"Error: Snapshot {path} is not valid UTF-8: {e.reason}", err=True)
        raise typer.Exit(1) from e
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Snapshot {path} is not valid JSON: {e}", err=True)
        raise typer.Exit(1) from e

    try:
        return GraphOfThoughts.from_snapshot(data)
    except ValidationError as e:
        typer.echo(f"Error: Malformed snapshot {path}: {e.error_count()} invalid field(s)", err=True)
        raise typer.Exit(1) from e
    except ReasoningStructureError as e:
        typer.echo(f"Error: Corrupt snapshot {path}: {e.message}", err=True)
        raise typer.Exit(1) from e


def describe_graph(graph: GraphOfThoughts, top_k: int = 5) -> dict[str, Any]:
    """Collect the facts shown by ``inspect``.

    Returns:
        Dictionary with stats, cycle status, topological order (None when
        cyclic), clusters, critical nodes and NetworkX metrics
    """
    adapter = ThoughtGraphNetworkX(graph)
    try:
        order: list[str] | None = graph.topological_sort()
    except HasCycleError:
        order = None

    return {
        **graph.get_stats(),
        "has_cycle": order is None,
        "topological_order": order,
        "clusters": [sorted(cluster) for cluster in adapter.get_reasoning_clusters()],
        "critical_nodes": [
            {"node_id": node_id, "betweenness": score}
            for node_id, score in adapter.get_critical_nodes(top_k=top_k)
        ],
        "metrics": adapter.get_graph_metrics(),
    }


def format_graph_table(path: Path, facts: dict[str, Any]) -> None:
    """Print the inspection facts as a two-column table."""
    table = Table(title=f"Graph: {path.name}", show_header=True, header_style="bold")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Nodes", str(facts["total_nodes"]))
    table.add_row("Edges", str(facts["total_edges"]))
    table.add_row("Has Cycle", "yes" if facts["has_cycle"] else "no")
    order = facts["topological_order"]
    table.add_row("Topological Order", "cyclic" if order is None else f" {ARROW} ".join(order))
    table.add_row("Clusters", str(len(facts["clusters"])))
    table.add_row("Density", f"{facts['metrics']['density']:.3f}")
    critical = ", ".join(
        f"{entry['node_id']} ({entry['betweenness']:.2f})" for entry in facts["critical_nodes"]
    )
    table.add_row("Critical Nodes", critical or "-")

    console.print(table)


def inspect_snapshot(
    ctx: CLIContext,
    path: Path,
    *,
    as_json: bool = False,
    top_k: int = 5,
) -> None:
    """Implementation of ``reasoning-structures inspect``."""
    graph = load_snapshot(path)
    facts = describe_graph(graph, top_k=top_k)
    ctx.logger.debug("Inspected %s: %d nodes", path, facts["total_nodes"])

    if as_json:
        typer.echo(json.dumps(facts, indent=2))
    else:
        format_graph_table(path, facts)


def reflect_snapshot(ctx: CLIContext, path: Path, *, note: str | None = None) -> None:
    """Implementation of ``reasoning-structures reflect``."""
    graph = load_snapshot(path)
    report = graph.reflect(note)
    ctx.logger.debug("Reflected on %s: status=%s", path, report.status)
    typer.echo(render_reflection(report))


__all__ = [
    "describe_graph",
    "format_graph_table",
    "inspect_snapshot",
    "load_snapshot",
    "reflect_snapshot",
]
