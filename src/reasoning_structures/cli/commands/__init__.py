"""CLI commands for reasoning-structures.

This package contains the command implementations for the CLI.
"""

from reasoning_structures.cli.commands.inspect import (
    describe_graph,
    inspect_snapshot,
    load_snapshot,
    reflect_snapshot,
)

__all__ = ["describe_graph", "inspect_snapshot", "load_snapshot", "reflect_snapshot"]
