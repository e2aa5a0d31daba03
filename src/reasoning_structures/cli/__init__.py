"""Command-line interface for reasoning-structures."""

from reasoning_structures.cli.main import app, main

__all__ = ["app", "main"]
