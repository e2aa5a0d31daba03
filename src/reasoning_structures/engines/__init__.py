"""Reasoning-structure engines.

This package provides the three in-memory engines a reasoning session can be
organised as: a linear chain, a rooted tree and a directed graph. Engines are
synchronous and single-threaded; callers serialize access per instance.
"""

from reasoning_structures.engines.chain import ChainOfThoughts
from reasoning_structures.engines.graph import PROPAGATION_INFLUENCE, GraphOfThoughts
from reasoning_structures.engines.ids import CompositeIdGenerator, CounterIdGenerator
from reasoning_structures.engines.tree import ROOT_ALIAS, TreeOfThoughts

__all__ = [
    "ChainOfThoughts",
    "CompositeIdGenerator",
    "CounterIdGenerator",
    "GraphOfThoughts",
    "PROPAGATION_INFLUENCE",
    "ROOT_ALIAS",
    "TreeOfThoughts",
]
