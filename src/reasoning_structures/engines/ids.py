"""Node id generation.

Each engine owns its own generator, so ids are monotonic within one engine
instance and there is no process-wide counter to reset between sessions.
Generators skip any id the engine reports as taken, which keeps generated ids
from colliding with caller-supplied ones.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable


class CounterIdGenerator:
    """Generates ``<prefix>_1``, ``<prefix>_2``, ... for one engine.

    Examples:
        >>> ids = CounterIdGenerator("node")
        >>> ids.next(), ids.next()
        ('node_1', 'node_2')
        >>> ids.next(taken=lambda candidate: candidate == "node_3")
        'node_4'
    """

    def __init__(self, prefix: str = "node") -> None:
        self.prefix = prefix
        self._counter = 0

    @property
    def counter(self) -> int:
        """Number of ids drawn so far, skipped ones included."""
        return self._counter

    def next(self, taken: Callable[[str], bool] | None = None) -> str:
        """Return the next unused id.

        Args:
            taken: Predicate reporting whether a candidate is already in use
        """
        while True:
            self._counter += 1
            candidate = f"{self.prefix}_{self._counter}"
            if taken is None or not taken(candidate):
                return candidate

    def reset(self) -> None:
        """Restart numbering from 1."""
        self._counter = 0


class CompositeIdGenerator:
    """Generates ``<prefix>_<unix-seconds>_<random 4 digits>`` ids.

    Used by tree engines, whose nodes are created interactively and benefit
    from ids that sort roughly by creation time.
    """

    def __init__(
        self,
        prefix: str = "node",
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.prefix = prefix
        self._rng = rng or random.Random()
        self._clock = clock

    def next(self, taken: Callable[[str], bool] | None = None) -> str:
        """Return a fresh id, retrying on collision."""
        while True:
            candidate = f"{self.prefix}_{int(self._clock())}_{self._rng.randint(1000, 9999)}"
            if taken is None or not taken(candidate):
                return candidate


__all__ = ["CompositeIdGenerator", "CounterIdGenerator"]
