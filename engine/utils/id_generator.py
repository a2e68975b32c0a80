"""
ID generation utilities for players.

Ids are small sequential integers handed out in roster order. Each roster
gets its own generator, so a reset never shares a counter with an earlier
session.
"""

import itertools
from typing import Iterator


class IDGenerator:
    """
    Generates unique, sequential IDs for players.

    This is a simple wrapper around itertools.count that makes
    testing easier and provides a clear contract.
    """

    def __init__(self, start: int = 0):
        """
        Initialize the ID generator.

        Args:
            start: The first ID to generate (default: 0)
        """
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self) -> int:
        """Generate the next unique ID."""
        return next(self._counter)
