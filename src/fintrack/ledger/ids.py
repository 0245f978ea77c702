#!/usr/bin/env python3
"""
Record Identifier Generation

Ids are millisecond timestamps rendered as strings. Two records created in
the same millisecond get consecutive values, and an id already present in the
book is never handed out again.
"""

import time
from collections.abc import Callable, Container


class IdGenerator:
    """Monotonic millisecond-timestamp id source."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def next_id(self, taken: Container[str] = ()) -> str:
        """
        Produce a new id.

        Args:
            taken: Ids already in use; the result is guaranteed not to be one

        Returns:
            String of an integer millisecond timestamp
        """
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)
