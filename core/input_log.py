# core/input_log.py

import threading
from typing import List, Optional, Tuple

from core.errors import ParseFailure


class UserInputLog:
    """
    Every line the user submitted, in order. Worker threads can block on
    `next_line()` until the UI thread records a new one.

    Never call the blocking readers from the UI thread: the line they wait
    for is recorded on that same thread.
    """

    def __init__(self):
        self._lines: List[str] = []
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._lines)

    def append(self, line: str) -> None:
        with self._cond:
            self._lines.append(line)
            self._cond.notify_all()

    def snapshot(self) -> Tuple[str, ...]:
        with self._cond:
            return tuple(self._lines)

    def next_line(self, timeout: Optional[float] = None) -> Optional[str]:
        """The first line submitted after this call, or None on timeout."""
        with self._cond:
            seen = len(self._lines)
            if not self._cond.wait_for(lambda: len(self._lines) > seen, timeout):
                return None
            return self._lines[seen]

    def next_int(self, timeout: Optional[float] = None) -> Optional[int]:
        """Like next_line, parsed as an integer. Raises ParseFailure otherwise."""
        line = self.next_line(timeout)
        if line is None:
            return None
        try:
            return int(line.strip())
        except ValueError as e:
            raise ParseFailure(f"not an integer: {line!r}") from e
