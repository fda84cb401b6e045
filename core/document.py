# core/document.py

import logging
from typing import Iterable, List, Optional

from core.colors import Color
from core.errors import DocError, InvalidOffset
from core.escape_decoder import Run

log = logging.getLogger(__name__)


class ConsoleDocument:
    """
    Character store split by a single commit boundary, the *limit*.

    Text in [0, limit) is committed console output and can never be edited
    or recoloured. Text in [limit, length) is the user's input line. The
    caret is kept inside [limit, length] by every operation here; motions
    requested from outside are clamped.

    Destructive edits return None on success or a DocError when refused
    (a refused edit is a logged no-op).
    """

    def __init__(self):
        self._text = ""
        self._colors: List[Optional[Color]] = []
        self._limit = 0
        self._caret = 0

    # ─── Read Access ──────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._text)

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def text(self) -> str:
        return self._text

    def get_text(self, offset: int, length: int) -> str:
        """Characters in [offset, offset + length); raises InvalidOffset when out of range."""
        if offset < 0 or length < 0 or offset + length > len(self._text):
            raise InvalidOffset(offset, length)
        return self._text[offset:offset + length]

    def color_at(self, offset: int) -> Optional[Color]:
        if not 0 <= offset < len(self._text):
            raise InvalidOffset(offset)
        return self._colors[offset]

    def user_input(self) -> str:
        return self._text[self._limit:]

    def committed_text(self) -> str:
        return self._text[:self._limit]

    def runs(self, start: int = 0, end: Optional[int] = None) -> List[Run]:
        """Maximal same-colour runs covering [start, end)."""
        end = len(self._text) if end is None else end
        if not 0 <= start <= end <= len(self._text):
            raise InvalidOffset(start, end - start)

        runs: List[Run] = []
        run_start = start
        for i in range(start + 1, end + 1):
            if i == end or self._colors[i] != self._colors[run_start]:
                runs.append(Run(self._colors[run_start], self._text[run_start:i]))
                run_start = i
        return runs

    # ─── Appending ────────────────────────────────────────────────

    def append_committed(self, runs: Iterable[Run]) -> None:
        """Append runs at the end and commit everything up to the new end."""
        for run in runs:
            self._append(run.text, run.color)
        self._limit = len(self._text)
        self._caret = self._limit

    def insert_committed(self, runs: Iterable[Run]) -> int:
        """
        Insert runs at the limit, ahead of any input, and commit them.
        Returns the offset they were inserted at.
        """
        offset = self._limit
        for run in runs:
            pos = self._limit
            self._text = self._text[:pos] + run.text + self._text[pos:]
            self._colors[pos:pos] = [run.color] * len(run.text)
            self._limit += len(run.text)
            if self._caret >= pos:
                self._caret += len(run.text)
        return offset

    def append_input(self, text: str, color: Optional[Color] = None) -> None:
        """Append to the user input region; the limit stays where it is."""
        self._append(text, color)
        self._caret = len(self._text)

    def replace_input(self, text: str, color: Optional[Color] = None) -> None:
        self._truncate(self._limit)
        self.append_input(text, color)

    def commit_input(self) -> str:
        """Promote the current input region to committed text; returns it."""
        line = self.user_input()
        self._limit = len(self._text)
        self._caret = self._limit
        return line

    # ─── Editing ──────────────────────────────────────────────────

    def insert_at_caret(self, text: str, color: Optional[Color] = None) -> None:
        self.make_caret_valid()
        pos = self._caret
        self._text = self._text[:pos] + text + self._text[pos:]
        self._colors[pos:pos] = [color] * len(text)
        self._caret = pos + len(text)

    def remove(self, offset: int, length: int) -> Optional[DocError]:
        """Delete [offset, offset + length). Refused below the limit or past the end."""
        if offset < self._limit or length < 0 or offset + length > len(self._text):
            log.warning(
                "Refusing to remove %d chars at %d (limit %d, length %d)",
                length, offset, self._limit, len(self._text)
            )
            return DocError.INVALID_OFFSET

        self._text = self._text[:offset] + self._text[offset + length:]
        del self._colors[offset:offset + length]
        if self._caret > offset + length:
            self._caret -= length
        elif self._caret > offset:
            self._caret = offset
        return None

    def delete_before_caret(self, n: int = 1) -> Optional[DocError]:
        """
        Delete up to `n` characters ending at the caret. The part that would
        reach below the limit is silently dropped.
        """
        self.make_caret_valid()
        start = max(self._limit, self._caret - n)
        if start == self._caret:
            return None
        return self.remove(start, self._caret - start)

    def delete_after_caret(self, n: int = 1) -> Optional[DocError]:
        self.make_caret_valid()
        count = min(n, len(self._text) - self._caret)
        if count <= 0:
            return None
        return self.remove(self._caret, count)

    def clear(self) -> None:
        """Discard everything; the limit and caret return to 0."""
        self._text = ""
        self._colors = []
        self._limit = 0
        self._caret = 0

    # ─── Caret Guard ──────────────────────────────────────────────

    def move_caret(self, offset: int) -> int:
        """Place the caret, clamped into [limit, length]. Returns the final offset."""
        self._caret = min(max(offset, self._limit), len(self._text))
        return self._caret

    def is_caret_valid(self) -> bool:
        return self._limit <= self._caret <= len(self._text)

    def make_caret_valid(self) -> int:
        return self.move_caret(self._caret)

    # ─── Internals ────────────────────────────────────────────────

    def _append(self, text: str, color: Optional[Color]) -> None:
        self._text += text
        self._colors.extend([color] * len(text))

    def _truncate(self, offset: int) -> None:
        self._text = self._text[:offset]
        del self._colors[offset:]
        self._caret = min(self._caret, offset)
