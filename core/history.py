# core/history.py

from typing import Iterable, Optional, Tuple


class CommandHistory:
    """
    Submitted lines (oldest first) plus a browsing cursor.

    cursor == len(entries) means "not browsing"; anything lower means the
    input line currently shows entries[cursor]. The scratch slot keeps what
    the user had typed before the first Up of a browsing episode.
    """

    def __init__(self, entries: Iterable[str] = (), max_entries: int = 0):
        self.max_entries = max_entries
        self._entries: list[str] = []
        self._scratch = ""
        for line in entries:
            self._append(line)
        self._cursor = len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def scratch(self) -> str:
        return self._scratch

    @property
    def browsing(self) -> bool:
        return self._cursor < len(self._entries)

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    # ─── Navigation ───────────────────────────────────────────────

    def submit(self, line: str) -> None:
        """Record a line (duplicates and empty lines included) and stop browsing."""
        self._append(line)
        self._cursor = len(self._entries)
        self._scratch = ""

    def older(self, current_input: str) -> Optional[str]:
        """
        Step to the previous entry and return it, or None when already at
        the oldest one.
        """
        if self._cursor <= 0:
            self._cursor = 0
            return None
        if self._cursor >= len(self._entries):
            self._scratch = current_input
        self._cursor -= 1
        return self._entries[self._cursor]

    def newer(self) -> Optional[str]:
        """
        Step to the next entry and return it (the scratch line once past the
        newest), or None when not browsing.
        """
        if self._cursor >= len(self._entries):
            return None
        self._cursor += 1
        if self._cursor == len(self._entries):
            return self._scratch
        return self._entries[self._cursor]

    def reset_navigation(self) -> None:
        self._cursor = len(self._entries)

    def _append(self, line: str) -> None:
        self._entries.append(line)
        if self.max_entries and len(self._entries) > self.max_entries:
            del self._entries[:len(self._entries) - self.max_entries]
