# core/history_store.py

from typing import List

from pony.orm import db_session, desc

from data.models import HistoryEntry


class HistoryStore:
    """
    Persists submitted lines in the profile database so the next session's
    history starts where this one ended. Call core.db.init_db() first.
    """

    @db_session
    def load(self, limit: int = 0) -> List[str]:
        """The most recent `limit` lines (all when 0), oldest first."""
        query = HistoryEntry.select().order_by(desc(HistoryEntry.id))
        records = query[:limit] if limit else query[:]
        return [rec.line for rec in list(records)[::-1]]

    @db_session
    def append(self, line: str) -> None:
        HistoryEntry(line=line)

    @db_session
    def count(self) -> int:
        return HistoryEntry.select().count()

    @db_session
    def clear(self) -> None:
        HistoryEntry.select().delete(bulk=True)
