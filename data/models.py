# data/models.py

from datetime import datetime, timezone

from pony.orm import Optional, Required

from core.db import db


class Migration(db.Entity):
    """
    Tracks which migration scripts have been applied.
    """
    filename = Required(str, unique=True)
    applied = Required(datetime, default=lambda: datetime.now(timezone.utc))


class HistoryEntry(db.Entity):
    """
    One submitted console line. Empty lines are kept, like in the in-memory history.
    """
    line = Optional(str)
    submitted = Required(datetime, default=lambda: datetime.now(timezone.utc))
