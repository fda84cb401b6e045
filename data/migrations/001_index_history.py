# data/migrations/001_index_history.py

def apply(db):
    db.execute("""
        CREATE INDEX IF NOT EXISTS idx_historyentry_submitted
        ON HistoryEntry (submitted)
    """)
