# core/db.py

import logging
from pathlib import Path
from typing import Union

from pony.orm import Database

log = logging.getLogger(__name__)

db = Database()

MIGRATION_DIR = Path(__file__).parent.parent / "data/migrations"


def init_db(db_path: Union[Path, str]):
    """
    1) Bind Pony to the SQLite file (create if needed); ":memory:" is accepted.
    2) Generate mapping once, skipping strict schema checks.
    3) Run pending migrations.

    Pony can only bind a Database once per process, so later calls just run
    any new migrations.
    """
    # Lazy-import so the entities register on `db` before mapping
    import data.models  # noqa: F401

    if db.provider is None:
        filename = str(db_path) if str(db_path) == ":memory:" else str(Path(db_path).resolve())
        db.bind(provider="sqlite", filename=filename, create_db=True)
        db.generate_mapping(create_tables=True, check_tables=False)

    run_migrations()


def run_migrations():
    """
    Runs any scripts in data/migrations/*.py that have yet to be applied.
    Tracks applied filenames in the Migration table.
    """
    from pony.orm import db_session
    from data.models import Migration

    with db_session:
        applied = {m.filename for m in Migration.select()}

        for path in sorted(MIGRATION_DIR.glob("*.py")):
            if path.name in applied:
                continue

            code = compile(path.read_text(), path.name, "exec")
            scope = {}
            exec(code, scope)
            apply_fn = scope.get("apply")
            if callable(apply_fn):
                log.info("Applying migration: %s", path.name)
                apply_fn(db)
                Migration(filename=path.name)
