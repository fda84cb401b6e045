# core/utils.py

from pathlib import Path

from core.config import HISTORY_DB_NAME
from core.settings import SETTINGS_FILE, ConsoleSettings, save_settings

REQUIRED_PROFILE_FILES = (
    SETTINGS_FILE,
)


def is_valid_profile(profile_path: Path) -> bool:
    return profile_path.is_dir() and all((profile_path / filename).exists() for filename in REQUIRED_PROFILE_FILES)


def ensure_profile(profile_path: Path) -> Path:
    """Create the profile directory with default settings if it isn't there yet."""
    profile_path.mkdir(parents=True, exist_ok=True)
    if not is_valid_profile(profile_path):
        save_settings(profile_path, ConsoleSettings().to_dict())
    return profile_path


def history_db_path(profile_path: Path) -> Path:
    return profile_path / HISTORY_DB_NAME
