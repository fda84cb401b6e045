# core/config.py
# Configures core behaviours via the .env file.  These rarely need changing and aren't meant to be
# customised per user.  Console look & feel (colours, font, prompt) lives in settings.

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PROFILE_BASE_PATH               =  Path(os.getenv("PROFILE_BASE_PATH",       "~/.ansiconsole")).expanduser()
LOG_LEVEL                       =       os.getenv("LOG_LEVEL",                      "WARNING").upper()
COMPLETION_CACHE_SIZE           =   int(os.getenv("COMPLETION_CACHE_SIZE",               256))
HISTORY_MAX_ENTRIES             =   int(os.getenv("HISTORY_MAX_ENTRIES",                1000))
HISTORY_DB_NAME                 =       os.getenv("HISTORY_DB_NAME",             "history.sqlite")
