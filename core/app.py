# core/app.py

import logging
from pathlib    import Path
from typing     import List, Optional

from PySide6.QtWidgets import QApplication

from core.colors            import D_YELLOW
from core.commands          import CommandRegistry, clear_screen
from core.config            import LOG_LEVEL, PROFILE_BASE_PATH
from core.db                import init_db
from core.history_store     import HistoryStore
from core.registry          import ConsoleRegistry
from core.settings          import load_console_settings
from core.utils             import ensure_profile, history_db_path

from ui.windows.main_window import MainWindow

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
log = logging.getLogger(__name__)


class App:
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return
        self._initialized = True

        self.qt_app = QApplication([])

        self.profile_path: Path = ensure_profile(PROFILE_BASE_PATH)
        self.settings = load_console_settings(self.profile_path)

        init_db(history_db_path(self.profile_path))
        self.history_store = HistoryStore()

        self.consoles = ConsoleRegistry()
        self.commands = self._build_commands()
        self.main_window: Optional[MainWindow] = None

    def start(self):
        self.main_window = MainWindow(self)
        self.main_window.show()
        self.qt_app.exec()

    # ─── Commands ───────────────────────────────────

    def _build_commands(self) -> CommandRegistry:
        commands = CommandRegistry(unrecognized=self._unrecognized)
        commands.register("cls", clear_screen)
        commands.register("help", self._help)
        commands.register("exit", self._exit)
        return commands

    def _help(self, raw: str, argv: List[str], console):
        console.println("Commands: " + " ".join(self.commands.names()))

    def _exit(self, raw: str, argv: List[str], console):
        log.info("Exit requested from console")
        self.qt_app.quit()

    @staticmethod
    def _unrecognized(raw: str, argv: List[str], console):
        if argv and argv[0]:
            console.println(f"Unknown command: {argv[0]}", D_YELLOW)

    @classmethod
    def instance(cls):
        return cls()


def begin():
    App.instance().start()


if __name__ == "__main__":
    begin()
