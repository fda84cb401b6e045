# ui/widgets/console/console.py

from typing import Optional

from PySide6.QtCore import QEvent, QThread, Qt, Signal
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from core.colors import Color
from core.commands import CommandRegistry
from core.controller import ConsoleController, Key
from core.errors import Notice
from core.history_store import HistoryStore
from core.registry import ConsoleRegistry
from core.settings import ConsoleSettings
from ui.keymap import translate_key
from ui.widgets.console.color_pane import ColorPane


class Console(QWidget):
    commandEntered = Signal(str)

    # write() from worker threads is re-emitted here and delivered on the UI thread
    _writeRequested = Signal(str, object, bool, bool)

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        commands: Optional[CommandRegistry] = None,
        registry: Optional[ConsoleRegistry] = None,
        history_store: Optional[HistoryStore] = None,
        parent=None,
    ):
        super().__init__(parent)

        self.settings = settings or ConsoleSettings()

        # Display
        self.pane = ColorPane(self)
        self.pane.apply_settings(self.settings)
        self.pane.installEventFilter(self)
        self.setFocusProxy(self.pane)

        # One controller per widget, optionally tracked by a registry
        if registry is not None:
            self.controller = registry.open(self, self.settings, self.pane, commands, history_store)
        else:
            self.controller = ConsoleController(
                settings=self.settings,
                target=self.pane,
                commands=commands,
                history_store=history_store,
            )

        self.controller.bus.register("bell", self._on_bell)
        self.controller.bus.register("line_submitted", self._on_line_submitted)
        self._writeRequested.connect(self.controller.write, Qt.QueuedConnection)

        # Layout
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(0)
        self.layout.addWidget(self.pane)

    # ─── Public API ──────────────────────────────────────────────────────────

    def write(self, text: str, color: Optional[Color] = None, newline: bool = False, bypass_ansi: bool = False):
        """Safe to call from any thread."""
        if QThread.currentThread() == self.thread():
            self.controller.write(text, color, newline, bypass_ansi)
        else:
            self._writeRequested.emit(text, color, newline, bypass_ansi)

    def print(self, text: str, color: Optional[Color] = None):
        self.write(text, color)

    def println(self, text: str = "", color: Optional[Color] = None):
        self.write(text, color, newline=True)

    def clear_screen(self):
        self.controller.clear_screen()

    def set_prompt(self, prompt: str):
        self.controller.set_prompt(prompt)

    def apply_settings(self, settings: ConsoleSettings):
        self.settings = settings
        self.pane.apply_settings(settings)
        self.controller.apply_settings(settings)

    # ─── Event Hooks ─────────────────────────────────────────────────────────

    def eventFilter(self, obj, event):
        if obj is not self.pane:
            return super().eventFilter(obj, event)

        match event.type():
            case QEvent.KeyPress if event.matches(QKeySequence.Paste):
                self._paste()
                return True

            case QEvent.KeyPress if event.matches(QKeySequence.Copy):
                return False

            case QEvent.KeyPress:
                translated = translate_key(event)
                if translated is None:
                    return False
                key, text = translated
                self.controller.key_pressed(key, text)
                return True

            case QEvent.KeyRelease:
                translated = translate_key(event)
                if translated is None or event.isAutoRepeat():
                    return False
                self.controller.key_released(translated[0])
                return True

            case _:
                return super().eventFilter(obj, event)

    def focusNextPrevChild(self, next_widget: bool) -> bool:
        # Tab belongs to completion
        return False

    # ─── Internals ───────────────────────────────────────────────────────────

    def _paste(self):
        text = QApplication.clipboard().text()
        # the input region is a single line
        text = " ".join(text.splitlines())
        if text:
            self.controller.key_pressed(Key.CHAR, text)

    def _on_bell(self, notice: Notice):
        QApplication.beep()

    def _on_line_submitted(self, line: str):
        self.commandEntered.emit(line)
