# ui/widgets/console/color_pane.py

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QTextEdit

from core.escape_decoder import Run
from core.settings import ConsoleSettings
from ui.style import get_mono_font


class ColorPane(QTextEdit):
    """
    Paints the console document. Every edit arrives from the controller
    already validated, so document offsets map one-to-one onto
    QTextDocument positions.
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setReadOnly(True)
        self.setUndoRedoEnabled(False)
        self.setAcceptRichText(False)
        self.setLineWrapMode(QTextEdit.WidgetWidth)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        # read-only but still showing a caret
        self.setTextInteractionFlags(Qt.TextSelectableByMouse | Qt.TextSelectableByKeyboard)

    def apply_settings(self, settings: ConsoleSettings):
        self.setFont(get_mono_font(settings.font))
        self.setStyleSheet(
            f"background-color: {settings.background.css}; color: {settings.default_foreground.css};"
        )

    # ─── Render Target ───────────────────────────────────────────────────

    def insert(self, offset: int, runs: Sequence[Run]) -> None:
        cursor = QTextCursor(self.document())
        cursor.setPosition(offset)
        cursor.beginEditBlock()
        for run in runs:
            fmt = QTextCharFormat()
            fmt.setForeground(QColor(*run.color))
            cursor.insertText(run.text, fmt)
        cursor.endEditBlock()

    def remove(self, offset: int, length: int) -> None:
        cursor = QTextCursor(self.document())
        cursor.setPosition(offset)
        cursor.setPosition(offset + length, QTextCursor.KeepAnchor)
        cursor.removeSelectedText()

    def set_caret(self, offset: int) -> None:
        cursor = self.textCursor()
        cursor.setPosition(min(offset, self.document().characterCount() - 1))
        self.setTextCursor(cursor)
        self.ensureCursorVisible()
