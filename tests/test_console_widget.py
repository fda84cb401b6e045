"""Tests for the Qt console widget and its colour pane (offscreen)."""
import threading
import time

import pytest

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QTextCursor
from PySide6.QtTest import QTest

from core.colors import ESC, Color
from core.commands import CommandRegistry
from core.registry import ConsoleRegistry
from core.settings import ConsoleSettings
from ui.widgets.console.console import Console


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def widget(qapp):
    w = Console(settings=ConsoleSettings(prompt="> "))
    yield w
    w.deleteLater()


def _color_at(pane, position):
    cursor = QTextCursor(pane.document())
    cursor.setPosition(position + 1)
    return cursor.charFormat().foreground().color()


def test_prompt_and_write_reach_the_pane(widget):
    widget.write("hello")
    assert widget.pane.toPlainText() == "> hello"


def test_ansi_colours_are_painted(widget):
    widget.write(f"{ESC}[31mred")
    assert _color_at(widget.pane, 2) == QColor(128, 0, 0)
    widget.write("x", color=Color(1, 2, 3))
    assert _color_at(widget.pane, 5) == QColor(1, 2, 3)


def test_typing_and_enter(widget):
    entered = []
    widget.commandEntered.connect(entered.append)
    QTest.keyClicks(widget.pane, "hi")
    assert widget.controller.user_input() == "hi"
    QTest.keyClick(widget.pane, Qt.Key_Return)
    assert entered == ["hi"]
    assert widget.pane.toPlainText() == "> hi\n> "


def test_backspace_stops_at_prompt(widget):
    QTest.keyClicks(widget.pane, "a")
    QTest.keyClick(widget.pane, Qt.Key_Backspace)
    QTest.keyClick(widget.pane, Qt.Key_Backspace)
    assert widget.pane.toPlainText() == "> "
    assert widget.pane.textCursor().position() == 2


def test_history_keys(widget):
    QTest.keyClicks(widget.pane, "first")
    QTest.keyClick(widget.pane, Qt.Key_Return)
    QTest.keyClick(widget.pane, Qt.Key_Up)
    assert widget.pane.toPlainText().endswith("> first")
    QTest.keyClick(widget.pane, Qt.Key_Down)
    assert widget.pane.toPlainText().endswith("> ")


def test_clear_screen(widget):
    widget.println("old output")
    widget.clear_screen()
    assert widget.pane.toPlainText() == "> "


def test_write_from_worker_thread_is_marshalled(widget, qapp):
    worker = threading.Thread(target=widget.write, args=("from worker",))
    worker.start()
    worker.join()

    deadline = time.monotonic() + 5
    while "from worker" not in widget.pane.toPlainText() and time.monotonic() < deadline:
        qapp.processEvents()
    assert widget.pane.toPlainText() == "> from worker"


def test_widget_registers_with_registry(qapp):
    registry = ConsoleRegistry()
    commands = CommandRegistry()
    w = Console(settings=ConsoleSettings(), commands=commands, registry=registry)
    assert registry.get(w) is w.controller
    w.deleteLater()
