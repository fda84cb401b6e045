# ui/windows/main_window.py

from PySide6.QtWidgets import QMainWindow, QStatusBar

from PySide6.QtCore import QTimer
from PySide6.QtGui  import QAction

from ui.widgets.console.console import Console


class MainWindow(QMainWindow):
    def __init__(self, app):
        super().__init__()

        # Reference to core App
        self.app = app

        # Window setup
        self.setWindowTitle("ANSI Console")
        self.setMinimumSize(800, 600)

        # Menus and Status Bar
        self._create_menu()
        self._create_status_bar()

        # Console fills the window
        self.console = Console(
            settings        = app.settings,
            commands        = app.commands,
            registry        = app.consoles,
            history_store   = app.history_store,
        )
        self.setCentralWidget(self.console)

        self.console.commandEntered.connect(self._on_command)
        QTimer.singleShot(0, self.console.setFocus)

    def _create_menu(self):
        menu = self.menuBar()

        console_menu = menu.addMenu("&Console")

        clear_action = QAction("&Clear", self)
        clear_action.triggered.connect(lambda: self.console.clear_screen())
        console_menu.addAction(clear_action)

        console_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        console_menu.addAction(exit_action)

    def _create_status_bar(self):
        status = QStatusBar()
        self.setStatusBar(status)
        status.showMessage("Ready")

    def _on_command(self, text: str):
        self.statusBar().showMessage(f"Last command: {text}" if text else "Ready")

    def closeEvent(self, event):
        self.app.consoles.close(self.console)
        super().closeEvent(event)
