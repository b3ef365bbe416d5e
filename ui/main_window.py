"""Hlavní okno aplikace Flowchart Editor."""
from __future__ import annotations
import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QTextEdit,
)

from canvas.session import EditorSession
from ui.palette import NodePalette
from ui.properties_panel import PropertiesPanel
from ui.style import get_application_stylesheet, make_palette
from ui.toolbar import ToolbarManager
from ui.view import EditorView

logger = logging.getLogger(__name__)

# Qt klávesy -> názvy, kterým rozumí stavový automat interakce
KEY_NAMES = {
    Qt.Key_Delete: "Delete",
    Qt.Key_Backspace: "Backspace",
    Qt.Key_Escape: "Escape",
    Qt.Key_Z: "z",
    Qt.Key_Y: "y",
    Qt.Key_Equal: "=",
    Qt.Key_Plus: "+",
    Qt.Key_Minus: "-",
    Qt.Key_0: "0",
}

MODIFIER_NAMES = (
    (Qt.ControlModifier, "ctrl"),
    (Qt.MetaModifier, "meta"),
    (Qt.ShiftModifier, "shift"),
    (Qt.AltModifier, "alt"),
)


def key_modifiers(modifiers) -> tuple:
    """Převede Qt modifikátory na seznam názvů."""
    return tuple(name for flag, name in MODIFIER_NAMES if modifiers & flag)


class MainWindow(QMainWindow):
    """Hlavní okno aplikace Flowchart Editor."""

    def __init__(self, session: EditorSession | None = None):
        super().__init__()
        self.session = session or EditorSession()
        self.setWindowTitle("Flowchart Editor")

        self.view = EditorView(self.session, self)
        self.setCentralWidget(self.view)

        self._init_palette()
        self._init_properties_panel()
        self._init_toolbars()

        self.session.theme_changed.connect(self.apply_theme)
        self.session.store.selection_changed.connect(self._update_status)
        self.session.interaction.state_changed.connect(self._update_status)
        self.apply_theme(self.session.theme)
        self._update_status()

    def _init_palette(self):
        self.dock_palette = NodePalette(self.session, self)
        self.addDockWidget(Qt.LeftDockWidgetArea, self.dock_palette)

    def _init_properties_panel(self):
        self.dock_props = PropertiesPanel(self.session, self)
        self.addDockWidget(Qt.RightDockWidgetArea, self.dock_props)

    def _init_toolbars(self):
        self.toolbar_manager = ToolbarManager(self, self.session)
        self.toolbar_manager.create_all_toolbars()

    def apply_theme(self, theme: str):
        """Aplikuje paletu a stylesheet daného tématu."""
        app = QApplication.instance()
        if app is None:
            return
        app.setPalette(make_palette(theme))
        app.setStyleSheet(get_application_stylesheet(theme))
        self.toolbar_manager.actions["theme"].setChecked(theme == "dark")
        logger.debug("Theme switched to %s", theme)

    def _update_status(self):
        if self.session.interaction.is_connecting():
            self.statusBar().showMessage("Release over a node to connect, Esc to cancel")
            return
        node = self.session.store.selected_node()
        edge = self.session.store.selected_edge()
        if node is not None:
            self.statusBar().showMessage(f"Selected: {node.label}")
        elif edge is not None:
            self.statusBar().showMessage("Selected: connection")
        else:
            self.statusBar().clearMessage()

    def keyPressEvent(self, event):
        """Zpracuje stisknutí klávesy."""
        key = KEY_NAMES.get(event.key())
        if key is None:
            super().keyPressEvent(event)
            return

        focused = QApplication.focusWidget()
        text_input = isinstance(focused, (QLineEdit, QTextEdit, QPlainTextEdit))
        if self.session.key_down(key, key_modifiers(event.modifiers()), text_input):
            event.accept()
            return
        super().keyPressEvent(event)
