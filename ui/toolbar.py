"""Toolbar a související akce pro Flowchart Editor."""
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMenu,
    QMessageBox,
    QSizePolicy,
    QToolBar,
    QWidget,
)

from ui.icons import icon_shape


class ToolbarManager:
    """Manager pro správu toolbarů aplikace."""

    def __init__(self, main_window, session):
        self.main_window = main_window
        self.session = session
        self.actions = {}
        self.zoom_label = None

    def create_all_toolbars(self):
        """Vytvoří všechny toolbary a menu aplikace."""
        self._create_main_toolbar()
        self._add_menu_to_menubar()

        self.session.history.index_changed.connect(lambda _i: self.update_history_actions())
        self.session.viewport.transform_changed.connect(self.update_zoom_label)
        self.update_history_actions()
        self.update_zoom_label()

    def _create_main_toolbar(self):
        """Vytvoří hlavní toolbar."""
        tb = QToolBar("Tools")
        tb.setObjectName("MainToolbar")
        self.main_window.addToolBar(Qt.TopToolBarArea, tb)

        # Historie
        self.actions["undo"] = self._add_icon_btn(
            tb, icon_shape("undo"), "Undo (Ctrl+Z)", self.session.undo)
        self.actions["redo"] = self._add_icon_btn(
            tb, icon_shape("redo"), "Redo (Ctrl+Y)", self.session.redo)

        # Zoom
        tb.addSeparator()
        self.actions["zoom_out"] = self._add_icon_btn(
            tb, icon_shape("zoom_out"), "Zoom Out (Ctrl+-)", self.session.zoom_out)
        self.zoom_label = QLabel("100%")
        self.zoom_label.setFixedWidth(45)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        tb.addWidget(self.zoom_label)
        self.actions["zoom_in"] = self._add_icon_btn(
            tb, icon_shape("zoom_in"), "Zoom In (Ctrl++)", self.session.zoom_in)
        self.actions["reset_zoom"] = self._add_icon_btn(
            tb, icon_shape("reset_zoom"), "Reset Zoom (Ctrl+0)", self.session.reset_zoom)

        tb.addSeparator()
        self.actions["clear"] = self._add_icon_btn(
            tb, icon_shape("clear"), "Clear All", self.confirm_clear)

        self._add_spacing(tb)
        self.actions["theme"] = self._add_icon_btn(
            tb, icon_shape("theme"), "Toggle Theme", self.session.toggle_theme, checkable=True)
        self.actions["theme"].setText("Dark Theme")
        self.actions["theme"].setChecked(self.session.theme == "dark")

    def _add_menu_to_menubar(self):
        """Přidá menu do nativního menubaru."""
        menubar = self.main_window.menuBar()
        menubar.addMenu(self._create_file_menu())
        menubar.addMenu(self._create_view_menu())

    def _create_file_menu(self):
        """Vytvoří File menu."""
        file_menu = QMenu("File", self.main_window)

        act_clear = QAction("Clear All", self.main_window)
        act_clear.triggered.connect(lambda _checked=False: self.confirm_clear())
        file_menu.addAction(act_clear)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self.main_window)
        act_exit.setShortcut(QKeySequence("Ctrl+Q"))
        act_exit.triggered.connect(QApplication.instance().quit)
        file_menu.addAction(act_exit)
        return file_menu

    def _create_view_menu(self):
        """Vytvoří View menu s přepínači dock panelů."""
        view_menu = QMenu("View", self.main_window)

        if hasattr(self.main_window, "dock_palette"):
            act_pal = self.main_window.dock_palette.toggleViewAction()
            act_pal.setShortcut(QKeySequence("Ctrl+Shift+N"))
            act_pal.setText("Node Types")
            view_menu.addAction(act_pal)
            self.main_window.addAction(act_pal)

        if hasattr(self.main_window, "dock_props"):
            act_p = self.main_window.dock_props.toggleViewAction()
            act_p.setShortcut(QKeySequence("Ctrl+Shift+P"))
            act_p.setText("Properties")
            view_menu.addAction(act_p)
            self.main_window.addAction(act_p)

        view_menu.addSeparator()
        view_menu.addAction(self.actions["theme"])
        return view_menu

    # ========== Aktualizace stavu ==========

    def update_history_actions(self):
        """Povolí/zakáže undo a redo podle pozice v historii."""
        history = self.session.history
        self.actions["undo"].setEnabled(history.can_undo())
        self.actions["redo"].setEnabled(history.can_redo())
        self.actions["undo"].setToolTip(self._with_text("Undo (Ctrl+Z)", history.undo_text()))
        self.actions["redo"].setToolTip(self._with_text("Redo (Ctrl+Y)", history.redo_text()))

    def update_zoom_label(self):
        self.zoom_label.setText(f"{round(self.session.viewport.scale * 100)}%")

    @staticmethod
    def _with_text(tooltip: str, text: str) -> str:
        return f"{tooltip}: {text}" if text else tooltip

    def confirm_clear(self):
        """Smaže celý diagram po potvrzení uživatelem."""
        if not self.session.get_nodes():
            return
        answer = QMessageBox.question(
            self.main_window, "Clear All",
            "Are you sure you want to clear the entire diagram?")
        if answer == QMessageBox.Yes:
            self.session.clear()

    # ========== Pomocné metody ==========

    def _add_icon_btn(self, tb: QToolBar, icon, tooltip: str, slot, checkable=False):
        """Přidá tlačítko s ikonou do toolbaru."""
        act = QAction(icon, "", self.main_window)
        act.setToolTip(tooltip)
        act.setStatusTip(tooltip)
        act.triggered.connect(lambda _checked=False: slot())
        act.setCheckable(checkable)
        tb.addAction(act)
        return act

    @staticmethod
    def _add_spacing(tb: QToolBar, width: int = 16):
        """Přidá mezeru do toolbaru."""
        spacer = QWidget()
        spacer.setFixedWidth(width)
        spacer.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Preferred)
        tb.addWidget(spacer)
        return spacer
