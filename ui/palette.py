"""Paleta typů uzlů – zdroj drag & drop na plátno."""
from PySide6.QtCore import QMimeData, QSize, Qt
from PySide6.QtGui import QDrag
from PySide6.QtWidgets import QDockWidget, QListWidget, QListWidgetItem, QAbstractItemView

from constants import NODE_KIND_INFO, NodeKind
from ui.icons import icon_node_kind
from ui.view import MIME_NODE_KIND


class NodeKindList(QListWidget):
    """Seznam typů uzlů; tažením položky vzniká nový uzel na plátně."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.setDragEnabled(True)
        self.setDragDropMode(QAbstractItemView.DragOnly)
        self.setIconSize(QSize(28, 28))
        for kind in NodeKind.ALL:
            label, description = NODE_KIND_INFO[kind]
            item = QListWidgetItem(icon_node_kind(kind), label, self)
            item.setData(Qt.UserRole, kind)
            item.setToolTip(description)

    def startDrag(self, supported_actions):
        item = self.currentItem()
        if item is None:
            return
        kind = item.data(Qt.UserRole)
        mime = QMimeData()
        mime.setData(MIME_NODE_KIND, kind.encode("utf-8"))

        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.setPixmap(item.icon().pixmap(self.iconSize()))
        self.session.begin_palette_drag(kind)
        try:
            drag.exec(Qt.CopyAction)
        finally:
            # drop mimo plátno payload nezruší – zrušíme ho tady
            self.session.end_palette_drag()


class NodePalette(QDockWidget):
    """Dock widget s paletou typů uzlů."""

    def __init__(self, session, parent=None):
        super().__init__("Node Types", parent)
        self.setObjectName("NodePalette")
        self.list = NodeKindList(session, self)
        self.setWidget(self.list)
