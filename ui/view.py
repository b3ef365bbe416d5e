"""Plátno editoru – vykresluje snímek diagramu a předává události jádru."""
from __future__ import annotations
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget

from canvas.geometry import hit_test, node_center, paint_order, screen_to_world, HitTarget
from canvas.interaction import Connecting, DraggingNode, PanningCanvas
from canvas.session import EditorSession
from constants import TargetKind
from graphics.grid import draw_grid
from graphics.link import paint_edge, paint_guide_line
from graphics.nodes import paint_node

# MIME typ pro drag & drop z palety
MIME_NODE_KIND = "application/x-flowchart-node-kind"


class EditorView(QWidget):
    def __init__(self, session: EditorSession, parent=None):
        super().__init__(parent)
        self.session = session
        self.show_grid = session.config.draw_grid
        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(400, 300)

        session.store.changed.connect(self.update)
        session.store.selection_changed.connect(self.update)
        session.viewport.transform_changed.connect(self.update)
        session.interaction.state_changed.connect(self._on_state_changed)
        session.interaction.guide_changed.connect(self.update)
        session.theme_changed.connect(lambda _theme: self.update())
        session.palette_drag_changed.connect(self.update)

    # ========== Pomocné metody ==========

    def _selected_node_id(self):
        selection = self.session.get_selection()
        if selection is not None and selection.kind == "node":
            return selection.id
        return None

    def target_at(self, pos: QPointF) -> HitTarget:
        """Zjistí, co leží pod bodem obrazovky (ve stejném pořadí, v jakém se kreslí)."""
        t = self.session.get_viewport_transform()
        world = screen_to_world(pos, t)
        return hit_test(world, self.session.get_nodes(), self.session.get_edges(), t.scale,
                        self._selected_node_id())

    def _on_state_changed(self):
        state = self.session.interaction.state
        if isinstance(state, PanningCanvas):
            self.setCursor(Qt.ClosedHandCursor)
        elif isinstance(state, DraggingNode):
            self.setCursor(Qt.SizeAllCursor)
        elif isinstance(state, Connecting):
            self.setCursor(Qt.CrossCursor)
        else:
            self.unsetCursor()
        self.update()

    def _hover_cursor(self, pos: QPointF):
        if not self.session.interaction.is_idle():
            return
        kind = self.target_at(pos).kind
        if kind == TargetKind.HANDLE:
            self.setCursor(Qt.CrossCursor)
        elif kind in (TargetKind.NODE, TargetKind.EDGE):
            self.setCursor(Qt.PointingHandCursor)
        else:
            self.unsetCursor()

    # ========== Vykreslení ==========

    def paintEvent(self, event):
        session = self.session
        dark = session.theme == "dark"
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(30, 30, 30) if dark else QColor(250, 250, 250))
        if session.palette_payload:
            # zvýraznění plátna při tažení z palety
            painter.fillRect(self.rect(), QColor(25, 118, 210, 25))

        transform = session.get_viewport_transform().to_qtransform()
        painter.setTransform(transform)
        visible = transform.inverted()[0].mapRect(QRectF(self.rect()))
        if self.show_grid:
            draw_grid(painter, visible, dark)

        nodes = {n.id: n for n in session.get_nodes()}
        selection = session.get_selection()
        text_color = QColor(Qt.white) if dark else QColor(Qt.black)
        for edge in session.get_edges():
            src, dst = nodes.get(edge.source), nodes.get(edge.target)
            if src is None or dst is None:
                continue
            selected = selection is not None and selection.kind == "edge" and selection.id == edge.id
            paint_edge(painter, edge, node_center(src), node_center(dst), selected, text_color)

        guide = session.interaction.guide_line()
        if guide:
            paint_guide_line(painter, *guide)

        show_handles = not isinstance(session.interaction.state, DraggingNode)
        selected_id = self._selected_node_id()
        for node in paint_order(nodes.values(), selected_id):
            paint_node(painter, node, node.id == selected_id, show_handles)
        painter.end()

    # ========== Myš ==========

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self.setFocus()
        pos = event.position()
        self.session.pointer_down(pos, self.target_at(pos))
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.session.pointer_move(pos)
        self._hover_cursor(pos)

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.session.pointer_up(pos, self.target_at(pos))
        self._hover_cursor(pos)
        event.accept()

    def wheelEvent(self, event):
        # Qt: kladné angleDelta = kolečko od sebe (přiblížit)
        if self.session.wheel(-event.angleDelta().y(), event.position()):
            event.accept()
        else:
            super().wheelEvent(event)

    def resizeEvent(self, event):
        self.session.viewport.set_canvas_size(self.width(), self.height())
        super().resizeEvent(event)

    # ========== Drag & drop z palety ==========

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(MIME_NODE_KIND):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasFormat(MIME_NODE_KIND):
            event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self.update()

    def dropEvent(self, event):
        mime = event.mimeData()
        if not mime.hasFormat(MIME_NODE_KIND):
            event.ignore()
            return
        kind = bytes(mime.data(MIME_NODE_KIND)).decode("utf-8")
        self.session.drop(kind, event.position())
        event.acceptProposedAction()
