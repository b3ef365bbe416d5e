"""Vykreslení uzlů diagramu.

Tvar uzlu bere z canvas.geometry.node_shape, takže kreslený obrys
je přesně ten, proti kterému se testuje kliknutí.
"""
from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen

from canvas.geometry import handle_shape, node_rect, node_shape
from constants import NodeKind
from flowchart.models import FlowNode

SELECTION_COLOR = QColor(255, 152, 0)


def paint_node(painter: QPainter, node: FlowNode, selected: bool = False,
               show_handles: bool = False) -> None:
    """Vykreslí jeden uzel včetně popisku a případně připojovacích bodů."""
    r = node_rect(node)
    painter.save()

    pen = QPen(SELECTION_COLOR, 3) if selected else QPen(Qt.transparent, 1)
    painter.setPen(pen)
    painter.setBrush(QBrush(QColor(node.data.color)))
    painter.drawPath(node_shape(node))

    # text (tučný, bílý)
    painter.setFont(QFont("Arial", 10, QFont.Bold))
    painter.setPen(Qt.white)
    flags = Qt.AlignCenter | Qt.TextWordWrap
    if node.kind == NodeKind.DECISION:
        # v kosočtverci je místa méně
        text_rect = r.adjusted(r.width() / 5, r.height() / 4, -r.width() / 5, -r.height() / 4)
        painter.drawText(text_rect, Qt.AlignCenter, painter.fontMetrics().elidedText(
            node.label, Qt.ElideRight, int(text_rect.width())))
    else:
        painter.drawText(r.adjusted(8, 8, -8, -8), flags, node.label)

    if show_handles:
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(node.data.color).darker(130))
        painter.drawPath(handle_shape(node))

    painter.restore()
