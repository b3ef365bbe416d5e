"""Vykreslení hran (propojení uzlů) a pomocné čáry při tažení nové hrany.

Hrana je kubická Bézierova křivka mezi středy uzlů se šipkou u cíle
a volitelným popiskem uprostřed.
"""
from __future__ import annotations
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen, QPolygonF

from canvas.geometry import arrow_placement, edge_midpoint, edge_path
from flowchart.models import FlowEdge
from graphics.nodes import SELECTION_COLOR


def _draw_arrow(painter: QPainter, a: QPointF, b: QPointF, color: QColor) -> None:
    arrow = arrow_placement(a, b)
    painter.save()
    painter.translate(arrow.x, arrow.y)
    painter.rotate(arrow.angle)
    painter.setPen(Qt.NoPen)
    painter.setBrush(color)
    # hrot míří ve směru hrany
    painter.drawPolygon(QPolygonF([QPointF(0, 0), QPointF(-10, -5), QPointF(-10, 5)]))
    painter.restore()


def paint_edge(painter: QPainter, edge: FlowEdge, a: QPointF, b: QPointF,
               selected: bool = False, text_color: QColor = QColor(Qt.black)) -> None:
    """Vykreslí hranu z bodu a do bodu b (světové souřadnice)."""
    color = SELECTION_COLOR if selected else QColor(edge.data.color)
    painter.save()
    pen = QPen(color, 3 if selected else 2)
    pen.setCapStyle(Qt.RoundCap)
    painter.setPen(pen)
    painter.setBrush(Qt.NoBrush)
    painter.drawPath(edge_path(a, b))
    _draw_arrow(painter, a, b, color)

    if edge.data.label:
        mid = edge_midpoint(a, b)
        metrics = painter.fontMetrics()
        w = metrics.horizontalAdvance(edge.data.label) + 8
        h = metrics.height() + 4
        box = QRectF(mid.x() - w / 2, mid.y() - h / 2, w, h)
        painter.setPen(SELECTION_COLOR if selected else text_color)
        painter.drawText(box, Qt.AlignCenter, edge.data.label)
    painter.restore()


def paint_guide_line(painter: QPainter, a: QPointF, b: QPointF) -> None:
    """Čárkovaná pomocná čára při tažení nové hrany."""
    painter.save()
    painter.setPen(QPen(QColor(25, 118, 210), 2, Qt.DashLine))
    painter.drawLine(a, b)
    painter.restore()
