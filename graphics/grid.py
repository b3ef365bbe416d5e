"""Kreslení mřížky na pozadí plátna.

Mřížka se kreslí ve světových souřadnicích, takže se s pohledem posouvá
i zvětšuje. Pero má šířku 0 („hairline“), čáry mají vždy 1 px bez ohledu
na zoom.
"""

from __future__ import annotations
import math
from PySide6.QtCore import QRectF, QPointF, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from constants import GRID_SIZE


def draw_grid(painter: QPainter, rect: QRectF, dark: bool = False) -> None:
    """Vykreslí mřížku do viditelné oblasti rect (světové souřadnice)."""
    # Při malém zoomu by byla mřížka příliš hustá – kreslíme každou n-tou čáru
    step = GRID_SIZE
    scale = painter.worldTransform().m11() or 1.0
    while step * scale < 8:
        step *= 2

    # Zarovnání na nejbližší nižší násobek kroku
    left = math.floor(rect.left() / step) * step
    top = math.floor(rect.top() / step) * step

    painter.save()
    painter.setPen(QPen(QColor(60, 60, 60) if dark else QColor(Qt.lightGray), 0))
    x = left
    while x <= rect.right():
        painter.drawLine(QPointF(x, rect.top()), QPointF(x, rect.bottom()))
        x += step
    y = top
    while y <= rect.bottom():
        painter.drawLine(QPointF(rect.left(), y), QPointF(rect.right(), y))
        y += step
    painter.restore()
