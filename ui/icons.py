"""Generování vlastních ikon pro paletu a toolbar.

Vytváří vektorové ikony přímo v kódu pomocí QPainter pro:
- Typy uzlů (start, process, decision, end)
- Nástroje (undo, redo, zoom in/out, reset zoom, clear, theme)
"""
from PySide6.QtCore import Qt, QRectF, QPointF
from PySide6.QtGui import QColor, QIcon, QPixmap, QPainter, QPen, QPainterPath, QPolygonF

from constants import DEFAULT_NODE_COLOR, NodeKind


def icon_node_kind(kind: str, size: int = 28) -> QIcon:
    """
    Ikona typu uzlu pro paletu – stejný tvar jako na plátně s písmenem typu.

    Args:
        kind: Typ uzlu (NodeKind)
        size: Velikost ikony v pixelech
    """
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    p = QPainter(pm)
    p.setRenderHint(QPainter.Antialiasing)
    p.setPen(Qt.NoPen)
    p.setBrush(QColor(DEFAULT_NODE_COLOR))

    r = QRectF(2, 2, size - 4, size - 4)
    if kind in (NodeKind.START, NodeKind.END):
        p.drawEllipse(r)
    elif kind == NodeKind.DECISION:
        c = r.center()
        p.drawPolygon(QPolygonF([
            QPointF(c.x(), r.top()), QPointF(r.right(), c.y()),
            QPointF(c.x(), r.bottom()), QPointF(r.left(), c.y()),
        ]))
    else:
        p.drawRoundedRect(r.adjusted(0, 4, 0, -4), 4, 4)

    # písmeno typu (S, P, D, E)
    p.setPen(Qt.white)
    font = p.font()
    font.setBold(True)
    p.setFont(font)
    p.drawText(r, Qt.AlignCenter, kind[:1].upper())
    p.end()
    return QIcon(pm)


def icon_shape(kind: str, size: int = 22) -> QIcon:
    """
    Vytvoří vektorovou ikonu nástroje.

    Args:
        kind: "undo", "redo", "zoom_in", "zoom_out", "reset_zoom", "clear", "theme"
        size: Velikost ikony v pixelech (výchozí 22)
    """
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    p = QPainter(pm)
    p.setRenderHint(QPainter.Antialiasing)
    p.setPen(QPen(Qt.black, 2))
    p.setBrush(Qt.NoBrush)

    if kind in ("undo", "redo"):
        # oblouk se šipkou; redo je zrcadlově
        if kind == "redo":
            p.translate(size, 0)
            p.scale(-1, 1)
        path = QPainterPath(QPointF(6, 9))
        path.cubicTo(QPointF(12, 3), QPointF(size - 3, 7), QPointF(size - 5, size - 5))
        p.drawPath(path)
        p.drawLine(QPointF(6, 9), QPointF(6, 3))
        p.drawLine(QPointF(6, 9), QPointF(12, 9))

    elif kind in ("zoom_in", "zoom_out"):
        # lupa
        cx, cy, r = size / 2 - 3, size / 2 - 3, size / 2 - 6
        p.drawEllipse(QRectF(cx - r, cy - r, 2 * r, 2 * r))
        p.drawLine(QPointF(cx + r - 1, cy + r - 1), QPointF(size - 3, size - 3))  # držátko
        # plus/minus
        p.drawLine(QPointF(cx - r / 2 + 1, cy), QPointF(cx + r / 2 - 1, cy))
        if kind == "zoom_in":
            p.drawLine(QPointF(cx, cy - r / 2 + 1), QPointF(cx, cy + r / 2 - 1))

    elif kind == "reset_zoom":
        # rámeček s "1:1"
        p.drawRect(QRectF(3, 5, size - 6, size - 10))
        font = p.font()
        font.setPixelSize(int(size * 0.4))
        p.setFont(font)
        p.drawText(QRectF(0, 0, size, size), Qt.AlignCenter, "1:1")

    elif kind == "clear":
        # koš
        p.drawLine(QPointF(4, 6), QPointF(size - 4, 6))
        p.drawLine(QPointF(size / 2 - 3, 3), QPointF(size / 2 + 3, 3))
        p.drawRect(QRectF(6, 6, size - 12, size - 9))

    elif kind == "theme":
        # napůl vyplněný kruh
        r = QRectF(3, 3, size - 6, size - 6)
        p.drawEllipse(r)
        p.setBrush(Qt.black)
        p.drawChord(r, 90 * 16, 180 * 16)

    p.end()
    return QIcon(pm)
