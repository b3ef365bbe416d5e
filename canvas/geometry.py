"""Geometrické pomocné funkce plátna.

Převody mezi souřadnicemi obrazovky (ukazatel) a světa (diagram),
rozměry a kotevní body uzlů, tvar hran a hit-testing. Modul nemá žádný stav.

Transformace pohledu: screen = world * scale + offset
"""
from __future__ import annotations
import math
from typing import Iterable, List, NamedTuple, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QPainterPath, QPainterPathStroker, QPolygonF

from constants import (
    ARROW_OFFSET, EDGE_HIT_WIDTH, HANDLE_RADIUS, MIN_SCALE, NODE_SIZES, NodeKind,
    NODE_CORNER_RADIUS, TargetKind,
)
from flowchart.models import FlowEdge, FlowNode


class HitTarget(NamedTuple):
    """Prvek pod ukazatelem: druh (TargetKind) a případné ID."""
    kind: str
    id: Optional[str] = None


BACKGROUND = HitTarget(TargetKind.BACKGROUND)


class ArrowPlacement(NamedTuple):
    """Poloha a natočení šipky na konci hrany (úhel ve stupních)."""
    x: float
    y: float
    angle: float


# === Převody souřadnic ===

def screen_to_world(point: QPointF, transform) -> QPointF:
    """Převede bod z obrazovky do světových souřadnic (inverze transformace)."""
    return QPointF(
        (point.x() - transform.offset_x) / transform.scale,
        (point.y() - transform.offset_y) / transform.scale,
    )


def world_to_screen(point: QPointF, transform) -> QPointF:
    """Převede bod ze světových souřadnic na obrazovku."""
    return QPointF(
        point.x() * transform.scale + transform.offset_x,
        point.y() * transform.scale + transform.offset_y,
    )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# === Uzly ===

def node_size(kind: str) -> Tuple[float, float]:
    """Šířka a výška uzlu daného typu."""
    return NODE_SIZES.get(kind, NODE_SIZES[NodeKind.PROCESS])


def node_rect(node: FlowNode) -> QRectF:
    w, h = node_size(node.kind)
    return QRectF(node.x, node.y, w, h)


def node_center(node: FlowNode) -> QPointF:
    """Střed uzlu – sem se kreslí konce hran."""
    return node_rect(node).center()


def handle_points(node: FlowNode) -> List[QPointF]:
    """Připojovací body uzlu (nahoře, dole, vlevo, vpravo)."""
    r = node_rect(node)
    c = r.center()
    return [
        QPointF(c.x(), r.top()),
        QPointF(c.x(), r.bottom()),
        QPointF(r.left(), c.y()),
        QPointF(r.right(), c.y()),
    ]


def node_shape(node: FlowNode) -> QPainterPath:
    """
    Obrys uzlu, jak se kreslí na plátno.

    - start, end: kruh (elipsa vepsaná do obdélníku)
    - decision: kosočtverec
    - process: obdélník se zaoblenými rohy
    """
    r = node_rect(node)
    path = QPainterPath()
    if node.kind in (NodeKind.START, NodeKind.END):
        path.addEllipse(r)
    elif node.kind == NodeKind.DECISION:
        c = r.center()
        path.addPolygon(QPolygonF([
            QPointF(c.x(), r.top()), QPointF(r.right(), c.y()),
            QPointF(c.x(), r.bottom()), QPointF(r.left(), c.y()),
        ]))
        path.closeSubpath()
    else:
        path.addRoundedRect(r, NODE_CORNER_RADIUS, NODE_CORNER_RADIUS)
    return path


def handle_shape(node: FlowNode) -> QPainterPath:
    """Kroužky připojovacích bodů (poloměr HANDLE_RADIUS ve světových souřadnicích)."""
    path = QPainterPath()
    for hp in handle_points(node):
        path.addEllipse(hp, HANDLE_RADIUS, HANDLE_RADIUS)
    return path


# === Hrany ===

def edge_control_points(a: QPointF, b: QPointF) -> Tuple[QPointF, QPointF]:
    """
    Řídicí body kubické Bézierovy křivky mezi body a, b.

    Křivka vychází z uzlu vodorovně; odsazení řídicích bodů je 30 % délky
    spojnice, nejvýše však 100.
    """
    dx = b.x() - a.x()
    dy = b.y() - a.y()
    offset = min(math.hypot(dx, dy) * 0.3, 100.0)
    if dx <= 0:
        offset = -offset
    return QPointF(a.x() + offset, a.y()), QPointF(b.x() - offset, b.y())


def arrow_placement(a: QPointF, b: QPointF, offset: float = ARROW_OFFSET) -> ArrowPlacement:
    """
    Poloha šipky kousek před cílovým bodem b a její úhel.

    Pro nulovou délku hrany vrací cílový bod s úhlem 0.
    """
    dx = b.x() - a.x()
    dy = b.y() - a.y()
    length = math.hypot(dx, dy)
    if length == 0:
        return ArrowPlacement(b.x(), b.y(), 0.0)
    ux, uy = dx / length, dy / length
    return ArrowPlacement(b.x() - ux * offset, b.y() - uy * offset, math.degrees(math.atan2(dy, dx)))


def edge_midpoint(a: QPointF, b: QPointF) -> QPointF:
    """Bod pro popisek hrany."""
    return QPointF((a.x() + b.x()) / 2, (a.y() + b.y()) / 2)


def edge_path(a: QPointF, b: QPointF) -> QPainterPath:
    """Kubická Bézierova křivka hrany z bodu a do bodu b."""
    c1, c2 = edge_control_points(a, b)
    path = QPainterPath(a)
    path.cubicTo(c1, c2, b)
    return path


def edge_hit_shape(a: QPointF, b: QPointF, scale: float = 1.0) -> QPainterPath:
    """Obrys pásu kolem hrany, ve kterém se hrana dá vybrat (stálá šířka na obrazovce)."""
    stroker = QPainterPathStroker()
    stroker.setWidth(EDGE_HIT_WIDTH / max(scale, MIN_SCALE))
    stroker.setCapStyle(Qt.RoundCap)
    return stroker.createStroke(edge_path(a, b))


# === Hit-testing ===

def paint_order(nodes: Iterable[FlowNode], selected_id: Optional[str] = None) -> List[FlowNode]:
    """
    Uzly v pořadí vykreslování (odspodu nahoru).

    Později přidané uzly leží nad dřívějšími, vybraný uzel úplně nahoře.
    """
    nodes = list(nodes)
    selected = [n for n in nodes if n.id == selected_id]
    return [n for n in nodes if n.id != selected_id] + selected


def hit_test(point: QPointF, nodes: Iterable[FlowNode], edges: Iterable[FlowEdge],
             scale: float = 1.0, selected_id: Optional[str] = None) -> HitTarget:
    """
    Najde prvek pod bodem (ve světových souřadnicích).

    Testuje se proti stejným tvarům, jaké se kreslí: připojovací body
    a uzly leží nad hranami, uzly v pořadí paint_order(). Pás hrany má
    stálou šířku na obrazovce, připojovací body i uzly mají rozměry
    ve světových souřadnicích.
    """
    ordered = paint_order(nodes, selected_id)
    for node in reversed(ordered):
        if handle_shape(node).contains(point):
            return HitTarget(TargetKind.HANDLE, node.id)
        if node_shape(node).contains(point):
            return HitTarget(TargetKind.NODE, node.id)

    by_id = {n.id: n for n in ordered}
    for edge in reversed(list(edges)):
        src = by_id.get(edge.source)
        dst = by_id.get(edge.target)
        if src is None or dst is None:
            continue
        if edge_hit_shape(node_center(src), node_center(dst), scale).contains(point):
            return HitTarget(TargetKind.EDGE, edge.id)
    return BACKGROUND
