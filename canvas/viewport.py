"""Transformace pohledu (posun + měřítko) a její ovládání."""
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Optional

from PySide6.QtCore import QObject, QPointF, Signal
from PySide6.QtGui import QTransform

from canvas.geometry import clamp
from constants import MAX_SCALE, MIN_SCALE, WHEEL_ZOOM_IN, WHEEL_ZOOM_OUT, ZOOM_STEP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportTransform:
    """
    Afinní zobrazení světa na obrazovku: screen = world * scale + offset.

    Attributes:
        offset_x: Posun v ose X (px)
        offset_y: Posun v ose Y (px)
        scale: Měřítko, vždy v rozsahu [MIN_SCALE, MAX_SCALE]
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def to_qtransform(self) -> QTransform:
        """QTransform pro QPainter (jen pro vykreslování, nikdy se neparsuje zpět)."""
        return QTransform(self.scale, 0.0, 0.0, self.scale, self.offset_x, self.offset_y)


class ViewportController(QObject):
    """Drží aktuální transformaci pohledu a implementuje zoom a posun."""

    transform_changed = Signal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._transform = ViewportTransform()
        self._canvas_w = 0.0
        self._canvas_h = 0.0

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    @property
    def scale(self) -> float:
        return self._transform.scale

    def _set(self, transform: ViewportTransform) -> None:
        if transform == self._transform:
            return
        self._transform = transform
        self.transform_changed.emit()

    def set_canvas_size(self, width: float, height: float) -> None:
        """Velikost plátna na obrazovce – střed slouží jako kotva pro zoom tlačítky."""
        self._canvas_w = max(0.0, float(width))
        self._canvas_h = max(0.0, float(height))

    def canvas_center(self) -> QPointF:
        return QPointF(self._canvas_w / 2, self._canvas_h / 2)

    # ========== Posun ==========

    def pan_by(self, dx: float, dy: float) -> None:
        t = self._transform
        self._set(replace(t, offset_x=t.offset_x + dx, offset_y=t.offset_y + dy))

    def set_offset(self, x: float, y: float) -> None:
        self._set(replace(self._transform, offset_x=float(x), offset_y=float(y)))

    # ========== Zoom ==========

    def set_scale(self, anchor: QPointF, new_scale: float) -> None:
        """
        Nastaví měřítko tak, aby bod světa pod kotvou zůstal na místě.

        new_offset = anchor - (anchor - old_offset) * (new_scale / old_scale)
        """
        t = self._transform
        new_scale = clamp(new_scale, MIN_SCALE, MAX_SCALE)
        ratio = new_scale / t.scale
        self._set(ViewportTransform(
            anchor.x() - (anchor.x() - t.offset_x) * ratio,
            anchor.y() - (anchor.y() - t.offset_y) * ratio,
            new_scale,
        ))

    def zoom_in(self) -> None:
        """Přiblíží pohled (kotva = střed plátna)."""
        self.set_scale(self.canvas_center(), self.scale * ZOOM_STEP)

    def zoom_out(self) -> None:
        """Oddálí pohled (kotva = střed plátna)."""
        self.set_scale(self.canvas_center(), self.scale / ZOOM_STEP)

    def reset_zoom(self) -> None:
        """Resetuje posun i měřítko."""
        self._set(ViewportTransform())

    def wheel_zoom(self, delta_y: float, anchor: QPointF) -> bool:
        """Jeden krok kolečka myši; kladné delta_y oddaluje, záporné přibližuje."""
        if delta_y == 0:
            return False
        factor = WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN
        self.set_scale(anchor, self.scale * factor)
        return True
