"""Stavový automat interakce s plátnem.

Převádí nízkoúrovňové události z prezentační vrstvy (stisk/pohyb/uvolnění
ukazatele, kolečko, drop z palety, klávesy) na operace nad úložištěm
diagramu a pohledem.

Stavy:
- Idle: nic neprobíhá
- PanningCanvas: posouvání plátna tažením pozadí
- DraggingNode: přesouvání uzlu
- Connecting: tažení nové hrany z připojovacího bodu uzlu
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from PySide6.QtCore import QObject, QPointF, Signal

from canvas.geometry import BACKGROUND, HitTarget, node_center, screen_to_world
from canvas.viewport import ViewportController
from constants import NodeKind, TargetKind
from flowchart.store import DiagramStore

logger = logging.getLogger(__name__)


# === Stavy ===

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PanningCanvas:
    """Bod stisku (obrazovka) a posun pohledu v okamžiku stisku."""
    press_x: float
    press_y: float
    start_offset_x: float
    start_offset_y: float


@dataclass(frozen=True)
class DraggingNode:
    """Tažený uzel a odsazení ukazatele od jeho levého horního rohu (svět)."""
    node_id: str
    grab_dx: float
    grab_dy: float


@dataclass(frozen=True)
class Connecting:
    source_node_id: str


InteractionState = Union[Idle, PanningCanvas, DraggingNode, Connecting]
IDLE = Idle()

_DELETE_KEYS = {"delete", "backspace"}
_COMMAND_MODIFIERS = {"ctrl", "meta"}


class InteractionMachine(QObject):
    """
    Interpretuje gesta ukazatele a klávesové příkazy.

    Všechny handlery běží synchronně do konce; další událost vždy vidí stav
    potvrzený tou předchozí.
    """

    state_changed = Signal()
    guide_changed = Signal()  # Změna pomocné čáry při tažení hrany

    def __init__(self, store: DiagramStore, viewport: ViewportController,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.store = store
        self.viewport = viewport
        self._state: InteractionState = IDLE
        self._guide_end: Optional[QPointF] = None

    # ========== Stav ==========

    @property
    def state(self) -> InteractionState:
        return self._state

    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    def is_connecting(self) -> bool:
        return isinstance(self._state, Connecting)

    def _set_state(self, state: InteractionState) -> None:
        if state == self._state:
            return
        logger.debug("Interaction %s -> %s", type(self._state).__name__, type(state).__name__)
        self._state = state
        self.state_changed.emit()

    def _to_world(self, screen: QPointF) -> QPointF:
        return screen_to_world(screen, self.viewport.transform)

    def guide_line(self) -> Optional[Tuple[QPointF, QPointF]]:
        """Pomocná čára od středu zdrojového uzlu k ukazateli (svět), jen při Connecting."""
        if not isinstance(self._state, Connecting) or self._guide_end is None:
            return None
        source = self.store.node(self._state.source_node_id)
        if source is None:
            return None
        return node_center(source), QPointF(self._guide_end)

    def _set_guide(self, end: Optional[QPointF]) -> None:
        self._guide_end = end
        self.guide_changed.emit()

    # ========== Ukazatel ==========

    def pointer_down(self, screen: QPointF, target: HitTarget = BACKGROUND) -> None:
        """Začátek gesta podle toho, co je pod ukazatelem."""
        if not self.is_idle():
            return

        if target.kind == TargetKind.BACKGROUND:
            self.store.clear_selection()
            t = self.viewport.transform
            self._set_state(PanningCanvas(screen.x(), screen.y(), t.offset_x, t.offset_y))

        elif target.kind == TargetKind.NODE:
            node = self.store.node(target.id)
            if node is None:
                return
            self.store.select_node(node.id)
            world = self._to_world(screen)
            self._set_state(DraggingNode(node.id, world.x() - node.x, world.y() - node.y))

        elif target.kind == TargetKind.HANDLE:
            if self.store.node(target.id) is None:
                return
            self._set_state(Connecting(target.id))
            self._set_guide(self._to_world(screen))

        elif target.kind == TargetKind.EDGE:
            self.store.select_edge(target.id)

    def pointer_move(self, screen: QPointF) -> None:
        state = self._state
        if isinstance(state, PanningCanvas):
            self.viewport.set_offset(
                state.start_offset_x + screen.x() - state.press_x,
                state.start_offset_y + screen.y() - state.press_y,
            )
        elif isinstance(state, DraggingNode):
            world = self._to_world(screen)
            x = max(0.0, world.x() - state.grab_dx)
            y = max(0.0, world.y() - state.grab_dy)
            # Náhled bez zápisu do historie, potvrzení až při uvolnění
            self.store.update_node(state.node_id, position=(x, y), record=False)
        elif isinstance(state, Connecting):
            self._set_guide(self._to_world(screen))

    def pointer_up(self, screen: QPointF, target: HitTarget = BACKGROUND) -> None:
        """Konec gesta; při Connecting nad jiným uzlem vznikne hrana."""
        state = self._state
        if isinstance(state, Connecting):
            if target.kind in (TargetKind.NODE, TargetKind.HANDLE) and target.id != state.source_node_id:
                self.store.add_edge(state.source_node_id, target.id)
            self._set_guide(None)
            self._set_state(IDLE)
        else:
            self.end_gesture()

    def end_gesture(self) -> None:
        """
        Ukončí probíhající gesto a vrátí automat do Idle.

        Přesun uzlu se potvrdí jedním záznamem historie, rozpracovaná hrana
        se zahodí bez změny diagramu.
        """
        state = self._state
        if isinstance(state, DraggingNode):
            self.store.commit("Move node")
        elif isinstance(state, Connecting):
            self._set_guide(None)
        self._set_state(IDLE)

    # ========== Kolečko a drop ==========

    def wheel(self, delta_y: float, screen: QPointF) -> bool:
        """Zoom kolečkem s kotvou pod ukazatelem; během gesta se ignoruje."""
        if not self.is_idle():
            return False
        return self.viewport.wheel_zoom(delta_y, screen)

    def drop(self, kind: str, screen: QPointF) -> Optional[str]:
        """Přidá uzel z palety na místo pod ukazatelem."""
        if not self.is_idle():
            return None
        if kind not in NodeKind.ALL:
            logger.warning("Ignoring drop with unknown node kind %r", kind)
            return None
        return self.store.add_node(kind, self._to_world(screen))

    # ========== Klávesnice ==========

    def key_down(self, key: str, modifiers: Iterable[str] = (),
                 text_input_focused: bool = False) -> bool:
        """
        Zpracuje klávesový příkaz.

        Args:
            key: Název klávesy ("z", "Delete", "Escape", "+", ...)
            modifiers: Stisknuté modifikátory ("ctrl", "meta", "shift", "alt")
            text_input_focused: Fokus je v textovém poli – zkratky se ignorují

        Returns:
            True, pokud byla klávesa zpracována
        """
        if text_input_focused:
            return False
        mods = {m.lower() for m in modifiers}
        name = key.lower()

        if mods & _COMMAND_MODIFIERS:
            action = {
                "z": self.store.redo if "shift" in mods else self.store.undo,
                "y": self.store.redo,
                "=": self.viewport.zoom_in,
                "+": self.viewport.zoom_in,
                "-": self.viewport.zoom_out,
                "0": self.viewport.reset_zoom,
            }.get(name)
            if action is None:
                return False
            self.end_gesture()
            action()
            return True

        if name in _DELETE_KEYS:
            self.end_gesture()
            node = self.store.selected_node()
            edge = self.store.selected_edge()
            if node is not None:
                self.store.delete_node(node.id)
            elif edge is not None:
                self.store.delete_edge(edge.id)
            return True

        if name == "escape":
            self.store.clear_selection()
            self.end_gesture()
            return True

        return False
