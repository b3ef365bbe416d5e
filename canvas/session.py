"""Kontext jedné editační relace.

EditorSession spojuje úložiště diagramu, historii, pohled a stavový automat
interakce a drží přechodný stav UI (téma, typ uzlu tažený z palety).
Prezentační vrstva dostává instanci relace explicitně – nic z toho není
globální.
"""
from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional

from PySide6.QtCore import QObject, QPointF, Signal

from canvas.geometry import BACKGROUND, HitTarget
from canvas.interaction import InteractionMachine
from canvas.viewport import ViewportController, ViewportTransform
from config import EditorConfig
from constants import NodeKind, THEMES
from flowchart.models import FlowEdge, FlowNode, Selection
from flowchart.store import DiagramStore

logger = logging.getLogger(__name__)


class EditorSession(QObject):
    """Veřejné API jádra editoru pro prezentační vrstvu."""

    theme_changed = Signal(str)
    palette_drag_changed = Signal()

    def __init__(self, config: Optional[EditorConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.config = config or EditorConfig()
        self.store = DiagramStore(undo_limit=self.config.undo_limit, parent=self)
        self.history = self.store.history
        self.viewport = ViewportController(self)
        self.interaction = InteractionMachine(self.store, self.viewport, self)
        self._theme = self.config.theme
        self._palette_payload: Optional[str] = None

    # ========== Čtení ==========

    def get_nodes(self) -> List[FlowNode]:
        return self.store.nodes()

    def get_edges(self) -> List[FlowEdge]:
        return self.store.edges()

    def get_selection(self) -> Optional[Selection]:
        return self.store.selection()

    def get_viewport_transform(self) -> ViewportTransform:
        return self.viewport.transform

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ========== Diagram ==========

    def add_node(self, kind: str, position: Any) -> str:
        return self.store.add_node(kind, position)

    def update_node(self, node_id: str, changes: Optional[Mapping[str, Any]] = None, **fields: Any) -> bool:
        return self.store.update_node(node_id, changes, **fields)

    def delete_node(self, node_id: str) -> bool:
        return self.store.delete_node(node_id)

    def add_edge(self, source_id: str, target_id: str) -> Optional[str]:
        return self.store.add_edge(source_id, target_id)

    def update_edge(self, edge_id: str, changes: Optional[Mapping[str, Any]] = None, **fields: Any) -> bool:
        return self.store.update_edge(edge_id, changes, **fields)

    def delete_edge(self, edge_id: str) -> bool:
        return self.store.delete_edge(edge_id)

    def select(self, selection: Optional[Selection]) -> None:
        self.store.select(selection)

    def clear(self) -> bool:
        self.interaction.end_gesture()
        return self.store.clear()

    def undo(self) -> bool:
        self.interaction.end_gesture()
        return self.store.undo()

    def redo(self) -> bool:
        self.interaction.end_gesture()
        return self.store.redo()

    # ========== Pohled ==========

    def zoom_in(self) -> None:
        self.viewport.zoom_in()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()

    def reset_zoom(self) -> None:
        self.viewport.reset_zoom()

    def pan_by(self, dx: float, dy: float) -> None:
        self.viewport.pan_by(dx, dy)

    def set_scale(self, anchor: QPointF, new_scale: float) -> None:
        self.viewport.set_scale(anchor, new_scale)

    # ========== Vstupní události ==========

    def pointer_down(self, screen: QPointF, target: HitTarget = BACKGROUND) -> None:
        self.interaction.pointer_down(screen, target)

    def pointer_move(self, screen: QPointF) -> None:
        self.interaction.pointer_move(screen)

    def pointer_up(self, screen: QPointF, target: HitTarget = BACKGROUND) -> None:
        self.interaction.pointer_up(screen, target)

    def wheel(self, delta_y: float, screen: QPointF) -> bool:
        return self.interaction.wheel(delta_y, screen)

    def drop(self, kind: str, screen: QPointF) -> Optional[str]:
        node_id = self.interaction.drop(kind, screen)
        self.end_palette_drag()
        return node_id

    def key_down(self, key: str, modifiers: Iterable[str] = (),
                 text_input_focused: bool = False) -> bool:
        return self.interaction.key_down(key, modifiers, text_input_focused)

    # ========== Přechodný stav UI ==========

    @property
    def theme(self) -> str:
        return self._theme

    def toggle_theme(self) -> str:
        """Přepne světlé/tmavé téma a vrátí nové."""
        self._theme = THEMES[1] if self._theme == THEMES[0] else THEMES[0]
        self.theme_changed.emit(self._theme)
        return self._theme

    @property
    def palette_payload(self) -> Optional[str]:
        """Typ uzlu, který uživatel právě táhne z palety (nebo None)."""
        return self._palette_payload

    def begin_palette_drag(self, kind: str) -> None:
        if kind not in NodeKind.ALL:
            logger.warning("Ignoring palette drag of unknown kind %r", kind)
            return
        self._palette_payload = kind
        self.palette_drag_changed.emit()

    def end_palette_drag(self) -> None:
        if self._palette_payload is None:
            return
        self._palette_payload = None
        self.palette_drag_changed.emit()
