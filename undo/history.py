"""Lineární historie diagramu (undo/redo) postavená nad QUndoStack."""
from __future__ import annotations
import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QUndoStack

from flowchart.models import DiagramSnapshot
from undo.commands import SnapshotCommand

logger = logging.getLogger(__name__)


class HistoryManager(QObject):
    """
    Udržuje posloupnost snímků diagramu a kurzor do ní.

    Položka 0 je stav, kterým byla historie inicializována (typicky prázdný
    diagram). Každá další položka odpovídá jednomu příkazu na QUndoStack,
    kurzor je tedy přímo index zásobníku. Nový záznam po undo zahodí
    všechny položky za kurzorem (QUndoStack to dělá sám).
    """

    # Emitováno při každém posunu kurzoru (nový záznam, undo, redo)
    index_changed = Signal(int)

    def __init__(self, restore: Callable[[DiagramSnapshot], None],
                 undo_limit: int = 0, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._restore = restore
        self._seed: Optional[DiagramSnapshot] = None
        self.undo_stack = QUndoStack(self)
        if undo_limit > 0:
            # Limit lze nastavit jen na prázdném zásobníku
            self.undo_stack.setUndoLimit(undo_limit)
        self.undo_stack.indexChanged.connect(self.index_changed)

    # ========== Čtení ==========

    @property
    def cursor(self) -> int:
        """Index aktuální položky (-1 před prvním záznamem)."""
        if self._seed is None:
            return -1
        return self.undo_stack.index()

    def _command(self, index: int) -> SnapshotCommand:
        return self.undo_stack.command(index)

    def _first_entry(self) -> DiagramSnapshot:
        # Při překročení limitu QUndoStack maže nejstarší příkazy,
        # nejstarší zachovaný stav je pak "before" prvního příkazu.
        if self.undo_stack.count() > 0:
            return self._command(0).before
        return self._seed

    def entries(self) -> List[DiagramSnapshot]:
        """Vrátí všechny položky historie (včetně těch za kurzorem)."""
        if self._seed is None:
            return []
        result = [self._first_entry()]
        result.extend(self._command(i).after for i in range(self.undo_stack.count()))
        return result

    def current(self) -> Optional[DiagramSnapshot]:
        """Vrátí položku, na kterou ukazuje kurzor."""
        if self._seed is None:
            return None
        idx = self.undo_stack.index()
        if idx == 0:
            return self._first_entry()
        return self._command(idx - 1).after

    def can_undo(self) -> bool:
        return self.undo_stack.canUndo()

    def can_redo(self) -> bool:
        return self.undo_stack.canRedo()

    def undo_text(self) -> str:
        return self.undo_stack.undoText()

    def redo_text(self) -> str:
        return self.undo_stack.redoText()

    # ========== Změny ==========

    def record(self, snapshot: DiagramSnapshot, text: str = "Edit") -> None:
        """Přidá snímek za kurzor a zahodí případnou redo větev."""
        if self._seed is None:
            self._seed = snapshot
            self.index_changed.emit(0)
            return
        before = self.current()
        self.undo_stack.push(SnapshotCommand(self, before, snapshot, text))
        logger.debug("Recorded '%s' at index %d", text, self.undo_stack.index())

    def undo(self) -> bool:
        """Posune kurzor o krok zpět; na začátku historie nic nedělá."""
        if not self.can_undo():
            return False
        self.undo_stack.undo()
        return True

    def redo(self) -> bool:
        """Posune kurzor o krok vpřed; na konci historie nic nedělá."""
        if not self.can_redo():
            return False
        self.undo_stack.redo()
        return True

    def apply_snapshot(self, snapshot: DiagramSnapshot) -> None:
        """Nahradí živý diagram daným snímkem (volá SnapshotCommand)."""
        self._restore(snapshot)
