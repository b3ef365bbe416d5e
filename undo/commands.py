"""Příkazy pro undo/redo systém editoru.

Každá potvrzená změna diagramu (přidání, úprava, smazání, vyčištění) je
uložena jako SnapshotCommand, který nese snímek diagramu před změnou a po ní.
Undo obnoví snímek "před", redo snímek "po".
"""
from __future__ import annotations
from typing import TYPE_CHECKING
from PySide6.QtGui import QUndoCommand

from flowchart.models import DiagramSnapshot

if TYPE_CHECKING:
    from undo.history import HistoryManager


class SnapshotCommand(QUndoCommand):
    """
    Příkaz pro jeden krok historie.

    Redo: Obnoví snímek po změně
    Undo: Obnoví snímek před změnou
    """
    def __init__(self, history: "HistoryManager", before: DiagramSnapshot,
                 after: DiagramSnapshot, text: str = "Edit"):
        super().__init__(text)
        self.history = history
        self.before = before
        self.after = after
        # Změna už je v živém diagramu provedena, první redo (z push) ji nesmí opakovat
        self._applied = True

    def redo(self):
        """Obnoví stav po změně (kromě prvního volání při vložení na zásobník)."""
        if self._applied:
            self._applied = False
            return
        self.history.apply_snapshot(self.after)

    def undo(self):
        """Obnoví stav před změnou."""
        self.history.apply_snapshot(self.before)
