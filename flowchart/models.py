"""Datové modely pro reprezentaci prvků vývojového diagramu."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from PySide6.QtCore import QPointF

from constants import DEFAULT_EDGE_COLOR, DEFAULT_NODE_COLOR


@dataclass(frozen=True)
class NodeData:
    """
    Editovatelné vlastnosti uzlu.

    Attributes:
        label: Text zobrazený v uzlu
        description: Delší popis (může být prázdný)
        color: Barva výplně uzlu (hex řetězec)
    """
    label: str = ""
    description: str = ""
    color: str = DEFAULT_NODE_COLOR


@dataclass(frozen=True)
class FlowNode:
    """
    Reprezentuje jeden uzel v diagramu.

    Uzel je neměnná hodnota – každá úprava vytváří novou instanci, takže
    snímky historie nikdy nesdílí měnitelné části s živým diagramem.

    Attributes:
        id: Unikátní identifikátor uzlu
        kind: Typ uzlu ("start", "process", "decision", "end")
        x: X souřadnice levého horního rohu ve světových souřadnicích
        y: Y souřadnice levého horního rohu ve světových souřadnicích
        data: Popisek, popis a barva uzlu
    """
    id: str
    kind: str
    x: float
    y: float
    data: NodeData

    @property
    def position(self) -> QPointF:
        return QPointF(self.x, self.y)

    @property
    def label(self) -> str:
        return self.data.label


@dataclass(frozen=True)
class EdgeData:
    """
    Editovatelné vlastnosti hrany.

    Attributes:
        label: Volitelný popisek zobrazený uprostřed hrany
        color: Barva čáry a šipky
    """
    label: str = ""
    color: str = DEFAULT_EDGE_COLOR


@dataclass(frozen=True)
class FlowEdge:
    """
    Reprezentuje orientovanou hranu mezi dvěma uzly.

    Attributes:
        id: Unikátní identifikátor hrany
        source: ID zdrojového uzlu
        target: ID cílového uzlu
        data: Popisek a barva hrany
    """
    id: str
    source: str
    target: str
    data: EdgeData = EdgeData()

    def touches(self, node_id: str) -> bool:
        """Vrátí True, pokud hrana začíná nebo končí v daném uzlu."""
        return self.source == node_id or self.target == node_id


@dataclass(frozen=True)
class Selection:
    """Aktuálně vybraný prvek – buď uzel, nebo hrana."""
    kind: str  # "node" | "edge"
    id: str

    @classmethod
    def node(cls, node_id: str) -> "Selection":
        return cls("node", node_id)

    @classmethod
    def edge(cls, edge_id: str) -> "Selection":
        return cls("edge", edge_id)


@dataclass(frozen=True)
class DiagramSnapshot:
    """Neměnný snímek diagramu (položka historie)."""
    nodes: Tuple[FlowNode, ...] = ()
    edges: Tuple[FlowEdge, ...] = ()

    def node(self, node_id: str) -> Optional[FlowNode]:
        return next((n for n in self.nodes if n.id == node_id), None)

    def edge(self, edge_id: str) -> Optional[FlowEdge]:
        return next((e for e in self.edges if e.id == edge_id), None)
