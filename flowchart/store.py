"""Autoritativní úložiště diagramu (uzly, hrany, výběr).

Každá strukturální operace je bodem potvrzení: po jejím úplném provedení
(včetně závislých změn, např. smazání hran u mazaného uzlu) se zaznamená
jeden snímek do historie. Operace nad neexistujícím ID nic nedělají –
události z UI se mohou křížit s mazáním.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from PySide6.QtCore import QObject, QPointF, Signal

from constants import NodeKind
from flowchart.models import (
    DiagramSnapshot, EdgeData, FlowEdge, FlowNode, NodeData, Selection,
)
from undo.history import HistoryManager
from utils.ids import next_id

logger = logging.getLogger(__name__)

_NODE_DATA_FIELDS = ("label", "description", "color")
_EDGE_DATA_FIELDS = ("label", "color")


def default_label(kind: str) -> str:
    """Výchozí popisek nového uzlu, např. "Process Node"."""
    return f"{kind.capitalize()} Node"


def coerce_point(value: Any) -> Tuple[float, float]:
    """Převede QPointF, mapping {"x", "y"} nebo dvojici na (x, y)."""
    if isinstance(value, QPointF):
        return value.x(), value.y()
    if isinstance(value, Mapping):
        return float(value["x"]), float(value["y"])
    x, y = value
    return float(x), float(y)


def _check_text(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} must be a string, got {type(value).__name__}")
    return value


def _replace_data(current, value, fields):
    """
    Nahradí celou sadu vlastností.

    Mapping se převede na novou instanci; vynechaná pole dostanou
    výchozí hodnoty dataclassu, nic se neslučuje s původními daty.
    """
    if isinstance(value, type(current)):
        for key in fields:
            _check_text(key, getattr(value, key))
        return value
    if not isinstance(value, Mapping):
        raise TypeError(f"Expected {type(current).__name__} or mapping, got {type(value).__name__}")
    known = {}
    for key, item in value.items():
        if key in fields:
            known[key] = _check_text(key, item)
        else:
            logger.warning("Ignoring unknown data field %r", key)
    return type(current)(**known)


class DiagramStore(QObject):
    """
    Vlastní množinu uzlů a hran a jediný vybraný prvek.

    Signály:
        changed: obsah diagramu se změnil (potvrzeně i během tažení)
        selection_changed: změnil se vybraný prvek
    """

    changed = Signal()
    selection_changed = Signal()

    def __init__(self, undo_limit: int = 0, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._nodes: Dict[str, FlowNode] = {}
        self._edges: Dict[str, FlowEdge] = {}
        self._selection: Optional[Selection] = None
        self.history = HistoryManager(self._restore, undo_limit, self)
        # Položka 0 historie = prázdný diagram
        self.history.record(self.snapshot(), "New diagram")

    # ========== Čtení ==========

    def nodes(self) -> List[FlowNode]:
        return list(self._nodes.values())

    def edges(self) -> List[FlowEdge]:
        return list(self._edges.values())

    def node(self, node_id: str) -> Optional[FlowNode]:
        return self._nodes.get(node_id)

    def edge(self, edge_id: str) -> Optional[FlowEdge]:
        return self._edges.get(edge_id)

    def incident_edges(self, node_id: str) -> List[FlowEdge]:
        """Vrátí všechny hrany, které začínají nebo končí v daném uzlu."""
        return [e for e in self._edges.values() if e.touches(node_id)]

    def selection(self) -> Optional[Selection]:
        return self._selection

    def selected_node(self) -> Optional[FlowNode]:
        if self._selection and self._selection.kind == "node":
            return self._nodes.get(self._selection.id)
        return None

    def selected_edge(self) -> Optional[FlowEdge]:
        if self._selection and self._selection.kind == "edge":
            return self._edges.get(self._selection.id)
        return None

    def snapshot(self) -> DiagramSnapshot:
        return DiagramSnapshot(tuple(self._nodes.values()), tuple(self._edges.values()))

    # ========== Potvrzení a obnova ==========

    def commit(self, text: str = "Edit") -> bool:
        """
        Zaznamená aktuální stav do historie.

        Pokud se stav od aktuální položky historie neliší, nic nezaznamená.
        Volá se po každé strukturální změně a na konci gesta tažení uzlu.
        """
        snap = self.snapshot()
        if snap == self.history.current():
            return False
        self.history.record(snap, text)
        return True

    def _finish(self, text: str, record: bool = True) -> None:
        # Snímek se pořizuje až po dokončení celé změny, pak teprve notifikace
        if record:
            self.commit(text)
        self.changed.emit()

    def _restore(self, snapshot: DiagramSnapshot) -> None:
        """Nahradí živý diagram snímkem z historie a zruší výběr."""
        self._nodes = {n.id: n for n in snapshot.nodes}
        self._edges = {e.id: e for e in snapshot.edges}
        self._set_selection(None)
        self.changed.emit()

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # ========== Uzly ==========

    def add_node(self, kind: str, position: Any) -> str:
        """Přidá nový uzel s výchozími vlastnostmi a vrátí jeho ID."""
        if kind not in NodeKind.ALL:
            raise ValueError(f"Unknown node kind: {kind!r}")
        x, y = coerce_point(position)
        node = FlowNode(next_id("node"), kind, x, y, NodeData(default_label(kind)))
        self._nodes[node.id] = node
        logger.debug("Added %s node %s at (%.1f, %.1f)", kind, node.id, x, y)
        self._finish(f"Add {kind}")
        return node.id

    def update_node(self, node_id: str, changes: Optional[Mapping[str, Any]] = None,
                    *, record: bool = True, **fields: Any) -> bool:
        """
        Sloučí zadané vlastnosti do uzlu.

        Podporované klíče: "position", "data" (nahradí celou sadu vlastností),
        "label", "description", "color" (jednotlivá pole, jen řetězce) a "kind".
        S record=False se změna jen promítne do živého diagramu
        (náhled během tažení) a do historie se nezapíše.

        Returns:
            True, pokud se uzel změnil
        """
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug("update_node: no node %s", node_id)
            return False
        merged = dict(changes or {})
        merged.update(fields)

        x, y, kind, data = node.x, node.y, node.kind, node.data
        for key, value in merged.items():
            if key == "position":
                x, y = coerce_point(value)
            elif key == "data":
                data = _replace_data(data, value, _NODE_DATA_FIELDS)
            elif key in _NODE_DATA_FIELDS:
                data = replace(data, **{key: _check_text(key, value)})
            elif key == "kind":
                if value not in NodeKind.ALL:
                    raise ValueError(f"Unknown node kind: {value!r}")
                kind = value
            else:
                logger.warning("Ignoring unknown node attribute %r", key)

        updated = FlowNode(node.id, kind, x, y, data)
        if updated == node:
            return False
        self._nodes[node_id] = updated
        self._finish("Edit node", record)
        return True

    def delete_node(self, node_id: str) -> bool:
        """Smaže uzel i všechny hrany, které na něj vedou nebo z něj vychází."""
        if node_id not in self._nodes:
            logger.debug("delete_node: no node %s", node_id)
            return False
        removed_edges = [e.id for e in self._edges.values() if e.touches(node_id)]
        # Nejdřív hrany, pak uzel – snímek se pořizuje až po obojím
        for edge_id in removed_edges:
            del self._edges[edge_id]
        del self._nodes[node_id]

        sel = self._selection
        if sel and (sel.id == node_id or (sel.kind == "edge" and sel.id in removed_edges)):
            self._set_selection(None)
        logger.debug("Deleted node %s with %d edge(s)", node_id, len(removed_edges))
        self._finish("Delete node")
        return True

    # ========== Hrany ==========

    def add_edge(self, source_id: str, target_id: str) -> Optional[str]:
        """
        Propojí dva existující uzly orientovanou hranou.

        Smyčka (source == target) ani hrana k neexistujícímu uzlu se nevytvoří.

        Returns:
            ID nové hrany, nebo None, pokud se hrana nevytvořila
        """
        if source_id == target_id:
            logger.debug("add_edge: self-connection on %s rejected", source_id)
            return None
        if source_id not in self._nodes or target_id not in self._nodes:
            logger.debug("add_edge: missing endpoint %s -> %s", source_id, target_id)
            return None
        edge = FlowEdge(next_id("edge"), source_id, target_id, EdgeData())
        self._edges[edge.id] = edge
        self._finish("Add connection")
        return edge.id

    def update_edge(self, edge_id: str, changes: Optional[Mapping[str, Any]] = None,
                    **fields: Any) -> bool:
        """Sloučí zadané vlastnosti ("data" nahradí celou sadu, "label", "color") do hrany."""
        edge = self._edges.get(edge_id)
        if edge is None:
            logger.debug("update_edge: no edge %s", edge_id)
            return False
        merged = dict(changes or {})
        merged.update(fields)

        data = edge.data
        for key, value in merged.items():
            if key == "data":
                data = _replace_data(data, value, _EDGE_DATA_FIELDS)
            elif key in _EDGE_DATA_FIELDS:
                data = replace(data, **{key: _check_text(key, value)})
            else:
                logger.warning("Ignoring unknown edge attribute %r", key)

        if data == edge.data:
            return False
        self._edges[edge_id] = replace(edge, data=data)
        self._finish("Edit connection")
        return True

    def delete_edge(self, edge_id: str) -> bool:
        """Smaže hranu; pokud byla vybraná, zruší výběr."""
        if edge_id not in self._edges:
            logger.debug("delete_edge: no edge %s", edge_id)
            return False
        del self._edges[edge_id]
        if self._selection == Selection.edge(edge_id):
            self._set_selection(None)
        self._finish("Delete connection")
        return True

    # ========== Výběr ==========

    def _set_selection(self, selection: Optional[Selection]) -> None:
        if selection == self._selection:
            return
        self._selection = selection
        self.selection_changed.emit()

    def select(self, selection: Optional[Selection]) -> None:
        """Vybere uzel nebo hranu (druhý druh výběru se tím zruší)."""
        if selection is not None:
            pool = self._nodes if selection.kind == "node" else self._edges
            if selection.id not in pool:
                logger.debug("select: no %s %s", selection.kind, selection.id)
                selection = None
        self._set_selection(selection)

    def select_node(self, node_id: str) -> None:
        self.select(Selection.node(node_id))

    def select_edge(self, edge_id: str) -> None:
        self.select(Selection.edge(edge_id))

    def clear_selection(self) -> None:
        self._set_selection(None)

    # ========== Celý diagram ==========

    def clear(self) -> bool:
        """Smaže všechny uzly a hrany."""
        self._set_selection(None)
        if not self._nodes and not self._edges:
            return False
        self._nodes.clear()
        self._edges.clear()
        self._finish("Clear all")
        return True
