import random

import pytest
from PySide6.QtCore import QPointF

from constants import DEFAULT_EDGE_COLOR, DEFAULT_NODE_COLOR, NodeKind
from flowchart.models import NodeData, Selection
from flowchart.store import coerce_point, default_label


def assert_referential_integrity(store):
    ids = {n.id for n in store.nodes()}
    for edge in store.edges():
        assert edge.source in ids
        assert edge.target in ids


def test_add_node_defaults(store):
    node_id = store.add_node(NodeKind.PROCESS, QPointF(10, 20))
    node = store.node(node_id)
    assert node.kind == NodeKind.PROCESS
    assert (node.x, node.y) == (10, 20)
    assert node.data == NodeData("Process Node", "", DEFAULT_NODE_COLOR)
    assert node_id.startswith("node_")


def test_add_node_ids_are_unique(store):
    ids = {store.add_node(NodeKind.START, (0, 0)) for _ in range(50)}
    assert len(ids) == 50


def test_add_node_rejects_unknown_kind(store):
    with pytest.raises(ValueError):
        store.add_node("subroutine", (0, 0))
    assert store.nodes() == []
    assert store.history.cursor == 0


def test_position_formats():
    assert coerce_point(QPointF(1, 2)) == (1, 2)
    assert coerce_point({"x": 3, "y": 4}) == (3, 4)
    assert coerce_point((5, 6)) == (5, 6)
    assert default_label(NodeKind.DECISION) == "Decision Node"


def test_update_node_merges_fields(store):
    node_id = store.add_node(NodeKind.START, (0, 0))
    assert store.update_node(node_id, {"position": {"x": 50, "y": 60}}, label="Begin")
    node = store.node(node_id)
    assert (node.x, node.y) == (50, 60)
    assert node.label == "Begin"
    assert node.data.color == DEFAULT_NODE_COLOR

    store.update_node(node_id, description="entry point")
    node = store.node(node_id)
    assert node.data.description == "entry point"
    assert node.label == "Begin"


def test_update_node_replaces_whole_data(store):
    node_id = store.add_node(NodeKind.END, (0, 0))
    store.update_node(node_id, data=NodeData("Done", "finish", "#ff0000"))
    assert store.node(node_id).data == NodeData("Done", "finish", "#ff0000")


def test_update_node_data_mapping_replaces_bundle(store):
    node_id = store.add_node(NodeKind.PROCESS, (0, 0))
    store.update_node(node_id, label="Load", color="#123456")
    assert store.update_node(node_id, data={"description": "read input"})
    # vynechaná pole se nevezmou z původních dat
    assert store.node(node_id).data == NodeData(description="read input")
    assert store.node(node_id).data.color == DEFAULT_NODE_COLOR


@pytest.mark.parametrize("changes", [
    {"label": None},
    {"description": 42},
    {"data": {"label": None}},
    {"data": NodeData(label=None)},
])
def test_update_node_rejects_non_text_values(store, changes):
    node_id = store.add_node(NodeKind.START, (0, 0))
    cursor = store.history.cursor
    with pytest.raises(TypeError):
        store.update_node(node_id, changes)
    assert store.node(node_id).label == "Start Node"
    assert store.history.cursor == cursor


def test_update_node_without_change_records_nothing(store):
    node_id = store.add_node(NodeKind.START, (0, 0))
    cursor = store.history.cursor
    assert not store.update_node(node_id, label="Start Node")
    assert store.history.cursor == cursor


def test_update_node_ignores_unknown_keys(store):
    node_id = store.add_node(NodeKind.START, (0, 0))
    assert not store.update_node(node_id, width=300)


def test_update_node_rejects_unknown_kind(store):
    node_id = store.add_node(NodeKind.START, (0, 0))
    with pytest.raises(ValueError):
        store.update_node(node_id, kind="loop")


def test_operations_on_missing_ids_are_noops(store):
    cursor = store.history.cursor
    assert not store.update_node("nope", label="x")
    assert not store.delete_node("nope")
    assert not store.update_edge("nope", label="x")
    assert not store.delete_edge("nope")
    assert store.history.cursor == cursor


def test_delete_node_removes_exactly_incident_edges(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.PROCESS, (200, 0))
    c = store.add_node(NodeKind.END, (400, 0))
    store.add_edge(a, b)
    store.add_edge(b, c)
    keep = store.add_edge(a, c)

    cursor = store.history.cursor
    assert store.delete_node(b)
    assert [e.id for e in store.edges()] == [keep]
    assert {n.id for n in store.nodes()} == {a, c}
    # uzel i hrany jsou jeden krok historie
    assert store.history.cursor == cursor + 1
    assert_referential_integrity(store)


def test_delete_node_clears_related_selection(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge_id = store.add_edge(a, b)

    store.select_edge(edge_id)
    store.delete_node(a)
    assert store.selection() is None

    c = store.add_node(NodeKind.PROCESS, (0, 200))
    store.select_node(c)
    store.delete_node(b)
    assert store.selection() == Selection.node(c)


def test_add_edge_defaults(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge = store.edge(store.add_edge(a, b))
    assert (edge.source, edge.target) == (a, b)
    assert edge.data.label == ""
    assert edge.data.color == DEFAULT_EDGE_COLOR


def test_self_connection_is_noop(store):
    a = store.add_node(NodeKind.PROCESS, (0, 0))
    cursor = store.history.cursor
    assert store.add_edge(a, a) is None
    assert len(store.nodes()) == 1
    assert store.edges() == []
    assert store.history.cursor == cursor


def test_add_edge_to_missing_node_is_noop(store):
    a = store.add_node(NodeKind.PROCESS, (0, 0))
    assert store.add_edge(a, "missing") is None
    assert store.add_edge("missing", a) is None
    assert store.edges() == []


def test_update_and_delete_edge(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge_id = store.add_edge(a, b)
    assert store.update_edge(edge_id, label="yes", color="#00ff00")
    assert store.edge(edge_id).data.label == "yes"
    assert store.edge(edge_id).data.color == "#00ff00"

    store.select_edge(edge_id)
    assert store.selected_edge().id == edge_id
    assert store.delete_edge(edge_id)
    assert store.selection() is None
    assert store.edges() == []


@pytest.mark.parametrize("changes", [{"color": None}, {"label": 1}, {"data": {"color": None}}])
def test_update_edge_rejects_non_text_values(store, changes):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge_id = store.add_edge(a, b)
    with pytest.raises(TypeError):
        store.update_edge(edge_id, changes)
    assert store.edge(edge_id).data.color == DEFAULT_EDGE_COLOR


def test_update_edge_data_mapping_replaces_bundle(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge_id = store.add_edge(a, b)
    store.update_edge(edge_id, label="yes", color="#00ff00")
    assert store.update_edge(edge_id, data={"label": "no"})
    assert store.edge(edge_id).data.label == "no"
    assert store.edge(edge_id).data.color == DEFAULT_EDGE_COLOR


def test_selection_is_single(store):
    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    edge_id = store.add_edge(a, b)

    store.select_node(a)
    assert store.selected_node().id == a
    store.select_edge(edge_id)
    assert store.selected_node() is None
    assert store.selected_edge().id == edge_id
    store.select_node("missing")
    assert store.selection() is None


def test_selection_does_not_touch_history(store):
    a = store.add_node(NodeKind.START, (0, 0))
    cursor = store.history.cursor
    store.select_node(a)
    store.clear_selection()
    assert store.history.cursor == cursor


def test_clear(store):
    assert not store.clear()
    assert store.history.cursor == 0

    a = store.add_node(NodeKind.START, (0, 0))
    b = store.add_node(NodeKind.END, (200, 0))
    store.add_edge(a, b)
    store.select_node(a)
    assert store.clear()
    assert store.nodes() == [] and store.edges() == []
    assert store.selection() is None
    store.undo()
    assert len(store.nodes()) == 2 and len(store.edges()) == 1


def test_signals(store):
    changed, selected = [], []
    store.changed.connect(lambda: changed.append(1))
    store.selection_changed.connect(lambda: selected.append(1))
    node_id = store.add_node(NodeKind.START, (0, 0))
    store.select_node(node_id)
    store.select_node(node_id)
    assert len(changed) == 1
    assert len(selected) == 1


def test_live_update_is_not_recorded(store):
    node_id = store.add_node(NodeKind.START, (0, 0))
    cursor = store.history.cursor
    assert store.update_node(node_id, position=(30, 40), record=False)
    assert store.history.cursor == cursor
    assert store.commit("Move node")
    assert store.history.cursor == cursor + 1
    assert not store.commit("Move node")


def test_referential_integrity_under_random_edits(store):
    rng = random.Random(1234)
    for _ in range(300):
        nodes = store.nodes()
        action = rng.random()
        if action < 0.35 or not nodes:
            store.add_node(rng.choice(NodeKind.ALL), (rng.uniform(0, 500), rng.uniform(0, 500)))
        elif action < 0.7:
            store.add_edge(rng.choice(nodes).id, rng.choice(nodes).id)
        elif action < 0.8:
            store.delete_node(rng.choice(nodes).id)
        elif action < 0.85 and store.edges():
            store.delete_edge(rng.choice(store.edges()).id)
        elif action < 0.93:
            store.undo()
        else:
            store.redo()
        assert_referential_integrity(store)
