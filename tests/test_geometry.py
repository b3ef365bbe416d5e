import pytest
from PySide6.QtCore import QPointF

from canvas.geometry import (
    BACKGROUND,
    arrow_placement,
    clamp,
    edge_control_points,
    edge_hit_shape,
    edge_midpoint,
    handle_points,
    hit_test,
    node_center,
    node_rect,
    node_shape,
    node_size,
    paint_order,
    screen_to_world,
    world_to_screen,
)
from canvas.viewport import ViewportTransform
from constants import NodeKind, TargetKind
from flowchart.models import FlowEdge, FlowNode, NodeData


def make_node(node_id, kind=NodeKind.PROCESS, x=0.0, y=0.0):
    return FlowNode(node_id, kind, x, y, NodeData(node_id))


def test_node_sizes_per_kind():
    assert node_size(NodeKind.PROCESS) == (150, 100)
    assert node_size(NodeKind.START) == (80, 80)
    assert node_size(NodeKind.DECISION) == (80, 80)
    assert node_size(NodeKind.END) == (80, 80)


def test_node_rect_and_center():
    node = make_node("n", NodeKind.PROCESS, 10, 20)
    rect = node_rect(node)
    assert (rect.x(), rect.y(), rect.width(), rect.height()) == (10, 20, 150, 100)
    assert node_center(node) == QPointF(85, 70)


def test_handle_points_are_edge_midpoints():
    node = make_node("n", NodeKind.START)
    points = [(p.x(), p.y()) for p in handle_points(node)]
    assert points == [(40, 0), (40, 80), (0, 40), (80, 40)]


def test_screen_world_conversion_is_inverse():
    t = ViewportTransform(offset_x=100, offset_y=50, scale=2)
    world = screen_to_world(QPointF(300, 150), t)
    assert (world.x(), world.y()) == (100, 50)
    back = world_to_screen(world, t)
    assert (back.x(), back.y()) == (300, 150)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_control_points_offset_is_proportional_to_distance():
    c1, c2 = edge_control_points(QPointF(0, 0), QPointF(100, 0))
    assert (c1.x(), c1.y()) == pytest.approx((30, 0))
    assert (c2.x(), c2.y()) == pytest.approx((70, 0))


def test_control_points_offset_is_capped():
    c1, c2 = edge_control_points(QPointF(0, 0), QPointF(1000, 0))
    assert c1.x() == pytest.approx(100)
    assert c2.x() == pytest.approx(900)


def test_control_points_follow_direction():
    c1, c2 = edge_control_points(QPointF(100, 0), QPointF(0, 0))
    assert c1.x() == pytest.approx(70)
    assert c2.x() == pytest.approx(30)


def test_arrow_sits_before_target():
    arrow = arrow_placement(QPointF(0, 0), QPointF(100, 0))
    assert arrow.x == pytest.approx(85)
    assert arrow.y == pytest.approx(0)
    assert arrow.angle == pytest.approx(0)

    down = arrow_placement(QPointF(0, 0), QPointF(0, 100))
    assert (down.x, down.y) == pytest.approx((0, 85))
    assert down.angle == pytest.approx(90)


def test_arrow_for_zero_length_edge():
    arrow = arrow_placement(QPointF(5, 5), QPointF(5, 5))
    assert (arrow.x, arrow.y, arrow.angle) == (5, 5, 0)


def test_edge_midpoint():
    mid = edge_midpoint(QPointF(0, 0), QPointF(100, 40))
    assert (mid.x(), mid.y()) == (50, 20)


def test_edge_hit_shape_follows_curve():
    a, b = QPointF(0, 40), QPointF(400, 40)
    shape = edge_hit_shape(a, b)
    assert shape.contains(QPointF(200, 44))
    assert shape.contains(QPointF(0, 40))
    assert not shape.contains(QPointF(200, 50))
    # při oddálení je pás ve světových souřadnicích širší
    assert edge_hit_shape(a, b, scale=0.5).contains(QPointF(200, 50))


def test_hit_test_node_handle_and_background():
    node = make_node("n")
    assert hit_test(QPointF(75, 50), [node], []) == (TargetKind.NODE, "n")
    assert hit_test(QPointF(75, 0), [node], []) == (TargetKind.HANDLE, "n")
    assert hit_test(QPointF(500, 500), [node], []) == BACKGROUND


def test_hit_test_prefers_topmost_node():
    below = make_node("below", x=0)
    above = make_node("above", x=50)
    assert hit_test(QPointF(100, 50), [below, above], []).id == "above"


def test_hit_test_edge_with_scaled_tolerance():
    a = make_node("a", NodeKind.START, 0, 0)
    b = make_node("b", NodeKind.START, 400, 0)
    edge = FlowEdge("e", "a", "b")
    assert hit_test(QPointF(240, 44), [a, b], [edge]) == (TargetKind.EDGE, "e")
    assert hit_test(QPointF(240, 60), [a, b], [edge]) == BACKGROUND
    # při oddálení je tolerance ve světových souřadnicích větší
    assert hit_test(QPointF(240, 50), [a, b], [edge], scale=0.5) == (TargetKind.EDGE, "e")


def test_hit_test_skips_dangling_edges():
    a = make_node("a", NodeKind.START, 0, 0)
    edge = FlowEdge("e", "a", "missing")
    assert hit_test(QPointF(240, 40), [a], [edge]) == BACKGROUND


def test_node_shape_matches_painted_outline():
    decision = make_node("d", NodeKind.DECISION)
    assert node_shape(decision).contains(QPointF(40, 40))
    assert not node_shape(decision).contains(QPointF(10, 10))
    assert not node_shape(make_node("s", NodeKind.START)).contains(QPointF(5, 5))
    # zaoblený roh procesního uzlu
    assert not node_shape(make_node("p")).contains(QPointF(1, 1))
    assert node_shape(make_node("p")).contains(QPointF(10, 10))


def test_hit_test_ignores_corners_outside_shape():
    decision = make_node("d", NodeKind.DECISION)
    assert hit_test(QPointF(10, 10), [decision], []) == BACKGROUND
    assert hit_test(QPointF(40, 40), [decision], []) == (TargetKind.NODE, "d")
    start = make_node("s", NodeKind.START)
    assert hit_test(QPointF(5, 5), [start], []) == BACKGROUND
    assert hit_test(QPointF(75, 75), [start], []) == BACKGROUND


def test_hit_test_corner_falls_through_to_node_below():
    below = make_node("below")
    above = make_node("above", NodeKind.DECISION, 100, 60)
    # roh kosočtverce je prázdný, pod ním leží procesní uzel
    assert hit_test(QPointF(105, 65), [below, above], []).id == "below"


@pytest.mark.parametrize("scale", [1.0, 0.3, 0.2, 0.1])
def test_handles_keep_world_size_when_zoomed_out(scale):
    node = make_node("n")
    assert hit_test(QPointF(75, 50), [node], [], scale) == (TargetKind.NODE, "n")
    assert hit_test(QPointF(75, 12), [node], [], scale) == (TargetKind.NODE, "n")
    assert hit_test(QPointF(75, 3), [node], [], scale) == (TargetKind.HANDLE, "n")


def test_paint_order_puts_selected_node_last():
    a, b, c = make_node("a"), make_node("b"), make_node("c")
    assert [n.id for n in paint_order([a, b, c])] == ["a", "b", "c"]
    assert [n.id for n in paint_order([a, b, c], "a")] == ["b", "c", "a"]
    assert [n.id for n in paint_order([a, b, c], "missing")] == ["a", "b", "c"]


def test_hit_test_selected_node_is_on_top():
    a = make_node("a", x=0, y=0)
    b = make_node("b", x=50, y=30)
    assert hit_test(QPointF(100, 60), [a, b], []).id == "b"
    assert hit_test(QPointF(100, 60), [a, b], [], selected_id="a").id == "a"
    assert hit_test(QPointF(100, 60), [a, b], [], selected_id="b").id == "b"
