"""Tests for split_edge, delete_vertex and rectangle paths."""

from tests.conftest import CURVE_D, SQUARE_CANONICAL, SQUARE_D

from pathedit.engine.events import ChangeType
from pathedit.engine.graph import EdgeKind, Path
from pathedit.engine.normalizer import build_path
from pathedit.engine.topology import create_rect_path, delete_vertex, rect_commands, split_edge
from pathedit.svg.serializer import format_path


def test_split_line_edge():
    path = build_path(SQUARE_D)
    edge = path.edges[0]
    far = edge.end
    vertex = split_edge(edge, (5, 0))
    assert len(path.vertices) == 5
    assert len(path.edges) == 5
    trailing = path.edge(vertex.outgoing)
    assert edge.end == vertex.id == trailing.start
    assert trailing.end == far
    assert path.d == "M 0 0 L 5 0 L 10 0 L 10 10 L 0 10 L 0 0 Z"
    path.check()


def test_split_keeps_curve_on_trailing_edge():
    path = build_path(CURVE_D)
    cubic = path.edges[0]
    vertex = split_edge(cubic, (5, 3.75))
    trailing = path.edge(vertex.outgoing)
    assert cubic.kind is EdgeKind.LINE
    assert trailing.kind is EdgeKind.CUBIC
    assert (trailing.c1, trailing.c2) == ((0.0, 5.0), (10.0, 5.0))
    assert path.d == "M 0 0 L 5 3.75 C 0 5 10 5 10 0 L 0 0 Z"
    path.check()


def test_split_closing_edge():
    path = build_path(SQUARE_D)
    closing = path.edges[-1]
    vertex = split_edge(closing, (0, 5))
    assert path.vertex(closing.end) is vertex
    assert path.d == "M 0 0 L 10 0 L 10 10 L 0 10 L 0 5 L 0 0 Z"
    path.check()


def test_split_stale_edge():
    path = build_path(SQUARE_D)
    edge = path.edges[0]
    path.release()
    assert split_edge(edge, (5, 0)) is None


def test_split_emits_transform(root, events):
    path = root.insert(SQUARE_D)
    events.clear()
    split_edge(path.edges[1], (10, 5))
    assert [(e.kind, e.path) for e in events] == [(ChangeType.TRANSFORM, path)]


def test_delete_middle_vertex():
    path = build_path(SQUARE_D)
    assert delete_vertex(path.vertices[1])
    assert path.d == "M 0 0 L 10 10 L 0 10 L 0 0 Z"
    path.check()


def test_delete_moveto_vertex_moves_anchor():
    path = build_path(SQUARE_D)
    assert delete_vertex(path.vertices[0])
    assert path.vertices[0].moveto
    assert path.d == "M 10 0 L 10 10 L 0 10 L 10 0 Z"
    path.check()


def test_delete_inherits_outgoing_geometry():
    path = build_path(CURVE_D)
    start = path.vertices[0]
    assert delete_vertex(start)
    (edge,) = path.edges
    assert edge.kind is EdgeKind.CUBIC
    assert edge.start == edge.end
    # A curved self-loop has a traced length, so it survives
    assert path.d == "M 10 0 C 0 5 10 5 10 0 Z"
    path.check()


def test_delete_leaving_zero_length_loop_removes_path(root, events):
    path = root.insert("M 0 0 L 10 0 Z")
    assert len(path.vertices) == 2
    events.clear()
    assert delete_vertex(path.vertices[0])
    assert len(root) == 0
    assert path.vertices == []
    assert [e.kind for e in events] == [ChangeType.REMOVE]


def test_delete_single_vertex_self_loop(root):
    path = root.insert("M 3 4 L 3 4")
    assert delete_vertex(path.vertices[0])
    assert len(root) == 0


def test_delete_only_one_subpath():
    path = build_path("M 0 0 L 10 0 Z M 20 20 L 30 20 L 30 30 Z")
    delete_vertex(path.vertices[0])
    assert path.d == "M 20 20 L 30 20 L 30 30 L 20 20 Z"
    path.check()


def test_delete_stale_vertex():
    path = build_path(SQUARE_D)
    vertex = path.vertices[2]
    assert delete_vertex(vertex)
    assert not delete_vertex(vertex)
    assert len(path.vertices) == 3


def test_delete_open_subpath_end():
    path = Path()
    a = path.add_vertex(0, 0, moveto=True)
    b = path.add_vertex(10, 0)
    c = path.add_vertex(10, 10)
    path.link(path.add_edge(a.id).id, b.id)
    path.link(path.add_edge(b.id).id, c.id)

    assert delete_vertex(a)
    assert b.moveto
    assert path.d == "M 10 0 L 10 10"
    assert delete_vertex(c)
    assert path.d == "M 10 0"
    path.check()


def test_rect_commands():
    assert format_path(rect_commands(1, 2, 3, 4)) == "M 1 2 L 3 2 L 3 4 L 1 4 L 1 2 Z"


def test_create_rect_path(root, events):
    path = create_rect_path(root, 0, 0, 10, 10)
    assert root.get(0) is path
    assert path.selected
    assert path.d == SQUARE_CANONICAL
    assert [v.point for v in path.vertices] == [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert events[-1].kind is ChangeType.TRANSFORM


def test_deleting_every_rect_vertex_removes_path(root):
    path = create_rect_path(root, 0, 0, 10, 10)
    for _ in range(3):
        assert delete_vertex(path.vertices[0])
        path.check()
    assert len(root) == 0
    assert path.root is None
