"""Topology editor — split edges, delete vertices, build rectangle paths.

Both split_edge() and delete_vertex() tolerate stale references: an edge or
vertex already removed by an earlier operation is a no-op reported through
the return value, never an exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pathedit.engine.events import ChangeType
from pathedit.engine.graph import Edge, Path, Vertex
from pathedit.engine.normalizer import build_path
from pathedit.svg.parser import Command
from pathedit.utils.geometry import Point

if TYPE_CHECKING:
    from pathedit.engine.root import Root

logger = logging.getLogger(__name__)

# Zero-length limit for merged self-loops of paths outside a root
_ZERO_LENGTH = 1e-9


def split_edge(edge: Edge, point: Point) -> Vertex | None:
    """Insert a vertex at ``point``, splitting ``edge`` in two.

    The split edge becomes a straight line from its start to the new
    vertex; a new trailing edge takes over its kind, curve parameters and far
    endpoint. Curves are not subdivided, so the new anchor sits exactly at
    ``point`` while the old control points are kept.
    """
    path = edge.path
    if path is None or not path.has_edge(edge.id):
        logger.debug("split_edge: edge %s is no longer part of a path", edge.id)
        return None

    far = edge.end
    vertex = path.add_vertex(point[0], point[1], after=edge.start)
    trailing = path.add_edge(vertex.id, after=edge.id)
    trailing.copy_geometry(edge)
    path.link(trailing.id, far)
    edge.make_line()
    path.link(edge.id, vertex.id)

    _notify(path, ChangeType.TRANSFORM)
    return vertex


def delete_vertex(vertex: Vertex) -> bool:
    """Remove a vertex, merging its outgoing edge into its incoming edge.

    Returns False when the vertex (or its outgoing edge) is already gone.
    A single-edge self-loop is deleted whole, as is a zero-length self-loop
    left behind by the merge. A path left without vertices is removed from
    its root.
    """
    path = vertex.path
    if path is None or not path.has_vertex(vertex.id):
        logger.debug("delete_vertex: vertex %s is no longer part of a path", vertex.id)
        return False
    if vertex.outgoing is not None and not path.has_edge(vertex.outgoing):
        logger.debug("delete_vertex: outgoing edge %s not found", vertex.outgoing)
        return False

    if vertex.incoming is None or vertex.outgoing is None:
        _trim_open_end(path, vertex)
    else:
        _merge(path, vertex)

    if not path.vertices:
        _remove_path(path)
    else:
        _notify(path, ChangeType.TRANSFORM)
    return True


def _merge(path: Path, vertex: Vertex) -> None:
    incoming = path.edge(vertex.incoming)
    last = vertex.incoming == vertex.outgoing
    target = vertex

    if not last:
        outgoing = path.edge(vertex.outgoing)
        following = path.vertex(outgoing.end)
        incoming.copy_geometry(outgoing)
        if vertex.moveto:
            following.moveto = True
        path.release_edge(outgoing.id)
        path.release_vertex(vertex.id)
        path.link(incoming.id, following.id)
        target = following
        limit = path.root.config.zero_length if path.root is not None else _ZERO_LENGTH
        last = following.outgoing == incoming.id and path.segment_length(incoming.id) <= limit

    if last:
        path.release_edge(incoming.id)
        path.release_vertex(target.id)


def _trim_open_end(path: Path, vertex: Vertex) -> None:
    """Delete an end of an open subpath together with its only edge."""
    if vertex.outgoing is not None:
        edge = path.edge(vertex.outgoing)
        following = path.vertex(edge.end)
        following.moveto = True
        path.release_edge(edge.id)
    elif vertex.incoming is not None:
        path.release_edge(vertex.incoming)
    path.release_vertex(vertex.id)


def _remove_path(path: Path) -> None:
    root = path.root
    if root is not None:
        root.discard(path)
    else:
        path.release()


def _notify(path: Path, kind: ChangeType) -> None:
    path.refresh()
    if path.root is not None:
        path.root.change(kind, path)


def rect_commands(left: float, top: float, right: float, bottom: float) -> list[Command]:
    """Clockwise closed rectangle: top-left, top-right, bottom-right, bottom-left."""
    return [
        Command("M", (left, top)),
        Command("L", (right, top)),
        Command("L", (right, bottom)),
        Command("L", (left, bottom)),
        Command("L", (left, top)),
        Command("Z"),
    ]


def create_rect_path(root: Root, left: float, top: float, right: float, bottom: float) -> Path:
    """Build a selected rectangular path and register it with ``root``."""
    path = build_path(rect_commands(left, top, right, bottom))
    assert path is not None, "rectangle paths always have four vertices"
    root.register(path)
    path.selected = True
    root.change(ChangeType.TRANSFORM, path)
    return path
