"""Graph model — Path / Vertex / Edge.

Each Path is an arena: its vertices and edges live in dicts keyed by stable
integer ids, and every cross reference (vertex.incoming/outgoing, edge.start/
end) is an id into the owning Path. Releasing a Path clears its arenas.

The canonical descriptor is never stored; ``Path.commands`` regenerates it by
walking the subpaths, so topology edits only have to keep the graph right.
"""

from __future__ import annotations

import enum
import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np

from pathedit.svg.parser import Command
from pathedit.svg.serializer import format_path
from pathedit.utils.geometry import (
    BBox,
    Point,
    arc_segment,
    bbox,
    cubic_segment,
    line_segment,
    segments_bbox,
    segments_length,
)

if TYPE_CHECKING:
    from pathedit.engine.host import RenderHost
    from pathedit.engine.root import Root

logger = logging.getLogger(__name__)

# Path ids are unique per process so an EntityRef never aliases a released path
_path_ids = itertools.count(1)


class EdgeKind(enum.Enum):
    LINE = "L"
    CUBIC = "C"
    ARC = "A"


class EntityKind(enum.Enum):
    ROOT = "root"
    PATH = "path"
    VERTEX = "vertex"
    EDGE = "edge"


@dataclass(frozen=True)
class EntityRef:
    """Tagged reference to a workspace entity, resolved by Root.resolve()."""

    kind: EntityKind
    path_id: int | None = None
    item_id: int | None = None

    @classmethod
    def root(cls) -> EntityRef:
        return cls(EntityKind.ROOT)

    @classmethod
    def for_path(cls, path: Path) -> EntityRef:
        return cls(EntityKind.PATH, path.id)

    @classmethod
    def for_vertex(cls, vertex: Vertex) -> EntityRef:
        return cls(EntityKind.VERTEX, vertex.path.id if vertex.path else None, vertex.id)

    @classmethod
    def for_edge(cls, edge: Edge) -> EntityRef:
        return cls(EntityKind.EDGE, edge.path.id if edge.path else None, edge.id)


@dataclass(eq=False)
class Vertex:
    """An anchor point of a path."""

    id: int
    path: Path | None = field(default=None, repr=False)
    x: float = 0.0
    y: float = 0.0
    # Incident cubic control points are kept collinear through this vertex
    smooth: bool = False
    # Anchors the moveto that starts its subpath
    moveto: bool = False
    incoming: int | None = None
    outgoing: int | None = None
    handle: Any = field(default=None, repr=False)

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(eq=False)
class Edge:
    """A directed drawing segment between two vertices of the same path."""

    id: int
    path: Path | None = field(default=None, repr=False)
    kind: EdgeKind = EdgeKind.LINE
    start: int | None = None
    end: int | None = None
    # Cubic control points
    c1: Point | None = None
    c2: Point | None = None
    # Arc parameters
    radii: Point = (0.0, 0.0)
    rotation: float = 0.0
    large_arc: bool = False
    sweep: bool = False
    handle: Any = field(default=None, repr=False)

    def copy_geometry(self, other: Edge) -> None:
        """Take over another edge's kind and curve parameters."""
        self.kind = other.kind
        self.c1 = other.c1
        self.c2 = other.c2
        self.radii = other.radii
        self.rotation = other.rotation
        self.large_arc = other.large_arc
        self.sweep = other.sweep

    def make_line(self) -> None:
        self.kind = EdgeKind.LINE
        self.c1 = self.c2 = None
        self.radii = (0.0, 0.0)
        self.rotation = 0.0
        self.large_arc = self.sweep = False

    def command(self, end: Point) -> Command:
        """The absolute command drawing this edge to ``end``."""
        if self.kind is EdgeKind.CUBIC:
            return Command("C", (*self.c1, *self.c2, *end))
        if self.kind is EdgeKind.ARC:
            return Command(
                "A",
                (
                    self.radii[0],
                    self.radii[1],
                    self.rotation,
                    float(self.large_arc),
                    float(self.sweep),
                    *end,
                ),
            )
        return Command("L", end)


class Subpath(NamedTuple):
    vertex_ids: tuple[int, ...]
    edge_ids: tuple[int, ...]
    closed: bool


class Path:
    """A selectable outline owning its vertices and edges."""

    def __init__(self) -> None:
        self.id = next(_path_ids)
        self.root: Root | None = None
        self.host: RenderHost | None = None
        self.handle: Any = None
        self.vertex_radius = 4.0
        self.precision = 6
        self._selected = False
        self._ids = itertools.count(1)
        self._vertices: dict[int, Vertex] = {}
        self._edges: dict[int, Edge] = {}
        self._vertex_order: list[int] = []
        self._edge_order: list[int] = []

    def __repr__(self) -> str:
        return f"Path(id={self.id}, vertices={len(self._vertices)}, edges={len(self._edges)})"

    # --- queries ---------------------------------------------------------

    @property
    def vertices(self) -> list[Vertex]:
        return [self._vertices[vid] for vid in self._vertex_order]

    @property
    def edges(self) -> list[Edge]:
        return [self._edges[eid] for eid in self._edge_order]

    def vertex(self, vertex_id: int) -> Vertex:
        return self._vertices[vertex_id]

    def edge(self, edge_id: int) -> Edge:
        return self._edges[edge_id]

    def get_vertex(self, vertex_id: int | None) -> Vertex | None:
        return self._vertices.get(vertex_id)

    def get_edge(self, edge_id: int | None) -> Edge | None:
        return self._edges.get(edge_id)

    def has_vertex(self, vertex_id: int | None) -> bool:
        return vertex_id in self._vertices

    def has_edge(self, edge_id: int | None) -> bool:
        return edge_id in self._edges

    def subpaths(self) -> list[Subpath]:
        """Walk each subpath from its moveto vertex along outgoing edges."""
        result: list[Subpath] = []
        for vid in self._vertex_order:
            head = self._vertices[vid]
            if not head.moveto:
                continue
            vertex_ids = [vid]
            edge_ids: list[int] = []
            closed = False
            eid = head.outgoing
            while eid is not None:
                edge = self._edges[eid]
                edge_ids.append(eid)
                if edge.end == vid:
                    closed = True
                    break
                vertex_ids.append(edge.end)
                assert len(edge_ids) <= len(self._edges), f"{self!r}: cycle without a moveto vertex"
                eid = self._vertices[edge.end].outgoing
            result.append(Subpath(tuple(vertex_ids), tuple(edge_ids), closed))
        return result

    @property
    def commands(self) -> list[Command]:
        """Canonical absolute M/L/C/A/Z commands."""
        commands: list[Command] = []
        for sub in self.subpaths():
            commands.append(Command("M", self._vertices[sub.vertex_ids[0]].point))
            for eid in sub.edge_ids:
                edge = self._edges[eid]
                commands.append(edge.command(self._vertices[edge.end].point))
            if sub.closed:
                commands.append(Command("Z"))
        return commands

    @property
    def d(self) -> str:
        return format_path(self.commands, self.precision)

    @property
    def closed(self) -> bool:
        subs = self.subpaths()
        return bool(subs) and all(sub.closed for sub in subs)

    def segment(self, edge_id: int):
        """The svgpathtools segment drawn by an edge."""
        edge = self._edges[edge_id]
        start = self._vertices[edge.start].point
        end = self._vertices[edge.end].point
        if edge.kind is EdgeKind.CUBIC:
            return cubic_segment(start, edge.c1, edge.c2, end)
        if edge.kind is EdgeKind.ARC:
            return arc_segment(start, edge.radii, edge.rotation, edge.large_arc, edge.sweep, end)
        return line_segment(start, end)

    def segment_length(self, edge_id: int) -> float:
        return segments_length([self.segment(edge_id)])

    def total_length(self, edge_ids=None) -> float:
        ids = self._edge_order if edge_ids is None else edge_ids
        return segments_length([self.segment(eid) for eid in ids])

    def bbox(self) -> BBox:
        box = segments_bbox([self.segment(eid) for eid in self._edge_order])
        if box is not None:
            return box
        points = np.array([v.point for v in self.vertices], dtype=np.float64).reshape(-1, 2)
        return BBox.from_extents(*bbox(points))

    def check(self) -> None:
        """Assert the linkage invariants. Violations are programming errors."""
        for edge in self._edges.values():
            assert edge.path is self, f"edge {edge.id} not owned by {self!r}"
            assert edge.start in self._vertices, f"edge {edge.id}: dangling start"
            assert edge.end in self._vertices, f"edge {edge.id}: dangling end"
            assert self._vertices[edge.start].outgoing == edge.id, f"edge {edge.id}: start not linked"
            assert self._vertices[edge.end].incoming == edge.id, f"edge {edge.id}: end not linked"
        for vertex in self._vertices.values():
            assert vertex.path is self, f"vertex {vertex.id} not owned by {self!r}"
            assert vertex.incoming is None or vertex.incoming in self._edges
            assert vertex.outgoing is None or vertex.outgoing in self._edges
        seen = 0
        for sub in self.subpaths():
            expected = len(sub.edge_ids) if sub.closed else len(sub.edge_ids) + 1
            assert len(sub.vertex_ids) == expected, f"{self!r}: subpath cardinality"
            seen += len(sub.vertex_ids)
        assert seen == len(self._vertices), f"{self!r}: vertex outside every subpath"

    # --- selection -------------------------------------------------------

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        self._selected = bool(value)
        if self.host is not None:
            flag = {"selected": self._selected}
            self.host.update_visual(self.handle, flag)
            for item in (*self._vertices.values(), *self._edges.values()):
                self.host.update_visual(item.handle, flag)

    # --- mutation --------------------------------------------------------

    def add_vertex(
        self,
        x: float,
        y: float,
        *,
        moveto: bool = False,
        after: int | None = None,
    ) -> Vertex:
        vertex = Vertex(next(self._ids), self, float(x), float(y), moveto=moveto)
        self._vertices[vertex.id] = vertex
        _insert_after(self._vertex_order, vertex.id, after)
        if self.host is not None:
            vertex.handle = self.host.create_visual("vertex", self._vertex_params(vertex))
        return vertex

    def add_edge(
        self,
        start: int,
        kind: EdgeKind = EdgeKind.LINE,
        *,
        after: int | None = None,
        **params: Any,
    ) -> Edge:
        """Create an edge leaving ``start``; its end is set by link()."""
        edge = Edge(next(self._ids), self, kind, start=start, **params)
        self._edges[edge.id] = edge
        _insert_after(self._edge_order, edge.id, after)
        self._vertices[start].outgoing = edge.id
        return edge

    def link(self, edge_id: int, vertex_id: int) -> None:
        """Point an edge's end at a vertex and make it that vertex's incoming."""
        edge = self._edges[edge_id]
        edge.end = vertex_id
        self._vertices[vertex_id].incoming = edge_id
        if self.host is not None and edge.handle is None:
            edge.handle = self.host.create_visual("edge", self._edge_params(edge))

    def release_vertex(self, vertex_id: int) -> None:
        vertex = self._vertices.pop(vertex_id)
        self._vertex_order.remove(vertex_id)
        self._drop_visual(vertex)
        vertex.incoming = vertex.outgoing = None
        vertex.path = None

    def release_edge(self, edge_id: int) -> None:
        edge = self._edges.pop(edge_id)
        self._edge_order.remove(edge_id)
        self._drop_visual(edge)
        for vid, attr in ((edge.start, "outgoing"), (edge.end, "incoming")):
            vertex = self._vertices.get(vid)
            if vertex is not None and getattr(vertex, attr) == edge_id:
                setattr(vertex, attr, None)
        edge.start = edge.end = None
        edge.path = None

    def release(self) -> None:
        """Release all vertices, edges and visuals."""
        for eid in list(self._edge_order):
            self.release_edge(eid)
        for vid in list(self._vertex_order):
            self.release_vertex(vid)
        self._drop_visual(self)
        self.host = None
        self.root = None

    # --- visuals ---------------------------------------------------------

    def attach(self, host: RenderHost | None, vertex_radius: float = 4.0) -> None:
        """Create visuals for the path and everything it owns."""
        self.host = host
        self.vertex_radius = vertex_radius
        if host is None:
            return
        self.handle = host.create_visual("path", self._path_params())
        for vertex in self._vertices.values():
            vertex.handle = host.create_visual("vertex", self._vertex_params(vertex))
        for edge in self._edges.values():
            edge.handle = host.create_visual("edge", self._edge_params(edge))

    def refresh(self) -> None:
        """Push current geometry to every visual."""
        if self.host is None:
            return
        self.host.update_visual(self.handle, self._path_params())
        for vertex in self._vertices.values():
            self.host.update_visual(vertex.handle, self._vertex_params(vertex))
        for edge in self._edges.values():
            if edge.end is not None:
                self.host.update_visual(edge.handle, self._edge_params(edge))

    def _path_params(self) -> dict[str, Any]:
        return {"ref": EntityRef.for_path(self), "d": self.d, "selected": self._selected}

    def _vertex_params(self, vertex: Vertex) -> dict[str, Any]:
        return {
            "ref": EntityRef.for_vertex(vertex),
            "cx": vertex.x,
            "cy": vertex.y,
            "r": self.vertex_radius,
            "smooth": vertex.smooth,
            "selected": self._selected,
        }

    def _edge_params(self, edge: Edge) -> dict[str, Any]:
        start = self._vertices[edge.start].point
        commands = [Command("M", start), edge.command(self._vertices[edge.end].point)]
        return {
            "ref": EntityRef.for_edge(edge),
            "d": format_path(commands, self.precision),
            "selected": self._selected,
        }

    def _drop_visual(self, item: Path | Vertex | Edge) -> None:
        if self.host is not None and item.handle is not None:
            self.host.remove_visual(item.handle)
        item.handle = None


def _insert_after(order: list[int], item_id: int, after: int | None) -> None:
    if after is None:
        order.append(item_id)
    else:
        order.insert(order.index(after) + 1, item_id)
