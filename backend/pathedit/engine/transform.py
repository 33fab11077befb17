"""Transform engine — snapshot-based affine transforms of a path or vertices.

A snapshot captures the pre-transform coordinates once; every transform()
call recomputes the live graph from that baseline, so many small interactive
updates never accumulate floating-point drift.

Two modes:
  whole path   P' = c + L·(P - c) + offset with L = [[cos·sx, -sin·sx],
               [sin·sy, cos·sy]] on anchors and cubic control points; arc
               radii scale by sx, arc rotation adds the angle.
  vertices     anchors translate by offset together with the near control
               point of each incident cubic edge; scale/rotation are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pathedit.engine.graph import EdgeKind, Path
from pathedit.models.transform_ops import TransformOptions
from pathedit.utils.geometry import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathSnapshot:
    """Baseline of every anchor and edge parameter of a path."""

    path: Path
    center: Point
    vertex_ids: tuple[int, ...]
    points: NDArray[np.float64]  # (n, 2)
    edge_ids: tuple[int, ...]
    cubic: NDArray[np.bool_]  # (m,)
    controls: NDArray[np.float64]  # (m, 2, 2): c1, c2 of cubic edges
    radii: NDArray[np.float64]  # (m, 2)
    rotations: NDArray[np.float64]  # (m,)


@dataclass(frozen=True)
class VertexSnapshot:
    """Baseline of one or two dragged anchors and their near control points."""

    path: Path
    center: Point
    vertex_ids: tuple[int, ...]
    points: NDArray[np.float64]  # (k, 2)
    # (edge id, "c1" or "c2", baseline point)
    controls: tuple[tuple[int, str, Point], ...]


Snapshot = PathSnapshot | VertexSnapshot


def capture(path: Path, vertex_ids: Sequence[int] | None = None) -> Snapshot:
    """Capture a baseline of the whole path, or of the given vertices only."""
    center = path.bbox().center

    if vertex_ids is None:
        edges = path.edges
        vertices = path.vertices
        return PathSnapshot(
            path=path,
            center=center,
            vertex_ids=tuple(v.id for v in vertices),
            points=np.array([v.point for v in vertices], dtype=np.float64).reshape(-1, 2),
            edge_ids=tuple(e.id for e in edges),
            cubic=np.array([e.kind is EdgeKind.CUBIC for e in edges], dtype=bool),
            controls=np.array(
                [(e.c1, e.c2) if e.kind is EdgeKind.CUBIC else ((0.0, 0.0), (0.0, 0.0)) for e in edges],
                dtype=np.float64,
            ).reshape(-1, 2, 2),
            radii=np.array([e.radii for e in edges], dtype=np.float64).reshape(-1, 2),
            rotations=np.array([e.rotation for e in edges], dtype=np.float64),
        )

    ids = tuple(dict.fromkeys(vertex_ids))
    controls: list[tuple[int, str, Point]] = []
    for vid in ids:
        vertex = path.vertex(vid)
        outgoing = path.get_edge(vertex.outgoing)
        if outgoing is not None and outgoing.kind is EdgeKind.CUBIC:
            controls.append((outgoing.id, "c1", outgoing.c1))
        incoming = path.get_edge(vertex.incoming)
        if incoming is not None and incoming.kind is EdgeKind.CUBIC:
            controls.append((incoming.id, "c2", incoming.c2))

    return VertexSnapshot(
        path=path,
        center=center,
        vertex_ids=ids,
        points=np.array([path.vertex(vid).point for vid in ids], dtype=np.float64).reshape(-1, 2),
        controls=tuple(controls),
    )


def transform(snapshot: Snapshot, options: TransformOptions | None = None) -> None:
    """Write the transformed baseline back into the live graph."""
    options = options or TransformOptions()
    if isinstance(snapshot, VertexSnapshot):
        _move_vertices(snapshot, options)
    else:
        _transform_path(snapshot, options)
    snapshot.path.refresh()


def _move_vertices(snapshot: VertexSnapshot, options: TransformOptions) -> None:
    path = snapshot.path
    dx, dy = options.offset
    for vid, (px, py) in zip(snapshot.vertex_ids, snapshot.points):
        vertex = path.vertex(vid)
        vertex.x = float(px) + dx
        vertex.y = float(py) + dy
    for eid, attr, (qx, qy) in snapshot.controls:
        setattr(path.edge(eid), attr, (qx + dx, qy + dy))


def _transform_path(snapshot: PathSnapshot, options: TransformOptions) -> None:
    path = snapshot.path
    angle, sin, cos = options.resolve_rotation()
    sx, sy = options.scale_x, options.sy

    if options.is_identity:
        points, controls = snapshot.points, snapshot.controls
        radii, rotations = snapshot.radii, snapshot.rotations
    else:
        center = np.array(options.center or snapshot.center, dtype=np.float64)
        shift = center + np.array(options.offset, dtype=np.float64)
        linear = np.array([[cos * sx, -sin * sx], [sin * sy, cos * sy]], dtype=np.float64)
        points = (snapshot.points - center) @ linear.T + shift
        controls = (snapshot.controls - center) @ linear.T + shift
        radii = snapshot.radii * sx
        rotations = (snapshot.rotations + angle) % 360

    for vid, (x, y) in zip(snapshot.vertex_ids, points):
        vertex = path.vertex(vid)
        vertex.x, vertex.y = float(x), float(y)

    for i, eid in enumerate(snapshot.edge_ids):
        edge = path.edge(eid)
        if snapshot.cubic[i]:
            edge.c1 = (float(controls[i, 0, 0]), float(controls[i, 0, 1]))
            edge.c2 = (float(controls[i, 1, 0]), float(controls[i, 1, 1]))
        elif edge.kind is EdgeKind.ARC:
            edge.radii = (float(radii[i, 0]), float(radii[i, 1]))
            edge.rotation = float(rotations[i])
