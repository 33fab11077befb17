"""Path normalizer — raw path commands → canonical absolute commands + graph.

Every command is rewritten into absolute M, L, C, A or Z while the vertex/edge
graph is built alongside it:

- relative coordinates are resolved against the current point;
- a drawing command without a moveto gets one synthesized at the current point;
- Q/T become cubics by degree elevation, S/T reflect the previous control point
  only after a curve of the matching kind;
- H/V become full linetos;
- a moveto after an open subpath closes it first, consecutive movetos collapse;
- closepath draws the missing line back to the initial point, and duplicate
  closepaths are dropped;
- unknown commands are dropped.

A subpath with at most one vertex but a non-zero traced length, or a result
without any vertex, is rejected: build_path() returns None.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pathedit.engine.graph import EdgeKind, Path
from pathedit.svg.parser import Command, tokenize_path
from pathedit.utils.geometry import Point, quadratic_to_cubic, reflect

logger = logging.getLogger(__name__)

Descriptor = str | Iterable[Command]


def normalize(descriptor: Descriptor) -> list[Command] | None:
    """Canonical command list of a descriptor, or None when it is invalid."""
    path = build_path(descriptor)
    if path is None:
        return None
    commands = path.commands
    path.release()
    return commands


def build_path(descriptor: Descriptor, zero_length: float = 1e-9) -> Path | None:
    """Normalize a descriptor into a new Path, or None if it is degenerate."""
    commands = tokenize_path(descriptor) if isinstance(descriptor, str) else list(descriptor)

    path = Path()
    builder = _GraphBuilder(path)
    for command in commands:
        builder.feed(command)
    builder.finish()

    if not path.vertices:
        logger.debug("Rejecting path without vertices")
        return None

    for sub in path.subpaths():
        if len(sub.vertex_ids) <= 1 and path.total_length(sub.edge_ids) > zero_length:
            logger.debug("Rejecting path: single-vertex subpath with non-zero length")
            path.release()
            return None

    return path


class _GraphBuilder:
    """Incremental normalizer state for one descriptor."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.current: Point = (0.0, 0.0)
        self.initial: Point = (0.0, 0.0)
        # A moveto that no edge has consumed yet
        self.pending_moveto = False
        self.initial_vertex: int | None = None
        # Trailing edge whose end vertex is not known yet
        self.edge: int | None = None
        self.prev_kind: str | None = None
        # Trailing control point of the previous curve (cubic c2 or quadratic Q)
        self.prev_control: Point | None = None
        self.smooth = False

    def feed(self, command: Command) -> None:
        """Process a command, including any commands it is rewritten into."""
        pending = [command]
        while pending:
            rewritten = self._step(pending.pop())
            if rewritten:
                pending.extend(reversed(rewritten))

    def finish(self) -> None:
        if self.edge is not None:
            self.feed(Command("Z"))
        elif self.pending_moveto:
            logger.debug("Dropping trailing moveto at %s", self.initial)

    def _step(self, command: Command) -> list[Command] | None:
        kind = command.upper
        if not command.is_known:
            logger.debug("Dropping unrecognized command %r", command.kind)
            return None

        if kind != "M" and self.initial_vertex is None and not self.pending_moveto:
            return [Command("M", self.current), command]

        a = command.args
        ox, oy = self.current if command.is_relative else (0.0, 0.0)
        cx, cy = self.current

        if kind == "Z":
            return self._close(command)

        if kind == "M":
            return self._move((a[0] + ox, a[1] + oy))

        if kind == "H":
            return [Command("L", (a[0] + ox, cy))]

        if kind == "V":
            return [Command("L", (cx, a[0] + oy))]

        if kind == "L":
            self._draw(EdgeKind.LINE, "L", (a[0] + ox, a[1] + oy))
        elif kind == "C":
            c2 = (a[2] + ox, a[3] + oy)
            self._draw(EdgeKind.CUBIC, "C", (a[4] + ox, a[5] + oy), c1=(a[0] + ox, a[1] + oy), c2=c2)
            self.prev_control = c2
        elif kind == "S":
            c2 = (a[0] + ox, a[1] + oy)
            c1 = self._continuation("C")
            self._draw(EdgeKind.CUBIC, "C", (a[2] + ox, a[3] + oy), c1=c1, c2=c2)
            self.prev_control = c2
        elif kind == "Q":
            self._quadratic((a[0] + ox, a[1] + oy), (a[2] + ox, a[3] + oy))
        elif kind == "T":
            self._quadratic(self._continuation("Q"), (a[0] + ox, a[1] + oy))
        elif kind == "A":
            self._draw(
                EdgeKind.ARC,
                "A",
                (a[5] + ox, a[6] + oy),
                radii=(a[0], a[1]),
                rotation=a[2],
                large_arc=bool(a[3]),
                sweep=bool(a[4]),
            )
        return None

    def _close(self, command: Command) -> list[Command] | None:
        if self.current != self.initial:
            return [Command("L", self.initial), command]
        if self.prev_kind in ("Z", "M"):
            logger.debug("Dropping duplicate closepath")
            return None
        if self.edge is not None:
            self.path.link(self.edge, self.initial_vertex)
            self.edge = None
            self.initial_vertex = None
        self._advance("Z", self.initial)
        return None

    def _move(self, point: Point) -> list[Command] | None:
        if self.prev_kind not in (None, "Z", "M"):
            # Close the open subpath first; the moveto is already absolute
            return [Command("Z"), Command("M", point)]
        self.pending_moveto = True
        self.initial = point
        self._advance("M", point)
        return None

    def _continuation(self, curve: str) -> Point:
        """Implicit leading control point of an S or T command."""
        if self.prev_kind == curve and self.prev_control is not None:
            self.smooth = True
            return reflect(self.prev_control, self.current)
        return self.current

    def _quadratic(self, control: Point, end: Point) -> None:
        c1, c2 = quadratic_to_cubic(self.current, control, end)
        self._draw(EdgeKind.CUBIC, "Q", end, c1=c1, c2=c2)
        self.prev_control = control

    def _draw(self, kind: EdgeKind, letter: str, end: Point, **params) -> None:
        path = self.path
        if self.edge is None:
            vertex = path.add_vertex(*self.initial, moveto=True)
            self.pending_moveto = False
            self.initial_vertex = vertex.id
        else:
            vertex = path.add_vertex(*self.current)
            path.link(self.edge, vertex.id)

        vertex.smooth = self.smooth
        self.smooth = False
        self.edge = path.add_edge(vertex.id, kind, **params).id
        self._advance(letter, end)

    def _advance(self, kind: str, point: Point) -> None:
        self.prev_kind = kind
        self.current = (float(point[0]), float(point[1]))
