"""Interactive edit session — one pointer drag at a time over a Root.

begin() resolves the pressed target and picks a drag kind and action from
the modifier keys; move() recomputes the transform from the snapshot taken
on the first move; commit() and cancel() end the drag.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

from pathedit.engine.events import ChangeType
from pathedit.engine.graph import Edge, EntityKind, EntityRef, Path, Vertex
from pathedit.engine.root import Root
from pathedit.engine.topology import create_rect_path, delete_vertex, split_edge
from pathedit.engine.transform import Snapshot, VertexSnapshot, capture, transform
from pathedit.models.transform_ops import TransformOptions
from pathedit.utils.geometry import Point, clamp

logger = logging.getLogger(__name__)


class DragKind(enum.Enum):
    VERTEX = "vertex"
    EDGE = "edge"
    PATH = "path"
    CREATE = "create"


class Action(enum.Enum):
    MOVE = "move"
    DELETE_VERTEX = "delete_vertex"
    CREATE_PATH = "create_path"
    TRANSFORM = "transform"


@dataclass
class SessionState:
    kind: DragKind
    action: Action
    item: Root | Path | Vertex | Edge
    path: Path | None
    start: Point
    split: bool = False
    snapshot: Snapshot | None = None
    vector: Point = (0.0, 0.0)
    radius: float = 0.0


class EditSession:
    """Drag state machine: IDLE until begin(), back to IDLE on commit/cancel."""

    def __init__(self, root: Root) -> None:
        self.root = root
        self.state: SessionState | None = None

    @property
    def active(self) -> bool:
        return self.state is not None

    def begin(self, target: EntityRef, point: Point, shift: bool = False, ctrl: bool = False) -> bool:
        """Start a drag on ``target``. Returns True when the session is now dragging."""
        if self.state is not None:
            logger.warning("begin ignored: a drag is already in progress")
            return False

        root = self.root
        item = root.resolve(target)
        if item is None:
            logger.debug("begin: target %r does not resolve", target)
            return False

        if target.kind is EntityKind.ROOT:
            path = None
            root.select_path(None)
        else:
            path = item if target.kind is EntityKind.PATH else item.path
            if not path.selected:
                root.select_path(path)

        if root.readonly:
            return False

        start = (float(point[0]), float(point[1]))
        split = False

        if target.kind is EntityKind.ROOT:
            kind, action = DragKind.CREATE, Action.CREATE_PATH
        elif target.kind is EntityKind.VERTEX:
            if shift:
                kind, action, item = DragKind.PATH, Action.TRANSFORM, path
            elif ctrl:
                kind, action = DragKind.VERTEX, Action.DELETE_VERTEX
            else:
                kind, action = DragKind.VERTEX, Action.MOVE
        elif target.kind is EntityKind.EDGE:
            if shift:
                kind, action, item = DragKind.PATH, Action.TRANSFORM, path
            elif ctrl:
                vertex = split_edge(item, start)
                if vertex is None:
                    return False
                kind, action, item, split = DragKind.VERTEX, Action.MOVE, vertex, True
            else:
                kind, action = DragKind.EDGE, Action.MOVE
        elif target.kind is EntityKind.PATH:
            kind = DragKind.PATH
            action = Action.TRANSFORM if shift or ctrl else Action.MOVE
        else:
            raise AssertionError(f"Unhandled entity kind: {target.kind}")

        self.state = SessionState(kind=kind, action=action, item=item, path=path, start=start, split=split)
        logger.debug("begin %s drag (%s) at %s", kind.value, action.value, start)
        return True

    def move(self, point: Point, shift: bool = False, ctrl: bool = False) -> bool:
        state = self._live_state()
        if state is None:
            return False

        root = self.root
        px, py = state.start
        px2 = clamp(float(point[0]), 0.0, root.width)
        py2 = clamp(float(point[1]), 0.0, root.height)

        if state.action is Action.DELETE_VERTEX:
            state.action = Action.MOVE
            state.kind = DragKind.VERTEX
        elif state.action is Action.CREATE_PATH and state.path is None:
            seed = root.config.rect_seed_size
            state.path = state.item = create_rect_path(root, px, py, px + seed, py + seed)

        if state.snapshot is None:
            state.snapshot = self._capture(state)
            cx, cy = state.snapshot.center
            state.vector = (px - cx, py - cy)
            state.radius = math.hypot(*state.vector)

        transform(state.snapshot, self._options(state, px2, py2, shift, ctrl))
        return True

    def commit(self, shift: bool = False, ctrl: bool = False) -> bool:
        state = self._live_state()
        if state is None:
            return False
        self.state = None

        if state.action is Action.DELETE_VERTEX:
            if ctrl and not shift:
                delete_vertex(state.item)
        elif state.snapshot is not None:
            self.root.change(ChangeType.TRANSFORM, state.snapshot.path)
        logger.debug("commit %s drag", state.kind.value)
        return True

    def cancel(self) -> bool:
        """Revert the drag in progress: drop a created path, undo a split."""
        state = self._live_state()
        if state is None:
            return False
        self.state = None

        if state.action is Action.CREATE_PATH:
            if state.path is not None:
                self.root.discard(state.path)
        else:
            if state.snapshot is not None:
                transform(state.snapshot)
            if state.split:
                delete_vertex(state.item)
        logger.debug("cancel %s drag", state.kind.value)
        return True

    def double_click(self, target: EntityRef, point: Point) -> bool:
        """Delete a clicked vertex, or split a clicked edge at ``point``."""
        if self.root.readonly or target.kind not in (EntityKind.VERTEX, EntityKind.EDGE):
            return False
        item = self.root.resolve(target)
        if item is None:
            return False
        if target.kind is EntityKind.VERTEX:
            return delete_vertex(item)
        return split_edge(item, (float(point[0]), float(point[1]))) is not None

    def _live_state(self) -> SessionState | None:
        """The drag in progress, or None after ending a drag whose entities are gone."""
        state = self.state
        if state is None or not self._is_stale(state):
            return state
        logger.info("drag on %r ended: its path or item was removed", state.path)
        self.state = None
        return None

    def _is_stale(self, state: SessionState) -> bool:
        path = state.path
        if path is None:
            return False
        if path.root is not self.root:
            return True
        if state.kind is DragKind.VERTEX and not path.has_vertex(state.item.id):
            return True
        if state.kind is DragKind.EDGE and not path.has_edge(state.item.id):
            return True
        snapshot = state.snapshot
        if snapshot is None:
            return False
        if not all(path.has_vertex(vid) for vid in snapshot.vertex_ids):
            return True
        if isinstance(snapshot, VertexSnapshot):
            edge_ids = [eid for eid, _, _ in snapshot.controls]
        else:
            edge_ids = snapshot.edge_ids
        return not all(path.has_edge(eid) for eid in edge_ids)

    def _capture(self, state: SessionState) -> Snapshot:
        item = state.item
        if state.kind is DragKind.VERTEX:
            return capture(item.path, [item.id])
        if state.kind is DragKind.EDGE:
            return capture(item.path, [item.start, item.end])
        return capture(state.path)

    def _options(self, state: SessionState, px2: float, py2: float, shift: bool, ctrl: bool) -> TransformOptions:
        px, py = state.start
        seed_size = self.root.config.rect_seed_size

        if state.action is Action.MOVE:
            return TransformOptions(offset=(px2 - px, py2 - py))
        if state.action is Action.CREATE_PATH:
            return TransformOptions(
                center=(px, py),
                scale_x=(px2 - px) / seed_size,
                scale_y=(py2 - py) / seed_size,
            )

        cx, cy = state.snapshot.center
        vx, vy = state.vector
        vx2, vy2 = px2 - cx, py2 - cy
        r, r2 = state.radius, math.hypot(vx2, vy2)
        rr = r * r2
        scale = r2 / r if shift and r else 1.0
        rotation = None
        if ctrl and rr:
            rotation = ((vx * vy2 - vx2 * vy) / rr, (vx * vx2 + vy * vy2) / rr)
        return TransformOptions(scale_x=scale, rotation=rotation)
