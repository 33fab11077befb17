"""Root — the working area: an ordered collection of paths over one image.

Owns path lifetimes, emits change notifications, tracks selection and maps
keyboard commands (nudge, Tab cycling, Delete) onto engine operations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from pathedit.engine.config import EditorConfig
from pathedit.engine.events import ChangeEmitter, ChangeEvent, ChangeHandler, ChangeType
from pathedit.engine.graph import Edge, EntityKind, EntityRef, Path, Vertex
from pathedit.engine.host import RenderHost
from pathedit.engine.normalizer import Descriptor, build_path
from pathedit.engine.transform import capture, transform
from pathedit.models.transform_ops import TransformOptions

logger = logging.getLogger(__name__)

# Key names per binding (DOM KeyboardEvent.key values and their legacy aliases)
KEYS: dict[str, tuple[str, ...]] = {
    "delete": ("Del", "Delete"),
    "tab": ("Tab",),
    "left": ("Left", "ArrowLeft"),
    "up": ("Up", "ArrowUp"),
    "down": ("Down", "ArrowDown"),
    "right": ("Right", "ArrowRight"),
}

# Arrow key → (scale direction with Shift, rotation direction with Ctrl, unit offset)
_ARROWS: dict[str, tuple[int, int, tuple[int, int]]] = {
    "left": (-1, -1, (-1, 0)),
    "up": (1, -1, (0, -1)),
    "down": (-1, 1, (0, 1)),
    "right": (1, 1, (1, 0)),
}


class Root:
    """Collection of paths sharing one canvas, host and configuration."""

    def __init__(
        self,
        width: float = 100.0,
        height: float = 100.0,
        host: RenderHost | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.host = host
        self.config = config or EditorConfig()
        self.paths: list[Path] = []
        self.readonly = False
        self._emitter = ChangeEmitter()

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self.paths))

    # --- notifications ---------------------------------------------------

    def on(self, handler: ChangeHandler) -> Callable[[], None]:
        return self._emitter.on(handler)

    def change(self, kind: ChangeType, path: Path | None = None, index: int | None = None) -> None:
        self._emitter.emit(ChangeEvent(kind, path, index))

    # --- collection ------------------------------------------------------

    def get(self, index: int) -> Path | None:
        if 0 <= index < len(self.paths):
            return self.paths[index]
        return None

    def find(self, path_id: int | None) -> Path | None:
        for path in self.paths:
            if path.id == path_id:
                return path
        return None

    def index_of(self, path: Path) -> int | None:
        for i, item in enumerate(self.paths):
            if item is path:
                return i
        return None

    def insert(
        self,
        descriptor: Descriptor,
        index: int | None = None,
        selected: bool = False,
    ) -> Path | None:
        """Normalize a descriptor into a new path at ``index`` (clamped).

        Returns None when the descriptor does not produce a valid path.
        """
        path = build_path(descriptor, zero_length=self.config.zero_length)
        if path is None:
            logger.info("insert: descriptor produced no path")
            return None
        self.register(path, index)
        if selected:
            path.selected = True
        self.change(ChangeType.INSERT, path)
        return path

    def register(self, path: Path, index: int | None = None) -> Path:
        """Adopt a built path: attach visuals and place it in the collection."""
        count = len(self.paths)
        index = count if index is None else max(0, min(index, count))
        path.root = self
        path.precision = self.config.precision
        path.attach(self.host, self.config.vertex_radius)
        self.paths.insert(index, path)
        logger.debug("registered %r at %d", path, index)
        return path

    def remove(self, index: int) -> Path | None:
        """Remove and release the path at ``index``; out of range is a no-op."""
        path = self.get(index)
        if path is None:
            return None
        del self.paths[index]
        self.change(ChangeType.REMOVE, path, index)
        path.release()
        return path

    def discard(self, path: Path) -> None:
        index = self.index_of(path)
        if index is not None:
            self.remove(index)

    def clear(self) -> None:
        if not self.paths:
            return
        for path in self.paths:
            path.release()
        self.paths.clear()
        self.change(ChangeType.CLEAR)

    def release(self) -> None:
        """Drop every path and handler without notifications."""
        for path in self.paths:
            path.release()
        self.paths.clear()
        self._emitter.clear()

    def resolve(self, ref: EntityRef) -> Root | Path | Vertex | Edge | None:
        """Exhaustive dispatch from an entity reference to the live entity."""
        if ref.kind is EntityKind.ROOT:
            return self
        path = self.find(ref.path_id)
        if path is None:
            return None
        if ref.kind is EntityKind.PATH:
            return path
        if ref.kind is EntityKind.VERTEX:
            return path.get_vertex(ref.item_id)
        if ref.kind is EntityKind.EDGE:
            return path.get_edge(ref.item_id)
        raise AssertionError(f"Unhandled entity kind: {ref.kind}")

    # --- selection -------------------------------------------------------

    @property
    def selected(self) -> list[Path]:
        return [p for p in self.paths if p.selected]

    def select_path(self, path: Path | None) -> None:
        """Select exactly ``path`` (or nothing)."""
        for item in list(self.paths):
            selected = item is path
            if item.selected != selected:
                item.selected = selected
                self.change(ChangeType.SELECT, item)

    def cycle_selection(self, backwards: bool = False) -> None:
        """Move the selection to the next (or previous) path, wrapping around."""
        count = len(self.paths)
        for i, path in enumerate(self.paths):
            if path.selected:
                step = -1 if backwards else 1
                self.select_path(self.paths[(i + step) % count])
                return

    def delete_selected(self) -> bool:
        if self.readonly:
            return False
        index = None
        for i in range(len(self.paths) - 1, -1, -1):
            if self.paths[i].selected:
                index = i
                self.remove(i)
        if self.paths and index is not None:
            self.select_path(self.get(index))
        return True

    # --- keyboard --------------------------------------------------------

    def nudge(self, options: TransformOptions) -> bool:
        """Transform every selected path, unless a centre would leave the canvas."""
        if self.readonly:
            return False
        dx, dy = options.offset
        snapshots = []
        for path in self.selected:
            snapshot = capture(path)
            cx, cy = snapshot.center
            cx, cy = cx + dx, cy + dy
            if not (0 <= cx <= self.width and 0 <= cy <= self.height):
                logger.debug("nudge refused: centre of %r would leave the canvas", path)
                return False
            snapshots.append(snapshot)

        for snapshot in snapshots:
            transform(snapshot, options)
            self.change(ChangeType.TRANSFORM, snapshot.path)
        return True

    def handle_key(self, key: str, shift: bool = False, ctrl: bool = False) -> bool:
        """Apply a key binding. Returns True when the key was handled."""
        if key in KEYS["tab"]:
            self.cycle_selection(backwards=shift)
            return True
        if key in KEYS["delete"]:
            return self.delete_selected()
        for name, (scale_dir, angle_dir, (ux, uy)) in _ARROWS.items():
            if key in KEYS[name]:
                return self.nudge(self._arrow_options(scale_dir, angle_dir, ux, uy, shift, ctrl))
        return False

    def _arrow_options(
        self,
        scale_dir: int,
        angle_dir: int,
        ux: int,
        uy: int,
        shift: bool,
        ctrl: bool,
    ) -> TransformOptions:
        config = self.config
        if shift:
            return TransformOptions(scale_x=config.nudge_scale ** scale_dir)
        if ctrl:
            return TransformOptions(rotation=config.nudge_angle * angle_dir)
        step = config.nudge_step
        return TransformOptions(offset=(ux * step, uy * step))
