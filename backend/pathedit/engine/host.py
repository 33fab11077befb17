"""Render-host collaborator interface.

The engine never draws. It asks the host to create, update and remove one
visual per path, vertex and edge, and the host keeps the explicit
handle → entity map used to resolve input targets.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from svgpathtools import parse_path

from pathedit.engine.graph import EntityRef
from pathedit.utils.geometry import BBox, segments_bbox

logger = logging.getLogger(__name__)


class RenderHost(Protocol):
    def create_visual(self, kind: str, params: dict[str, Any]) -> Any: ...

    def update_visual(self, handle: Any, params: dict[str, Any]) -> None: ...

    def remove_visual(self, handle: Any) -> None: ...

    def resolve_handle(self, handle: Any) -> EntityRef | None: ...

    def bounding_box(self, handle: Any) -> BBox | None: ...


@dataclass
class Visual:
    kind: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def ref(self) -> EntityRef | None:
        return self.params.get("ref")


class InMemoryHost:
    """Headless host: visuals are plain dicts keyed by integer handles."""

    def __init__(self) -> None:
        self._visuals: dict[int, Visual] = {}
        self._handles = itertools.count(1)

    def __len__(self) -> int:
        return len(self._visuals)

    def create_visual(self, kind: str, params: dict[str, Any]) -> int:
        handle = next(self._handles)
        self._visuals[handle] = Visual(kind, dict(params))
        return handle

    def update_visual(self, handle: int, params: dict[str, Any]) -> None:
        visual = self._visuals.get(handle)
        if visual is None:
            logger.warning("update of unknown visual %r", handle)
            return
        visual.params.update(params)

    def remove_visual(self, handle: int) -> None:
        self._visuals.pop(handle, None)

    def visual(self, handle: int) -> Visual | None:
        return self._visuals.get(handle)

    def visuals(self, kind: str | None = None) -> list[Visual]:
        return [v for v in self._visuals.values() if kind is None or v.kind == kind]

    def resolve_handle(self, handle: int) -> EntityRef | None:
        visual = self._visuals.get(handle)
        return visual.ref if visual is not None else None

    def bounding_box(self, handle: int) -> BBox | None:
        visual = self._visuals.get(handle)
        if visual is None:
            return None
        params = visual.params
        if visual.kind == "vertex":
            r = params.get("r", 0.0)
            return BBox(params["cx"] - r, params["cy"] - r, 2 * r, 2 * r)
        d = params.get("d")
        if not d:
            return None
        return segments_bbox(list(parse_path(d)))
