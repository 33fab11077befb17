"""Change notifications emitted to the host after committed mutations."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathedit.engine.graph import Path

logger = logging.getLogger(__name__)


class ChangeType(enum.Enum):
    CLEAR = "clear"
    INSERT = "insert"
    REMOVE = "remove"
    TRANSFORM = "transform"
    SELECT = "select"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeType
    path: Path | None = None
    # Position a removed path held before it left the collection
    index: int | None = None


ChangeHandler = Callable[[ChangeEvent], None]


class ChangeEmitter:
    """Ordered list of change handlers."""

    def __init__(self) -> None:
        self._handlers: list[ChangeHandler] = []

    def on(self, handler: ChangeHandler) -> Callable[[], None]:
        """Register a handler; returns a function that unregisters it."""
        self._handlers.append(handler)

        def off() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return off

    def emit(self, event: ChangeEvent) -> None:
        logger.debug("change: %s %r", event.kind.value, event.path)
        for handler in list(self._handlers):
            handler(event)

    def clear(self) -> None:
        self._handlers.clear()
