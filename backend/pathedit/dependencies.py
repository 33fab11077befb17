"""FastAPI dependency injection."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from pathedit.config import Settings, settings
from pathedit.engine.events import ChangeEvent
from pathedit.engine.host import InMemoryHost
from pathedit.engine.root import Root
from pathedit.engine.session import EditSession

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """One editing workspace: the root, its host, the drag session and event log."""

    root: Root
    host: InMemoryHost
    session: EditSession
    events: deque[dict] = field(default_factory=lambda: deque(maxlen=1000))

    def record(self, event: ChangeEvent) -> None:
        path = event.path
        index = event.index
        if index is None and path is not None:
            index = self.root.index_of(path)
        self.events.append(
            {
                "kind": event.kind.value,
                "path_id": path.id if path is not None else None,
                "index": index,
            }
        )


def create_workspace(config: Settings | None = None) -> Workspace:
    config = config or settings
    host = InMemoryHost()
    root = Root(config.canvas_width, config.canvas_height, host=host, config=config.editor_config())
    workspace = Workspace(
        root=root,
        host=host,
        session=EditSession(root),
        events=deque(maxlen=config.event_history),
    )
    root.on(workspace.record)
    logger.info("workspace created (%gx%g)", root.width, root.height)
    return workspace


_workspace: Workspace | None = None


def get_settings() -> Settings:
    return settings


def get_workspace() -> Workspace:
    global _workspace
    if _workspace is None:
        _workspace = create_workspace()
    return _workspace
