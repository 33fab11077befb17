"""pathedit path graph engine."""

from pathedit.engine.events import ChangeEvent, ChangeType
from pathedit.engine.graph import Edge, EdgeKind, EntityKind, EntityRef, Path, Vertex
from pathedit.engine.normalizer import build_path, normalize
from pathedit.engine.root import Root
from pathedit.engine.session import EditSession
from pathedit.engine.topology import create_rect_path, delete_vertex, split_edge
from pathedit.engine.transform import capture, transform

__all__ = [
    "ChangeEvent",
    "ChangeType",
    "Edge",
    "EdgeKind",
    "EntityKind",
    "EntityRef",
    "Path",
    "Vertex",
    "build_path",
    "normalize",
    "Root",
    "EditSession",
    "create_rect_path",
    "delete_vertex",
    "split_edge",
    "capture",
    "transform",
]
