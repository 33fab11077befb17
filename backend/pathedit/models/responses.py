"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pathedit.engine.graph import Path
from pathedit.utils.geometry import BBox


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"
    paths: int = 0


class BBoxModel(BaseModel):
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bbox(cls, box: BBox) -> BBoxModel:
        return cls(x=box.x, y=box.y, width=box.width, height=box.height)


class NormalizeResponse(BaseModel):
    valid: bool
    d: str = ""
    vertex_count: int = 0
    edge_count: int = 0
    closed: bool = False
    bbox: BBoxModel | None = None


class ScaleResponse(BaseModel):
    d: str


class VertexModel(BaseModel):
    id: int
    x: float
    y: float
    smooth: bool = False
    moveto: bool = False


class EdgeModel(BaseModel):
    id: int
    kind: str
    start: int
    end: int


class PathModel(BaseModel):
    index: int | None = None
    id: int
    d: str
    selected: bool = False
    closed: bool = True
    bbox: BBoxModel
    vertices: list[VertexModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)

    @classmethod
    def from_path(cls, path: Path, index: int | None = None) -> PathModel:
        return cls(
            index=index,
            id=path.id,
            d=path.d,
            selected=path.selected,
            closed=path.closed,
            bbox=BBoxModel.from_bbox(path.bbox()),
            vertices=[
                VertexModel(id=v.id, x=v.x, y=v.y, smooth=v.smooth, moveto=v.moveto)
                for v in path.vertices
            ],
            edges=[
                EdgeModel(id=e.id, kind=e.kind.value, start=e.start, end=e.end)
                for e in path.edges
            ],
        )


class PathListResponse(BaseModel):
    paths: list[PathModel] = Field(default_factory=list)


class PathCreateResponse(BaseModel):
    created: bool
    path: PathModel | None = None


class OperationResponse(BaseModel):
    ok: bool
    path: PathModel | None = None


class SplitResponse(BaseModel):
    ok: bool
    vertex_id: int | None = None
    path: PathModel | None = None


class SessionResponse(BaseModel):
    ok: bool
    active: bool = False
    kind: str | None = None
    action: str | None = None


class EventModel(BaseModel):
    kind: str
    path_id: int | None = None
    index: int | None = None


class EventsResponse(BaseModel):
    events: list[EventModel] = Field(default_factory=list)
