"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pathedit.engine.graph import EntityKind, EntityRef


class DescriptorRequest(BaseModel):
    d: str = Field(..., description="Path descriptor (SVG path data)")


class ScaleRequest(BaseModel):
    d: str = Field(..., description="Path descriptor (SVG path data)")
    scale: float = Field(..., description="Factor applied to every coordinate and radius")


class PathCreateRequest(BaseModel):
    d: str = Field(..., description="Path descriptor (SVG path data)")
    selected: bool = False
    index: int | None = Field(default=None, description="Insert position; appended when omitted")


class RectRequest(BaseModel):
    left: float
    top: float
    right: float
    bottom: float


class PointRequest(BaseModel):
    x: float
    y: float


class KeyRequest(BaseModel):
    key: str = Field(..., description="Key name, e.g. ArrowLeft, Tab, Delete")
    shift: bool = False
    ctrl: bool = False


class TargetModel(BaseModel):
    kind: EntityKind
    path_id: int | None = None
    item_id: int | None = None

    def to_ref(self) -> EntityRef:
        return EntityRef(self.kind, self.path_id, self.item_id)


class SessionBeginRequest(BaseModel):
    target: TargetModel
    x: float
    y: float
    shift: bool = False
    ctrl: bool = False


class SessionMoveRequest(BaseModel):
    x: float
    y: float
    shift: bool = False
    ctrl: bool = False


class SessionCommitRequest(BaseModel):
    shift: bool = False
    ctrl: bool = False


class DoubleClickRequest(BaseModel):
    target: TargetModel
    x: float
    y: float
