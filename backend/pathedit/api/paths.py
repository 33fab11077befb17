"""/api/paths — the path collection of the workspace and its edit operations."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from pathedit.dependencies import Workspace, get_workspace
from pathedit.engine.events import ChangeType
from pathedit.engine.graph import Path
from pathedit.engine.topology import create_rect_path, delete_vertex, split_edge
from pathedit.engine.transform import capture, transform
from pathedit.models.requests import PathCreateRequest, PointRequest, RectRequest
from pathedit.models.responses import (
    OperationResponse,
    PathCreateResponse,
    PathListResponse,
    PathModel,
    SplitResponse,
)
from pathedit.models.transform_ops import TransformOptions

router = APIRouter(prefix="/paths")
logger = logging.getLogger(__name__)


def _require(workspace: Workspace, index: int) -> Path:
    path = workspace.root.get(index)
    if path is None:
        raise HTTPException(status_code=404, detail=f"No path at index {index}")
    return path


def _model(workspace: Workspace, path: Path) -> PathModel | None:
    index = workspace.root.index_of(path)
    if index is None:
        return None
    return PathModel.from_path(path, index)


@router.get("", response_model=PathListResponse)
async def list_paths(workspace: Workspace = Depends(get_workspace)) -> PathListResponse:
    return PathListResponse(paths=[PathModel.from_path(p, i) for i, p in enumerate(workspace.root.paths)])


@router.post("", response_model=PathCreateResponse)
async def create_path(
    req: PathCreateRequest, workspace: Workspace = Depends(get_workspace)
) -> PathCreateResponse:
    path = workspace.root.insert(req.d, req.index, req.selected)
    if path is None:
        return PathCreateResponse(created=False)
    return PathCreateResponse(created=True, path=_model(workspace, path))


@router.delete("", response_model=OperationResponse)
async def clear_paths(workspace: Workspace = Depends(get_workspace)) -> OperationResponse:
    workspace.session.cancel()
    workspace.root.clear()
    return OperationResponse(ok=True)


@router.post("/rect", response_model=PathCreateResponse)
async def create_rect(req: RectRequest, workspace: Workspace = Depends(get_workspace)) -> PathCreateResponse:
    root = workspace.root
    path = create_rect_path(root, req.left, req.top, req.right, req.bottom)
    root.select_path(path)
    return PathCreateResponse(created=True, path=_model(workspace, path))


@router.get("/{index}", response_model=PathModel)
async def get_path(index: int, workspace: Workspace = Depends(get_workspace)) -> PathModel:
    return PathModel.from_path(_require(workspace, index), index)


@router.delete("/{index}", response_model=OperationResponse)
async def remove_path(index: int, workspace: Workspace = Depends(get_workspace)) -> OperationResponse:
    _require(workspace, index)
    workspace.session.cancel()
    workspace.root.remove(index)
    return OperationResponse(ok=True)


@router.post("/{index}/transform", response_model=OperationResponse)
async def transform_path(
    index: int, options: TransformOptions, workspace: Workspace = Depends(get_workspace)
) -> OperationResponse:
    path = _require(workspace, index)
    workspace.session.cancel()
    transform(capture(path), options)
    workspace.root.change(ChangeType.TRANSFORM, path)
    return OperationResponse(ok=True, path=_model(workspace, path))


@router.post("/{index}/select", response_model=OperationResponse)
async def select_path(index: int, workspace: Workspace = Depends(get_workspace)) -> OperationResponse:
    path = _require(workspace, index)
    workspace.root.select_path(path)
    return OperationResponse(ok=True, path=_model(workspace, path))


@router.post("/{index}/edges/{edge_id}/split", response_model=SplitResponse)
async def split_path_edge(
    index: int,
    edge_id: int,
    req: PointRequest,
    workspace: Workspace = Depends(get_workspace),
) -> SplitResponse:
    path = _require(workspace, index)
    edge = path.get_edge(edge_id)
    if edge is None:
        logger.debug("split: path %d has no edge %d", index, edge_id)
        return SplitResponse(ok=False, path=_model(workspace, path))
    workspace.session.cancel()
    vertex = split_edge(edge, (req.x, req.y))
    return SplitResponse(
        ok=vertex is not None,
        vertex_id=vertex.id if vertex is not None else None,
        path=_model(workspace, path),
    )


@router.delete("/{index}/vertices/{vertex_id}", response_model=OperationResponse)
async def delete_path_vertex(
    index: int, vertex_id: int, workspace: Workspace = Depends(get_workspace)
) -> OperationResponse:
    path = _require(workspace, index)
    vertex = path.get_vertex(vertex_id)
    if vertex is None:
        logger.debug("delete: path %d has no vertex %d", index, vertex_id)
        return OperationResponse(ok=False, path=_model(workspace, path))
    workspace.session.cancel()
    ok = delete_vertex(vertex)
    # The path is gone when its last vertex was deleted
    return OperationResponse(ok=ok, path=_model(workspace, path))
