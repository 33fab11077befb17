"""/api/session, /api/keys and /api/events — interactive input from the client."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pathedit.dependencies import Workspace, get_workspace
from pathedit.engine.session import EditSession
from pathedit.models.requests import (
    DoubleClickRequest,
    KeyRequest,
    SessionBeginRequest,
    SessionCommitRequest,
    SessionMoveRequest,
)
from pathedit.models.responses import EventModel, EventsResponse, OperationResponse, SessionResponse

router = APIRouter()


def _state(session: EditSession, ok: bool) -> SessionResponse:
    state = session.state
    if state is None:
        return SessionResponse(ok=ok)
    return SessionResponse(ok=ok, active=True, kind=state.kind.value, action=state.action.value)


@router.post("/session/begin", response_model=SessionResponse)
async def begin(req: SessionBeginRequest, workspace: Workspace = Depends(get_workspace)) -> SessionResponse:
    session = workspace.session
    ok = session.begin(req.target.to_ref(), (req.x, req.y), shift=req.shift, ctrl=req.ctrl)
    return _state(session, ok)


@router.post("/session/move", response_model=SessionResponse)
async def move(req: SessionMoveRequest, workspace: Workspace = Depends(get_workspace)) -> SessionResponse:
    session = workspace.session
    ok = session.move((req.x, req.y), shift=req.shift, ctrl=req.ctrl)
    return _state(session, ok)


@router.post("/session/commit", response_model=SessionResponse)
async def commit(req: SessionCommitRequest, workspace: Workspace = Depends(get_workspace)) -> SessionResponse:
    session = workspace.session
    return _state(session, session.commit(shift=req.shift, ctrl=req.ctrl))


@router.post("/session/cancel", response_model=SessionResponse)
async def cancel(workspace: Workspace = Depends(get_workspace)) -> SessionResponse:
    session = workspace.session
    return _state(session, session.cancel())


@router.post("/session/dblclick", response_model=OperationResponse)
async def double_click(req: DoubleClickRequest, workspace: Workspace = Depends(get_workspace)) -> OperationResponse:
    workspace.session.cancel()
    return OperationResponse(ok=workspace.session.double_click(req.target.to_ref(), (req.x, req.y)))


@router.post("/keys", response_model=OperationResponse)
async def key(req: KeyRequest, workspace: Workspace = Depends(get_workspace)) -> OperationResponse:
    workspace.session.cancel()
    return OperationResponse(ok=workspace.root.handle_key(req.key, shift=req.shift, ctrl=req.ctrl))


@router.get("/events", response_model=EventsResponse)
async def events(workspace: Workspace = Depends(get_workspace)) -> EventsResponse:
    return EventsResponse(events=[EventModel(**e) for e in workspace.events])
