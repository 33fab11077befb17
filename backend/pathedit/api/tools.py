"""POST /api/normalize and /api/scale — stateless descriptor utilities."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from pathedit.engine.normalizer import build_path
from pathedit.models.requests import DescriptorRequest, ScaleRequest
from pathedit.models.responses import BBoxModel, NormalizeResponse, ScaleResponse
from pathedit.svg.serializer import scale_path

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize_descriptor(req: DescriptorRequest) -> NormalizeResponse:
    path = build_path(req.d)
    if path is None:
        logger.info("normalize: no path from %r", req.d[:80])
        return NormalizeResponse(valid=False)
    try:
        return NormalizeResponse(
            valid=True,
            d=path.d,
            vertex_count=len(path.vertices),
            edge_count=len(path.edges),
            closed=path.closed,
            bbox=BBoxModel.from_bbox(path.bbox()),
        )
    finally:
        path.release()


@router.post("/scale", response_model=ScaleResponse)
async def scale_descriptor(req: ScaleRequest) -> ScaleResponse:
    return ScaleResponse(d=scale_path(req.d, req.scale))
