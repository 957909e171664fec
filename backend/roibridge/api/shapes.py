"""POST /api/shapes/encode and /api/shapes/decode — the geometry codec over HTTP."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from shapely.errors import ShapelyError

from roibridge.codec.config import CodecConfig
from roibridge.codec.decoder import decode_rois, filter_by_owner
from roibridge.codec.encoder import encode_objects
from roibridge.dependencies import get_codec_config
from roibridge.errors import RoiBridgeError
from roibridge.models.objects import LocalObject, ObjectCategory
from roibridge.models.requests import DecodeRequest, EncodeRequest, ObjectPayload
from roibridge.models.responses import DecodeResponse, EncodeResponse, SkippedResponse

router = APIRouter(prefix="/shapes")
logger = logging.getLogger(__name__)


@router.post("/encode", response_model=EncodeResponse)
def encode(req: EncodeRequest, config: CodecConfig = Depends(get_codec_config)) -> EncodeResponse:
    objects = [LocalObject(shape=o.shape, category=ObjectCategory.parse(o.category)) for o in req.objects]
    try:
        report = encode_objects(objects, config, strict=req.strict)
    except (RoiBridgeError, ValueError) as e:
        logger.warning("Encode request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return EncodeResponse(
        rois=report.rois,
        converted=report.converted,
        skipped=[SkippedResponse(index=s.index, reason=s.reason) for s in report.skipped],
        warnings=report.warnings,
    )


@router.post("/decode", response_model=DecodeResponse)
def decode(req: DecodeRequest, config: CodecConfig = Depends(get_codec_config)) -> DecodeResponse:
    rois = filter_by_owner(req.rois, req.owner)
    try:
        report = decode_rois(rois, config, category=ObjectCategory.parse(req.category), strict=req.strict)
    except (RoiBridgeError, ValueError, ShapelyError) as e:
        logger.warning("Decode request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return DecodeResponse(
        objects=[ObjectPayload(shape=o.shape, category=o.category.value) for o in report.objects],
        converted=report.converted,
        skipped=[SkippedResponse(index=s.index, reason=s.reason) for s in report.skipped],
    )
