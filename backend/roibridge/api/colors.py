"""POST /api/colors/convert — pack or unpack ARGB colors."""

from __future__ import annotations

from fastapi import APIRouter

from roibridge.codec.colors import argb_to_rgba, pack_argb, to_signed32, unpack_argb
from roibridge.models.requests import ColorConvertRequest
from roibridge.models.responses import ColorConvertResponse

router = APIRouter(prefix="/colors")


@router.post("/convert", response_model=ColorConvertResponse)
def convert(req: ColorConvertRequest) -> ColorConvertResponse:
    if req.argb is not None:
        argb = to_signed32(req.argb)
    else:
        argb = pack_argb(req.alpha, req.red, req.green, req.blue)
    a, r, g, b = unpack_argb(argb)
    return ColorConvertResponse(argb=argb, rgba=argb_to_rgba(argb), alpha=a, red=r, green=g, blue=b)
