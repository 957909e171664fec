"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roibridge.models.requests import ObjectPayload
from roibridge.models.remote_shapes import RemoteRoi


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"


class SkippedResponse(BaseModel):
    index: int
    reason: str


class EncodeResponse(BaseModel):
    rois: list[RemoteRoi] = Field(default_factory=list)
    converted: int = 0
    skipped: list[SkippedResponse] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class DecodeResponse(BaseModel):
    objects: list[ObjectPayload] = Field(default_factory=list)
    converted: int = 0
    skipped: list[SkippedResponse] = Field(default_factory=list)


class KeyValueReconcileResponse(BaseModel):
    entries: dict[str, str]
    existing_count: int = 0
    new_count: int = 0
    updated_count: int = 0
    summary: str = ""


class ColorConvertResponse(BaseModel):
    argb: int
    rgba: int
    alpha: int
    red: int
    green: int
    blue: int
