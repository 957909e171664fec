"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roibridge.models.local_shapes import LocalShape
from roibridge.models.metadata import KeyValueEntry, ReconciliationPolicy
from roibridge.models.remote_shapes import RemoteRoi


class ObjectPayload(BaseModel):
    shape: LocalShape
    category: str = Field(default="annotation", description="annotation, detection or cell")


class EncodeRequest(BaseModel):
    objects: list[ObjectPayload] = Field(..., description="Local objects to encode")
    strict: bool = Field(default=False, description="Fail on the first unsupported object")


class DecodeRequest(BaseModel):
    rois: list[RemoteRoi] = Field(..., description="Remote ROIs to decode")
    owner: str | None = Field(default=None, description="Keep only ROIs of this owner")
    category: str = Field(default="annotation", description="Category of the decoded objects")
    strict: bool = False


class KeyValueReconcileRequest(BaseModel):
    incoming: list[KeyValueEntry] = Field(..., description="Pairs to merge in; keys must be unique")
    existing: dict[str, str] = Field(default_factory=dict)
    policy: ReconciliationPolicy = ReconciliationPolicy.KEEP_AND_ADD


class ColorConvertRequest(BaseModel):
    """Either unpack ``argb``, or pack the four components when it is omitted."""

    argb: int | None = None
    alpha: int = Field(default=255, ge=0, le=255)
    red: int = Field(default=0, ge=0, le=255)
    green: int = Field(default=0, ge=0, le=255)
    blue: int = Field(default=0, ge=0, le=255)
