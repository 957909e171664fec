"""Key-value metadata, channel settings and the user's import choices."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class ReconciliationPolicy(str, enum.Enum):
    KEEP_AND_ADD = "keep_and_add"
    REPLACE_AND_ADD = "replace_and_add"
    DELETE_ALL_AND_ADD = "delete_all_and_add"


class KeyValueEntry(BaseModel):
    key: str
    value: str


class RoiImportChoice(BaseModel):
    remove_annotations: bool = True
    remove_detections: bool = True
    owner: str | None = None  # None = ROIs of every user


class MetadataImportChoice(BaseModel):
    policy: ReconciliationPolicy = ReconciliationPolicy.KEEP_AND_ADD


class ChannelImportChoice(BaseModel):
    include_names: bool = False
    include_display_range: bool = False
    include_color: bool = False


class ChannelSettings(BaseModel):
    """Local display settings of one channel. ``color`` is packed ARGB."""

    name: str = ""
    min_display: float = 0.0
    max_display: float = 255.0
    color: int = -1  # opaque white


class RemoteChannel(BaseModel):
    """Server-side channel binding: separate 8-bit color components."""

    name: str = ""
    input_start: float = 0.0
    input_end: float = 255.0
    red: int = Field(default=255, ge=0, le=255)
    green: int = Field(default=255, ge=0, le=255)
    blue: int = Field(default=255, ge=0, le=255)
    alpha: int = Field(default=255, ge=0, le=255)
