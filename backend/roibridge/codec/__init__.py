"""Geometry codec between local shapes and the remote shape schema."""

from roibridge.codec.colors import argb_to_rgba, rgba_to_argb
from roibridge.codec.config import CodecConfig
from roibridge.codec.decoder import decode_roi, decode_rois, decode_shape, filter_by_owner
from roibridge.codec.decompose import decompose, split_geometry
from roibridge.codec.encoder import encode_objects, encode_shape
from roibridge.codec.points import parse_points, points_to_string

__all__ = [
    "CodecConfig",
    "argb_to_rgba",
    "rgba_to_argb",
    "decode_shape",
    "decode_roi",
    "decode_rois",
    "filter_by_owner",
    "decompose",
    "split_geometry",
    "encode_shape",
    "encode_objects",
    "parse_points",
    "points_to_string",
]
