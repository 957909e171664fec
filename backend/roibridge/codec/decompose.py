"""Split compound polygons into independent simple shapes.

The remote schema has no notion of holes: a polygon with holes is sent as its
exterior ring followed by one polygon per hole. The hole relationship only
survives if the shapes stay grouped under one ROI (see ``decoder.decode_roi``).
"""

from __future__ import annotations

import logging
from typing import Any

from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from roibridge.models.local_shapes import CompoundPolygon, Polygon, Rectangle
from roibridge.utils.geometry import axis_aligned_rectangle, open_ring

logger = logging.getLogger(__name__)


def split_geometry(geom: BaseGeometry, **attrs: Any) -> list[CompoundPolygon]:
    """Break a (multi)polygon geometry into one CompoundPolygon per part.

    ``attrs`` (plane, name, class, color, locked) are applied to every part.
    Non-areal parts of a geometry collection are dropped.
    """
    if isinstance(geom, ShapelyPolygon):
        parts = [geom]
    elif isinstance(geom, ShapelyMultiPolygon):
        parts = list(geom.geoms)
    elif hasattr(geom, "geoms"):
        parts = [g for g in geom.geoms if isinstance(g, ShapelyPolygon)]
        if len(parts) != len(geom.geoms):
            logger.warning("Dropped %d non-areal parts while splitting geometry",
                           len(geom.geoms) - len(parts))
    else:
        raise ValueError(f"Cannot split {geom.geom_type} into polygons")
    return [
        CompoundPolygon(
            exterior=open_ring(list(p.exterior.coords)),
            holes=[open_ring(list(ring.coords)) for ring in p.interiors],
            **attrs,
        )
        for p in parts
        if not p.is_empty
    ]


def decompose(shape: CompoundPolygon, detect_rectangles: bool = True) -> list[Polygon | Rectangle]:
    """Exterior ring first, then each hole, in the order they are stored.

    A polygon with h holes always gives h + 1 parts; a ring detected as an
    axis-aligned rectangle is one of those parts, as a ``Rectangle``.
    """
    attrs = shape.model_dump(exclude={"kind", "exterior", "holes"})
    rings = [shape.exterior, *shape.holes]
    if shape.holes:
        logger.info("Splitting polygon with %d holes into %d shapes", len(shape.holes), len(rings))
    return [_ring_to_shape(ring, attrs, detect_rectangles) for ring in rings]


def _ring_to_shape(ring: list, attrs: dict, detect_rectangles: bool) -> Polygon | Rectangle:
    ring = open_ring(ring)
    if detect_rectangles:
        rect = axis_aligned_rectangle(ring)
        if rect is not None:
            x, y, w, h = rect
            return Rectangle(x=x, y=y, width=w, height=h, **attrs)
    return Polygon(points=ring, **attrs)
