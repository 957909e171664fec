"""Leaf-node geometry helpers. No codec imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from shapely import affinity
from shapely.geometry import LineString, MultiPoint as ShapelyMultiPoint
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import box
from shapely.geometry.base import BaseGeometry

from roibridge.models.local_shapes import (
    CompoundPolygon,
    Ellipse,
    Line,
    LocalShape,
    MultiPoint,
    Point,
    Point2,
    Polygon,
    Polyline,
    Rectangle,
)

# Segments per quarter circle when approximating ellipses as polygons
_ELLIPSE_QUAD_SEGS = 32


def as_array(points: list[Point2]) -> NDArray[np.float64]:
    if not points:
        return np.empty((0, 2))
    return np.asarray(points, dtype=np.float64)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def open_ring(coords: list[Point2]) -> list[Point2]:
    """Drop the repeated closing vertex of a ring, if present."""
    pts = [(float(x), float(y)) for x, y in coords]
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return pts


def axis_aligned_rectangle(ring: list[Point2]) -> tuple[float, float, float, float] | None:
    """Return (x, y, width, height) if the open ring is an axis-aligned rectangle.

    Edges must alternate vertical/horizontal starting from either orientation.
    """
    if len(ring) != 4:
        return None
    closed = ring + ring[:1]
    vertical_first = all(
        (closed[i][0] == closed[i + 1][0]) if i % 2 == 0 else (closed[i][1] == closed[i + 1][1])
        for i in range(4)
    )
    horizontal_first = all(
        (closed[i][1] == closed[i + 1][1]) if i % 2 == 0 else (closed[i][0] == closed[i + 1][0])
        for i in range(4)
    )
    if not (vertical_first or horizontal_first):
        return None
    xmin, ymin, xmax, ymax = bbox(as_array(ring))
    if xmax == xmin or ymax == ymin:
        return None
    return (xmin, ymin, xmax - xmin, ymax - ymin)


def rotated_ellipse_bounds(
    cx: float, cy: float, rx: float, ry: float, rotation_deg: float
) -> tuple[float, float, float, float]:
    """Axis-aligned bounding box (xmin, ymin, xmax, ymax) of a rotated ellipse."""
    theta = math.radians(rotation_deg)
    hx = math.sqrt((rx * math.cos(theta)) ** 2 + (ry * math.sin(theta)) ** 2)
    hy = math.sqrt((rx * math.sin(theta)) ** 2 + (ry * math.cos(theta)) ** 2)
    return (cx - hx, cy - hy, cx + hx, cy + hy)


def ellipse_geometry(ellipse: Ellipse) -> ShapelyPolygon:
    cx = ellipse.x + ellipse.width / 2
    cy = ellipse.y + ellipse.height / 2
    circle = ShapelyPoint(cx, cy).buffer(1.0, quad_segs=_ELLIPSE_QUAD_SEGS)
    geom = affinity.scale(circle, ellipse.width / 2, ellipse.height / 2, origin=(cx, cy))
    if ellipse.rotation:
        geom = affinity.rotate(geom, ellipse.rotation, origin=(cx, cy))
    return geom


def shape_to_geometry(shape: LocalShape) -> BaseGeometry:
    """Shapely geometry of a local shape, used for area operations and containment."""
    match shape:
        case Rectangle():
            return box(shape.x, shape.y, shape.x + shape.width, shape.y + shape.height)
        case Ellipse():
            return ellipse_geometry(shape)
        case Line():
            return LineString([(shape.x1, shape.y1), (shape.x2, shape.y2)])
        case Polyline():
            return LineString(shape.points)
        case Polygon():
            return ShapelyPolygon(shape.points)
        case Point():
            return ShapelyPoint(shape.x, shape.y)
        case MultiPoint():
            return ShapelyMultiPoint(shape.points)
        case CompoundPolygon():
            return ShapelyPolygon(shape.exterior, shape.holes)
        case _:
            raise TypeError(f"Not a local shape: {type(shape).__name__}")


def is_area_shape(shape: LocalShape) -> bool:
    return isinstance(shape, (Rectangle, Ellipse, Polygon, CompoundPolygon))
