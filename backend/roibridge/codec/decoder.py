"""Remote → local shape decoding.

``decode_shape`` is the per-primitive inverse of ``encoder.encode_shape``.
``decode_roi`` recombines the shapes of one remote ROI: area shapes are merged
with XOR (which restores holes sent as sibling polygons), points merge into a
single multi-point, lines stay separate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from shapely import make_valid
from shapely.errors import ShapelyError

from roibridge.codec.colors import more_translucent, rgba_to_argb, to_signed32
from roibridge.codec.config import CodecConfig
from roibridge.codec.decompose import split_geometry
from roibridge.codec.points import parse_points
from roibridge.codec.report import DecodeReport
from roibridge.errors import RoiBridgeError, UnsupportedShapeKind
from roibridge.models.local_shapes import (
    Ellipse,
    Line,
    LocalShape,
    MultiPoint,
    PlaneCoordinate,
    Point,
    Polygon,
    Polyline,
    Rectangle,
)
from roibridge.models.objects import LocalObject, ObjectCategory
from roibridge.models.remote_shapes import (
    RemoteEllipse,
    RemoteLabel,
    RemoteLine,
    RemoteMask,
    RemotePoint,
    RemotePolygon,
    RemotePolyline,
    RemoteRectangle,
    RemoteRoi,
    RemoteShape,
)
from roibridge.utils.geometry import is_area_shape, shape_to_geometry

logger = logging.getLogger(__name__)

# Stroke the server gives shapes drawn without a color: opaque yellow
_SERVER_DEFAULT_STROKE_ARGB = -256


def _decoded_style(shape: RemoteShape, config: CodecConfig) -> tuple[str | None, int | None]:
    """Return (path_class, color) from the shape's fill and stroke.

    A class is recovered when the stroke matches exactly one configured class
    color and the fill is the one the encoder gives that class.
    """
    argb = rgba_to_argb(shape.stroke_color)
    matches = [name for name, color in config.class_colors.items() if to_signed32(color) == argb]
    if len(matches) == 1:
        fill = more_translucent(argb) if config.translucent_fill else argb
        if rgba_to_argb(shape.fill_color) == fill:
            return matches[0], None
    if argb in (config.default_color, _SERVER_DEFAULT_STROKE_ARGB):
        return None, None
    return None, argb


def _check_vertices(kind: str, points: list, minimum: int) -> list:
    if len(points) < minimum:
        raise ValueError(f"{kind} needs at least {minimum} points, got {len(points)}")
    return points


def decode_shape(shape: RemoteShape, config: CodecConfig | None = None) -> LocalShape:
    """Decode one remote primitive. Raises ``UnsupportedShapeKind`` for masks."""
    config = config or CodecConfig()
    path_class, color = _decoded_style(shape, config)
    common = dict(
        plane=PlaneCoordinate.clamped(shape.the_c, shape.the_z, shape.the_t),
        name=shape.text if shape.text and shape.text.strip() else None,
        path_class=path_class,
        color=color,
        locked=bool(shape.locked),
    )

    match shape:
        case RemoteRectangle():
            return Rectangle(x=shape.x, y=shape.y, width=shape.width, height=shape.height, **common)
        case RemoteEllipse():
            return Ellipse(
                x=shape.x - shape.radius_x,
                y=shape.y - shape.radius_y,
                width=shape.radius_x * 2,
                height=shape.radius_y * 2,
                **common,
            )
        case RemoteLine():
            return Line(x1=shape.x1, y1=shape.y1, x2=shape.x2, y2=shape.y2, **common)
        case RemotePolyline():
            return Polyline(points=_check_vertices("Polyline", parse_points(shape.points), 2), **common)
        case RemotePolygon():
            return Polygon(points=_check_vertices("Polygon", parse_points(shape.points), 3), **common)
        case RemotePoint():
            return Point(x=shape.x, y=shape.y, **common)
        case RemoteLabel():
            logger.info("Label shapes are not supported locally; importing as a point")
            return Point(x=shape.x, y=shape.y, **common)
        case RemoteMask():
            raise UnsupportedShapeKind("Mask", "decode")
        case _:
            raise UnsupportedShapeKind(getattr(shape, "kind", type(shape).__name__), "decode")


def _lowest_plane(shapes: list[LocalShape]) -> PlaneCoordinate:
    return PlaneCoordinate(
        c=min(s.plane.c for s in shapes),
        z=min(s.plane.z for s in shapes),
        t=min(s.plane.t for s in shapes),
    )


def decode_roi(roi: RemoteRoi, config: CodecConfig | None = None) -> list[LocalShape]:
    config = config or CodecConfig()
    shapes = [decode_shape(s, config) for s in roi.shapes]
    if len(shapes) <= 1:
        return shapes

    areas = [s for s in shapes if is_area_shape(s)]
    points = [s for s in shapes if isinstance(s, (Point, MultiPoint))]
    others = [s for s in shapes if not is_area_shape(s) and not isinstance(s, (Point, MultiPoint))]

    out: list[LocalShape] = []
    if len(areas) == 1:
        out.append(areas[0])
    elif areas:
        # Self-intersecting remote polygons are repaired before the XOR
        geom = make_valid(shape_to_geometry(areas[0]))
        for area in areas[1:]:
            geom = geom.symmetric_difference(make_valid(shape_to_geometry(area)))
        first = areas[0]
        attrs = dict(
            plane=_lowest_plane(areas),
            name=first.name,
            path_class=first.path_class,
            color=first.color,
            locked=first.locked,
        )
        for part in split_geometry(geom, **attrs):
            if part.holes:
                out.append(part)
            else:
                out.append(Polygon(points=part.exterior, **attrs))

    if len(points) == 1:
        out.append(points[0])
    elif points:
        coords: list[tuple[float, float]] = []
        for p in points:
            coords.extend(p.points if isinstance(p, MultiPoint) else [(p.x, p.y)])
        first = points[0]
        out.append(
            MultiPoint(
                points=coords,
                plane=first.plane,
                name=first.name,
                path_class=first.path_class,
                color=first.color,
                locked=first.locked,
            )
        )

    out.extend(others)
    return out


def filter_by_owner(rois: Iterable[RemoteRoi], owner: str | None) -> list[RemoteRoi]:
    """ROIs created by ``owner``; every ROI when no owner is given."""
    rois = list(rois)
    if not owner:
        return rois
    return [roi for roi in rois if roi.owner == owner]


def decode_rois(
    rois: Iterable[RemoteRoi],
    config: CodecConfig | None = None,
    category: ObjectCategory = ObjectCategory.ANNOTATION,
    strict: bool = False,
) -> DecodeReport:
    """Decode remote ROIs into local objects of the given category."""
    config = config or CodecConfig()
    report = DecodeReport()
    for i, roi in enumerate(rois):
        try:
            shapes = decode_roi(roi, config)
        except (RoiBridgeError, ValueError, ShapelyError) as e:
            if strict:
                raise
            logger.warning("Skipping ROI %s: %s", roi.id, e)
            report.skip(i, str(e))
            continue
        if not shapes:
            report.skip(i, "empty ROI")
            continue
        report.objects.extend(LocalObject(shape=s, category=category) for s in shapes)
        report.converted += 1
    logger.info("Decoded %d ROIs into %d objects (%d skipped)",
                report.converted, len(report.objects), len(report.skipped))
    return report
