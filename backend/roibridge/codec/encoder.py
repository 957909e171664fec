"""Local → remote shape encoding.

One local shape becomes one remote shape, except multi-points (one remote
point per vertex) and compound polygons (decomposed first).
"""

from __future__ import annotations

import logging
import warnings
from collections import defaultdict
from collections.abc import Iterable

from roibridge.codec.colors import argb_to_rgba, more_translucent
from roibridge.codec.config import CodecConfig
from roibridge.codec.decompose import decompose
from roibridge.codec.points import points_to_string
from roibridge.codec.report import EncodeReport
from roibridge.errors import GeometryAssumptionViolation, RoiBridgeError, UnsupportedShapeKind
from roibridge.models.local_shapes import (
    BaseLocalShape,
    CompoundPolygon,
    Ellipse,
    Line,
    LocalShape,
    MultiPoint,
    Point,
    Polygon,
    Polyline,
    Rectangle,
)
from roibridge.models.objects import LocalObject
from roibridge.models.remote_shapes import (
    RemoteEllipse,
    RemoteLine,
    RemotePoint,
    RemotePolygon,
    RemotePolyline,
    RemoteRectangle,
    RemoteRoi,
    RemoteShape,
)
from roibridge.utils.geometry import rotated_ellipse_bounds

logger = logging.getLogger(__name__)


def shape_style(shape: LocalShape, config: CodecConfig) -> tuple[int, int]:
    """Return (fill, stroke) as packed RGBA."""
    if shape.path_class:
        color = config.class_color(shape.path_class)
        fill = more_translucent(color) if config.translucent_fill else color
        return argb_to_rgba(fill), argb_to_rgba(color)
    stroke = shape.color if shape.color is not None else config.default_color
    return config.transparent_fill, argb_to_rgba(stroke)


def encode_shape(shape: LocalShape, config: CodecConfig | None = None) -> list[RemoteShape]:
    """Encode one local shape. Raises ``UnsupportedShapeKind`` for unknown variants."""
    config = config or CodecConfig()
    if not isinstance(shape, BaseLocalShape):
        raise UnsupportedShapeKind(type(shape).__name__, "encode")
    fill, stroke = shape_style(shape, config)
    common = dict(
        namespace=config.schema_namespace,
        the_c=shape.plane.c,
        the_z=shape.plane.z,
        the_t=shape.plane.t,
        text=shape.name if shape.name is not None else "",
        locked=shape.locked,
        fill_color=fill,
        stroke_color=stroke,
    )

    match shape:
        case Rectangle():
            return [RemoteRectangle(x=shape.x, y=shape.y, width=shape.width, height=shape.height, **common)]
        case Ellipse():
            return [_encode_ellipse(shape, common)]
        case Line():
            return [RemoteLine(x1=shape.x1, y1=shape.y1, x2=shape.x2, y2=shape.y2, **common)]
        case Polyline():
            return [RemotePolyline(points=points_to_string(shape.points), **common)]
        case Polygon():
            return [RemotePolygon(points=points_to_string(shape.points), **common)]
        case Point():
            return [RemotePoint(x=shape.x, y=shape.y, **common)]
        case MultiPoint():
            return [RemotePoint(x=x, y=y, **common) for x, y in shape.points]
        case CompoundPolygon():
            logger.info("Compound polygon will be split for the remote schema")
            out: list[RemoteShape] = []
            for part in decompose(shape, detect_rectangles=config.detect_rectangles):
                out.extend(encode_shape(part, config))
            return out
        case _:
            raise UnsupportedShapeKind(getattr(shape, "kind", type(shape).__name__), "encode")


def _encode_ellipse(shape: Ellipse, common: dict) -> RemoteEllipse:
    cx = shape.x + shape.width / 2
    cy = shape.y + shape.height / 2
    rx = shape.width / 2
    ry = shape.height / 2
    if shape.rotation % 180:
        xmin, ymin, xmax, ymax = rotated_ellipse_bounds(cx, cy, rx, ry, shape.rotation)
        rx, ry = (xmax - xmin) / 2, (ymax - ymin) / 2
        msg = (
            f"Ellipse rotated by {shape.rotation} degrees approximated by the "
            f"axis-aligned ellipse inscribed in its bounding box"
        )
        logger.warning(msg)
        warnings.warn(msg, GeometryAssumptionViolation, stacklevel=3)
    return RemoteEllipse(x=cx, y=cy, radius_x=rx, radius_y=ry, **common)


def _class_key(obj: LocalObject) -> str:
    return obj.shape.path_class if obj.shape.path_class else "null"


def encode_objects(
    objects: Iterable[LocalObject],
    config: CodecConfig | None = None,
    strict: bool = False,
) -> EncodeReport:
    """Encode local objects into one remote ROI each, grouped by class.

    ROIs come out sorted by class key (unclassified objects under "null").
    With ``strict`` the first failure propagates; otherwise the object is
    skipped and the reason recorded.
    """
    config = config or CodecConfig()
    report = EncodeReport()
    by_class: dict[str, list[RemoteRoi]] = defaultdict(list)

    for i, obj in enumerate(objects):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", GeometryAssumptionViolation)
            try:
                shapes = encode_shape(obj.shape, config)
            except (RoiBridgeError, ValueError) as e:
                if strict:
                    raise
                logger.warning("Skipping object %s: %s", obj.id, e)
                report.skip(i, str(e))
                continue
        report.warnings.extend(str(w.message) for w in caught)
        if not shapes:
            report.skip(i, "empty shape")
            continue
        by_class[_class_key(obj)].append(RemoteRoi(shapes=shapes))
        report.converted += 1

    for key in sorted(by_class):
        report.rois.extend(by_class[key])
    logger.info("Encoded %d objects into %d ROIs (%d skipped)",
                report.converted, len(report.rois), len(report.skipped))
    return report
