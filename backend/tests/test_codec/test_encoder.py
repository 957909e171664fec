"""Tests for local -> remote shape encoding."""

from __future__ import annotations

import warnings

import pytest

from roibridge.codec.colors import argb_to_rgba, more_translucent
from roibridge.codec.config import CodecConfig
from roibridge.codec.encoder import encode_objects, encode_shape, shape_style
from roibridge.errors import GeometryAssumptionViolation, UnsupportedShapeKind
from roibridge.models.local_shapes import (
    Ellipse,
    MultiPoint,
    PlaneCoordinate,
    Polygon,
    Rectangle,
)
from roibridge.models.objects import LocalObject
from roibridge.models.remote_shapes import (
    DEFAULT_NAMESPACE,
    TRANSPARENT_FILL,
    RemoteEllipse,
    RemotePoint,
    RemotePolygon,
    RemoteRectangle,
)
from tests.conftest import BLUE, SQUARE_WITH_HOLE


# ---------------------------------------------------------------------------
# Single shapes
# ---------------------------------------------------------------------------

class TestEncodeShape:
    def test_rectangle_fields(self):
        rect = Rectangle(x=10, y=20, width=5, height=5, plane=PlaneCoordinate(c=1, z=0, t=0))
        [remote] = encode_shape(rect)
        assert isinstance(remote, RemoteRectangle)
        assert remote.kind == "Rectangle"
        assert remote.type_tag == f"{DEFAULT_NAMESPACE}#Rectangle"
        assert (remote.x, remote.y, remote.width, remote.height) == (10, 20, 5, 5)
        assert (remote.the_c, remote.the_z, remote.the_t) == (1, 0, 0)

    def test_custom_namespace(self):
        config = CodecConfig(schema_namespace="urn:test")
        [remote] = encode_shape(Rectangle(x=0, y=0, width=1, height=1), config)
        assert remote.type_tag == "urn:test#Rectangle"

    def test_ellipse_uses_center_and_radii(self):
        [remote] = encode_shape(Ellipse(x=1, y=2, width=4, height=6))
        assert isinstance(remote, RemoteEllipse)
        assert (remote.x, remote.y, remote.radius_x, remote.radius_y) == (3, 5, 2, 3)

    def test_polygon_points_string(self):
        [remote] = encode_shape(Polygon(points=[(0, 0), (10, 0), (5, 8)]))
        assert isinstance(remote, RemotePolygon)
        assert remote.points == "0.0,0.0 10.0,0.0 5.0,8.0"

    def test_multipoint_becomes_one_point_each(self):
        remote = encode_shape(MultiPoint(points=[(1, 1), (2, 2), (3, 3)]))
        assert len(remote) == 3
        assert all(isinstance(r, RemotePoint) for r in remote)
        assert [(r.x, r.y) for r in remote] == [(1, 1), (2, 2), (3, 3)]

    def test_name_becomes_text(self):
        [remote] = encode_shape(Rectangle(x=0, y=0, width=1, height=1, name="tumor core"))
        assert remote.text == "tumor core"

    def test_unknown_shape_raises(self):
        with pytest.raises(UnsupportedShapeKind):
            encode_shape("not a shape")  # type: ignore[arg-type]


class TestCompoundPolygon:
    def test_square_with_hole_becomes_two_rectangles(self):
        remote = encode_shape(SQUARE_WITH_HOLE)
        assert len(remote) == 2
        assert all(isinstance(r, RemoteRectangle) for r in remote)
        outer, hole = remote
        assert (outer.x, outer.y, outer.width, outer.height) == (0, 0, 10, 10)
        assert (hole.x, hole.y, hole.width, hole.height) == (3, 3, 4, 4)

    def test_without_rectangle_detection(self):
        remote = encode_shape(SQUARE_WITH_HOLE, CodecConfig(detect_rectangles=False))
        assert [r.kind for r in remote] == ["Polygon", "Polygon"]


class TestRotatedEllipse:
    def test_rotation_warns_and_uses_bounds(self):
        ellipse = Ellipse(x=1, y=2, width=4, height=6, rotation=90)
        with pytest.warns(GeometryAssumptionViolation):
            [remote] = encode_shape(ellipse)
        assert remote.x == pytest.approx(3)
        assert remote.y == pytest.approx(5)
        assert remote.radius_x == pytest.approx(3)
        assert remote.radius_y == pytest.approx(2)

    def test_half_turn_is_not_a_rotation(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", GeometryAssumptionViolation)
            [remote] = encode_shape(Ellipse(x=1, y=2, width=4, height=6, rotation=180))
        assert (remote.radius_x, remote.radius_y) == (2, 3)


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

class TestStyle:
    def test_unclassified_default(self, config):
        fill, stroke = shape_style(Rectangle(x=0, y=0, width=1, height=1), config)
        assert fill == TRANSPARENT_FILL
        assert stroke == argb_to_rgba(config.default_color)

    def test_explicit_color_overrides_default(self, config):
        _, stroke = shape_style(Rectangle(x=0, y=0, width=1, height=1, color=BLUE), config)
        assert stroke == argb_to_rgba(BLUE)

    def test_class_color_for_fill_and_stroke(self, classed_config):
        fill, stroke = shape_style(Rectangle(x=0, y=0, width=1, height=1, path_class="Stroma"), classed_config)
        assert fill == stroke == argb_to_rgba(BLUE)

    def test_unknown_class_falls_back_to_default(self, classed_config):
        _, stroke = shape_style(Rectangle(x=0, y=0, width=1, height=1, path_class="Other"), classed_config)
        assert stroke == argb_to_rgba(classed_config.default_color)

    def test_translucent_fill(self, classed_config):
        classed_config.translucent_fill = True
        fill, stroke = shape_style(Rectangle(x=0, y=0, width=1, height=1, path_class="Stroma"), classed_config)
        assert fill == argb_to_rgba(more_translucent(BLUE))
        assert stroke == argb_to_rgba(BLUE)


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------

class TestEncodeObjects:
    def test_one_roi_per_object_grouped_by_class(self, classed_config):
        objects = [
            LocalObject(shape=Rectangle(x=0, y=0, width=1, height=1)),
            LocalObject(shape=Rectangle(x=1, y=0, width=1, height=1, path_class="Tumor")),
            LocalObject(shape=Rectangle(x=2, y=0, width=1, height=1, path_class="Stroma")),
        ]
        report = encode_objects(objects, classed_config)
        assert report.converted == 3
        assert not report.skipped
        # Sorted by class key; unclassified objects sit under "null"
        assert [roi.shapes[0].x for roi in report.rois] == [2, 1, 0]

    def test_compound_shapes_share_one_roi(self):
        report = encode_objects([LocalObject(shape=SQUARE_WITH_HOLE)])
        assert len(report.rois) == 1
        assert len(report.rois[0].shapes) == 2

    def test_unsupported_object_is_skipped(self):
        objects = [
            LocalObject(shape=Rectangle(x=0, y=0, width=1, height=1)),
            LocalObject(shape="bogus"),  # type: ignore[arg-type]
        ]
        report = encode_objects(objects)
        assert report.converted == 1
        assert [s.index for s in report.skipped] == [1]
        assert "Unsupported ROI type" in report.skipped[0].reason
        assert "1 converted, 1 skipped" in report.summary()

    def test_strict_propagates(self):
        with pytest.raises(UnsupportedShapeKind):
            encode_objects([LocalObject(shape="bogus")], strict=True)  # type: ignore[arg-type]

    def test_rotation_warning_recorded(self):
        report = encode_objects([LocalObject(shape=Ellipse(x=0, y=0, width=2, height=4, rotation=30))])
        assert report.converted == 1
        assert len(report.warnings) == 1
        assert "rotated" in report.warnings[0]
