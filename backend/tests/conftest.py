"""Shared test fixtures."""

from __future__ import annotations

import pytest

from roibridge.codec.config import CodecConfig
from roibridge.gateway import InMemoryGateway, RemoteImage
from roibridge.hierarchy import InMemoryHierarchy
from roibridge.models.local_shapes import (
    CompoundPolygon,
    Ellipse,
    Line,
    MultiPoint,
    PlaneCoordinate,
    Point,
    Polygon,
    Polyline,
    Rectangle,
)
from roibridge.models.metadata import KeyValueEntry, RemoteChannel
from roibridge.models.objects import LocalObject, ObjectCategory
from roibridge.models.remote_shapes import RemotePolygon, RemoteRectangle, RemoteRoi

# Opaque blue, packed ARGB
BLUE = -16776961

IMAGE_ID = 42

# One of every primitive that survives a single-shape round trip
PRIMITIVES = [
    Rectangle(x=10, y=20, width=5, height=5, plane=PlaneCoordinate(c=1, z=0, t=0)),
    Ellipse(x=1, y=2, width=4, height=6, name="nucleus"),
    Line(x1=0, y1=0, x2=3.5, y2=7.25, plane=PlaneCoordinate(z=3, t=1)),
    Polyline(points=[(0, 0), (1.5, 2), (3, 0.25)], color=BLUE),
    Polygon(points=[(0, 0), (10, 0), (5, 8)], locked=True),
    Point(x=4, y=4.5, plane=PlaneCoordinate(c=2)),
    Rectangle(x=1, y=1, width=2, height=3, path_class="Stroma"),
]

SQUARE_WITH_HOLE = CompoundPolygon(
    exterior=[(0, 0), (10, 0), (10, 10), (0, 10)],
    holes=[[(3, 3), (7, 3), (7, 7), (3, 7)]],
)


@pytest.fixture
def config() -> CodecConfig:
    return CodecConfig()


@pytest.fixture
def classed_config() -> CodecConfig:
    return CodecConfig(class_colors={"Tumor": -65536, "Stroma": BLUE})


@pytest.fixture
def square_with_hole() -> CompoundPolygon:
    return SQUARE_WITH_HOLE.model_copy(deep=True)


@pytest.fixture
def hierarchy() -> InMemoryHierarchy:
    """A tissue annotation holding one cell detection."""
    tissue = LocalObject(shape=Rectangle(x=0, y=0, width=100, height=100))
    cell = LocalObject(
        shape=Ellipse(x=10, y=10, width=8, height=8),
        category=ObjectCategory.DETECTION,
    )
    store = InMemoryHierarchy([tissue, cell])
    store.resolve_hierarchy()
    return store


@pytest.fixture
def gateway() -> InMemoryGateway:
    gw = InMemoryGateway(user="alice")
    gw.add_image(
        IMAGE_ID,
        RemoteImage(
            rois=[
                RemoteRoi(
                    owner="alice",
                    shapes=[RemoteRectangle(x=0, y=0, width=50, height=50, the_z=0, the_t=0)],
                ),
                RemoteRoi(
                    owner="bob",
                    shapes=[RemotePolygon(points="60,60 80,60 70,75", the_z=0, the_t=0)],
                ),
            ],
            key_values=[KeyValueEntry(key="stain", value="HE"), KeyValueEntry(key="scanner", value="S1")],
            tags=["reviewed"],
            channels=[
                RemoteChannel(name="DAPI", input_start=10, input_end=900, red=0, green=0, blue=255),
                RemoteChannel(name="GFP", input_start=0, input_end=4000, red=0, green=255, blue=0),
            ],
        ),
    )
    return gw
