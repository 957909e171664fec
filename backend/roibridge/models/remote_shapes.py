"""Remote shape schema: primitive shapes as stored by the image server.

Colors are packed RGBA (R,G,B,A from the high byte down), signed 32-bit.
Polyline/Polygon points are a single "x,y x,y ..." string.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

DEFAULT_NAMESPACE = "http://www.openmicroscopy.org/Schemas/OME/2016-06"

# 0xFFFFFF00 as signed 32-bit: white with zero alpha
TRANSPARENT_FILL = -256


class _RemoteShapeBase(BaseModel):
    namespace: str = DEFAULT_NAMESPACE
    the_c: int | None = None
    the_z: int | None = None
    the_t: int | None = None
    text: str = ""
    locked: bool | None = None
    fill_color: int = TRANSPARENT_FILL
    stroke_color: int = -65281  # opaque yellow in RGBA

    @property
    def type_tag(self) -> str:
        return f"{self.namespace}#{self.kind}"  # type: ignore[attr-defined]


class RemoteRectangle(_RemoteShapeBase):
    kind: Literal["Rectangle"] = "Rectangle"
    x: float
    y: float
    width: float
    height: float


class RemoteEllipse(_RemoteShapeBase):
    kind: Literal["Ellipse"] = "Ellipse"
    x: float  # center
    y: float
    radius_x: float
    radius_y: float


class RemoteLine(_RemoteShapeBase):
    kind: Literal["Line"] = "Line"
    x1: float
    y1: float
    x2: float
    y2: float


class RemotePolyline(_RemoteShapeBase):
    kind: Literal["Polyline"] = "Polyline"
    points: str


class RemotePolygon(_RemoteShapeBase):
    kind: Literal["Polygon"] = "Polygon"
    points: str


class RemotePoint(_RemoteShapeBase):
    kind: Literal["Point"] = "Point"
    x: float
    y: float


class RemoteLabel(_RemoteShapeBase):
    kind: Literal["Label"] = "Label"
    x: float
    y: float


class RemoteMask(_RemoteShapeBase):
    kind: Literal["Mask"] = "Mask"
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


RemoteShape = Annotated[
    Union[
        RemoteRectangle,
        RemoteEllipse,
        RemoteLine,
        RemotePolyline,
        RemotePolygon,
        RemotePoint,
        RemoteLabel,
        RemoteMask,
    ],
    Field(discriminator="kind"),
]


class RemoteRoi(BaseModel):
    """A server-side ROI: one or more shapes created from one local object."""

    id: int | None = None
    owner: str | None = None
    shapes: list[RemoteShape] = Field(default_factory=list)
