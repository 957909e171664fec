"""Local shape model: the host application's side of the conversion.

Every variant is tagged by ``kind`` so a list of mixed shapes validates as a
discriminated union. Polygon point lists are open: the closing vertex is not
repeated.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

Point2 = tuple[float, float]


class PlaneCoordinate(BaseModel):
    """(channel, z, t) slice a shape lives on. ``c < 0`` means every channel."""

    model_config = {"frozen": True}

    c: int = -1
    z: int = Field(default=0, ge=0)
    t: int = Field(default=0, ge=0)

    @classmethod
    def clamped(cls, c: int | None, z: int | None, t: int | None) -> PlaneCoordinate:
        """Build from remote values, where negative z/t mean "all slices/frames".

        Only the first slice/frame is kept in that case.
        """
        return cls(
            c=-1 if c is None or c < 0 else c,
            z=max(z or 0, 0),
            t=max(t or 0, 0),
        )

    @property
    def has_channel(self) -> bool:
        return self.c >= 0


class BaseLocalShape(BaseModel):
    plane: PlaneCoordinate = Field(default_factory=PlaneCoordinate)
    name: str | None = None
    path_class: str | None = None
    # Explicit ARGB color; None means "use the class color or the default"
    color: int | None = None
    locked: bool = False


class Rectangle(BaseLocalShape):
    kind: Literal["Rectangle"] = "Rectangle"
    x: float
    y: float
    width: float
    height: float


class Ellipse(BaseLocalShape):
    """Ellipse given by its bounding box; ``rotation`` in degrees around the center."""

    kind: Literal["Ellipse"] = "Ellipse"
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0


class Line(BaseLocalShape):
    kind: Literal["Line"] = "Line"
    x1: float
    y1: float
    x2: float
    y2: float


class Polyline(BaseLocalShape):
    kind: Literal["Polyline"] = "Polyline"
    points: list[Point2]


class Polygon(BaseLocalShape):
    kind: Literal["Polygon"] = "Polygon"
    points: list[Point2]


class Point(BaseLocalShape):
    kind: Literal["Point"] = "Point"
    x: float
    y: float


class MultiPoint(BaseLocalShape):
    kind: Literal["MultiPoint"] = "MultiPoint"
    points: list[Point2]


class CompoundPolygon(BaseLocalShape):
    """Polygon with holes. Never sent as-is: see ``codec.decompose``."""

    kind: Literal["CompoundPolygon"] = "CompoundPolygon"
    exterior: list[Point2]
    holes: list[list[Point2]] = Field(default_factory=list)


LocalShape = Annotated[
    Union[Rectangle, Ellipse, Line, Polyline, Polygon, Point, MultiPoint, CompoundPolygon],
    Field(discriminator="kind"),
]
