"""Point-string codec: "x1,y1 x2,y2 ..." in vertex order."""

from __future__ import annotations

from collections.abc import Iterable

from roibridge.models.local_shapes import Point2


def points_to_string(points: Iterable[Point2]) -> str:
    return " ".join(f"{float(x)!r},{float(y)!r}" for x, y in points)


def parse_points(text: str) -> list[Point2]:
    """Inverse of ``points_to_string``. Blank input yields an empty list."""
    points: list[Point2] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) != 2:
            raise ValueError(f"Malformed point {token!r} in point string")
        points.append((float(parts[0]), float(parts[1])))
    return points
