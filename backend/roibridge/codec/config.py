"""Codec configuration, passed explicitly into every encode/decode call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from roibridge.models.remote_shapes import DEFAULT_NAMESPACE, TRANSPARENT_FILL

if TYPE_CHECKING:
    from roibridge.config import Settings


@dataclass
class CodecConfig:
    """Styling and schema defaults for the geometry codec."""

    # Stroke for unclassified objects without their own color (ARGB)
    default_color: int = -65536
    # Fill for unclassified objects (RGBA)
    transparent_fill: int = TRANSPARENT_FILL
    # Class label -> ARGB color
    class_colors: dict[str, int] = field(default_factory=dict)
    # Halve the alpha of class-colored fills
    translucent_fill: bool = False
    # Turn axis-aligned rectangular rings back into rectangles when decomposing
    detect_rectangles: bool = True
    schema_namespace: str = DEFAULT_NAMESPACE

    def class_color(self, path_class: str) -> int:
        return self.class_colors.get(path_class, self.default_color)

    @classmethod
    def from_settings(cls, settings: Settings) -> CodecConfig:
        return cls(
            default_color=settings.default_color,
            class_colors=dict(settings.class_colors),
            detect_rectangles=settings.detect_rectangles,
            schema_namespace=settings.schema_namespace,
        )
