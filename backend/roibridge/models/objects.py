"""Local objects: a shape placed in the host hierarchy as annotation or detection."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

from roibridge.models.local_shapes import LocalShape


class ObjectCategory(str, enum.Enum):
    ANNOTATION = "annotation"
    DETECTION = "detection"

    @classmethod
    def parse(cls, text: str | None) -> ObjectCategory:
        """Cells count as detections; anything unrecognized is an annotation."""
        value = (text or "").strip().lower()
        if value in ("detection", "cell"):
            return cls.DETECTION
        return cls.ANNOTATION


@dataclass(eq=False)
class LocalObject:
    shape: LocalShape
    category: ObjectCategory = ObjectCategory.ANNOTATION
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    parent: LocalObject | None = field(default=None, repr=False)
    children: list[LocalObject] = field(default_factory=list, repr=False)

    @property
    def is_detection(self) -> bool:
        return self.category is ObjectCategory.DETECTION

    @property
    def is_annotation(self) -> bool:
        return self.category is ObjectCategory.ANNOTATION

    def add_child(self, child: LocalObject) -> None:
        if child.parent is not None and child.parent is not self:
            child.parent.children.remove(child)
        child.parent = self
        if child not in self.children:
            self.children.append(child)

    def descendants(self) -> list[LocalObject]:
        out: list[LocalObject] = []
        for child in self.children:
            out.append(child)
            out.extend(child.descendants())
        return out
