"""Local object hierarchy: the store interface and an in-memory implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from roibridge.models.objects import LocalObject
from roibridge.utils.geometry import is_area_shape, shape_to_geometry

logger = logging.getLogger(__name__)


class HierarchyStore(Protocol):
    def get_annotations(self) -> list[LocalObject]: ...

    def get_detections(self) -> list[LocalObject]: ...

    def remove_objects(self, objects: Iterable[LocalObject], recursive: bool) -> None: ...

    def add_objects(self, objects: Iterable[LocalObject]) -> None: ...

    def resolve_hierarchy(self) -> None: ...


class InMemoryHierarchy:
    """Flat object list with parent/child links rebuilt by ``resolve_hierarchy``."""

    def __init__(self, objects: Iterable[LocalObject] = ()) -> None:
        self._objects: list[LocalObject] = list(objects)

    @property
    def objects(self) -> list[LocalObject]:
        return list(self._objects)

    def get_annotations(self) -> list[LocalObject]:
        return [o for o in self._objects if o.is_annotation]

    def get_detections(self) -> list[LocalObject]:
        return [o for o in self._objects if o.is_detection]

    def remove_objects(self, objects: Iterable[LocalObject], recursive: bool) -> None:
        """Remove objects. Without ``recursive`` their children move up to the removed parent's parent."""
        doomed: list[LocalObject] = []
        for obj in objects:
            doomed.append(obj)
            if recursive:
                doomed.extend(obj.descendants())
        doomed_ids = {id(o) for o in doomed}

        for obj in doomed:
            if not recursive:
                for child in list(obj.children):
                    if id(child) in doomed_ids:
                        continue
                    child.parent = None
                    if obj.parent is not None and id(obj.parent) not in doomed_ids:
                        obj.parent.add_child(child)
                obj.children.clear()
            if obj.parent is not None and id(obj.parent) not in doomed_ids:
                obj.parent.children.remove(obj)
            obj.parent = None

        before = len(self._objects)
        self._objects = [o for o in self._objects if id(o) not in doomed_ids]
        logger.debug("Removed %d objects (recursive=%s)", before - len(self._objects), recursive)

    def add_objects(self, objects: Iterable[LocalObject]) -> None:
        known = {id(o) for o in self._objects}
        for obj in objects:
            if id(obj) not in known:
                self._objects.append(obj)
                known.add(id(obj))
            for child in obj.descendants():
                if id(child) not in known:
                    self._objects.append(child)
                    known.add(id(child))

    def resolve_hierarchy(self) -> None:
        """Give every object the smallest annotation on its plane that contains it.

        Objects whose shape cannot be built as a geometry stay at the top level.
        """
        geometries = {id(o): _geometry(o) for o in self._objects}
        candidates = [
            (o, geometries[id(o)]) for o in self._objects
            if o.is_annotation and is_area_shape(o.shape) and geometries[id(o)] is not None
        ]
        candidates.sort(key=lambda pair: pair[1].area)

        for obj in self._objects:
            obj.parent = None
            obj.children.clear()

        for obj in self._objects:
            geom = geometries[id(obj)]
            if geom is None:
                continue
            for parent, parent_geom in candidates:
                if parent is obj or parent.shape.plane != obj.shape.plane:
                    continue
                if parent_geom.area <= getattr(geom, "area", 0.0) and is_area_shape(obj.shape):
                    continue
                if parent_geom.contains(geom):
                    parent.add_child(obj)
                    break
        logger.debug("Resolved hierarchy over %d objects", len(self._objects))


def _geometry(obj: LocalObject) -> BaseGeometry | None:
    try:
        return shape_to_geometry(obj.shape)
    except (ValueError, ShapelyError) as e:
        logger.warning("Object %s has no usable geometry: %s", obj.id, e)
        return None
