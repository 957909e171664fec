"""Spatial object reconciliation: optional deletion per category, then add all."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from roibridge.hierarchy import HierarchyStore
from roibridge.models.objects import LocalObject

logger = logging.getLogger(__name__)


@dataclass
class ObjectMergeResult:
    removed_annotations: int = 0
    removed_detections: int = 0
    added: int = 0


def reconcile_objects(
    store: HierarchyStore,
    incoming: Iterable[LocalObject],
    remove_annotations: bool,
    remove_detections: bool,
) -> ObjectMergeResult:
    """Apply the two independent removal flags, then add ``incoming``.

    Removed objects keep their children: a detection inside a removed
    annotation stays unless ``remove_detections`` is set too. The store's
    hierarchy is resolved after any non-empty add.
    """
    incoming = list(incoming)
    result = ObjectMergeResult()

    if remove_annotations:
        annotations = store.get_annotations()
        result.removed_annotations = len(annotations)
        store.remove_objects(annotations, recursive=False)

    if remove_detections:
        detections = store.get_detections()
        result.removed_detections = len(detections)
        store.remove_objects(detections, recursive=False)

    if incoming:
        store.add_objects(incoming)
        store.resolve_hierarchy()
        result.added = len(incoming)
    else:
        logger.warning("No objects to add")

    logger.info(
        "Objects reconciled: %d annotations and %d detections removed, %d added",
        result.removed_annotations,
        result.removed_detections,
        result.added,
    )
    return result
