"""Remote image server gateway: the interface the flows call, and an in-memory server.

Real deployments plug in a client for their server; anything it raises is
wrapped by the flows into ``RemoteAccessFailure``.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from roibridge.models.metadata import KeyValueEntry, RemoteChannel
from roibridge.models.remote_shapes import RemoteRoi, RemoteShape

logger = logging.getLogger(__name__)


class RemoteGateway(Protocol):
    def fetch_shapes(self, image_id: int) -> list[RemoteShape]: ...

    def fetch_rois(self, image_id: int, owner: str | None = None) -> list[RemoteRoi]: ...

    def write_shapes(self, image_id: int, shapes: Iterable[RemoteShape]) -> bool: ...

    def write_rois(self, image_id: int, rois: Iterable[RemoteRoi]) -> bool: ...

    def delete_shapes(self, image_id: int) -> None: ...

    def fetch_key_values(self, image_id: int) -> list[KeyValueEntry]: ...

    def write_key_values(self, image_id: int, mapping: Mapping[str, str]) -> bool: ...

    def fetch_tags(self, image_id: int) -> list[str]: ...

    def write_tags(self, image_id: int, tags: Iterable[str]) -> bool: ...

    def fetch_channels(self, image_id: int) -> list[RemoteChannel]: ...

    def write_channels(self, image_id: int, channels: Iterable[RemoteChannel]) -> bool: ...


@dataclass
class RemoteImage:
    rois: list[RemoteRoi] = field(default_factory=list)
    key_values: list[KeyValueEntry] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    channels: list[RemoteChannel] = field(default_factory=list)


class InMemoryGateway:
    """Dictionary-backed server. Unknown image ids raise ``KeyError``."""

    def __init__(self, user: str = "root") -> None:
        self.user = user
        self.images: dict[int, RemoteImage] = {}
        self._roi_ids = itertools.count(1)

    def add_image(self, image_id: int, image: RemoteImage | None = None) -> RemoteImage:
        image = image or RemoteImage()
        for roi in image.rois:
            if roi.id is None:
                roi.id = next(self._roi_ids)
        self.images[image_id] = image
        return image

    def _image(self, image_id: int) -> RemoteImage:
        try:
            return self.images[image_id]
        except KeyError:
            raise KeyError(f"No image with id {image_id}") from None

    def fetch_rois(self, image_id: int, owner: str | None = None) -> list[RemoteRoi]:
        rois = self._image(image_id).rois
        if owner:
            rois = [r for r in rois if r.owner == owner]
        return [r.model_copy(deep=True) for r in rois]

    def fetch_shapes(self, image_id: int) -> list[RemoteShape]:
        return [shape for roi in self.fetch_rois(image_id) for shape in roi.shapes]

    def write_rois(self, image_id: int, rois: Iterable[RemoteRoi]) -> bool:
        image = self._image(image_id)
        written = 0
        for roi in rois:
            stored = roi.model_copy(deep=True)
            stored.id = next(self._roi_ids)
            stored.owner = stored.owner or self.user
            image.rois.append(stored)
            written += 1
        logger.debug("Wrote %d ROIs to image %d", written, image_id)
        return True

    def write_shapes(self, image_id: int, shapes: Iterable[RemoteShape]) -> bool:
        return self.write_rois(image_id, [RemoteRoi(shapes=[s]) for s in shapes])

    def delete_shapes(self, image_id: int) -> None:
        image = self._image(image_id)
        logger.debug("Deleting %d ROIs from image %d", len(image.rois), image_id)
        image.rois.clear()

    def fetch_key_values(self, image_id: int) -> list[KeyValueEntry]:
        return [kv.model_copy() for kv in self._image(image_id).key_values]

    def write_key_values(self, image_id: int, mapping: Mapping[str, str]) -> bool:
        self._image(image_id).key_values = [KeyValueEntry(key=k, value=v) for k, v in mapping.items()]
        return True

    def fetch_tags(self, image_id: int) -> list[str]:
        return list(self._image(image_id).tags)

    def write_tags(self, image_id: int, tags: Iterable[str]) -> bool:
        self._image(image_id).tags.extend(tags)
        return True

    def fetch_channels(self, image_id: int) -> list[RemoteChannel]:
        return [c.model_copy() for c in self._image(image_id).channels]

    def write_channels(self, image_id: int, channels: Iterable[RemoteChannel]) -> bool:
        self._image(image_id).channels = [c.model_copy() for c in channels]
        return True
