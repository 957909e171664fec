"""Scripting entry points: fetch through the gateway, convert, reconcile, write back.

These are the operations a UI command calls once it has collected the user's
choices. Gateway failures surface as ``RemoteAccessFailure`` naming the image
and the operation; codec and reconciliation errors pass through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, MutableMapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from roibridge.codec.config import CodecConfig
from roibridge.codec.decoder import decode_rois
from roibridge.codec.encoder import encode_objects
from roibridge.codec.report import DecodeReport, EncodeReport
from roibridge.errors import DuplicateKeyError, RemoteAccessFailure, RoiBridgeError
from roibridge.gateway import RemoteGateway
from roibridge.hierarchy import HierarchyStore
from roibridge.models.metadata import (
    ChannelImportChoice,
    ChannelSettings,
    MetadataImportChoice,
    ReconciliationPolicy,
    RoiImportChoice,
)
from roibridge.models.objects import LocalObject
from roibridge.reconcile.channels import channel_from_remote, channel_to_remote, transfer_channel_settings
from roibridge.reconcile.keyvalues import ReconciliationResult, duplicate_keys, reconcile_key_values
from roibridge.reconcile.objects import ObjectMergeResult, reconcile_objects
from roibridge.reconcile.tags import new_tags

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _remote(image_id: int, operation: str, fn: Callable[..., T], *args: Any) -> T:
    try:
        return fn(*args)
    except RoiBridgeError:
        raise
    except Exception as e:
        logger.error("Remote %s failed for image %d: %s", operation, image_id, e)
        raise RemoteAccessFailure(image_id, operation, str(e)) from e


# ---------------------------------------------------------------------------
# ROIs
# ---------------------------------------------------------------------------


@dataclass
class RoiImportReport:
    decode: DecodeReport
    merge: ObjectMergeResult = field(default_factory=ObjectMergeResult)


def import_rois(
    gateway: RemoteGateway,
    store: HierarchyStore,
    image_id: int,
    choice: RoiImportChoice | None = None,
    config: CodecConfig | None = None,
) -> RoiImportReport:
    """Read the image's ROIs and merge them into the local hierarchy."""
    choice = choice or RoiImportChoice()
    rois = _remote(image_id, "ROI fetch", gateway.fetch_rois, image_id, choice.owner)

    decoded = decode_rois(rois, config)
    if not decoded.objects:
        logger.warning("Image %d does not have any ROIs to import", image_id)

    merge = reconcile_objects(
        store,
        decoded.objects,
        remove_annotations=choice.remove_annotations,
        remove_detections=choice.remove_detections,
    )
    return RoiImportReport(decode=decoded, merge=merge)


def send_objects(
    gateway: RemoteGateway,
    image_id: int,
    objects: Iterable[LocalObject],
    delete_existing: bool = False,
    config: CodecConfig | None = None,
    strict: bool = False,
) -> EncodeReport:
    """Encode objects and upload them, optionally deleting the image's ROIs first.

    The image's ROIs are only deleted when something was encoded to replace them.
    """
    report = encode_objects(objects, config, strict=strict)

    if delete_existing and report.rois:
        _remote(image_id, "ROI deletion", gateway.delete_shapes, image_id)

    report.written = bool(_remote(image_id, "ROI upload", gateway.write_rois, image_id, report.rois))
    logger.info("Sent ROIs to image %d: %s", image_id, report.summary())
    return report


def send_store_objects(
    gateway: RemoteGateway,
    store: HierarchyStore,
    image_id: int,
    annotations: bool = True,
    detections: bool = True,
    delete_existing: bool = False,
    config: CodecConfig | None = None,
) -> EncodeReport:
    objects: list[LocalObject] = []
    if annotations:
        objects.extend(store.get_annotations())
    if detections:
        objects.extend(store.get_detections())
    return send_objects(gateway, image_id, objects, delete_existing=delete_existing, config=config)


# ---------------------------------------------------------------------------
# Key-values and tags
# ---------------------------------------------------------------------------


def import_key_values(
    gateway: RemoteGateway,
    metadata: MutableMapping[str, str],
    image_id: int,
    choice: MetadataImportChoice | None = None,
) -> ReconciliationResult:
    """Merge the image's key-value pairs into ``metadata`` under the chosen policy.

    When the image has no pairs, ``metadata`` is left alone whatever the policy.
    """
    choice = choice or MetadataImportChoice()
    entries = _remote(image_id, "key-value fetch", gateway.fetch_key_values, image_id)
    if not entries:
        logger.warning("Image %d does not have any key-values", image_id)
        return ReconciliationResult(entries=metadata)

    result = reconcile_key_values(entries, metadata, choice.policy)
    logger.info(result.summary(choice.policy))
    return result


def send_key_values(
    gateway: RemoteGateway,
    metadata: MutableMapping[str, str],
    image_id: int,
    policy: ReconciliationPolicy = ReconciliationPolicy.KEEP_AND_ADD,
) -> ReconciliationResult:
    """Merge local ``metadata`` into the image's key-values and write the result.

    Nothing is written under KEEP_AND_ADD when every key already exists.
    """
    remote = _remote(image_id, "key-value fetch", gateway.fetch_key_values, image_id)
    dupes = duplicate_keys((kv.key, kv.value) for kv in remote)
    if dupes:
        raise DuplicateKeyError(dupes)

    remote_map = {kv.key: kv.value for kv in remote}
    result = reconcile_key_values(metadata.items(), remote_map, policy)

    if policy is ReconciliationPolicy.KEEP_AND_ADD and result.new_count == 0:
        logger.info("All metadata already exist on image %d", image_id)
        return result

    _remote(image_id, "key-value upload", gateway.write_key_values, image_id, remote_map)
    return result


def send_tags(gateway: RemoteGateway, image_id: int, tags: Iterable[str]) -> list[str]:
    """Upload the tags the image does not have yet; returns the ones sent."""
    current = _remote(image_id, "tag fetch", gateway.fetch_tags, image_id)
    missing = new_tags(tags, current)
    if not missing:
        logger.info("All tags already exist on image %d", image_id)
        return []
    _remote(image_id, "tag upload", gateway.write_tags, image_id, missing)
    return missing


# ---------------------------------------------------------------------------
# Channel settings
# ---------------------------------------------------------------------------


def import_channel_settings(
    gateway: RemoteGateway,
    image_id: int,
    local: list[ChannelSettings],
    choice: ChannelImportChoice,
) -> list[ChannelSettings]:
    remote = _remote(image_id, "channel fetch", gateway.fetch_channels, image_id)
    return transfer_channel_settings([channel_from_remote(c) for c in remote], local, choice)


def send_channel_settings(
    gateway: RemoteGateway,
    image_id: int,
    local: list[ChannelSettings],
    choice: ChannelImportChoice,
) -> bool:
    remote = _remote(image_id, "channel fetch", gateway.fetch_channels, image_id)
    updated = transfer_channel_settings(local, [channel_from_remote(c) for c in remote], choice)
    return bool(
        _remote(
            image_id,
            "channel upload",
            gateway.write_channels,
            image_id,
            [channel_to_remote(c) for c in updated],
        )
    )
