"""Key-value metadata reconciliation under a three-way policy.

The same engine runs in both directions: importing remote pairs into local
metadata, and merging local metadata into the remote map before upload.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass

from roibridge.errors import DuplicateKeyError
from roibridge.models.metadata import KeyValueEntry, ReconciliationPolicy

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    entries: MutableMapping[str, str]
    existing_count: int = 0
    new_count: int = 0
    updated_count: int = 0

    def summary(self, policy: ReconciliationPolicy) -> str:
        if policy is ReconciliationPolicy.KEEP_AND_ADD:
            verb = "Keep"
        elif policy is ReconciliationPolicy.REPLACE_AND_ADD:
            verb = "Update"
        else:
            verb = "Delete"
        noun = "key-value pair" if self.new_count <= 1 else "key-value pairs"
        return f"{verb} {self.existing_count} metadata and add {self.new_count} new {noun}"


def _as_pairs(incoming: Iterable[KeyValueEntry | tuple[str, str]]) -> list[tuple[str, str]]:
    pairs = []
    for item in incoming:
        if isinstance(item, KeyValueEntry):
            pairs.append((item.key, item.value))
        else:
            key, value = item
            pairs.append((key, value))
    return pairs


def duplicate_keys(pairs: Iterable[tuple[str, str]]) -> list[str]:
    """Keys that occur more than once, in first-occurrence order."""
    counts = Counter(key for key, _ in pairs)
    return [key for key, n in counts.items() if n > 1]


def reconcile_key_values(
    incoming: Iterable[KeyValueEntry | tuple[str, str]],
    existing: MutableMapping[str, str],
    policy: ReconciliationPolicy,
) -> ReconciliationResult:
    """Merge ``incoming`` into ``existing`` in place and count what happened.

    Raises ``DuplicateKeyError`` before touching ``existing`` if ``incoming``
    repeats a key.
    """
    pairs = _as_pairs(incoming)
    dupes = duplicate_keys(pairs)
    if dupes:
        raise DuplicateKeyError(dupes)

    original_size = len(existing)
    pre_existing = set(existing)
    result = ReconciliationResult(entries=existing)

    if policy is ReconciliationPolicy.DELETE_ALL_AND_ADD:
        existing.clear()
        result.existing_count = original_size

    for key, value in pairs:
        present = key in pre_existing
        if present and policy is not ReconciliationPolicy.DELETE_ALL_AND_ADD:
            result.existing_count += 1

        if policy is ReconciliationPolicy.DELETE_ALL_AND_ADD:
            existing[key] = value
            result.new_count += 1
        elif not present:
            existing[key] = value
            result.new_count += 1
        elif policy is ReconciliationPolicy.REPLACE_AND_ADD:
            existing[key] = value
            result.updated_count += 1

    logger.info(
        "Key-values reconciled (%s): %d existing, %d new, %d updated",
        policy.value,
        result.existing_count,
        result.new_count,
        result.updated_count,
    )
    return result
