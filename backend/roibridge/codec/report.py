"""Batch conversion reports: what converted, what was skipped and why."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any


@dataclass
class SkippedItem:
    index: int
    reason: str


@dataclass
class ConversionReport:
    converted: int = 0
    skipped: list[SkippedItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def skip(self, index: int, reason: str) -> None:
        self.skipped.append(SkippedItem(index=index, reason=reason))

    @property
    def skip_counts(self) -> dict[str, int]:
        return dict(Counter(item.reason for item in self.skipped))

    def summary(self) -> str:
        text = f"{self.converted} converted, {len(self.skipped)} skipped"
        for reason, n in self.skip_counts.items():
            text += f"\n  {n} x {reason}"
        return text


@dataclass
class EncodeReport(ConversionReport):
    rois: list[Any] = field(default_factory=list)
    # Set by the send flows once the gateway accepted the ROIs
    written: bool = False


@dataclass
class DecodeReport(ConversionReport):
    objects: list[Any] = field(default_factory=list)
