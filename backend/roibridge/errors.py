"""Exception taxonomy shared by the codec, the reconciliation engine and the flows."""

from __future__ import annotations


class RoiBridgeError(Exception):
    """Base class for every error raised by roibridge."""


class UnsupportedShapeKind(RoiBridgeError):
    """A shape variant has no equivalent on the other side."""

    def __init__(self, kind: str, direction: str = "encode") -> None:
        self.kind = kind
        self.direction = direction
        super().__init__(f"Unsupported ROI type for {direction}: {kind}")


class DuplicateKeyError(RoiBridgeError):
    """The incoming key-value source contains the same key more than once."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"Duplicate key in source: {', '.join(keys)}")


class RemoteAccessFailure(RoiBridgeError):
    """Opaque gateway failure, re-raised with the image and operation involved."""

    def __init__(self, image_id: int, operation: str, reason: str = "") -> None:
        self.image_id = image_id
        self.operation = operation
        msg = f"Remote {operation} failed for image {image_id}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ChannelCountMismatch(RoiBridgeError):
    def __init__(self, source: int, target: int) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"Channel count mismatch: source image has {source} channels, target has {target}"
        )


class GeometryAssumptionViolation(UserWarning):
    """A geometry could only be approximated (e.g. a rotated ellipse)."""
