"""Channel display settings: names, display range and color, matched by index."""

from __future__ import annotations

import logging

from roibridge.codec.colors import pack_argb, unpack_argb
from roibridge.errors import ChannelCountMismatch
from roibridge.models.metadata import ChannelImportChoice, ChannelSettings, RemoteChannel

logger = logging.getLogger(__name__)


def channel_from_remote(channel: RemoteChannel) -> ChannelSettings:
    return ChannelSettings(
        name=channel.name,
        min_display=channel.input_start,
        max_display=channel.input_end,
        color=pack_argb(channel.alpha, channel.red, channel.green, channel.blue),
    )


def channel_to_remote(channel: ChannelSettings) -> RemoteChannel:
    a, r, g, b = unpack_argb(channel.color)
    return RemoteChannel(
        name=channel.name,
        input_start=channel.min_display,
        input_end=channel.max_display,
        red=r,
        green=g,
        blue=b,
        alpha=a,
    )


def transfer_channel_settings(
    source: list[ChannelSettings],
    target: list[ChannelSettings],
    choice: ChannelImportChoice,
) -> list[ChannelSettings]:
    """Copy the selected settings from ``source`` onto ``target`` channel by channel.

    Returns new settings; ``target`` is left as is.
    """
    if len(source) != len(target):
        raise ChannelCountMismatch(source=len(source), target=len(target))

    out: list[ChannelSettings] = []
    for src, dst in zip(source, target):
        update: dict = {}
        if choice.include_names:
            update["name"] = src.name
        if choice.include_display_range:
            update["min_display"] = src.min_display
            update["max_display"] = src.max_display
        if choice.include_color:
            update["color"] = src.color
        out.append(dst.model_copy(update=update))

    logger.info(
        "Transferred settings of %d channels (names=%s, range=%s, color=%s)",
        len(out),
        choice.include_names,
        choice.include_display_range,
        choice.include_color,
    )
    return out
