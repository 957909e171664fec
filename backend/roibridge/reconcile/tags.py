"""Tag transfer: only tags the remote image does not carry yet are sent."""

from __future__ import annotations

from collections.abc import Iterable


def new_tags(local: Iterable[str], remote: Iterable[str]) -> list[str]:
    """Local tags missing remotely, in local order, without repeats."""
    seen = set(remote)
    out: list[str] = []
    for tag in local:
        if tag not in seen:
            out.append(tag)
            seen.add(tag)
    return out
