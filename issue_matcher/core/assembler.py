"""Result assembly — shapes matched patterns into response records."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from issue_matcher.core.models import Pattern

NETWORK_DEVICES = ("wifi", "bluetooth")
NETWORK_LABEL = "network"


def assemble_exact(matches: Iterable[Pattern]) -> list[dict[str, Any]]:
    return [p.to_dict() for p in matches]


def assemble_fuzzy(
    match: Optional[Pattern],
    network_devices: Sequence[str] = NETWORK_DEVICES,
    network_label: str = NETWORK_LABEL,
) -> list[dict[str, Any]]:
    """Return zero or one record for a fuzzy result.

    Device-level issues of network-class devices report ``network_label``
    as their component instead of None.
    """
    if match is None:
        return []
    record = match.to_dict()
    if record["component"] is None and match.device in network_devices:
        record["component"] = network_label
    return [record]
