"""Candidate filter — narrows patterns to those consistent with the context."""

from __future__ import annotations

from typing import Sequence

from issue_matcher.core.models import Context, Pattern


def select_candidates(
    context: Context, patterns: Sequence[Pattern]
) -> list[Pattern]:
    """Return the patterns worth testing for a detected context.

    No device: every pattern. Device and component: only that pair.
    Device without a component: every pattern of the device, both the
    device-level ones and those under any of its components.
    """
    if context.device is None:
        return list(patterns)
    if context.component is not None:
        return [
            p for p in patterns
            if p.device == context.device and p.component == context.component
        ]
    return [p for p in patterns if p.device == context.device]
