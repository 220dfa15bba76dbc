"""Core data models for issue-matcher."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Strategy(Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class Pattern:
    device: str
    component: Optional[str]  # None for device-level issues (wifi, bluetooth)
    issue: str
    description: str
    solution: str
    matcher: re.Pattern = field(compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "component": self.component,
            "issue": self.issue,
            "description": self.description,
            "solution": self.solution,
        }


@dataclass(frozen=True)
class CompiledCatalog:
    """Read-only matching state built once from a raw catalog."""

    patterns: tuple[Pattern, ...] = ()
    devices: tuple[str, ...] = ()
    components_by_device: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    device_matchers: Mapping[str, re.Pattern] = field(
        default_factory=lambda: MappingProxyType({}), repr=False
    )
    component_matchers: Mapping[str, re.Pattern] = field(
        default_factory=lambda: MappingProxyType({}), repr=False
    )


@dataclass(frozen=True)
class Context:
    device: Optional[str] = None
    component: Optional[str] = None


@dataclass
class MatchResult:
    input: str
    strategy: Strategy
    matches: list[dict[str, Any]] = field(default_factory=list)
    context: Context = field(default_factory=Context)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the external response shape.

        Exact results carry a list of matches. Fuzzy results carry the
        single best match, or an empty list when nothing was close enough.
        """
        if self.strategy is Strategy.FUZZY:
            matches: Any = self.matches[0] if self.matches else []
        else:
            matches = list(self.matches)
        data: dict[str, Any] = {"input": self.input, "matches": matches}
        if self.error:
            data["error"] = self.error
        return data
