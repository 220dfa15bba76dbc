"""Classification engine — text in, diagnosis records out."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from issue_matcher.core.assembler import (
    NETWORK_DEVICES,
    NETWORK_LABEL,
    assemble_exact,
    assemble_fuzzy,
)
from issue_matcher.core.candidates import select_candidates
from issue_matcher.core.compiler import normalize
from issue_matcher.core.context import detect_context
from issue_matcher.core.matcher import match_exact, match_fuzzy
from issue_matcher.core.models import CompiledCatalog, MatchResult, Strategy
from issue_matcher.core.similarity import FUZZY_THRESHOLD


def classify(
    text: str,
    catalog: CompiledCatalog,
    strategy: Strategy = Strategy.EXACT,
    *,
    threshold: float = FUZZY_THRESHOLD,
    network_devices: Sequence[str] = NETWORK_DEVICES,
    network_label: str = NETWORK_LABEL,
) -> MatchResult:
    """Classify troubleshooting text against a compiled catalog.

    The caller is expected to reject blank text before calling. The
    catalog is only read, so concurrent calls may share it.
    """
    raw = text.strip()
    normalized = normalize(raw)
    context = detect_context(normalized, catalog)
    candidates = select_candidates(context, catalog.patterns)

    if strategy is Strategy.FUZZY:
        best = match_fuzzy(normalized, candidates, threshold=threshold)
        matches = assemble_fuzzy(
            best.pattern if best else None,
            network_devices=network_devices,
            network_label=network_label,
        )
    else:
        matches = assemble_exact(match_exact(normalized, candidates))

    return MatchResult(
        input=raw,
        strategy=strategy,
        matches=matches,
        context=context,
    )


def extract(
    text: str,
    catalog: CompiledCatalog,
    strategy: Strategy = Strategy.EXACT,
) -> dict[str, Any]:
    """Classify and return the ``{"input", "matches"}`` response shape."""
    return classify(text, catalog, strategy).to_dict()


def parse_strategy(value: Optional[str]) -> Strategy:
    """Parse a strategy name; None means exact."""
    if value is None:
        return Strategy.EXACT
    try:
        return Strategy(value.strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in Strategy)
        raise ValueError(
            f"Unknown strategy: {value!r}. Valid strategies: {valid}"
        ) from None
