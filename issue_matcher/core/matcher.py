"""Matching strategies over a candidate pattern list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from issue_matcher.core.models import Pattern
from issue_matcher.core.similarity import FUZZY_THRESHOLD, similarity


@dataclass(frozen=True)
class ScoredMatch:
    pattern: Pattern
    score: float


def match_exact(text: str, candidates: Sequence[Pattern]) -> list[Pattern]:
    """Return every candidate whose issue keyword occurs as a whole word."""
    return [p for p in candidates if p.matcher.search(text)]


def match_fuzzy(
    text: str,
    candidates: Sequence[Pattern],
    threshold: float = FUZZY_THRESHOLD,
) -> Optional[ScoredMatch]:
    """Return the single closest candidate within ``threshold``, or None.

    Lower scores are better; on equal scores the earlier candidate wins.
    """
    best: Optional[ScoredMatch] = None
    for pattern in candidates:
        score = similarity(text, pattern.issue)
        if score > threshold:
            continue
        if best is None or score < best.score:
            best = ScoredMatch(pattern=pattern, score=score)
    return best
