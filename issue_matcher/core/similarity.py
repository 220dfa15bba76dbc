"""Approximate keyword similarity — token-window edit distance."""

from __future__ import annotations

import re

FUZZY_THRESHOLD = 0.4

_TOKEN_RE = re.compile(r"\w+(?:['-]\w+)*")


def tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute all cost 1)."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def similarity(query: str, candidate: str) -> float:
    """Score how closely ``candidate`` occurs somewhere in ``query``.

    Both strings are tokenized. The candidate is compared against every run
    of consecutive query tokens whose length is within one token of the
    candidate's own, wherever it sits in the query. The best edit distance is
    divided by the candidate's length, giving 0.0 for an exact occurrence and
    1.0 for nothing in common.
    """
    keyword_tokens = tokenize(candidate)
    query_tokens = tokenize(query)
    if not keyword_tokens or not query_tokens:
        return 1.0

    keyword = " ".join(keyword_tokens)
    width = len(keyword_tokens)
    min_width = max(1, width - 1)
    max_width = min(width + 1, len(query_tokens))

    windows: list[str] = []
    for size in range(min_width, max_width + 1):
        for start in range(len(query_tokens) - size + 1):
            windows.append(" ".join(query_tokens[start:start + size]))
    if not windows:
        windows.append(" ".join(query_tokens))

    best = len(keyword)
    for window in windows:
        best = min(best, levenshtein(keyword, window))
        if best == 0:
            break
    return min(best / len(keyword), 1.0)
