"""Catalog loading — reads the raw issue catalog from a file or a URL."""

from __future__ import annotations

import json
import logging
import urllib.request
from pathlib import Path
from typing import Any

from issue_matcher.core.compiler import CatalogLoadError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.json"


class RemoteCatalogFetchError(CatalogLoadError):
    """A remote catalog could not be fetched. Recoverable per request."""


def is_remote(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def load_catalog(source: str | Path) -> list[Any]:
    """Load the raw catalog (a JSON array of device entries)."""
    if is_remote(str(source)):
        raw = _fetch_remote(str(source))
    else:
        raw = _read_local(Path(source))
    if not isinstance(raw, list):
        raise CatalogLoadError(
            f"Catalog {source} must be a JSON array, got {type(raw).__name__}"
        )
    return raw


def _read_local(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Cannot parse catalog {path}: {e}") from e


def _fetch_remote(url: str, timeout: int = 15) -> Any:
    logger.debug("Fetching catalog from %s", url)
    try:
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": "issue-matcher/1.0",
                "Accept": "application/json",
            },
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except Exception as e:
        raise RemoteCatalogFetchError(f"Fetch failed for {url}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise RemoteCatalogFetchError(
            f"Invalid catalog JSON from {url}: {e}"
        ) from e
