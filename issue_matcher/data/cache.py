"""Process-wide catalog cell — loaded and compiled once, then shared read-only."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from issue_matcher.core.compiler import compile_catalog
from issue_matcher.core.models import CompiledCatalog
from issue_matcher.data.loader import is_remote, load_catalog

logger = logging.getLogger(__name__)


class CatalogCache:
    """Lazily loads a catalog source and memoizes the compiled result.

    Failed loads are not memoized, so the next ``get()`` retries.
    """

    def __init__(self, source: str | Path):
        self.source = str(source)
        self._catalog: Optional[CompiledCatalog] = None
        self._lock = threading.Lock()

    @property
    def is_remote(self) -> bool:
        return is_remote(self.source)

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    def get(self) -> CompiledCatalog:
        """Return the compiled catalog, loading it on first use.

        Raises CatalogLoadError (or RemoteCatalogFetchError) on failure.
        """
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._lock:
            if self._catalog is None:
                raw = load_catalog(self.source)
                self._catalog = compile_catalog(raw)
                logger.debug(
                    "Catalog %s loaded: %d patterns",
                    self.source, len(self._catalog.patterns),
                )
            return self._catalog

    def preload(self) -> None:
        """Load local sources right away so bad catalogs fail at startup."""
        if not self.is_remote:
            self.get()

    @classmethod
    def from_catalog(cls, catalog: CompiledCatalog, source: str = "<memory>") -> CatalogCache:
        """Wrap an already compiled catalog."""
        cache = cls(source)
        cache._catalog = catalog
        return cache
