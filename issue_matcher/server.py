"""FastAPI service exposing the classification engine."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from issue_matcher.core.engine import classify, parse_strategy
from issue_matcher.core.models import MatchResult, Strategy
from issue_matcher.data.cache import CatalogCache
from issue_matcher.data.config import resolve_catalog_source, resolve_strategy
from issue_matcher.data.loader import RemoteCatalogFetchError
from issue_matcher.schemas import ExtractRequest, ExtractResponse, HealthResponse

logger = logging.getLogger(__name__)

MISSING_TEXT_ERROR = 'Missing "text" in request body'


def create_app(
    cache: Optional[CatalogCache] = None,
    strategy: Optional[Strategy] = None,
) -> FastAPI:
    """Build the app. Local catalogs are loaded here, so a bad one fails fast."""
    if cache is None:
        cache = CatalogCache(resolve_catalog_source())
    if strategy is None:
        strategy = resolve_strategy()
    cache.preload()

    app = FastAPI(title="issue-matcher")
    app.state.cache = cache
    app.state.strategy = strategy

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return HealthResponse(status="healthy", timestamp=now.replace("+00:00", "Z"))

    @app.post(
        "/extract",
        response_model=ExtractResponse,
        response_model_exclude_unset=True,
    )
    def extract_endpoint(req: ExtractRequest, strategy: Optional[str] = None):
        """Match troubleshooting text against the issue catalog."""
        raw_text = (req.text or "").strip()
        if not raw_text:
            return JSONResponse(status_code=400, content={"error": MISSING_TEXT_ERROR})
        try:
            chosen = parse_strategy(strategy) if strategy else app.state.strategy
        except ValueError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})

        try:
            catalog = app.state.cache.get()
        except RemoteCatalogFetchError as e:
            logger.warning("Catalog fetch failed, answering without matches: %s", e)
            result = MatchResult(input=raw_text, strategy=chosen, error=str(e))
            return ExtractResponse(**result.to_dict())

        result = classify(raw_text, catalog, chosen)
        return ExtractResponse(**result.to_dict())

    return app
