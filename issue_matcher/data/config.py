"""Setting resolution: explicit value → env var → config store → default."""

from __future__ import annotations

import logging
import os
import sqlite3
from typing import Optional

from issue_matcher.core.engine import parse_strategy
from issue_matcher.core.models import Strategy
from issue_matcher.data.loader import DEFAULT_CATALOG_PATH
from issue_matcher.data.store import DataStore

logger = logging.getLogger(__name__)

CATALOG_ENV = "ISSUE_MATCHER_CATALOG"
STRATEGY_ENV = "ISSUE_MATCHER_STRATEGY"

VALID_KEYS = ("catalog", "strategy")


def _stored(key: str, store: Optional[DataStore]) -> Optional[str]:
    own_store = store is None
    try:
        if own_store:
            store = DataStore()
        return store.get_config(key)
    except (OSError, sqlite3.Error) as e:
        logger.warning("Config store unavailable, ignoring %r: %s", key, e)
        return None
    finally:
        if own_store and store is not None:
            store.close()


def resolve_catalog_source(
    catalog: Optional[str] = None, store: Optional[DataStore] = None
) -> str:
    """Resolve the catalog path or URL."""
    if catalog:
        return catalog
    env_catalog = os.environ.get(CATALOG_ENV)
    if env_catalog:
        return env_catalog
    cfg_catalog = _stored("catalog", store)
    if cfg_catalog:
        return cfg_catalog
    return str(DEFAULT_CATALOG_PATH)


def resolve_strategy(
    strategy: Optional[str] = None, store: Optional[DataStore] = None
) -> Strategy:
    """Resolve the matching strategy. Raises ValueError for unknown names."""
    if strategy:
        return parse_strategy(strategy)
    env_strategy = os.environ.get(STRATEGY_ENV)
    if env_strategy:
        return parse_strategy(env_strategy)
    cfg_strategy = _stored("strategy", store)
    if cfg_strategy:
        return parse_strategy(cfg_strategy)
    return Strategy.EXACT


def validate_key(key: str) -> None:
    if key not in VALID_KEYS:
        raise ValueError(
            f"Unknown config key: {key}. Valid keys: {', '.join(VALID_KEYS)}"
        )


def validate_setting(key: str, value: str) -> None:
    """Raise ValueError if ``key``/``value`` cannot be stored."""
    validate_key(key)
    if key == "strategy":
        parse_strategy(value)
