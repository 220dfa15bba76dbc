"""Tests for issue_matcher.data.config — setting resolution order."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from issue_matcher.core.models import Strategy
from issue_matcher.data.config import (
    resolve_catalog_source,
    resolve_strategy,
    validate_key,
    validate_setting,
)
from issue_matcher.data.loader import DEFAULT_CATALOG_PATH
from issue_matcher.data.store import DataStore


class TestResolveCatalogSource:
    def test_explicit_wins(self, temp_db, monkeypatch):
        monkeypatch.setenv("ISSUE_MATCHER_CATALOG", "/env.json")
        temp_db.set_config("catalog", "/db.json")
        assert resolve_catalog_source("/cli.json", store=temp_db) == "/cli.json"

    def test_env_over_store(self, temp_db, monkeypatch):
        monkeypatch.setenv("ISSUE_MATCHER_CATALOG", "/env.json")
        temp_db.set_config("catalog", "/db.json")
        assert resolve_catalog_source(store=temp_db) == "/env.json"

    def test_store_over_default(self, temp_db, monkeypatch):
        monkeypatch.delenv("ISSUE_MATCHER_CATALOG", raising=False)
        temp_db.set_config("catalog", "https://example.com/c.json")
        assert resolve_catalog_source(store=temp_db) == "https://example.com/c.json"

    def test_default_is_bundled(self, temp_db, monkeypatch):
        monkeypatch.delenv("ISSUE_MATCHER_CATALOG", raising=False)
        assert resolve_catalog_source(store=temp_db) == str(DEFAULT_CATALOG_PATH)

    def test_default_store_location(self, isolated_config):
        with DataStore() as store:
            store.set_config("catalog", "/from-default-store.json")
        assert resolve_catalog_source() == "/from-default-store.json"

    def test_broken_store_falls_back(self, isolated_config):
        with patch(
            "issue_matcher.data.config.DataStore",
            side_effect=OSError("read-only file system"),
        ):
            assert resolve_catalog_source() == str(DEFAULT_CATALOG_PATH)


class TestResolveStrategy:
    def test_explicit_wins(self, temp_db, monkeypatch):
        monkeypatch.setenv("ISSUE_MATCHER_STRATEGY", "exact")
        assert resolve_strategy("fuzzy", store=temp_db) is Strategy.FUZZY

    def test_env_over_store(self, temp_db, monkeypatch):
        monkeypatch.setenv("ISSUE_MATCHER_STRATEGY", "FUZZY")
        assert resolve_strategy(store=temp_db) is Strategy.FUZZY

    def test_store_value(self, temp_db, monkeypatch):
        monkeypatch.delenv("ISSUE_MATCHER_STRATEGY", raising=False)
        temp_db.set_config("strategy", "fuzzy")
        assert resolve_strategy(store=temp_db) is Strategy.FUZZY

    def test_seeded_default(self, temp_db, monkeypatch):
        monkeypatch.delenv("ISSUE_MATCHER_STRATEGY", raising=False)
        assert resolve_strategy(store=temp_db) is Strategy.EXACT

    def test_missing_everywhere(self, temp_db, monkeypatch):
        monkeypatch.delenv("ISSUE_MATCHER_STRATEGY", raising=False)
        temp_db.delete_config("strategy")
        assert resolve_strategy(store=temp_db) is Strategy.EXACT

    def test_invalid_env(self, temp_db, monkeypatch):
        monkeypatch.setenv("ISSUE_MATCHER_STRATEGY", "semantic")
        with pytest.raises(ValueError, match="Unknown strategy"):
            resolve_strategy(store=temp_db)


class TestValidateSetting:
    def test_valid(self):
        validate_setting("catalog", "/srv/c.json")
        validate_setting("strategy", "fuzzy")

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config key"):
            validate_setting("model", "x")

    def test_bad_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            validate_setting("strategy", "semantic")

    def test_validate_key(self):
        validate_key("strategy")
        with pytest.raises(ValueError, match="Valid keys: catalog, strategy"):
            validate_key("model")
