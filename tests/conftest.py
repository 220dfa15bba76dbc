"""Shared test fixtures for issue-matcher tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from issue_matcher.core.compiler import compile_catalog
from issue_matcher.core.models import CompiledCatalog
from issue_matcher.data.store import DataStore


def _issue(description: str, solution: str) -> dict[str, str]:
    return {"description": description, "solution": solution}


@pytest.fixture
def raw_catalog() -> list[dict[str, Any]]:
    """Small catalog covering componentful and device-level entries."""
    return [
        {
            "device": "Phone",
            "components": {
                "Screen": {
                    "Cracked": _issue("D1", "S1"),
                    "flickering": _issue("Screen flickers", "Update software"),
                },
                "battery": {
                    "draining": _issue("Battery drains fast", "Check apps"),
                    "not charging": _issue("No charge", "Swap cable"),
                    "swollen": {"description": "Missing solution"},
                },
                "speaker": {
                    "cracked": _issue("Speaker cone damaged", "Replace speaker"),
                },
            },
        },
        {
            "device": "laptop",
            "components": {
                "screen": {
                    "cracked": _issue("Laptop panel damaged", "Replace panel"),
                },
                "keyboard": {
                    "sticky keys": _issue("Keys stick", "Clean keyboard"),
                },
            },
        },
        {
            "device": "wifi",
            "issues": {
                "disconnecting": _issue("D2", "S2"),
                "slow": _issue("Slow connection", "Use 5 GHz"),
            },
        },
        {
            "device": "bluetooth",
            "issues": {
                "not pairing": _issue("Pairing fails", "Re-pair"),
            },
        },
    ]


@pytest.fixture
def catalog(raw_catalog) -> CompiledCatalog:
    """Compiled version of ``raw_catalog``."""
    return compile_catalog(raw_catalog)


@pytest.fixture
def catalog_file(tmp_path, raw_catalog) -> str:
    """``raw_catalog`` written to a JSON file."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(raw_catalog), encoding="utf-8")
    return str(path)


@pytest.fixture
def temp_db(tmp_path):
    """DataStore with a temporary SQLite database."""
    db_path = str(tmp_path / "test.db")
    store = DataStore(db_path=db_path)
    yield store
    store.close()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> str:
    """Point the default config store at a temp file and clear env overrides."""
    db_path = str(tmp_path / "config" / "data.db")
    monkeypatch.setattr("issue_matcher.data.store._DEFAULT_DB_PATH", db_path)
    monkeypatch.delenv("ISSUE_MATCHER_CATALOG", raising=False)
    monkeypatch.delenv("ISSUE_MATCHER_STRATEGY", raising=False)
    return db_path
