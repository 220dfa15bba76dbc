"""Tests for issue_matcher.core.assembler — response records."""

from __future__ import annotations

from issue_matcher.core.assembler import (
    NETWORK_LABEL,
    assemble_exact,
    assemble_fuzzy,
)
from issue_matcher.core.compiler import compile_catalog


def _pattern(catalog, device, issue):
    return next(
        p for p in catalog.patterns if p.device == device and p.issue == issue
    )


class TestAssembleExact:
    def test_records_have_external_shape(self, catalog):
        records = assemble_exact([catalog.patterns[0]])
        assert records == [{
            "device": "phone",
            "component": "screen",
            "issue": "cracked",
            "description": "D1",
            "solution": "S1",
        }]

    def test_device_level_component_stays_none(self, catalog):
        records = assemble_exact([_pattern(catalog, "wifi", "slow")])
        assert records[0]["component"] is None

    def test_empty(self):
        assert assemble_exact([]) == []


class TestAssembleFuzzy:
    def test_no_match(self):
        assert assemble_fuzzy(None) == []

    def test_wifi_gets_network_label(self, catalog):
        records = assemble_fuzzy(_pattern(catalog, "wifi", "disconnecting"))
        assert records[0]["component"] == NETWORK_LABEL == "network"

    def test_bluetooth_gets_network_label(self, catalog):
        records = assemble_fuzzy(_pattern(catalog, "bluetooth", "not pairing"))
        assert records[0]["component"] == "network"

    def test_component_pattern_unchanged(self, catalog):
        records = assemble_fuzzy(catalog.patterns[0])
        assert records[0]["component"] == "screen"

    def test_other_device_level_issue_unchanged(self):
        compiled = compile_catalog([{
            "device": "router",
            "issues": {"offline": {"description": "d", "solution": "s"}},
        }])
        records = assemble_fuzzy(compiled.patterns[0])
        assert records[0]["component"] is None

    def test_custom_network_devices_and_label(self):
        compiled = compile_catalog([{
            "device": "router",
            "issues": {"offline": {"description": "d", "solution": "s"}},
        }])
        records = assemble_fuzzy(
            compiled.patterns[0],
            network_devices=("router",),
            network_label="connectivity",
        )
        assert records[0]["component"] == "connectivity"

    def test_pattern_not_mutated(self, catalog):
        pattern = _pattern(catalog, "wifi", "slow")
        assemble_fuzzy(pattern)
        assert pattern.component is None
