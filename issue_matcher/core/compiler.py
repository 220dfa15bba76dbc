"""Catalog compiler — flattens a nested device catalog into matchable patterns."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from issue_matcher.core.models import CompiledCatalog, Pattern

logger = logging.getLogger(__name__)


class CatalogLoadError(RuntimeError):
    """The catalog cannot be read, parsed, or has an unusable structure."""


def normalize(value: str) -> str:
    return value.strip().lower()


def word_pattern(keyword: str) -> re.Pattern:
    """Compile a case-insensitive whole-word matcher for ``keyword``.

    "phone" matches "my phone" but not "smartphone".
    """
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


def _is_valid_detail(detail: Any) -> bool:
    if not isinstance(detail, Mapping):
        return False
    description = detail.get("description")
    solution = detail.get("solution")
    return (
        isinstance(description, str)
        and isinstance(solution, str)
        and bool(description.strip())
        and bool(solution.strip())
    )


def _compile_issues(
    device: str,
    component: str | None,
    issues: Mapping[str, Any],
) -> list[Pattern]:
    patterns = []
    for issue_key, detail in issues.items():
        keyword = normalize(issue_key)
        if not keyword:
            logger.debug("Skipping %s/%s: blank issue name", device, component)
            continue
        if not _is_valid_detail(detail):
            logger.debug(
                "Skipping %s/%s/%s: missing description or solution",
                device, component, issue_key,
            )
            continue
        patterns.append(Pattern(
            device=device,
            component=component,
            issue=keyword,
            description=detail["description"],
            solution=detail["solution"],
            matcher=word_pattern(keyword),
        ))
    return patterns


def compile_catalog(raw: Iterable[Any]) -> CompiledCatalog:
    """Compile raw catalog entries into patterns plus a device→components index.

    Each entry has a ``device`` name and either device-level ``issues``
    (issue keyword → {description, solution}) or ``components``
    (component name → issue keyword → {description, solution}), or both.
    Issues missing a description or solution are skipped, as are blank
    component and issue names.

    Raises CatalogLoadError when the catalog structure itself is unusable.
    """
    if isinstance(raw, (str, bytes, Mapping)):
        raise CatalogLoadError("Catalog must be a list of device entries")

    patterns: list[Pattern] = []
    devices: list[str] = []
    components_by_device: dict[str, list[str]] = {}

    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("device"), str):
            raise CatalogLoadError(
                f"Catalog entry #{index} has no device name"
            )
        device = normalize(entry["device"])
        if not device:
            raise CatalogLoadError(
                f"Catalog entry #{index} has a blank device name"
            )
        if device not in components_by_device:
            devices.append(device)
            components_by_device[device] = []

        issues = entry.get("issues")
        if issues is not None:
            if not isinstance(issues, Mapping):
                raise CatalogLoadError(
                    f"Catalog entry {device!r}: 'issues' must be a mapping"
                )
            patterns.extend(_compile_issues(device, None, issues))

        components = entry.get("components")
        if components is not None:
            if not isinstance(components, Mapping):
                raise CatalogLoadError(
                    f"Catalog entry {device!r}: 'components' must be a mapping"
                )
            for component_key, component_issues in components.items():
                component = normalize(component_key)
                if not component:
                    logger.debug("Skipping %s: blank component name", device)
                    continue
                if component not in components_by_device[device]:
                    components_by_device[device].append(component)
                if not isinstance(component_issues, Mapping):
                    logger.debug(
                        "Skipping %s/%s: issues are not a mapping",
                        device, component,
                    )
                    continue
                patterns.extend(
                    _compile_issues(device, component, component_issues)
                )

    component_names = {
        name for names in components_by_device.values() for name in names
    }
    catalog = CompiledCatalog(
        patterns=tuple(patterns),
        devices=tuple(devices),
        components_by_device=MappingProxyType(
            {dev: tuple(names) for dev, names in components_by_device.items()}
        ),
        device_matchers=MappingProxyType(
            {dev: word_pattern(dev) for dev in devices}
        ),
        component_matchers=MappingProxyType(
            {name: word_pattern(name) for name in component_names}
        ),
    )
    logger.debug(
        "Compiled catalog: %d devices, %d patterns",
        len(catalog.devices), len(catalog.patterns),
    )
    return catalog
