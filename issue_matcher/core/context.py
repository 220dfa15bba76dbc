"""Context detection — which device and component the text talks about."""

from __future__ import annotations

from typing import Optional

from issue_matcher.core.models import CompiledCatalog, Context


def detect_device(text: str, catalog: CompiledCatalog) -> Optional[str]:
    """Return the first catalog device mentioned as a whole word, or None.

    Devices are tried in catalog declaration order.
    """
    for device in catalog.devices:
        if catalog.device_matchers[device].search(text):
            return device
    return None


def detect_component(
    text: str, device: str, catalog: CompiledCatalog
) -> Optional[str]:
    """Return the first component of ``device`` mentioned in the text, or None."""
    for component in catalog.components_by_device.get(device, ()):
        if catalog.component_matchers[component].search(text):
            return component
    return None


def detect_context(text: str, catalog: CompiledCatalog) -> Context:
    """Detect device, then component. No device means no component lookup."""
    device = detect_device(text, catalog)
    if device is None:
        return Context()
    return Context(
        device=device,
        component=detect_component(text, device, catalog),
    )
