"""Shared pytest configuration and marker assignment."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark unit tests by path and tag tests that import the Frida bindings."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        if "unit_tests" in path.parts:
            item.add_marker(pytest.mark.unit)
        if path.parent.name == "adapters" and path.stem == "test_frida_runtime":
            item.add_marker(pytest.mark.frida)
