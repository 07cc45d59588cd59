from __future__ import annotations

import pytest

from docpress.dispatcher import Dispatcher
from docpress.generators import HtmlPageElement
from docpress.registry import GeneratorRegistry


@pytest.fixture(autouse=True)
def _fixed_process_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the process locale so default-locale rendering is deterministic."""
    monkeypatch.setattr("docpress.culture.process_locale", lambda: None)


@pytest.fixture
def registry() -> GeneratorRegistry:
    """Provide an empty generator registry."""
    return GeneratorRegistry()


@pytest.fixture
def html_dispatcher() -> Dispatcher:
    """Provide a dispatcher backed by the built-in HTML page element only."""
    registry = GeneratorRegistry()
    registry.register(HtmlPageElement())
    return Dispatcher(registry)
