"""Tests for generator discovery utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from docpress.generators import (
    GeneratorLoadError,
    HtmlPageElement,
    available_sources,
    discover_generators,
)
from tests._fixtures.generators import ScriptedGenerator


class PluginGenerator(ScriptedGenerator):
    """Generator shipped by a third-party distribution."""

    def __init__(self) -> None:
        super().__init__("plugin", ["fsharp"])


class SilentGenerator(ScriptedGenerator):
    def __init__(self) -> None:
        super().__init__("silent", [])


def _entry(name: str, loaded: object, dist: str = "contoso-docs") -> SimpleNamespace:
    return SimpleNamespace(name=name, load=lambda: loaded, dist=SimpleNamespace(name=dist))


def _install_entry_points(monkeypatch: pytest.MonkeyPatch, *entries: SimpleNamespace) -> None:
    def entry_points(*, group: str):
        return list(entries) if group == "docpress.generators" else []

    monkeypatch.setattr("docpress.generators.metadata.entry_points", entry_points)


@pytest.fixture(autouse=True)
def _no_installed_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch)


def test_discover_generators_returns_builtin_html() -> None:
    (generator,) = discover_generators()
    assert isinstance(generator, HtmlPageElement)
    assert generator.name == "html"


def test_discover_generators_passes_templates_dir(tmp_path: Path) -> None:
    (generator,) = discover_generators(["html"], templates_dir=tmp_path)
    assert isinstance(generator, HtmlPageElement)
    assert generator.templates_dir == tmp_path


def test_plugins_follow_builtins(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch, _entry("plugin", PluginGenerator))

    generators = discover_generators()

    assert [generator.name for generator in generators] == ["html", "plugin"]
    assert isinstance(generators[1], PluginGenerator)


def test_plugin_may_be_instance_or_factory(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(
        monkeypatch,
        _entry("plugin", PluginGenerator()),
        _entry("factory", lambda: ScriptedGenerator("factory")),
    )
    assert [generator.name for generator in discover_generators()] == ["html", "plugin", "factory"]


def test_enabled_filter_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch, _entry("plugin", PluginGenerator))

    generators = discover_generators([" PLUGIN "])

    assert len(generators) == 1
    assert isinstance(generators[0], PluginGenerator)


def test_duplicate_identities_keep_the_first_source(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    _install_entry_points(
        monkeypatch,
        _entry("HTML", PluginGenerator, dist="shadow"),
        _entry("plugin", PluginGenerator, dist="first"),
        _entry("Plugin", PluginGenerator, dist="second"),
    )
    logger = logging.getLogger("docpress")
    monkeypatch.setattr(logger, "propagate", True)

    with caplog.at_level(logging.WARNING, logger="docpress.generators"):
        sources = available_sources()

    assert [(source.name, source.origin) for source in sources] == [
        ("html", "builtin"),
        ("plugin", "plugin first"),
    ]
    assert "name already provided by builtin" in caplog.text
    assert "plugin second" in caplog.text


def test_plugin_must_be_a_page_element(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch, _entry("broken", object))
    with pytest.raises(GeneratorLoadError, match="not a PageElement"):
        discover_generators()


def test_plugin_name_must_match_entry_point(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch, _entry("markdown", PluginGenerator))
    with pytest.raises(GeneratorLoadError, match="identifies itself as 'plugin'"):
        discover_generators()


def test_plugin_must_declare_languages(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_entry_points(monkeypatch, _entry("silent", SilentGenerator))
    with pytest.raises(GeneratorLoadError, match="supports no output language"):
        discover_generators()


def test_plugin_import_errors_are_load_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode():
        raise ImportError("No module named 'contoso_docs'")

    _install_entry_points(
        monkeypatch,
        SimpleNamespace(name="contoso", load=_explode, dist=None, value="contoso_docs:Generator"),
    )
    with pytest.raises(GeneratorLoadError, match="contoso_docs"):
        discover_generators()


def test_disabled_plugins_are_never_loaded(monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode():
        raise ImportError("should stay unloaded")

    _install_entry_points(monkeypatch, SimpleNamespace(name="contoso", load=_explode, dist=None))
    assert [generator.name for generator in discover_generators(["html"])] == ["html"]


def test_discover_generators_raises_for_unknown_name() -> None:
    with pytest.raises(ValueError, match="does-not-exist"):
        discover_generators(["does-not-exist"])
