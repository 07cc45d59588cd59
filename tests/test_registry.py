"""Tests for the generator capability registry."""

from __future__ import annotations

import pytest

from docpress.models import OutputLanguage, SymbolKind
from docpress.registry import DuplicateGeneratorError, GeneratorRegistry, RegistryBusyError
from tests._fixtures.generators import ScriptedGenerator


def test_find_capable_returns_registration_order(registry: GeneratorRegistry) -> None:
    first = ScriptedGenerator("first", ["csharp", "vbnet"])
    second = ScriptedGenerator("second", ["csharp"])
    third = ScriptedGenerator("third", ["fsharp"])
    for generator in (first, second, third):
        registry.register(generator)

    assert registry.find_capable(SymbolKind.TYPE, OutputLanguage.CSHARP) == [first, second]
    assert registry.find_capable(SymbolKind.TYPE, OutputLanguage.VBNET) == [first]
    assert registry.find_capable(SymbolKind.TYPE, OutputLanguage.JSCRIPT) == []


def test_find_capable_honours_kind_restrictions(registry: GeneratorRegistry) -> None:
    types_only = ScriptedGenerator("types-only", kinds=[SymbolKind.TYPE])
    registry.register(types_only)

    assert registry.find_capable(SymbolKind.TYPE, OutputLanguage.CSHARP) == [types_only]
    assert registry.find_capable(SymbolKind.METHOD, OutputLanguage.CSHARP) == []


def test_find_capable_is_stable_across_calls(registry: GeneratorRegistry) -> None:
    registry.register(ScriptedGenerator("a"))
    registry.register(ScriptedGenerator("b"))
    first = registry.find_capable(SymbolKind.FIELD, OutputLanguage.FSHARP)
    second = registry.find_capable(SymbolKind.FIELD, OutputLanguage.FSHARP)
    assert [generator.name for generator in first] == [generator.name for generator in second] == ["a", "b"]


def test_register_rejects_duplicate_identity_case_insensitively(registry: GeneratorRegistry) -> None:
    registry.register(ScriptedGenerator("Html"))
    with pytest.raises(DuplicateGeneratorError) as excinfo:
        registry.register(ScriptedGenerator("html"))
    assert excinfo.value.name == "html"
    assert len(registry) == 1


def test_register_rejects_non_generators(registry: GeneratorRegistry) -> None:
    with pytest.raises(TypeError):
        registry.register(object())  # type: ignore[arg-type]


def test_register_rejects_unnamed_generators(registry: GeneratorRegistry) -> None:
    with pytest.raises(ValueError):
        registry.register(ScriptedGenerator(""))


def test_unregister_removes_generator_and_ignores_unknown(registry: GeneratorRegistry) -> None:
    registry.register(ScriptedGenerator("a"))
    registry.register(ScriptedGenerator("b"))

    registry.unregister("A")
    registry.unregister("missing")

    assert [generator.name for generator in registry.generators] == ["b"]
    assert "b" in registry
    assert "a" not in registry
    assert registry.get("B") is registry.generators[0]


def test_mutation_during_batch_raises_busy(registry: GeneratorRegistry) -> None:
    registry.register(ScriptedGenerator("a"))
    with registry.batch():
        assert registry.batch_active
        with pytest.raises(RegistryBusyError):
            registry.register(ScriptedGenerator("b"))
        with pytest.raises(RegistryBusyError):
            registry.unregister("a")
    assert not registry.batch_active

    registry.register(ScriptedGenerator("b"))
    assert len(registry) == 2


def test_batch_flag_is_released_after_errors(registry: GeneratorRegistry) -> None:
    with pytest.raises(KeyError):
        with registry.batch():
            raise KeyError("boom")
    assert not registry.batch_active


class _RaisingCapability(ScriptedGenerator):
    def supports_language(self, language):
        raise RuntimeError("capability check broke")


def test_find_capable_reports_raising_checks_when_asked(registry: GeneratorRegistry) -> None:
    broken = _RaisingCapability("broken")
    healthy = ScriptedGenerator("healthy")
    registry.register(broken)
    registry.register(healthy)
    reported = []

    capable = registry.find_capable(
        SymbolKind.TYPE, OutputLanguage.CSHARP, on_error=lambda generator, exc: reported.append((generator, exc))
    )

    assert capable == [healthy]
    assert [(generator, str(exc)) for generator, exc in reported] == [(broken, "capability check broke")]
    with pytest.raises(RuntimeError, match="capability check broke"):
        registry.find_capable(SymbolKind.TYPE, OutputLanguage.CSHARP)
