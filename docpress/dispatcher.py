"""Dispatch a single symbol to the first capable generator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .culture import resolve_locale
from .docnode import DocumentationNode
from .generators.base import PageElement
from .logging import get_logger
from .models import OutputLanguage, Symbol, SymbolKind, symbol_kind
from .registry import GeneratorRegistry
from .results import (
    RESULT_TYPES,
    Failure,
    GenerationResult,
    Markup,
    NotApplicable,
    NotApplicableReason,
    declined,
)

_OPERATIONS = {
    SymbolKind.TYPE: "render_type",
    SymbolKind.METHOD: "render_method",
    SymbolKind.FIELD: "render_field",
    SymbolKind.PROPERTY: "render_property",
    SymbolKind.EVENT: "render_event",
}


@dataclass
class DispatchOutcome:
    """Normalised result of dispatching one symbol."""

    symbol_id: str
    kind: SymbolKind
    result: GenerationResult
    generator: Optional[str] = None
    attempted: List[str] = field(default_factory=list)
    failures: List[Failure] = field(default_factory=list)

    @property
    def is_gap(self) -> bool:
        return (
            isinstance(self.result, NotApplicable)
            and self.result.reason is NotApplicableReason.NO_CAPABLE_GENERATOR
        )


class Dispatcher:
    """Selects capable generators for a symbol and normalises what they return."""

    def __init__(self, registry: GeneratorRegistry) -> None:
        self.registry = registry
        self.logger = get_logger("dispatcher")

    def dispatch(
        self,
        symbol: Symbol,
        documentation: DocumentationNode | None,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> DispatchOutcome:
        kind = symbol_kind(symbol)
        language = OutputLanguage.parse(language)
        documentation = documentation if documentation is not None else DocumentationNode.empty()
        resolved_locale = resolve_locale(locale)

        outcome = DispatchOutcome(symbol_id=symbol.identity, kind=kind, result=declined())

        def capability_failed(generator: PageElement, exc: Exception) -> None:
            self._record_failure(outcome, _failure(generator, exc, "capability check failed: "))

        candidates = self.registry.find_capable(kind, language, on_error=capability_failed)
        if not candidates and not outcome.failures:
            self.logger.debug("No generator supports %s/%s for %s", kind.value, language.value, symbol.identity)
            outcome.result = NotApplicable(
                reason=NotApplicableReason.NO_CAPABLE_GENERATOR,
                detail=f"no generator supports {kind.value} in {language.value}",
            )
            return outcome

        for generator in candidates:
            name = _name_of(generator)
            outcome.attempted.append(name)
            result = self._invoke(generator, symbol, kind, documentation, language, resolved_locale)
            if isinstance(result, Failure):
                self._record_failure(outcome, replace(result, generator=name))
                continue
            if isinstance(result, Markup) and not result.is_empty:
                outcome.result = result
                outcome.generator = name
                return outcome

        if outcome.failures:
            outcome.result = outcome.failures[0]
        return outcome

    def _record_failure(self, outcome: DispatchOutcome, failure: Failure) -> None:
        self.logger.warning("Generator %s failed on %s: %s", failure.generator, outcome.symbol_id, failure.message)
        outcome.failures.append(failure)

    def _invoke(
        self,
        generator: PageElement,
        symbol: Symbol,
        kind: SymbolKind,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: str,
    ) -> GenerationResult:
        try:
            if kind is SymbolKind.UNRESOLVED:
                raw = generator.render_unresolved(
                    symbol.module_path, symbol.member_name, documentation, language, locale  # type: ignore[union-attr]
                )
            elif kind is SymbolKind.NAMESPACE:
                raw = generator.render_namespace(symbol.path, documentation, language, locale)  # type: ignore[union-attr]
            else:
                operation = getattr(generator, _OPERATIONS[kind])
                raw = operation(symbol, documentation, language, locale)
        except Exception as exc:
            return _failure(generator, exc)

        if raw is None:
            return declined("generator returned None")
        if not isinstance(raw, RESULT_TYPES):
            return Failure(
                generator=_name_of(generator),
                message=f"unexpected return value of type {type(raw).__name__}",
                error_type="TypeError",
            )
        return raw


def _name_of(generator: PageElement) -> str:
    # A broken ``name`` property must not escape dispatch either.
    try:
        name = generator.name
    except Exception:
        return type(generator).__name__
    return name if isinstance(name, str) and name else type(generator).__name__


def _failure(generator: PageElement, exc: Exception, prefix: str = "") -> Failure:
    return Failure(
        generator=_name_of(generator),
        message=prefix + (str(exc) or repr(exc)),
        error_type=type(exc).__name__,
    )


__all__ = ["DispatchOutcome", "Dispatcher"]
