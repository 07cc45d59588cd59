"""Base classes for page element generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Optional

from ..docnode import DocumentationNode
from ..models import (
    EventSymbol,
    FieldSymbol,
    MethodSymbol,
    OutputLanguage,
    PropertySymbol,
    SymbolKind,
    TypeSymbol,
)
from ..results import GenerationResult


class PageElement(ABC):
    """Contract for generators that turn symbols into embeddable markup.

    Rendering operations must not raise for input they merely cannot make
    sense of; they return ``NotApplicable`` instead. ``Failure`` (or an
    exception, which the dispatcher converts) is reserved for generators
    that broke while trying.
    """

    name: str = ""
    languages: FrozenSet[OutputLanguage] = frozenset()

    def supports_language(self, language: OutputLanguage) -> bool:
        return language in self.languages

    def supports_kind(self, kind: SymbolKind) -> bool:
        """Return False to opt out of a symbol kind entirely."""
        return True

    @abstractmethod
    def render_type(
        self,
        symbol: TypeSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a class, interface, enum, struct or delegate."""

    @abstractmethod
    def render_method(
        self,
        symbol: MethodSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a method or constructor."""

    @abstractmethod
    def render_field(
        self,
        symbol: FieldSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a field or constant."""

    @abstractmethod
    def render_property(
        self,
        symbol: PropertySymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a property or indexer."""

    @abstractmethod
    def render_event(
        self,
        symbol: EventSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render an event."""

    @abstractmethod
    def render_namespace(
        self,
        path: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a namespace page from its dotted path."""

    @abstractmethod
    def render_unresolved(
        self,
        module_path: str,
        member_name: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        """Render a member the extractor failed to resolve."""

    def __repr__(self) -> str:
        languages = ",".join(sorted(language.value for language in self.languages))
        return f"<{type(self).__name__} name={self.name!r} languages={languages}>"


def language_set(languages: Iterable[OutputLanguage | str]) -> FrozenSet[OutputLanguage]:
    return frozenset(OutputLanguage.parse(language) for language in languages)


__all__ = ["PageElement", "language_set"]
