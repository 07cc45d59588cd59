"""Built-in HTML page element backed by jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from ..culture import resolve_locale
from ..docnode import DocumentationNode
from ..logging import get_logger
from ..models import (
    EventSymbol,
    FieldSymbol,
    MethodSymbol,
    OutputLanguage,
    Parameter,
    PropertySymbol,
    TypeCategory,
    TypeSymbol,
)
from ..results import GenerationResult, Markup, declined
from .base import PageElement, language_set
from .doctext import DocTextRenderer, render_sections
from .labels import LabelCatalog
from .syntax import UnsupportedSyntax, declaration, format_type, namespace_declaration

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")


class HtmlPageElement(PageElement):
    """Renders every symbol kind as an HTML fragment for CMS pages."""

    name = "html"
    languages = frozenset(OutputLanguage)

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        languages: Optional[Iterable[OutputLanguage | str]] = None,
    ) -> None:
        self.templates_dir = templates_dir
        if languages is not None:
            self.languages = language_set(languages)
        loaders = [FileSystemLoader(str(_DEFAULT_TEMPLATES))]
        if templates_dir is not None:
            loaders.insert(0, FileSystemLoader(str(templates_dir)))
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._text = DocTextRenderer()
        self.logger = get_logger("generators.html")

    def render_type(
        self,
        symbol: TypeSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        try:
            context = self._context(
                kind="type",
                identity=symbol.identity,
                title=f"{symbol.name}{_generic_suffix(symbol.generic_parameters)} {labels[symbol.category.value]}",
                documentation=documentation,
                language=language,
                labels=labels,
                declaration=declaration(symbol, language),
            )
            context.update(
                namespace=symbol.namespace,
                inheritance=[format_type(symbol.base_type, language)] if symbol.base_type else [],
                implements=[format_type(name, language) for name in symbol.interfaces],
                type_parameters=self._type_parameters(symbol.generic_parameters, documentation),
            )
            if symbol.category is TypeCategory.DELEGATE:
                context.update(self._signature(symbol.parameters, symbol.return_type, documentation, language))
        except UnsupportedSyntax as exc:
            return declined(str(exc))
        return Markup(self._render("type.html.j2", context))

    def render_method(
        self,
        symbol: MethodSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        owner = symbol.declaring_type.rpartition(".")[2]
        if symbol.is_constructor:
            title = f"{owner} {labels['constructor']}"
        else:
            title = f"{owner}.{symbol.name}{_generic_suffix(symbol.generic_parameters)} {labels['method']}"
        try:
            context = self._member_context(
                "method", symbol.identity, symbol.declaring_type, title, documentation, language, labels,
                declaration(symbol, language),
            )
            context["type_parameters"] = self._type_parameters(symbol.generic_parameters, documentation)
            return_type = None if symbol.is_constructor else symbol.return_type
            context.update(self._signature(symbol.parameters, return_type, documentation, language))
        except UnsupportedSyntax as exc:
            return declined(str(exc))
        return Markup(self._render("member.html.j2", context))

    def render_field(
        self,
        symbol: FieldSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        title = f"{symbol.declaring_type.rpartition('.')[2]}.{symbol.name} {labels['field']}"
        try:
            context = self._member_context(
                "field", symbol.identity, symbol.declaring_type, title, documentation, language, labels,
                declaration(symbol, language),
            )
        except UnsupportedSyntax as exc:
            return declined(str(exc))
        return Markup(self._render("member.html.j2", context))

    def render_property(
        self,
        symbol: PropertySymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        title = f"{symbol.declaring_type.rpartition('.')[2]}.{symbol.name} {labels['property']}"
        try:
            context = self._member_context(
                "property", symbol.identity, symbol.declaring_type, title, documentation, language, labels,
                declaration(symbol, language),
            )
            context.update(self._signature(symbol.parameters, None, documentation, language))
        except UnsupportedSyntax as exc:
            return declined(str(exc))
        return Markup(self._render("member.html.j2", context))

    def render_event(
        self,
        symbol: EventSymbol,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        title = f"{symbol.declaring_type.rpartition('.')[2]}.{symbol.name} {labels['event']}"
        try:
            context = self._member_context(
                "event", symbol.identity, symbol.declaring_type, title, documentation, language, labels,
                declaration(symbol, language),
            )
        except UnsupportedSyntax as exc:
            return declined(str(exc))
        return Markup(self._render("member.html.j2", context))

    def render_namespace(
        self,
        path: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        context = self._context(
            kind="namespace",
            identity=f"N:{path}",
            title=f"{path} {labels['namespace']}",
            documentation=documentation,
            language=language,
            labels=labels,
            declaration=namespace_declaration(path, language),
        )
        return Markup(self._render("namespace.html.j2", context))

    def render_unresolved(
        self,
        module_path: str,
        member_name: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        locale: Optional[str] = None,
    ) -> GenerationResult:
        labels = LabelCatalog(resolve_locale(locale))
        display_name = member_name[2:] if len(member_name) > 2 and member_name[1] == ":" else member_name
        context = self._context(
            kind="unresolved",
            identity=member_name,
            title=display_name,
            documentation=documentation,
            language=language,
            labels=labels,
            declaration="",
        )
        context["detail"] = labels["not_available_detail"].format(
            member=display_name, module=Path(module_path).name or module_path
        )
        self.logger.debug("Rendering placeholder for unresolved member %s", member_name)
        return Markup(self._render("unresolved.html.j2", context))

    # ------------------------------------------------------------------
    # Internal helpers

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context).strip() + "\n"

    def _context(
        self,
        *,
        kind: str,
        identity: str,
        title: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        labels: LabelCatalog,
        declaration: str,
    ) -> Dict[str, Any]:
        context: Dict[str, Any] = {
            "kind": kind,
            "identity": identity,
            "title": title,
            "language": language.value,
            "locale": labels.locale,
            "declaration": declaration,
            "namespace": "",
            "declaring_type": "",
            "inheritance": [],
            "implements": [],
            "type_parameters": [],
            "parameters": [],
            "returns_type": "",
            "returns": "",
            "detail": "",
        }
        context.update(render_sections(self._text, documentation, labels))
        return context

    def _member_context(
        self,
        kind: str,
        identity: str,
        declaring_type: str,
        title: str,
        documentation: DocumentationNode,
        language: OutputLanguage,
        labels: LabelCatalog,
        declaration: str,
    ) -> Dict[str, Any]:
        context = self._context(
            kind=kind,
            identity=identity,
            title=title,
            documentation=documentation,
            language=language,
            labels=labels,
            declaration=declaration,
        )
        context["declaring_type"] = declaring_type
        return context

    def _signature(
        self,
        parameters: Sequence[Parameter],
        return_type: Optional[str],
        documentation: DocumentationNode,
        language: OutputLanguage,
    ) -> Dict[str, Any]:
        rendered: List[Dict[str, Any]] = []
        for parameter in parameters:
            rendered.append(
                {
                    "name": parameter.name,
                    "type": format_type(parameter.type, language),
                    "description": self._text.render(documentation.param(parameter.name)),
                }
            )
        signature: Dict[str, Any] = {"parameters": rendered}
        if return_type and return_type != "System.Void":
            signature["returns_type"] = format_type(return_type, language)
            signature["returns"] = self._text.paragraph(documentation.find("returns"), "returns")
        return signature

    def _type_parameters(self, names: Sequence[str], documentation: DocumentationNode) -> List[Dict[str, Any]]:
        return [
            {"name": name, "description": self._text.render(documentation.type_param(name))}
            for name in names
        ]


def _generic_suffix(names: Sequence[str]) -> str:
    return f"<{', '.join(names)}>" if names else ""


__all__ = ["HtmlPageElement"]
