"""Tests for symbol descriptors and output languages."""

from __future__ import annotations

import pytest

from docpress.models import (
    EventSymbol,
    FieldSymbol,
    InvalidSymbolError,
    MethodSymbol,
    NamespaceSymbol,
    OutputLanguage,
    Parameter,
    PropertySymbol,
    SymbolKind,
    TypeCategory,
    TypeSymbol,
    UnresolvedReference,
    symbol_kind,
)
from tests._fixtures.symbols import every_kind, resize_method, widget_type


def test_identities_follow_documentation_id_convention() -> None:
    identities = [symbol.identity for symbol in every_kind()]
    assert identities == [
        "T:Contoso.Widgets.Widget",
        "M:Contoso.Widgets.Widget.Resize(System.Int32,System.Int32)",
        "F:Contoso.Widgets.Widget.MaxSize",
        "P:Contoso.Widgets.Widget.Title",
        "E:Contoso.Widgets.Widget.Resized",
        "N:Contoso.Widgets",
        "M:Contoso.Legacy.Gadget.Spin",
    ]


def test_constructor_and_generic_method_identities() -> None:
    ctor = MethodSymbol("Contoso.Widgets.Widget", ".ctor", parameters=(Parameter("name", "System.String"),))
    generic = MethodSymbol("Contoso.Widgets.Widget", "Clone", generic_parameters=("T",), return_type="T")

    assert ctor.is_constructor
    assert ctor.identity == "M:Contoso.Widgets.Widget.#ctor(System.String)"
    assert generic.identity == "M:Contoso.Widgets.Widget.Clone``1"


def test_indexer_identity_lists_index_types() -> None:
    indexer = PropertySymbol(
        "Contoso.Widgets.WidgetList",
        "Item",
        "Contoso.Widgets.Widget",
        parameters=(Parameter("index", "System.Int32"),),
    )
    assert indexer.is_indexer
    assert indexer.identity == "P:Contoso.Widgets.WidgetList.Item(System.Int32)"


def test_type_symbol_splits_namespace_and_name() -> None:
    symbol = widget_type()
    assert symbol.namespace == "Contoso.Widgets"
    assert symbol.name == "Widget"


@pytest.mark.parametrize(
    "factory",
    [
        lambda: TypeSymbol(qualified_name=""),
        lambda: MethodSymbol(declaring_type="", name="Run"),
        lambda: FieldSymbol("Contoso.Widget", "Size", " "),
        lambda: PropertySymbol("Contoso.Widget", "Size", "System.Int32", can_read=False, can_write=False),
        lambda: EventSymbol("Contoso.Widget", "Changed", ""),
        lambda: NamespaceSymbol("Contoso..Widgets"),
        lambda: UnresolvedReference("", "T:Missing"),
        lambda: TypeSymbol(qualified_name="Contoso.Widget", category="class"),  # type: ignore[arg-type]
        lambda: resize_method(modifiers=("volatile",)),
        lambda: Parameter("value", "System.Int32", modifier="byval"),
        lambda: MethodSymbol("Contoso.Widget", ".ctor", return_type="System.Void"),
    ],
)
def test_invalid_descriptors_raise(factory) -> None:
    with pytest.raises(InvalidSymbolError):
        factory()


def test_only_delegates_carry_parameters() -> None:
    with pytest.raises(InvalidSymbolError, match="Only delegates"):
        TypeSymbol(
            qualified_name="Contoso.Widget",
            category=TypeCategory.CLASS,
            parameters=(Parameter("x", "System.Int32"),),
        )


def test_invalid_symbol_error_is_value_error() -> None:
    assert issubclass(InvalidSymbolError, ValueError)


def test_symbol_kind_rejects_non_descriptors() -> None:
    assert symbol_kind(widget_type()) is SymbolKind.TYPE
    with pytest.raises(InvalidSymbolError):
        symbol_kind({"kind": "type"})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("csharp", OutputLanguage.CSHARP),
        ("C#", OutputLanguage.CSHARP),
        ("cs", OutputLanguage.CSHARP),
        ("VB.NET", OutputLanguage.VBNET),
        ("vb", OutputLanguage.VBNET),
        ("f#", OutputLanguage.FSHARP),
        ("JScript.NET", OutputLanguage.JSCRIPT),
        (OutputLanguage.JSCRIPT, OutputLanguage.JSCRIPT),
    ],
)
def test_output_language_parse_accepts_aliases(value, expected) -> None:
    assert OutputLanguage.parse(value) is expected


def test_output_language_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown output language"):
        OutputLanguage.parse("cobol")


def test_output_language_display_names() -> None:
    assert [language.display_name for language in OutputLanguage] == ["C#", "VB.NET", "F#", "JScript"]
