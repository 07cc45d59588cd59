"""Tests for the built-in HTML page element."""

from __future__ import annotations

from pathlib import Path

import pytest

from docpress.docnode import DocumentationNode
from docpress.generators import HtmlPageElement
from docpress.generators.doctext import DocTextRenderer
from docpress.generators.labels import LabelCatalog, supported_label_languages
from docpress.models import EventSymbol, OutputLanguage, SymbolKind
from docpress.postproc.markup import MarkupValidator
from docpress.results import Markup, NotApplicable
from tests._fixtures.symbols import delegate_type, every_kind, resize_method, widget_type

RESIZE_DOCS = DocumentationNode.from_xml(
    """
    <member name="M:Contoso.Widgets.Widget.Resize(System.Int32,System.Int32)">
      <summary>Resizes the widget. See <see cref="T:Contoso.Widgets.Component"/>.</summary>
      <param name="width">New width in <b>pixels</b>.</param>
      <returns>True when the size changed.</returns>
      <remarks>
        <para>Layout is recomputed lazily.</para>
        <list type="bullet">
          <item><description>Cheap</description></item>
          <item><description>Safe</description></item>
        </list>
      </remarks>
      <exception cref="T:System.ArgumentOutOfRangeException">Width is negative.</exception>
      <example><code lang="csharp">widget.Resize(10, 20);</code></example>
      <seealso href="https://example.com/widgets">Widget guide</seealso>
    </member>
    """
)


@pytest.fixture
def element() -> HtmlPageElement:
    return HtmlPageElement()


def test_method_page_contains_every_section(element: HtmlPageElement) -> None:
    result = element.render_method(resize_method(), RESIZE_DOCS, OutputLanguage.CSHARP, "en-US")

    assert isinstance(result, Markup)
    html = result.content
    assert 'data-symbol="M:Contoso.Widgets.Widget.Resize(System.Int32,System.Int32)"' in html
    assert '<h2 class="title">Widget.Resize Method</h2>' in html
    assert '<p class="summary">Resizes the widget. See <a href="#T-Contoso.Widgets.Component"><code>Component</code></a>.</p>' in html
    assert '<pre class="syntax"><code class="lang-csharp">public bool Resize(int width, int height)</code></pre>' in html
    assert "New width in <strong>pixels</strong>." in html
    assert "<dd>No description provided.</dd>" in html
    assert "<h3>Return Value</h3>" in html
    assert "True when the size changed." in html
    assert "<p>Layout is recomputed lazily.</p>" in html
    assert "<ul><li>Cheap</li><li>Safe</li></ul>" in html
    assert "<code>ArgumentOutOfRangeException</code>" in html
    assert '<pre><code class="lang-csharp">widget.Resize(10, 20);</code></pre>' in html
    assert '<li><a href="https://example.com/widgets">Widget guide</a></li>' in html
    assert MarkupValidator().validate(html) == []


def test_pages_for_every_kind_are_well_formed(element: HtmlPageElement) -> None:
    validator = MarkupValidator()
    for language in OutputLanguage:
        for symbol in every_kind():
            if language is OutputLanguage.JSCRIPT and isinstance(symbol, EventSymbol):
                continue
            result = _render(element, symbol, language)
            assert isinstance(result, Markup), (symbol, language)
            assert result.content.endswith("\n")
            assert validator.validate(result.content) == [], (symbol, language)


def test_declaration_is_escaped(element: HtmlPageElement) -> None:
    symbol = widget_type(generic_parameters=("T",), interfaces=("System.IComparable<T>",))
    html = element.render_type(symbol, DocumentationNode.empty(), OutputLanguage.CSHARP).content
    assert "public class Widget&lt;T&gt; : Component, IComparable&lt;T&gt;" in html
    assert "Widget&lt;T&gt; Class" in html


def test_type_page_lists_inheritance_and_namespace(element: HtmlPageElement) -> None:
    html = element.render_type(widget_type(), DocumentationNode.empty(), OutputLanguage.VBNET).content
    assert "Namespace: <code>Contoso.Widgets</code>" in html
    assert "Inheritance: <code>Component</code>" in html
    assert "Implements: <code>IDisposable</code>" in html
    assert 'class="lang-vbnet"' in html


def test_delegate_page_lists_parameters(element: HtmlPageElement) -> None:
    docs = DocumentationNode.from_xml('<param name="sender">The widget raising the callback.</param>')
    html = element.render_type(delegate_type(), docs, OutputLanguage.CSHARP).content
    assert "WidgetCallback Delegate" in html
    assert "The widget raising the callback." in html


def test_unsupported_syntax_declines(element: HtmlPageElement) -> None:
    event = EventSymbol("Contoso.Widgets.Widget", "Resized", "System.EventHandler")
    result = element.render_event(event, DocumentationNode.empty(), OutputLanguage.JSCRIPT)
    assert isinstance(result, NotApplicable)
    assert "events" in result.detail


def test_unresolved_reference_renders_notice(element: HtmlPageElement) -> None:
    result = element.render_unresolved(
        "bin/Contoso.Legacy.dll", "M:Contoso.Legacy.Gadget.Spin", DocumentationNode.empty(), OutputLanguage.FSHARP
    )
    assert isinstance(result, Markup)
    assert "Documentation not available" in result.content
    assert "The member Contoso.Legacy.Gadget.Spin from Contoso.Legacy.dll could not be resolved." in result.content


def test_headings_follow_locale(element: HtmlPageElement) -> None:
    german = element.render_method(resize_method(), RESIZE_DOCS, OutputLanguage.CSHARP, "de-DE").content
    french = element.render_method(resize_method(), RESIZE_DOCS, OutputLanguage.CSHARP, "fr").content

    assert "Widget.Resize Methode" in german
    assert "<h3>Rückgabewert</h3>" in german
    assert 'lang="de-DE"' in german
    assert "<h3>Valeur de retour</h3>" in french


def test_unknown_locale_falls_back_to_english(element: HtmlPageElement) -> None:
    html = element.render_namespace("Contoso.Widgets", DocumentationNode.empty(), OutputLanguage.CSHARP, "ja-JP").content
    assert "Contoso.Widgets Namespace" in html
    assert "namespace Contoso.Widgets" in html


def test_default_locale_is_used_when_absent(element: HtmlPageElement) -> None:
    html = element.render_namespace("Contoso", DocumentationNode.empty(), OutputLanguage.CSHARP).content
    assert 'lang="en-US"' in html


def test_restricted_languages(element: HtmlPageElement) -> None:
    limited = HtmlPageElement(languages=["cs", "vb"])
    assert limited.supports_language(OutputLanguage.CSHARP)
    assert not limited.supports_language(OutputLanguage.FSHARP)
    assert element.supports_language(OutputLanguage.JSCRIPT)
    assert element.supports_kind(SymbolKind.UNRESOLVED)


def test_custom_templates_override_defaults(tmp_path: Path) -> None:
    (tmp_path / "namespace.html.j2").write_text(
        '<section class="custom" data-symbol="{{ identity }}">{{ title }}</section>\n',
        encoding="utf-8",
    )
    element = HtmlPageElement(tmp_path)

    namespace_html = element.render_namespace("Contoso", DocumentationNode.empty(), OutputLanguage.CSHARP).content
    type_html = element.render_type(widget_type(), DocumentationNode.empty(), OutputLanguage.CSHARP).content

    assert namespace_html == '<section class="custom" data-symbol="N:Contoso">Contoso Namespace</section>\n'
    assert "docpress-type" in type_html


def test_doc_text_renderer_escapes_text() -> None:
    node = DocumentationNode.from_xml("<summary>a &lt; b <c>x &amp; y</c></summary>").find("summary")
    assert DocTextRenderer().render(node) == "a &lt; b <code>x &amp; y</code>"


def test_doc_text_renderer_table_list() -> None:
    node = DocumentationNode.from_xml(
        '<remarks><list type="table"><listheader><term>Key</term><description>Meaning</description></listheader>'
        "<item><term>A</term><description>First</description></item></list></remarks>"
    ).find("remarks")
    assert DocTextRenderer().render(node) == (
        "<table><tr><th>Key</th><th>Meaning</th></tr><tr><td>A</td><td>First</td></tr></table>"
    )


def test_label_catalog_falls_back_per_key() -> None:
    labels = LabelCatalog("de-AT")
    assert labels["remarks"] == "Hinweise"
    assert LabelCatalog("xx")["remarks"] == "Remarks"
    assert supported_label_languages() == ["de", "en", "fr"]
    assert set(labels) == set(LabelCatalog("en"))


def _render(element: HtmlPageElement, symbol, language: OutputLanguage):
    kind = symbol.kind
    documentation = DocumentationNode.empty()
    if kind is SymbolKind.NAMESPACE:
        return element.render_namespace(symbol.path, documentation, language)
    if kind is SymbolKind.UNRESOLVED:
        return element.render_unresolved(symbol.module_path, symbol.member_name, documentation, language)
    operation = getattr(element, f"render_{kind.value}")
    return operation(symbol, documentation, language)
