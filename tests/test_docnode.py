"""Tests for documentation trees and locale resolution."""

from __future__ import annotations

import pytest

from docpress import culture
from docpress.docnode import DocumentationNode, InputError, reference_label


def test_from_xml_reads_member_block() -> None:
    node = DocumentationNode.from_xml(
        """
        <member name="M:Contoso.Widget.Resize(System.Int32)">
          <summary>Resizes the <see cref="T:Contoso.Widget"/> to <paramref name="width"/>.</summary>
          <param name="width">New width in pixels.</param>
          <returns>True when the size changed.</returns>
        </member>
        """
    )

    assert node.tag == "member"
    assert node.get("name") == "M:Contoso.Widget.Resize(System.Int32)"
    assert node.find("summary").plain_text() == "Resizes the Widget to width."
    assert node.param("width").plain_text() == "New width in pixels."
    assert node.param("height") is None
    assert [child.tag for child in node.children] == ["summary", "param", "returns"]


def test_from_xml_wraps_bare_fragments() -> None:
    node = DocumentationNode.from_xml("<summary>One</summary><remarks>Two</remarks>")
    assert node.tag == "member"
    assert [child.tag for child in node.find_all("summary")] == ["summary"]
    assert node.find("remarks").text == "Two"


def test_from_xml_wraps_single_non_member_root() -> None:
    node = DocumentationNode.from_xml("<summary>Only</summary>")
    assert node.tag == "member"
    assert node.find("summary").text == "Only"


def test_from_xml_empty_source_is_empty_node() -> None:
    node = DocumentationNode.from_xml("   ")
    assert node == DocumentationNode.empty()
    assert node.is_empty


def test_from_xml_rejects_malformed_markup() -> None:
    with pytest.raises(InputError, match="Malformed documentation XML"):
        DocumentationNode.from_xml("<summary>unterminated")


def test_iter_walks_depth_first() -> None:
    node = DocumentationNode.from_xml("<summary>a <c>b</c> <para>c <b>d</b></para></summary>")
    assert [item.tag for item in node.iter()] == ["member", "summary", "c", "para", "b"]


def test_type_param_lookup() -> None:
    node = DocumentationNode.from_xml('<typeparam name="T">Item type.</typeparam>')
    assert node.type_param("T").text == "Item type."


@pytest.mark.parametrize(
    ("attributes", "expected"),
    [
        ({"cref": "M:Contoso.Widget.Resize(System.Int32)"}, "Resize"),
        ({"cref": "T:Contoso.Widget"}, "Widget"),
        ({"langword": "null"}, "null"),
        ({"href": "https://example.com"}, "https://example.com"),
        ({"name": "width"}, "width"),
    ],
)
def test_reference_label(attributes, expected) -> None:
    assert reference_label(DocumentationNode(tag="see", attributes=attributes)) == expected


def test_resolve_locale_prefers_explicit_value() -> None:
    assert culture.resolve_locale("de_DE.UTF-8") == "de-DE"


def test_resolve_locale_falls_back_to_process_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(culture, "process_locale", lambda: "fr-FR")
    assert culture.resolve_locale(None) == "fr-FR"


def test_resolve_locale_defaults_to_en_us() -> None:
    assert culture.resolve_locale(None) == culture.DEFAULT_LOCALE == "en-US"
    assert culture.resolve_locale("C") == "en-US"


def test_normalize_locale_handles_language_only_tags() -> None:
    assert culture.normalize_locale("DE") == "de"
    assert culture.normalize_locale("") is None
    assert culture.language_of("fr-CA") == "fr"
