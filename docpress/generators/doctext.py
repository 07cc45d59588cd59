"""Render documentation nodes as HTML."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from markupsafe import Markup, escape

from ..docnode import DocumentationNode, reference_label
from .labels import LabelCatalog


class DocTextRenderer:
    """Turns XML documentation-comment elements into HTML fragments."""

    def __init__(self, anchor_prefix: str = "#") -> None:
        self.anchor_prefix = anchor_prefix
        self._inline: Dict[str, Callable[[DocumentationNode], Markup]] = {
            "c": self._code_inline,
            "code": self._code_block,
            "para": self._para,
            "see": self._see,
            "seealso": self._see,
            "paramref": self._paramref,
            "typeparamref": self._paramref,
            "list": self._list,
            "b": self._simple("strong"),
            "i": self._simple("em"),
            "br": lambda node: Markup("<br/>"),
        }

    def render(self, node: Optional[DocumentationNode]) -> Markup:
        """Render the mixed content of ``node`` (not the node's own tag)."""
        if node is None:
            return Markup("")
        parts: List[str] = [escape(_squash(node.text))]
        for child in node.children:
            handler = self._inline.get(child.tag)
            if handler is None:
                parts.append(self.render(child))
            else:
                parts.append(handler(child))
            parts.append(escape(_squash(child.tail)))
        return Markup("".join(parts).strip())

    def paragraph(self, node: Optional[DocumentationNode], css_class: str = "") -> Markup:
        content = self.render(node)
        if not content:
            return Markup("")
        if "<p>" in content or "<pre>" in content or "<ul" in content or "<ol" in content:
            return Markup('<div class="{0}">{1}</div>').format(css_class, content)
        return Markup('<p class="{0}">{1}</p>').format(css_class, content)

    def anchor(self, cref: str) -> str:
        return self.anchor_prefix + cref.replace(":", "-").replace("(", "-").replace(")", "").replace(",", "-")

    def see_also(self, documentation: DocumentationNode) -> List[Markup]:
        return [self._see(node) for node in documentation.find_all("seealso")]

    def exceptions(self, documentation: DocumentationNode) -> List[Dict[str, Markup]]:
        return [
            {"name": Markup(escape(reference_label(node))), "description": self.render(node)}
            for node in documentation.find_all("exception")
        ]

    def examples(self, documentation: DocumentationNode) -> List[Markup]:
        return [self.render(node) for node in documentation.find_all("example")]

    def _para(self, node: DocumentationNode) -> Markup:
        return Markup("<p>{0}</p>").format(self.render(node))

    @staticmethod
    def _code_inline(node: DocumentationNode) -> Markup:
        return Markup("<code>{0}</code>").format(node.plain_text())

    @staticmethod
    def _code_block(node: DocumentationNode) -> Markup:
        language = node.get("lang") or node.get("language") or ""
        body = _dedent(node.text)
        if language:
            return Markup('<pre><code class="lang-{0}">{1}</code></pre>').format(language, body)
        return Markup("<pre><code>{0}</code></pre>").format(body)

    def _see(self, node: DocumentationNode) -> Markup:
        label = self.render(node) or Markup(escape(reference_label(node)))
        if node.get("href"):
            return Markup('<a href="{0}">{1}</a>').format(node.get("href"), label)
        if node.get("cref"):
            return Markup('<a href="{0}"><code>{1}</code></a>').format(self.anchor(node.get("cref") or ""), label)
        return Markup("<code>{0}</code>").format(label)

    @staticmethod
    def _paramref(node: DocumentationNode) -> Markup:
        return Markup('<em class="parameter">{0}</em>').format(node.get("name") or "")

    def _simple(self, tag: str) -> Callable[[DocumentationNode], Markup]:
        def _render(node: DocumentationNode) -> Markup:
            return Markup("<{0}>{1}</{0}>").format(Markup(tag), self.render(node))

        return _render

    def _list(self, node: DocumentationNode) -> Markup:
        style = (node.get("type") or "bullet").lower()
        items = node.find_all("item")
        if style == "table":
            rows = []
            header = node.find("listheader")
            if header is not None:
                rows.append(
                    Markup("<tr><th>{0}</th><th>{1}</th></tr>").format(
                        self.render(header.find("term")), self.render(header.find("description"))
                    )
                )
            for item in items:
                rows.append(
                    Markup("<tr><td>{0}</td><td>{1}</td></tr>").format(
                        self.render(item.find("term")), self.render(item.find("description"))
                    )
                )
            return Markup("<table>{0}</table>").format(Markup("").join(rows))
        tag = Markup("ol") if style == "number" else Markup("ul")
        rendered = []
        for item in items:
            term = item.find("term")
            description = item.find("description")
            if term is not None and description is not None:
                rendered.append(
                    Markup("<li><strong>{0}</strong> {1}</li>").format(self.render(term), self.render(description))
                )
            elif description is not None:
                rendered.append(Markup("<li>{0}</li>").format(self.render(description)))
            else:
                rendered.append(Markup("<li>{0}</li>").format(self.render(item)))
        return Markup("<{0}>{1}</{0}>").format(tag, Markup("").join(rendered))


def render_sections(
    renderer: DocTextRenderer, documentation: DocumentationNode, labels: LabelCatalog
) -> Dict[str, object]:
    """Collect the template context shared by every page kind."""
    return {
        "summary": renderer.paragraph(documentation.find("summary"), "summary"),
        "remarks": renderer.paragraph(documentation.find("remarks"), "remarks"),
        "value": renderer.paragraph(documentation.find("value"), "value"),
        "examples": renderer.examples(documentation),
        "exceptions": renderer.exceptions(documentation),
        "see_also": renderer.see_also(documentation),
        "labels": labels,
    }


def _squash(text: str) -> str:
    if not text:
        return ""
    collapsed = " ".join(text.split())
    if text[:1].isspace() and collapsed:
        collapsed = " " + collapsed
    if text[-1:].isspace() and collapsed:
        collapsed += " "
    return collapsed


def _dedent(text: str) -> str:
    lines = text.strip("\n").splitlines()
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    margin = min(indents) if indents else 0
    return "\n".join(line[margin:].rstrip() for line in lines)


__all__ = ["DocTextRenderer", "render_sections"]
