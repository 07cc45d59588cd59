"""Well-formedness checks for generated markup fragments."""

from __future__ import annotations

from html.parser import HTMLParser
from typing import List

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class _TagBalanceParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.stack: List[str] = []
        self.issues: List[str] = []

    def handle_starttag(self, tag, attrs):  # noqa: D401 - HTMLParser hook
        if tag not in VOID_ELEMENTS:
            self.stack.append(tag)

    def handle_startendtag(self, tag, attrs):
        return

    def handle_endtag(self, tag):
        if tag in VOID_ELEMENTS:
            return
        if not self.stack:
            self.issues.append(f"Unexpected closing tag </{tag}>")
            return
        if self.stack[-1] == tag:
            self.stack.pop()
            return
        if tag in self.stack:
            while self.stack and self.stack[-1] != tag:
                self.issues.append(f"Unclosed tag <{self.stack.pop()}>")
            self.stack.pop()
            return
        self.issues.append(f"Unexpected closing tag </{tag}>")


class MarkupValidator:
    """Reports unbalanced tags in an HTML fragment."""

    def validate(self, markup: str) -> List[str]:
        """Return a list of issues; empty when the fragment is well formed."""
        parser = _TagBalanceParser()
        parser.feed(markup)
        parser.close()
        issues = list(parser.issues)
        issues.extend(f"Unclosed tag <{tag}>" for tag in reversed(parser.stack))
        return issues


__all__ = ["MarkupValidator", "VOID_ELEMENTS"]
