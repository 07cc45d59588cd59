"""Read-only documentation trees built from XML documentation comments."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple


class InputError(ValueError):
    """Raised when batch input or documentation XML cannot be read."""


@dataclass(frozen=True)
class DocumentationNode:
    """One element of author-written annotation text.

    Mixed content follows the ElementTree model: ``text`` precedes the first
    child and each child's ``tail`` follows that child.
    """

    tag: str
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Tuple["DocumentationNode", ...] = ()
    tail: str = ""

    @classmethod
    def empty(cls) -> "DocumentationNode":
        return cls(tag="member")

    @classmethod
    def from_element(cls, element: ET.Element) -> "DocumentationNode":
        return cls(
            tag=element.tag,
            text=element.text or "",
            attributes=dict(element.attrib),
            children=tuple(cls.from_element(child) for child in element),
            tail=element.tail or "",
        )

    @classmethod
    def from_xml(cls, source: str) -> "DocumentationNode":
        """Parse a ``<member>`` block; bare fragments are wrapped in one."""
        if not source or not source.strip():
            return cls.empty()
        text = source.strip()
        try:
            root = ET.fromstring(text)
        except ET.ParseError:
            try:
                root = ET.fromstring(f"<member>{text}</member>")
            except ET.ParseError as exc:
                raise InputError(f"Malformed documentation XML: {exc}") from exc
        node = cls.from_element(root)
        if node.tag != "member":
            node = cls(tag="member", children=(replace(node, tail=""),))
        return node

    @property
    def is_empty(self) -> bool:
        return not self.text.strip() and not self.children

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def find(self, tag: str) -> Optional["DocumentationNode"]:
        return next((child for child in self.children if child.tag == tag), None)

    def find_all(self, tag: str) -> List["DocumentationNode"]:
        return [child for child in self.children if child.tag == tag]

    def param(self, name: str) -> Optional["DocumentationNode"]:
        return next((child for child in self.find_all("param") if child.get("name") == name), None)

    def type_param(self, name: str) -> Optional["DocumentationNode"]:
        return next((child for child in self.find_all("typeparam") if child.get("name") == name), None)

    def iter(self) -> Iterator["DocumentationNode"]:
        yield self
        for child in self.children:
            yield from child.iter()

    def plain_text(self) -> str:
        """Return the text content with whitespace collapsed."""
        parts: List[str] = [self.text]
        for child in self.children:
            if child.tag in {"see", "seealso", "paramref", "typeparamref"} and not child.children and not child.text:
                parts.append(reference_label(child))
            else:
                parts.append(child.plain_text())
            parts.append(child.tail)
        return " ".join("".join(parts).split())


def reference_label(node: DocumentationNode) -> str:
    """Return a readable label for ``see``/``paramref`` style references."""
    target = node.get("cref") or node.get("href") or node.get("langword") or node.get("name") or ""
    if len(target) > 2 and target[1] == ":":
        target = target[2:]
    target = target.split("(", 1)[0]
    return target.rpartition(".")[2] if node.get("cref") else target


__all__ = ["DocumentationNode", "InputError", "reference_label"]
