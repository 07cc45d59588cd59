"""Reads batch manifests produced by the symbol extractor."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .batch import BatchItem
from .docnode import DocumentationNode, InputError
from .models import (
    EventSymbol,
    FieldSymbol,
    InvalidSymbolError,
    MethodSymbol,
    NamespaceSymbol,
    Parameter,
    PropertySymbol,
    Symbol,
    SymbolKind,
    TypeCategory,
    TypeSymbol,
    UnresolvedReference,
    Visibility,
)


@dataclass
class BatchManifest:
    """Materialised input for one build."""

    items: List[BatchItem]
    language: Optional[str] = None
    locale: Optional[str] = None


def load_manifest(path: Path) -> BatchManifest:
    """Load a JSON batch manifest from disk."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except (OSError, json.JSONDecodeError) as exc:
        raise InputError(f"Failed to read batch manifest {path}: {exc}") from exc
    return parse_manifest(data)


def parse_manifest(data: Any) -> BatchManifest:
    if isinstance(data, list):
        data = {"symbols": data}
    if not isinstance(data, dict):
        raise InputError("Batch manifest must be a JSON object or a list of symbols")
    symbols = data.get("symbols")
    if not isinstance(symbols, list):
        raise InputError("Batch manifest must contain a 'symbols' list")
    items = [parse_item(entry, position) for position, entry in enumerate(symbols)]
    return BatchManifest(
        items=items,
        language=_as_str(data.get("language")),
        locale=_as_str(data.get("locale")),
    )


def parse_item(entry: Any, position: int = 0) -> BatchItem:
    if not isinstance(entry, dict):
        raise InvalidSymbolError(f"Symbol #{position} must be a JSON object")
    documentation = entry.get("documentation")
    if documentation is not None and not isinstance(documentation, str):
        raise InputError(f"Documentation of symbol #{position} must be an XML string")
    try:
        symbol = symbol_from_dict(entry)
    except InvalidSymbolError as exc:
        raise InvalidSymbolError(f"Symbol #{position}: {exc}") from exc
    return BatchItem(symbol=symbol, documentation=DocumentationNode.from_xml(documentation or ""))


def symbol_from_dict(payload: Mapping[str, Any]) -> Symbol:
    """Build a descriptor from its JSON representation."""
    raw_kind = payload.get("kind")
    try:
        kind = SymbolKind(str(raw_kind).lower())
    except ValueError:
        raise InvalidSymbolError(f"Unknown symbol kind {raw_kind!r}") from None
    builder = _BUILDERS[kind]
    try:
        return builder(payload)
    except KeyError as exc:
        raise InvalidSymbolError(f"Missing required attribute {exc.args[0]!r} for {kind.value}") from None


def _type(payload: Mapping[str, Any]) -> TypeSymbol:
    return TypeSymbol(
        qualified_name=payload["name"],
        category=_enum(TypeCategory, payload.get("category", "class"), "type category"),
        visibility=_visibility(payload),
        generic_parameters=_str_tuple(payload.get("generic_parameters")),
        base_type=_as_str(payload.get("base_type")),
        interfaces=_str_tuple(payload.get("interfaces")),
        modifiers=_str_tuple(payload.get("modifiers")),
        parameters=_parameters(payload.get("parameters")),
        return_type=_as_str(payload.get("return_type")),
    )


def _method(payload: Mapping[str, Any]) -> MethodSymbol:
    return MethodSymbol(
        declaring_type=payload["declaring_type"],
        name=payload["name"],
        parameters=_parameters(payload.get("parameters")),
        return_type=_as_str(payload.get("return_type")),
        visibility=_visibility(payload),
        modifiers=_str_tuple(payload.get("modifiers")),
        generic_parameters=_str_tuple(payload.get("generic_parameters")),
    )


def _field(payload: Mapping[str, Any]) -> FieldSymbol:
    return FieldSymbol(
        declaring_type=payload["declaring_type"],
        name=payload["name"],
        field_type=payload["type"],
        visibility=_visibility(payload),
        modifiers=_str_tuple(payload.get("modifiers")),
        constant_value=_as_str(payload.get("constant_value")),
    )


def _property(payload: Mapping[str, Any]) -> PropertySymbol:
    return PropertySymbol(
        declaring_type=payload["declaring_type"],
        name=payload["name"],
        property_type=payload["type"],
        visibility=_visibility(payload),
        modifiers=_str_tuple(payload.get("modifiers")),
        can_read=bool(payload.get("can_read", True)),
        can_write=bool(payload.get("can_write", False)),
        parameters=_parameters(payload.get("parameters")),
    )


def _event(payload: Mapping[str, Any]) -> EventSymbol:
    return EventSymbol(
        declaring_type=payload["declaring_type"],
        name=payload["name"],
        handler_type=payload["type"],
        visibility=_visibility(payload),
        modifiers=_str_tuple(payload.get("modifiers")),
    )


def _namespace(payload: Mapping[str, Any]) -> NamespaceSymbol:
    return NamespaceSymbol(path=payload.get("path") or payload["name"])


def _unresolved(payload: Mapping[str, Any]) -> UnresolvedReference:
    return UnresolvedReference(
        module_path=payload["module_path"],
        member_name=payload["member_name"],
        reason=_as_str(payload.get("reason")),
    )


_BUILDERS: Dict[SymbolKind, Callable[[Mapping[str, Any]], Symbol]] = {
    SymbolKind.TYPE: _type,
    SymbolKind.METHOD: _method,
    SymbolKind.FIELD: _field,
    SymbolKind.PROPERTY: _property,
    SymbolKind.EVENT: _event,
    SymbolKind.NAMESPACE: _namespace,
    SymbolKind.UNRESOLVED: _unresolved,
}


def _parameters(value: Any) -> tuple[Parameter, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise InvalidSymbolError("'parameters' must be a list")
    parameters = []
    for item in value:
        if not isinstance(item, dict):
            raise InvalidSymbolError("Each parameter must be an object with 'name' and 'type'")
        parameters.append(
            Parameter(
                name=item.get("name", ""),
                type=item.get("type", ""),
                modifier=_as_str(item.get("modifier")),
                default=_as_str(item.get("default")),
            )
        )
    return tuple(parameters)


def _visibility(payload: Mapping[str, Any]) -> Visibility:
    return _enum(Visibility, payload.get("visibility", "public"), "visibility")


def _enum(enum_type: Any, value: Any, label: str) -> Any:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        raise InvalidSymbolError(f"Invalid {label} {value!r}") from None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value if isinstance(item, (str, int, float)))
    raise InvalidSymbolError(f"Expected a list of strings, got {type(value).__name__}")


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value) if isinstance(value, (str, int, float, bool)) else None


__all__ = [
    "BatchManifest",
    "load_manifest",
    "parse_item",
    "parse_manifest",
    "symbol_from_dict",
]
