"""Symbol descriptors shared across docpress components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union


class InvalidSymbolError(ValueError):
    """Raised when a symbol descriptor is missing attributes required by its kind."""


class SymbolKind(str, Enum):
    """Documentable program element kinds."""

    TYPE = "type"
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"
    EVENT = "event"
    NAMESPACE = "namespace"
    UNRESOLVED = "unresolved"


class TypeCategory(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    STRUCT = "struct"
    DELEGATE = "delegate"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE = "private"


class OutputLanguage(str, Enum):
    """Syntax conventions a generator may follow when rendering code."""

    CSHARP = "csharp"
    VBNET = "vbnet"
    FSHARP = "fsharp"
    JSCRIPT = "jscript"

    @property
    def display_name(self) -> str:
        return _LANGUAGE_DISPLAY[self]

    @classmethod
    def parse(cls, value: Union[str, "OutputLanguage"]) -> "OutputLanguage":
        """Return the language for a value or one of its common aliases."""
        if isinstance(value, OutputLanguage):
            return value
        key = str(value).strip().lower()
        resolved = _LANGUAGE_ALIASES.get(key)
        if resolved is None:
            known = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown output language '{value}' (expected one of: {known})")
        return resolved


_LANGUAGE_DISPLAY = {
    OutputLanguage.CSHARP: "C#",
    OutputLanguage.VBNET: "VB.NET",
    OutputLanguage.FSHARP: "F#",
    OutputLanguage.JSCRIPT: "JScript",
}

_LANGUAGE_ALIASES = {
    "csharp": OutputLanguage.CSHARP,
    "c#": OutputLanguage.CSHARP,
    "cs": OutputLanguage.CSHARP,
    "vbnet": OutputLanguage.VBNET,
    "vb.net": OutputLanguage.VBNET,
    "vb": OutputLanguage.VBNET,
    "fsharp": OutputLanguage.FSHARP,
    "f#": OutputLanguage.FSHARP,
    "fs": OutputLanguage.FSHARP,
    "jscript": OutputLanguage.JSCRIPT,
    "jscript.net": OutputLanguage.JSCRIPT,
    "js": OutputLanguage.JSCRIPT,
}

MODIFIERS = frozenset(
    {
        "static",
        "abstract",
        "virtual",
        "override",
        "sealed",
        "readonly",
        "const",
        "extern",
        "new",
        "async",
    }
)

PARAMETER_MODIFIERS = frozenset({"ref", "out", "params", "in"})

CONSTRUCTOR_NAMES = frozenset({".ctor", "#ctor"})


@dataclass(frozen=True)
class Parameter:
    """A single method, indexer or delegate parameter."""

    name: str
    type: str
    modifier: Optional[str] = None
    default: Optional[str] = None

    def __post_init__(self) -> None:
        _require(self.name, "parameter name")
        _require(self.type, f"type of parameter '{self.name}'")
        if self.modifier is not None and self.modifier not in PARAMETER_MODIFIERS:
            raise InvalidSymbolError(f"Unknown parameter modifier '{self.modifier}'")


@dataclass(frozen=True)
class TypeSymbol:
    """A class, interface, enum, struct or delegate."""

    kind: ClassVar[SymbolKind] = SymbolKind.TYPE

    qualified_name: str
    category: TypeCategory = TypeCategory.CLASS
    visibility: Visibility = Visibility.PUBLIC
    generic_parameters: Tuple[str, ...] = ()
    base_type: Optional[str] = None
    interfaces: Tuple[str, ...] = ()
    modifiers: Tuple[str, ...] = ()
    # Delegates only.
    parameters: Tuple[Parameter, ...] = ()
    return_type: Optional[str] = None

    def __post_init__(self) -> None:
        _require(self.qualified_name, "type qualified name")
        _check_enum(self.category, TypeCategory, "type category")
        _check_enum(self.visibility, Visibility, "visibility")
        _check_modifiers(self.modifiers)
        if self.parameters and self.category is not TypeCategory.DELEGATE:
            raise InvalidSymbolError(
                f"Only delegates carry parameters ({self.qualified_name} is a {self.category.value})"
            )

    @property
    def namespace(self) -> str:
        return self.qualified_name.rpartition(".")[0]

    @property
    def name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    @property
    def identity(self) -> str:
        return f"T:{self.qualified_name}"


@dataclass(frozen=True)
class MethodSymbol:
    """A method or constructor of a declaring type."""

    kind: ClassVar[SymbolKind] = SymbolKind.METHOD

    declaring_type: str
    name: str
    parameters: Tuple[Parameter, ...] = ()
    return_type: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    modifiers: Tuple[str, ...] = ()
    generic_parameters: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(self.declaring_type, "declaring type")
        _require(self.name, "method name")
        _check_enum(self.visibility, Visibility, "visibility")
        _check_modifiers(self.modifiers)
        if self.is_constructor and self.return_type:
            raise InvalidSymbolError(f"Constructor of {self.declaring_type} cannot declare a return type")

    @property
    def is_constructor(self) -> bool:
        return self.name in CONSTRUCTOR_NAMES

    @property
    def identity(self) -> str:
        base = f"M:{self.declaring_type}.{self.name.replace('.', '#')}"
        if self.generic_parameters:
            base += f"``{len(self.generic_parameters)}"
        if not self.parameters:
            return base
        return f"{base}({','.join(parameter.type for parameter in self.parameters)})"


@dataclass(frozen=True)
class FieldSymbol:
    kind: ClassVar[SymbolKind] = SymbolKind.FIELD

    declaring_type: str
    name: str
    field_type: str
    visibility: Visibility = Visibility.PUBLIC
    modifiers: Tuple[str, ...] = ()
    constant_value: Optional[str] = None

    def __post_init__(self) -> None:
        _require(self.declaring_type, "declaring type")
        _require(self.name, "field name")
        _require(self.field_type, f"type of field '{self.name}'")
        _check_enum(self.visibility, Visibility, "visibility")
        _check_modifiers(self.modifiers)

    @property
    def identity(self) -> str:
        return f"F:{self.declaring_type}.{self.name}"


@dataclass(frozen=True)
class PropertySymbol:
    kind: ClassVar[SymbolKind] = SymbolKind.PROPERTY

    declaring_type: str
    name: str
    property_type: str
    visibility: Visibility = Visibility.PUBLIC
    modifiers: Tuple[str, ...] = ()
    can_read: bool = True
    can_write: bool = False
    parameters: Tuple[Parameter, ...] = ()

    def __post_init__(self) -> None:
        _require(self.declaring_type, "declaring type")
        _require(self.name, "property name")
        _require(self.property_type, f"type of property '{self.name}'")
        _check_enum(self.visibility, Visibility, "visibility")
        _check_modifiers(self.modifiers)
        if not (self.can_read or self.can_write):
            raise InvalidSymbolError(f"Property '{self.name}' must have a getter or a setter")

    @property
    def is_indexer(self) -> bool:
        return bool(self.parameters)

    @property
    def identity(self) -> str:
        base = f"P:{self.declaring_type}.{self.name}"
        if not self.parameters:
            return base
        return f"{base}({','.join(parameter.type for parameter in self.parameters)})"


@dataclass(frozen=True)
class EventSymbol:
    kind: ClassVar[SymbolKind] = SymbolKind.EVENT

    declaring_type: str
    name: str
    handler_type: str
    visibility: Visibility = Visibility.PUBLIC
    modifiers: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(self.declaring_type, "declaring type")
        _require(self.name, "event name")
        _require(self.handler_type, f"handler type of event '{self.name}'")
        _check_enum(self.visibility, Visibility, "visibility")
        _check_modifiers(self.modifiers)

    @property
    def identity(self) -> str:
        return f"E:{self.declaring_type}.{self.name}"


@dataclass(frozen=True)
class NamespaceSymbol:
    kind: ClassVar[SymbolKind] = SymbolKind.NAMESPACE

    path: str

    def __post_init__(self) -> None:
        _require(self.path, "namespace path")
        if any(not part for part in self.path.split(".")):
            raise InvalidSymbolError(f"Malformed namespace path '{self.path}'")

    @property
    def identity(self) -> str:
        return f"N:{self.path}"


@dataclass(frozen=True)
class UnresolvedReference:
    """A documented member the upstream extractor could not resolve."""

    kind: ClassVar[SymbolKind] = SymbolKind.UNRESOLVED

    module_path: str
    member_name: str
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        _require(self.module_path, "module path")
        _require(self.member_name, "member name")

    @property
    def identity(self) -> str:
        return self.member_name


Symbol = Union[
    TypeSymbol,
    MethodSymbol,
    FieldSymbol,
    PropertySymbol,
    EventSymbol,
    NamespaceSymbol,
    UnresolvedReference,
]

SYMBOL_TYPES: Tuple[type, ...] = (
    TypeSymbol,
    MethodSymbol,
    FieldSymbol,
    PropertySymbol,
    EventSymbol,
    NamespaceSymbol,
    UnresolvedReference,
)


def symbol_kind(symbol: object) -> SymbolKind:
    """Return the kind of a descriptor, rejecting anything that is not one."""
    if not isinstance(symbol, SYMBOL_TYPES):
        raise InvalidSymbolError(
            f"Expected a symbol descriptor, got {type(symbol).__name__}"
        )
    return symbol.kind  # type: ignore[union-attr]


def _require(value: object, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidSymbolError(f"Missing {label}")


def _check_enum(value: object, enum_type: type, label: str) -> None:
    if not isinstance(value, enum_type):
        raise InvalidSymbolError(f"Invalid {label}: {value!r}")


def _check_modifiers(modifiers: Tuple[str, ...]) -> None:
    unknown = [modifier for modifier in modifiers if modifier not in MODIFIERS]
    if unknown:
        raise InvalidSymbolError(f"Unknown modifiers: {', '.join(unknown)}")


__all__ = [
    "EventSymbol",
    "FieldSymbol",
    "InvalidSymbolError",
    "MethodSymbol",
    "NamespaceSymbol",
    "OutputLanguage",
    "Parameter",
    "PropertySymbol",
    "Symbol",
    "SymbolKind",
    "TypeCategory",
    "TypeSymbol",
    "UnresolvedReference",
    "Visibility",
    "symbol_kind",
]
