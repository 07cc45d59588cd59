"""Declaration syntax for the supported output languages."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from ..models import (
    EventSymbol,
    FieldSymbol,
    MethodSymbol,
    OutputLanguage,
    Parameter,
    PropertySymbol,
    Symbol,
    TypeCategory,
    TypeSymbol,
    Visibility,
)


class UnsupportedSyntax(ValueError):
    """Raised when a language cannot express a declaration."""


_KEYWORDS: Dict[str, tuple[str, str, str, str]] = {
    # csharp, vbnet, fsharp, jscript
    "System.Void": ("void", "void", "unit", "void"),
    "System.Object": ("object", "Object", "obj", "Object"),
    "System.String": ("string", "String", "string", "String"),
    "System.Boolean": ("bool", "Boolean", "bool", "boolean"),
    "System.Byte": ("byte", "Byte", "byte", "byte"),
    "System.SByte": ("sbyte", "SByte", "sbyte", "sbyte"),
    "System.Char": ("char", "Char", "char", "char"),
    "System.Int16": ("short", "Short", "int16", "short"),
    "System.UInt16": ("ushort", "UShort", "uint16", "ushort"),
    "System.Int32": ("int", "Integer", "int", "int"),
    "System.UInt32": ("uint", "UInteger", "uint32", "uint"),
    "System.Int64": ("long", "Long", "int64", "long"),
    "System.UInt64": ("ulong", "ULong", "uint64", "ulong"),
    "System.Single": ("float", "Single", "float32", "float"),
    "System.Double": ("double", "Double", "float", "double"),
    "System.Decimal": ("decimal", "Decimal", "decimal", "decimal"),
}

_LANGUAGE_INDEX = {
    OutputLanguage.CSHARP: 0,
    OutputLanguage.VBNET: 1,
    OutputLanguage.FSHARP: 2,
    OutputLanguage.JSCRIPT: 3,
}

_VB_VISIBILITY = {
    Visibility.PUBLIC: "Public",
    Visibility.PROTECTED: "Protected",
    Visibility.INTERNAL: "Friend",
    Visibility.PROTECTED_INTERNAL: "Protected Friend",
    Visibility.PRIVATE: "Private",
}

_VB_MEMBER_MODIFIERS = {
    "static": "Shared",
    "abstract": "MustOverride",
    "virtual": "Overridable",
    "override": "Overrides",
    "sealed": "NotOverridable",
    "readonly": "ReadOnly",
    "new": "Shadows",
    "async": "Async",
}

_VB_TYPE_MODIFIERS = {
    "abstract": "MustInherit",
    "sealed": "NotInheritable",
    "new": "Shadows",
}

_JS_MODIFIERS = {
    "static": "static",
    "abstract": "abstract",
    "override": "override",
    "sealed": "final",
    "new": "hide",
}


def format_type(name: str, language: OutputLanguage) -> str:
    """Return a type reference in the target language's spelling."""
    name = name.strip()
    if name.endswith("[]"):
        inner = format_type(name[:-2], language)
        return f"{inner}()" if language is OutputLanguage.VBNET else f"{inner}[]"
    if "<" in name and name.endswith(">"):
        if language is OutputLanguage.JSCRIPT:
            raise UnsupportedSyntax(f"JScript cannot reference generic type {name}")
        head, _, rest = name.partition("<")
        arguments = [format_type(argument, language) for argument in _split_arguments(rest[:-1])]
        base = _short_name(head)
        if language is OutputLanguage.VBNET:
            return f"{base}(Of {', '.join(arguments)})"
        return f"{base}<{', '.join(arguments)}>"
    keywords = _KEYWORDS.get(name)
    if keywords is not None:
        return keywords[_LANGUAGE_INDEX[language]]
    return _short_name(name)


def declaration(symbol: Symbol, language: OutputLanguage) -> str:
    """Return the declaration of ``symbol`` in ``language``.

    Raises ``UnsupportedSyntax`` when the language has no way to declare it.
    """
    formatter = _FORMATTERS[language].get(type(symbol))
    if formatter is None:
        raise UnsupportedSyntax(f"No {language.display_name} declaration for {type(symbol).__name__}")
    return formatter(symbol)


_NAMESPACE_KEYWORDS = {
    OutputLanguage.CSHARP: "namespace",
    OutputLanguage.VBNET: "Namespace",
    OutputLanguage.FSHARP: "namespace",
    OutputLanguage.JSCRIPT: "package",
}


def namespace_declaration(path: str, language: OutputLanguage) -> str:
    return f"{_NAMESPACE_KEYWORDS[language]} {path}"


def _short_name(name: str) -> str:
    return name.rpartition(".")[2].split("`", 1)[0]


def _split_arguments(text: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if current:
        parts.append("".join(current).strip())
    return [part for part in parts if part]


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _member_owner(symbol: MethodSymbol) -> str:
    return _short_name(symbol.declaring_type)


# ----------------------------------------------------------------------
# C#


def _cs_generics(names: Sequence[str]) -> str:
    return f"<{', '.join(names)}>" if names else ""


def _cs_parameters(parameters: Sequence[Parameter]) -> str:
    rendered = []
    for parameter in parameters:
        text = _join(parameter.modifier or "", format_type(parameter.type, OutputLanguage.CSHARP), parameter.name)
        if parameter.default is not None:
            text += f" = {parameter.default}"
        rendered.append(text)
    return ", ".join(rendered)


def _cs_type(symbol: TypeSymbol) -> str:
    if symbol.category is TypeCategory.DELEGATE:
        returns = format_type(symbol.return_type or "System.Void", OutputLanguage.CSHARP)
        return (
            _join(symbol.visibility.value, "delegate", returns, symbol.name + _cs_generics(symbol.generic_parameters))
            + f"({_cs_parameters(symbol.parameters)})"
        )
    header = _join(
        symbol.visibility.value,
        *symbol.modifiers,
        symbol.category.value,
        symbol.name + _cs_generics(symbol.generic_parameters),
    )
    bases = [format_type(name, OutputLanguage.CSHARP) for name in (symbol.base_type, *symbol.interfaces) if name]
    if bases:
        header += " : " + ", ".join(bases)
    return header


def _cs_method(symbol: MethodSymbol) -> str:
    if symbol.is_constructor:
        head = _join(symbol.visibility.value, *symbol.modifiers, _member_owner(symbol))
    else:
        returns = format_type(symbol.return_type or "System.Void", OutputLanguage.CSHARP)
        head = _join(
            symbol.visibility.value,
            *symbol.modifiers,
            returns,
            symbol.name + _cs_generics(symbol.generic_parameters),
        )
    return f"{head}({_cs_parameters(symbol.parameters)})"


def _cs_field(symbol: FieldSymbol) -> str:
    text = _join(symbol.visibility.value, *symbol.modifiers, format_type(symbol.field_type, OutputLanguage.CSHARP), symbol.name)
    if symbol.constant_value is not None:
        text += f" = {symbol.constant_value}"
    return text + ";"


def _cs_property(symbol: PropertySymbol) -> str:
    name = f"this[{_cs_parameters(symbol.parameters)}]" if symbol.is_indexer else symbol.name
    accessors = " ".join(accessor for accessor, enabled in (("get;", symbol.can_read), ("set;", symbol.can_write)) if enabled)
    return _join(
        symbol.visibility.value,
        *symbol.modifiers,
        format_type(symbol.property_type, OutputLanguage.CSHARP),
        name,
    ) + f" {{ {accessors} }}"


def _cs_event(symbol: EventSymbol) -> str:
    return _join(
        symbol.visibility.value,
        *symbol.modifiers,
        "event",
        format_type(symbol.handler_type, OutputLanguage.CSHARP),
        symbol.name,
    ) + ";"


# ----------------------------------------------------------------------
# VB.NET


def _vb_generics(names: Sequence[str]) -> str:
    return f"(Of {', '.join(names)})" if names else ""


def _vb_parameters(parameters: Sequence[Parameter]) -> str:
    rendered = []
    for parameter in parameters:
        if parameter.modifier == "params":
            passing = "ParamArray"
        elif parameter.modifier in {"ref", "out"}:
            passing = "ByRef"
        else:
            passing = "ByVal"
        text = _join(
            "Optional" if parameter.default is not None else "",
            passing,
            parameter.name,
            "As",
            format_type(parameter.type, OutputLanguage.VBNET),
        )
        if parameter.default is not None:
            text += f" = {parameter.default}"
        rendered.append(text)
    return ", ".join(rendered)


def _vb_modifiers(modifiers: Sequence[str], mapping: Dict[str, str]) -> List[str]:
    return [mapping[modifier] for modifier in modifiers if modifier in mapping]


def _vb_type(symbol: TypeSymbol) -> str:
    visibility = _VB_VISIBILITY[symbol.visibility]
    if symbol.category is TypeCategory.DELEGATE:
        generics = _vb_generics(symbol.generic_parameters)
        params = f"({_vb_parameters(symbol.parameters)})"
        if symbol.return_type and symbol.return_type != "System.Void":
            returns = format_type(symbol.return_type, OutputLanguage.VBNET)
            return f"{visibility} Delegate Function {symbol.name}{generics}{params} As {returns}"
        return f"{visibility} Delegate Sub {symbol.name}{generics}{params}"
    keyword = {
        TypeCategory.CLASS: "Class",
        TypeCategory.INTERFACE: "Interface",
        TypeCategory.ENUM: "Enum",
        TypeCategory.STRUCT: "Structure",
    }[symbol.category]
    if symbol.category is TypeCategory.CLASS and "static" in symbol.modifiers:
        keyword = "Module"
    lines = [
        _join(
            visibility,
            *_vb_modifiers(symbol.modifiers, _VB_TYPE_MODIFIERS),
            keyword,
            symbol.name + _vb_generics(symbol.generic_parameters),
        )
    ]
    if symbol.category is TypeCategory.INTERFACE:
        inherited = [name for name in (symbol.base_type, *symbol.interfaces) if name]
        if inherited:
            lines.append("    Inherits " + ", ".join(format_type(name, OutputLanguage.VBNET) for name in inherited))
        return "\n".join(lines)
    if symbol.base_type and symbol.category is TypeCategory.CLASS:
        lines.append(f"    Inherits {format_type(symbol.base_type, OutputLanguage.VBNET)}")
    if symbol.interfaces:
        lines.append("    Implements " + ", ".join(format_type(name, OutputLanguage.VBNET) for name in symbol.interfaces))
    return "\n".join(lines)


def _vb_method(symbol: MethodSymbol) -> str:
    head = _join(_VB_VISIBILITY[symbol.visibility], *_vb_modifiers(symbol.modifiers, _VB_MEMBER_MODIFIERS))
    params = f"({_vb_parameters(symbol.parameters)})"
    if symbol.is_constructor:
        return f"{head} Sub New{params}"
    generics = _vb_generics(symbol.generic_parameters)
    if symbol.return_type and symbol.return_type != "System.Void":
        returns = format_type(symbol.return_type, OutputLanguage.VBNET)
        return f"{head} Function {symbol.name}{generics}{params} As {returns}"
    return f"{head} Sub {symbol.name}{generics}{params}"


def _vb_field(symbol: FieldSymbol) -> str:
    modifiers = [modifier for modifier in symbol.modifiers if modifier != "const"]
    keyword = "Const" if "const" in symbol.modifiers else ""
    text = _join(
        _VB_VISIBILITY[symbol.visibility],
        *_vb_modifiers(modifiers, _VB_MEMBER_MODIFIERS),
        keyword,
        symbol.name,
        "As",
        format_type(symbol.field_type, OutputLanguage.VBNET),
    )
    if symbol.constant_value is not None:
        text += f" = {symbol.constant_value}"
    return text


def _vb_property(symbol: PropertySymbol) -> str:
    access = ""
    if symbol.can_read and not symbol.can_write:
        access = "ReadOnly"
    elif symbol.can_write and not symbol.can_read:
        access = "WriteOnly"
    modifiers = [modifier for modifier in symbol.modifiers if modifier != "readonly"]
    name = symbol.name
    if symbol.is_indexer:
        name = f"Item({_vb_parameters(symbol.parameters)})"
    return _join(
        "Default" if symbol.is_indexer else "",
        _VB_VISIBILITY[symbol.visibility],
        *_vb_modifiers(modifiers, _VB_MEMBER_MODIFIERS),
        access,
        "Property",
        name,
        "As",
        format_type(symbol.property_type, OutputLanguage.VBNET),
    )


def _vb_event(symbol: EventSymbol) -> str:
    return _join(
        _VB_VISIBILITY[symbol.visibility],
        *_vb_modifiers(symbol.modifiers, _VB_MEMBER_MODIFIERS),
        "Event",
        symbol.name,
        "As",
        format_type(symbol.handler_type, OutputLanguage.VBNET),
    )


# ----------------------------------------------------------------------
# F#


def _fs_generics(names: Sequence[str]) -> str:
    return "<" + ", ".join("'" + name for name in names) + ">" if names else ""


def _fs_signature(parameters: Sequence[Parameter], returns: str) -> str:
    if not parameters:
        return f"unit -> {returns}"
    rendered = []
    for parameter in parameters:
        type_name = format_type(parameter.type, OutputLanguage.FSHARP)
        if parameter.modifier in {"ref", "out"}:
            type_name += " byref"
        prefix = "?" if parameter.default is not None else ""
        rendered.append(f"{prefix}{parameter.name}:{type_name}")
    return f"{' * '.join(rendered)} -> {returns}"


def _fs_member_keyword(modifiers: Sequence[str], visibility: Visibility) -> str:
    if "abstract" in modifiers:
        keyword = "abstract"
    elif "override" in modifiers:
        keyword = "override"
    else:
        keyword = "member"
    if "static" in modifiers:
        keyword = f"static {keyword}"
    if visibility in {Visibility.INTERNAL, Visibility.PRIVATE}:
        keyword += f" {visibility.value}"
    return keyword


def _fs_type(symbol: TypeSymbol) -> str:
    name = symbol.name + _fs_generics(symbol.generic_parameters)
    if symbol.category is TypeCategory.DELEGATE:
        arguments = " * ".join(format_type(parameter.type, OutputLanguage.FSHARP) for parameter in symbol.parameters) or "unit"
        returns = format_type(symbol.return_type or "System.Void", OutputLanguage.FSHARP)
        return f"type {name} = delegate of {arguments} -> {returns}"
    lines: List[str] = []
    if "abstract" in symbol.modifiers and symbol.category is TypeCategory.CLASS:
        lines.append("[<AbstractClass>]")
    if "sealed" in symbol.modifiers:
        lines.append("[<Sealed>]")
    if symbol.category is TypeCategory.STRUCT:
        lines.append("[<Struct>]")
    lines.append(f"type {name} =")
    if symbol.category is TypeCategory.ENUM:
        lines.append("    | (* members *)")
        return "\n".join(lines)
    if symbol.category is TypeCategory.INTERFACE:
        for inherited in (symbol.base_type, *symbol.interfaces):
            if inherited:
                lines.append(f"    inherit {format_type(inherited, OutputLanguage.FSHARP)}")
        if len(lines) == 1:
            lines.append("    interface end")
        return "\n".join(lines)
    if symbol.base_type:
        lines.append(f"    inherit {format_type(symbol.base_type, OutputLanguage.FSHARP)}")
    for interface in symbol.interfaces:
        lines.append(f"    interface {format_type(interface, OutputLanguage.FSHARP)}")
    if lines[-1].endswith("="):
        lines.append("    class end" if symbol.category is TypeCategory.CLASS else "    struct end")
    return "\n".join(lines)


def _fs_method(symbol: MethodSymbol) -> str:
    if symbol.is_constructor:
        return f"new : {_fs_signature(symbol.parameters, _member_owner(symbol))}"
    returns = format_type(symbol.return_type or "System.Void", OutputLanguage.FSHARP)
    keyword = _fs_member_keyword(symbol.modifiers, symbol.visibility)
    name = symbol.name + _fs_generics(symbol.generic_parameters)
    return f"{keyword} {name} : {_fs_signature(symbol.parameters, returns)}"


def _fs_field(symbol: FieldSymbol) -> str:
    type_name = format_type(symbol.field_type, OutputLanguage.FSHARP)
    if "const" in symbol.modifiers and symbol.constant_value is not None:
        return f"[<Literal>]\nlet {symbol.name} : {type_name} = {symbol.constant_value}"
    mutable = "" if "readonly" in symbol.modifiers or "const" in symbol.modifiers else "mutable"
    return _join("static" if "static" in symbol.modifiers else "", "val", mutable, f"{symbol.name} : {type_name}")


def _fs_property(symbol: PropertySymbol) -> str:
    keyword = _fs_member_keyword(symbol.modifiers, symbol.visibility)
    type_name = format_type(symbol.property_type, OutputLanguage.FSHARP)
    if symbol.is_indexer:
        indexes = " * ".join(format_type(parameter.type, OutputLanguage.FSHARP) for parameter in symbol.parameters)
        type_name = f"{indexes} -> {type_name}"
        name = "Item"
    else:
        name = symbol.name
    accessors = ", ".join(accessor for accessor, enabled in (("get", symbol.can_read), ("set", symbol.can_write)) if enabled)
    return f"{keyword} {name} : {type_name} with {accessors}"


def _fs_event(symbol: EventSymbol) -> str:
    keyword = _fs_member_keyword(symbol.modifiers, symbol.visibility)
    handler = format_type(symbol.handler_type, OutputLanguage.FSHARP)
    return f"[<CLIEvent>]\n{keyword} {symbol.name} : IEvent<{handler}, EventArgs>"


# ----------------------------------------------------------------------
# JScript


def _js_reject_generics(names: Sequence[str], owner: str) -> None:
    if names:
        raise UnsupportedSyntax(f"JScript cannot declare generic {owner}")


def _js_visibility(visibility: Visibility) -> str:
    return "protected internal" if visibility is Visibility.PROTECTED_INTERNAL else visibility.value


def _js_parameters(parameters: Sequence[Parameter]) -> str:
    rendered = []
    for parameter in parameters:
        if parameter.modifier in {"ref", "out"}:
            raise UnsupportedSyntax(f"JScript cannot declare {parameter.modifier} parameter '{parameter.name}'")
        prefix = "... " if parameter.modifier == "params" else ""
        rendered.append(f"{prefix}{parameter.name} : {format_type(parameter.type, OutputLanguage.JSCRIPT)}")
    return ", ".join(rendered)


def _js_modifiers(modifiers: Sequence[str]) -> List[str]:
    return [_JS_MODIFIERS[modifier] for modifier in modifiers if modifier in _JS_MODIFIERS]


def _js_type(symbol: TypeSymbol) -> str:
    _js_reject_generics(symbol.generic_parameters, symbol.name)
    if symbol.category in {TypeCategory.STRUCT, TypeCategory.DELEGATE}:
        raise UnsupportedSyntax(f"JScript cannot declare a {symbol.category.value}")
    header = _join(_js_visibility(symbol.visibility), *_js_modifiers(symbol.modifiers), symbol.category.value, symbol.name)
    if symbol.category is TypeCategory.INTERFACE:
        inherited = [name for name in (symbol.base_type, *symbol.interfaces) if name]
        if inherited:
            header += " extends " + ", ".join(format_type(name, OutputLanguage.JSCRIPT) for name in inherited)
        return header
    if symbol.base_type:
        header += f" extends {format_type(symbol.base_type, OutputLanguage.JSCRIPT)}"
    if symbol.interfaces:
        header += " implements " + ", ".join(format_type(name, OutputLanguage.JSCRIPT) for name in symbol.interfaces)
    return header


def _js_method(symbol: MethodSymbol) -> str:
    _js_reject_generics(symbol.generic_parameters, symbol.name)
    name = _member_owner(symbol) if symbol.is_constructor else symbol.name
    text = _join(_js_visibility(symbol.visibility), *_js_modifiers(symbol.modifiers), "function", name)
    text += f"({_js_parameters(symbol.parameters)})"
    if not symbol.is_constructor and symbol.return_type and symbol.return_type != "System.Void":
        text += f" : {format_type(symbol.return_type, OutputLanguage.JSCRIPT)}"
    return text


def _js_field(symbol: FieldSymbol) -> str:
    keyword = "const" if "const" in symbol.modifiers else "var"
    modifiers = [modifier for modifier in symbol.modifiers if modifier not in {"const", "readonly"}]
    text = _join(_js_visibility(symbol.visibility), *_js_modifiers(modifiers), keyword, symbol.name)
    text += f" : {format_type(symbol.field_type, OutputLanguage.JSCRIPT)}"
    if symbol.constant_value is not None:
        text += f" = {symbol.constant_value}"
    return text


def _js_property(symbol: PropertySymbol) -> str:
    if symbol.is_indexer:
        raise UnsupportedSyntax("JScript cannot declare indexers")
    head = _join(_js_visibility(symbol.visibility), *_js_modifiers(symbol.modifiers), "function")
    type_name = format_type(symbol.property_type, OutputLanguage.JSCRIPT)
    lines = []
    if symbol.can_read:
        lines.append(f"{head} get {symbol.name}() : {type_name}")
    if symbol.can_write:
        lines.append(f"{head} set {symbol.name}(value : {type_name})")
    return "\n".join(lines)


def _js_event(symbol: EventSymbol) -> str:
    raise UnsupportedSyntax("JScript cannot declare events")


_FORMATTERS: Dict[OutputLanguage, Dict[type, Callable[..., str]]] = {
    OutputLanguage.CSHARP: {
        TypeSymbol: _cs_type,
        MethodSymbol: _cs_method,
        FieldSymbol: _cs_field,
        PropertySymbol: _cs_property,
        EventSymbol: _cs_event,
    },
    OutputLanguage.VBNET: {
        TypeSymbol: _vb_type,
        MethodSymbol: _vb_method,
        FieldSymbol: _vb_field,
        PropertySymbol: _vb_property,
        EventSymbol: _vb_event,
    },
    OutputLanguage.FSHARP: {
        TypeSymbol: _fs_type,
        MethodSymbol: _fs_method,
        FieldSymbol: _fs_field,
        PropertySymbol: _fs_property,
        EventSymbol: _fs_event,
    },
    OutputLanguage.JSCRIPT: {
        TypeSymbol: _js_type,
        MethodSymbol: _js_method,
        FieldSymbol: _js_field,
        PropertySymbol: _js_property,
        EventSymbol: _js_event,
    },
}


__all__ = ["UnsupportedSyntax", "declaration", "format_type", "namespace_declaration"]
