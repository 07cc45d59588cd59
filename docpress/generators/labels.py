"""Localised headings used by the built-in page element."""

from __future__ import annotations

from typing import Dict, Mapping

from ..culture import language_of

_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "syntax": "Syntax",
        "parameters": "Parameters",
        "type_parameters": "Type Parameters",
        "returns": "Return Value",
        "value": "Property Value",
        "remarks": "Remarks",
        "examples": "Examples",
        "exceptions": "Exceptions",
        "see_also": "See Also",
        "namespace": "Namespace",
        "inheritance": "Inheritance",
        "implements": "Implements",
        "not_available": "Documentation not available",
        "not_available_detail": "The member {member} from {module} could not be resolved.",
        "no_description": "No description provided.",
        "constructor": "Constructor",
        "type": "Type",
        "method": "Method",
        "field": "Field",
        "property": "Property",
        "event": "Event",
        "class": "Class",
        "interface": "Interface",
        "enum": "Enumeration",
        "struct": "Structure",
        "delegate": "Delegate",
    },
    "de": {
        "syntax": "Syntax",
        "parameters": "Parameter",
        "type_parameters": "Typparameter",
        "returns": "Rückgabewert",
        "value": "Eigenschaftswert",
        "remarks": "Hinweise",
        "examples": "Beispiele",
        "exceptions": "Ausnahmen",
        "see_also": "Siehe auch",
        "namespace": "Namespace",
        "inheritance": "Vererbung",
        "implements": "Implementiert",
        "not_available": "Dokumentation nicht verfügbar",
        "not_available_detail": "Das Element {member} aus {module} konnte nicht aufgelöst werden.",
        "no_description": "Keine Beschreibung vorhanden.",
        "constructor": "Konstruktor",
        "type": "Typ",
        "method": "Methode",
        "field": "Feld",
        "property": "Eigenschaft",
        "event": "Ereignis",
        "class": "Klasse",
        "interface": "Schnittstelle",
        "enum": "Enumeration",
        "struct": "Struktur",
        "delegate": "Delegat",
    },
    "fr": {
        "syntax": "Syntaxe",
        "parameters": "Paramètres",
        "type_parameters": "Paramètres de type",
        "returns": "Valeur de retour",
        "value": "Valeur de propriété",
        "remarks": "Remarques",
        "examples": "Exemples",
        "exceptions": "Exceptions",
        "see_also": "Voir aussi",
        "namespace": "Espace de noms",
        "inheritance": "Héritage",
        "implements": "Implémente",
        "not_available": "Documentation non disponible",
        "not_available_detail": "Le membre {member} de {module} n'a pas pu être résolu.",
        "no_description": "Aucune description fournie.",
        "constructor": "Constructeur",
        "type": "Type",
        "method": "Méthode",
        "field": "Champ",
        "property": "Propriété",
        "event": "Événement",
        "class": "Classe",
        "interface": "Interface",
        "enum": "Énumération",
        "struct": "Structure",
        "delegate": "Délégué",
    },
}


class LabelCatalog(Mapping[str, str]):
    """Heading lookup for a locale, falling back to English per key."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        self._labels = _LABELS.get(language_of(locale), {})
        self._fallback = _LABELS["en"]

    def __getitem__(self, key: str) -> str:
        if key in self._labels:
            return self._labels[key]
        return self._fallback[key]

    def __iter__(self):
        return iter(self._fallback)

    def __len__(self) -> int:
        return len(self._fallback)


def supported_label_languages() -> list[str]:
    return sorted(_LABELS)


__all__ = ["LabelCatalog", "supported_label_languages"]
