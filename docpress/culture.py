"""Locale normalisation and default resolution."""

from __future__ import annotations

import locale as _locale
import re
from typing import Optional

DEFAULT_LOCALE = "en-US"

_TAG_PATTERN = re.compile(r"^([A-Za-z]{2,3})(?:[-_]([A-Za-z0-9]{2,8}))?")


def normalize_locale(value: Optional[str]) -> Optional[str]:
    """Return a BCP 47 style tag (``de-DE``) or None when unrecognisable."""
    if not value:
        return None
    cleaned = value.strip().split(".", 1)[0].split("@", 1)[0]
    if cleaned.upper() in {"C", "POSIX"}:
        return None
    match = _TAG_PATTERN.match(cleaned)
    if not match:
        return None
    language, region = match.group(1).lower(), match.group(2)
    if not region:
        return language
    return f"{language}-{region.upper() if len(region) == 2 else region}"


def process_locale() -> Optional[str]:
    try:
        value, _ = _locale.getlocale()
    except ValueError:
        return None
    return normalize_locale(value)


def resolve_locale(value: Optional[str]) -> str:
    """Return the explicit locale, else the process locale, else ``en-US``."""
    return normalize_locale(value) or process_locale() or DEFAULT_LOCALE


def language_of(tag: str) -> str:
    return tag.split("-", 1)[0].lower()


__all__ = ["DEFAULT_LOCALE", "language_of", "normalize_locale", "process_locale", "resolve_locale"]
