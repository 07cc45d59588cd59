"""Generation result variants returned by page elements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class NotApplicableReason(str, Enum):
    DECLINED = "declined"
    NO_CAPABLE_GENERATOR = "no_capable_generator"


@dataclass(frozen=True)
class Markup:
    """Embeddable markup produced for a symbol."""

    content: str

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


@dataclass(frozen=True)
class NotApplicable:
    """The symbol/language combination was not handled."""

    reason: NotApplicableReason = NotApplicableReason.DECLINED
    detail: str = ""


@dataclass(frozen=True)
class Failure:
    """A generator broke while trying to render a symbol."""

    generator: str
    message: str
    error_type: str = "GenerationError"


GenerationResult = Union[Markup, NotApplicable, Failure]

RESULT_TYPES = (Markup, NotApplicable, Failure)


def declined(detail: str = "") -> NotApplicable:
    return NotApplicable(reason=NotApplicableReason.DECLINED, detail=detail)


__all__ = [
    "Failure",
    "GenerationResult",
    "Markup",
    "NotApplicable",
    "NotApplicableReason",
    "RESULT_TYPES",
    "declined",
]
