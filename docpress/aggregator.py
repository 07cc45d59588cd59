"""Collects per-symbol outcomes for a batch and summarises the build."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .dispatcher import DispatchOutcome
from .logging import get_logger
from .models import Symbol, SymbolKind
from .postproc.markup import MarkupValidator
from .results import Failure, GenerationResult, Markup, NotApplicable, NotApplicableReason


class EntryStatus(str, Enum):
    MARKUP = "markup"
    NOT_APPLICABLE = "not_applicable"
    NO_CAPABLE_GENERATOR = "no_capable_generator"
    FAILURE = "failure"
    SKIPPED = "skipped"


class BuildStatus(str, Enum):
    SUCCESS = "success"
    NOOP = "noop"
    FAILED = "failed"


@dataclass
class BatchEntry:
    """Outcome recorded for one input symbol."""

    index: int
    symbol_id: str
    kind: SymbolKind
    status: EntryStatus
    result: Optional[GenerationResult] = None
    generator: Optional[str] = None
    failures: List[Failure] = field(default_factory=list)

    @property
    def markup(self) -> Optional[str]:
        return self.result.content if isinstance(self.result, Markup) else None


@dataclass
class BuildSummary:
    """Build-level statistics for reporting."""

    status: BuildStatus
    total: int
    counts: Dict[str, int]
    failures: List[Dict[str, object]]
    undocumented: List[str]
    aborted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is BuildStatus.SUCCESS

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status.value,
            "total": self.total,
            "counts": dict(self.counts),
            "failures": [dict(item) for item in self.failures],
            "undocumented": list(self.undocumented),
            "aborted": self.aborted,
        }


class ResultAggregator:
    """Order-preserving, thread-safe collector of batch outcomes.

    Entries are slotted by input index, so arrival order from a worker pool
    never affects the output order.
    """

    def __init__(self, total: int, *, validator: MarkupValidator | None = None) -> None:
        self._slots: List[Optional[BatchEntry]] = [None] * total
        self._lock = threading.Lock()
        self._failure_count = 0
        self._aborted = False
        self.validator = validator or MarkupValidator()
        self.logger = get_logger("aggregator")

    def record(self, index: int, outcome: DispatchOutcome) -> BatchEntry:
        result = outcome.result
        failures = list(outcome.failures)
        if isinstance(result, Markup):
            issues = self.validator.validate(result.content)
            if issues:
                self.logger.warning(
                    "Discarding malformed markup from %s for %s: %s",
                    outcome.generator,
                    outcome.symbol_id,
                    "; ".join(issues),
                )
                result = Failure(
                    generator=outcome.generator or "unknown",
                    message="malformed markup: " + "; ".join(issues),
                    error_type="MalformedMarkup",
                )
                failures.append(result)
        entry = BatchEntry(
            index=index,
            symbol_id=outcome.symbol_id,
            kind=outcome.kind,
            status=_status_for(result),
            result=result,
            generator=outcome.generator if isinstance(result, Markup) else None,
            failures=failures,
        )
        self._store(entry)
        return entry

    def skip(self, index: int, symbol: Symbol) -> BatchEntry:
        entry = BatchEntry(
            index=index,
            symbol_id=symbol.identity,
            kind=symbol.kind,
            status=EntryStatus.SKIPPED,
        )
        self._store(entry)
        return entry

    def mark_aborted(self) -> None:
        self._aborted = True

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def entries(self) -> List[BatchEntry]:
        """Return recorded entries in input order."""
        with self._lock:
            missing = [index for index, entry in enumerate(self._slots) if entry is None]
            if missing:
                raise RuntimeError(f"Batch incomplete: {len(missing)} symbols have no recorded outcome")
            return [entry for entry in self._slots if entry is not None]

    def summary(self) -> BuildSummary:
        entries = self.entries()
        counts = {status.value: 0 for status in EntryStatus}
        failures: List[Dict[str, object]] = []
        undocumented: List[str] = []
        for entry in entries:
            counts[entry.status.value] += 1
            if entry.status is not EntryStatus.MARKUP:
                undocumented.append(entry.symbol_id)
            for failure in entry.failures:
                failures.append(
                    {
                        "symbol": entry.symbol_id,
                        "generator": failure.generator,
                        "error_type": failure.error_type,
                        "message": failure.message,
                        "recovered": entry.status is not EntryStatus.FAILURE,
                    }
                )
        if counts[EntryStatus.FAILURE.value]:
            status = BuildStatus.FAILED
        elif counts[EntryStatus.MARKUP.value]:
            status = BuildStatus.SUCCESS
        else:
            status = BuildStatus.NOOP
        return BuildSummary(
            status=status,
            total=len(entries),
            counts=counts,
            failures=failures,
            undocumented=undocumented,
            aborted=self._aborted,
        )

    def _store(self, entry: BatchEntry) -> None:
        with self._lock:
            if self._slots[entry.index] is not None:
                raise RuntimeError(f"Outcome for input #{entry.index} recorded twice")
            self._slots[entry.index] = entry
            if entry.status is EntryStatus.FAILURE:
                self._failure_count += 1


def _status_for(result: GenerationResult) -> EntryStatus:
    if isinstance(result, Markup):
        return EntryStatus.MARKUP
    if isinstance(result, Failure):
        return EntryStatus.FAILURE
    if isinstance(result, NotApplicable) and result.reason is NotApplicableReason.NO_CAPABLE_GENERATOR:
        return EntryStatus.NO_CAPABLE_GENERATOR
    return EntryStatus.NOT_APPLICABLE


__all__ = [
    "BatchEntry",
    "BuildStatus",
    "BuildSummary",
    "EntryStatus",
    "ResultAggregator",
]
