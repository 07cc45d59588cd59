"""Worker-pool batch driver for documentation builds."""

from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .aggregator import BatchEntry, BuildSummary, ResultAggregator
from .dispatcher import DispatchOutcome, Dispatcher
from .docnode import DocumentationNode
from .logging import get_logger
from .models import OutputLanguage, Symbol, symbol_kind


@dataclass
class BatchItem:
    """A symbol with the documentation tree attached to it."""

    symbol: Symbol
    documentation: Optional[DocumentationNode] = None


@dataclass
class BuildReport:
    """Ordered entries plus the summary of one batch run."""

    entries: List[BatchEntry]
    summary: BuildSummary
    language: OutputLanguage
    locale: Optional[str]


class BatchRunner:
    """Generates a batch of symbols on a bounded worker pool.

    With ``max_failures`` set, no new symbols are submitted once that many
    have failed; symbols already in flight still complete and the rest are
    recorded as skipped.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        workers: int = 4,
        max_failures: Optional[int] = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if max_failures is not None and max_failures < 1:
            raise ValueError("max_failures must be at least 1 when set")
        self.dispatcher = dispatcher
        self.workers = workers
        self.max_failures = max_failures
        self.logger = get_logger("batch")

    def run(
        self,
        items: Sequence[BatchItem],
        language: OutputLanguage | str,
        locale: Optional[str] = None,
    ) -> BuildReport:
        language = OutputLanguage.parse(language)
        # Structurally invalid descriptors are caller errors; reject before any work starts.
        for item in items:
            symbol_kind(item.symbol)

        aggregator = ResultAggregator(len(items))
        self.logger.info(
            "Generating %d symbols (%s, workers=%d)", len(items), language.value, self.workers
        )
        with self.dispatcher.registry.batch():
            if self.workers == 1:
                self._run_inline(items, language, locale, aggregator)
            else:
                self._run_pooled(items, language, locale, aggregator)

        summary = aggregator.summary()
        self.logger.info(
            "Build %s: %d markup, %d not applicable, %d without generator, %d failed, %d skipped",
            summary.status.value,
            summary.counts["markup"],
            summary.counts["not_applicable"],
            summary.counts["no_capable_generator"],
            summary.counts["failure"],
            summary.counts["skipped"],
        )
        return BuildReport(
            entries=aggregator.entries(),
            summary=summary,
            language=language,
            locale=locale,
        )

    def _limit_reached(self, aggregator: ResultAggregator) -> bool:
        return self.max_failures is not None and aggregator.failure_count >= self.max_failures

    def _skip_rest(self, items: Sequence[BatchItem], start: int, aggregator: ResultAggregator) -> None:
        self.logger.warning(
            "Stopping after %d failures; skipping %d remaining symbols",
            aggregator.failure_count,
            len(items) - start,
        )
        aggregator.mark_aborted()
        for index in range(start, len(items)):
            aggregator.skip(index, items[index].symbol)

    def _dispatch(self, item: BatchItem, language: OutputLanguage, locale: Optional[str]) -> DispatchOutcome:
        return self.dispatcher.dispatch(item.symbol, item.documentation, language, locale)

    def _run_inline(
        self,
        items: Sequence[BatchItem],
        language: OutputLanguage,
        locale: Optional[str],
        aggregator: ResultAggregator,
    ) -> None:
        for index, item in enumerate(items):
            if self._limit_reached(aggregator):
                self._skip_rest(items, index, aggregator)
                return
            aggregator.record(index, self._dispatch(item, language, locale))

    def _run_pooled(
        self,
        items: Sequence[BatchItem],
        language: OutputLanguage,
        locale: Optional[str],
        aggregator: ResultAggregator,
    ) -> None:
        pending: Dict[Future[DispatchOutcome], int] = {}
        next_index = 0
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="docpress") as pool:
            while next_index < len(items) or pending:
                while next_index < len(items) and len(pending) < self.workers:
                    if self._limit_reached(aggregator):
                        break
                    future = pool.submit(self._dispatch, items[next_index], language, locale)
                    pending[future] = next_index
                    next_index += 1
                if not pending:
                    break
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    index = pending.pop(future)
                    aggregator.record(index, future.result())
        if next_index < len(items):
            self._skip_rest(items, next_index, aggregator)


__all__ = ["BatchItem", "BatchRunner", "BuildReport"]
