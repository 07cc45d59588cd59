"""Writes a build report to a directory of HTML fragments."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import List

from .aggregator import BatchEntry
from .batch import BuildReport
from .logging import get_logger
from .postproc import NOT_DOCUMENTED, FragmentLinter, MarkerManager

SUMMARY_FILENAME = "summary.json"
_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def fragment_name(entry: BatchEntry) -> str:
    """Return the file name for an entry: input index prefix plus a slug of its identity."""
    slug = _SLUG_PATTERN.sub("-", entry.symbol_id.lower()).strip("-") or "symbol"
    return f"{entry.index:04d}-{slug[:80]}.html"


class OutputWriter:
    """Persists fragments and ``summary.json`` for a finished build."""

    def __init__(self, directory: Path, *, markers: bool = False) -> None:
        self.directory = directory
        self.markers = markers
        self.linter = FragmentLinter()
        self.marker_manager = MarkerManager()
        self.logger = get_logger("output")

    def render_fragment(self, entry: BatchEntry) -> str:
        body = entry.markup if entry.markup is not None else NOT_DOCUMENTED
        if self.markers:
            body = self.marker_manager.wrap(entry.symbol_id, body)
        return self.linter.lint(body)

    def write(self, report: BuildReport) -> List[Path]:
        self.directory.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for entry in report.entries:
            path = self.directory / fragment_name(entry)
            path.write_text(self.render_fragment(entry), encoding="utf-8")
            written.append(path)

        summary = report.summary.to_dict()
        summary["language"] = report.language.value
        summary["locale"] = report.locale
        summary["entries"] = [
            {
                "index": entry.index,
                "symbol": entry.symbol_id,
                "kind": entry.kind.value,
                "status": entry.status.value,
                "generator": entry.generator,
                "file": fragment_name(entry),
            }
            for entry in report.entries
        ]
        summary_path = self.directory / SUMMARY_FILENAME
        summary_path.write_text(json.dumps(summary, indent=2) + "\n", encoding="utf-8")
        self.logger.info("Wrote %d fragments to %s", len(written), self.directory)
        return written


__all__ = ["OutputWriter", "SUMMARY_FILENAME", "fragment_name"]
