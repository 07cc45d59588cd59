"""Tests for writing build reports to disk."""

from __future__ import annotations

import json
from pathlib import Path

from docpress.aggregator import ResultAggregator
from docpress.batch import BuildReport
from docpress.dispatcher import DispatchOutcome
from docpress.models import OutputLanguage, SymbolKind
from docpress.output import SUMMARY_FILENAME, OutputWriter, fragment_name
from docpress.postproc.markers import NOT_DOCUMENTED
from docpress.results import Markup, declined


def _report() -> BuildReport:
    aggregator = ResultAggregator(2)
    aggregator.record(
        0,
        DispatchOutcome(
            symbol_id="M:Contoso.Widget.Resize(System.Int32)",
            kind=SymbolKind.METHOD,
            result=Markup("<div>\r\n<p>Resize</p>  \r\n</div>"),
            generator="html",
        ),
    )
    aggregator.record(1, DispatchOutcome(symbol_id="T:Contoso.Hidden", kind=SymbolKind.TYPE, result=declined()))
    return BuildReport(
        entries=aggregator.entries(),
        summary=aggregator.summary(),
        language=OutputLanguage.CSHARP,
        locale="en-US",
    )


def test_fragment_name_uses_index_and_slug() -> None:
    entry = _report().entries[0]
    assert fragment_name(entry) == "0000-m-contoso-widget-resize-system-int32.html"


def test_writer_persists_fragments_and_summary(tmp_path: Path) -> None:
    target = tmp_path / "site"
    files = OutputWriter(target).write(_report())

    assert [path.name for path in files] == [
        "0000-m-contoso-widget-resize-system-int32.html",
        "0001-t-contoso-hidden.html",
    ]
    assert files[0].read_text(encoding="utf-8") == "<div>\n<p>Resize</p>\n</div>\n"
    assert files[1].read_text(encoding="utf-8") == NOT_DOCUMENTED + "\n"

    summary = json.loads((target / SUMMARY_FILENAME).read_text(encoding="utf-8"))
    assert summary["status"] == "success"
    assert summary["language"] == "csharp"
    assert summary["undocumented"] == ["T:Contoso.Hidden"]
    assert [entry["file"] for entry in summary["entries"]] == [path.name for path in files]
    assert summary["entries"][0]["generator"] == "html"


def test_writer_wraps_fragments_in_markers(tmp_path: Path) -> None:
    files = OutputWriter(tmp_path, markers=True).write(_report())
    content = files[1].read_text(encoding="utf-8")
    assert content == (
        "<!-- docpress:begin:T:Contoso.Hidden -->\n"
        f"{NOT_DOCUMENTED}\n"
        "<!-- docpress:end:T:Contoso.Hidden -->\n"
    )
