from __future__ import annotations

import datetime as dt
import json

from reportlab.lib.pagesizes import A4

from models import AuditResult
from processing import process_results
from report import (
    df_to_csv_bytes,
    df_to_html_bytes,
    draw_wrapped,
    export_report_pdf,
    report_path,
    save_report_json,
    suggestions_to_df,
)


def make_report(audit_result):
    return process_results(audit_result, "https://example.com", now=dt.datetime(2024, 5, 1, 9, 30, 0, 250000))


def test_report_path_replaces_colons(tmp_path, audit_result) -> None:
    path = report_path(make_report(audit_result), tmp_path)

    assert path == tmp_path / "accessibility-report-2024-05-01T09-30-00.250Z.json"


def test_save_report_json_is_pretty_printed(tmp_path, audit_result) -> None:
    report = make_report(audit_result)

    path = save_report_json(report, tmp_path / "out")

    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "url": "https://example.com"')
    data = json.loads(text)
    node = data["violations"]["wcag2a"][0]["nodes"][0]
    assert node == {"html": "<div id='n0'></div>", "failureSummary": "Fix node 0", "target": ["#n0"]}


def test_suggestions_dataframe_and_csv(audit_result) -> None:
    df = suggestions_to_df(make_report(audit_result))

    assert list(df["issueType"]) == ["image-alt", "image-alt", "region"]
    assert list(df["priority"]) == [1, 1, 2]
    assert df_to_csv_bytes(df).decode("utf-8").splitlines()[0].startswith("priority,issueType,description")


def test_empty_suggestions_dataframe_keeps_columns() -> None:
    df = suggestions_to_df(process_results(AuditResult(), "https://example.com"))

    assert df.empty
    assert "remediation" in df.columns


def test_html_export_mentions_url_and_counts(audit_result) -> None:
    report = make_report(audit_result)

    page = df_to_html_bytes(suggestions_to_df(report), report).decode("utf-8")

    assert "https://example.com" in page
    assert "critical 1" in page
    assert "<table" in page


def test_pdf_export_writes_file(tmp_path, audit_result) -> None:
    path = export_report_pdf(tmp_path / "report.pdf", make_report(audit_result))

    assert path.read_bytes().startswith(b"%PDF")


def test_html_export_escapes_rule_text() -> None:
    result = AuditResult.from_axe({
        "violations": [{
            "id": "document-title",
            "description": "Ensures each HTML document contains a non-empty <title> element",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.9/document-title?a=1&b=2",
            "impact": "serious",
            "tags": ["wcag2a"],
            "nodes": [{"html": "<html>", "target": ["html"]}],
        }],
    })
    report = process_results(result, "https://example.com")

    page = df_to_html_bytes(suggestions_to_df(report), report).decode("utf-8")

    assert "non-empty &lt;title&gt; element" in page
    assert "<title> element" not in page
    assert "href='https://dequeuniversity.com/rules/axe/4.9/document-title?a=1&amp;b=2'" in page


class RecordingCanvas:
    def __init__(self):
        self.lines = []
        self.pages = 1

    def drawString(self, x, y, text):
        self.lines.append((self.pages, y, text))

    def showPage(self):
        self.pages += 1

    def setFont(self, font, size):
        pass


def test_draw_wrapped_continues_on_next_page() -> None:
    c = RecordingCanvas()
    words = [f"word{i}" for i in range(120)]

    y = draw_wrapped(c, " ".join(words), 26, 70, 200)

    drawn = " ".join(text for _, _, text in c.lines).split()
    assert drawn == words
    assert c.pages > 1
    assert all(line_y >= 40 for _, line_y, _ in c.lines)
    assert y < A4[1] - 40


def test_pdf_export_with_many_long_suggestions(tmp_path) -> None:
    result = AuditResult.from_axe({
        "violations": [
            {"id": f"rule-{i}", "description": "long text " * 60, "impact": "minor", "tags": ["wcag2a"]}
            for i in range(10)
        ],
    })

    path = export_report_pdf(tmp_path / "long.pdf", process_results(result, "https://example.com"))

    assert path.read_bytes().startswith(b"%PDF")
