from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Union

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from models import Report
from utils import report_filename

PathLike = Union[str, Path]

SUGGESTION_COLUMNS = [
    "priority", "issueType", "description", "wcagCriteria", "level",
    "impact", "affectedElements", "remediation", "helpUrl",
]


def report_path(report: Report, output_dir: PathLike = ".") -> Path:
    return Path(output_dir) / report_filename(report.timestamp)


def save_report_json(report: Report, output_dir: PathLike = ".") -> Path:
    """Write the full report, pretty-printed, and return the file path."""
    path = report_path(report, output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    return path


# -----------------------------
# Tabular exports
# -----------------------------
def suggestions_to_df(report: Report) -> pd.DataFrame:
    if not report.suggestions:
        return pd.DataFrame(columns=SUGGESTION_COLUMNS)
    df = pd.DataFrame([s.to_dict() for s in report.suggestions])
    return df[SUGGESTION_COLUMNS]


def df_to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def df_to_html_bytes(df: pd.DataFrame, report: Report, title: str = "Accessibility Report") -> bytes:
    s = report.summary
    breakdown = " ".join(
        f"<span class='badge {level}'>{level} {count}</span>"
        for level, count in s.impact_breakdown.items()
    )
    # axe descriptions carry literal tags such as "<title>"
    df2 = df.astype(str)
    for col in df2.columns:
        df2[col] = df2[col].map(html.escape)
    if "helpUrl" in df2.columns:
        df2["helpUrl"] = df2["helpUrl"].apply(
            lambda u: f"<a href='{u}' target='_blank' rel='noopener noreferrer'>{u}</a>"
        )
    table = df2.to_html(escape=False, index=False)
    page = f"""<!doctype html><html><head><meta charset="utf-8"><title>{html.escape(title)}</title>
    <style>
      body {{ font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin:24px; }}
      table {{ border-collapse: collapse; width: 100%; }}
      th, td {{ text-align: left; padding: 8px; border-bottom: 1px solid #e2e8f0; vertical-align: top; }}
      th {{ background:#f8fafc; }}
      .badge {{ display:inline-block; padding:2px 8px; border-radius:999px; font-size:12px; font-weight:700; }}
      .critical {{ background:#fee2e2; color:#991b1b; }}
      .serious  {{ background:#ffedd5; color:#9a3412; }}
      .moderate {{ background:#fef3c7; color:#92400e; }}
      .minor    {{ background:#ecfeff; color:#155e75; }}
    </style></head>
    <body>
      <h1>{html.escape(title)}</h1>
      <p>URL: <a href="{html.escape(report.url)}">{html.escape(report.url)}</a> &middot; Generated: {report.timestamp}</p>
      <p><strong>{s.total_violations}</strong> violation(s), {s.total_passes} pass(es),
         {s.total_incomplete} incomplete. {breakdown}</p>
      {table}
    </body></html>"""
    return page.encode("utf-8")


# -----------------------------
# PDF
# -----------------------------
def draw_wrapped(c, text, x, y, max_width, leading=14, font="Helvetica", size=11, bottom=40, top=A4[1] - 40):
    from reportlab.pdfbase.pdfmetrics import stringWidth
    lines = []
    line = ""
    for w in text.split():
        trial = (line + " " + w).strip()
        if not line or stringWidth(trial, font, size) <= max_width:
            line = trial
        else:
            lines.append(line)
            line = w
    if line:
        lines.append(line)
    for line in lines:
        if y < bottom:
            c.showPage(); y = top
            c.setFont(font, size)
        c.drawString(x, y, line)
        y -= leading
    return y


def export_report_pdf(path: PathLike, report: Report, max_suggestions: int = 25) -> Path:
    c = canvas.Canvas(str(path), pagesize=A4)
    W, H = A4

    # Header
    c.setFillColor(colors.HexColor("#0B5ED7"))
    c.rect(0, H - 30, W, 30, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20, H - 22, "Accessibility Check Report")

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 11)
    y = H - 50
    s = report.summary
    y = draw_wrapped(c, f"Scanned URL: {report.url}", 20, y, W - 40)
    c.drawString(20, y, f"Generated: {report.timestamp}")
    y -= 16
    c.drawString(20, y, f"Violations: {s.total_violations} · Passes: {s.total_passes} · Incomplete: {s.total_incomplete}")
    y -= 16
    breakdown = ", ".join(f"{level} {count}" for level, count in s.impact_breakdown.items())
    c.drawString(20, y, f"Impact: {breakdown}")
    y -= 24

    c.setFont("Helvetica-Bold", 12)
    c.drawString(20, y, "Prioritized suggestions:")
    y -= 16
    c.setFont("Helvetica", 11)
    if not report.suggestions:
        c.drawString(26, y, "• No WCAG violations detected by axe.")
        y -= 16
    for i, sug in enumerate(report.suggestions[:max_suggestions], start=1):
        y = draw_wrapped(c, f"{i}. [P{sug.priority} · {sug.wcag_criteria} · {sug.impact}] {sug.description}", 26, y, W - 46)
        y = draw_wrapped(c, f"Remediation: {sug.remediation}", 36, y, W - 56)

    # Footer note
    c.setFont("Helvetica-Oblique", 9)
    c.setFillColor(colors.gray)
    c.drawString(20, 20, "Automated axe-core check. Manual review is still needed for full WCAG conformance.")

    c.save()
    return Path(path)
