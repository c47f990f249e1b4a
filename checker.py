"""Run one accessibility check: browser -> axe -> report -> JSON file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from config import Settings
from models import AuditResult, Report
from processing import process_results
from report import save_report_json
from scanner_web import run_axe_on_url

logger = logging.getLogger(__name__)

Scanner = Callable[[str, Settings], AuditResult]


def check_accessibility(
    url: str,
    settings: Optional[Settings] = None,
    *,
    scanner: Optional[Scanner] = None,
    save: bool = True,
) -> Report:
    """Audit ``url`` and return the report.

    With ``save`` the report is also written to ``settings.output_dir`` as
    ``accessibility-report-<timestamp>.json``. Any failure propagates; no
    partial report is written.
    """
    settings = settings or Settings.from_env()
    scanner = scanner or run_axe_on_url
    logger.info("Starting accessibility check for: %s", url)
    result = scanner(url, settings)
    report = process_results(result, url)
    if save:
        path = save_report_json(report, settings.output_dir)
        logger.info("Report saved as %s", path)
    return report


def print_summary(report: Report, path: Optional[Path] = None, top_n: int = 5) -> None:
    s = report.summary
    print("\nAccessibility Check Summary:")
    print(f"URL: {report.url}")
    print(f"Total violations: {s.total_violations}")
    print(f"Total passes: {s.total_passes}")
    print("\nPrioritized improvement suggestions:")
    if not report.suggestions:
        print("No WCAG violations found.")
    for i, sug in enumerate(report.suggestions[:top_n], start=1):
        print(f"{i}. {sug.description} ({sug.wcag_criteria}, Priority: {sug.priority})")
        print(f"   Remediation: {sug.remediation}")
    if path is not None:
        print(f"\nFull report saved to: {path}")
