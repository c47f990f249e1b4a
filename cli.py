"""Command line interface: ``access-checker https://example.com``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from checker import check_accessibility, print_summary
from config import WAIT_UNTIL_CHOICES, Settings
from report import df_to_csv_bytes, export_report_pdf, report_path, suggestions_to_df

USAGE = "Usage: access-checker https://example.com"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a web page for WCAG accessibility issues with axe-core.")
    # Optional here so a missing URL gets our own message and exit code
    parser.add_argument("url", nargs="?", help="Page to check")
    parser.add_argument("--timeout", type=int, dest="nav_timeout_ms", default=None,
                        help="Navigation timeout in milliseconds (default 60000)")
    parser.add_argument("--wait-until", choices=WAIT_UNTIL_CHOICES, default=None,
                        help="Navigation event to wait for (default networkidle)")
    parser.add_argument("--output-dir", default=None, help="Directory for the JSON report (default: current directory)")
    parser.add_argument("--top", type=int, dest="top_suggestions", default=None,
                        help="Number of suggestions to print (default 5)")
    parser.add_argument("--pdf", dest="pdf_path", help="Also write a PDF summary to this path")
    parser.add_argument("--csv", dest="csv_path", help="Also write the suggestions as CSV to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if not args.url:
        print("Please provide a URL to check", file=sys.stderr)
        print(USAGE)
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        settings = Settings.from_env().replace(
            nav_timeout_ms=args.nav_timeout_ms,
            wait_until=args.wait_until,
            output_dir=args.output_dir,
            top_suggestions=args.top_suggestions,
        )
        report = check_accessibility(args.url, settings)
        if args.pdf_path:
            export_report_pdf(args.pdf_path, report)
            print(f"PDF report written to {args.pdf_path}")
        if args.csv_path:
            with open(args.csv_path, "wb") as fh:
                fh.write(df_to_csv_bytes(suggestions_to_df(report)))
            print(f"Suggestions exported to {args.csv_path}")
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_summary(report, report_path(report, settings.output_dir), top_n=settings.top_suggestions)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
