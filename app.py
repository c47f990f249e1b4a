# app.py - Accessibility Checker web UI (Playwright + axe-core)
# Run: python3 -m streamlit run app.py
from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

from checker import check_accessibility
from config import Settings
from models import Report
from report import df_to_csv_bytes, df_to_html_bytes, export_report_pdf, suggestions_to_df
from utils import safe_filename

# -----------------------------
# Data dirs
# -----------------------------
def resolve_data_dir() -> str:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        try:
            Path(env_dir).mkdir(parents=True, exist_ok=True)
            return env_dir
        except PermissionError:
            pass
    tmp_dir = os.path.join(tempfile.gettempdir(), "access-checker")
    Path(tmp_dir).mkdir(parents=True, exist_ok=True)
    return tmp_dir

DATA_DIR    = resolve_data_dir()
EXPORTS_DIR = os.path.join(DATA_DIR, "exports")
Path(EXPORTS_DIR).mkdir(parents=True, exist_ok=True)

APP_NAME = os.getenv("BRAND_NAME", "Accessibility Checker")
URL_RE = re.compile(r"^https?://", re.I)

def normalize_url(u: str) -> str:
    u = (u or "").strip()
    if not u: return u
    if not URL_RE.search(u): u = "https://" + u
    return u

def grouped_to_df(report: Report) -> pd.DataFrame:
    rows = [{"wcag": tag, "id": v.id, "impact": v.impact, "elements": len(v.nodes), "help": v.help}
            for tag, items in report.violations.items() for v in items]
    return pd.DataFrame(rows, columns=["wcag", "id", "impact", "elements", "help"])

# -----------------------------
# UI
# -----------------------------
st.set_page_config(page_title=APP_NAME, page_icon="✅", layout="wide", initial_sidebar_state="collapsed")
st.markdown(f"### {APP_NAME}")
st.caption("Loads the page in headless Chromium and runs **axe-core** against it.")

if "report" not in st.session_state: st.session_state["report"] = None

scan_tab, results_tab = st.tabs(["🔍 Scan", "📊 Results"])

with scan_tab:
    settings = Settings.from_env()
    with st.expander("Scanner settings", expanded=False):
        timeout_s = st.number_input("Navigation timeout (seconds)", min_value=5, max_value=300,
                                    value=settings.nav_timeout_ms // 1000, step=5)
        settings = settings.replace(nav_timeout_ms=int(timeout_s) * 1000, output_dir=EXPORTS_DIR)
    url = st.text_input("Page URL", value="https://www.australia.gov.au/", key="single_url")
    if st.button("Run Check", use_container_width=True, key="btn_run"):
        target = normalize_url(url)
        if not target:
            st.warning("Provide a valid URL (https://…).")
        else:
            with st.spinner(f"Checking {target}…"):
                try:
                    st.session_state["report"] = check_accessibility(target, settings)
                except Exception as e:
                    st.session_state["report"] = None
                    st.error(f"Check failed: {e}")
                else:
                    n = st.session_state["report"].summary.total_violations
                    st.success(f"Done: {n} violation(s). See the Results tab.")

with results_tab:
    report: Report = st.session_state.get("report")
    if report is None:
        st.info("No results yet. Run a check on the **Scan** tab.")
    else:
        s = report.summary
        c1, c2, c3 = st.columns(3)
        c1.metric("Violations", s.total_violations); c2.metric("Passes", s.total_passes); c3.metric("Incomplete", s.total_incomplete)
        cols = st.columns(4)
        for col, (level, count) in zip(cols, s.impact_breakdown.items()):
            col.metric(level.title(), count)

        st.subheader("Prioritized suggestions")
        df = suggestions_to_df(report)
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.subheader("Grouped by WCAG criteria")
        st.dataframe(grouped_to_df(report), use_container_width=True, hide_index=True)

        st.subheader("Export Report")
        base = f"accessibility_{safe_filename(report.url)}"
        st.download_button("⬇️ JSON", data=json.dumps(report.to_dict(), indent=2).encode("utf-8"),
                           file_name=f"{base}.json", mime="application/json", use_container_width=True)
        st.download_button("⬇️ CSV", data=df_to_csv_bytes(df), file_name=f"{base}.csv",
                           mime="text/csv", use_container_width=True)
        st.download_button("⬇️ HTML", data=df_to_html_bytes(df, report, title=f"{APP_NAME} - Report"),
                           file_name=f"{base}.html", mime="text/html", use_container_width=True)
        pdf_path = os.path.join(EXPORTS_DIR, f"{base}.pdf")
        try:
            export_report_pdf(pdf_path, report)
            with open(pdf_path, "rb") as f:
                st.download_button("⬇️ PDF", data=f.read(), file_name=f"{base}.pdf",
                                   mime="application/pdf", use_container_width=True)
        except OSError as e:
            st.caption(f"Could not build PDF: {e}")
