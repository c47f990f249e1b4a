"""Tests for the browser boundary using stand-ins for Playwright objects."""

from __future__ import annotations

import pytest

import scanner_web
from config import Settings
from scanner_web import AxeRunError, axe_run_options, run_axe_on_page, run_axe_on_url


class FakePage:
    def __init__(self, goto_error=None, evaluate_result=None):
        self.goto_error = goto_error
        self.evaluate_result = evaluate_result
        self.goto_calls = []
        self.scripts = []
        self.evaluate_args = None

    def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append((url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error

    def add_script_tag(self, path=None):
        self.scripts.append(path)

    def evaluate(self, expression, arg=None):
        self.evaluate_args = arg
        return self.evaluate_result


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.close_calls = 0

    def new_context(self):
        return self

    def new_page(self):
        return self.page

    def close(self):
        self.close_calls += 1


class FakePlaywright:
    def __init__(self, browser):
        self.browser = browser
        self.chromium = self
        self.launch_kwargs = None

    def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        return self.browser

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture(autouse=True)
def no_download(monkeypatch):
    monkeypatch.setattr(scanner_web, "ensure_axe_js", lambda *a, **k: "assets/axe.min.js")


def test_run_axe_on_url_returns_results_and_closes_browser(axe_json) -> None:
    page = FakePage(evaluate_result=axe_json)
    browser = FakeBrowser(page)
    pw = FakePlaywright(browser)
    settings = Settings(nav_timeout_ms=1234, wait_until="load")

    result = run_axe_on_url("https://example.com", settings, playwright_factory=lambda: pw)

    assert [f.id for f in result.violations] == ["image-alt", "region"]
    assert len(result.passes) == 2
    assert page.goto_calls == [("https://example.com", "load", 1234)]
    assert page.scripts == ["assets/axe.min.js"]
    assert pw.launch_kwargs["headless"] is True
    assert browser.close_calls == 1


def test_navigation_failure_still_closes_browser_once() -> None:
    error = TimeoutError("Timeout 60000ms exceeded.")
    page = FakePage(goto_error=error)
    browser = FakeBrowser(page)

    with pytest.raises(TimeoutError) as excinfo:
        run_axe_on_url("https://slow.example", Settings(), playwright_factory=lambda: FakePlaywright(browser))

    assert excinfo.value is error
    assert str(excinfo.value) == "Timeout 60000ms exceeded."
    assert browser.close_calls == 1


def test_axe_error_closes_browser_and_raises() -> None:
    page = FakePage(evaluate_result={"error": "axe not loaded"})
    browser = FakeBrowser(page)

    with pytest.raises(AxeRunError, match="axe not loaded"):
        run_axe_on_url("https://example.com", Settings(), playwright_factory=lambda: FakePlaywright(browser))

    assert browser.close_calls == 1


def test_run_axe_on_page_accepts_json_string() -> None:
    page = FakePage(evaluate_result='{"violations": [], "passes": [], "incomplete": []}')

    result = run_axe_on_page(page, "axe.min.js")

    assert result.violations == ()


def test_run_axe_on_page_rejects_garbage() -> None:
    with pytest.raises(AxeRunError):
        run_axe_on_page(FakePage(evaluate_result="not json"), "axe.min.js")
    with pytest.raises(AxeRunError):
        run_axe_on_page(FakePage(evaluate_result=None), "axe.min.js")


def test_axe_tags_become_run_only_option() -> None:
    page = FakePage(evaluate_result={"violations": []})

    run_axe_on_page(page, "axe.min.js", tags=("wcag2a", "wcag2aa"))

    assert page.evaluate_args == {"runOnly": {"type": "tag", "values": ["wcag2a", "wcag2aa"]}}
    assert axe_run_options(()) == {}
