from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from playwright.sync_api import sync_playwright

from config import Settings
from models import AuditResult
from utils import ensure_axe_js

logger = logging.getLogger(__name__)


class AxeRunError(RuntimeError):
    """axe-core failed to load or returned an error instead of results."""


AXE_RUN_JS = """
async (options) => {
    if (!window.axe || !axe.run) {
        return {error: 'axe not loaded'}
    }
    try {
        return await axe.run(document, options);
    } catch (e) {
        return {error: String((e && e.message) || e)}
    }
}
"""


def axe_run_options(tags: Iterable[str] = ()) -> Dict[str, Any]:
    tags = list(tags)
    if not tags:
        return {}
    return {"runOnly": {"type": "tag", "values": tags}}


def run_axe_on_page(page, axe_path: str, tags: Iterable[str] = ()) -> AuditResult:
    """Inject axe into an already loaded page and run it."""
    page.add_script_tag(path=axe_path)
    result = page.evaluate(AXE_RUN_JS, axe_run_options(tags))
    # Normalize result
    if isinstance(result, str):
        try:
            result = json.loads(result)
        except ValueError as e:
            raise AxeRunError(f"unexpected axe result: {e}") from e
    if not isinstance(result, dict):
        raise AxeRunError(f"unexpected axe result of type {type(result).__name__}")
    if result.get("error"):
        raise AxeRunError(str(result["error"]))
    return AuditResult.from_axe(result)


def run_axe_on_url(
    url: str,
    settings: Optional[Settings] = None,
    playwright_factory: Callable[[], Any] = sync_playwright,
) -> AuditResult:
    """Load ``url`` in headless Chromium and return the axe results.

    Navigation errors (including the timeout) and axe errors propagate
    unchanged. The browser is closed on every path.
    """
    settings = settings or Settings.from_env()
    axe_path = ensure_axe_js(settings.assets_dir, settings.axe_cdn)
    with playwright_factory() as p:
        browser = p.chromium.launch(args=["--no-sandbox"], headless=settings.headless)
        try:
            context = browser.new_context()
            page = context.new_page()
            page.goto(url, wait_until=settings.wait_until, timeout=settings.nav_timeout_ms)
            logger.info("Page loaded successfully")
            result = run_axe_on_page(page, axe_path, settings.axe_tags)
        finally:
            browser.close()
    logger.debug(
        "axe returned %d violations, %d passes, %d incomplete",
        len(result.violations), len(result.passes), len(result.incomplete),
    )
    return result
