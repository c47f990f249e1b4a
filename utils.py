from __future__ import annotations

import datetime as dt
import logging
import pathlib
from typing import Optional

import requests
from slugify import slugify

from config import DEFAULT_AXE_CDN

logger = logging.getLogger(__name__)


class AxeAssetError(RuntimeError):
    """axe.min.js is neither cached nor downloadable."""


def ensure_axe_js(assets_dir: str = "assets", cdn_url: str = DEFAULT_AXE_CDN, timeout: int = 20) -> str:
    """Ensure axe.min.js exists locally, download from CDN if missing."""
    assets = pathlib.Path(assets_dir)
    axe_path = assets / "axe.min.js"
    if axe_path.exists() and axe_path.stat().st_size > 0:
        return str(axe_path)
    logger.info("Downloading axe-core from %s", cdn_url)
    try:
        r = requests.get(cdn_url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise AxeAssetError(f"Could not download axe-core from {cdn_url}: {e}") from e
    assets.mkdir(parents=True, exist_ok=True)
    axe_path.write_bytes(r.content)
    return str(axe_path)


def iso_timestamp(now: Optional[dt.datetime] = None) -> str:
    """UTC time as ``2024-05-01T09:30:00.123Z``."""
    now = now or dt.datetime.now(dt.timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return now.isoformat(timespec="milliseconds") + "Z"


def report_filename(timestamp: str) -> str:
    return f"accessibility-report-{timestamp.replace(':', '-')}.json"


def safe_filename(name: str) -> str:
    return slugify(name or "report")
