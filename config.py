from __future__ import annotations

import os
from dataclasses import dataclass, field, replace as _replace
from typing import Optional, Tuple

# =========================
# Defaults / env overrides
# =========================
DEFAULT_NAV_TIMEOUT_MS = 60000
DEFAULT_WAIT_UNTIL = "networkidle"
DEFAULT_AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"
DEFAULT_TOP_SUGGESTIONS = 5

WAIT_UNTIL_CHOICES = ("load", "domcontentloaded", "networkidle", "commit")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_tags(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(t.strip() for t in raw.split(",") if t.strip())


@dataclass(frozen=True)
class Settings:
    nav_timeout_ms: int = DEFAULT_NAV_TIMEOUT_MS
    wait_until: str = DEFAULT_WAIT_UNTIL
    axe_cdn: str = DEFAULT_AXE_CDN
    assets_dir: str = "assets"
    output_dir: str = "."
    top_suggestions: int = DEFAULT_TOP_SUGGESTIONS
    headless: bool = True
    # empty -> axe runs every rule it ships
    axe_tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.wait_until not in WAIT_UNTIL_CHOICES:
            raise ValueError(
                f"wait_until must be one of {', '.join(WAIT_UNTIL_CHOICES)}, got {self.wait_until!r}"
            )
        if self.nav_timeout_ms <= 0:
            raise ValueError("nav_timeout_ms must be positive")
        if self.top_suggestions < 0:
            raise ValueError("top_suggestions must not be negative")

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment, falling back to the defaults."""
        return cls(
            nav_timeout_ms=_env_int("NAV_TIMEOUT_MS", DEFAULT_NAV_TIMEOUT_MS),
            wait_until=os.getenv("WAIT_UNTIL", DEFAULT_WAIT_UNTIL),
            axe_cdn=os.getenv("AXE_CDN", DEFAULT_AXE_CDN),
            assets_dir=os.getenv("ASSETS_DIR", "assets"),
            output_dir=os.getenv("REPORT_DIR", "."),
            top_suggestions=_env_int("TOP_SUGGESTIONS", DEFAULT_TOP_SUGGESTIONS),
            headless=os.getenv("HEADLESS", "1") != "0",
            axe_tags=_env_tags("AXE_TAGS"),
        )

    def replace(self, **overrides: Optional[object]) -> "Settings":
        """Copy with the given fields changed; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return _replace(self, **changes)
