from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models import AuditResult  # noqa: E402


def axe_item(rule_id: str, impact: Any = "serious", tags: List[str] = (), nodes: int = 1,
             help_url: str = "") -> Dict[str, Any]:
    """A rule result shaped like axe-core's JSON."""
    return {
        "id": rule_id,
        "description": f"{rule_id} description",
        "help": f"{rule_id} help",
        "helpUrl": help_url or f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
        "impact": impact,
        "tags": list(tags),
        "nodes": [
            {
                "html": f"<div id='n{i}'></div>",
                "failureSummary": f"Fix node {i}",
                "target": [f"#n{i}"],
                "any": [],
            }
            for i in range(nodes)
        ],
    }


@pytest.fixture
def axe_json() -> Dict[str, Any]:
    return {
        "violations": [
            axe_item("image-alt", "critical", ["cat.text-alternatives", "wcag2a", "wcag2aa"], nodes=3),
            axe_item("region", "moderate", ["cat.keyboard", "wcag2aa"], nodes=2),
        ],
        "passes": [
            axe_item("document-title", "serious", ["wcag2a"], nodes=1),
            axe_item("html-has-lang", None, ["wcag2a"], nodes=1),
        ],
        "incomplete": [axe_item("color-contrast", "serious", ["wcag2aa"], nodes=4)],
    }


@pytest.fixture
def audit_result(axe_json) -> AuditResult:
    return AuditResult.from_axe(axe_json)
