from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

# Common remediation advice keyed by axe rule id
REMEDIATION_STRATEGIES: Mapping[str, str] = MappingProxyType({
    "color-contrast": "Increase the contrast ratio between text and background to at least 4.5:1 for normal text or 3:1 for large text.",
    "image-alt": "Add descriptive alt text to all informative images. Use empty alt attributes for decorative images.",
    "aria-required-attr": "Ensure ARIA elements have all required attributes.",
    "document-title": "Add a descriptive and unique title to the page.",
    "label": "Associate labels with form controls using the label element or aria-label/aria-labelledby.",
    "link-name": "Ensure all links have discernible text that describes their purpose.",
    "list": "Use appropriate list markup (ul, ol, dl) for lists.",
    "heading-order": "Structure headings in a logical hierarchical order (h1 followed by h2, etc.).",
    "landmark": "Use landmark regions to identify sections of the page.",
    "focus-visible": "Ensure focus indicators are visible for keyboard users.",
    "keyboard": "Make all functionality available via keyboard.",
    "bypass": "Provide a way to bypass blocks of content (like skip links or landmarks).",
})


def wcag_level(tag: str) -> str:
    """Conformance level guessed from a tag name: ``wcag2aa`` -> ``AA``.

    "aaa" is tested before "aa", so any tag containing "aaa" is AAA.
    """
    if "aaa" in tag:
        return "AAA"
    if "aa" in tag:
        return "AA"
    return "A"


def priority_for(impact: Optional[str], level: str) -> int:
    # 1 = fix first. Each tier matches on impact OR level, so a minor
    # level-A issue still lands in tier 1.
    if impact == "critical" or level == "A":
        return 1
    if impact == "serious" or level == "AA":
        return 2
    return 3


def remediation_for(issue_type: str, help_url: str) -> str:
    try:
        return REMEDIATION_STRATEGIES[issue_type]
    except KeyError:
        return f"Fix {issue_type} issues according to guidelines at {help_url}"
