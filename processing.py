"""Reshape axe results into the grouped, prioritised report.

Nothing here touches the browser or the filesystem: every function takes
already-parsed findings and returns new values.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional

from models import (
    IMPACT_LEVELS,
    AuditResult,
    GroupedFindings,
    PassedTest,
    RawFinding,
    Report,
    Suggestion,
    Summary,
    ViolationSummary,
)
from remediation import priority_for, remediation_for, wcag_level
from utils import iso_timestamp


def count_impact_levels(findings: Iterable[RawFinding]) -> Dict[str, int]:
    impacts = {level: 0 for level in IMPACT_LEVELS}
    for finding in findings:
        if finding.impact in impacts:
            impacts[finding.impact] += 1
    return impacts


def group_by_wcag_criteria(findings: Iterable[RawFinding]) -> GroupedFindings:
    """Map each ``wcag*`` tag to the violations carrying it.

    A finding with several WCAG tags is listed under each of them. Findings
    without any WCAG tag are left out.
    """
    grouped: GroupedFindings = {}
    for finding in findings:
        wcag_tags = [tag for tag in finding.tags if tag.startswith("wcag")]
        for tag in wcag_tags:
            grouped.setdefault(tag, []).append(ViolationSummary.from_finding(finding))
    return grouped


def generate_suggestions(grouped: GroupedFindings) -> List[Suggestion]:
    """One suggestion per (tag, violation), most urgent first.

    The sort is stable: equal priorities keep grouping order.
    """
    suggestions: List[Suggestion] = []
    for wcag_criteria, issues in grouped.items():
        level = wcag_level(wcag_criteria)
        for issue in issues:
            suggestions.append(Suggestion(
                issue_type=issue.id,
                description=issue.description,
                wcag_criteria=wcag_criteria,
                level=level,
                impact=issue.impact,
                affected_elements=len(issue.nodes),
                priority=priority_for(issue.impact, level),
                remediation=remediation_for(issue.id, issue.help_url),
                help_url=issue.help_url,
            ))
    return sorted(suggestions, key=lambda s: s.priority)


def process_results(result: AuditResult, url: str, now: Optional[dt.datetime] = None) -> Report:
    grouped = group_by_wcag_criteria(result.violations)
    return Report(
        url=url,
        timestamp=iso_timestamp(now),
        summary=Summary(
            total_violations=len(result.violations),
            total_passes=len(result.passes),
            total_incomplete=len(result.incomplete),
            impact_breakdown=count_impact_levels(result.violations),
        ),
        violations=grouped,
        suggestions=tuple(generate_suggestions(grouped)),
        passed_tests=tuple(PassedTest.from_finding(p) for p in result.passes),
    )
