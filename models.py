"""Immutable records for axe-core findings and the report built from them."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

IMPACT_LEVELS = ("critical", "serious", "moderate", "minor")


def _freeze(value: Any) -> Any:
    # axe returns nested lists for shadow-DOM / iframe selectors
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class NodeResult:
    html: str = ""
    failure_summary: Optional[str] = None
    target: Tuple[Any, ...] = ()

    @classmethod
    def from_axe(cls, node: Mapping[str, Any]) -> "NodeResult":
        return cls(
            html=node.get("html") or "",
            failure_summary=node.get("failureSummary"),
            target=_freeze(node.get("target") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"html": self.html, "failureSummary": self.failure_summary, "target": _thaw(self.target)}


@dataclass(frozen=True)
class RawFinding:
    """One rule result from axe: a violation, a pass or an incomplete check."""

    id: str
    description: str = ""
    help: str = ""
    help_url: str = ""
    impact: Optional[str] = None
    tags: Tuple[str, ...] = ()
    nodes: Tuple[NodeResult, ...] = ()

    @classmethod
    def from_axe(cls, item: Mapping[str, Any]) -> "RawFinding":
        return cls(
            id=item["id"],
            description=item.get("description") or "",
            help=item.get("help") or "",
            help_url=item.get("helpUrl") or "",
            impact=item.get("impact"),
            tags=tuple(item.get("tags") or ()),
            nodes=tuple(NodeResult.from_axe(n) for n in item.get("nodes") or ()),
        )


@dataclass(frozen=True)
class AuditResult:
    violations: Tuple[RawFinding, ...] = ()
    passes: Tuple[RawFinding, ...] = ()
    incomplete: Tuple[RawFinding, ...] = ()

    @classmethod
    def from_axe(cls, result: Mapping[str, Any]) -> "AuditResult":
        """Build from the JSON object returned by ``axe.run``."""
        def load(key: str) -> Tuple[RawFinding, ...]:
            return tuple(RawFinding.from_axe(item) for item in result.get(key) or ())

        return cls(violations=load("violations"), passes=load("passes"), incomplete=load("incomplete"))


@dataclass(frozen=True)
class ViolationSummary:
    """A violation as listed under one WCAG tag in the grouped view."""

    id: str
    description: str
    help: str
    help_url: str
    impact: Optional[str]
    nodes: Tuple[NodeResult, ...]

    @classmethod
    def from_finding(cls, finding: RawFinding) -> "ViolationSummary":
        return cls(
            id=finding.id,
            description=finding.description,
            help=finding.help,
            help_url=finding.help_url,
            impact=finding.impact,
            nodes=finding.nodes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "help": self.help,
            "helpUrl": self.help_url,
            "impact": self.impact,
            "nodes": [n.to_dict() for n in self.nodes],
        }


GroupedFindings = Dict[str, List[ViolationSummary]]


@dataclass(frozen=True)
class Suggestion:
    issue_type: str
    description: str
    wcag_criteria: str
    level: str
    impact: Optional[str]
    affected_elements: int
    priority: int
    remediation: str
    help_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issueType": self.issue_type,
            "description": self.description,
            "wcagCriteria": self.wcag_criteria,
            "level": self.level,
            "impact": self.impact,
            "affectedElements": self.affected_elements,
            "priority": self.priority,
            "remediation": self.remediation,
            "helpUrl": self.help_url,
        }


@dataclass(frozen=True)
class PassedTest:
    id: str
    description: str
    impact: Optional[str]
    nodes: int

    @classmethod
    def from_finding(cls, finding: RawFinding) -> "PassedTest":
        return cls(id=finding.id, description=finding.description, impact=finding.impact, nodes=len(finding.nodes))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "description": self.description, "impact": self.impact, "nodes": self.nodes}


@dataclass(frozen=True)
class Summary:
    total_violations: int
    total_passes: int
    total_incomplete: int
    impact_breakdown: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "impact_breakdown", MappingProxyType(dict(self.impact_breakdown)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalViolations": self.total_violations,
            "totalPasses": self.total_passes,
            "totalIncomplete": self.total_incomplete,
            "impactBreakdown": dict(self.impact_breakdown),
        }


@dataclass(frozen=True)
class Report:
    url: str
    timestamp: str
    summary: Summary
    violations: Mapping[str, Tuple[ViolationSummary, ...]]
    suggestions: Tuple[Suggestion, ...]
    passed_tests: Tuple[PassedTest, ...]

    def __post_init__(self) -> None:
        # read-only views; the grouper hands over plain dicts and lists
        frozen = {tag: tuple(items) for tag, items in self.violations.items()}
        object.__setattr__(self, "violations", MappingProxyType(frozen))
        object.__setattr__(self, "suggestions", tuple(self.suggestions))
        object.__setattr__(self, "passed_tests", tuple(self.passed_tests))

    def to_dict(self) -> Dict[str, Any]:
        """The persisted JSON shape."""
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "summary": self.summary.to_dict(),
            "violations": {tag: [v.to_dict() for v in items] for tag, items in self.violations.items()},
            "suggestions": [s.to_dict() for s in self.suggestions],
            "passedTests": [p.to_dict() for p in self.passed_tests],
        }
