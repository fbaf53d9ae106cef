"""Data models for accessibility scan results."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Impact(Enum):
    """Severity reported by axe-core for a violated rule."""
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @property
    def weight(self) -> int:
        """Penalty points per affected element."""
        return _IMPACT_WEIGHTS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "Impact":
        """Map a raw impact string to an Impact; anything else (including other
        casings) is minor."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.MINOR


_IMPACT_WEIGHTS = {
    Impact.CRITICAL: 10,
    Impact.SERIOUS: 5,
    Impact.MODERATE: 2,
    Impact.MINOR: 1,
}


class WcagLevel(Enum):
    """WCAG conformance level."""
    A = "A"
    AA = "AA"
    AAA = "AAA"


@dataclass(frozen=True)
class AffectedNode:
    """One element matched by a rule."""
    html: str
    target: tuple[str, ...] = ()
    failure_summary: Optional[str] = None

    @classmethod
    def from_axe(cls, data: dict[str, Any]) -> "AffectedNode":
        target = data.get("target") or ()
        return cls(
            html=data.get("html") or "",
            target=tuple(str(t) for t in target),
            failure_summary=data.get("failureSummary"),
        )


@dataclass(frozen=True)
class AuditFinding:
    """A single rule result (violation, pass or incomplete) from axe-core."""
    rule_id: str
    impact: Optional[str] = None  # Raw value as reported, may be missing
    tags: tuple[str, ...] = ()
    description: str = ""
    help: str = ""
    help_url: str = ""
    nodes: tuple[AffectedNode, ...] = ()

    @property
    def affected_node_count(self) -> int:
        return len(self.nodes)

    @property
    def severity(self) -> Impact:
        return Impact.parse(self.impact)

    @property
    def first_html(self) -> str:
        """HTML of the first affected element, or an empty string."""
        return self.nodes[0].html if self.nodes else ""

    @classmethod
    def from_axe(cls, data: dict[str, Any]) -> "AuditFinding":
        """Build a finding from one entry of an axe-core result list."""
        return cls(
            rule_id=str(data.get("id") or ""),
            impact=data.get("impact"),
            tags=tuple(data.get("tags") or ()),
            description=data.get("description") or "",
            help=data.get("help") or "",
            help_url=data.get("helpUrl") or "",
            nodes=tuple(AffectedNode.from_axe(n) for n in data.get("nodes") or ()),
        )


@dataclass(frozen=True)
class RawAudit:
    """The raw output of one axe-core run."""
    violations: tuple[AuditFinding, ...] = ()
    passes: tuple[AuditFinding, ...] = ()
    incomplete: tuple[AuditFinding, ...] = ()

    @classmethod
    def from_axe(cls, data: dict[str, Any]) -> "RawAudit":
        def _findings(key: str) -> tuple[AuditFinding, ...]:
            return tuple(AuditFinding.from_axe(item) for item in data.get(key) or ())

        return cls(
            violations=_findings("violations"),
            passes=_findings("passes"),
            incomplete=_findings("incomplete"),
        )


@dataclass(frozen=True)
class LevelTally:
    """Passed/failed rule counts for one WCAG level."""
    passed: int = 0
    failed: int = 0


@dataclass(frozen=True)
class ScoreReport:
    """Score and breakdowns derived from a single RawAudit.

    The mappings are read-only views over private copies, so a report cannot
    be changed after it is built.
    """
    score: int  # 0-100
    severity_counts: Mapping[Impact, int]
    level_breakdown: Mapping[WcagLevel, LevelTally]
    violations_by_impact: Mapping[Impact, tuple[AuditFinding, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "severity_counts", MappingProxyType(dict(self.severity_counts)))
        object.__setattr__(self, "level_breakdown", MappingProxyType(dict(self.level_breakdown)))
        object.__setattr__(self, "violations_by_impact", MappingProxyType(
            {impact: tuple(found) for impact, found in self.violations_by_impact.items()}
        ))

    def __hash__(self) -> int:
        return hash((
            self.score,
            tuple(self.severity_counts.items()),
            tuple(self.level_breakdown.items()),
            tuple(self.violations_by_impact.items()),
        ))

    @property
    def total_violations(self) -> int:
        return sum(len(v) for v in self.violations_by_impact.values())

    @property
    def grade(self) -> str:
        if self.score >= 90:
            return "Excellent Accessibility"
        elif self.score >= 70:
            return "Good Accessibility"
        elif self.score >= 50:
            return "Needs Improvement"
        else:
            return "Poor Accessibility"


@dataclass
class ScanResult:
    """Complete scan result for a URL."""
    url: str
    final_url: str
    timestamp: str  # ISO-8601, UTC
    audit: RawAudit
    report: ScoreReport
    scan_time_ms: int = 0


@dataclass
class FixSuggestion:
    """Before/after HTML for one violation."""
    rule_id: str
    before: str
    after: str
    explanation: str
    ai_generated: bool
    from_cache: bool = False
    provider: Optional[str] = None
