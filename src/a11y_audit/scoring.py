"""Score, severity buckets and WCAG level breakdown for an axe-core audit.

Everything here is pure: functions take finding sequences and return fresh
values without touching their inputs.
"""

import math
from collections import Counter
from typing import Iterable, Sequence

from .models import AuditFinding, Impact, LevelTally, RawAudit, ScoreReport, WcagLevel


# Legacy (WCAG 2.0) and versioned (WCAG 2.1) spellings count toward the same level
LEVEL_TAGS: dict[WcagLevel, frozenset[str]] = {
    WcagLevel.A: frozenset({"wcag2a", "wcag21a"}),
    WcagLevel.AA: frozenset({"wcag2aa", "wcag21aa"}),
    WcagLevel.AAA: frozenset({"wcag2aaa", "wcag21aaa"}),
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def penalty_points(violations: Iterable[AuditFinding]) -> int:
    """Sum of severity weight times affected element count."""
    return sum(v.severity.weight * v.affected_node_count for v in violations)


def compute_score(violations: Sequence[AuditFinding], pass_count: int) -> int:
    """Compute the 0-100 accessibility score.

    The penalty score (100 minus weighted element counts) is averaged with
    the pass percentage, but only when the audit reported passing rules.

    Args:
        violations: Violated rules
        pass_count: Number of passing rules

    Returns:
        Integer score clamped to [0, 100]
    """
    score = max(0, 100 - penalty_points(violations))

    if pass_count > 0:
        total_rules = len(violations) + pass_count
        percentage_score = pass_count / total_rules * 100
        score = _round_half_up((score + percentage_score) / 2)

    return max(0, min(100, score))


def categorize(
    violations: Sequence[AuditFinding],
) -> tuple[dict[Impact, tuple[AuditFinding, ...]], dict[Impact, int]]:
    """Partition violations by severity.

    Returns:
        (findings per severity in input order, affected element count per severity)
    """
    buckets: dict[Impact, list[AuditFinding]] = {impact: [] for impact in Impact}
    counts: dict[Impact, int] = {impact: 0 for impact in Impact}

    for violation in violations:
        impact = violation.severity
        buckets[impact].append(violation)
        counts[impact] += violation.affected_node_count

    return {impact: tuple(found) for impact, found in buckets.items()}, counts


def _levels_for(tag: str) -> list[WcagLevel]:
    return [level for level, tags in LEVEL_TAGS.items() if tag in tags]


def _count_levels(findings: Sequence[AuditFinding], dedupe: bool) -> Counter:
    counts: Counter = Counter()
    for finding in findings:
        seen: set[WcagLevel] = set()
        for tag in finding.tags:
            for level in _levels_for(tag):
                if dedupe and level in seen:
                    continue
                seen.add(level)
                counts[level] += 1
    return counts


def wcag_breakdown(
    violations: Sequence[AuditFinding],
    passes: Sequence[AuditFinding],
    *,
    dedupe: bool = False,
) -> dict[WcagLevel, LevelTally]:
    """Count failed and passed rules per WCAG level.

    Counts are per tag, so a rule tagged both ``wcag2a`` and ``wcag21a`` is
    counted twice for level A. Pass ``dedupe=True`` to count each rule at
    most once per level.
    """
    failed = _count_levels(violations, dedupe)
    passed = _count_levels(passes, dedupe)
    return {
        level: LevelTally(passed=passed[level], failed=failed[level])
        for level in WcagLevel
    }


def build_report(audit: RawAudit, *, dedupe_levels: bool = False) -> ScoreReport:
    """Score an audit and collect its severity and level breakdowns."""
    buckets, counts = categorize(audit.violations)
    return ScoreReport(
        score=compute_score(audit.violations, len(audit.passes)),
        severity_counts=counts,
        level_breakdown=wcag_breakdown(audit.violations, audit.passes, dedupe=dedupe_levels),
        violations_by_impact=buckets,
    )
