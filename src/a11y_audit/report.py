"""JSON-ready report payloads."""

from typing import Any

from .models import AuditFinding, FixSuggestion, ScanResult


def finding_to_dict(finding: AuditFinding) -> dict[str, Any]:
    return {
        "id": finding.rule_id,
        "impact": finding.impact,
        "help": finding.help,
        "description": finding.description,
        "helpUrl": finding.help_url,
        "tags": list(finding.tags),
        "nodes": [
            {
                "html": node.html,
                "target": list(node.target),
                "failureSummary": node.failure_summary,
            }
            for node in finding.nodes
        ],
    }


def suggestion_to_dict(suggestion: FixSuggestion) -> dict[str, Any]:
    return {
        "ruleId": suggestion.rule_id,
        "before": suggestion.before,
        "after": suggestion.after,
        "explanation": suggestion.explanation,
        "aiGenerated": suggestion.ai_generated,
        "fromCache": suggestion.from_cache,
    }


def report_to_dict(result: ScanResult, scan_id: str | None = None) -> dict[str, Any]:
    """Serialize a scan result in the shape the web API used to return."""
    report = result.report
    return {
        "scanId": scan_id,
        "url": result.url,
        "finalUrl": result.final_url,
        "timestamp": result.timestamp,
        "scanTimeMs": result.scan_time_ms,
        "score": report.score,
        "grade": report.grade,
        "issueCount": {impact.value: count for impact, count in report.severity_counts.items()},
        "wcagLevel": {
            level.value: {"passed": tally.passed, "failed": tally.failed}
            for level, tally in report.level_breakdown.items()
        },
        "violations": [finding_to_dict(v) for v in result.audit.violations],
        "passes": len(result.audit.passes),
        "incomplete": len(result.audit.incomplete),
    }
