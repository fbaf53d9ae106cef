"""Main auditor that scans a URL and scores the result."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from .config import Settings
from .models import RawAudit, ScanResult
from .scanner import ScanError, is_valid_url, normalize_url, run_axe
from .scoring import build_report


logger = logging.getLogger(__name__)

AxeRunner = Callable[..., dict[str, Any]]


def score_axe_results(
    raw: dict[str, Any],
    url: str = "",
    *,
    dedupe_levels: bool = False,
    scan_time_ms: int = 0,
) -> ScanResult:
    """Build a ScanResult from an already captured axe-core results object."""
    audit = RawAudit.from_axe(raw)
    report = build_report(audit, dedupe_levels=dedupe_levels)
    return ScanResult(
        url=url or raw.get("url", ""),
        final_url=raw.get("url") or url,
        timestamp=raw.get("timestamp") or datetime.now(timezone.utc).isoformat(),
        audit=audit,
        report=report,
        scan_time_ms=scan_time_ms,
    )


def audit_url(
    url: str,
    *,
    settings: Settings | None = None,
    runner: AxeRunner | None = None,
    dedupe_levels: bool = False,
) -> ScanResult:
    """Run a complete accessibility audit on a URL.

    Args:
        url: The URL to audit
        settings: Scanner settings (default: from environment)
        runner: Callable returning raw axe-core results for a URL
        dedupe_levels: Count each rule once per WCAG level

    Returns:
        ScanResult with score and breakdowns

    Raises:
        ScanError: If the page could not be scanned
    """
    settings = settings or Settings.from_env()
    url = normalize_url(url)
    if not is_valid_url(url):
        raise ScanError.invalid_url()

    logger.info("Scanning URL: %s", url)
    start_time = time.time()

    raw = (runner or run_axe)(
        url,
        timeout=settings.timeout,
        tags=settings.axe_tags,
        axe_source=settings.axe_source,
    )

    result = score_axe_results(
        raw,
        url,
        dedupe_levels=dedupe_levels,
        scan_time_ms=int((time.time() - start_time) * 1000),
    )
    result.timestamp = datetime.now(timezone.utc).isoformat()

    logger.info(
        "Scan completed. Score: %d, Violations: %d",
        result.report.score,
        len(result.audit.violations),
    )
    return result
