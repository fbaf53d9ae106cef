"""Scan session that keeps recent results for follow-up fix requests."""

import logging

from .auditor import AxeRunner, audit_url
from .config import Settings
from .fixes import FixSuggester, get_provider
from .models import FixSuggestion, ScanResult
from .scanner import run_axe
from .store import BoundedStore, TTLCache, new_scan_id


logger = logging.getLogger(__name__)


class AccessibilityChecker:
    """Scans URLs and answers fix requests against stored scans.

    Only the most recent ``settings.store_capacity`` scans are retained;
    older scan ids stop resolving once evicted.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        suggester: FixSuggester | None = None,
        runner: AxeRunner | None = None,
        dedupe_levels: bool = False,
    ):
        self.settings = settings or Settings.from_env()
        self.runner = runner or run_axe
        self.dedupe_levels = dedupe_levels
        self.scans: BoundedStore[str, ScanResult] = BoundedStore(self.settings.store_capacity)
        self._suggester = suggester

    @property
    def suggester(self) -> FixSuggester:
        if self._suggester is None:
            self._suggester = FixSuggester(
                provider=get_provider(self.settings.provider),
                cache=TTLCache(self.settings.suggestion_ttl),
            )
        return self._suggester

    def scan(self, url: str) -> tuple[str, ScanResult]:
        """Scan a URL and store the result under a new scan id."""
        result = audit_url(
            url,
            settings=self.settings,
            runner=self.runner,
            dedupe_levels=self.dedupe_levels,
        )
        scan_id = new_scan_id()
        self.scans.put(scan_id, result)
        return scan_id, result

    def get(self, scan_id: str) -> ScanResult | None:
        return self.scans.get(scan_id)

    def suggest_fix(self, scan_id: str, rule_id: str) -> FixSuggestion:
        """Fix suggestion for one violated rule of a stored scan.

        Raises:
            LookupError: If the scan id is unknown or the rule was not violated
        """
        result = self.scans.get(scan_id)
        if result is None:
            raise LookupError(f"Scan results not found for {scan_id!r}. Please run a new scan.")

        for violation in result.audit.violations:
            if violation.rule_id == rule_id:
                return self.suggester.suggest(violation)
        raise LookupError(f"Rule {rule_id!r} was not violated in scan {scan_id!r}")
