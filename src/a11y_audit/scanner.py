"""Run axe-core against a live page in headless Chromium."""

import logging
from enum import Enum
from typing import Any, Sequence
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from .config import DEFAULT_AXE_SOURCE, DEFAULT_AXE_TAGS


logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1920, "height": 1080}

AXE_RUN_SCRIPT = """
async (tags) => {
    if (!window.axe || !axe.run) {
        throw new Error('axe-core failed to load');
    }
    return await axe.run(document, {
        runOnly: { type: 'tag', values: tags }
    });
}
"""


class ScanErrorKind(Enum):
    INVALID_URL = "invalid_url"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    OTHER = "other"


class ScanError(Exception):
    """A scan that could not produce an audit."""

    def __init__(self, kind: ScanErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_url(cls) -> "ScanError":
        return cls(
            ScanErrorKind.INVALID_URL,
            "Invalid URL format. Please provide a valid HTTP or HTTPS URL.",
        )


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme."""
    url = url.strip()
    if "://" not in url:
        url = "https://" + url
    return url


def is_valid_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _classify(exc: Exception) -> ScanError:
    message = str(exc)
    if isinstance(exc, PlaywrightTimeoutError) or "timeout" in message.lower():
        return ScanError(
            ScanErrorKind.TIMEOUT,
            "Page load timeout. The website took too long to respond.",
        )
    if "net::ERR" in message:
        return ScanError(
            ScanErrorKind.UNREACHABLE,
            "Unable to reach the website. Please check the URL and try again.",
        )
    first_line = message.splitlines()[0] if message else type(exc).__name__
    return ScanError(ScanErrorKind.OTHER, f"Scan failed: {first_line}")


def run_axe(
    url: str,
    *,
    timeout: float = 30.0,
    tags: Sequence[str] = DEFAULT_AXE_TAGS,
    axe_source: str = DEFAULT_AXE_SOURCE,
) -> dict[str, Any]:
    """Load a page and return the raw axe-core results.

    Args:
        url: Page to audit
        timeout: Navigation timeout in seconds
        tags: axe-core rule tags to run
        axe_source: URL or local path of axe.min.js

    Returns:
        The axe-core results object (violations, passes, incomplete, ...)

    Raises:
        ScanError: If the URL is invalid or the page cannot be audited
    """
    if not is_valid_url(url):
        raise ScanError.invalid_url()

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=True,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
            )
            try:
                page = browser.new_page(viewport=VIEWPORT)
                logger.debug("Navigating to %s", url)
                page.goto(url, wait_until="networkidle", timeout=timeout * 1000)

                if axe_source.startswith(("http://", "https://")):
                    page.add_script_tag(url=axe_source)
                else:
                    page.add_script_tag(path=axe_source)

                results = page.evaluate(AXE_RUN_SCRIPT, list(tags))
            finally:
                browser.close()
    except PlaywrightError as e:
        logger.debug("Scan of %s failed: %s", url, e)
        raise _classify(e) from e

    if not isinstance(results, dict):
        raise ScanError(ScanErrorKind.OTHER, "Scan failed: unexpected axe-core result")
    return results
