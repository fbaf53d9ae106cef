import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from a11y_audit import scanner
from a11y_audit.scanner import ScanError, ScanErrorKind, _classify, is_valid_url, normalize_url, run_axe


@pytest.mark.parametrize("url,valid", [
    ("https://example.com", True),
    ("http://localhost:3000/page", True),
    ("ftp://example.com", False),
    ("example.com", False),
    ("https://", False),
    ("javascript:alert(1)", False),
])
def test_is_valid_url(url, valid):
    assert is_valid_url(url) is valid


def test_normalize_url_adds_https():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url(" http://example.com ") == "http://example.com"


def test_timeout_is_classified():
    error = _classify(PlaywrightTimeoutError("Timeout 30000ms exceeded."))
    assert error.kind is ScanErrorKind.TIMEOUT
    assert "took too long" in error.message


def test_network_failure_is_unreachable():
    error = _classify(PlaywrightError("net::ERR_NAME_NOT_RESOLVED at https://nope.invalid/"))
    assert error.kind is ScanErrorKind.UNREACHABLE
    assert error.message.startswith("Unable to reach the website")


def test_other_failures_keep_the_reason():
    error = _classify(PlaywrightError("Target page crashed\ncall log: ..."))
    assert error.kind is ScanErrorKind.OTHER
    assert error.message == "Scan failed: Target page crashed"


def test_run_axe_rejects_invalid_url_before_launching():
    with pytest.raises(ScanError) as excinfo:
        run_axe("ftp://example.com")
    assert excinfo.value.kind is ScanErrorKind.INVALID_URL


class FakePage:
    def __init__(self, result=None, goto_error=None, evaluate_error=None):
        self.result = {"violations": [], "passes": []} if result is None else result
        self.goto_error = goto_error
        self.evaluate_error = evaluate_error
        self.script_tags = []
        self.evaluated_tags = None

    def goto(self, url, wait_until=None, timeout=None):
        self.goto_args = (url, wait_until, timeout)
        if self.goto_error is not None:
            raise self.goto_error

    def add_script_tag(self, **kwargs):
        self.script_tags.append(kwargs)

    def evaluate(self, script, tags):
        self.evaluated_tags = tags
        if self.evaluate_error is not None:
            raise self.evaluate_error
        return self.result


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False

    def new_page(self, viewport=None):
        return self.page

    def close(self):
        self.closed = True


class FakePlaywright:
    """Stands in for the object returned by ``sync_playwright()``."""

    def __init__(self, page):
        self.browser = FakeBrowser(page)
        self.chromium = self

    def launch(self, headless=True, args=None):
        return self.browser

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_playwright(monkeypatch):
    def install(page):
        fake = FakePlaywright(page)
        monkeypatch.setattr(scanner, "sync_playwright", lambda: fake)
        return fake
    return install


def test_run_axe_returns_results_and_closes_browser(fake_playwright):
    page = FakePage(result={"violations": [], "passes": [{"id": "label"}]})
    fake = fake_playwright(page)

    results = run_axe("https://example.com", timeout=5, tags=("wcag2a",))

    assert results == {"violations": [], "passes": [{"id": "label"}]}
    assert page.goto_args == ("https://example.com", "networkidle", 5000)
    assert page.evaluated_tags == ["wcag2a"]
    assert fake.browser.closed


def test_remote_axe_source_is_injected_by_url(fake_playwright):
    page = FakePage()
    fake_playwright(page)

    run_axe("https://example.com", axe_source="https://cdn.example.com/axe.min.js")

    assert page.script_tags == [{"url": "https://cdn.example.com/axe.min.js"}]


def test_local_axe_source_is_injected_by_path(fake_playwright):
    page = FakePage()
    fake_playwright(page)

    run_axe("https://example.com", axe_source="/opt/axe/axe.min.js")

    assert page.script_tags == [{"path": "/opt/axe/axe.min.js"}]


def test_navigation_timeout_closes_browser(fake_playwright):
    page = FakePage(goto_error=PlaywrightTimeoutError("Timeout 30000ms exceeded."))
    fake = fake_playwright(page)

    with pytest.raises(ScanError) as excinfo:
        run_axe("https://example.com")

    assert excinfo.value.kind is ScanErrorKind.TIMEOUT
    assert fake.browser.closed
    assert page.script_tags == []


def test_evaluate_failure_closes_browser(fake_playwright):
    page = FakePage(evaluate_error=PlaywrightError("Execution context was destroyed"))
    fake = fake_playwright(page)

    with pytest.raises(ScanError) as excinfo:
        run_axe("https://example.com")

    assert excinfo.value.kind is ScanErrorKind.OTHER
    assert excinfo.value.message == "Scan failed: Execution context was destroyed"
    assert fake.browser.closed


def test_unexpected_error_still_closes_browser(fake_playwright):
    page = FakePage(evaluate_error=RuntimeError("boom"))
    fake = fake_playwright(page)

    with pytest.raises(RuntimeError):
        run_axe("https://example.com")

    assert fake.browser.closed


@pytest.mark.parametrize("result", [None, [], "axe is not defined"])
def test_non_object_result_is_a_scan_error(fake_playwright, result):
    page = FakePage()
    page.result = result
    fake = fake_playwright(page)

    with pytest.raises(ScanError) as excinfo:
        run_axe("https://example.com")

    assert excinfo.value.kind is ScanErrorKind.OTHER
    assert fake.browser.closed
