from __future__ import annotations

import pytest

from a11y_audit.models import AffectedNode, AuditFinding


def make_finding(
    rule_id: str = "rule",
    impact: str | None = "minor",
    nodes: int = 1,
    tags: tuple[str, ...] = (),
    html: str | None = None,
) -> AuditFinding:
    return AuditFinding(
        rule_id=rule_id,
        impact=impact,
        tags=tags,
        description=f"{rule_id} description",
        help=f"{rule_id} help",
        help_url=f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
        nodes=tuple(
            AffectedNode(html=html if html is not None else f'<div id="n{i}"></div>', target=(f"#n{i}",))
            for i in range(nodes)
        ),
    )


def axe_rule(rule_id: str, impact: str | None, nodes: int, tags: list[str]) -> dict:
    return {
        "id": rule_id,
        "impact": impact,
        "tags": tags,
        "description": f"{rule_id} description",
        "help": f"{rule_id} help",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
        "nodes": [
            {"html": f'<img src="{i}.png">', "target": [f"img:nth-child({i + 1})"], "failureSummary": "Fix this"}
            for i in range(nodes)
        ],
    }


@pytest.fixture
def axe_results() -> dict:
    """A small axe-core result: two violations, three passes."""
    return {
        "url": "https://example.com/",
        "timestamp": "2024-05-01T12:00:00.000Z",
        "violations": [
            axe_rule("image-alt", "critical", 2, ["cat.text-alternatives", "wcag2a", "wcag111"]),
            axe_rule("color-contrast", "serious", 1, ["cat.color", "wcag2aa", "wcag143"]),
        ],
        "passes": [
            axe_rule("document-title", None, 1, ["wcag2a", "wcag242"]),
            axe_rule("html-has-lang", None, 1, ["wcag2a", "wcag311"]),
            axe_rule("label", None, 1, ["wcag2a", "wcag21a", "wcag412"]),
        ],
        "incomplete": [],
    }


class FakeProvider:
    """Stands in for an LLMProvider."""

    name = "Fake"

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    def is_configured(self) -> bool:
        return True

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now
