"""AI fix suggestions for axe-core violations."""

import logging
import re
from dataclasses import replace

from bs4 import BeautifulSoup

from ..models import AuditFinding, FixSuggestion
from ..store import TTLCache
from .prompts import build_prompt, default_explanation, fallback_explanation
from .providers import LLMProvider, ProviderError, get_provider


logger = logging.getLogger(__name__)

FIXED_HTML_RE = re.compile(r"FIXED_HTML:\s*\n(.+?)(?=\n\s*EXPLANATION:|\Z)", re.DOTALL)
EXPLANATION_RE = re.compile(r"EXPLANATION:\s*\n(.+)", re.DOTALL)
CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)

# Wrappers lxml adds around fragments
_DOCUMENT_TAGS = {"html", "head", "body"}


def _strip_fence(text: str) -> str:
    match = CODE_FENCE_RE.match(text.strip())
    return match.group(1).strip() if match else text.strip()


def _looks_like_html(fragment: str) -> bool:
    if "<" not in fragment:
        return False
    soup = BeautifulSoup(fragment, "lxml")
    return any(tag.name not in _DOCUMENT_TAGS for tag in soup.find_all(True))


def parse_fix_response(text: str, original_html: str, default: str) -> tuple[str, str]:
    """Split a model response into (fixed_html, explanation).

    Falls back to the original HTML when the FIXED_HTML section is missing or
    holds no markup, and to ``default`` when there is no EXPLANATION section.
    """
    fixed_html = original_html
    html_match = FIXED_HTML_RE.search(text)
    if html_match:
        candidate = _strip_fence(html_match.group(1))
        if _looks_like_html(candidate):
            fixed_html = candidate
        else:
            logger.debug("Discarding FIXED_HTML section without markup: %r", candidate[:80])

    explanation_match = EXPLANATION_RE.search(text)
    explanation = explanation_match.group(1).strip() if explanation_match else default
    return fixed_html, explanation or default


class FixSuggester:
    """Ask an LLM for before/after HTML, caching by rule and element."""

    def __init__(self, provider: LLMProvider | None = None, cache: TTLCache | None = None):
        self.provider = provider or get_provider()
        self.cache: TTLCache[tuple[str, str], FixSuggestion] = cache if cache is not None else TTLCache()

    def suggest(self, finding: AuditFinding) -> FixSuggestion:
        """Return a fix suggestion; never raises for provider failures."""
        self.cache.purge_expired()

        html = finding.first_html
        key = (finding.rule_id, html)
        cached = self.cache.get(key)
        if cached is not None:
            return replace(cached, from_cache=True)

        try:
            response = self.provider.complete(build_prompt(finding))
            after, explanation = parse_fix_response(response, html, default_explanation(finding))
            suggestion = FixSuggestion(
                rule_id=finding.rule_id,
                before=html,
                after=after,
                explanation=explanation,
                ai_generated=True,
                provider=self.provider.name,
            )
        except ProviderError as e:
            logger.warning("AI suggestion failed for %s: %s", finding.rule_id, e)
            suggestion = FixSuggestion(
                rule_id=finding.rule_id,
                before=html,
                after=html,
                explanation=fallback_explanation(finding),
                ai_generated=False,
            )

        self.cache.set(key, suggestion)
        logger.info(
            "Suggestion for %s generated (AI: %s)", finding.rule_id, suggestion.ai_generated
        )
        return suggestion
