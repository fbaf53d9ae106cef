"""AI-assisted fix suggestions for accessibility violations."""

from .providers import LLMProvider, ProviderError, get_provider
from .suggester import FixSuggester, parse_fix_response

__all__ = ["FixSuggester", "LLMProvider", "ProviderError", "get_provider", "parse_fix_response"]
