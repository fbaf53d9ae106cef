"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass


DEFAULT_AXE_SOURCE = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"
DEFAULT_AXE_TAGS = ("wcag2a", "wcag2aa", "wcag21a", "wcag21aa")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Scanner and suggestion settings.

    Every field can be overridden with an ``A11Y_AUDIT_*`` environment
    variable; API keys are read by the providers themselves.
    """
    timeout: float = 30.0  # seconds, page load
    axe_source: str = DEFAULT_AXE_SOURCE
    axe_tags: tuple[str, ...] = DEFAULT_AXE_TAGS
    store_capacity: int = 50
    suggestion_ttl: float = 60 * 60
    provider: str = "google"

    @classmethod
    def from_env(cls) -> "Settings":
        tags = os.getenv("A11Y_AUDIT_AXE_TAGS")
        return cls(
            timeout=_env_float("A11Y_AUDIT_TIMEOUT", 30.0),
            axe_source=os.getenv("A11Y_AUDIT_AXE_SOURCE") or DEFAULT_AXE_SOURCE,
            axe_tags=tuple(t.strip() for t in tags.split(",") if t.strip()) if tags else DEFAULT_AXE_TAGS,
            store_capacity=_env_int("A11Y_AUDIT_STORE_CAPACITY", 50),
            suggestion_ttl=_env_float("A11Y_AUDIT_SUGGESTION_TTL", 60 * 60),
            provider=(os.getenv("A11Y_AUDIT_PROVIDER") or "google").lower(),
        )
