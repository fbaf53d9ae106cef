"""a11y-audit - Accessibility scoring for web pages."""

__version__ = "0.1.0"
