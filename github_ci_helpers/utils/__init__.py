"""Utility modules for shared functionality."""

from .constants import DEFAULT_BASELINE_LOCALE, DEFAULT_LABEL_COLOR, DEFAULT_LOCALES
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_BASELINE_LOCALE",
    "DEFAULT_LABEL_COLOR",
    "DEFAULT_LOCALES",
    "retry_on_rate_limit",
]
