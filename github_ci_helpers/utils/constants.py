"""Shared constants used across the application."""

import re

# Locale Sync Constants
# ---------------------

DEFAULT_BASELINE_LOCALE = "en"
"""Locale treated as the source of truth for which translation files and keys exist."""

DEFAULT_LOCALES = ("es", "fr")
"""Locales checked against the baseline when none are configured."""

JSON_FILE_SUFFIX = ".json"
"""Extension of translation files."""

PATCH_KEY_PATTERN = re.compile(r"^(?P<sign>[+-])(?P<key>[^:]*):")
"""Pattern to match an added or deleted key in a unified diff line (text up to the first colon)."""

# Branch Label Constants
# ----------------------

DEFAULT_LABEL_COLOR = "0e8a16"
"""Default hex color (without '#') used when the branch label is created."""

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL."""

DEFAULT_BRANCH_COMMIT_LIMIT = 250
"""Number of most recent target branch commits compared against pull request commits."""
