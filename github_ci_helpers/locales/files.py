"""Groups the translation files changed in a pull request by locale and checks they line up."""

import re
from collections import Counter

import structlog

from github_ci_helpers.locales.exceptions import LocaleOutOfSyncError, NoBaselineFilesError
from github_ci_helpers.locales.models import LocaleFileSet
from github_ci_helpers.utils.constants import JSON_FILE_SUFFIX

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def filter_json_files(file_paths: list[str]) -> list[str]:
    """Return the paths of JSON files, keeping their order."""
    return [path for path in file_paths if path.endswith(JSON_FILE_SUFFIX)]


def filter_locale_files(locale: str, file_paths: list[str]) -> list[str]:
    """Return the JSON files that live under a directory named after the locale.

    A path such as `public/locales/es/common.json` belongs to locale `es`.
    """
    pattern = re.compile(rf".*/{re.escape(locale)}/.+\.json")
    return [path for path in file_paths if pattern.fullmatch(path)]


def get_file_name(path: str) -> str:
    """Return the last segment of a slash-separated path."""
    return path[path.rfind("/") + 1 :]


def build_locale_file_set(locale: str, file_paths: list[str]) -> LocaleFileSet:
    """Build the file set of one locale from all changed JSON file paths."""
    locale_file_paths = filter_locale_files(locale, file_paths)
    return LocaleFileSet(
        locale=locale,
        file_paths=locale_file_paths,
        file_names=[get_file_name(path) for path in locale_file_paths],
    )


def build_locale_file_sets(locales: list[str], file_paths: list[str]) -> list[LocaleFileSet]:
    """Build one file set per locale."""
    return [build_locale_file_set(locale, file_paths) for locale in locales]


def find_out_of_sync_locales(baseline: LocaleFileSet, locales: list[LocaleFileSet]) -> list[str]:
    """Return the locales whose file names are not the same as the baseline's, ignoring order."""
    expected = Counter(baseline.file_names)
    return [locale_file_set.locale for locale_file_set in locales if Counter(locale_file_set.file_names) != expected]


def validate_locale_file_sets(baseline: LocaleFileSet, locales: list[LocaleFileSet]) -> None:
    """Raise if the baseline changed no files or if any locale changed a different set of files."""
    if not baseline.file_names:
        logger.error("No baseline locale files changed", baseline_locale=baseline.locale)
        raise NoBaselineFilesError(baseline.locale)

    out_of_sync_locales = find_out_of_sync_locales(baseline, locales)
    if out_of_sync_locales:
        logger.error(
            "Locale files out of sync with baseline",
            baseline_locale=baseline.locale,
            baseline_file_names=baseline.file_names,
            out_of_sync_locales=out_of_sync_locales,
        )
        raise LocaleOutOfSyncError(out_of_sync_locales)

    logger.info(
        "Locale files in sync with baseline",
        baseline_locale=baseline.locale,
        locales=[locale_file_set.locale for locale_file_set in locales],
        file_names=baseline.file_names,
    )
