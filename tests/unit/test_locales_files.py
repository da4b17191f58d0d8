"""Unit tests for the locales.files module."""

import pytest

from github_ci_helpers.locales.exceptions import LocaleOutOfSyncError, NoBaselineFilesError
from github_ci_helpers.locales.files import (
    build_locale_file_set,
    build_locale_file_sets,
    filter_json_files,
    filter_locale_files,
    find_out_of_sync_locales,
    get_file_name,
    validate_locale_file_sets,
)
from github_ci_helpers.locales.models import LocaleFileSet

CHANGED_FILES = [
    "README.md",
    "public/locales/en/common.json",
    "public/locales/en/errors.json",
    "public/locales/es/common.json",
    "public/locales/es/errors.json",
    "public/locales/fr/common.json",
    "src/app.ts",
]


def test_filter_json_files() -> None:
    """Test that only JSON files are kept, in order."""
    assert filter_json_files(CHANGED_FILES) == CHANGED_FILES[1:6]


@pytest.mark.parametrize(
    "path,expected",
    [
        pytest.param("public/locales/es/common.json", True, id="locale directory"),
        pytest.param("locales/es/nested/common.json", True, id="nested below locale directory"),
        pytest.param("es/common.json", False, id="no parent directory"),
        pytest.param("public/locales/es-MX/common.json", False, id="other locale with shared prefix"),
        pytest.param("public/locales/es/common.yaml", False, id="not json"),
        pytest.param("public/locales/es/", False, id="no file name"),
    ],
)
def test_filter_locale_files(path: str, expected: bool) -> None:
    """Test which paths belong to a locale."""
    assert (filter_locale_files("es", [path]) == [path]) is expected


def test_get_file_name() -> None:
    """Test that the last path segment is returned."""
    assert get_file_name("public/locales/en/common.json") == "common.json"
    assert get_file_name("common.json") == "common.json"


def test_build_locale_file_sets() -> None:
    """Test building one file set per locale."""
    json_files = filter_json_files(CHANGED_FILES)
    baseline = build_locale_file_set("en", json_files)
    assert baseline.file_paths == ["public/locales/en/common.json", "public/locales/en/errors.json"]
    assert baseline.file_names == ["common.json", "errors.json"]

    spanish, french = build_locale_file_sets(["es", "fr"], json_files)
    assert spanish.locale == "es"
    assert spanish.file_names == ["common.json", "errors.json"]
    assert french.file_names == ["common.json"]


def test_find_out_of_sync_locales_ignores_order() -> None:
    """Test that file names are compared as multisets."""
    baseline = LocaleFileSet(locale="en", file_names=["a.json", "b.json"])
    reordered = LocaleFileSet(locale="es", file_names=["b.json", "a.json"])
    missing = LocaleFileSet(locale="fr", file_names=["a.json"])
    duplicated = LocaleFileSet(locale="de", file_names=["a.json", "a.json"])
    assert find_out_of_sync_locales(baseline, [reordered, missing, duplicated]) == ["fr", "de"]


def test_validate_locale_file_sets_in_sync() -> None:
    """Test that matching file sets pass validation."""
    baseline = LocaleFileSet(locale="en", file_names=["a.json"])
    validate_locale_file_sets(baseline, [LocaleFileSet(locale="es", file_names=["a.json"])])


def test_validate_locale_file_sets_no_baseline_files() -> None:
    """Test that a pull request without baseline files is rejected."""
    with pytest.raises(NoBaselineFilesError, match="No en files found"):
        validate_locale_file_sets(LocaleFileSet(locale="en"), [LocaleFileSet(locale="es", file_names=["a.json"])])


def test_validate_locale_file_sets_out_of_sync() -> None:
    """Test that every out of sync locale is reported."""
    baseline = LocaleFileSet(locale="en", file_names=["a.json"])
    locales = [
        LocaleFileSet(locale="es"),
        LocaleFileSet(locale="fr", file_names=["b.json"]),
        LocaleFileSet(locale="de", file_names=["a.json"]),
    ]
    with pytest.raises(LocaleOutOfSyncError, match="es,fr files out of sync") as exc_info:
        validate_locale_file_sets(baseline, locales)
    assert exc_info.value.locales == ["es", "fr"]
