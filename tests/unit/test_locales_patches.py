"""Unit tests for the locales.patches module."""

from github_ci_helpers.locales.models import LocaleFileSet, PatchKeys
from github_ci_helpers.locales.patches import extract_patch_keys, find_patch_mismatches, patch_keys_match

BASELINE_PATCH = """@@ -1,4 +1,4 @@
 {
-  "greeting": "Hello",
+  "greeting": "Hi",
+  "farewell": "Bye",
   "title": "App"
 }"""

MATCHING_PATCH = """@@ -1,4 +1,4 @@
 {
-  "greeting": "Hola",
+  "farewell": "Adios",
+  "greeting": "Buenas",
   "title": "App"
 }"""

DIVERGING_PATCH = """@@ -1,3 +1,3 @@
 {
+  "greeting": "Salut",
   "title": "App"
 }"""


def test_extract_patch_keys() -> None:
    """Test that added and deleted keys are extracted and sorted."""
    assert extract_patch_keys(BASELINE_PATCH) == PatchKeys(added=["farewell", "greeting"], deleted=["greeting"])


def test_extract_patch_keys_ignores_headers_and_lines_without_colon() -> None:
    """Test that file headers, context and brace lines are ignored."""
    patch = '--- a/en/common.json\n+++ b/en/common.json\n+{\n+  "key": "value"\n-}\n  "context": "x"'
    assert extract_patch_keys(patch) == PatchKeys(added=["key"], deleted=[])


def test_patch_keys_match() -> None:
    """Test comparing patch keys."""
    assert patch_keys_match(extract_patch_keys(BASELINE_PATCH), extract_patch_keys(MATCHING_PATCH))
    assert not patch_keys_match(extract_patch_keys(BASELINE_PATCH), extract_patch_keys(DIVERGING_PATCH))


def test_find_patch_mismatches() -> None:
    """Test that only translated files with diverging patch keys are reported."""
    baseline = LocaleFileSet(locale="en", file_paths=["locales/en/common.json"], file_names=["common.json"])
    locales = [
        LocaleFileSet(locale="es", file_paths=["locales/es/common.json"], file_names=["common.json"]),
        LocaleFileSet(locale="fr", file_paths=["locales/fr/common.json"], file_names=["common.json"]),
    ]
    patches = {
        "locales/en/common.json": BASELINE_PATCH,
        "locales/es/common.json": MATCHING_PATCH,
        "locales/fr/common.json": DIVERGING_PATCH,
    }

    mismatches = find_patch_mismatches(baseline, locales, patches)

    assert len(mismatches) == 1
    assert mismatches[0].locale == "fr"
    assert mismatches[0].file_name == "common.json"
    assert mismatches[0].expected.added == ["farewell", "greeting"]
    assert mismatches[0].actual == PatchKeys(added=["greeting"], deleted=[])


def test_find_patch_mismatches_skips_files_without_patch() -> None:
    """Test that files without a patch are not reported."""
    baseline = LocaleFileSet(locale="en", file_paths=["locales/en/a.json", "locales/en/b.json"], file_names=["a.json", "b.json"])
    locales = [LocaleFileSet(locale="es", file_paths=["locales/es/a.json", "locales/es/b.json"], file_names=["a.json", "b.json"])]
    patches = {
        "locales/en/a.json": None,
        "locales/es/a.json": DIVERGING_PATCH,
        "locales/en/b.json": BASELINE_PATCH,
        "locales/es/b.json": None,
    }
    assert find_patch_mismatches(baseline, locales, patches) == []
