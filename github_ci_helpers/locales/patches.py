"""Cross-checks that translated files were patched with the same keys as the baseline files.

This supplements the content comparison: the key names added and deleted by
each translated file's unified diff must equal those of the baseline file with
the same name.
"""

import structlog

from github_ci_helpers.locales.models import LocaleFileSet, PatchKeys, PatchMismatch
from github_ci_helpers.utils.constants import PATCH_KEY_PATTERN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _clean_key(raw_key: str) -> str:
    """Strip whitespace and surrounding quotes from a key captured from a JSON line."""
    return raw_key.strip().strip('"').strip("'")


def extract_patch_keys(patch: str) -> PatchKeys:
    """Extract the sorted key names added and deleted by a unified diff patch.

    A key is the text between the leading `+` or `-` and the first colon of the
    line. File header lines (`+++`, `---`) and lines without a colon are ignored.
    """
    added: list[str] = []
    deleted: list[str] = []
    for line in patch.splitlines():
        if line.startswith(("+++", "---")):
            continue
        match = PATCH_KEY_PATTERN.match(line)
        if match is None:
            continue
        key = _clean_key(match.group("key"))
        if not key:
            continue
        if match.group("sign") == "+":
            added.append(key)
        else:
            deleted.append(key)
    return PatchKeys(added=sorted(added), deleted=sorted(deleted))


def patch_keys_match(reference: PatchKeys, candidate: PatchKeys) -> bool:
    """Return True if both patches added and deleted exactly the same keys."""
    return reference.added == candidate.added and reference.deleted == candidate.deleted


def find_patch_mismatches(
    baseline: LocaleFileSet,
    locales: list[LocaleFileSet],
    patches_by_path: dict[str, str | None],
) -> list[PatchMismatch]:
    """Compare each translated file's patch keys with those of the baseline file of the same name.

    Files GitHub returned without a patch (binary or very large diffs) are skipped.
    """
    mismatches: list[PatchMismatch] = []
    for baseline_path, file_name in zip(baseline.file_paths, baseline.file_names):
        baseline_patch = patches_by_path.get(baseline_path)
        if baseline_patch is None:
            logger.warning("No patch available for baseline file, skipping patch check", file_path=baseline_path)
            continue
        expected = extract_patch_keys(baseline_patch)

        for locale_file_set in locales:
            for locale_path, locale_file_name in zip(locale_file_set.file_paths, locale_file_set.file_names):
                if locale_file_name != file_name:
                    continue
                locale_patch = patches_by_path.get(locale_path)
                if locale_patch is None:
                    logger.warning("No patch available for locale file, skipping patch check", file_path=locale_path)
                    continue
                actual = extract_patch_keys(locale_patch)
                if not patch_keys_match(expected, actual):
                    logger.warning(
                        "Locale file patch does not match baseline patch",
                        locale=locale_file_set.locale,
                        file_name=file_name,
                        expected=expected.model_dump(),
                        actual=actual.model_dump(),
                    )
                    mismatches.append(PatchMismatch(locale=locale_file_set.locale, file_name=file_name, expected=expected, actual=actual))
    return mismatches
