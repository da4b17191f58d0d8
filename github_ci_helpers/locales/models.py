"""Data models for the locale sync check."""

from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel, Field

FlattenedObject: TypeAlias = dict[str, Any]
"""Mapping of dotted key-path (e.g. `menu.file.open`) to leaf value."""


class LocaleFileSet(BaseModel):
    """The translation files of a single locale changed in a pull request."""

    locale: str
    file_paths: list[str] = Field(default_factory=list)
    file_names: list[str] = Field(default_factory=list)


class PatchKeys(BaseModel):
    """Sorted key names added and deleted by a unified diff patch."""

    added: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)


class PatchMismatch(BaseModel):
    """A translated file whose patch touched different keys than the baseline file's patch."""

    locale: str
    file_name: str
    expected: PatchKeys
    actual: PatchKeys


class FileKeyDifference(BaseModel):
    """Dotted keys of a baseline file that are new or changed on the target branch."""

    file_path: str
    base_branch: str
    target_branch: str
    keys: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class FetchedFileContent:
    """File content successfully fetched at a ref."""

    path: str
    ref: str
    content: str


@dataclass(frozen=True)
class FailedFileContent:
    """A file content fetch that failed, with the reason."""

    path: str
    ref: str
    cause: str


FileContent: TypeAlias = FetchedFileContent | FailedFileContent


class LocaleSyncResult:
    """Contains results of the locale sync workflow."""

    def __init__(
        self,
        baseline: LocaleFileSet,
        locales: list[LocaleFileSet],
        differences: list[FileKeyDifference] | None = None,
        patch_mismatches: list[PatchMismatch] | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the result with the locale file sets, per-file differences, and errors."""
        self.baseline = baseline
        self.locales = locales
        self.differences = differences or []
        self.patch_mismatches = patch_mismatches or []
        self.errors = errors or []

    @property
    def succeeded(self) -> bool:
        """True when every file was compared and every patch cross-check passed."""
        return not self.errors and not self.patch_mismatches
