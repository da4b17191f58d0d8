"""Custom exceptions for the locale sync check."""


class LocaleSyncError(Exception):
    """Base class for locale sync failures that should fail a CI run."""

    pass


class NoBaselineFilesError(LocaleSyncError):
    """Raised when a pull request changes no translation files of the baseline locale."""

    def __init__(self, baseline_locale: str) -> None:
        super().__init__(f"No {baseline_locale} files found")
        self.baseline_locale = baseline_locale


class LocaleOutOfSyncError(LocaleSyncError):
    """Raised when a locale's changed files differ from the baseline's changed files."""

    def __init__(self, locales: list[str]) -> None:
        super().__init__(f"{','.join(locales)} files out of sync")
        self.locales = locales


class FileContentFetchError(LocaleSyncError):
    """Raised when a comparison is attempted on file content that could not be fetched."""

    def __init__(self, path: str, ref: str, cause: str) -> None:
        super().__init__(f"Could not fetch '{path}' at '{ref}': {cause}")
        self.path = path
        self.ref = ref
        self.cause = cause


class LocaleFileParseError(LocaleSyncError):
    """Raised when a translation file is not a JSON object."""

    def __init__(self, path: str, ref: str, reason: str) -> None:
        super().__init__(f"Could not parse '{path}' at '{ref}' as a JSON object: {reason}")
        self.path = path
        self.ref = ref
        self.reason = reason
