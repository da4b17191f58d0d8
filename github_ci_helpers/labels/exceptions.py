"""Custom exceptions for the branch labeler."""


class BranchLabelerRequestError(Exception):
    """Raised when a GitHub request needed to decide on branch labels fails."""

    def __init__(self, operation: str, status_code: int | None, reason: str) -> None:
        super().__init__(f"{operation} request failed (status {status_code}): {reason}")
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
