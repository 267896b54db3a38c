"""Exceptions raised by oncomerge."""


class OncoMergeError(Exception):
    """Base exception for oncomerge errors."""

    pass


class SourceFailedError(OncoMergeError):
    """Raised when data is read from an annotation source that failed upstream."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        self.source = source
        self.reason = reason
        message = f"Annotation source '{source}' failed"
        if reason:
            message += f": {reason}"
        super().__init__(message)
