"""Result of an upstream annotation source.

An annotation source either resolved to data or failed. Callers check
``is_failed`` instead of inspecting the payload type.
"""

from enum import Enum
from typing import Generic, TypeVar

from oncomerge.exceptions import SourceFailedError

T = TypeVar("T")


class SourceStatus(str, Enum):
    """Terminal state of an upstream source."""

    COMPLETE = "complete"
    FAILED = "failed"


class SourceResult(Generic[T]):
    """Data from an upstream source, or the reason it could not be loaded."""

    def __init__(
        self,
        status: SourceStatus,
        data: T | None = None,
        reason: str | None = None,
        source: str = "annotation",
    ) -> None:
        self.status = status
        self._data = data
        self.reason = reason
        self.source = source

    @classmethod
    def ok(cls, data: T | None, source: str = "annotation") -> "SourceResult[T]":
        """A source that resolved; ``data`` may be None when it had nothing to offer."""
        return cls(SourceStatus.COMPLETE, data=data, source=source)

    @classmethod
    def failed(cls, reason: str | None = None, source: str = "annotation") -> "SourceResult[T]":
        """A source whose fetch ended in an error."""
        return cls(SourceStatus.FAILED, reason=reason, source=source)

    @property
    def is_failed(self) -> bool:
        return self.status is SourceStatus.FAILED

    @property
    def data(self) -> T | None:
        """The resolved payload.

        Raises:
            SourceFailedError: If the source failed
        """
        if self.is_failed:
            raise SourceFailedError(self.source, self.reason)
        return self._data

    def __repr__(self) -> str:
        if self.is_failed:
            return f"SourceResult(source={self.source!r}, status=failed, reason={self.reason!r})"
        return f"SourceResult(source={self.source!r}, status=complete)"
