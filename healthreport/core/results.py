"""
Collector result wrapper.

Every collector returns a CollectorResult: either a fully-populated value
or an error message, never a partially-filled record.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class CollectorError(Exception):
    """Raised by a collector when its underlying system query fails."""


@dataclass(frozen=True)
class CollectorResult(Generic[T]):
    """Success-or-error outcome of a single collector (or a single ping target)."""

    source: str
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the collector produced a value."""
        return self.error is None

    @classmethod
    def success(cls, source: str, value: T) -> "CollectorResult[T]":
        return cls(source=source, value=value)

    @classmethod
    def failure(cls, source: str, error: str) -> "CollectorResult[T]":
        return cls(source=source, error=error or "unknown error")

    def value_or(self, default):
        """Return the value, or *default* when the collector failed."""
        return self.value if self.ok else default

    def __str__(self) -> str:
        if self.ok:
            return f"{self.source}: ok"
        return f"{self.source}: {self.error}"
