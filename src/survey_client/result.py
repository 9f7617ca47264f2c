"""Uniform success/error envelope returned by every network call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Result[T]:
    """Outcome of one request.

    Exactly one of ``data`` and ``error`` is populated: ``data`` when
    ``success`` is true, ``error`` otherwise. Build instances through
    :meth:`ok` and :meth:`fail`.
    """

    success: bool
    data: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("failed result requires an error message")
        if not self.success and self.data is not None:
            raise ValueError("failed result cannot carry data")

    @classmethod
    def ok(cls, data: T) -> Result[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> Result[T]:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape with only the populated field."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
