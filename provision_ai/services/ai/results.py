"""Outcome of a single outbound provider call."""

import enum
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class StepStatus(str, enum.Enum):  # noqa: WPS600
    """How a provider call ended."""

    OK = "ok"
    DEGRADED = "degraded"
    FATAL = "fatal"


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """
    Result of one step of answer generation.

    Best-effort steps end ``ok`` or ``degraded``, required steps
    end ``ok`` or ``fatal``.
    """

    status: StepStatus
    value: Optional[T] = None
    reason: Optional[str] = None
    details: Any = None

    @classmethod
    def ok(cls, value: T) -> "StepResult[T]":
        return cls(status=StepStatus.OK, value=value)

    @classmethod
    def degraded(cls, reason: str) -> "StepResult[T]":
        return cls(status=StepStatus.DEGRADED, reason=reason)

    @classmethod
    def fatal(cls, reason: str, details: Any = None) -> "StepResult[T]":
        return cls(status=StepStatus.FATAL, reason=reason, details=details)

    @property
    def is_ok(self) -> bool:
        return self.status is StepStatus.OK

    @property
    def is_fatal(self) -> bool:
        return self.status is StepStatus.FATAL

    def value_or_none(self) -> Optional[T]:
        """Value of a successful step, ``None`` otherwise."""
        return self.value if self.is_ok else None
