"""
Service Errors and Results
==========================

Every service operation returns a ``Result``: either a value or a
``ServiceError`` drawn from a closed set of kinds. Routes translate failed
results into HTTP responses; services never raise for expected failures.

Error Kinds:
------------
- UNAUTHENTICATED: No verified identity was supplied
- FORBIDDEN: The caller is not the owner or not an administrator
- NOT_FOUND: A referenced user, order, menu item, or category is missing
- VALIDATION: The request is well-formed but not acceptable (unavailable
  menu item, non-cancellable order, category still holding menu items)

Usage:
------
    def get_widget(db, widget_id) -> Result[Widget]:
        widget = db.get(Widget, widget_id)
        if widget is None:
            return Result.fail(ErrorKind.NOT_FOUND, "Widget not found", widget_id=widget_id)
        return Result.ok(widget)

    result = get_widget(db, 3)
    if not result.is_ok:
        logger.info("Lookup failed: %s", result.error.message)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


@dataclass(frozen=True)
class ServiceError:
    """A failed operation: its kind, a human-readable message, and context."""
    kind: ErrorKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


class ServiceFailure(Exception):
    """Raised by ``Result.unwrap`` when the result holds an error."""

    def __init__(self, error: ServiceError):
        self.error = error
        super().__init__(error.message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation."""
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, **context: Any) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message, context=context))

    @classmethod
    def from_error(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise ServiceFailure(self.error)
        return self.value
