from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or request does not exist."""


class InvalidTransitionError(DomainError):
    """Raised when a request status change is not allowed from its current status."""


class DuplicateCorrectionError(ValidationError):
    """Raised when a clock event already has an approved correction."""


class MalformedTimeValue(ValidationError):
    """A clock value that cannot be parsed into a time of day.

    Carries the id of the record that supplied the value (a correction id when
    a correction overrode the clock) and the offending field.
    """

    def __init__(self, *, record_id: Optional[str], field: str, value: object):
        self.record_id = record_id
        self.field = field
        self.value = value
        super().__init__(f"Invalid time value {value!r} in field {field!r} of record {record_id!r}")
