"""Status errors carrying a code, a message and optional field violations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

_CODE_INVALID_ARGUMENT = 3
_CODE_UNAUTHENTICATED = 16


@dataclass(frozen=True)
class FieldViolation:
    """One request field that failed validation, with the reason."""

    field: str
    description: str


class InvalidArgumentError(Exception):
    """The request carried invalid parameters."""

    code = _CODE_INVALID_ARGUMENT

    def __init__(self, violations: Iterable[FieldViolation] = ()) -> None:
        self.violations = tuple(violations)
        super().__init__("invalid parameters")


class UnauthenticatedError(Exception):
    """The caller could not be authenticated."""

    code = _CODE_UNAUTHENTICATED

    def __init__(self, reason: object) -> None:
        self.reason = reason
        super().__init__(f"unauthorized: {reason}")


def field_violation(field: str, err: object) -> FieldViolation:
    """Describe a failed field using the text of ``err``."""
    return FieldViolation(field=field, description=str(err))


def invalid_argument_error(violations: Iterable[FieldViolation]) -> InvalidArgumentError:
    """Build the error reported for a request with invalid fields."""
    return InvalidArgumentError(violations)


def unauthenticated_error(err: object) -> UnauthenticatedError:
    """Build the error reported when authentication fails."""
    return UnauthenticatedError(err)