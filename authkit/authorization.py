"""Bearer-token authorization of incoming requests."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

AUTHORIZATION_HEADER = "authorization"
AUTHORIZATION_BEARER = "bearer"

T = TypeVar("T")


class AuthorizationError(Exception):
    """The authorization header is missing, malformed or not accepted."""


def parse_bearer_token(header: Optional[str]) -> str:
    """Return the token from a ``Bearer <token>`` authorization value."""
    if not header:
        raise AuthorizationError("authorization header is not provided")
    fields = header.split()
    if len(fields) < 2:
        raise AuthorizationError("invalid authorization header format")
    authorization_type = fields[0].lower()
    if authorization_type != AUTHORIZATION_BEARER:
        raise AuthorizationError(f"unsupported authorization type {authorization_type}")
    return fields[1]


def authorize(header: Optional[str], verify: Callable[[str], T]) -> T:
    """Extract the bearer token and return what ``verify`` makes of it."""
    access_token = parse_bearer_token(header)
    try:
        return verify(access_token)
    except Exception as exc:
        raise AuthorizationError(f"invalid token: {exc}") from exc