"""Password strength and account status checks."""

from __future__ import annotations

import re

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[!@#$%^&*()]")

COMMON_PATTERNS = ("123456", "password")


class PasswordError(ValueError):
    """A new password was rejected."""


class AccountError(Exception):
    """The account may not be used."""


def is_strong_password(password: str) -> bool:
    """Tell whether a password is long enough, mixed and not a common one."""
    size = len(password.encode("utf-8"))
    if size <= 8 or size >= 64:
        return False
    checks = (_UPPERCASE, _LOWERCASE, _DIGIT, _SPECIAL)
    if not all(pattern.search(password) for pattern in checks):
        return False
    return password not in COMMON_PATTERNS


def check_new_password(password: str, password2: str) -> str:
    """Return the new password if both entries agree and it is strong."""
    if password != password2:
        raise PasswordError("both passwords must be equal")
    if not is_strong_password(password):
        raise PasswordError("please use a strong password")
    return password


def check_account_status(is_suspended: bool, is_deleted: bool) -> None:
    """Raise if a suspended or deleted account tries to sign in."""
    if is_suspended or is_deleted:
        raise AccountError("account suspended")