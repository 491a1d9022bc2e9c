"""Request and profile records with their field validation rules."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from authkit.passwords import is_strong_password

_EMAIL = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*"
)

_EMPTY = ""


class ValidationError(ValueError):
    """One or more fields failed their validation rules."""

    def __init__(self, struct: str, failures: Iterable[tuple[str, str]]) -> None:
        self.struct = struct
        self.failures = tuple(failures)
        super().__init__(
            "\n".join(
                f"Key: '{struct}.{name}' Error:Field validation for '{name}' "
                f"failed on the '{tag}' tag"
                for name, tag in self.failures
            )
        )


def _is_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc or parts.path or parts.fragment)


def _passes(tag: str, value: str) -> bool:
    name, _, arg = tag.partition("=")
    if name == "required":
        return value != ""
    if name == "email":
        return _EMAIL.fullmatch(value) is not None
    if name == "min":
        return len(value) >= int(arg)
    if name == "max":
        return len(value) <= int(arg)
    if name == "strong_password":
        return is_strong_password(value)
    if name == "url":
        return _is_url(value)
    raise ValueError(f"unknown validation tag {name!r}")


def _validate(obj: Any, rules: Iterable[tuple[str, tuple[str, ...]]]) -> Any:
    failures = []
    for name, tags in rules:
        value = getattr(obj, name)
        failed = next((tag for tag in tags if not _passes(tag, value)), None)
        if failed is not None:
            failures.append((name, failed.partition("=")[0]))
    if failures:
        raise ValidationError(type(obj).__name__, failures)
    return obj


def _string_fields(data: Mapping[str, Any], names: Iterable[str]) -> dict[str, str]:
    values = {}
    for name in names:
        value = data.get(name)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string")
        values[name] = value
    return values


_EMAIL_RULE = ("required", "email")
_STRENGTH_RULE = ("required", "min=8", "max=64", "strong_password")


@dataclass(kw_only=True)
class UserAuth:
    """Registration details submitted by a new user."""

    user_id: Optional[uuid.UUID] = None
    email: str = ""
    password: str = field(default=_EMPTY, repr=False)
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserAuth":
        """Build from decoded JSON, ignoring unknown keys."""
        values = _string_fields(
            data, ("email", "password", "first_name", "last_name", "phone", "image_url")
        )
        raw_id = data.get("user_id")
        user_id = None if raw_id in (None, "") else uuid.UUID(str(raw_id))
        return cls(user_id=user_id, **values)

    def validate(self) -> "UserAuth":
        """Check the email and password rules; return self."""
        return _validate(self, (("email", _EMAIL_RULE), ("password", _STRENGTH_RULE)))


@dataclass(kw_only=True)
class LoginRequest:
    """Credentials submitted to sign in."""

    email: str = ""
    password: str = field(default=_EMPTY, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoginRequest":
        """Build from decoded JSON, ignoring unknown keys."""
        return cls(**_string_fields(data, ("email", "password")))

    def validate(self) -> "LoginRequest":
        """Check the email and password rules; return self."""
        return _validate(self, (("email", _EMAIL_RULE), ("password", _STRENGTH_RULE)))


@dataclass(kw_only=True)
class UserProfile:
    """Public profile of a user."""

    user_id: Optional[uuid.UUID] = None
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    image_url: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form of the profile."""
        return {
            "user_id": str(self.user_id or uuid.UUID(int=0)),
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "image_url": self.image_url,
        }


@dataclass(kw_only=True)
class PasswordResetRequest:
    """Request to send a password reset message."""

    email: str = ""

    def validate(self) -> "PasswordResetRequest":
        """Check the email rule; return self."""
        return _validate(self, (("email", _EMAIL_RULE),))


@dataclass(kw_only=True)
class NewPasswordRequest:
    """A new password entered twice."""

    password: str = field(default=_EMPTY, repr=False)
    password2: str = field(default=_EMPTY, repr=False)

    def validate(self) -> "NewPasswordRequest":
        """Check that both entries are present; return self."""
        return _validate(self, (("password", ("required",)), ("password2", ("required",))))


@dataclass(kw_only=True)
class UpdateUserDetailsRequest:
    """New first and last name for a profile."""

    first_name: str = ""
    last_name: str = ""

    def validate(self) -> "UpdateUserDetailsRequest":
        """Check that both names are present; return self."""
        return _validate(self, (("first_name", ("required",)), ("last_name", ("required",))))


@dataclass(kw_only=True)
class UpdatePhoneRequest:
    """New phone number for a profile."""

    phone: str = ""

    def validate(self) -> "UpdatePhoneRequest":
        """Check that the phone is present; return self."""
        return _validate(self, (("phone", ("required",)),))


@dataclass(kw_only=True)
class UpdateImageRequest:
    """New profile image location."""

    url: str = ""

    def validate(self) -> "UpdateImageRequest":
        """Check that the image location is a URL; return self."""
        return _validate(self, (("url", ("required", "url")),))