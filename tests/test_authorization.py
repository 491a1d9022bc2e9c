import pytest

from authkit.authorization import AuthorizationError, authorize, parse_bearer_token


def test_parse_bearer_token():
    assert parse_bearer_token("Bearer token") == "token"


def test_parse_is_case_insensitive_on_scheme():
    assert parse_bearer_token("BEARER token") == "token"


def test_parse_ignores_extra_whitespace():
    assert parse_bearer_token("  bearer   token  ") == "token"


@pytest.mark.parametrize("header", ["", None])
def test_missing_header(header):
    with pytest.raises(AuthorizationError, match="authorization header is not provided"):
        parse_bearer_token(header)


def test_header_without_token():
    with pytest.raises(AuthorizationError, match="invalid authorization header format"):
        parse_bearer_token("Bearer")


def test_unsupported_scheme():
    with pytest.raises(AuthorizationError, match="unsupported authorization type basic"):
        parse_bearer_token("Basic token")


def test_authorize_returns_verified_payload():
    seen = []

    def verify(value):
        seen.append(value)
        return {"user": "user@example.com"}

    assert authorize("Bearer token", verify) == {"user": "user@example.com"}
    assert seen == ["token"]


def test_authorize_wraps_verification_failure():
    def verify(value):
        raise ValueError("expired")

    with pytest.raises(AuthorizationError, match="invalid token: expired") as info:
        authorize("Bearer token", verify)
    assert isinstance(info.value.__cause__, ValueError)


def test_authorize_does_not_verify_bad_header():
    calls = []
    with pytest.raises(AuthorizationError):
        authorize("Basic token", calls.append)
    assert calls == []