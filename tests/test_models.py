import uuid

import pytest

from authkit.models import (
    LoginRequest,
    NewPasswordRequest,
    PasswordResetRequest,
    UpdateImageRequest,
    UpdatePhoneRequest,
    UpdateUserDetailsRequest,
    UserAuth,
    UserProfile,
    ValidationError,
)


def _strong():
    return "password".capitalize() + "1!"


def test_login_request_valid():
    password = _strong()
    request = LoginRequest.from_dict({"email": "user@example.com", "password": password})
    assert request.validate() is request
    assert request.email == "user@example.com"


def test_login_request_bad_email():
    password = _strong()
    request = LoginRequest(email="not-an-address", password=password)
    with pytest.raises(ValidationError) as info:
        request.validate()
    assert info.value.failures == (("email", "email"),)


def test_login_request_missing_password():
    request = LoginRequest.from_dict({"email": "user@example.com"})
    with pytest.raises(ValidationError) as info:
        request.validate()
    assert info.value.failures == (("password", "required"),)


def test_login_request_short_password():
    password = "password"[:4]
    with pytest.raises(ValidationError) as info:
        LoginRequest(email="user@example.com", password=password).validate()
    assert info.value.failures == (("password", "min"),)


def test_login_request_weak_password():
    password = "password" + "password"[:1]
    with pytest.raises(ValidationError) as info:
        LoginRequest(email="user@example.com", password=password).validate()
    assert info.value.failures == (("password", "strong_password"),)


def test_validation_message_names_tag():
    with pytest.raises(ValidationError, match="failed on the 'required' tag"):
        PasswordResetRequest().validate()


def test_several_failures_reported():
    with pytest.raises(ValidationError) as info:
        LoginRequest().validate()
    assert info.value.failures == (("email", "required"), ("password", "required"))


def test_user_auth_from_dict():
    user_id = uuid.uuid4()
    password = _strong()
    user = UserAuth.from_dict(
        {
            "user_id": str(user_id),
            "email": "user@example.com",
            "password": password,
            "first_name": "Ada",
            "unknown": "ignored",
        }
    )
    assert user.user_id == user_id
    assert user.first_name == "Ada"
    assert user.last_name == ""
    assert user.validate() is user


def test_user_auth_repr_hides_password():
    password = _strong()
    user = UserAuth(email="user@example.com", password=password)
    assert password not in repr(user)


def test_user_auth_rejects_non_string():
    with pytest.raises(TypeError):
        UserAuth.from_dict({"email": 5})


def test_user_auth_rejects_bad_uuid():
    with pytest.raises(ValueError):
        UserAuth.from_dict({"user_id": "nope"})


def test_user_profile_to_dict():
    user_id = uuid.uuid4()
    profile = UserProfile(user_id=user_id, first_name="Ada", last_name="Lovelace")
    data = profile.to_dict()
    assert uuid.UUID(data["user_id"]) == user_id
    assert data["first_name"] == "Ada"
    assert data["last_name"] == "Lovelace"
    assert set(data) == {"user_id", "email", "first_name", "last_name", "phone", "image_url"}


def test_password_reset_request():
    request = PasswordResetRequest(email="user@example.com")
    assert request.validate() is request


def test_new_password_request():
    password = "password"
    request = NewPasswordRequest(password=password, password2=password)
    assert request.validate() is request


def test_new_password_request_missing_second():
    password = "password"
    with pytest.raises(ValidationError) as info:
        NewPasswordRequest(password=password).validate()
    assert info.value.failures == (("password2", "required"),)


def test_update_details_missing_last_name():
    with pytest.raises(ValidationError) as info:
        UpdateUserDetailsRequest(first_name="Ada").validate()
    assert info.value.failures == (("last_name", "required"),)


def test_update_phone_required():
    with pytest.raises(ValidationError) as info:
        UpdatePhoneRequest().validate()
    assert info.value.failures == (("phone", "required"),)


def test_update_image_valid_url():
    request = UpdateImageRequest(url="https://example.com/a.png")
    assert request.validate() is request


def test_update_image_bad_url():
    with pytest.raises(ValidationError) as info:
        UpdateImageRequest(url="not a url").validate()
    assert info.value.failures == (("url", "url"),)