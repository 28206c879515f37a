"""Tests for request model validation."""

import pytest
from pydantic import ValidationError

from users_common.models.user import PASSWORD_MAX_LENGTH, CreateUserRequest, UpdateUserRequest

pytestmark = pytest.mark.unit


def _create(password: str) -> CreateUserRequest:
    return CreateUserRequest(name="A", email="a@x.com", password=password)


class TestPasswordLength:
    def test_limit_in_ascii_is_accepted(self):
        assert _create("a" * PASSWORD_MAX_LENGTH).password == "a" * PASSWORD_MAX_LENGTH

    def test_limit_is_counted_in_utf8_bytes(self):
        # 72 characters, 73 bytes.
        password = "a" * (PASSWORD_MAX_LENGTH - 1) + "é"

        with pytest.raises(ValidationError, match="72 bytes"):
            _create(password)

    def test_multibyte_overflow_is_rejected_on_create(self):
        with pytest.raises(ValidationError, match="password"):
            _create("é" * 37)

    def test_multibyte_overflow_is_rejected_on_update(self):
        with pytest.raises(ValidationError, match="72 bytes"):
            UpdateUserRequest(password="密" * 25)

    def test_multibyte_password_within_limit_is_accepted(self):
        assert UpdateUserRequest(password="密" * 24).supplied_fields() == {"password": "密" * 24}

    def test_update_without_password_skips_check(self):
        assert UpdateUserRequest(name="B").supplied_fields() == {"name": "B"}
