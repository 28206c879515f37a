"""Common models package."""

from users_common.models.user import (
    PASSWORD_MAX_LENGTH,
    CreateUserRequest,
    UpdateUserRequest,
    User,
    UserEntity,
    UserView,
)

__all__ = [
    "PASSWORD_MAX_LENGTH",
    "CreateUserRequest",
    "UpdateUserRequest",
    "User",
    "UserEntity",
    "UserView",
]
