"""Common services package."""

from users_common.services.user_service import DefaultUserService, UserService, parse_user_id

__all__ = ["DefaultUserService", "UserService", "parse_user_id"]
