"""Domain error kinds shared by the storage adapter, the user service and the API."""

from typing import ClassVar


class UserServiceError(Exception):
    """Base class for every error the user service reports to callers."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(UserServiceError):
    """Malformed input or identifier."""

    status_code = 400
    default_message = "bad request"


class NotFoundError(UserServiceError):
    """No record matched the request."""

    status_code = 404
    default_message = "user with that id does not exist"


class EmailAlreadyInUseError(UserServiceError):
    """Another record already owns the email address."""

    status_code = 409
    default_message = "a user with that email already exists"


class ServerError(UserServiceError):
    """Storage or password hashing fault."""

    status_code = 500
    default_message = "server error"
