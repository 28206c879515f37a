"""User models for the user service."""

from typing import ClassVar

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only reads the first 72 bytes of a password, measured as UTF-8.
PASSWORD_MAX_LENGTH = 72


def check_password_bytes(password: str) -> str:
    """Reject passwords bcrypt would truncate or refuse."""
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"password cannot be longer than {PASSWORD_MAX_LENGTH} bytes")
    return password


class UserEntity(BaseModel):
    """User document as persisted in the users container."""

    id: str = Field(..., description="Unique identifier for the user")
    name: str
    email: str
    password: str = Field(..., description="bcrypt hash of the user's password")


class User(BaseModel):
    """Domain user record, without credentials."""

    id: str
    name: str
    email: str

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "User":
        return cls(id=entity.id, name=entity.name, email=entity.email)


class UserView(BaseModel):
    """Outward representation of a user."""

    id: str = Field(..., description="Unique identifier for the user")
    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": "0f8b5a9e-3c1d-4b7a-9a52-6f0c2d1e4b33",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
            }
        }


class CreateUserRequest(BaseModel):
    """Body of a create request."""

    name: str = Field(..., min_length=1, description="Full name of the user")
    email: EmailStr = Field(..., description="Email address of the user")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "password": "s3cret",
            }
        }


class UpdateUserRequest(BaseModel):
    """Body of a partial update request. Omitted or null fields are left unchanged."""

    name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        return v if v is None else check_password_bytes(v)

    def supplied_fields(self) -> dict[str, str]:
        """Return only the fields the caller actually provided."""
        return self.model_dump(exclude_none=True)
