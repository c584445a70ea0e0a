"""User and auth schemas."""

from uuid import UUID

from pydantic import Field

from vidly.schemas.common import APIModel, RequestModel


class UserCreateRequest(RequestModel):
    """Register a user."""

    name: str = Field(min_length=3, max_length=50)
    email: str = Field(min_length=5, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=5, max_length=255)


class LoginRequest(RequestModel):
    """Exchange credentials for a token."""

    email: str = Field(min_length=5, max_length=255)
    password: str = Field(min_length=5, max_length=255)


class UserResponse(APIModel):
    """Public user payload."""

    id: UUID
    name: str
    email: str
    is_admin: bool


class RegistrationResponse(APIModel):
    """Newly registered user and its first token."""

    user: UserResponse
    token: str
