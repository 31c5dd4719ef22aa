"""Data transfer objects for user registration and login."""

from dataclasses import dataclass
from typing import List

from pydantic import EmailStr, TypeAdapter, ValidationError

_email_adapter = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class RegisterUserRequest:
    """Input data for registering a user."""
    email: str
    password: str

    def validate(self) -> List[str]:
        errors = []

        try:
            _email_adapter.validate_python((self.email or "").strip())
        except ValidationError:
            errors.append("invalid email")

        if not self.password or not self.password.strip():
            errors.append("invalid password")

        return errors


@dataclass(frozen=True)
class UserResponse:
    """Public view of a registered user."""

    id: int
    email: str

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(id=user.id, email=user.email)


@dataclass(frozen=True)
class LoginResponse:
    """Access token issued after a successful login."""

    token: str
