"""User and authentication domain exceptions."""

from .base import DomainException


class InvalidUserRequestException(DomainException):
    """Raised when a registration request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_USER_REQUEST",
        )


class UserAlreadyExistsException(DomainException):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            message=f"User already exists: {email}",
            code="USER_ALREADY_EXISTS",
        )
        self.email = email


class InvalidCredentialsException(DomainException):
    """Raised when a login attempt does not match a user."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class InvalidTokenException(DomainException):
    """Raised when an access token is missing, malformed or expired."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(
            message=message,
            code="INVALID_TOKEN",
        )
