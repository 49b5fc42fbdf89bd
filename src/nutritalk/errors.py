"""Domain errors surfaced to API callers."""


class NutritalkError(Exception):
    """Base class for expected, user-facing failures."""

    message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class DuplicateEmailError(NutritalkError):
    """Raised when registering an email that already has an account."""

    message = "User already exists"


class InvalidCredentialsError(NutritalkError):
    """Raised when login credentials do not match an account."""

    message = "Invalid credentials"


class InvalidTokenError(NutritalkError):
    """Raised when a bearer token cannot be decoded or has expired."""

    message = "Invalid token"


class ProfileNotFoundError(NutritalkError):
    """Raised when a user has no stored profile."""

    message = "Profile not found"
