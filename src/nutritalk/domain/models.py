"""Domain models for accounts and auth sessions."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AccountRecord:
    """Represents an account stored in the database."""

    id: UUID
    email: str
    name: str
    password_hash: str


@dataclass(frozen=True)
class AuthSession:
    """Bearer token and the user id it was issued for."""

    token: str
    user_id: UUID

    @property
    def authorization_header(self) -> dict[str, str]:
        """Return the header that authenticates outbound requests."""
        return {"Authorization": f"Bearer {self.token}"}
