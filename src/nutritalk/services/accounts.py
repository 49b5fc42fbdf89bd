"""Account registration, login and bearer tokens."""

import base64
import hashlib
import hmac
import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

import jwt

from nutritalk.domain.models import AccountRecord, AuthSession
from nutritalk.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from nutritalk.services.profiles import ProfileService

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000
_JWT_ALGORITHM = "HS256"


class AccountRepository(Protocol):
    """Persistence interface for accounts."""

    def get_by_email(self, email: str) -> AccountRecord | None:
        """Return the account registered with email, if any."""

    def create_account(self, email: str, name: str, password_hash: str) -> AccountRecord:
        """Create and return a new account."""


def hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash of password."""
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(
        _PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS
    )
    return (
        f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}$"
        f"{_b64encode(salt)}${_b64encode(digest)}"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Return True when password matches password_hash."""
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
        algorithm = scheme.removeprefix("pbkdf2_")
        actual = hashlib.pbkdf2_hmac(
            algorithm, password.encode("utf-8"), _b64decode(salt), int(iterations)
        )
        return hmac.compare_digest(actual, _b64decode(expected))
    except ValueError:
        return False


@dataclass
class TokenIssuer:
    """Issues and decodes HS256 bearer tokens."""

    secret: str
    ttl_days: int = 30

    def issue(self, user_id: UUID) -> str:
        """Return a signed token for user_id."""
        now = datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self.ttl_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=_JWT_ALGORITHM)

    def decode_user_id(self, token: str) -> UUID:
        """Return the user id carried by token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[_JWT_ALGORITHM])
            return UUID(str(payload["sub"]))
        except (jwt.PyJWTError, KeyError, ValueError) as exc:
            raise InvalidTokenError() from exc


@dataclass
class AccountService:
    """Registers accounts and logs users in."""

    repository: AccountRepository
    profile_service: ProfileService
    tokens: TokenIssuer

    def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account with a default profile and return a session."""
        normalized = _normalize_email(email)
        if self.repository.get_by_email(normalized):
            raise DuplicateEmailError()
        account = self.repository.create_account(
            normalized, name, hash_password(password)
        )
        self.profile_service.create_default_profile(
            account.id, name=name, email=normalized
        )
        return AuthSession(token=self.tokens.issue(account.id), user_id=account.id)

    def login(self, email: str, password: str) -> AuthSession:
        """Return a session when the credentials match."""
        account = self.repository.get_by_email(_normalize_email(email))
        if account is None or not verify_password(password, account.password_hash):
            raise InvalidCredentialsError()
        return AuthSession(token=self.tokens.issue(account.id), user_id=account.id)

    def authenticate(self, token: str) -> AuthSession:
        """Return the session for a bearer token."""
        return AuthSession(token=token, user_id=self.tokens.decode_user_id(token))


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + padding).encode("ascii"))
