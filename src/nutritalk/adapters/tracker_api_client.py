"""HTTP client for the NutriTalk REST API."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

import httpx

from nutritalk.domain.models import AuthSession
from nutritalk.domain.payloads import (
    DailyLogPayload,
    ProfilePayload,
    ProfileUpdatePayload,
    SessionPayload,
    SyncPayload,
    WeightPayload,
)


class TrackerApiClient(Protocol):
    """Interface for calls against the tracker backend."""

    async def get_daily_log(self, session: AuthSession, day: date) -> DailyLogPayload:
        """Fetch the log for a date."""

    async def save_daily_log(
        self, session: AuthSession, log: DailyLogPayload
    ) -> DailyLogPayload:
        """Replace the log for its date."""

    async def get_profile(self, session: AuthSession) -> ProfilePayload:
        """Fetch the user's profile."""

    async def update_profile(
        self, session: AuthSession, changes: ProfileUpdatePayload
    ) -> ProfilePayload:
        """Apply a partial profile update."""

    async def get_weights(self, session: AuthSession) -> list[WeightPayload]:
        """Fetch the weight history."""

    async def save_weights(
        self, session: AuthSession, weights: list[WeightPayload]
    ) -> list[WeightPayload]:
        """Replace the weight history."""

    async def sync_all(self, session: AuthSession) -> SyncPayload:
        """Fetch the profile, every log and the weight history."""


@dataclass
class HttpxTrackerApiClient(TrackerApiClient):
    """Tracker client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxTrackerApiClient":
        """Create a tracker client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account and return its session."""
        data = await self._request(
            "POST",
            "/register",
            json={"email": email, "password": password, "name": name},
        )
        return _to_session(data)

    async def login(self, email: str, password: str) -> AuthSession:
        """Log in and return a session."""
        data = await self._request(
            "POST", "/login", json={"email": email, "password": password}
        )
        return _to_session(data)

    async def get_daily_log(self, session: AuthSession, day: date) -> DailyLogPayload:
        """Fetch the log for a date."""
        data = await self._request(
            "GET", f"/logs/{session.user_id}/{day.isoformat()}", session=session
        )
        return DailyLogPayload.model_validate(data)

    async def save_daily_log(
        self, session: AuthSession, log: DailyLogPayload
    ) -> DailyLogPayload:
        """Replace the log for its date."""
        data = await self._request(
            "POST",
            f"/logs/{session.user_id}/{log.day.isoformat()}",
            session=session,
            json=log.model_dump(mode="json", by_alias=True),
        )
        return DailyLogPayload.model_validate(data)

    async def get_profile(self, session: AuthSession) -> ProfilePayload:
        """Fetch the user's profile."""
        data = await self._request(
            "GET", f"/profile/{session.user_id}", session=session
        )
        return ProfilePayload.model_validate(data)

    async def update_profile(
        self, session: AuthSession, changes: ProfileUpdatePayload
    ) -> ProfilePayload:
        """Apply a partial profile update."""
        data = await self._request(
            "PUT",
            f"/profile/{session.user_id}",
            session=session,
            json=changes.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return ProfilePayload.model_validate(data)

    async def get_weights(self, session: AuthSession) -> list[WeightPayload]:
        """Fetch the weight history."""
        data = await self._request(
            "GET", f"/weights/{session.user_id}", session=session
        )
        return [WeightPayload.model_validate(item) for item in data]

    async def save_weights(
        self, session: AuthSession, weights: list[WeightPayload]
    ) -> list[WeightPayload]:
        """Replace the weight history."""
        data = await self._request(
            "POST",
            f"/weights/{session.user_id}",
            session=session,
            json=[w.model_dump(mode="json", by_alias=True) for w in weights],
        )
        return [WeightPayload.model_validate(item) for item in data]

    async def sync_all(self, session: AuthSession) -> SyncPayload:
        """Fetch the profile, every log and the weight history."""
        data = await self._request("GET", f"/sync/{session.user_id}", session=session)
        return SyncPayload.model_validate(data)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        session: AuthSession | None = None,
        json: object | None = None,
    ) -> object:
        headers = session.authorization_header if session else {}
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            headers=headers,
            json=json,
            timeout=15,
        )
        response.raise_for_status()
        return response.json()


def _to_session(data: object) -> AuthSession:
    payload = SessionPayload.model_validate(data)
    return AuthSession(token=payload.token, user_id=UUID(str(payload.user_id)))
