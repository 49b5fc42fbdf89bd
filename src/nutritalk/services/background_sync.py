"""Best-effort pushes and pulls against the tracker backend."""

import logging
from dataclasses import dataclass

import httpx

from nutritalk.adapters.tracker_api_client import TrackerApiClient
from nutritalk.domain.models import AuthSession
from nutritalk.domain.payloads import DailyLogPayload, ProfileUpdatePayload, SyncPayload

_logger = logging.getLogger(__name__)


@dataclass
class BackgroundSync:
    """Wraps a tracker client so failures never reach the caller.

    Local state stays authoritative: a failed push returns False and a failed
    pull returns None.
    """

    client: TrackerApiClient

    async def push_log(self, session: AuthSession, log: DailyLogPayload) -> bool:
        """Send a daily log; return whether the backend accepted it."""
        try:
            await self.client.save_daily_log(session, log)
        except httpx.HTTPError as exc:
            _logger.warning("Daily log sync failed for %s: %s", log.day, exc)
            return False
        return True

    async def push_profile(
        self, session: AuthSession, changes: ProfileUpdatePayload
    ) -> bool:
        """Send profile changes; return whether the backend accepted them."""
        try:
            await self.client.update_profile(session, changes)
        except httpx.HTTPError as exc:
            _logger.warning("Profile sync failed: %s", exc)
            return False
        return True

    async def pull(self, session: AuthSession) -> SyncPayload | None:
        """Fetch a full snapshot, or None when the backend is unreachable."""
        try:
            return await self.client.sync_all(session)
        except httpx.HTTPError as exc:
            _logger.warning("Sync pull failed: %s", exc)
            return None
