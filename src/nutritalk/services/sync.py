"""Full-account snapshot for client sync."""

from dataclasses import dataclass
from uuid import UUID

from nutritalk.domain.profiles import SyncSnapshot
from nutritalk.services.logs import DailyLogService
from nutritalk.services.profiles import ProfileService
from nutritalk.services.weights import WeightService


@dataclass
class SyncService:
    """Builds sync snapshots."""

    profile_service: ProfileService
    log_service: DailyLogService
    weight_service: WeightService

    def snapshot(self, user_id: UUID) -> SyncSnapshot:
        """Return the profile, every log and the weight history."""
        return SyncSnapshot(
            profile=self.profile_service.get_profile(user_id),
            logs=self.log_service.list_logs(user_id),
            weights=self.weight_service.get_history(user_id),
        )
