"""Supabase repository for weight history."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutritalk.domain.logs import WeightEntry
from nutritalk.services.weights import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight entries."""

    client: Client

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return weight entries ordered by date."""
        response = (
            self.client.table("weights")
            .select("log_date, weight_kg")
            .eq("user_id", str(user_id))
            .order("log_date", desc=False)
            .execute()
        )
        return [
            WeightEntry(
                day=date.fromisoformat(str(row["log_date"])),
                weight_kg=float(row["weight_kg"]),
            )
            for row in response.data or []
        ]

    def replace_weights(self, user_id: UUID, entries: list[WeightEntry]) -> None:
        """Upsert entries, then delete the dates no longer in the history."""
        payload = [
            {
                "user_id": str(user_id),
                "log_date": entry.day.isoformat(),
                "weight_kg": entry.weight_kg,
            }
            for entry in entries
        ]
        if payload:
            self.client.table("weights").upsert(
                payload, on_conflict="user_id,log_date"
            ).execute()

        response = (
            self.client.table("weights")
            .select("log_date")
            .eq("user_id", str(user_id))
            .execute()
        )
        kept = {row["log_date"] for row in payload}
        stale = sorted({str(row["log_date"]) for row in response.data or []} - kept)
        if stale:
            (
                self.client.table("weights")
                .delete()
                .eq("user_id", str(user_id))
                .in_("log_date", stale)
                .execute()
            )
