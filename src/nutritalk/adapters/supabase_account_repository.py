"""Supabase-backed account repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutritalk.domain.models import AccountRecord
from nutritalk.services.accounts import AccountRepository


@dataclass
class SupabaseAccountRepository(AccountRepository):
    """Supabase implementation for account persistence."""

    client: Client

    def get_by_email(self, email: str) -> AccountRecord | None:
        """Return the account for an email, if present."""
        response = (
            self.client.table("users")
            .select("id, email, name, password_hash")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_account(response.data[0])
        return None

    def create_account(self, email: str, name: str, password_hash: str) -> AccountRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"email": email, "name": name, "password_hash": password_hash})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_account(response.data[0])


def _parse_account(row: dict[str, object]) -> AccountRecord:
    return AccountRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        name=str(row.get("name") or ""),
        password_hash=str(row["password_hash"]),
    )
