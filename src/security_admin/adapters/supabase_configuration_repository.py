"""Supabase repository for shop configuration values."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from security_admin.services.security_settings import ConfigurationRepository


@dataclass
class SupabaseConfigurationRepository(ConfigurationRepository):
    """Supabase implementation for configuration values."""

    client: Client

    def get(self, name: str) -> str | None:
        """Return the stored value for a configuration key."""
        response = (
            self.client.table("configuration")
            .select("value")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return None if value is None else str(value)

    def set(self, name: str, value: str) -> None:
        """Create or update a configuration key."""
        self.client.table("configuration").upsert(
            {
                "name": name,
                "value": value,
                "date_upd": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="name",
        ).execute()
