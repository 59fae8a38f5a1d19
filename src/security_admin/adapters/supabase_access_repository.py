"""Supabase repository for employee grants."""

from dataclasses import dataclass

from supabase import Client

from security_admin.services.access import AccessRepository


@dataclass
class SupabaseAccessRepository(AccessRepository):
    """Supabase implementation for employee grants."""

    client: Client

    def list_grants(self, employee_id: int) -> dict[str, set[str]]:
        """Return granted actions per resource tag for an employee."""
        response = (
            self.client.table("employee_access")
            .select("resource, action")
            .eq("id_employee", employee_id)
            .execute()
        )
        grants: dict[str, set[str]] = {}
        for row in response.data or []:
            grants.setdefault(str(row["resource"]), set()).add(str(row["action"]))
        return grants
