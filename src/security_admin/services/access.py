"""Loading employee capabilities for authorization checks."""

from dataclasses import dataclass
from typing import Protocol

from security_admin.domain.access import AuthorizationContext


class AccessRepository(Protocol):
    """Persistence interface for employee grants."""

    def list_grants(self, employee_id: int) -> dict[str, set[str]]:
        """Return granted actions per resource tag."""


@dataclass
class AccessService:
    """Builds authorization contexts for employees."""

    repository: AccessRepository

    def get_context(self, employee_id: int) -> AuthorizationContext:
        """Return the capabilities granted to an employee."""
        grants = self.repository.list_grants(employee_id)
        return AuthorizationContext(
            employee_id=employee_id,
            grants={
                resource: frozenset(action.lower() for action in actions)
                for resource, actions in grants.items()
            },
        )
