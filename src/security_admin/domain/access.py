"""Authorization domain models."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

READ = "read"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"


@dataclass(frozen=True)
class AuthorizationContext:
    """Capabilities granted to an employee, per resource tag."""

    employee_id: int
    grants: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def is_granted(self, actions: Iterable[str], resource: str) -> bool:
        """Return True when every action is granted on the resource."""
        granted = self.grants.get(resource, frozenset())
        return all(action in granted for action in actions)
