"""Grid factories for the session listing pages."""

from dataclasses import dataclass
from typing import Protocol

from security_admin.domain.grids import Grid, GridColumn, SessionFilters
from security_admin.domain.sessions import SessionKind, SessionRecord

CUSTOMER_BULK_FIELD = "security_sessions_customers_bulk"


class SessionGridRepository(Protocol):
    """Query interface for paginated session listings."""

    def search_sessions(
        self,
        kind: SessionKind,
        filters: dict[str, object],
        order_by: str,
        sort_order: str,
        limit: int,
        offset: int,
    ) -> tuple[list[SessionRecord], int]:
        """Return one page of sessions and the total matching count."""


@dataclass(frozen=True)
class GridDefinition:
    """Static description of a session grid."""

    id: str
    name: str
    kind: SessionKind
    id_column: str
    owner_column: str
    bulk_field: str | None

    @property
    def columns(self) -> list[GridColumn]:
        return [
            GridColumn(id=self.id_column, name="ID"),
            GridColumn(id=self.owner_column, name=f"{self.kind.value.title()} ID"),
            GridColumn(id="firstname", name="First name"),
            GridColumn(id="lastname", name="Last name"),
            GridColumn(id="email", name="Email address"),
            GridColumn(id="date_upd", name="Last update"),
        ]


EMPLOYEE_SESSIONS_GRID = GridDefinition(
    id="security_sessions_employees",
    name="Employees Sessions",
    kind=SessionKind.EMPLOYEE,
    id_column="id_employee_session",
    owner_column="id_employee",
    bulk_field=None,
)

CUSTOMER_SESSIONS_GRID = GridDefinition(
    id="security_sessions_customers",
    name="Customers Sessions",
    kind=SessionKind.CUSTOMER,
    id_column="id_customer_session",
    owner_column="id_customer",
    bulk_field=CUSTOMER_BULK_FIELD,
)

# Column ids exposed to clients mapped to repository sort keys.
_SORT_KEYS = {
    "firstname": "firstname",
    "lastname": "lastname",
    "email": "email",
    "date_upd": "updated_at",
}


@dataclass
class SessionGridFactory:
    """Builds a session grid for a definition and a set of filters."""

    definition: GridDefinition
    repository: SessionGridRepository

    def get_grid(self, filters: SessionFilters) -> Grid:
        """Materialize the grid page described by the filters."""
        records, total = self.repository.search_sessions(
            kind=self.definition.kind,
            filters=filters.column_filters(),
            order_by=self._sort_key(filters.order_by),
            sort_order=filters.sort_order,
            limit=filters.limit,
            offset=filters.offset,
        )
        return Grid(
            id=self.definition.id,
            name=self.definition.name,
            columns=self.definition.columns,
            rows=[self._row(record) for record in records],
            total=total,
            filters=filters,
            bulk_field=self.definition.bulk_field,
            actions=["delete"],
        )

    def _sort_key(self, order_by: str | None) -> str:
        if order_by == self.definition.owner_column:
            return "owner_id"
        return _SORT_KEYS.get(order_by or "", "id")

    def _row(self, record: SessionRecord) -> dict[str, object]:
        return {
            self.definition.id_column: record.id,
            self.definition.owner_column: record.owner_id,
            "firstname": record.firstname,
            "lastname": record.lastname,
            "email": record.email,
            "date_upd": record.updated_at.isoformat(sep=" ", timespec="seconds")
            if record.updated_at
            else "",
        }
