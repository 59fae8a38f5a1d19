"""Domain models for session listing grids."""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

SortOrder = Literal["asc", "desc"]


class SessionFilters(BaseModel):
    """Pagination, ordering and column filters of a session grid."""

    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)
    order_by: str | None = None
    sort_order: SortOrder = "asc"
    owner_id: int | None = None
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None

    def column_filters(self) -> dict[str, object]:
        """Return only the column filters that carry a value."""
        values = {
            "owner_id": self.owner_id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "email": self.email,
        }
        return {key: value for key, value in values.items() if value not in {None, ""}}


class EmployeeSessionFilters(SessionFilters):
    """Filters of the employee sessions grid."""

    id_employee_session: int | None = None

    def column_filters(self) -> dict[str, object]:
        filters = super().column_filters()
        if self.id_employee_session is not None:
            filters["id"] = self.id_employee_session
        return filters


class CustomerSessionFilters(SessionFilters):
    """Filters of the customer sessions grid."""

    id_customer_session: int | None = None

    def column_filters(self) -> dict[str, object]:
        filters = super().column_filters()
        if self.id_customer_session is not None:
            filters["id"] = self.id_customer_session
        return filters


@dataclass(frozen=True)
class GridColumn:
    """A displayed grid column."""

    id: str
    name: str
    sortable: bool = True


@dataclass(frozen=True)
class Grid:
    """A materialized, paginated grid ready for rendering."""

    id: str
    name: str
    columns: list[GridColumn]
    rows: list[dict[str, object]]
    total: int
    filters: SessionFilters
    bulk_field: str | None = None
    actions: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Return the number of pages for the current limit."""
        if self.total == 0:
            return 1
        return (self.total + self.filters.limit - 1) // self.filters.limit
