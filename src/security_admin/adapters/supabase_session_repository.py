"""Supabase-backed employee and customer session repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from security_admin.domain.sessions import SessionKind, SessionRecord
from security_admin.services.grids import SessionGridRepository
from security_admin.services.sessions import SessionRepository


@dataclass(frozen=True)
class _SessionTable:
    table: str
    id_column: str
    owner_column: str
    owner_table: str


_TABLES = {
    SessionKind.EMPLOYEE: _SessionTable(
        table="employee_session",
        id_column="id_employee_session",
        owner_column="id_employee",
        owner_table="employee",
    ),
    SessionKind.CUSTOMER: _SessionTable(
        table="customer_session",
        id_column="id_customer_session",
        owner_column="id_customer",
        owner_table="customer",
    ),
}

_TEXT_FILTERS = ("firstname", "lastname", "email")


@dataclass
class SupabaseSessionRepository(SessionRepository, SessionGridRepository):
    """Supabase implementation for session lookups, listings and deletion."""

    client: Client

    def get_session(self, kind: SessionKind, session_id: int) -> SessionRecord | None:
        """Return a session by kind and id."""
        source = _TABLES[kind]
        response = (
            self.client.table(source.table)
            .select(_columns(source))
            .eq(source.id_column, session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(kind, source, response.data[0])

    def delete_session(self, kind: SessionKind, session_id: int) -> bool:
        """Delete a session row and report whether it was removed."""
        source = _TABLES[kind]
        response = (
            self.client.table(source.table)
            .delete()
            .eq(source.id_column, session_id)
            .execute()
        )
        return bool(response.data)

    def search_sessions(  # noqa: PLR0913
        self,
        kind: SessionKind,
        filters: dict[str, object],
        order_by: str,
        sort_order: str,
        limit: int,
        offset: int,
    ) -> tuple[list[SessionRecord], int]:
        """Return one page of sessions and the total matching count."""
        source = _TABLES[kind]
        inner = any(name in filters for name in _TEXT_FILTERS)
        query = self.client.table(source.table).select(
            _columns(source, inner=inner), count="exact"
        )
        if "id" in filters:
            query = query.eq(source.id_column, filters["id"])
        if "owner_id" in filters:
            query = query.eq(source.owner_column, filters["owner_id"])
        for name in _TEXT_FILTERS:
            if name in filters:
                column = f"{source.owner_table}.{name}"
                query = query.ilike(column, f"%{filters[name]}%")
        response = (
            query.order(_order_column(source, order_by), desc=sort_order == "desc")
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        return [_to_record(kind, source, row) for row in rows], total


def _columns(source: _SessionTable, inner: bool = False) -> str:
    relation = f"{source.owner_table}!inner" if inner else source.owner_table
    return (
        f"{source.id_column}, {source.owner_column}, date_upd, "
        f"{relation}(firstname, lastname, email)"
    )


def _order_column(source: _SessionTable, order_by: str) -> str:
    if order_by == "owner_id":
        return source.owner_column
    if order_by == "updated_at":
        return "date_upd"
    if order_by in _TEXT_FILTERS:
        return f"{source.owner_table}({order_by})"
    return source.id_column


def _to_record(
    kind: SessionKind, source: _SessionTable, row: dict[str, object]
) -> SessionRecord:
    owner = row.get(source.owner_table) or {}
    if not isinstance(owner, dict):
        owner = {}
    updated = row.get("date_upd")
    return SessionRecord(
        id=int(row[source.id_column]),
        kind=kind,
        owner_id=int(row[source.owner_column]),
        firstname=str(owner.get("firstname") or ""),
        lastname=str(owner.get("lastname") or ""),
        email=str(owner.get("email") or ""),
        updated_at=datetime.fromisoformat(updated)
        if isinstance(updated, str) and updated
        else None,
    )
