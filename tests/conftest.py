"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime

import pytest

from security_admin.config import Settings
from security_admin.containers import AppContainer
from security_admin.domain.sessions import SessionKind, SessionRecord
from security_admin.services.access import AccessRepository, AccessService
from security_admin.services.command_bus import CommandBus
from security_admin.services.grids import (
    CUSTOMER_SESSIONS_GRID,
    EMPLOYEE_SESSIONS_GRID,
    SessionGridFactory,
    SessionGridRepository,
)
from security_admin.services.hooks import HookDispatcher
from security_admin.services.security_settings import (
    ConfigurationRepository,
    GeneralFormHandler,
)
from security_admin.services.sessions import (
    SessionRepository,
    register_session_handlers,
)
from security_admin.services.translations import Translator

ADMIN_HEADERS = {"X-Admin-Token": "admin-token", "X-Employee-Id": "1"}


@dataclass
class InMemorySessionRepository(SessionRepository, SessionGridRepository):
    """In-memory session repository for tests."""

    sessions: dict[tuple[SessionKind, int], SessionRecord] = field(
        default_factory=dict
    )
    undeletable: set[tuple[SessionKind, int]] = field(default_factory=set)
    deleted: list[tuple[SessionKind, int]] = field(default_factory=list)

    def add(  # noqa: PLR0913
        self,
        kind: SessionKind,
        session_id: int,
        owner_id: int = 1,
        firstname: str = "Jane",
        lastname: str = "Doe",
        email: str = "jane@example.com",
        updated_at: datetime | None = None,
    ) -> SessionRecord:
        record = SessionRecord(
            id=session_id,
            kind=kind,
            owner_id=owner_id,
            firstname=firstname,
            lastname=lastname,
            email=email,
            updated_at=updated_at,
        )
        self.sessions[(kind, session_id)] = record
        return record

    def get_session(self, kind: SessionKind, session_id: int) -> SessionRecord | None:
        return self.sessions.get((kind, session_id))

    def delete_session(self, kind: SessionKind, session_id: int) -> bool:
        if (kind, session_id) in self.undeletable:
            return False
        if self.sessions.pop((kind, session_id), None) is None:
            return False
        self.deleted.append((kind, session_id))
        return True

    def search_sessions(  # noqa: PLR0913
        self,
        kind: SessionKind,
        filters: dict[str, object],
        order_by: str,
        sort_order: str,
        limit: int,
        offset: int,
    ) -> tuple[list[SessionRecord], int]:
        records = [
            record for (k, _), record in self.sessions.items() if k == kind
        ]
        for name, value in filters.items():
            if name in {"firstname", "lastname", "email"}:
                needle = str(value).lower()
                records = [
                    record
                    for record in records
                    if needle in str(getattr(record, name)).lower()
                ]
            else:
                records = [
                    record for record in records if getattr(record, name) == value
                ]
        records.sort(
            key=lambda record: getattr(record, order_by) or "",
            reverse=sort_order == "desc",
        )
        return records[offset : offset + limit], len(records)


@dataclass
class InMemoryConfigurationRepository(ConfigurationRepository):
    """In-memory configuration repository for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def set(self, name: str, value: str) -> None:
        self.values[name] = value
        self.writes.append((name, value))


@dataclass
class InMemoryAccessRepository(AccessRepository):
    """In-memory grants repository for tests."""

    grants: dict[int, dict[str, set[str]]] = field(default_factory=dict)

    def list_grants(self, employee_id: int) -> dict[str, set[str]]:
        return self.grants.get(employee_id, {})


@dataclass
class RecordingCommandBus(CommandBus):
    """Command bus that records every handled command."""

    handled: list[object] = field(default_factory=list)

    def handle(self, command: object) -> object:
        self.handled.append(command)
        return super().handle(command)


@dataclass
class SpyFormHandler(GeneralFormHandler):
    """Form handler that records save calls."""

    saved: list[dict[str, object]] = field(default_factory=list)

    def save(self, data):  # type: ignore[no-untyped-def]
        self.saved.append(dict(data))
        return super().save(data)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
        session_secret_key="test-secret",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def configuration_repository() -> InMemoryConfigurationRepository:
    return InMemoryConfigurationRepository()


@pytest.fixture
def access_repository() -> InMemoryAccessRepository:
    return InMemoryAccessRepository(
        grants={
            1: {
                "AdminSecurity": {"read", "create", "update", "delete"},
                "AdminSecurity_": {"delete"},
            }
        }
    )


@pytest.fixture
def container(
    settings: Settings,
    session_repository: InMemorySessionRepository,
    configuration_repository: InMemoryConfigurationRepository,
    access_repository: InMemoryAccessRepository,
) -> AppContainer:
    command_bus = RecordingCommandBus()
    register_session_handlers(command_bus, session_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        command_bus=command_bus,
        general_form_handler=SpyFormHandler(
            repository=configuration_repository,
            ssl_enabled=settings.ssl_enabled,
        ),
        employee_sessions_grid_factory=SessionGridFactory(
            EMPLOYEE_SESSIONS_GRID, session_repository
        ),
        customer_sessions_grid_factory=SessionGridFactory(
            CUSTOMER_SESSIONS_GRID, session_repository
        ),
        hook_dispatcher=HookDispatcher(),
        translator=Translator(),
        access_service=AccessService(access_repository),
        close_resources=close_resources,
    )
