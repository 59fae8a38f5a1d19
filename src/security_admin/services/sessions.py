"""Command handlers for deleting employee and customer sessions."""

import logging
from dataclasses import dataclass
from typing import Protocol

from security_admin.domain.exceptions import (
    CannotBulkDeleteSessionException,
    CannotDeleteSessionException,
    SessionNotFoundException,
)
from security_admin.domain.sessions import (
    BulkDeleteCustomersSessionsCommand,
    DeleteCustomerSessionCommand,
    DeleteEmployeeSessionCommand,
    SessionKind,
    SessionRecord,
)
from security_admin.services.command_bus import CommandBus

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for employee and customer sessions."""

    def get_session(self, kind: SessionKind, session_id: int) -> SessionRecord | None:
        """Return a session by kind and id, if present."""

    def delete_session(self, kind: SessionKind, session_id: int) -> bool:
        """Delete a session and return whether a row was removed."""


@dataclass
class DeleteEmployeeSessionHandler:
    """Deletes one employee session."""

    repository: SessionRepository

    def __call__(self, command: DeleteEmployeeSessionCommand) -> None:
        _delete(self.repository, SessionKind.EMPLOYEE, command.session_id)


@dataclass
class DeleteCustomerSessionHandler:
    """Deletes one customer session."""

    repository: SessionRepository

    def __call__(self, command: DeleteCustomerSessionCommand) -> None:
        _delete(self.repository, SessionKind.CUSTOMER, command.session_id)


@dataclass
class BulkDeleteCustomersSessionsHandler:
    """Deletes customer sessions in order.

    A missing session aborts the batch immediately. Sessions that exist but
    fail to delete are collected and reported once the batch is done.
    """

    repository: SessionRepository

    def __call__(self, command: BulkDeleteCustomersSessionsCommand) -> None:
        failed: list[int] = []
        for session_id in command.session_ids:
            if self.repository.get_session(SessionKind.CUSTOMER, session_id) is None:
                raise SessionNotFoundException(
                    f"Customer session {session_id} not found"
                )
            if not self.repository.delete_session(SessionKind.CUSTOMER, session_id):
                failed.append(session_id)
        if failed:
            raise CannotBulkDeleteSessionException(failed)
        logger.info(
            "Deleted customer sessions",
            extra={"session_ids": list(command.session_ids)},
        )


def _delete(repository: SessionRepository, kind: SessionKind, session_id: int) -> None:
    if repository.get_session(kind, session_id) is None:
        raise SessionNotFoundException(
            f"{kind.value.title()} session {session_id} not found"
        )
    if not repository.delete_session(kind, session_id):
        raise CannotDeleteSessionException(
            f"Cannot delete {kind.value} session {session_id}"
        )
    logger.info(
        "Deleted session", extra={"kind": kind.value, "session_id": session_id}
    )


def register_session_handlers(bus: CommandBus, repository: SessionRepository) -> None:
    """Register the session command handlers on a bus."""
    bus.register(DeleteEmployeeSessionCommand, DeleteEmployeeSessionHandler(repository))
    bus.register(DeleteCustomerSessionCommand, DeleteCustomerSessionHandler(repository))
    bus.register(
        BulkDeleteCustomersSessionsCommand,
        BulkDeleteCustomersSessionsHandler(repository),
    )
