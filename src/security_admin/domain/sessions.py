"""Domain models and commands for employee and customer sessions."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from security_admin.domain.exceptions import SessionConstraintException

MAX_SESSION_ID = 2**63 - 1


class SessionKind(str, Enum):
    """Owner type of a back office or front office session."""

    EMPLOYEE = "employee"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted employee or customer session."""

    id: int
    kind: SessionKind
    owner_id: int
    firstname: str
    lastname: str
    email: str
    updated_at: datetime | None


def validate_session_id(value: object) -> int:
    """Return the value as a positive session id or raise.

    Strings must be ASCII digits short enough to fit a bigint column.
    """
    if isinstance(value, str):
        text = value.strip()
        if (
            text.isascii()
            and text.isdigit()
            and len(text) <= len(str(MAX_SESSION_ID))
        ):
            value = int(text)
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not 0 < value <= MAX_SESSION_ID
    ):
        raise SessionConstraintException(
            f"Invalid session id: {value!r}", SessionConstraintException.INVALID_ID
        )
    return value


@dataclass(frozen=True)
class DeleteEmployeeSessionCommand:
    """Deletes a single employee session."""

    session_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "session_id", validate_session_id(self.session_id))


@dataclass(frozen=True)
class DeleteCustomerSessionCommand:
    """Deletes a single customer session."""

    session_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "session_id", validate_session_id(self.session_id))


@dataclass(frozen=True)
class BulkDeleteCustomersSessionsCommand:
    """Deletes a batch of customer sessions, in order."""

    session_ids: tuple[int, ...]

    def __post_init__(self) -> None:
        if isinstance(self.session_ids, str | bytes) or not isinstance(
            self.session_ids, Iterable
        ):
            raise SessionConstraintException(
                f"Expected a list of session ids, got {self.session_ids!r}",
                SessionConstraintException.INVALID_ID,
            )
        object.__setattr__(
            self,
            "session_ids",
            tuple(validate_session_id(value) for value in self.session_ids),
        )
