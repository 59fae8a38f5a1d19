"""Session domain exceptions."""

from collections.abc import Sequence


class SessionException(Exception):  # noqa: N818
    """Base failure for session commands."""

    code = 0

    def __init__(self, message: str = "", code: int | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class SessionNotFoundException(SessionException):
    """The identified session does not exist or was already removed."""


class SessionConstraintException(SessionException):
    """A session identifier failed validation."""

    INVALID_ID = 1


class CannotDeleteSessionException(SessionException):
    """The session exists but could not be deleted."""


class CannotBulkDeleteSessionException(SessionException):
    """Some sessions of a batch could not be deleted."""

    def __init__(self, session_ids: Sequence[int], message: str = "") -> None:
        super().__init__(
            message or f"Failed to delete sessions: {', '.join(map(str, session_ids))}"
        )
        self.session_ids = tuple(session_ids)
