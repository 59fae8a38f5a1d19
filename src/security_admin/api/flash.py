"""Flash messages stored in the signed cookie session."""

from fastapi import Request

FLASH_KEY = "_flash_messages"

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"


def add_flash(request: Request, level: str, message: str) -> None:
    """Queue a message for the next rendered page."""
    messages = list(request.session.get(FLASH_KEY, []))
    messages.append({"level": level, "text": message})
    request.session[FLASH_KEY] = messages


def pop_flashes(request: Request) -> list[dict[str, str]]:
    """Return and clear the queued messages."""
    return request.session.pop(FLASH_KEY, [])
