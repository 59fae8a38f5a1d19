"""Mapping of session failures to user-facing messages."""

from collections.abc import Mapping

from security_admin.services.translations import Translator

ErrorMessages = Mapping[type[Exception], str | Mapping[int, str]]

FALLBACK_MESSAGE = "An unexpected error occurred. [%type% code %code%]"


def get_error_message_for_exception(
    exc: Exception, messages: ErrorMessages, translator: Translator
) -> str:
    """Return the message registered for the exact exception type.

    An entry may map exception codes to messages. Unmapped types and codes get
    the generic message naming the exception type and code.
    """
    code = getattr(exc, "code", 0)
    message = messages.get(type(exc))
    if isinstance(message, str):
        return message
    if isinstance(message, Mapping) and code in message:
        return message[code]
    return translator.trans(
        FALLBACK_MESSAGE,
        "Admin.Notifications.Error",
        {"type": type(exc).__name__, "code": code},
    )
