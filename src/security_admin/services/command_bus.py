"""Synchronous command bus dispatching commands to registered handlers."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]


class CommandHandlerNotFoundError(LookupError):
    """Raised when no handler is registered for a command type."""

    def __init__(self, command_type: type) -> None:
        super().__init__(f"No handler registered for {command_type.__name__}")
        self.command_type = command_type


@dataclass
class CommandBus:
    """Routes a command object to the handler registered for its type."""

    handlers: dict[type, CommandHandler] = field(default_factory=dict)

    def register(self, command_type: type, handler: CommandHandler) -> None:
        """Register the handler for a command type, replacing any previous one."""
        self.handlers[command_type] = handler

    def handle(self, command: object) -> Any:
        """Execute the command and return the handler result.

        Handler exceptions are not caught here; callers decide which
        failures they can report.
        """
        handler = self.handlers.get(type(command))
        if handler is None:
            raise CommandHandlerNotFoundError(type(command))
        logger.debug("Dispatching %s", type(command).__name__)
        return handler(command)
