"""Named lifecycle hooks for extensions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

HookListener = Callable[[dict[str, object]], None]


@dataclass
class HookDispatcher:
    """Calls the listeners registered for a hook, in registration order."""

    listeners: dict[str, list[HookListener]] = field(default_factory=dict)

    def register(self, hook_name: str, listener: HookListener) -> None:
        """Attach a listener to a hook."""
        self.listeners.setdefault(hook_name, []).append(listener)

    def dispatch(self, hook_name: str, parameters: dict[str, object]) -> None:
        """Notify every listener of the hook."""
        logger.debug("Dispatching hook %s", hook_name)
        for listener in self.listeners.get(hook_name, []):
            listener(parameters)
