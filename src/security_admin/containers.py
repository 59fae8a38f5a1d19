"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from security_admin.adapters.supabase_access_repository import (
    SupabaseAccessRepository,
)
from security_admin.adapters.supabase_configuration_repository import (
    SupabaseConfigurationRepository,
)
from security_admin.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from security_admin.config import Settings
from security_admin.services.access import AccessService
from security_admin.services.command_bus import CommandBus
from security_admin.services.grids import (
    CUSTOMER_SESSIONS_GRID,
    EMPLOYEE_SESSIONS_GRID,
    SessionGridFactory,
)
from security_admin.services.hooks import HookDispatcher
from security_admin.services.security_settings import GeneralFormHandler
from security_admin.services.sessions import register_session_handlers
from security_admin.services.translations import Translator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    command_bus: CommandBus
    general_form_handler: GeneralFormHandler
    employee_sessions_grid_factory: SessionGridFactory
    customer_sessions_grid_factory: SessionGridFactory
    hook_dispatcher: HookDispatcher
    translator: Translator
    access_service: AccessService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(supabase_client)
    configuration_repository = SupabaseConfigurationRepository(supabase_client)
    access_repository = SupabaseAccessRepository(supabase_client)

    command_bus = CommandBus()
    register_session_handlers(command_bus, session_repository)

    async def close_resources() -> None:
        """Release per-process resources on shutdown.

        The synchronous Supabase client lives for the whole process and has
        no async resources to release here.
        """

    return AppContainer(
        settings=resolved_settings,
        command_bus=command_bus,
        general_form_handler=GeneralFormHandler(
            repository=configuration_repository,
            ssl_enabled=resolved_settings.ssl_enabled,
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
