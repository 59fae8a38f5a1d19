"""Configure > Advanced parameters > Security pages.

Shows the General security settings form and the employee and customer
session listings, and deletes sessions through the command bus. Every
mutating route ends with a redirect; outcomes are reported as flash messages.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from security_admin.api.dependencies import require_permission
from security_admin.api.errors import get_error_message_for_exception
from security_admin.api.flash import ERROR, SUCCESS, add_flash, pop_flashes
from security_admin.domain.access import CREATE, DELETE, READ, UPDATE
from security_admin.domain.exceptions import SessionException, SessionNotFoundException
from security_admin.domain.grids import CustomerSessionFilters, EmployeeSessionFilters
from security_admin.domain.sessions import (
    BulkDeleteCustomersSessionsCommand,
    DeleteCustomerSessionCommand,
    DeleteEmployeeSessionCommand,
)
from security_admin.services.grids import CUSTOMER_BULK_FIELD

if TYPE_CHECKING:
    from collections.abc import Callable

    from security_admin.api.errors import ErrorMessages
    from security_admin.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/configure/advanced/security", tags=["security"])

templates = Jinja2Templates(directory=Path(__file__).resolve().parents[1] / "templates")

CONTROLLER_NAME = "AdminSecurityController"
EDIT_DENIED_MESSAGE = "You do not have permission to edit this."

can_read = require_permission(READ)
can_update_create_delete = require_permission(UPDATE, CREATE, DELETE)
can_delete = require_permission(DELETE, suffix="_", message=EDIT_DENIED_MESSAGE)


@router.get(
    "/",
    name="admin_security",
    response_class=HTMLResponse,
    dependencies=[Depends(can_read)],
)
async def security_settings(request: Request) -> HTMLResponse:
    """Show the General security settings form."""
    container: AppContainer = request.app.state.container
    form = container.general_form_handler.get_form()
    return _render(
        request,
        container,
        "security/index.html",
        {
            "layout_title": container.translator.trans(
                "Security", "Admin.Navigation.Menu"
            ),
            "general_form": form.create_view(),
        },
    )


@router.post(
    "/",
    name="admin_security_general_process",
    dependencies=[Depends(can_update_create_delete)],
)
async def process_general_form(request: Request) -> RedirectResponse:
    """Process the General security settings form."""
    container: AppContainer = request.app.state.container
    hooks = container.hook_dispatcher
    hooks.dispatch(
        "actionAdminSecurityControllerPostProcessGeneralBefore",
        {"controller": CONTROLLER_NAME},
    )
    hooks.dispatch(
        "actionAdminSecurityControllerPostProcessBefore",
        {"controller": CONTROLLER_NAME},
    )

    form_handler = container.general_form_handler
    form = form_handler.get_form()
    form.handle_request(await request.form())

    if form.is_submitted():
        save_errors = form_handler.save(form.get_data())
        if not save_errors:
            add_flash(
                request,
                SUCCESS,
                container.translator.trans(
                    "Update successful", "Admin.Notifications.Success"
                ),
            )
        else:
            for error in save_errors:
                add_flash(
                    request,
                    ERROR,
                    container.translator.trans(
                        error.key, error.domain, error.parameters
                    ),
                )

    return _redirect(request, "admin_security")


@router.get(
    "/sessions/employees",
    name="admin_security_sessions_employees",
    response_class=HTMLResponse,
    dependencies=[Depends(can_read)],
)
async def employees_sessions(
    request: Request,
    filters: Annotated[EmployeeSessionFilters, Query()],
) -> HTMLResponse:
    """Show the employee sessions listing."""
    container: AppContainer = request.app.state.container
    grid = container.employee_sessions_grid_factory.get_grid(filters)
    return _render(
        request,
        container,
        "security/employees.html",
        {
            "enable_sidebar": True,
            "layout_title": container.translator.trans(
                "Employees Sessions", "Admin.Navigation.Menu"
            ),
            "grid": grid,
            "delete_route": "admin_security_sessions_employees_delete",
            "bulk_form": None,
        },
    )


@router.get(
    "/sessions/customers",
    name="admin_security_sessions_customers",
    response_class=HTMLResponse,
    dependencies=[Depends(can_read)],
)
async def customers_sessions(
    request: Request,
    filters: Annotated[CustomerSessionFilters, Query()],
) -> HTMLResponse:
    """Show the customer sessions listing."""
    container: AppContainer = request.app.state.container
    grid = container.customer_sessions_grid_factory.get_grid(filters)
    return _render(
        request,
        container,
        "security/customers.html",
        {
            "enable_sidebar": True,
            "layout_title": container.translator.trans(
                "Customers Sessions", "Admin.Navigation.Menu"
            ),
            "grid": grid,
            "delete_route": "admin_security_sessions_customers_delete",
            "bulk_form": "customers_sessions_bulk",
        },
    )


@router.post(
    "/sessions/employees/{session_id}/delete",
    name="admin_security_sessions_employees_delete",
    dependencies=[Depends(can_delete)],
)
async def delete_employee_session(
    session_id: int,
    request: Request,
) -> RedirectResponse:
    """Delete an employee session."""
    container: AppContainer = request.app.state.container
    _handle_delete(
        request, container, lambda: DeleteEmployeeSessionCommand(session_id)
    )
    return _redirect(request, "admin_security_sessions_employees")


@router.post(
    "/sessions/customers/{session_id}/delete",
    name="admin_security_sessions_customers_delete",
    dependencies=[Depends(can_delete)],
)
async def delete_customer_session(
    session_id: int,
    request: Request,
) -> RedirectResponse:
    """Delete a customer session."""
    container: AppContainer = request.app.state.container
    _handle_delete(
        request, container, lambda: DeleteCustomerSessionCommand(session_id)
    )
    return _redirect(request, "admin_security_sessions_customers")


@router.post(
    "/sessions/customers/bulk-delete",
    name="admin_security_sessions_customers_bulk_delete",
    dependencies=[Depends(can_delete)],
)
async def bulk_delete_customers_sessions(request: Request) -> RedirectResponse:
    """Delete the selected customer sessions."""
    container: AppContainer = request.app.state.container
    form_data = await request.form()
    session_ids = form_data.getlist(CUSTOMER_BULK_FIELD)
    _handle_delete(
        request,
        container,
        lambda: BulkDeleteCustomersSessionsCommand(tuple(session_ids)),
    )
    return _redirect(request, "admin_security_sessions_customers")


def error_messages(container: AppContainer) -> ErrorMessages:
    """Return the messages for session failures that have a dedicated text."""
    return {
        SessionNotFoundException: container.translator.trans(
            "The object cannot be loaded (or found)", "Admin.Notifications.Error"
        ),
    }


def _handle_delete(
    request: Request, container: AppContainer, build_command: Callable[[], object]
) -> None:
    try:
        command = build_command()
        container.command_bus.handle(command)
        add_flash(
            request,
            SUCCESS,
            container.translator.trans(
                "Successful deletion", "Admin.Notifications.Success"
            ),
        )
    except SessionException as exc:
        logger.warning(
            "Session deletion failed",
            extra={"error": type(exc).__name__, "path": request.url.path},
        )
        add_flash(
            request,
            ERROR,
            get_error_message_for_exception(
                exc, error_messages(container), container.translator
            ),
        )


def _redirect(request: Request, route_name: str) -> RedirectResponse:
    return RedirectResponse(str(request.url_for(route_name)), status_code=302)


def _render(
    request: Request,
    container: AppContainer,
    template: str,
    context: dict[str, object],
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        template,
        {
            **context,
            "flashes": pop_flashes(request),
            "resource_tag": container.settings.resource_tag,
        },
    )
