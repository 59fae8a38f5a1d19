"""Authentication and authorization dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from security_admin.domain.access import AuthorizationContext  # noqa: TC001

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from security_admin.containers import AppContainer

ACCESS_DENIED_MESSAGE = "Access denied."
EMPLOYEE_SESSION_KEY = "_admin_employee_id"


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def get_employee_id(
    request: Request,
    x_admin_token: str | None = Header(default=None),
    x_employee_id: int | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> int:
    """Identify the calling employee.

    A request carrying the admin token must also name the employee; the
    identity is then kept in the signed session cookie, so the forms and
    redirects of the rendered pages are recognised without the headers.
    """
    if x_admin_token is not None:
        if (
            not x_admin_token
            or x_admin_token != admin_token
            or x_employee_id is None
        ):
            request.session.pop(EMPLOYEE_SESSION_KEY, None)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        request.session[EMPLOYEE_SESSION_KEY] = x_employee_id
        return x_employee_id

    employee_id = request.session.get(EMPLOYEE_SESSION_KEY)
    if not isinstance(employee_id, int):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return employee_id


async def get_authorization_context(
    request: Request, employee_id: int = Depends(get_employee_id)
) -> AuthorizationContext:
    """Load the capabilities of the calling employee."""
    container: AppContainer = request.app.state.container
    return container.access_service.get_context(employee_id)


def require_permission(
    *actions: str, suffix: str = "", message: str = ACCESS_DENIED_MESSAGE
) -> Callable[..., Awaitable[AuthorizationContext]]:
    """Require every action on the section's resource tag.

    ``suffix`` is appended to the resource tag, which yields a distinct
    permission key from the plain tag.
    """

    async def permission_checker(
        request: Request,
        context: AuthorizationContext = Depends(get_authorization_context),
    ) -> AuthorizationContext:
        container: AppContainer = request.app.state.container
        resource = container.settings.resource_tag + suffix
        if not context.is_granted(actions, resource):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)
        return context

    return permission_checker
