"""Tests for admin authentication and capability checks."""

from fastapi.testclient import TestClient

from security_admin.api.app import create_app
from security_admin.containers import AppContainer
from security_admin.domain.access import AuthorizationContext
from security_admin.domain.sessions import SessionKind
from security_admin.services.access import AccessService
from tests.conftest import InMemoryAccessRepository, InMemorySessionRepository

BASE = "/configure/advanced/security"


def _headers(employee_id: int) -> dict[str, str]:
    return {"X-Admin-Token": "admin-token", "X-Employee-Id": str(employee_id)}


def test_pages_require_admin_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"{BASE}/")

    assert response.status_code == 401


def test_pages_require_employee_id(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"{BASE}/", headers={"X-Admin-Token": "admin-token"})

    assert response.status_code == 401


def test_read_capability_is_required_for_listing(
    container: AppContainer, access_repository: InMemoryAccessRepository
) -> None:
    access_repository.grants[2] = {"AdminSecurity": {"update"}}
    client = TestClient(create_app(container))

    response = client.get(f"{BASE}/sessions/employees", headers=_headers(2))

    assert response.status_code == 403


def test_settings_form_requires_update_create_and_delete(
    container: AppContainer, access_repository: InMemoryAccessRepository
) -> None:
    access_repository.grants[2] = {"AdminSecurity": {"read", "update", "create"}}
    client = TestClient(create_app(container))

    response = client.post(f"{BASE}/", headers=_headers(2), follow_redirects=False)

    assert response.status_code == 403


def test_delete_uses_suffixed_resource_tag(
    container: AppContainer,
    access_repository: InMemoryAccessRepository,
    session_repository: InMemorySessionRepository,
) -> None:
    session_repository.add(SessionKind.EMPLOYEE, 1)
    access_repository.grants[2] = {"AdminSecurity": {"read", "delete"}}
    client = TestClient(create_app(container))

    response = client.post(
        f"{BASE}/sessions/employees/1/delete",
        headers=_headers(2),
        follow_redirects=False,
    )

    assert response.status_code == 403
    assert response.json() == {"detail": "You do not have permission to edit this."}
    assert session_repository.get_session(SessionKind.EMPLOYEE, 1) is not None


def test_delete_allowed_with_suffixed_grant(
    container: AppContainer,
    access_repository: InMemoryAccessRepository,
    session_repository: InMemorySessionRepository,
) -> None:
    session_repository.add(SessionKind.EMPLOYEE, 1)
    access_repository.grants[2] = {"AdminSecurity_": {"delete"}}
    client = TestClient(create_app(container))

    response = client.post(
        f"{BASE}/sessions/employees/1/delete",
        headers=_headers(2),
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert session_repository.get_session(SessionKind.EMPLOYEE, 1) is None


def test_authorization_context_requires_every_action() -> None:
    context = AuthorizationContext(
        employee_id=1, grants={"AdminSecurity": frozenset({"read", "update"})}
    )

    assert context.is_granted(["read"], "AdminSecurity")
    assert not context.is_granted(["read", "delete"], "AdminSecurity")
    assert not context.is_granted(["read"], "AdminSecurity_")


def test_access_service_normalizes_actions(
    access_repository: InMemoryAccessRepository,
) -> None:
    access_repository.grants[3] = {"AdminSecurity": {"READ", "Delete"}}

    context = AccessService(access_repository).get_context(3)

    assert context.grants == {"AdminSecurity": frozenset({"read", "delete"})}


def test_session_cookie_identifies_employee_after_header_login(
    container: AppContainer,
) -> None:
    client = TestClient(create_app(container))

    assert client.get(f"{BASE}/", headers=_headers(1)).status_code == 200
    assert client.get(f"{BASE}/sessions/employees").status_code == 200


def test_wrong_token_discards_remembered_employee(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    client.get(f"{BASE}/", headers=_headers(1))

    response = client.get(
        f"{BASE}/", headers={"X-Admin-Token": "wrong", "X-Employee-Id": "1"}
    )

    assert response.status_code == 401
    assert client.get(f"{BASE}/").status_code == 401
