"""ASGI entrypoint for the security admin API."""

from security_admin.api.app import create_app
from security_admin.containers import build_container

app = create_app(build_container())
