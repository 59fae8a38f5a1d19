"""Form handling for the General security settings."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from security_admin.domain.security_settings import (
    MAX_COOKIE_LIFETIME,
    MIN_COOKIE_LIFETIME,
    SAMESITE_VALUES,
    GeneralSettings,
    SaveError,
)

logger = logging.getLogger(__name__)

FORM_NAME = "general"

CONFIGURATION_KEYS = {
    "check_cookie_ip": "PS_COOKIE_CHECKIP",
    "front_cookie_lifetime": "PS_COOKIE_LIFETIME_FO",
    "back_cookie_lifetime": "PS_COOKIE_LIFETIME_BO",
    "cookie_samesite": "PS_COOKIE_SAMESITE",
}

FIELD_LABELS = {
    "check_cookie_ip": "Check the cookie's IP address",
    "front_cookie_lifetime": "Lifetime of front office cookies",
    "back_cookie_lifetime": "Lifetime of back office cookies",
    "cookie_samesite": "Cookie SameSite",
}

_CHECKBOX_TRUE = {"1", "on", "true", "yes"}

INVALID_LIFETIME = (
    "%field% is invalid. Please enter an integer between %min% and %max%."
)
INVALID_CHOICE = "%field% is invalid. Allowed values are: %choices%."
INVALID_FIELD = "%field% is invalid."
SAMESITE_NONE_REQUIRES_SSL = (
    "The SameSite=None attribute is only available in secure mode."
)


class ConfigurationRepository(Protocol):
    """Persistence interface for shop configuration values."""

    def get(self, name: str) -> str | None:
        """Return a configuration value, if set."""

    def set(self, name: str, value: str) -> None:
        """Create or update a configuration value."""


@dataclass(frozen=True)
class FormField:
    """Rendering data of a single form field."""

    name: str
    full_name: str
    label: str
    widget: str
    value: object
    choices: tuple[str, ...] = ()


@dataclass
class GeneralForm:
    """The General settings form, bound to at most one request."""

    initial: dict[str, object]
    data: dict[str, object] = field(default_factory=dict)
    submitted: bool = False

    def __post_init__(self) -> None:
        if not self.data:
            self.data = dict(self.initial)

    def handle_request(self, form_data: Mapping[str, str] | None) -> None:
        """Bind the request body when it carries fields of this form."""
        if not form_data:
            return
        prefix = f"{FORM_NAME}["
        values = {
            key[len(prefix) : -1]: value
            for key, value in form_data.items()
            if key.startswith(prefix) and key.endswith("]")
        }
        if not values:
            return
        self.submitted = True
        data = dict(self.initial)
        for name in FIELD_LABELS:
            if name == "check_cookie_ip":
                raw = values.get(name)
                data[name] = raw is not None and str(raw).lower() in _CHECKBOX_TRUE
            elif name in values:
                data[name] = str(values[name]).strip()
        self.data = data

    def is_submitted(self) -> bool:
        """Return True once a request carrying this form was bound."""
        return self.submitted

    def get_data(self) -> dict[str, object]:
        """Return the bound data, or the initial data when not submitted."""
        return dict(self.data)

    def create_view(self) -> list[FormField]:
        """Return the fields to render."""
        fields = []
        for name, label in FIELD_LABELS.items():
            if name == "check_cookie_ip":
                widget = "checkbox"
            elif name == "cookie_samesite":
                widget = "choice"
            else:
                widget = "number"
            fields.append(
                FormField(
                    name=name,
                    full_name=f"{FORM_NAME}[{name}]",
                    label=label,
                    widget=widget,
                    value=self.data.get(name),
                    choices=SAMESITE_VALUES if widget == "choice" else (),
                )
            )
        return fields


@dataclass
class GeneralFormHandler:
    """Loads, validates and saves the General security settings."""

    repository: ConfigurationRepository
    ssl_enabled: bool = False

    def get_form(self) -> GeneralForm:
        """Return a form populated from the persisted configuration."""
        return GeneralForm(initial=self._load())

    def save(self, data: Mapping[str, object]) -> list[SaveError]:
        """Validate and persist the data, returning the errors found."""
        try:
            settings = GeneralSettings.model_validate(dict(data))
        except ValidationError as exc:
            errors = [_to_save_error(error) for error in exc.errors()]
            logger.info(
                "Security settings rejected", extra={"error_count": len(errors)}
            )
            return errors

        if settings.cookie_samesite == "None" and not self.ssl_enabled:
            return [SaveError(key=SAMESITE_NONE_REQUIRES_SSL)]

        self.repository.set(
            CONFIGURATION_KEYS["check_cookie_ip"],
            "1" if settings.check_cookie_ip else "0",
        )
        self.repository.set(
            CONFIGURATION_KEYS["front_cookie_lifetime"],
            str(settings.front_cookie_lifetime),
        )
        self.repository.set(
            CONFIGURATION_KEYS["back_cookie_lifetime"],
            str(settings.back_cookie_lifetime),
        )
        self.repository.set(
            CONFIGURATION_KEYS["cookie_samesite"], settings.cookie_samesite
        )
        return []

    def _load(self) -> dict[str, object]:
        defaults = GeneralSettings()
        check_ip = self.repository.get(CONFIGURATION_KEYS["check_cookie_ip"])
        front = self.repository.get(CONFIGURATION_KEYS["front_cookie_lifetime"])
        back = self.repository.get(CONFIGURATION_KEYS["back_cookie_lifetime"])
        samesite = self.repository.get(CONFIGURATION_KEYS["cookie_samesite"])
        return {
            "check_cookie_ip": defaults.check_cookie_ip
            if check_ip is None
            else check_ip == "1",
            "front_cookie_lifetime": _to_int(front, defaults.front_cookie_lifetime),
            "back_cookie_lifetime": _to_int(back, defaults.back_cookie_lifetime),
            "cookie_samesite": samesite
            if samesite in SAMESITE_VALUES
            else defaults.cookie_samesite,
        }


def _to_int(raw: str | None, default: int) -> int:
    if raw is None or not raw.strip().lstrip("-").isdigit():
        return default
    return int(raw)


def _to_save_error(error: Mapping[str, object]) -> SaveError:
    location = error.get("loc") or ("",)
    name = str(location[0]) if isinstance(location, tuple) and location else ""
    label = FIELD_LABELS.get(name, name)
    if name in {"front_cookie_lifetime", "back_cookie_lifetime"}:
        return SaveError(
            key=INVALID_LIFETIME,
            parameters={
                "field": label,
                "min": MIN_COOKIE_LIFETIME,
                "max": MAX_COOKIE_LIFETIME,
            },
        )
    if name == "cookie_samesite":
        return SaveError(
            key=INVALID_CHOICE,
            parameters={"field": label, "choices": ", ".join(SAMESITE_VALUES)},
        )
    return SaveError(key=INVALID_FIELD, parameters={"field": label})
