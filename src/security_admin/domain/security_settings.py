"""Domain models for the general security settings."""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

SAMESITE_VALUES: tuple[str, ...] = ("None", "Lax", "Strict")

MIN_COOKIE_LIFETIME = 1
MAX_COOKIE_LIFETIME = 8760


class GeneralSettings(BaseModel):
    """Cookie related settings edited through the General form."""

    check_cookie_ip: bool = True
    front_cookie_lifetime: int = Field(
        default=480, ge=MIN_COOKIE_LIFETIME, le=MAX_COOKIE_LIFETIME
    )
    back_cookie_lifetime: int = Field(
        default=1, ge=MIN_COOKIE_LIFETIME, le=MAX_COOKIE_LIFETIME
    )
    cookie_samesite: Literal["None", "Lax", "Strict"] = "Lax"


@dataclass(frozen=True)
class SaveError:
    """A translatable error returned by a form save."""

    key: str
    domain: str = "Admin.Notifications.Error"
    parameters: dict[str, object] = field(default_factory=dict)
