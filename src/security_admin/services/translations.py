"""Message translation with per-domain catalogs."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class Translator:
    """Translate messages by domain, substituting ``%name%`` placeholders.

    Messages missing from the catalog are returned untranslated, so the
    English source strings double as the default catalog.
    """

    catalogs: dict[str, dict[str, str]] = field(default_factory=dict)

    def trans(
        self,
        message: str,
        domain: str = "messages",
        parameters: Mapping[str, object] | None = None,
    ) -> str:
        """Return the translated message for a domain."""
        translated = self.catalogs.get(domain, {}).get(message, message)
        for name, value in (parameters or {}).items():
            placeholder = name if name.startswith("%") else f"%{name}%"
            translated = translated.replace(placeholder, str(value))
        return translated
