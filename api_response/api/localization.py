# This file loads localized messages keyed by business code.
# It exists so handlers can return a code alone and still emit a human-readable message.
# Catalog files are YAML mappings of locale -> {code: message}.
# Lookups fall back to the default locale before giving up.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class MessageCatalog:
    messages: Mapping[str, Mapping[int, str]] = field(default_factory=dict)
    default_locale: str = DEFAULT_LOCALE

    def lookup(self, code: int, *, locale: str | None = None) -> str | None:
        for candidate in (locale or self.default_locale, self.default_locale):
            message = self.messages.get(candidate, {}).get(code)
            if message:
                return message
        return None

    @property
    def locales(self) -> list[str]:
        return sorted(self.messages)


def _normalize_locale_table(locale: str, table: Any, path: str) -> dict[int, str]:
    if not isinstance(table, dict):
        raise ValueError(f"Locale {locale!r} in {path} must map codes to messages")
    normalized: dict[int, str] = {}
    for raw_code, message in table.items():
        try:
            code = int(raw_code)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid business code {raw_code!r} for locale {locale!r} in {path}") from exc
        normalized[code] = str(message)
    return normalized


def load_message_catalog(path: str | None, *, default_locale: str = DEFAULT_LOCALE) -> MessageCatalog:
    """Load a message catalog from YAML; a missing path yields an empty catalog."""

    if not path:
        return MessageCatalog(default_locale=default_locale)

    with open(path, encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Message catalog {path} must be a YAML mapping")

    messages = {
        str(locale): _normalize_locale_table(str(locale), table, path)
        for locale, table in loaded.items()
    }
    return MessageCatalog(messages=messages, default_locale=default_locale)
