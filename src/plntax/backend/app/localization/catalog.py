"""Translation catalogue helpers backed by the packaged JSON resources."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Mapping

BASE_LOCALE = "pl"
_TRANSLATIONS_PACKAGE = "plntax.translations"
_LOCALE_SEPARATORS = re.compile(r"[-_]")


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings."""

    locale: str
    _messages: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str) -> str:
        return self._messages.get(key) or self._fallback.get(key, key)


@dataclass(frozen=True)
class Catalogue:
    """Backend and frontend messages published for one locale."""

    locale: str
    backend: Mapping[str, str]
    frontend: Mapping[str, Any]


@cache
def available_locales() -> tuple[str, ...]:
    """Return the locales with a published JSON catalogue."""

    root = resources.files(_TRANSLATIONS_PACKAGE)
    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (BASE_LOCALE,)


@cache
def _load_catalogue(locale: str) -> Catalogue:
    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    if not resource.is_file():
        return Catalogue(locale=locale, backend={}, frontend={})

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    backend = payload.get("backend") or {}
    frontend = payload.get("frontend") or {}
    return Catalogue(
        locale=locale,
        backend={key: str(value) for key, value in backend.items()},
        frontend=frontend,
    )


def normalise_locale(locale: str | None) -> str:
    """Reduce ``locale`` (``en-GB``, ``pl_PL``) to a supported catalogue key."""

    if not locale:
        return BASE_LOCALE

    language = _LOCALE_SEPARATORS.split(locale.strip().lower(), maxsplit=1)[0]
    return language if language in available_locales() else BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator for ``locale`` falling back to the Polish catalogue."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    fallback = _load_catalogue(BASE_LOCALE)

    return Translator(
        locale=catalogue.locale,
        _messages=catalogue.backend,
        _fallback=fallback.backend,
    )


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Expose combined backend/frontend translations for API consumers."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    fallback = _load_catalogue(BASE_LOCALE)

    return {
        "locale": normalized,
        "available_locales": list(available_locales()),
        "backend": dict(catalogue.backend),
        "frontend": catalogue.frontend,
        "fallback": {
            "locale": BASE_LOCALE,
            "backend": dict(fallback.backend),
            "frontend": fallback.frontend,
        },
    }


__all__ = [
    "BASE_LOCALE",
    "Catalogue",
    "Translator",
    "available_locales",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
