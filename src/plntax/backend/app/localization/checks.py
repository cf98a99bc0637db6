"""Consistency checks across the published translation catalogues."""

from __future__ import annotations

import argparse
import re
from typing import Any, Iterable, Mapping, Sequence

from plntax.backend.app.models import Bracket, ValidationCode
from plntax.backend.app.models.api import AMOUNT_FIELDS

from .catalog import BASE_LOCALE, available_locales, load_translations

PLACEHOLDER_PATTERN = re.compile(r"{{\s*([a-zA-Z0-9_.-]+)\s*}}")
RESULT_KEYS = ("estonian_cit", "linear_tax", "llc_tax")


def _flatten_messages(tree: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            items.update(_flatten_messages(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


def required_backend_keys() -> set[str]:
    """Return the backend keys the services look up at runtime."""

    keys = {code.message_key for code in ValidationCode}
    keys.update(f"fields.{name}" for name in AMOUNT_FIELDS)
    keys.update(f"results.{name}" for name in RESULT_KEYS)
    keys.update(f"brackets.{bracket.value}" for bracket in Bracket)
    return keys


def _load_sections(locale: str) -> dict[str, dict[str, str]]:
    payload = load_translations(locale)
    return {
        "backend": _flatten_messages(payload["backend"]),
        "frontend": _flatten_messages(payload["frontend"]),
    }


def _placeholders(message: str) -> set[str]:
    return set(PLACEHOLDER_PATTERN.findall(message))


def check_catalogues(locales: Iterable[str] | None = None) -> list[str]:
    """Return issues found when comparing each locale with the base catalogue."""

    issues: list[str] = []
    base = _load_sections(BASE_LOCALE)

    missing_required = sorted(required_backend_keys() - set(base["backend"]))
    if missing_required:
        issues.append(
            f"Locale '{BASE_LOCALE}' missing required backend keys: {', '.join(missing_required)}"
        )

    for locale in locales or available_locales():
        if locale == BASE_LOCALE:
            continue
        catalogue = _load_sections(locale)
        for section in ("backend", "frontend"):
            missing = sorted(set(base[section]) - set(catalogue[section]))
            if missing:
                issues.append(
                    f"Locale '{locale}' missing {len(missing)} {section} keys: {', '.join(missing)}"
                )
            for key, message in catalogue[section].items():
                expected = base[section].get(key)
                if expected is not None and _placeholders(expected) != _placeholders(message):
                    issues.append(f"Locale '{locale}' {section}:{key} placeholders differ")

    return issues


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running the catalogue checks from the command line."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("locales", nargs="*", help="Locales to check (defaults to all)")
    args = parser.parse_args(argv)

    issues = check_catalogues(args.locales or None)
    for issue in issues:
        print(f"[translations] {issue}")
    if not issues:
        print("OK")
    return 1 if issues else 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
