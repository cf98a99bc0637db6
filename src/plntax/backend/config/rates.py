"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    AmountLimits,
    BracketConfig,
    BracketRates,
    ConfigurationError,
    HealthContributionConfig,
    LinearTaxConfig,
    RateConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
RATES_FILE = CONFIG_DIRECTORY / "rates.yaml"
RATES_FILE_ENV = "PLNTAX_RATES_FILE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_rates_file() -> Path:
    """Return the rates file, honouring the ``PLNTAX_RATES_FILE`` override."""

    override = os.getenv(RATES_FILE_ENV, "").strip()
    return Path(override) if override else RATES_FILE


@lru_cache(maxsize=4)
def _load_rate_configuration(path: Path) -> RateConfiguration:
    if not path.exists():
        raise FileNotFoundError(f"Rate configuration not found: {path}")

    raw_config = _load_yaml(path)

    try:
        return RateConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Rate configuration validation failed: {error}") from error


def load_rate_configuration(path: Path | None = None) -> RateConfiguration:
    """Load and cache the rate configuration from disk."""

    return _load_rate_configuration(path or resolve_rates_file())


def clear_rate_cache() -> None:
    """Drop cached configurations so the next load re-reads the file."""

    _load_rate_configuration.cache_clear()


__all__ = [
    "AmountLimits",
    "BracketConfig",
    "BracketRates",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "HealthContributionConfig",
    "LinearTaxConfig",
    "RATES_FILE",
    "RATES_FILE_ENV",
    "RateConfiguration",
    "clear_rate_cache",
    "load_rate_configuration",
    "resolve_rates_file",
]
