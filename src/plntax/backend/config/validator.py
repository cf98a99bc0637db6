"""Utilities for validating rate configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .rates import ConfigurationError, load_rate_configuration
from .schema import BracketRates, LinearTaxConfig, RateConfiguration

_TOLERANCE = 1e-6


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_fraction(scope: str, label: str, value: float) -> list[str]:
    if value < 0 or value > 1:
        return [_format_scope(scope, f"{label} {value} must be between 0 and 1")]
    return []


def _validate_bracket(
    scope: str, rates: BracketRates, dividend_tax_rate: float
) -> list[str]:
    errors: list[str] = []

    for label, value in {
        "cit rate": rates.cit_rate,
        "estonian distribution rate": rates.estonian_distribution_rate,
        "llc distributed rate": rates.llc_distributed_rate,
        "llc retained rate": rates.llc_retained_rate,
    }.items():
        errors.extend(_validate_fraction(scope, label, value))

    # Distributed profit pays CIT first and dividend tax on the remainder.
    expected = rates.cit_rate + (1 - rates.cit_rate) * dividend_tax_rate
    if abs(rates.llc_distributed_rate - expected) > _TOLERANCE:
        errors.append(
            _format_scope(
                scope,
                (
                    f"llc distributed rate {rates.llc_distributed_rate} does not match "
                    f"cit rate combined with dividend tax ({expected:.4f})"
                ),
            )
        )

    if abs(rates.llc_retained_rate - rates.cit_rate) > _TOLERANCE:
        errors.append(
            _format_scope(
                scope,
                f"llc retained rate {rates.llc_retained_rate} should equal the cit rate",
            )
        )

    return errors


def _validate_linear(linear: LinearTaxConfig) -> list[str]:
    scope = "linear"
    errors: list[str] = []

    for label, value in {
        "health contribution rate": linear.health_contribution.rate,
        "lower rate": linear.lower_rate,
        "rate": linear.rate,
        "surtax rate": linear.surtax_rate,
    }.items():
        errors.extend(_validate_fraction(scope, label, value))

    if linear.flat_rate_threshold >= linear.surtax_threshold:
        errors.append(
            _format_scope(
                scope,
                "flat rate threshold must be lower than the surtax threshold",
            )
        )

    if linear.surtax_rate < linear.rate:
        errors.append(
            _format_scope(scope, "surtax rate cannot be lower than the flat rate")
        )

    return errors


def validate_rate_configuration(config: RateConfiguration) -> list[str]:
    """Return a list of human-readable issues detected in ``config``."""

    errors: list[str] = []
    brackets = config.brackets

    errors.extend(_validate_fraction("brackets", "dividend tax rate", brackets.dividend_tax_rate))
    errors.extend(
        _validate_bracket("brackets.reduced", brackets.reduced, brackets.dividend_tax_rate)
    )
    errors.extend(
        _validate_bracket("brackets.standard", brackets.standard, brackets.dividend_tax_rate)
    )

    if brackets.reduced.cit_rate >= brackets.standard.cit_rate:
        errors.append(
            _format_scope("brackets", "reduced cit rate must be lower than the standard rate")
        )
    if (
        brackets.reduced.estonian_distribution_rate
        >= brackets.standard.estonian_distribution_rate
    ):
        errors.append(
            _format_scope(
                "brackets",
                "reduced estonian distribution rate must be lower than the standard rate",
            )
        )

    if brackets.revenue_threshold > config.limits.maximum_amount:
        errors.append(
            _format_scope(
                "brackets",
                "revenue threshold exceeds the maximum accepted amount",
            )
        )

    errors.extend(_validate_linear(config.linear))
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the rate configuration and report issues helpful to contributors."
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Rate configuration file to validate (defaults to the active file)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_rate_configuration(args.path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load configuration: {error}")
        return 1

    issues = validate_rate_configuration(config)
    if issues:
        print(f"{len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
