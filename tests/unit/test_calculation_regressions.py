"""Regression coverage ensuring calculator outputs stay stable."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from plntax.backend.app.services.calculation_service import calculate_tax

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


@pytest.mark.parametrize(
    "scenario",
    json.loads(_DATA_PATH.read_text("utf-8")),
    ids=lambda item: item["name"],
)
def test_calculate_tax_matches_regression_scenario(scenario: dict[str, object]) -> None:
    """The calculation service returns the expected results for known payloads."""

    expectations = scenario["expectations"]

    result = calculate_tax(scenario["payload"])

    assert result["meta"]["bracket"] == expectations["bracket"]
    for name, value in expectations["results"].items():
        assert result["results"][name]["amount"] == pytest.approx(value)
