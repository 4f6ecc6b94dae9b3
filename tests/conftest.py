"""Shared test fixtures for the wafer ROI test suite."""

import pytest

from wafer_roi.content import default_inputs
from wafer_roi.engine import CalculatorInputs, ROIEngine


def make_inputs(**overrides) -> CalculatorInputs:
    """Default form inputs with selected fields replaced."""
    values = {
        "annual_wafer_demand": 30000,
        "wafer_cost": 8000,
        "prepayment": 10,
        "price_discount": 5,
        "flexibility_band": 30,
    }
    values.update(overrides)
    return CalculatorInputs(**values)


@pytest.fixture
def engine() -> ROIEngine:
    return ROIEngine()


@pytest.fixture
def defaults() -> CalculatorInputs:
    """The form's starting values — the reference negotiation scenario."""
    return default_inputs()


@pytest.fixture
def zero_prepayment() -> CalculatorInputs:
    return make_inputs(prepayment=0)
