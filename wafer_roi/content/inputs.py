"""Input field definitions: labels, units, defaults and tooltip text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from wafer_roi.engine.models import CalculatorInputs


@dataclass(frozen=True)
class InputFieldDefinition:
    """One numeric entry field on the calculator form."""

    name: str  # CalculatorInputs attribute
    label: str
    unit: str
    default: float
    explanation: str
    typical_range: tuple[float, float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "unit": self.unit,
            "default": self.default,
            "explanation": self.explanation,
            "typical_range": list(self.typical_range),
        }


# Display order on the form
INPUT_FIELDS: tuple[InputFieldDefinition, ...] = (
    InputFieldDefinition(
        name="annual_wafer_demand",
        label="Annual Wafer Demand",
        unit="wafers",
        default=30000,
        explanation=(
            "Expected yearly wafer demand based on customer forecasts. Most "
            "customers range from 10,000 to 50,000 wafers annually."
        ),
        typical_range=(10_000, 50_000),
    ),
    InputFieldDefinition(
        name="wafer_cost",
        label="Wafer Cost",
        unit="$",
        default=8000,
        explanation=(
            "Average cost per wafer. Industry range typically falls between "
            "$6,000-$25,000 depending on process node and complexity."
        ),
        typical_range=(6_000, 25_000),
    ),
    InputFieldDefinition(
        name="prepayment",
        label="Prepayment",
        unit="%",
        default=10,
        explanation=(
            "Percentage of total cost paid upfront. Higher prepayments (10-30%) "
            "typically lead to better discounts and more flexibility."
        ),
        typical_range=(0, 100),
    ),
    InputFieldDefinition(
        name="price_discount",
        label="Price Discount",
        unit="%",
        default=5,
        explanation=(
            "Discount received for prepayment. Typically ranges from 3-8% "
            "depending on prepayment amount and market conditions."
        ),
        typical_range=(0, 100),
    ),
    InputFieldDefinition(
        name="flexibility_band",
        label="Flexibility Band",
        unit="%",
        default=30,
        explanation=(
            "Allowed variation in capacity (±%). Standard range is 20-40%. Higher "
            "flexibility helps manage demand uncertainty but may affect pricing."
        ),
        typical_range=(0, 100),
    ),
)

DEFAULT_VALUES: dict[str, float] = {f.name: f.default for f in INPUT_FIELDS}


def get_input_field(name: str) -> Optional[InputFieldDefinition]:
    """Look up an input field definition by CalculatorInputs attribute name."""
    for definition in INPUT_FIELDS:
        if definition.name == name:
            return definition
    return None


def default_inputs() -> CalculatorInputs:
    """The values the form starts with."""
    return CalculatorInputs(**DEFAULT_VALUES)
