"""Immutable input and result records for the ROI engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

MONETARY_FIELDS = ("base_cost", "prepayment_amount", "cost_savings", "flexibility_value")


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """Map inf/NaN (and None) to None."""
    if value is None or not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class CalculatorInputs:
    """The five negotiation parameters entered by the user.

    Percentages are expressed on a 0-100 scale. Values are not range
    checked; anything numeric is carried through the arithmetic.
    """

    annual_wafer_demand: float
    wafer_cost: float
    prepayment: float
    price_discount: float
    flexibility_band: float


@dataclass(frozen=True)
class CalculatorResults:
    """Derived financial metrics for one set of inputs.

    base_roi and total_roi are None when the prepayment amount is zero or
    the arithmetic leaves the floating-point range.
    """

    base_cost: float
    prepayment_amount: float
    cost_savings: float
    flexibility_value: float
    base_roi: Optional[float]
    total_roi: Optional[float]
    warnings: tuple[str, ...] = ()

    @property
    def roi_defined(self) -> bool:
        return self.base_roi is not None and self.total_roi is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe view: overflowed amounts become None."""
        as_dict: dict[str, Any] = {
            name: finite_or_none(getattr(self, name)) for name in MONETARY_FIELDS
        }
        as_dict["base_roi"] = self.base_roi
        as_dict["total_roi"] = self.total_roi
        as_dict["warnings"] = list(self.warnings)
        return as_dict
