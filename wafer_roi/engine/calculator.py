"""Core calculation engine.

Takes the five negotiation inputs -> produces CalculatorResults.
"""

from __future__ import annotations

import logging
import math

from wafer_roi.engine.models import CalculatorInputs, CalculatorResults
from wafer_roi.metrics.formulas import (
    calc_base_cost,
    calc_base_roi,
    calc_cost_savings,
    calc_flexibility_value,
    calc_prepayment_amount,
    calc_total_roi,
)

logger = logging.getLogger(__name__)

UNDEFINED_ROI_WARNING = "Prepayment amount is zero; ROI is undefined."
NON_FINITE_ROI_WARNING = "ROI exceeds the floating-point range; ROI is undefined."
OVERFLOW_WARNING = "Inputs are too large; monetary amounts exceed the floating-point range."


class ROIEngine:
    """Stateless engine that runs the prepayment ROI calculation."""

    def compute(self, inputs: CalculatorInputs) -> CalculatorResults:
        """Derive the six metrics from a set of inputs.

        Never raises for finite inputs. When the prepayment amount is zero
        both ROI ratios are None; a ratio that leaves the floating-point
        range is None as well. Either way a warning is attached.
        """
        base_cost = calc_base_cost(inputs.annual_wafer_demand, inputs.wafer_cost)

        prepayment_amount = calc_prepayment_amount(base_cost, inputs.prepayment)
        cost_savings = calc_cost_savings(base_cost, inputs.price_discount)
        flexibility_value = calc_flexibility_value(base_cost, inputs.flexibility_band)

        base_roi = calc_base_roi(cost_savings, prepayment_amount)
        total_roi = calc_total_roi(cost_savings, flexibility_value, prepayment_amount)

        warnings: list[str] = []
        if base_roi is None or total_roi is None:
            logger.info("ROI undefined for inputs %s", inputs)
            if prepayment_amount == 0:
                warnings.append(UNDEFINED_ROI_WARNING)
            else:
                warnings.append(NON_FINITE_ROI_WARNING)
        amounts = (base_cost, prepayment_amount, cost_savings, flexibility_value)
        if not all(math.isfinite(amount) for amount in amounts):
            logger.warning("Monetary amounts overflowed for inputs %s", inputs)
            warnings.append(OVERFLOW_WARNING)

        return CalculatorResults(
            base_cost=base_cost,
            prepayment_amount=prepayment_amount,
            cost_savings=cost_savings,
            flexibility_value=flexibility_value,
            base_roi=base_roi,
            total_roi=total_roi,
            warnings=tuple(warnings),
        )


_ENGINE = ROIEngine()


def compute(inputs: CalculatorInputs) -> CalculatorResults:
    """Module-level shortcut for ROIEngine().compute(inputs)."""
    return _ENGINE.compute(inputs)
