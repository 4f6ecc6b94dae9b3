"""Formula implementations for the wafer prepayment ROI metrics.

Each function is a pure calculation with no side effects and no input
validation: negative, zero and fractional values are computed through.
Percentages are on a 0-100 scale. Registration order is the order in
which the engine evaluates the metrics.
"""

from __future__ import annotations

import math
from typing import Optional

from wafer_roi.metrics.registry import register_metric

# Share of the flexibility band's monetary exposure counted as value
INDUSTRY_MARGIN = 0.20


def _finite_ratio(value: float) -> Optional[float]:
    # inf/inf and overflowing quotients are reported as undefined
    if not math.isfinite(value):
        return None
    return value


@register_metric(
    metric_id="base_cost",
    label="Base Cost",
    description="Base Cost = Annual Wafer Demand × Wafer Cost",
    explanation=(
        "Total procurement cost without any discounts. "
        "Calculated as Annual Wafer Demand × Wafer Cost."
    ),
    unit="currency",
    category="cost",
)
def calc_base_cost(annual_wafer_demand: float, wafer_cost: float) -> float:
    """Base_Cost = Annual_Wafer_Demand x Wafer_Cost"""
    return annual_wafer_demand * wafer_cost


@register_metric(
    metric_id="prepayment_amount",
    label="Prepayment Amount",
    description="Prepayment Amount = Base Cost × Prepayment%",
    explanation=(
        "Cash paid upfront to the supplier. "
        "Calculated as Base Cost × Prepayment%."
    ),
    unit="currency",
    category="cost",
)
def calc_prepayment_amount(base_cost: float, prepayment: float) -> float:
    """Prepayment_Amount = Base_Cost x Prepayment_%"""
    return base_cost * (prepayment / 100)


@register_metric(
    metric_id="cost_savings",
    label="Cost Savings",
    description="Cost Savings = Base Cost × Price Discount%",
    explanation=(
        "Direct financial savings from the prepayment discount. Calculated as "
        "Base Cost × Price Discount%. This represents immediate cash savings."
    ),
    unit="currency",
    category="benefit",
)
def calc_cost_savings(base_cost: float, price_discount: float) -> float:
    """Cost_Savings = Base_Cost x Price_Discount_%"""
    return base_cost * (price_discount / 100)


@register_metric(
    metric_id="flexibility_value",
    label="Flexibility Value",
    description="Flexibility Value = Base Cost × Flexibility Band% × Industry Margin",
    explanation=(
        "Economic value of capacity flexibility. Based on ability to adjust "
        "capacity within the flexibility band, valued at industry standard margins."
    ),
    unit="currency",
    category="benefit",
)
def calc_flexibility_value(base_cost: float, flexibility_band: float) -> float:
    """Flexibility_Value = Base_Cost x Flexibility_Band_% x 0.20"""
    return base_cost * (flexibility_band / 100) * INDUSTRY_MARGIN


@register_metric(
    metric_id="base_roi",
    label="Base ROI",
    description="Base ROI = Cost Savings ÷ Prepayment Amount × 100%",
    explanation=(
        "Direct financial return from prepayment discount. Calculated as "
        "(Price Discount Savings ÷ Prepayment Amount) × 100%. This represents "
        "immediate, guaranteed returns."
    ),
    unit="percent",
    category="return",
)
def calc_base_roi(cost_savings: float, prepayment_amount: float) -> Optional[float]:
    """Base_ROI = Cost_Savings / Prepayment_Amount x 100

    Returns None when nothing is prepaid or the ratio is not finite.
    """
    if prepayment_amount == 0 or not math.isfinite(prepayment_amount):
        return None
    return _finite_ratio((cost_savings / prepayment_amount) * 100)


@register_metric(
    metric_id="total_roi",
    label="Total ROI",
    description="ROI = (Cost Savings + Flexibility Value) ÷ Prepayment Amount × 100%",
    explanation=(
        "Complete ROI including both discount savings and flexibility value. "
        "Combines immediate financial returns with the strategic value of "
        "capacity flexibility."
    ),
    unit="percent",
    category="return",
)
def calc_total_roi(
    cost_savings: float,
    flexibility_value: float,
    prepayment_amount: float,
) -> Optional[float]:
    """Total_ROI = (Cost_Savings + Flexibility_Value) / Prepayment_Amount x 100

    Returns None when nothing is prepaid or the ratio is not finite.
    """
    if prepayment_amount == 0 or not math.isfinite(prepayment_amount):
        return None
    return _finite_ratio(((cost_savings + flexibility_value) / prepayment_amount) * 100)
