"""Content of the "How It Works" tab."""

from __future__ import annotations

from typing import Any

from wafer_roi.metrics import get_metric

TITLE = "ROI Calculator"
SUBTITLE = "Calculate the value of prepayment and capacity flexibility"

# (heading, metric whose formula is shown, note)
_CALCULATION_STEPS: list[tuple[str, str, str]] = [
    (
        "Base Cost Calculation",
        "base_cost",
        "This represents total procurement cost without any discounts",
    ),
    (
        "Prepayment Benefits",
        "cost_savings",
        "Direct savings from prepayment discount",
    ),
    (
        "Flexibility Value",
        "flexibility_value",
        "Value of being able to adjust capacity up/down based on demand",
    ),
    (
        "ROI Calculation",
        "total_roi",
        "Return on investment including both direct savings and flexibility value",
    ),
]

ROI_COMPONENTS: list[dict[str, Any]] = [
    {
        "title": "Base ROI",
        "intro": "Base ROI focuses on direct financial returns from prepayment:",
        "points": [
            "Considers only the price discount savings",
            "Shows immediate financial benefit",
            "Easier to validate with finance teams",
            "Typically ranges from 30-80% depending on discount level",
        ],
    },
    {
        "title": "Total ROI",
        "intro": "Total ROI includes both financial and strategic benefits:",
        "points": [
            "Combines price discount savings with flexibility value",
            "Accounts for market conditions and demand variability",
            "Reflects true business impact of the prepayment strategy",
            "Usually 40-100% higher than Base ROI due to flexibility value",
        ],
    },
]

BUSINESS_BENEFITS: list[dict[str, Any]] = [
    {
        "title": "Financial Benefits",
        "points": [
            "Immediate price discount on wafer costs",
            "Protected pricing against market fluctuations",
            "Improved cash flow predictability",
            "Potential tax benefits from prepayment",
        ],
    },
    {
        "title": "Strategic Benefits",
        "points": [
            "Priority access to capacity in constrained markets",
            "Flexibility to adjust capacity within agreed bands",
            "Stronger supplier relationships",
            "Reduced risk of capacity shortages",
        ],
    },
]


def calculation_steps() -> list[dict[str, Any]]:
    """Numbered methodology steps, formulas taken from the metric registry."""
    steps = []
    for number, (heading, metric_id, note) in enumerate(_CALCULATION_STEPS, start=1):
        metric = get_metric(metric_id)
        steps.append({
            "number": number,
            "title": f"{number}. {heading}",
            "formula": metric.description if metric else "",
            "note": note,
        })
    return steps


def get_methodology() -> dict[str, Any]:
    """Return the full explanation tab as a JSON-serializable dict."""
    return {
        "title": TITLE,
        "subtitle": SUBTITLE,
        "heading": "ROI Calculation Methodology",
        "steps": calculation_steps(),
        "components": ROI_COMPONENTS,
        "benefits": BUSINESS_BENEFITS,
    }
