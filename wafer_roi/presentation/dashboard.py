"""Result cards and ROI comparison chart for the calculator screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from wafer_roi.engine.models import CalculatorResults, finite_or_none
from wafer_roi.metrics import get_metric

UNDEFINED_DISPLAY = "n/a"

# Card order on screen
CARD_METRICS = ["base_roi", "total_roi", "cost_savings", "flexibility_value"]
CHART_METRICS = ["base_roi", "total_roi"]


def format_percent(value: Optional[float]) -> str:
    """50.0 -> '50.0%'"""
    value = finite_or_none(value)
    if value is None:
        return UNDEFINED_DISPLAY
    return f"{value:.1f}%"


def format_millions(value: Optional[float]) -> str:
    """12_000_000 -> '$12.0M'"""
    value = finite_or_none(value)
    if value is None:
        return UNDEFINED_DISPLAY
    return f"${value / 1e6:.1f}M"


@dataclass(frozen=True)
class ResultCard:
    metric_id: str
    label: str
    value: Optional[float]
    display: str
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric_id": self.metric_id,
            "label": self.label,
            "value": self.value,
            "display": self.display,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class Dashboard:
    """Everything the calculator tab renders for one set of results."""

    cards: list[ResultCard]
    chart: list[dict[str, Any]]
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "chart": self.chart,
            "warnings": list(self.warnings),
        }


def _format(unit: str, value: Optional[float]) -> str:
    if unit == "percent":
        return format_percent(value)
    return format_millions(value)


def build_dashboard(results: CalculatorResults) -> Dashboard:
    """Turn engine results into result cards and chart series.

    Chart values stay unformatted; the chart's own axis handles display.
    """
    cards: list[ResultCard] = []
    for metric_id in CARD_METRICS:
        metric = get_metric(metric_id)
        value = finite_or_none(getattr(results, metric_id))
        cards.append(ResultCard(
            metric_id=metric_id,
            label=metric.label,
            value=value,
            display=_format(metric.unit, value),
            explanation=metric.explanation,
        ))

    chart = [
        {"name": get_metric(metric_id).label, "value": getattr(results, metric_id)}
        for metric_id in CHART_METRICS
    ]
    return Dashboard(cards=cards, chart=chart, warnings=list(results.warnings))
