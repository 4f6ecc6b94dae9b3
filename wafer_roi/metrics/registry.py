from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

# Global registry -- maps metric_id -> MetricDefinition
_REGISTRY: dict[str, MetricDefinition] = {}


@dataclass(frozen=True)
class MetricDefinition:
    """A derived calculator metric and the text shown alongside it."""

    id: str
    label: str
    description: str  # formula as shown in the methodology tab
    explanation: str  # tooltip on the result card
    formula_fn: Callable[..., Optional[float]]
    unit: str = "currency"
    category: str = "cost"

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "explanation": self.explanation,
            "unit": self.unit,
            "category": self.category,
        }


def register_metric(
    metric_id: str,
    label: str,
    description: str,
    explanation: str,
    unit: str = "currency",
    category: str = "cost",
) -> Callable:
    """Decorator to register a formula function as a calculator metric."""

    def decorator(fn: Callable[..., Optional[float]]) -> Callable[..., Optional[float]]:
        definition = MetricDefinition(
            id=metric_id,
            label=label,
            description=description,
            explanation=explanation,
            formula_fn=fn,
            unit=unit,
            category=category,
        )
        _REGISTRY[metric_id] = definition
        return fn

    return decorator


def get_metric(metric_id: str) -> Optional[MetricDefinition]:
    """Look up a metric definition by ID."""
    return _REGISTRY.get(metric_id)


def get_all_metrics() -> dict[str, MetricDefinition]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)
