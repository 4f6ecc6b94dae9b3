"""Registered formulas for every derived calculator metric."""

from .registry import MetricDefinition, get_all_metrics, get_metric, register_metric

# Ensure all formulas are registered on import
from . import formulas  # noqa: F401,E402

__all__ = ["MetricDefinition", "get_all_metrics", "get_metric", "register_metric"]
