"""Wafer prepayment ROI calculator."""

from .engine import CalculatorInputs, CalculatorResults, ROIEngine, compute

__all__ = ["CalculatorInputs", "CalculatorResults", "ROIEngine", "compute"]
