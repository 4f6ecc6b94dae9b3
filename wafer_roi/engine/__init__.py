"""Pure ROI calculation core."""

from .calculator import ROIEngine, compute
from .models import CalculatorInputs, CalculatorResults

__all__ = ["CalculatorInputs", "CalculatorResults", "ROIEngine", "compute"]
