"""Audit hooks — logs every calculation for the audit trail."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from wafer_roi.engine.models import CalculatorInputs, CalculatorResults

logger = logging.getLogger(__name__)


def log_calculation(
    inputs: CalculatorInputs,
    results: CalculatorResults,
    source: str = "api",
    session_id: str | None = None,
) -> dict[str, Any]:
    """Record a calculation in the audit log.

    Returns the audit entry dict for downstream persistence.
    """
    entry = {
        "source": source,
        "session_id": session_id,
        "inputs": asdict(inputs),
        "base_roi": results.base_roi,
        "total_roi": results.total_roi,
        "roi_defined": results.roi_defined,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
    logger.info(
        "Calculation audit: %s → base_roi=%s total_roi=%s",
        session_id or source, results.base_roi, results.total_roi,
    )
    return entry
