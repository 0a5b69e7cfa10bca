"""
Domain models and value objects.

Contains carb entries, observed absorption samples, absorption summaries,
the CarbStatus aggregate and time unit conversions.
"""

from src.core.domain.absorbed_carb_value import AbsorbedCarbValue
from src.core.domain.carb_entry import DEFAULT_STATIC_ABSORPTION_MODEL, CarbEntry, CarbValue
from src.core.domain.carb_status import CarbStatus
from src.core.domain.units import (
    MS_PER_SEC,
    SEC_PER_HOUR,
    SEC_PER_MINUTE,
    elapsed_sec,
    floor_ts_to_step,
    hours,
    interval_overlap_sec,
    minutes,
    ms_to_sec,
    sec_to_ms,
    shift_ts,
)

__all__ = [
    # Units module
    "MS_PER_SEC",
    "SEC_PER_HOUR",
    "SEC_PER_MINUTE",
    "elapsed_sec",
    "floor_ts_to_step",
    "hours",
    "interval_overlap_sec",
    "minutes",
    "ms_to_sec",
    "sec_to_ms",
    "shift_ts",
    # Carb entry models
    "CarbEntry",
    "CarbValue",
    "DEFAULT_STATIC_ABSORPTION_MODEL",
    # Absorption summary
    "AbsorbedCarbValue",
    # Aggregate
    "CarbStatus",
]
