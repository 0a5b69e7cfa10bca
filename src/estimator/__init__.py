"""Estimator — динамическая оценка COB и абсорбированных углеводов."""

from src.estimator.absorption_estimator import AbsorptionEstimator, EstimatorConfig
from src.estimator.series import (
    CarbSeriesPoint,
    absorbed_carbs_series,
    carbs_on_board_series,
    series_timestamps,
)

__all__ = [
    "AbsorptionEstimator",
    "EstimatorConfig",
    "CarbSeriesPoint",
    "absorbed_carbs_series",
    "carbs_on_board_series",
    "series_timestamps",
]
