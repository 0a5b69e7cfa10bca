"""Carb series — суммарные COB и абсорбция по набору записей

Оценивает динамические COB / absorbed для каждой записи на сетке
моментов времени с шагом delta и суммирует по записям.

Сетка:
- начало округляется вниз до кратного delta
- конец включается, если попадает на сетку
- end < start или пустой набор записей → пустой ряд
"""

import logging
from typing import Callable, NamedTuple, Sequence

from src.core.domain.carb_status import CarbStatus
from src.core.domain.units import floor_ts_to_step, sec_to_ms
from src.estimator.absorption_estimator import AbsorptionEstimator

logger = logging.getLogger(__name__)


class CarbSeriesPoint(NamedTuple):
    """Значение ряда в момент времени."""

    ts_utc_ms: int
    value_g: float


def series_timestamps(start_ts_utc_ms: int, end_ts_utc_ms: int, step_sec: float) -> list[int]:
    """
    Моменты сетки от start (округлённого вниз) до end включительно.

    Raises:
        ValueError: Если step_sec не положителен
    """
    if end_ts_utc_ms < start_ts_utc_ms:
        return []

    step_ms = sec_to_ms(step_sec)
    ts = floor_ts_to_step(start_ts_utc_ms, step_sec)
    timestamps = []
    while ts <= end_ts_utc_ms:
        timestamps.append(ts)
        ts += step_ms
    return timestamps


def _build_series(
    statuses: Sequence[CarbStatus],
    start_ts_utc_ms: int,
    end_ts_utc_ms: int,
    step_sec: float,
    evaluate: Callable[[CarbStatus, int], float],
) -> list[CarbSeriesPoint]:
    if not statuses:
        return []

    series = [
        CarbSeriesPoint(ts, sum(evaluate(status, ts) for status in statuses))
        for ts in series_timestamps(start_ts_utc_ms, end_ts_utc_ms, step_sec)
    ]
    logger.debug("Built carb series: %d points over %d entries", len(series), len(statuses))
    return series


def carbs_on_board_series(
    statuses: Sequence[CarbStatus],
    start_ts_utc_ms: int,
    end_ts_utc_ms: int,
    estimator: AbsorptionEstimator,
    default_absorption_time_sec: float | None = None,
    delay_sec: float | None = None,
    delta_sec: float | None = None,
) -> list[CarbSeriesPoint]:
    """
    Суммарные COB по всем записям на сетке с шагом delta.

    Args:
        statuses: Снапшоты записей
        start_ts_utc_ms: Начало ряда (округляется вниз до сетки)
        end_ts_utc_ms: Конец ряда (включительно)
        estimator: Оценщик с инжектированной моделью
        default_absorption_time_sec / delay_sec / delta_sec: параметры
            запросов (None → значения из estimator.config)

    Returns:
        Список CarbSeriesPoint
    """
    step_sec = estimator.config.delta_sec if delta_sec is None else delta_sec

    def evaluate(status: CarbStatus, ts: int) -> float:
        return estimator.dynamic_carbs_on_board(
            status,
            ts,
            default_absorption_time_sec=default_absorption_time_sec,
            delay_sec=delay_sec,
            delta_sec=delta_sec,
        )

    return _build_series(statuses, start_ts_utc_ms, end_ts_utc_ms, step_sec, evaluate)


def absorbed_carbs_series(
    statuses: Sequence[CarbStatus],
    start_ts_utc_ms: int,
    end_ts_utc_ms: int,
    estimator: AbsorptionEstimator,
    absorption_time_sec: float | None = None,
    delay_sec: float | None = None,
    delta_sec: float | None = None,
) -> list[CarbSeriesPoint]:
    """Суммарные абсорбированные углеводы по всем записям на сетке с шагом delta."""
    step_sec = estimator.config.delta_sec if delta_sec is None else delta_sec

    def evaluate(status: CarbStatus, ts: int) -> float:
        return estimator.dynamic_absorbed_carbs(
            status,
            ts,
            absorption_time_sec=absorption_time_sec,
            delay_sec=delay_sec,
            delta_sec=delta_sec,
        )

    return _build_series(statuses, start_ts_utc_ms, end_ts_utc_ms, step_sec, evaluate)
