"""
Units — Централизованный модуль конверсии времени

Единственный допустимый способ преобразований между:
- моментами времени (*_ts_utc_ms, int, UTC миллисекунды)
- длительностями (*_sec, float, секунды)

Массы везде в граммах (*_g), отдельных конвертеров не требуют.

ЗАПРЕЩЕНО смешивать миллисекунды и секунды без явного конвертера из этого модуля.
"""

from typing import Final


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

MS_PER_SEC: Final[int] = 1000
SEC_PER_MINUTE: Final[float] = 60.0
SEC_PER_HOUR: Final[float] = 3600.0


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def minutes(value: float) -> float:
    """Минуты → секунды."""
    return value * SEC_PER_MINUTE


def hours(value: float) -> float:
    """Часы → секунды."""
    return value * SEC_PER_HOUR


def ms_to_sec(duration_ms: int) -> float:
    """Миллисекунды → секунды (float)."""
    return duration_ms / MS_PER_SEC


def sec_to_ms(duration_sec: float) -> int:
    """
    Секунды → миллисекунды.

    Округление до ближайшей миллисекунды: моменты времени всегда int.
    """
    return int(round(duration_sec * MS_PER_SEC))


# =============================================================================
# АРИФМЕТИКА МОМЕНТОВ ВРЕМЕНИ
# =============================================================================


def elapsed_sec(at_ts_utc_ms: int, since_ts_utc_ms: int) -> float:
    """
    Время от since до at в секундах.

    Returns:
        (at - since) в секундах; отрицательно, если at раньше since
    """
    return ms_to_sec(at_ts_utc_ms - since_ts_utc_ms)


def shift_ts(ts_utc_ms: int, duration_sec: float) -> int:
    """Момент времени, сдвинутый на duration_sec (может быть отрицательным)."""
    return ts_utc_ms + sec_to_ms(duration_sec)


def interval_overlap_sec(
    a_start_ts_utc_ms: int,
    a_end_ts_utc_ms: int,
    b_start_ts_utc_ms: int,
    b_end_ts_utc_ms: int,
) -> float:
    """
    Длительность пересечения двух интервалов [a_start, a_end] и [b_start, b_end].

    Returns:
        Длительность пересечения в секундах (0.0 если интервалы не пересекаются
        или один из них вырожден в обратную сторону)
    """
    start = max(a_start_ts_utc_ms, b_start_ts_utc_ms)
    end = min(a_end_ts_utc_ms, b_end_ts_utc_ms)
    if end <= start:
        return 0.0
    return ms_to_sec(end - start)


def floor_ts_to_step(ts_utc_ms: int, step_sec: float) -> int:
    """
    Округление момента времени вниз до сетки с шагом step_sec.

    Examples:
        >>> floor_ts_to_step(1_700_000_123_456, 300.0)
        1700000100000
    """
    step_ms = sec_to_ms(step_sec)
    if step_ms <= 0:
        raise ValueError(f"step_sec must be positive, got {step_sec}")
    return (ts_utc_ms // step_ms) * step_ms
