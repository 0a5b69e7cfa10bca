"""
Absorption Models — кривые абсорбции углеводов

Модуль описывает стратегию AbsorptionModel: отображение
(total_g, at_time_sec, absorption_time_sec) -> граммы.

Каждая модель задаётся кривой доли абсорбции от доли времени:
    p = at_time / absorption_time
    absorbed = total * percent_absorption(p)
    unabsorbed = total * (1 - percent_absorption(p))

Реализованные модели:
- LinearAbsorption: постоянная скорость абсорбции
- ParabolicAbsorption: скорость растёт линейно до D/2 и падает до нуля к D
- PiecewiseLinearAbsorption: скорость растёт до 15% D, держится до 50% D,
  затем линейно падает до нуля к D

КОНТРАКТ (для всех моделей):
1. absorbed + unabsorbed == total (в пределах float точности)
2. absorbed == 0 при at_time <= 0
3. absorbed == total при at_time >= absorption_time
4. absorbed не убывает по at_time
5. absorption_time <= 0 трактуется как мгновенная абсорбция (без деления)

Модель выбирается снаружи (EstimatorConfig / явная инъекция),
глобального состояния нет.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Final

from src.core.math.numerical_safeguards import EPS_DURATION_SEC, clamp


# =============================================================================
# ENUMS
# =============================================================================


class AbsorptionModelName(str, Enum):
    """Имя модели абсорбции (для конфигурации)."""

    LINEAR = "linear"
    PARABOLIC = "parabolic"
    PIECEWISE = "piecewise"


# =============================================================================
# PIECEWISE-ПАРАМЕТРЫ
# =============================================================================

# Доля absorption_time, на которой скорость абсорбции выходит на плато
PIECEWISE_PERCENT_END_OF_RISE: Final[float] = 0.15

# Доля absorption_time, с которой скорость абсорбции начинает падать
PIECEWISE_PERCENT_START_OF_FALL: Final[float] = 0.5

# Высота плато скорости: площадь трапеции под кривой скорости равна 1
PIECEWISE_SCALE: Final[float] = 2.0 / (
    1.0 + PIECEWISE_PERCENT_START_OF_FALL - PIECEWISE_PERCENT_END_OF_RISE
)


# =============================================================================
# BASE MODEL
# =============================================================================


class AbsorptionModel(ABC):
    """
    Базовая стратегия абсорбции.

    Наследники реализуют только кривые в безразмерном времени;
    перевод в граммы и секунды общий.
    """

    name: AbsorptionModelName

    @abstractmethod
    def percent_absorption_at_percent_time(self, percent_time: float) -> float:
        """Доля абсорбированных углеводов (0..1) при доле времени percent_time."""

    @abstractmethod
    def percent_rate_at_percent_time(self, percent_time: float) -> float:
        """Скорость абсорбции (производная кривой по percent_time)."""

    def percent_absorption_at_time(
        self, at_time_sec: float, absorption_time_sec: float
    ) -> float:
        """
        Доля абсорбции в момент at_time_sec от начала абсорбции.

        Args:
            at_time_sec: Время с начала абсорбции (может быть отрицательным)
            absorption_time_sec: Полная длительность абсорбции

        Returns:
            Доля 0..1
        """
        if at_time_sec <= 0:
            return 0.0

        if absorption_time_sec <= EPS_DURATION_SEC:
            return 1.0

        return self.percent_absorption_at_percent_time(at_time_sec / absorption_time_sec)

    def absorbed_carbs(
        self, total_g: float, at_time_sec: float, absorption_time_sec: float
    ) -> float:
        """
        Масса абсорбированных углеводов.

        Args:
            total_g: Полная масса углеводов (граммы)
            at_time_sec: Время с начала абсорбции (секунды)
            absorption_time_sec: Полная длительность абсорбции (секунды)

        Returns:
            Абсорбированная масса (граммы), 0..total_g
        """
        return total_g * self.percent_absorption_at_time(at_time_sec, absorption_time_sec)

    def unabsorbed_carbs(
        self, total_g: float, at_time_sec: float, absorption_time_sec: float
    ) -> float:
        """
        Масса неабсорбированных углеводов (carbs on board).

        Returns:
            total_g - absorbed_carbs(...), граммы
        """
        return total_g * (
            1.0 - self.percent_absorption_at_time(at_time_sec, absorption_time_sec)
        )


# =============================================================================
# MODELS
# =============================================================================


class LinearAbsorption(AbsorptionModel):
    """Постоянная скорость абсорбции на всём интервале."""

    name = AbsorptionModelName.LINEAR

    def percent_absorption_at_percent_time(self, percent_time: float) -> float:
        return clamp(percent_time, 0.0, 1.0)

    def percent_rate_at_percent_time(self, percent_time: float) -> float:
        if 0.0 < percent_time < 1.0:
            return 1.0
        return 0.0


class ParabolicAbsorption(AbsorptionModel):
    """
    Параболическая абсорбция.

    Скорость линейно растёт до пика в середине интервала и линейно
    падает до нуля к его концу:
        p <= 0.5:      2 * p^2
        0.5 < p < 1:   -1 + 4 * p - 2 * p^2
    """

    name = AbsorptionModelName.PARABOLIC

    def percent_absorption_at_percent_time(self, percent_time: float) -> float:
        if percent_time <= 0.0:
            return 0.0
        if percent_time <= 0.5:
            return 2.0 * percent_time**2
        if percent_time < 1.0:
            return -1.0 + 4.0 * percent_time - 2.0 * percent_time**2
        return 1.0

    def percent_rate_at_percent_time(self, percent_time: float) -> float:
        if percent_time <= 0.0 or percent_time >= 1.0:
            return 0.0
        if percent_time <= 0.5:
            return 4.0 * percent_time
        return 4.0 - 4.0 * percent_time


class PiecewiseLinearAbsorption(AbsorptionModel):
    """
    Кусочно-линейная скорость абсорбции (трапеция).

    Скорость растёт от 0 до PIECEWISE_SCALE на [0, end_of_rise),
    держится на [end_of_rise, start_of_fall) и падает до 0 на [start_of_fall, 1).
    """

    name = AbsorptionModelName.PIECEWISE

    def percent_absorption_at_percent_time(self, percent_time: float) -> float:
        rise = PIECEWISE_PERCENT_END_OF_RISE
        fall = PIECEWISE_PERCENT_START_OF_FALL

        if percent_time <= 0.0:
            return 0.0
        if percent_time < rise:
            return 0.5 * PIECEWISE_SCALE * percent_time**2 / rise
        if percent_time < fall:
            return PIECEWISE_SCALE * (percent_time - 0.5 * rise)
        if percent_time < 1.0:
            return 1.0 - 0.5 * PIECEWISE_SCALE * (1.0 - percent_time) ** 2 / (1.0 - fall)
        return 1.0

    def percent_rate_at_percent_time(self, percent_time: float) -> float:
        rise = PIECEWISE_PERCENT_END_OF_RISE
        fall = PIECEWISE_PERCENT_START_OF_FALL

        if percent_time <= 0.0 or percent_time >= 1.0:
            return 0.0
        if percent_time < rise:
            return PIECEWISE_SCALE * percent_time / rise
        if percent_time < fall:
            return PIECEWISE_SCALE
        return PIECEWISE_SCALE * (1.0 - percent_time) / (1.0 - fall)


# =============================================================================
# REGISTRY
# =============================================================================

_MODELS: dict[AbsorptionModelName, AbsorptionModel] = {
    AbsorptionModelName.LINEAR: LinearAbsorption(),
    AbsorptionModelName.PARABOLIC: ParabolicAbsorption(),
    AbsorptionModelName.PIECEWISE: PiecewiseLinearAbsorption(),
}


def get_absorption_model(name: AbsorptionModelName | str) -> AbsorptionModel:
    """
    Модель абсорбции по имени.

    Args:
        name: AbsorptionModelName или его строковое значение ("linear", ...)

    Raises:
        ValueError: Если имя модели неизвестно
    """
    try:
        key = AbsorptionModelName(name)
    except ValueError:
        known = ", ".join(m.value for m in AbsorptionModelName)
        raise ValueError(f"Unknown absorption model {name!r} (known: {known})") from None
    return _MODELS[key]
