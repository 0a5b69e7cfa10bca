"""Dynamic carb absorption estimator

Оценивает для одной записи об углеводах в произвольный момент времени:
- неабсорбированную массу (carbs on board, COB)
- абсорбированную массу

Объединяет модельную кривую абсорбции с наблюдаемой абсорбцией.
Момент времени t относится к одному из режимов:

1. Нет данных (нет absorption или t раньше начала записи):
   статическая оценка самой записи.
2. До наблюдения (absorption есть, observed_timeline пуст):
   модель с длительностью absorption.estimated_duration_sec().
3. После наблюдения (t > конца последнего отсчёта):
   модель с динамической длительностью
       D = tau_end + estimated_time_remaining
   привязанная к remaining_g / observed_g на границе наблюдения.
4. Внутри наблюдения (t <= конца последнего отсчёта):
   только наблюдаемые данные, модель не используется.

Формулы (tau отсчитывается от начала записи за вычетом delay):
    tau = (t - start) - delay
    tau_end = (observation_end - start) - delay
    COB_post = max(remaining + U(total, tau, D) - U(total, tau_end, D), 0)
    absorbed_post = observed + A(total, tau, D) - A(total, tau_end, D)

Интеграция:
- Модель абсорбции инжектируется при создании (по умолчанию из EstimatorConfig)
- Оценщик не хранит состояния, вызовы независимы
- Исключений при оценке нет: отсутствие данных → статическая оценка
"""

import logging
from dataclasses import dataclass

from src.core.domain.carb_status import CarbStatus
from src.core.domain.units import elapsed_sec, hours, interval_overlap_sec, minutes, shift_ts
from src.core.math.absorption_models import (
    AbsorptionModel,
    AbsorptionModelName,
    get_absorption_model,
)
from src.core.math.numerical_safeguards import (
    EPS_DURATION_SEC,
    clamp,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EstimatorConfig:
    """Конфигурация оценщика.

    Значения по умолчанию для параметров запросов; любой запрос может
    переопределить их явно.
    """

    default_absorption_time_sec: float = hours(3)
    delay_sec: float = minutes(10)
    delta_sec: float = minutes(5)
    absorption_model: AbsorptionModelName = AbsorptionModelName.PIECEWISE

    def __post_init__(self) -> None:
        validate_positive(self.default_absorption_time_sec, "default_absorption_time_sec")
        validate_non_negative(self.delay_sec, "delay_sec")
        validate_non_negative(self.delta_sec, "delta_sec")
        # Нормализация строкового имени ("linear") в enum
        object.__setattr__(self, "absorption_model", AbsorptionModelName(self.absorption_model))


# =============================================================================
# ESTIMATOR
# =============================================================================


class AbsorptionEstimator:
    """Оценщик COB и абсорбированных углеводов для CarbStatus.

    Порядок проверок в обоих запросах:
    1. Нет динамических данных → статическая оценка записи
    2. Нет наблюдаемого timeline → модель (до наблюдения)
    3. t после конца наблюдения → модель, привязанная к границе наблюдения
    4. Иначе → наблюдаемые данные
    """

    def __init__(
        self,
        model: AbsorptionModel | None = None,
        config: EstimatorConfig | None = None,
    ):
        """Инициализация оценщика.

        Args:
            model: модель абсорбции (опционально, иначе по имени из config)
            config: конфигурация (опционально, используется default)
        """
        self.config = config or EstimatorConfig()
        self.model = model or get_absorption_model(self.config.absorption_model)

    # -------------------------------------------------------------------------
    # Carbs on board
    # -------------------------------------------------------------------------

    def dynamic_carbs_on_board(
        self,
        status: CarbStatus,
        at_ts_utc_ms: int,
        default_absorption_time_sec: float | None = None,
        delay_sec: float | None = None,
        delta_sec: float | None = None,
    ) -> float:
        """Неабсорбированные углеводы в момент at_ts_utc_ms.

        Args:
            status: снапшот записи и её абсорбции
            at_ts_utc_ms: момент оценки
            default_absorption_time_sec: время абсорбции для статической оценки
            delay_sec: задержка начала абсорбции
            delta_sec: допуск для моментов чуть раньше начала записи

        Returns:
            COB в граммах (>= 0 в наблюдаемом и пост-наблюдаемом режимах)
        """
        default_absorption_time_sec = self._or_default(
            default_absorption_time_sec, self.config.default_absorption_time_sec
        )
        delay_sec = self._or_default(delay_sec, self.config.delay_sec)
        delta_sec = self._or_default(delta_sec, self.config.delta_sec)

        absorption = status.absorption
        admitted_from_ts = shift_ts(status.start_ts_utc_ms, -delta_sec)

        if at_ts_utc_ms < admitted_from_ts or absorption is None:
            logger.debug("COB: no absorption data, using static estimate")
            return status.entry.carbs_on_board(
                at_ts_utc_ms, default_absorption_time_sec, delay_sec
            )

        time_sec = elapsed_sec(at_ts_utc_ms, status.start_ts_utc_ms) - delay_sec

        if not status.has_observed_timeline():
            # Наблюдаемая абсорбция меньше минимума: модель на оценочной длительности
            return self.model.unabsorbed_carbs(
                absorption.total_g, time_sec, absorption.estimated_duration_sec()
            )

        observation_end_ts = status.observation_end_ts_utc_ms()

        if at_ts_utc_ms > observation_end_ts:
            end_time_sec = elapsed_sec(observation_end_ts, status.start_ts_utc_ms) - delay_sec
            absorption_time_sec = end_time_sec + absorption.estimated_time_remaining_sec

            unabsorbed_at_time = self.model.unabsorbed_carbs(
                absorption.total_g, time_sec, absorption_time_sec
            )
            unabsorbed_at_end = self.model.unabsorbed_carbs(
                absorption.total_g, end_time_sec, absorption_time_sec
            )
            return clamp(
                absorption.remaining_g + unabsorbed_at_time - unabsorbed_at_end,
                min_value=0.0,
            )

        # TODO: prefix sums over the timeline to avoid O(n^2) when building COB series
        remaining_g = status.quantity_g
        for value in status.observed_timeline:
            if value.end_ts_utc_ms <= at_ts_utc_ms:
                remaining_g -= value.quantity_g
        return clamp(remaining_g, min_value=0.0)

    # -------------------------------------------------------------------------
    # Absorbed carbs
    # -------------------------------------------------------------------------

    def dynamic_absorbed_carbs(
        self,
        status: CarbStatus,
        at_ts_utc_ms: int,
        absorption_time_sec: float | None = None,
        delay_sec: float | None = None,
        delta_sec: float | None = None,
    ) -> float:
        """Абсорбированные углеводы в момент at_ts_utc_ms.

        Внутри наблюдения последний начавшийся отсчёт учитывается
        пропорционально пройденной части своего интервала, поэтому
        результат растёт непрерывно, а не скачками на границах отсчётов.

        Args:
            status: снапшот записи и её абсорбции
            at_ts_utc_ms: момент оценки
            absorption_time_sec: время абсорбции для статической оценки
            delay_sec: задержка начала абсорбции
            delta_sec: допуск на начало отсчёта внутри наблюдения

        Returns:
            Абсорбированная масса в граммах
        """
        absorption_time_sec = self._or_default(
            absorption_time_sec, self.config.default_absorption_time_sec
        )
        delay_sec = self._or_default(delay_sec, self.config.delay_sec)
        delta_sec = self._or_default(delta_sec, self.config.delta_sec)

        absorption = status.absorption

        if at_ts_utc_ms < status.start_ts_utc_ms or absorption is None:
            logger.debug("Absorbed: no absorption data, using static estimate")
            return status.entry.absorbed_carbs(at_ts_utc_ms, absorption_time_sec, delay_sec)

        time_sec = elapsed_sec(at_ts_utc_ms, status.start_ts_utc_ms) - delay_sec

        if not status.has_observed_timeline():
            return self.model.absorbed_carbs(
                absorption.total_g, time_sec, absorption.estimated_duration_sec()
            )

        observation_end_ts = status.observation_end_ts_utc_ms()

        if at_ts_utc_ms > observation_end_ts:
            end_time_sec = elapsed_sec(observation_end_ts, status.start_ts_utc_ms) - delay_sec
            dynamic_absorption_time_sec = end_time_sec + absorption.estimated_time_remaining_sec

            absorbed_at_time = self.model.absorbed_carbs(
                absorption.total_g, time_sec, dynamic_absorption_time_sec
            )
            absorbed_at_end = self.model.absorbed_carbs(
                absorption.total_g, end_time_sec, dynamic_absorption_time_sec
            )
            return absorption.observed_g + absorbed_at_time - absorbed_at_end

        started = [
            value
            for value in status.observed_timeline
            if shift_ts(value.start_ts_utc_ms, delta_sec) <= at_ts_utc_ms
        ]
        if not started:
            return 0.0

        # Последний начавшийся отсчёт учитывается частично
        last = started.pop()
        total_g = 0.0
        observation_sec = last.duration_sec()
        if observation_sec > EPS_DURATION_SEC:
            elapsed_in_value_sec = interval_overlap_sec(
                last.start_ts_utc_ms, at_ts_utc_ms, last.start_ts_utc_ms, last.end_ts_utc_ms
            )
            total_g += elapsed_in_value_sec / observation_sec * last.quantity_g

        for value in started:
            total_g += value.quantity_g

        return clamp(total_g, max_value=status.quantity_g)

    @staticmethod
    def _or_default(value: float | None, default: float) -> float:
        return default if value is None else value
