"""
CarbEntry / CarbValue — Модели записи об углеводах

CarbEntry — введённая пользователем запись (масса, время начала,
опциональное время абсорбции) со статической оценкой COB / absorbed,
не использующей наблюдаемые данные.

CarbValue — один отсчёт наблюдаемой абсорбции: масса, абсорбированная
за интервал [start, end].

Immutable Pydantic модели (frozen=True).
"""

from pydantic import BaseModel, Field, field_validator

from src.core.domain.units import elapsed_sec, ms_to_sec
from src.core.math.absorption_models import AbsorptionModel, ParabolicAbsorption

# Модель статической оценки по умолчанию
DEFAULT_STATIC_ABSORPTION_MODEL: AbsorptionModel = ParabolicAbsorption()


# =============================================================================
# CARB VALUE
# =============================================================================


class CarbValue(BaseModel):
    """Масса углеводов, абсорбированная за интервал [start, end]."""

    start_ts_utc_ms: int = Field(..., gt=0, description="Начало интервала (UTC, миллисекунды)")
    end_ts_utc_ms: int = Field(..., gt=0, description="Конец интервала (UTC, миллисекунды)")
    quantity_g: float = Field(..., ge=0, description="Абсорбированная масса (граммы)")

    model_config = {"frozen": True}

    @field_validator("end_ts_utc_ms")
    @classmethod
    def validate_end_not_before_start(cls, v: int, info) -> int:
        """Интервал может быть нулевой длины, но не отрицательной"""
        if "start_ts_utc_ms" in info.data:
            start_ts = info.data["start_ts_utc_ms"]
            if v < start_ts:
                raise ValueError(f"end_ts_utc_ms {v} must not be before start_ts_utc_ms {start_ts}")
        return v

    def duration_sec(self) -> float:
        """Длительность интервала в секундах."""
        return ms_to_sec(self.end_ts_utc_ms - self.start_ts_utc_ms)


# =============================================================================
# CARB ENTRY
# =============================================================================


class CarbEntry(BaseModel):
    """
    Запись о приёме углеводов.

    absorption_time_sec — заявленное время абсорбции; None означает
    "использовать значение по умолчанию" вызывающей стороны.
    """

    quantity_g: float = Field(..., ge=0, description="Масса углеводов (граммы)")
    start_ts_utc_ms: int = Field(..., gt=0, description="Время приёма (UTC, миллисекунды)")
    absorption_time_sec: float | None = Field(
        None, gt=0, description="Заявленное время абсорбции (секунды)"
    )

    model_config = {"frozen": True}

    def carbs_on_board(
        self,
        at_ts_utc_ms: int,
        default_absorption_time_sec: float,
        delay_sec: float,
        model: AbsorptionModel = DEFAULT_STATIC_ABSORPTION_MODEL,
    ) -> float:
        """
        Статическая оценка неабсорбированных углеводов.

        До времени приёма углеводов на борту нет (0.0).

        Args:
            at_ts_utc_ms: Момент оценки
            default_absorption_time_sec: Время абсорбции, если не заявлено в записи
            delay_sec: Задержка начала абсорбции
            model: Кривая абсорбции (default: параболическая)

        Returns:
            COB в граммах
        """
        time_sec = elapsed_sec(at_ts_utc_ms, self.start_ts_utc_ms)
        if time_sec < 0:
            return 0.0

        absorption_time_sec = self.absorption_time_sec or default_absorption_time_sec
        return model.unabsorbed_carbs(self.quantity_g, time_sec - delay_sec, absorption_time_sec)

    def absorbed_carbs(
        self,
        at_ts_utc_ms: int,
        absorption_time_sec: float,
        delay_sec: float,
        model: AbsorptionModel = DEFAULT_STATIC_ABSORPTION_MODEL,
    ) -> float:
        """
        Статическая оценка абсорбированных углеводов.

        Returns:
            Абсорбированная масса в граммах
        """
        time_sec = elapsed_sec(at_ts_utc_ms, self.start_ts_utc_ms)
        return model.absorbed_carbs(self.quantity_g, time_sec - delay_sec, absorption_time_sec)
