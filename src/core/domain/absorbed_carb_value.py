"""
AbsorbedCarbValue — Снапшот модельной абсорбции одной записи

Результат последнего расчёта абсорбции: сколько углеводов наблюдалось,
сколько осталось и сколько времени ещё займёт абсорбция.

Согласованность total_g >= observed_g + remaining_g — контракт
вычисляющей стороны; модель его не проверяет.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.domain.units import ms_to_sec, shift_ts
from src.core.math.numerical_safeguards import EPS_MASS_G, is_zero


class AbsorbedCarbValue(BaseModel):
    """
    Модельная абсорбция записи об углеводах.

    Immutable модель (frozen=True).
    """

    # Массы
    observed_g: float = Field(..., ge=0, description="Наблюдаемая абсорбция (граммы)")
    clamped_g: float = Field(
        ..., ge=0, description="Наблюдаемая абсорбция, ограниченная min/max скоростью (граммы)"
    )
    total_g: float = Field(..., ge=0, description="Полная масса к абсорбции (граммы)")
    remaining_g: float = Field(..., ge=0, description="Оставшаяся масса (граммы)")

    # Интервал наблюдения
    observation_start_ts_utc_ms: int = Field(
        ..., gt=0, description="Начало наблюдения (UTC, миллисекунды)"
    )
    observation_end_ts_utc_ms: int = Field(
        ..., gt=0, description="Конец наблюдения (UTC, миллисекунды)"
    )

    # Оценки времени
    estimated_time_remaining_sec: float = Field(
        ..., ge=0, description="Оценка оставшегося времени абсорбции (секунды)"
    )
    time_to_absorb_observed_sec: float = Field(
        ..., ge=0, description="Время абсорбции наблюдаемых углеводов по модели (секунды)"
    )

    model_config = {"frozen": True}

    @field_validator("observation_end_ts_utc_ms")
    @classmethod
    def validate_observation_end(cls, v: int, info) -> int:
        """Проверка, что наблюдение не заканчивается раньше начала"""
        if "observation_start_ts_utc_ms" in info.data:
            start_ts = info.data["observation_start_ts_utc_ms"]
            if v < start_ts:
                raise ValueError(
                    f"observation_end_ts_utc_ms {v} must not be before "
                    f"observation_start_ts_utc_ms {start_ts}"
                )
        return v

    def estimated_duration_sec(self) -> float:
        """
        Оценка полной длительности абсорбции.

        Длительность наблюдения плюс оценка оставшегося времени.
        """
        observed_sec = ms_to_sec(self.observation_end_ts_utc_ms - self.observation_start_ts_utc_ms)
        return observed_sec + self.estimated_time_remaining_sec

    def estimated_end_ts_utc_ms(self) -> int:
        """Оценка момента завершения абсорбции."""
        return shift_ts(self.observation_end_ts_utc_ms, self.estimated_time_remaining_sec)

    def is_completed(self, tolerance: float = EPS_MASS_G) -> bool:
        """True если оставшаяся масса ≈ 0."""
        return is_zero(self.remaining_g, tol=tolerance)
