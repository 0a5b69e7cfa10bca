"""
CarbStatus — Запись об углеводах вместе с её наблюдаемой абсорбцией

Агрегат из:
- entry: CarbEntry, введённая пользователем
- absorption: последний расчёт модельной абсорбции (или None)
- observed_timeline: наблюдаемая абсорбция по интервалам (или None,
  если наблюдаемая абсорбция меньше модельного минимума)

CarbStatus выступает как запись об углеводах: quantity_g и start_ts_utc_ms
берутся из entry, а absorption_time_sec подменяется оценкой из absorption.
Это view поверх entry, а не наследник CarbEntry.

ИНВАРИАНТЫ observed_timeline (проверяются при создании):
1. Отсчёты упорядочены по end_ts_utc_ms (по возрастанию)
2. Интервалы не пересекаются (start следующего >= end предыдущего)
Пустой timeline эквивалентен отсутствующему.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.domain.absorbed_carb_value import AbsorbedCarbValue
from src.core.domain.carb_entry import DEFAULT_STATIC_ABSORPTION_MODEL, CarbEntry, CarbValue
from src.core.math.absorption_models import AbsorptionModel


class CarbStatus(BaseModel):
    """
    Снапшот записи об углеводах и её абсорбции.

    Immutable модель (frozen=True); оценщик вызывается многократно
    с разными моментами времени над одним снапшотом.
    """

    entry: CarbEntry = Field(..., description="Запись, введённая пользователем")
    absorption: AbsorbedCarbValue | None = Field(
        None, description="Последний расчёт абсорбции"
    )
    observed_timeline: tuple[CarbValue, ...] | None = Field(
        None, description="Наблюдаемая абсорбция по интервалам"
    )

    model_config = {"frozen": True}

    @field_validator("observed_timeline")
    @classmethod
    def validate_timeline_order(
        cls, v: tuple[CarbValue, ...] | None
    ) -> tuple[CarbValue, ...] | None:
        """Отсчёты упорядочены по концу интервала и не пересекаются"""
        if v is None:
            return v

        for index, (previous, current) in enumerate(zip(v, v[1:]), start=1):
            if current.end_ts_utc_ms < previous.end_ts_utc_ms:
                raise ValueError(
                    f"observed_timeline[{index}] ends at {current.end_ts_utc_ms}, "
                    f"before previous end {previous.end_ts_utc_ms}"
                )
            if current.start_ts_utc_ms < previous.end_ts_utc_ms:
                raise ValueError(
                    f"observed_timeline[{index}] starts at {current.start_ts_utc_ms}, "
                    f"overlapping previous interval ending at {previous.end_ts_utc_ms}"
                )
        return v

    # -------------------------------------------------------------------------
    # Carb entry view
    # -------------------------------------------------------------------------

    @property
    def quantity_g(self) -> float:
        return self.entry.quantity_g

    @property
    def start_ts_utc_ms(self) -> int:
        return self.entry.start_ts_utc_ms

    @property
    def absorption_time_sec(self) -> float | None:
        """Оценка длительности абсорбции, иначе заявленная в записи."""
        if self.absorption is not None:
            return self.absorption.estimated_duration_sec()
        return self.entry.absorption_time_sec

    def carbs_on_board(
        self,
        at_ts_utc_ms: int,
        default_absorption_time_sec: float,
        delay_sec: float,
        model: AbsorptionModel = DEFAULT_STATIC_ABSORPTION_MODEL,
    ) -> float:
        """Статическая оценка COB с подменённым временем абсорбции."""
        return self._as_entry().carbs_on_board(
            at_ts_utc_ms, default_absorption_time_sec, delay_sec, model=model
        )

    def absorbed_carbs(
        self,
        at_ts_utc_ms: int,
        absorption_time_sec: float,
        delay_sec: float,
        model: AbsorptionModel = DEFAULT_STATIC_ABSORPTION_MODEL,
    ) -> float:
        """Статическая оценка абсорбированных углеводов."""
        return self._as_entry().absorbed_carbs(
            at_ts_utc_ms, absorption_time_sec, delay_sec, model=model
        )

    # -------------------------------------------------------------------------
    # Observed timeline
    # -------------------------------------------------------------------------

    def has_observed_timeline(self) -> bool:
        """True если наблюдаемая абсорбция есть и не пуста."""
        return bool(self.observed_timeline)

    def observation_end_ts_utc_ms(self) -> int | None:
        """Конец последнего наблюдаемого интервала (None без наблюдений)."""
        if not self.observed_timeline:
            return None
        return self.observed_timeline[-1].end_ts_utc_ms

    def _as_entry(self) -> CarbEntry:
        # Нулевая оценка длительности → значение по умолчанию вызывающей стороны
        return CarbEntry(
            quantity_g=self.quantity_g,
            start_ts_utc_ms=self.start_ts_utc_ms,
            absorption_time_sec=self.absorption_time_sec or None,
        )
