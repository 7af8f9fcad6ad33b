"""Mealtime insulin math: ratios from TDD, bolus/correction dosing, basal range."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterator, Optional, Union

ICR_RULE = 500
ISF_RULE = 1800
GRAMS_PER_CARB_UNIT = 15
BASAL_LOW_FRACTION = 0.4
BASAL_HIGH_FRACTION = 0.5
TABLE_CARB_UNITS = range(0, 6)
PLACEHOLDER = "-"

RawNumber = Union[str, int, float, None]


@dataclass(frozen=True)
class Ratios:
    icr: int
    isf: int


@dataclass(frozen=True)
class DoseRecommendation:
    bolus: int
    correction: int
    total: int


@dataclass(frozen=True)
class BasalRange:
    low: int
    high: int


@dataclass(frozen=True)
class TableRow:
    carb_units: int
    grams: int
    dose: Optional[int]


def coerce_number(raw: RawNumber) -> float:
    """Turn user text into a finite float; anything unusable becomes 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def as_text(raw: RawNumber) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def round_half_up(value: float) -> int:
    # Ties go towards +inf: 2.5 -> 3, -2.5 -> -2.
    return math.floor(value + 0.5)


def display_value(value: Optional[float]) -> str:
    if not value:
        return PLACEHOLDER
    return str(value)


def derive_ratios(tdd: float) -> Ratios:
    if tdd <= 0:
        return Ratios(icr=0, isf=0)
    return Ratios(icr=round_half_up(ICR_RULE / tdd), isf=round_half_up(ISF_RULE / tdd))


def bolus_dose(icr: float, carbs_g: float) -> int:
    if icr <= 0:
        return 0
    return round_half_up(carbs_g / icr)


def correction_dose(isf: float, current_bg: float, target_bg: float) -> int:
    """Insulin needed to bring ``current_bg`` to ``target_bg``.

    A missing reading or target (0) yields no correction. Readings under
    target give a negative dose, which is returned unclamped.
    """
    if isf <= 0 or current_bg == 0 or target_bg == 0:
        return 0
    return round_half_up((current_bg - target_bg) / isf)


def dose_recommendation(
    ratios: Ratios,
    carbs_g: float,
    current_bg: float,
    target_bg: float,
) -> DoseRecommendation:
    bolus = bolus_dose(ratios.icr, carbs_g)
    correction = correction_dose(ratios.isf, current_bg, target_bg)
    return DoseRecommendation(
        bolus=bolus,
        correction=correction,
        total=round_half_up(bolus + correction),
    )


def basal_range(tdd: float) -> Optional[BasalRange]:
    if tdd <= 0:
        return None
    return BasalRange(
        low=round_half_up(tdd * BASAL_LOW_FRACTION),
        high=round_half_up(tdd * BASAL_HIGH_FRACTION),
    )


class BolusTable:
    """Preview of bolus doses for 0 to 5 carb units at a given ICR.

    Each iteration recomputes the rows, so the same table can be rendered
    any number of times.
    """

    def __init__(self, icr: float) -> None:
        self.icr = icr

    def __iter__(self) -> Iterator[TableRow]:
        for carb_units in TABLE_CARB_UNITS:
            grams = carb_units * GRAMS_PER_CARB_UNIT
            dose = round_half_up(grams / self.icr) if self.icr > 0 else None
            yield TableRow(carb_units=carb_units, grams=grams, dose=dose)

    def __len__(self) -> int:
        return len(TABLE_CARB_UNITS)
