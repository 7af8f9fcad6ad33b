"""Keeps the carb-unit and gram fields in step, driven by the last field edited."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .dose_math import GRAMS_PER_CARB_UNIT, RawNumber, as_text, coerce_number, round_half_up

SLIDER_MIN = 0
SLIDER_MAX = 10


class CarbEditMode(str, Enum):
    GRAMS = "grams"
    UNITS = "units"
    NONE = "none"


def grams_to_units(carbs_g: float) -> int:
    return round_half_up(carbs_g / GRAMS_PER_CARB_UNIT)


def units_to_grams(carb_units: float) -> int:
    return round_half_up(carb_units * GRAMS_PER_CARB_UNIT)


@dataclass
class CarbFields:
    """Raw text of both carb inputs plus which one is the source of truth.

    The field named by ``mode`` holds what the user typed; the other one is
    always derived from it. An empty string means the field is empty.
    """

    grams: str = ""
    units: str = ""
    mode: CarbEditMode = CarbEditMode.NONE

    def edit_grams(self, value: RawNumber) -> None:
        self.grams = as_text(value)
        self.mode = CarbEditMode.GRAMS
        self.recompute()

    def edit_units(self, value: RawNumber) -> None:
        self.units = as_text(value)
        self.mode = CarbEditMode.UNITS
        self.recompute()

    def slide_units(self, position: RawNumber) -> None:
        snapped = round_half_up(coerce_number(position))
        self.edit_units(str(max(SLIDER_MIN, min(SLIDER_MAX, snapped))))

    def recompute(self) -> None:
        if self.mode is CarbEditMode.GRAMS:
            carbs_g = coerce_number(self.grams)
            self.units = str(grams_to_units(carbs_g)) if carbs_g > 0 else ""
        elif self.mode is CarbEditMode.UNITS:
            carb_units = coerce_number(self.units)
            self.grams = str(units_to_grams(carb_units)) if carb_units > 0 else ""

    def clear(self) -> None:
        self.grams = ""
        self.units = ""
        self.mode = CarbEditMode.NONE

    @property
    def carbs_g(self) -> float:
        return coerce_number(self.grams)

