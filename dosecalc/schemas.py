"""Pydantic models for the dose calculator API."""

from __future__ import annotations

from typing import Dict, List, Optional, Union, Literal
from pydantic import BaseModel, Field, ConfigDict

RawInput = Union[str, int, float, None]


class InputsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bg: RawInput = None
    tdd: RawInput = None
    basal: RawInput = None
    target_bg: RawInput = None


class CarbEditRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: RawInput = None


class CarbSliderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    position: RawInput = Field(default=0)


class LanguageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Unknown codes fall back to English rather than being rejected.
    lang: Optional[str] = None


class InputsView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bg: str
    tdd: str
    basal: str
    target_bg: str
    carb_grams: str
    carb_units: str
    last_carb_edited: Literal["grams", "units", "none"]


class DoseView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bolus: int
    correction: int
    total: int
    bolus_display: str
    correction_display: str
    total_display: str


class BasalRangeView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    low: int
    high: int


class RatiosView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    icr: int
    isf: int
    icr_display: str
    isf_display: str


class TableRowView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    carb_units: int = Field(..., ge=0)
    grams: int = Field(..., ge=0)
    dose: Optional[int] = None
    dose_display: str


class CalculatorView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lang: Literal["en", "th"]
    labels: Dict[str, str]
    inputs: InputsView
    dose: DoseView
    basal_range: Optional[BasalRangeView] = None
    table: List[TableRowView] = Field(..., min_length=6, max_length=6)
    show_ratios: bool
    ratios: Optional[RatiosView] = None
    medical_disclaimer: str
