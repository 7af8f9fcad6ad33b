"""Calculator session: owns the current inputs and mirrors a subset to storage."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
import logging
import threading
from typing import List, Optional

from .db import KeyValueStore, StorageError
from .i18n import Language, normalize_language, other_language
from .tools.carb_converter import CarbFields
from .tools.dose_math import (
    BasalRange,
    BolusTable,
    DoseRecommendation,
    RawNumber,
    Ratios,
    TableRow,
    as_text,
    basal_range,
    coerce_number,
    derive_ratios,
    dose_recommendation,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "insulinDoseInputs"
LANG_KEY = "insulinDoseLang"

# Target BG used when a stored record has no usable value.
INITIAL_TARGET_BG = "130"
# Target BG used after a refresh and when the stored record cannot be parsed.
RESET_TARGET_BG = "100"


@dataclass
class DoseInputs:
    bg: str = ""
    tdd: str = ""
    basal: str = ""
    target_bg: str = INITIAL_TARGET_BG
    carbs: CarbFields = field(default_factory=CarbFields)

    def persisted_record(self) -> dict:
        return {"tdd": self.tdd, "basal": self.basal, "targetBg": self.target_bg}


@dataclass(frozen=True)
class SessionSnapshot:
    inputs: DoseInputs
    ratios: Ratios
    recommendation: DoseRecommendation
    basal_range: Optional[BasalRange]
    table: List[TableRow]
    lang: Language
    show_ratios: bool


def _record_text(value) -> str:
    # Blank, zero and missing values all fall back to the default.
    if value is None or value == "" or value == 0 or isinstance(value, (dict, list)):
        return ""
    return str(value)


def parse_persisted_record(raw: Optional[str]) -> DoseInputs:
    """Build inputs from a stored record, tolerating missing or corrupt data."""
    try:
        saved = json.loads(raw) if raw else {}
        if saved is None:
            raise TypeError("stored record is null")
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Discarding unreadable %s record: %s", STORAGE_KEY, exc)
        return DoseInputs(target_bg=RESET_TARGET_BG)
    if not isinstance(saved, dict):
        # Readable but field-less values such as [] or 5 carry no inputs.
        saved = {}

    return DoseInputs(
        tdd=_record_text(saved.get("tdd")),
        basal=_record_text(saved.get("basal")),
        target_bg=_record_text(saved.get("targetBg")) or INITIAL_TARGET_BG,
    )


class DoseSession:
    """Single owner of the calculator state.

    Every read and write goes through one lock so the carb fields are never
    observed half-synchronised. Storage is best effort: failures are logged
    and the in-memory state stays authoritative.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.inputs = DoseInputs()
        self.lang: Language = "en"
        self.show_ratios = False
        self._lock = threading.RLock()

    def load(self) -> None:
        with self._lock:
            self.inputs = parse_persisted_record(self._read(STORAGE_KEY))
            self.lang = normalize_language(self._read(LANG_KEY))
            self.show_ratios = False
            self._persist()

    # Field edits

    def update(
        self,
        bg: Optional[RawNumber] = None,
        tdd: Optional[RawNumber] = None,
        basal: Optional[RawNumber] = None,
        target_bg: Optional[RawNumber] = None,
    ) -> None:
        with self._lock:
            if bg is not None:
                self.inputs.bg = as_text(bg)
            persisted_before = self.inputs.persisted_record()
            if tdd is not None:
                self.inputs.tdd = as_text(tdd)
            if basal is not None:
                self.inputs.basal = as_text(basal)
            if target_bg is not None:
                self.inputs.target_bg = as_text(target_bg)
            if self.inputs.persisted_record() != persisted_before:
                self._persist()

    def edit_carb_grams(self, value: RawNumber) -> None:
        with self._lock:
            self.inputs.carbs.edit_grams(value)

    def edit_carb_units(self, value: RawNumber) -> None:
        with self._lock:
            self.inputs.carbs.edit_units(value)

    def slide_carb_units(self, position: RawNumber) -> None:
        with self._lock:
            self.inputs.carbs.slide_units(position)

    # Commands

    def refresh(self) -> None:
        with self._lock:
            self.inputs = DoseInputs(target_bg=RESET_TARGET_BG)
            try:
                self.store.remove(STORAGE_KEY)
            except StorageError as exc:
                logger.warning("Could not remove %s: %s", STORAGE_KEY, exc)
            logger.info("Calculator inputs reset")

    def set_language(self, lang: Optional[str]) -> None:
        with self._lock:
            self.lang = normalize_language(lang)
            self._write(LANG_KEY, self.lang)

    def toggle_language(self) -> None:
        with self._lock:
            self.set_language(other_language(self.lang))

    def toggle_ratios(self) -> None:
        with self._lock:
            self.show_ratios = not self.show_ratios

    # Derived values

    def ratios(self) -> Ratios:
        with self._lock:
            return derive_ratios(coerce_number(self.inputs.tdd))

    def recommendation(self) -> DoseRecommendation:
        with self._lock:
            return dose_recommendation(
                self.ratios(),
                carbs_g=self.inputs.carbs.carbs_g,
                current_bg=coerce_number(self.inputs.bg),
                target_bg=coerce_number(self.inputs.target_bg),
            )

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            ratios = self.ratios()
            return SessionSnapshot(
                inputs=replace(self.inputs, carbs=replace(self.inputs.carbs)),
                ratios=ratios,
                recommendation=self.recommendation(),
                basal_range=basal_range(coerce_number(self.inputs.tdd)),
                table=list(BolusTable(ratios.icr)),
                lang=self.lang,
                show_ratios=self.show_ratios,
            )

    # Storage

    def _persist(self) -> None:
        self._write(STORAGE_KEY, json.dumps(self.inputs.persisted_record()))

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except StorageError as exc:
            logger.warning("Could not read %s: %s", key, exc)
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except StorageError as exc:
            logger.warning("Could not save %s: %s", key, exc)
