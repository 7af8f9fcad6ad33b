"""Insulin dose calculator FastAPI backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import SqliteKeyValueStore, StorageError
from .i18n import labels_for
from .schemas import (
    BasalRangeView,
    CalculatorView,
    CarbEditRequest,
    CarbSliderRequest,
    DoseView,
    InputsUpdate,
    InputsView,
    LanguageRequest,
    RatiosView,
    TableRowView,
)
from .session import DoseSession, SessionSnapshot
from .tools.dose_math import PLACEHOLDER, display_value

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("dosecalc")

app = FastAPI(title="Insulin Dose Calculator API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

store = SqliteKeyValueStore()
session = DoseSession(store)


@app.on_event("startup")
def startup() -> None:
    try:
        store.init_db()
    except StorageError as exc:
        logger.warning("Inputs will not be remembered: %s", exc)
    session.load()


def render(snapshot: SessionSnapshot) -> CalculatorView:
    labels = labels_for(snapshot.lang)
    inputs = snapshot.inputs
    recommendation = snapshot.recommendation

    ratios = None
    if snapshot.show_ratios:
        ratios = RatiosView(
            icr=snapshot.ratios.icr,
            isf=snapshot.ratios.isf,
            icr_display=display_value(snapshot.ratios.icr),
            isf_display=display_value(snapshot.ratios.isf),
        )

    basal = None
    if snapshot.basal_range is not None:
        basal = BasalRangeView(low=snapshot.basal_range.low, high=snapshot.basal_range.high)

    return CalculatorView(
        lang=snapshot.lang,
        labels=labels,
        inputs=InputsView(
            bg=inputs.bg,
            tdd=inputs.tdd,
            basal=inputs.basal,
            target_bg=inputs.target_bg,
            carb_grams=inputs.carbs.grams,
            carb_units=inputs.carbs.units,
            last_carb_edited=inputs.carbs.mode.value,
        ),
        dose=DoseView(
            bolus=recommendation.bolus,
            correction=recommendation.correction,
            total=recommendation.total,
            bolus_display=display_value(recommendation.bolus),
            correction_display=display_value(recommendation.correction),
            total_display=display_value(recommendation.total),
        ),
        basal_range=basal,
        table=[
            TableRowView(
                carb_units=row.carb_units,
                grams=row.grams,
                dose=row.dose,
                dose_display=str(row.dose) if row.dose is not None else PLACEHOLDER,
            )
            for row in snapshot.table
        ],
        show_ratios=snapshot.show_ratios,
        ratios=ratios,
        medical_disclaimer=labels["footer"],
    )


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/v1/calculator", response_model=CalculatorView)
def get_calculator() -> CalculatorView:
    return render(session.snapshot())


@app.patch("/v1/calculator", response_model=CalculatorView)
def update_inputs(request: InputsUpdate) -> CalculatorView:
    session.update(
        bg=request.bg,
        tdd=request.tdd,
        basal=request.basal,
        target_bg=request.target_bg,
    )
    return render(session.snapshot())


@app.post("/v1/calculator/refresh", response_model=CalculatorView)
def refresh_calculator() -> CalculatorView:
    session.refresh()
    return render(session.snapshot())


@app.post("/v1/carbs/grams", response_model=CalculatorView)
def edit_carb_grams(request: CarbEditRequest) -> CalculatorView:
    session.edit_carb_grams(request.value)
    return render(session.snapshot())


@app.post("/v1/carbs/units", response_model=CalculatorView)
def edit_carb_units(request: CarbEditRequest) -> CalculatorView:
    session.edit_carb_units(request.value)
    return render(session.snapshot())


@app.post("/v1/carbs/slider", response_model=CalculatorView)
def slide_carb_units(request: CarbSliderRequest) -> CalculatorView:
    session.slide_carb_units(request.position)
    return render(session.snapshot())


@app.post("/v1/lang/toggle", response_model=CalculatorView)
def toggle_language() -> CalculatorView:
    session.toggle_language()
    return render(session.snapshot())


@app.put("/v1/lang", response_model=CalculatorView)
def set_language(request: LanguageRequest) -> CalculatorView:
    session.set_language(request.lang)
    return render(session.snapshot())


@app.post("/v1/ratios/toggle", response_model=CalculatorView)
def toggle_ratios() -> CalculatorView:
    session.toggle_ratios()
    return render(session.snapshot())
