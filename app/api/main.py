from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import load_config, setup_logging
from app.db.session import init_db
from app.schemas.growth import AgeInput, AgeOutput, GrowthInput, GrowthOutput
from app.api.routes.activities import router as activities_router
from app.api.routes.articles import router as articles_router
from app.api.routes.children import router as children_router
from app.api.routes.codes import router as codes_router
from app.api.routes.measurements import router as measurements_router
from app.api.routes.stats import router as stats_router
from app.utils.time import today
from src.models.growth.nutrition_status import (
    AnthropometricSample,
    age_in_months,
    assess_growth,
)


cfg = load_config()
setup_logging(cfg.get("app", {}).get("log_level"))
logger = logging.getLogger(__name__)

app = FastAPI(
    title=cfg.get("app", {}).get("title", "Posyandu Growth Monitoring API"),
    version=str(cfg.get("app", {}).get("version", "0.1.0")),
)

app.include_router(children_router)
app.include_router(measurements_router)
app.include_router(activities_router)
app.include_router(articles_router)
app.include_router(stats_router)
app.include_router(codes_router)


@app.on_event("startup")
def _startup() -> None:
    """Create tables on first start."""
    init_db()
    logger.info("Database ready at %s", cfg["paths"]["db_url"])


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/growth/classify", response_model=GrowthOutput)
def growth_classify(inp: GrowthInput) -> GrowthOutput:
    """Screen one sample without storing it (BB/U, TB/U and LILA rules)."""
    age = inp.age_months
    if age is None and inp.birth_date is not None:
        age = age_in_months(inp.birth_date, inp.as_of or today())

    a = assess_growth(
        AnthropometricSample(
            weight_kg=inp.weight_kg,
            height_cm=inp.height_cm,
            arm_circumference_cm=inp.arm_circumference_cm,
            age_months=age,
            sex=inp.sex,
        )
    )
    if not a.complete:
        logger.info("Incomplete growth sample, defaulting to %s", a.status.value)

    return GrowthOutput(
        status=a.status.value,
        age_months=age,
        complete=a.complete,
        weight_for_age_z=a.weight_for_age_z,
        height_for_age_z=a.height_for_age_z,
        weight_for_age_ok=a.weight_for_age_ok,
        height_for_age_ok=a.height_for_age_ok,
        arm_circumference_ok=a.arm_circumference_ok,
    )


@app.post("/growth/age", response_model=AgeOutput)
def growth_age(inp: AgeInput) -> AgeOutput:
    as_of = inp.as_of or today()
    return AgeOutput(
        birth_date=inp.birth_date,
        as_of=as_of,
        age_months=age_in_months(inp.birth_date, as_of),
    )
