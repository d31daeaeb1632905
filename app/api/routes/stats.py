from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.config import load_config
from app.schemas.stats import (
    AverageGrowth,
    DashboardStats,
    GrowthPoint,
    MonthlyStats,
    RecentActivity,
    RegistrationTrend,
    StuntingDistribution,
)
from app.services import statistics_service
from app.services.errors import RecordNotFound


router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardStats)
def dashboard() -> DashboardStats:
    return statistics_service.dashboard_stats()


@router.get("/growth/{child_id}", response_model=List[GrowthPoint])
def growth(child_id: int):
    try:
        return statistics_service.growth_trend(child_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/monthly/{year}", response_model=MonthlyStats)
def monthly(year: int) -> MonthlyStats:
    return statistics_service.monthly_stats(year)


@router.get("/stunting-distribution", response_model=StuntingDistribution)
def stunting_distribution(as_of: Optional[date] = None) -> StuntingDistribution:
    return statistics_service.stunting_distribution(as_of=as_of)


@router.get("/recent", response_model=RecentActivity)
def recent(days: Optional[int] = Query(None, ge=0)) -> RecentActivity:
    if days is None:
        days = int(load_config().get("stats", {}).get("recent_days", 7))
    return statistics_service.recent_activity(days=days)


@router.get("/registrations/{year}", response_model=RegistrationTrend)
def registrations(year: int) -> RegistrationTrend:
    return statistics_service.registration_trend(year)


@router.get("/average-growth/{year}", response_model=AverageGrowth)
def average_growth(year: int) -> AverageGrowth:
    return statistics_service.average_growth_by_month(year)
