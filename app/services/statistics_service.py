from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd
from sqlalchemy import func

from app.db.models import Activity, Article, Child, Measurement
from app.db.session import SessionLocal
from app.schemas.stats import (
    MONTHS_ID,
    MONTHS_ID_SHORT,
    AverageGrowth,
    DashboardStats,
    GrowthPoint,
    MonthlyStats,
    RecentActivity,
    RecentActivityItem,
    RecentArticle,
    RecentMeasurement,
    RegistrationTrend,
    StuntingDistribution,
)
from app.services.errors import RecordNotFound
from app.utils.time import days_ago, today, year_bounds
from src.models.growth.nutrition_status import NutritionStatus, age_in_months


logger = logging.getLogger(__name__)

AGE_GROUP_BINS = [-1, 6, 12, 24, 36, 60]
AGE_GROUP_LABELS = ["0-6 bulan", "7-12 bulan", "13-24 bulan", "25-36 bulan", "37-60 bulan"]


def _pct(part: int, total: int) -> float:
    return round(part / total * 100.0, 2) if total > 0 else 0.0


def _monthly_counts(values: Iterable) -> List[int]:
    s = pd.to_datetime(pd.Series(list(values), dtype="object"))
    if s.empty:
        return [0] * 12
    counts = s.dt.month.value_counts()
    return [int(counts.get(m, 0)) for m in range(1, 13)]


def _year_datetimes(year: int) -> tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def dashboard_stats() -> DashboardStats:
    db = SessionLocal()
    try:
        by_status = dict(
            db.query(Child.nutrition_status, func.count(Child.id))
            .group_by(Child.nutrition_status)
            .all()
        )
        total = int(sum(by_status.values()))
        at_risk = int(by_status.get(NutritionStatus.AT_RISK_STUNTING.value, 0))
        normal = int(by_status.get(NutritionStatus.NORMAL.value, 0))

        stats = DashboardStats(
            total_children=total,
            at_risk=at_risk,
            normal=normal,
            total_measurements=db.query(func.count(Measurement.id)).scalar() or 0,
            total_activities=db.query(func.count(Activity.id)).scalar() or 0,
            published_articles=db.query(func.count(Article.id))
            .filter(Article.status == "published")
            .scalar()
            or 0,
            at_risk_pct=_pct(at_risk, total),
            normal_pct=_pct(normal, total),
        )
        logger.debug("Dashboard stats: %s", stats)
        return stats
    finally:
        db.close()


def growth_trend(child_id: int) -> List[GrowthPoint]:
    """Measurement series for one child, oldest -> newest (chart order)."""
    db = SessionLocal()
    try:
        if db.get(Child, child_id) is None:
            raise RecordNotFound("child", child_id)
        rows = (
            db.query(Measurement)
            .filter(Measurement.child_id == child_id)
            .order_by(Measurement.measured_on.asc(), Measurement.id.asc())
            .all()
        )
        return [
            GrowthPoint(
                measured_on=r.measured_on,
                age_months=r.age_months,
                weight_kg=r.weight_kg,
                height_cm=r.height_cm,
                arm_circumference_cm=r.arm_circumference_cm,
                head_circumference_cm=r.head_circumference_cm,
                nutrition_status=r.nutrition_status,
            )
            for r in rows
        ]
    finally:
        db.close()


def monthly_stats(year: int) -> MonthlyStats:
    """Measurements and activities per calendar month of a year."""
    start, end = year_bounds(year)
    dt_start, dt_end = _year_datetimes(year)
    db = SessionLocal()
    try:
        measured = [
            r[0]
            for r in db.query(Measurement.measured_on)
            .filter(Measurement.measured_on >= start, Measurement.measured_on <= end)
            .all()
        ]
        scheduled = [
            r[0]
            for r in db.query(Activity.scheduled_at)
            .filter(Activity.scheduled_at >= dt_start, Activity.scheduled_at < dt_end)
            .all()
        ]
    finally:
        db.close()

    return MonthlyStats(
        year=year,
        months=MONTHS_ID,
        measurements=_monthly_counts(measured),
        activities=_monthly_counts(scheduled),
    )


def stunting_distribution(as_of: Optional[date] = None) -> StuntingDistribution:
    """At-risk children bucketed by age group. Children older than 60 months are left out."""
    ref = as_of or today()
    db = SessionLocal()
    try:
        births = [
            r[0]
            for r in db.query(Child.birth_date)
            .filter(Child.nutrition_status == NutritionStatus.AT_RISK_STUNTING.value)
            .all()
        ]
    finally:
        db.close()

    ages = pd.Series([age_in_months(b, ref) for b in births], dtype="float64")
    groups = pd.cut(ages, bins=AGE_GROUP_BINS, labels=AGE_GROUP_LABELS).value_counts()
    return StuntingDistribution(
        as_of=ref,
        groups={label: int(groups.get(label, 0)) for label in AGE_GROUP_LABELS},
    )


def recent_activity(days: int = 7) -> RecentActivity:
    since = days_ago(days)
    since_dt = datetime.combine(since, time.min)
    db = SessionLocal()
    try:
        measurements = (
            db.query(Measurement)
            .filter(Measurement.measured_on >= since)
            .order_by(Measurement.measured_on.desc())
            .all()
        )
        activities = (
            db.query(Activity)
            .filter(Activity.created_at >= since_dt)
            .order_by(Activity.created_at.desc())
            .all()
        )
        articles = (
            db.query(Article)
            .filter(Article.created_at >= since_dt)
            .order_by(Article.created_at.desc())
            .all()
        )
        out = RecentActivity(
            days=days,
            since=since,
            measurements=[
                RecentMeasurement(id=m.id, child_id=m.child_id, measured_on=m.measured_on)
                for m in measurements
            ],
            activities=[
                RecentActivityItem(id=a.id, title=a.title, scheduled_at=a.scheduled_at)
                for a in activities
            ],
            articles=[
                RecentArticle(id=a.id, title=a.title, published_on=a.published_on)
                for a in articles
            ],
            summary={
                "measurements": len(measurements),
                "activities": len(activities),
                "articles": len(articles),
            },
        )
        return out
    finally:
        db.close()


def registration_trend(year: int, ref: Optional[date] = None) -> RegistrationTrend:
    """
    Children registered per month of a year plus the running total.

    For the current year the running total stops at the current month;
    later months stay at 0.
    """
    ref = ref or today()
    dt_start, dt_end = _year_datetimes(year)
    db = SessionLocal()
    try:
        created = [
            r[0]
            for r in db.query(Child.created_at)
            .filter(Child.created_at >= dt_start, Child.created_at < dt_end)
            .all()
        ]
    finally:
        db.close()

    monthly = _monthly_counts(created)
    last_month = ref.month if year == ref.year else 12
    cumulative = np.zeros(12, dtype=int)
    cumulative[:last_month] = np.cumsum(monthly[:last_month])

    return RegistrationTrend(
        year=year,
        months=MONTHS_ID_SHORT,
        monthly_count=monthly,
        cumulative_count=[int(x) for x in cumulative],
    )


def average_growth_by_month(year: int) -> AverageGrowth:
    """Mean weight and height of the measurements taken in each month (0.0 when none)."""
    start, end = year_bounds(year)
    db = SessionLocal()
    try:
        rows = (
            db.query(Measurement.measured_on, Measurement.weight_kg, Measurement.height_cm)
            .filter(Measurement.measured_on >= start, Measurement.measured_on <= end)
            .all()
        )
    finally:
        db.close()

    df = pd.DataFrame([tuple(r) for r in rows], columns=["measured_on", "weight_kg", "height_cm"])
    if df.empty:
        zeros = [0.0] * 12
        return AverageGrowth(year=year, months=MONTHS_ID_SHORT, average_weight_kg=zeros, average_height_cm=list(zeros))

    df["month"] = pd.to_datetime(df["measured_on"]).dt.month
    for col in ("weight_kg", "height_cm"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    means = (
        df.groupby("month")[["weight_kg", "height_cm"]]
        .mean()
        .reindex(range(1, 13))
        .fillna(0.0)
        .round(2)
    )
    return AverageGrowth(
        year=year,
        months=MONTHS_ID_SHORT,
        average_weight_kg=[float(x) for x in means["weight_kg"]],
        average_height_cm=[float(x) for x in means["height_cm"]],
    )
