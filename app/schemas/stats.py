from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]
MONTHS_ID_SHORT = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]


class DashboardStats(BaseModel):
    total_children: int
    at_risk: int
    normal: int
    total_measurements: int
    total_activities: int
    published_articles: int
    at_risk_pct: float
    normal_pct: float


class GrowthPoint(BaseModel):
    measured_on: date
    age_months: Optional[int]
    weight_kg: Optional[float]
    height_cm: Optional[float]
    arm_circumference_cm: Optional[float]
    head_circumference_cm: Optional[float]
    nutrition_status: str


class MonthlyStats(BaseModel):
    year: int
    months: List[str]
    measurements: List[int]
    activities: List[int]


class StuntingDistribution(BaseModel):
    as_of: date
    groups: Dict[str, int]


class RecentMeasurement(BaseModel):
    id: int
    child_id: int
    measured_on: date


class RecentActivityItem(BaseModel):
    id: int
    title: str
    scheduled_at: datetime


class RecentArticle(BaseModel):
    id: int
    title: str
    published_on: Optional[date]


class RecentActivity(BaseModel):
    days: int
    since: date
    measurements: List[RecentMeasurement]
    activities: List[RecentActivityItem]
    articles: List[RecentArticle]
    summary: Dict[str, int]


class RegistrationTrend(BaseModel):
    year: int
    months: List[str]
    monthly_count: List[int]
    cumulative_count: List[int]


class AverageGrowth(BaseModel):
    year: int
    months: List[str]
    average_weight_kg: List[float]
    average_height_cm: List[float]
