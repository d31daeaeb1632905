from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

from app.utils.time import now_utc


Base = declarative_base()


class Child(Base):
    __tablename__ = "children"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String, unique=True, index=True, nullable=False)  # e.g. 20250113-AR-001
    name = Column(String, nullable=False)
    nik = Column(String, nullable=True)
    sex = Column(String(1), nullable=False)  # "M" / "F"
    birth_date = Column(Date, index=True, nullable=False)
    birth_weight_kg = Column(Float, nullable=True)
    birth_height_cm = Column(Float, nullable=True)
    mother_name = Column(String, nullable=True)
    father_name = Column(String, nullable=True)
    address = Column(String, nullable=True)
    posyandu = Column(String, nullable=True)

    nutrition_status = Column(String, index=True, nullable=False, default="Normal")
    # manual follow-up label set from the admin panel, e.g. "Risiko Tinggi"
    stunting_risk_level = Column(String, nullable=True)

    created_at = Column(DateTime, default=now_utc, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc, nullable=False)

    measurements = relationship(
        "Measurement",
        back_populates="child",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    child_id = Column(Integer, ForeignKey("children.id", ondelete="CASCADE"), index=True, nullable=False)
    measured_on = Column(Date, index=True, nullable=False)

    weight_kg = Column(Float, nullable=True)
    height_cm = Column(Float, nullable=True)
    arm_circumference_cm = Column(Float, nullable=True)
    head_circumference_cm = Column(Float, nullable=True)

    # derived at write time
    age_months = Column(Integer, nullable=True)
    nutrition_status = Column(String, nullable=False, default="Normal")

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)

    child = relationship("Child", back_populates="measurements")


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, index=True, nullable=False, default="posyandu")
    location = Column(String, nullable=True)
    posyandu = Column(String, nullable=True)
    scheduled_at = Column(DateTime, index=True, nullable=False)
    status = Column(String, index=True, nullable=False, default="Terjadwal")
    created_at = Column(DateTime, default=now_utc, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False, default="")
    category = Column(String, nullable=True)
    status = Column(String, index=True, nullable=False, default="draft")
    published_on = Column(Date, index=True, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)


class ChildCodeSequence(Base):
    """Last sequence number handed out per birth date."""

    __tablename__ = "child_code_sequences"

    birth_date = Column(Date, primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
