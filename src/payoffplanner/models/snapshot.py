"""Persisted plan snapshots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlanSnapshot(SQLModel, table=True):
    """Most recent successful plan summary plus the inputs that produced it."""

    __tablename__: ClassVar[str] = "plan_snapshot"

    key: str = Field(primary_key=True, max_length=64)
    strategy: str = Field(nullable=False, max_length=16)
    monthly_budget: float = Field(nullable=False)
    debts_json: str = Field(default="[]", nullable=False)
    total_debt: float = Field(default=0.0, nullable=False)
    projected_months: int = Field(default=0, nullable=False)
    total_interest: float = Field(default=0.0, nullable=False)
    interest_saved: float = Field(default=0.0, nullable=False)
    chart_json: str = Field(default="[]", nullable=False)
    saved_at: datetime = Field(default_factory=_utcnow, nullable=False)
