"""SQLModel implementation of the plan snapshot repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.snapshot import PlanSnapshot

_COPIED_FIELDS = (
    "strategy",
    "monthly_budget",
    "debts_json",
    "total_debt",
    "projected_months",
    "total_interest",
    "interest_saved",
    "chart_json",
    "saved_at",
)


class SQLModelSnapshotRepository:
    """SQLModel-based snapshot repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[PlanSnapshot]:
        with self.session_factory() as session:
            return session.exec(select(PlanSnapshot).where(PlanSnapshot.key == key)).first()

    def save(self, snapshot: PlanSnapshot) -> PlanSnapshot:
        with self.session_factory() as session:
            existing = session.exec(
                select(PlanSnapshot).where(PlanSnapshot.key == snapshot.key)
            ).first()
            if existing:
                for name in _COPIED_FIELDS:
                    setattr(existing, name, getattr(snapshot, name))
                target = existing
            else:
                target = snapshot
                session.add(target)
            session.commit()
            session.refresh(target)
            return target

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            snapshot = session.exec(select(PlanSnapshot).where(PlanSnapshot.key == key)).first()
            if snapshot:
                session.delete(snapshot)
                session.commit()


__all__ = ["SQLModelSnapshotRepository"]
