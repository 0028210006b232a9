"""SQLModel table exports."""

from .snapshot import PlanSnapshot

__all__ = ["PlanSnapshot"]
