"""Persist and restore the last computed plan.

A snapshot stores the raw debt rows, strategy and budget that produced a
plan together with its summary figures, so a returning user gets their
inputs back. The payoff engine never sees this layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..domain.repositories.snapshot import SnapshotRepository
from ..logging_config import get_logger
from ..models.snapshot import PlanSnapshot
from .payoff import PlanResult, Strategy

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PlanInputs:
    """Inputs needed to repopulate the planner form."""

    debts: list[dict[str, Any]]
    strategy: Strategy
    monthly_budget: float


def _jsonable_row(row: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key): (value if isinstance(value, (int, float, str)) or value is None else str(value))
            for key, value in row.items()}


def build_snapshot(
    *,
    key: str,
    raw_debts: Iterable[Mapping[str, Any]],
    strategy: Strategy | str,
    monthly_budget: float,
    plan: PlanResult,
    interest_saved: float = 0.0,
) -> PlanSnapshot:
    """Create (but do not persist) a snapshot of ``plan`` and its inputs."""

    chart = [
        {"month": row.month, "balance": round(row.total_balance_end, 2)}
        for row in plan.schedule
    ]
    return PlanSnapshot(
        key=key,
        strategy=Strategy.parse(strategy).value,
        monthly_budget=float(monthly_budget),
        debts_json=json.dumps([_jsonable_row(row) for row in raw_debts]),
        total_debt=plan.starting_balance,
        projected_months=plan.months,
        total_interest=plan.total_interest,
        interest_saved=interest_saved,
        chart_json=json.dumps(chart),
    )


def save_plan_snapshot(
    repo: SnapshotRepository,
    *,
    key: str,
    raw_debts: Iterable[Mapping[str, Any]],
    strategy: Strategy | str,
    monthly_budget: float,
    plan: PlanResult,
    interest_saved: float = 0.0,
) -> PlanSnapshot:
    snapshot = build_snapshot(
        key=key,
        raw_debts=raw_debts,
        strategy=strategy,
        monthly_budget=monthly_budget,
        plan=plan,
        interest_saved=interest_saved,
    )
    saved = repo.save(snapshot)
    logger.info("Plan snapshot saved", extra={"key": key, "months": plan.months})
    return saved


def load_plan_inputs(repo: SnapshotRepository, key: str) -> Optional[PlanInputs]:
    """Return stored inputs for ``key``; unreadable snapshots count as missing."""

    snapshot = repo.get(key)
    if snapshot is None:
        return None
    try:
        debts = json.loads(snapshot.debts_json or "[]")
        strategy = Strategy.parse(snapshot.strategy)
    except ValueError:
        logger.warning("Discarding unreadable plan snapshot", extra={"key": key}, exc_info=True)
        return None
    if not isinstance(debts, list):
        return None
    return PlanInputs(debts=debts, strategy=strategy, monthly_budget=snapshot.monthly_budget)


def chart_points(snapshot: PlanSnapshot) -> list[dict[str, Any]]:
    """Return the stored ``[{month, balance}]`` series."""

    try:
        points = json.loads(snapshot.chart_json or "[]")
    except ValueError:
        return []
    return points if isinstance(points, list) else []


__all__ = [
    "PlanInputs",
    "build_snapshot",
    "chart_points",
    "load_plan_inputs",
    "save_plan_snapshot",
]
