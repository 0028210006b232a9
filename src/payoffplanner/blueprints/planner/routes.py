"""Planner JSON routes."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from flask import current_app, jsonify, request

from payoffplanner.extensions import get_snapshot_repository
from payoffplanner.logging_config import get_logger
from payoffplanner.services.advisor import build_persona, recommend_strategy
from payoffplanner.services.insights import (
    compare_all_strategies,
    compare_strategies,
    find_ideal_budget,
    what_if_extra,
)
from payoffplanner.services.normalizer import normalize_debt, normalize_debts, parse_amount, parse_budget
from payoffplanner.services.payoff import PlanError, PlanResult, Strategy, compute_plan
from payoffplanner.services.reports import (
    plan_summary_text,
    schedule_preview,
    strategy_instructions,
    strategy_label,
)
from payoffplanner.services.snapshots import chart_points, load_plan_inputs, save_plan_snapshot

from . import bp

logger = get_logger(__name__)


def _config():
    return current_app.config["PAYOFF_CONFIG"]


def _payload() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _raw_debts(payload: dict[str, Any]) -> list[dict[str, Any]]:
    rows = payload.get("debts") or []
    if not isinstance(rows, list):
        raise ValueError("debts must be a list of objects.")
    return [row for row in rows if isinstance(row, dict)]


def _strategy(payload: dict[str, Any]) -> Strategy:
    return Strategy.parse(payload.get("strategy") or Strategy.SMALLEST_BALANCE_FIRST)


def _bad_request(message: str):
    return jsonify({"error": message, "kind": "bad_request"}), 400


def _error_response(error: PlanError):
    return jsonify({"error": error.message, "kind": error.kind.value}), 422


def _serialize_plan(plan: PlanResult, *, preview: int | None = None) -> dict[str, Any]:
    rows = plan.schedule
    has_more = False
    if preview is not None:
        rows, has_more = schedule_preview(plan, preview)
    return {
        "months": plan.months,
        "total_interest": plan.total_interest,
        "strategy_used": plan.strategy_used.value,
        "starting_balance": plan.starting_balance,
        "monthly_budget": plan.monthly_budget,
        "total_paid": plan.total_paid,
        "schedule": [asdict(row) for row in rows],
        "has_more_months": has_more,
    }


@bp.errorhandler(ValueError)
def _handle_value_error(exc: ValueError):
    return _bad_request(str(exc))


@bp.post("/plan")
def create_plan():
    """Compute a plan; optionally store it as the latest snapshot."""

    payload = _payload()
    config = _config()
    raw_debts = _raw_debts(payload)
    strategy = _strategy(payload)
    budget = parse_budget(payload.get("monthly_budget"))
    debts = normalize_debts(raw_debts)

    outcome = compute_plan(debts, strategy, budget, max_months=config.MAX_MONTHS)
    if isinstance(outcome, PlanError):
        return _error_response(outcome)

    preview = payload.get("preview")
    body = _serialize_plan(
        outcome, preview=int(preview) if preview is not None else config.SCHEDULE_PREVIEW
    )
    persona = build_persona(strategy, len(debts), outcome.months, outcome.total_interest)
    body.update(
        {
            "label": strategy_label(strategy),
            "summary": plan_summary_text(outcome),
            "instructions": list(strategy_instructions(strategy)),
            "persona": asdict(persona),
        }
    )

    if payload.get("save"):
        comparison = compare_strategies(debts, budget, strategy, max_months=config.MAX_MONTHS)
        interest_saved = max(0.0, comparison.interest_diff) if comparison else 0.0
        save_plan_snapshot(
            get_snapshot_repository(),
            key=config.SNAPSHOT_KEY,
            raw_debts=raw_debts,
            strategy=strategy,
            monthly_budget=budget,
            plan=outcome,
            interest_saved=interest_saved,
        )
        body["saved"] = True
        body["interest_saved"] = interest_saved
    return jsonify(body)


@bp.post("/compare")
def compare():
    """Compare the chosen strategy with its alternative and list all three."""

    payload = _payload()
    config = _config()
    strategy = _strategy(payload)
    budget = parse_budget(payload.get("monthly_budget"))
    debts = normalize_debts(_raw_debts(payload))

    outcomes = compare_all_strategies(debts, budget, max_months=config.MAX_MONTHS)
    first_error = next((o for o in outcomes.values() if isinstance(o, PlanError)), None)
    if first_error is not None:
        return _error_response(first_error)

    comparison = compare_strategies(debts, budget, strategy, max_months=config.MAX_MONTHS)
    return jsonify(
        {
            "strategy": strategy.value,
            "alt_strategy": comparison.alt_strategy.value if comparison else None,
            "interest_diff": comparison.interest_diff if comparison else None,
            "months_diff": comparison.months_diff if comparison else None,
            "strategies": {
                s.value: {"months": o.months, "total_interest": o.total_interest}
                for s, o in outcomes.items()
            },
        }
    )


@bp.post("/what-if")
def what_if():
    payload = _payload()
    config = _config()
    strategy = _strategy(payload)
    budget = parse_budget(payload.get("monthly_budget"))
    extra = parse_amount(payload.get("extra"))
    debts = normalize_debts(_raw_debts(payload))

    base = compute_plan(debts, strategy, budget, max_months=config.MAX_MONTHS)
    if isinstance(base, PlanError):
        return _error_response(base)
    if extra <= 0:
        return _bad_request("extra must be a positive amount.")

    summary = what_if_extra(debts, budget, strategy, extra, max_months=config.MAX_MONTHS)
    if summary is None:
        return _bad_request("Could not compute the what-if plan.")
    return jsonify(asdict(summary))


@bp.post("/ideal-budget")
def ideal_budget():
    payload = _payload()
    strategy = _strategy(payload)
    try:
        target = int(payload.get("target_months") or 36)
    except (TypeError, ValueError):
        return _bad_request("target_months must be a whole number of months.")
    if target <= 0:
        return _bad_request("target_months must be positive.")
    debts = normalize_debts(_raw_debts(payload))

    budget = find_ideal_budget(debts, strategy, target, max_months=_config().MAX_MONTHS)
    return jsonify({"strategy": strategy.value, "target_months": target, "budget": budget})


@bp.post("/recommend")
def recommend():
    payload = _payload()
    debts = [
        normalize_debt(row, position=idx)
        for idx, row in enumerate(_raw_debts(payload), start=1)
    ]
    recommendation = recommend_strategy(debts)
    return jsonify(
        {
            "strategy": recommendation.strategy.value,
            "label": strategy_label(recommendation.strategy),
            "note": recommendation.note,
        }
    )


@bp.get("/snapshot")
def get_snapshot():
    """Return the stored inputs and summary so the form can be repopulated."""

    key = _config().SNAPSHOT_KEY
    repo = get_snapshot_repository()
    inputs = load_plan_inputs(repo, key)
    snapshot = repo.get(key)
    if inputs is None or snapshot is None:
        return jsonify({"error": "No saved plan yet.", "kind": "not_found"}), 404
    return jsonify(
        {
            "debts": inputs.debts,
            "strategy": inputs.strategy.value,
            "monthly_budget": inputs.monthly_budget,
            "summary": {
                "total_debt": snapshot.total_debt,
                "projected_months": snapshot.projected_months,
                "total_interest": snapshot.total_interest,
                "interest_saved": snapshot.interest_saved,
                "monthly_payment": snapshot.monthly_budget,
                "chart": chart_points(snapshot),
            },
            "saved_at": snapshot.saved_at.isoformat(),
        }
    )


@bp.delete("/snapshot")
def delete_snapshot():
    get_snapshot_repository().delete(_config().SNAPSHOT_KEY)
    logger.info("Plan snapshot cleared")
    return "", 204
