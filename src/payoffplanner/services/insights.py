"""Derived insights built from repeated engine runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .payoff import (
    DEFAULT_MAX_MONTHS,
    DebtAccount,
    PlanOutcome,
    PlanResult,
    Strategy,
    compute_plan,
)

_ALTERNATIVES = {
    Strategy.SMALLEST_BALANCE_FIRST: Strategy.HIGHEST_APR_FIRST,
    Strategy.HIGHEST_APR_FIRST: Strategy.SMALLEST_BALANCE_FIRST,
    # the interest-weighted plan is compared against avalanche by default
    Strategy.INTEREST_WEIGHTED_FIRST: Strategy.HIGHEST_APR_FIRST,
}


@dataclass(frozen=True, slots=True)
class StrategyComparison:
    """Chosen plan versus its alternative; positive diffs favour the chosen plan."""

    alt_strategy: Strategy
    interest_diff: float
    months_diff: int


@dataclass(frozen=True, slots=True)
class WhatIfSummary:
    """Effect of paying ``extra_amount`` more every month."""

    extra_amount: float
    new_months: int
    interest_saved: float
    months_saved: int


def run_plan_safe(
    debts: Sequence[DebtAccount],
    budget: float,
    strategy: Strategy | str,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[PlanResult]:
    """Return the plan or ``None`` so callers need not inspect the error union."""

    outcome = compute_plan(debts, strategy, budget, max_months=max_months)
    return outcome if isinstance(outcome, PlanResult) else None


def alternative_strategy(strategy: Strategy | str) -> Strategy:
    return _ALTERNATIVES[Strategy.parse(strategy)]


def compare_strategies(
    debts: Sequence[DebtAccount],
    budget: float,
    strategy: Strategy | str,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[StrategyComparison]:
    """Compare the chosen strategy with its natural alternative."""

    chosen = Strategy.parse(strategy)
    alt = alternative_strategy(chosen)
    base_plan = run_plan_safe(debts, budget, chosen, max_months=max_months)
    alt_plan = run_plan_safe(debts, budget, alt, max_months=max_months)
    if base_plan is None or alt_plan is None:
        return None
    return StrategyComparison(
        alt_strategy=alt,
        interest_diff=alt_plan.total_interest - base_plan.total_interest,
        months_diff=alt_plan.months - base_plan.months,
    )


def compare_all_strategies(
    debts: Sequence[DebtAccount],
    budget: float,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> dict[Strategy, PlanOutcome]:
    """Run every strategy against the same inputs."""

    return {
        strategy: compute_plan(debts, strategy, budget, max_months=max_months)
        for strategy in Strategy
    }


def what_if_extra(
    debts: Sequence[DebtAccount],
    budget: float,
    strategy: Strategy | str,
    extra: float,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[WhatIfSummary]:
    """Show time and interest saved by adding ``extra`` to the monthly budget."""

    if extra <= 0:
        return None
    base_plan = run_plan_safe(debts, budget, strategy, max_months=max_months)
    extra_plan = run_plan_safe(debts, budget + extra, strategy, max_months=max_months)
    if base_plan is None or extra_plan is None:
        return None
    return WhatIfSummary(
        extra_amount=extra,
        new_months=extra_plan.months,
        interest_saved=base_plan.total_interest - extra_plan.total_interest,
        months_saved=base_plan.months - extra_plan.months,
    )


def find_ideal_budget(
    debts: Iterable[DebtAccount],
    strategy: Strategy | str,
    target_months: int = 36,
    *,
    step: float = 25.0,
    search_span: float = 2000.0,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Optional[float]:
    """Return the smallest stepped budget that clears the debts within ``target_months``.

    The search starts at the sum of minimum payments and walks upward in
    ``step`` increments until ``search_span`` above it. This is a coarse
    linear scan, not a solver.
    """

    debt_list = [debt for debt in debts if debt.is_payable]
    if not debt_list or step <= 0:
        return None

    min_budget = sum(debt.minimum_payment for debt in debt_list)
    if min_budget <= 0:
        return None

    steps = int(search_span // step)
    for i in range(steps + 1):
        budget = min_budget + i * step
        plan = run_plan_safe(debt_list, budget, strategy, max_months=max_months)
        if plan is not None and plan.months <= target_months:
            return budget
    return None


__all__ = [
    "StrategyComparison",
    "WhatIfSummary",
    "alternative_strategy",
    "compare_all_strategies",
    "compare_strategies",
    "find_ideal_budget",
    "run_plan_safe",
    "what_if_extra",
]
