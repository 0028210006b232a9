"""Comparison, what-if and ideal budget tests."""

from __future__ import annotations

import pytest

from payoffplanner.services.insights import (
    alternative_strategy,
    compare_all_strategies,
    compare_strategies,
    find_ideal_budget,
    run_plan_safe,
    what_if_extra,
)
from payoffplanner.services.payoff import PlanError, PlanResult, Strategy, compute_plan


@pytest.fixture
def debts(debt_factory):
    return [
        debt_factory(balance=2000.0, apr=28.0, minimum_payment=60.0),
        debt_factory(balance=1000.0, apr=8.0, minimum_payment=30.0),
        debt_factory(balance=1500.0, apr=15.0, minimum_payment=40.0),
    ]


def test_run_plan_safe_hides_errors(debts):
    assert run_plan_safe(debts, 10, Strategy.SMALLEST_BALANCE_FIRST) is None
    assert isinstance(run_plan_safe(debts, 400, Strategy.SMALLEST_BALANCE_FIRST), PlanResult)


@pytest.mark.parametrize(
    "chosen, expected",
    [
        (Strategy.SMALLEST_BALANCE_FIRST, Strategy.HIGHEST_APR_FIRST),
        (Strategy.HIGHEST_APR_FIRST, Strategy.SMALLEST_BALANCE_FIRST),
        (Strategy.INTEREST_WEIGHTED_FIRST, Strategy.HIGHEST_APR_FIRST),
    ],
)
def test_alternative_strategy(chosen, expected):
    assert alternative_strategy(chosen) is expected


def test_compare_strategies_reports_difference(debts):
    comparison = compare_strategies(debts, 400, Strategy.SMALLEST_BALANCE_FIRST)
    snowball = compute_plan(debts, Strategy.SMALLEST_BALANCE_FIRST, 400)
    avalanche = compute_plan(debts, Strategy.HIGHEST_APR_FIRST, 400)

    assert comparison.alt_strategy is Strategy.HIGHEST_APR_FIRST
    assert comparison.interest_diff == pytest.approx(avalanche.total_interest - snowball.total_interest)
    assert comparison.months_diff == avalanche.months - snowball.months
    # avalanche is cheaper here, so the chosen snowball plan does not "save" interest
    assert comparison.interest_diff <= 0


def test_compare_strategies_none_when_plan_fails(debts):
    assert compare_strategies(debts, 50, Strategy.HIGHEST_APR_FIRST) is None


def test_compare_all_strategies(debts):
    outcomes = compare_all_strategies(debts, 400)
    assert set(outcomes) == set(Strategy)
    assert all(isinstance(o, PlanResult) for o in outcomes.values())

    failing = compare_all_strategies(debts, 50)
    assert all(isinstance(o, PlanError) for o in failing.values())


def test_what_if_extra_saves_time_and_interest(debts):
    summary = what_if_extra(debts, 300, Strategy.HIGHEST_APR_FIRST, 100)

    assert summary.extra_amount == 100
    assert summary.months_saved > 0
    assert summary.interest_saved > 0
    base = compute_plan(debts, Strategy.HIGHEST_APR_FIRST, 300)
    assert summary.new_months == base.months - summary.months_saved


@pytest.mark.parametrize("extra", [0, -25])
def test_what_if_requires_positive_extra(debts, extra):
    assert what_if_extra(debts, 300, Strategy.HIGHEST_APR_FIRST, extra) is None


def test_find_ideal_budget_hits_target(debt_factory):
    debts = [debt_factory(balance=1200.0, apr=0.0, minimum_payment=50.0)]

    # 1200 / 36 = 33.3 < minimum, so the minimum itself already qualifies
    assert find_ideal_budget(debts, Strategy.SMALLEST_BALANCE_FIRST, 36) == 50.0
    # 12 months needs $100/month: 50 + 2 * 25
    assert find_ideal_budget(debts, Strategy.SMALLEST_BALANCE_FIRST, 12) == 100.0


def test_find_ideal_budget_none_outside_span(debt_factory):
    debts = [debt_factory(balance=100000.0, apr=0.0, minimum_payment=50.0)]
    assert find_ideal_budget(debts, Strategy.SMALLEST_BALANCE_FIRST, 12) is None


def test_find_ideal_budget_without_debts():
    assert find_ideal_budget([], Strategy.SMALLEST_BALANCE_FIRST, 36) is None
