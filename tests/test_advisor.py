"""Strategy advisor tests."""

from __future__ import annotations

import pytest

from payoffplanner.services.advisor import build_persona, recommend_strategy
from payoffplanner.services.payoff import Strategy


def test_high_apr_recommends_rebel(debt_factory):
    debts = [debt_factory(balance=3000.0, apr=27.0), debt_factory(balance=500.0, apr=12.0)]
    rec = recommend_strategy(debts)
    assert rec.strategy is Strategy.HIGHEST_APR_FIRST
    assert "The Rebel" in rec.note


def test_wide_balance_spread_recommends_warrior(debt_factory):
    # total 9300 / smallest 300 = 31 > 8
    debts = [debt_factory(balance=9000.0, apr=18.0), debt_factory(balance=300.0, apr=20.0)]
    rec = recommend_strategy(debts)
    assert rec.strategy is Strategy.SMALLEST_BALANCE_FIRST


def test_balanced_debts_recommend_wizard(debt_factory):
    debts = [debt_factory(balance=2000.0, apr=18.0), debt_factory(balance=2500.0, apr=21.0)]
    rec = recommend_strategy(debts)
    assert rec.strategy is Strategy.INTEREST_WEIGHTED_FIRST


def test_no_debts_recommends_wizard():
    assert recommend_strategy([]).strategy is Strategy.INTEREST_WEIGHTED_FIRST


@pytest.mark.parametrize(
    "strategy, name",
    [("warrior", "The Warrior"), ("rebel", "The Rebel"), ("wizard", "The Wizard")],
)
def test_persona_names(strategy, name):
    card = build_persona(strategy, debt_count=3, months=18, total_interest=1234.5)
    assert card.persona_name == name
    assert "around 18 months" in card.bullets[-2]
    assert "$1,234.50" in card.bullets[-1]


def test_persona_without_plan_numbers():
    card = build_persona(Strategy.SMALLEST_BALANCE_FIRST, debt_count=1)
    assert "final boss" in card.summary
    assert "a realistic amount of time" in card.bullets[-2]
