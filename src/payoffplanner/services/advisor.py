"""Heuristic strategy advisor and persona copy.

The advisor looks only at aggregate debt statistics; it never runs the
payoff simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .payoff import DebtAccount, Strategy

HIGH_APR_THRESHOLD = 25.0
SPREAD_RATIO_THRESHOLD = 8.0


@dataclass(frozen=True, slots=True)
class StrategyRecommendation:
    strategy: Strategy
    note: str


@dataclass(frozen=True, slots=True)
class PersonaCard:
    """Encouraging copy shown next to a generated plan."""

    persona_name: str
    headline: str
    summary: str
    bullets: tuple[str, ...] = field(default_factory=tuple)
    footer: str = ""


def recommend_strategy(debts: Iterable[DebtAccount]) -> StrategyRecommendation:
    """Pick a strategy label from the APR ceiling and the balance spread."""

    debt_list = list(debts)
    max_apr = max((d.apr for d in debt_list), default=0.0)
    positive = [d.balance for d in debt_list if d.balance > 0]
    min_balance = min(positive) if positive else float("inf")
    total_debt = sum(d.balance for d in debt_list if d.balance > 0)

    if max_apr >= HIGH_APR_THRESHOLD:
        return StrategyRecommendation(
            strategy=Strategy.HIGHEST_APR_FIRST,
            note=(
                "Based on your high interest rates, The Rebel (highest APR first) "
                "should save you more interest over time."
            ),
        )
    if total_debt / max(min_balance, 1.0) > SPREAD_RATIO_THRESHOLD:
        return StrategyRecommendation(
            strategy=Strategy.SMALLEST_BALANCE_FIRST,
            note=(
                "You have a mix of debts where a quick win on the smallest balances "
                "can keep you motivated. The Warrior fits best."
            ),
        )
    return StrategyRecommendation(
        strategy=Strategy.INTEREST_WEIGHTED_FIRST,
        note=(
            "Your debts are fairly balanced. The Wizard's interest-weighted approach "
            "is a solid middle ground between motivation and interest savings."
        ),
    )


def build_persona(
    strategy: Strategy | str,
    debt_count: int,
    months: Optional[int] = None,
    total_interest: Optional[float] = None,
) -> PersonaCard:
    """Return the persona card for ``strategy``."""

    strategy = Strategy.parse(strategy)
    month_text = f"around {months} months" if months else "a realistic amount of time"
    if total_interest is not None:
        interest_text = f"roughly ${total_interest:,.2f} in interest on this path."
    else:
        interest_text = "some interest along the way, but far less than standing still."
    base_bullets = (
        f"You're looking at {month_text} to clear this plan.",
        f"You'll pay {interest_text}",
    )

    if strategy is Strategy.SMALLEST_BALANCE_FIRST:
        summary = (
            "You're facing one debt like it's a final boss. Respect."
            if debt_count <= 1
            else "Your debts are lined up smallest first, and they fall one by one."
        )
        return PersonaCard(
            persona_name="The Warrior",
            headline="Charging in with quick-win energy.",
            summary=summary,
            bullets=(
                "Small victories build momentum.",
                "Each payoff frees up cash to hit the next debt harder.",
                *base_bullets,
            ),
            footer="You're not your past spending. You showed up today, and that's Warrior behavior.",
        )

    if strategy is Strategy.INTEREST_WEIGHTED_FIRST:
        return PersonaCard(
            persona_name="The Wizard",
            headline="Outsmarting interest one month at a time.",
            summary="Extra money goes wherever interest is costing you the most dollars right now.",
            bullets=(
                "Every extra payment lands where the interest bill is biggest.",
                "This path quietly saves future-you more than it looks at first glance.",
                *base_bullets,
            ),
            footer="Math may be cold, but Wizards are warm. Keep going.",
        )

    return PersonaCard(
        persona_name="The Rebel",
        headline="Going straight after the highest rates.",
        summary="The card with the highest APR gets every spare dollar until it is gone.",
        bullets=(
            "High-APR troublemakers get knocked out first.",
            "Less of each payment is lost to interest over time.",
            *base_bullets,
        ),
        footer="Zero shame allowed here. Debt is a puzzle, and you're solving it piece by piece.",
    )


__all__ = ["PersonaCard", "StrategyRecommendation", "build_persona", "recommend_strategy"]
