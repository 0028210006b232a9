"""Reporting utilities: labels, summary text and payoff charts."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import matplotlib.ticker as mticker  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from .payoff import PlanResult, ScheduleRow, Strategy  # noqa: E402

_LABELS = {
    Strategy.SMALLEST_BALANCE_FIRST: "The Warrior",
    Strategy.HIGHEST_APR_FIRST: "The Rebel",
    Strategy.INTEREST_WEIGHTED_FIRST: "The Wizard",
}

_DESCRIPTIONS = {
    Strategy.SMALLEST_BALANCE_FIRST: "Warrior (Smallest Balance First)",
    Strategy.HIGHEST_APR_FIRST: "Rebel (Highest APR First)",
    Strategy.INTEREST_WEIGHTED_FIRST: "Wizard (Interest-Optimized)",
}

_INSTRUCTIONS = {
    Strategy.SMALLEST_BALANCE_FIRST: (
        "Always pay at least the minimum on every card.",
        "Use all extra money to attack the card with the smallest balance.",
        "When that card is gone, roll its old minimum payment into the next smallest balance.",
    ),
    Strategy.HIGHEST_APR_FIRST: (
        "Always pay at least the minimum on every card.",
        "Use all extra money to attack the card with the highest APR.",
        "When a card is paid off, its old minimum rolls into the next highest-APR card.",
    ),
    Strategy.INTEREST_WEIGHTED_FIRST: (
        "Always pay at least the minimum on every card.",
        "Your extra money is directed to the cards costing you the most interest right now.",
        "This keeps your total interest paid as low as possible over time.",
    ),
}


def strategy_label(strategy: Strategy | str) -> str:
    return _LABELS[Strategy.parse(strategy)]


def strategy_description(strategy: Strategy | str) -> str:
    return _DESCRIPTIONS[Strategy.parse(strategy)]


def strategy_instructions(strategy: Strategy | str) -> tuple[str, ...]:
    return _INSTRUCTIONS[Strategy.parse(strategy)]


def format_currency(amount: float | None) -> str:
    """Format as US dollars, e.g. ``$1,234.50`` or ``-$12.00``."""

    value = float(amount or 0.0)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def plan_summary_text(plan: PlanResult) -> str:
    """Return the one-line headline shown above a generated plan."""

    years = plan.months / 12
    return (
        f"With {strategy_label(plan.strategy_used)} strategy, you could be debt free in "
        f"{plan.months} months (~{years:.1f} years). "
        f"Estimated total interest paid: {format_currency(plan.total_interest)}."
    )


def schedule_preview(plan: PlanResult, limit: int = 24) -> tuple[list[ScheduleRow], bool]:
    """Return the first ``limit`` rows and whether more remain."""

    rows = list(plan.schedule[: max(limit, 0)])
    return rows, len(plan.schedule) > len(rows)


def build_payoff_chart(plan: PlanResult) -> Figure:
    """Create a matplotlib line chart of remaining balance by month."""

    months = [0] + [row.month for row in plan.schedule]
    totals = [plan.starting_balance] + [row.total_balance_end for row in plan.schedule]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(months, totals, marker="o", color="#4F46E5", linewidth=2.5, markersize=4)
    ax.fill_between(months, totals, color="#E0E7FF", alpha=0.5)

    # Mark the month the balance first drops to half
    half_point = plan.starting_balance / 2
    for month, total in zip(months, totals):
        if total <= half_point:
            ax.axvline(x=month, color="#22C55E", linestyle="--", alpha=0.6, linewidth=1.5)
            ax.annotate(
                "50% Paid!",
                (month, total),
                xytext=(10, 30),
                textcoords="offset points",
                fontsize=9,
                color="#22C55E",
                fontweight="bold",
            )
            break

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(
        f"Debt Payoff Projection · {strategy_description(plan.strategy_used)}",
        fontsize=14,
        fontweight="bold",
        pad=15,
    )
    ax.set_ylabel("Remaining Balance ($)", fontsize=11)
    ax.set_xlabel("Month", fontsize=11)
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.0f}"))

    textstr = (
        f"Starting Debt: {format_currency(plan.starting_balance)}\n"
        f"Months to Payoff: {plan.months}\n"
        f"Total Interest: {format_currency(plan.total_interest)}"
    )
    props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
    ax.text(0.98, 0.98, textstr, transform=ax.transAxes, fontsize=9,
            verticalalignment="top", horizontalalignment="right", bbox=props)

    fig.tight_layout()
    return fig


def payoff_chart_png(plan: PlanResult, output_path: Optional[Path] = None) -> Path:
    """Render the payoff chart to PNG and return the written path."""

    fig = build_payoff_chart(plan)
    try:
        if output_path is None:
            with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
                output_path = Path(tmp.name)
        else:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, bbox_inches="tight", dpi=100)
    finally:
        plt.close(fig)
    return output_path


__all__ = [
    "build_payoff_chart",
    "format_currency",
    "payoff_chart_png",
    "plan_summary_text",
    "schedule_preview",
    "strategy_description",
    "strategy_instructions",
    "strategy_label",
]
