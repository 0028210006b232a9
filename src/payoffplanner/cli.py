"""Flask CLI commands for Payoff Planner."""

from __future__ import annotations

from pathlib import Path

import click
from flask import current_app

from .services.advisor import recommend_strategy
from .services.export_csv import export_schedule_csv
from .services.import_csv import load_debt_rows
from .services.normalizer import normalize_debt, normalize_debts
from .services.payoff import PlanError, Strategy, compute_plan
from .services.reports import (
    format_currency,
    payoff_chart_png,
    plan_summary_text,
    schedule_preview,
    strategy_description,
    strategy_label,
)

_STRATEGY_CHOICES = [s.value for s in Strategy] + ["snowball", "avalanche"]


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("payoff-plan")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--budget", type=float, required=True, help="Total monthly budget for debt payments")
    @click.option(
        "--strategy",
        type=click.Choice(_STRATEGY_CHOICES, case_sensitive=False),
        default=Strategy.SMALLEST_BALANCE_FIRST.value,
        show_default=True,
    )
    @click.option("--months-shown", type=int, default=None, help="Schedule rows to print")
    @click.option("--export", "export_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
    @click.option("--chart", "chart_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
    def payoff_plan(csv_path, budget, strategy, months_shown, export_path, chart_path) -> None:
        """Compute a payoff plan for the debts listed in CSV_PATH."""

        config = current_app.config["PAYOFF_CONFIG"]
        debts = normalize_debts(load_debt_rows(csv_path))
        outcome = compute_plan(debts, strategy, budget, max_months=config.MAX_MONTHS)
        if isinstance(outcome, PlanError):
            raise click.ClickException(outcome.message)

        click.echo(plan_summary_text(outcome))
        rows, has_more = schedule_preview(
            outcome, months_shown if months_shown is not None else config.SCHEDULE_PREVIEW
        )
        for row in rows:
            click.echo(
                f"{row.month:>4}  paid {format_currency(row.total_payment):>12}  "
                f"interest {format_currency(row.interest_paid):>10}  "
                f"remaining {format_currency(row.total_balance_end):>12}"
            )
        if has_more:
            click.echo(f"... {len(outcome.schedule) - len(rows)} more months")

        if export_path is not None:
            written = export_schedule_csv(plan=outcome, output_path=export_path)
            click.echo(f"Schedule written: {written}")
        if chart_path is not None:
            written = payoff_chart_png(outcome, chart_path)
            click.echo(f"Chart written: {written}")

    @app.cli.command("payoff-compare")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--budget", type=float, required=True, help="Total monthly budget for debt payments")
    def payoff_compare(csv_path, budget) -> None:
        """Print months and interest for every strategy."""

        config = current_app.config["PAYOFF_CONFIG"]
        debts = normalize_debts(load_debt_rows(csv_path))
        for strategy in Strategy:
            outcome = compute_plan(debts, strategy, budget, max_months=config.MAX_MONTHS)
            label = strategy_description(strategy)
            if isinstance(outcome, PlanError):
                click.echo(f"{label}: {outcome.message}")
            else:
                click.echo(
                    f"{label}: {outcome.months} months, "
                    f"{format_currency(outcome.total_interest)} interest"
                )

    @app.cli.command("payoff-recommend")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def payoff_recommend(csv_path) -> None:
        """Suggest a strategy from aggregate debt statistics."""

        rows = load_debt_rows(csv_path)
        debts = [normalize_debt(row, position=idx) for idx, row in enumerate(rows, start=1)]
        recommendation = recommend_strategy(debts)
        click.echo(f"{strategy_label(recommendation.strategy)}: {recommendation.note}")
