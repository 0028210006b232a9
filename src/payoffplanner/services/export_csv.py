"""CSV export helpers for payoff schedules."""

from __future__ import annotations

import csv
from pathlib import Path

from .payoff import PlanResult

SCHEDULE_HEADERS = [
    "month",
    "total_balance_start",
    "total_payment",
    "interest_paid",
    "principal_paid",
    "total_balance_end",
]


def _money(value: float) -> str:
    return f"{value:.2f}"


def export_schedule_csv(*, plan: PlanResult, output_path: Path) -> Path:
    """Write the month-by-month schedule to CSV at `output_path`.

    Columns are deterministic (see ``SCHEDULE_HEADERS``); amounts are
    rendered with two decimals. Returns the path written.
    """

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SCHEDULE_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for row in plan.schedule:
            writer.writerow(
                {
                    "month": row.month,
                    "total_balance_start": _money(row.total_balance_start),
                    "total_payment": _money(row.total_payment),
                    "interest_paid": _money(row.interest_paid),
                    "principal_paid": _money(row.principal_paid),
                    "total_balance_end": _money(row.total_balance_end),
                }
            )

    return output_path


__all__ = ["SCHEDULE_HEADERS", "export_schedule_csv"]
