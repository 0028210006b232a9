"""Turn user-entered debt fields into validated engine records.

Form fields arrive as text while the user types. Blank, unparseable or
non-finite values are coerced to zero so nothing non-numeric ever reaches
the payoff arithmetic; rows that end up with no balance or no minimum are
dropped.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from .payoff import DebtAccount

_MIN_PAYMENT_KEYS = ("minimum_payment", "min_payment", "minpayment", "minPayment")


def parse_amount(value: Any) -> float:
    """Parse a currency/percentage field, returning 0.0 for anything unusable."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    cleaned = str(value).strip().replace(",", "").replace("$", "").rstrip("%").strip()
    if not cleaned:
        return 0.0
    try:
        number = float(Decimal(cleaned))
    except (InvalidOperation, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_budget(value: Any) -> float:
    """Parse the monthly budget; the engine decides whether it is usable."""

    return parse_amount(value)


def _minimum_field(row: Mapping[str, Any]) -> Any:
    for key in _MIN_PAYMENT_KEYS:
        if key in row:
            return row[key]
    return None


def normalize_debt(row: Mapping[str, Any], *, position: int) -> DebtAccount:
    """Build a :class:`DebtAccount` from one raw row without filtering it."""

    debt_id = row.get("id")
    if debt_id in (None, ""):
        debt_id = position
    name = str(row.get("name") or "").strip() or f"Card {debt_id}"
    return DebtAccount(
        id=debt_id,
        name=name,
        balance=max(0.0, parse_amount(row.get("balance"))),
        apr=max(0.0, parse_amount(row.get("apr"))),
        minimum_payment=max(0.0, parse_amount(_minimum_field(row))),
    )


def normalize_debts(rows: Iterable[Mapping[str, Any]]) -> list[DebtAccount]:
    """Normalize raw rows and keep only the debts worth simulating."""

    debts = [normalize_debt(row, position=idx) for idx, row in enumerate(rows, start=1)]
    return [debt for debt in debts if debt.is_payable]


__all__ = ["normalize_debt", "normalize_debts", "parse_amount", "parse_budget"]
