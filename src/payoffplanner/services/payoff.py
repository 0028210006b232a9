"""Debt payoff simulation engine.

``compute_plan`` simulates month-by-month amortization of a set of debts
under a single monthly budget. Every active debt receives its minimum first;
whatever is left over is poured into the debts in strategy priority order,
overflowing into the next debt once the current one is retired for the
month. The allocation is a greedy heuristic, not an optimizer.

The engine is a pure function: it copies balances into a private working
arena, never touches the caller's records, and reports expected failures as
a :class:`PlanError` value instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable, Sequence, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

EPSILON = 0.01  # balances at or below one cent count as paid off
BUDGET_TOLERANCE = 1e-6
ALLOCATION_DUST = 0.001
DEFAULT_MAX_MONTHS = 600


class Strategy(str, Enum):
    """Prioritization applied to the leftover budget each month."""

    SMALLEST_BALANCE_FIRST = "warrior"
    HIGHEST_APR_FIRST = "rebel"
    INTEREST_WEIGHTED_FIRST = "wizard"

    @classmethod
    def parse(cls, value: "Strategy | str") -> "Strategy":
        """Resolve a strategy from its value, member name, or colloquial alias."""

        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        aliases = {
            "snowball": cls.SMALLEST_BALANCE_FIRST,
            "avalanche": cls.HIGHEST_APR_FIRST,
        }
        if key in aliases:
            return aliases[key]
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown payoff strategy: {value!r}")


class PlanErrorKind(str, Enum):
    """Expected, user-correctable reasons a plan cannot be produced."""

    INVALID_BUDGET = "invalid_budget"
    NO_PAYABLE_DEBTS = "no_payable_debts"
    BUDGET_BELOW_MINIMUMS = "budget_below_minimums"
    PLAN_EXCEEDS_HORIZON = "plan_exceeds_horizon"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True, slots=True)
class DebtAccount:
    """Represents a liability input for payoff projections."""

    id: Hashable
    name: str
    balance: float
    apr: float
    minimum_payment: float

    @property
    def monthly_rate(self) -> float:
        return self.apr / 100.0 / 12.0

    @property
    def is_payable(self) -> bool:
        return self.balance > EPSILON and self.minimum_payment > 0

    @property
    def is_resolved(self) -> bool:
        """True when a finite balance or minimum already rules the debt out."""

        return (_is_number(self.balance) and self.balance <= EPSILON) or (
            _is_number(self.minimum_payment) and self.minimum_payment <= 0
        )


@dataclass(frozen=True, slots=True)
class DebtPayment:
    """How a single debt was paid during one simulated month."""

    debt_id: Hashable
    name: str
    balance_start: float
    interest: float
    minimum_payment: float
    extra_payment: float
    total_payment: float
    principal_paid: float
    balance_end: float


@dataclass(frozen=True, slots=True)
class ScheduleRow:
    """One simulated month of the amortization schedule."""

    month: int
    total_balance_end: float
    interest_paid: float
    principal_paid: float
    total_payment: float
    total_balance_start: float
    payments: tuple[DebtPayment, ...] = ()


@dataclass(frozen=True, slots=True)
class PlanResult:
    """Successful payoff plan."""

    months: int
    total_interest: float
    strategy_used: Strategy
    schedule: tuple[ScheduleRow, ...]
    starting_balance: float
    monthly_budget: float

    @property
    def total_paid(self) -> float:
        return sum(row.total_payment for row in self.schedule)

    @property
    def total_principal(self) -> float:
        return sum(row.principal_paid for row in self.schedule)


@dataclass(frozen=True, slots=True)
class PlanError:
    """Failure outcome carrying a human-readable, actionable message."""

    kind: PlanErrorKind
    message: str

    @property
    def error(self) -> str:
        return self.message


PlanOutcome = Union[PlanResult, PlanError]


def _fail(kind: PlanErrorKind, message: str) -> PlanError:
    logger.info("Payoff plan rejected: %s", message, extra={"kind": kind.value})
    return PlanError(kind=kind, message=message)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _has_invalid_numbers(debts: Sequence[DebtAccount]) -> bool:
    for debt in debts:
        values = (debt.balance, debt.apr, debt.minimum_payment)
        if not all(_is_number(v) for v in values):
            return True
        if debt.apr < 0:
            return True
    return False


def _priority_key(strategy: Strategy, balance: float, apr: float):
    """Sort key placing the highest-priority debt first."""

    if strategy is Strategy.SMALLEST_BALANCE_FIRST:
        return (balance, -apr)
    if strategy is Strategy.HIGHEST_APR_FIRST:
        return (-apr, -balance)
    return (-(balance * apr / 100.0 / 12.0), -apr)


def _accrue(
    debts: Sequence[DebtAccount], balances: list[float]
) -> tuple[list[float], list[float]]:
    """Return (interest, minimum due) per debt for the current month."""

    interest = [0.0] * len(debts)
    minimum_due = [0.0] * len(debts)
    for idx, debt in enumerate(debts):
        balance = balances[idx]
        if balance <= EPSILON:
            continue
        interest[idx] = balance * debt.monthly_rate
        # never ask for more than what retires the debt this month
        minimum_due[idx] = min(debt.minimum_payment, balance + interest[idx])
    return interest, minimum_due


def _allocate_leftover(
    *,
    debts: Sequence[DebtAccount],
    balances: list[float],
    interest: list[float],
    assigned: list[float],
    leftover: float,
    strategy: Strategy,
) -> list[float]:
    """Waterfall the leftover budget across debts in priority order.

    Mutates ``assigned`` in place and returns the extra paid per debt.
    """

    extra = [0.0] * len(debts)
    while leftover > EPSILON:
        candidates = [
            idx
            for idx in range(len(debts))
            if balances[idx] > EPSILON and balances[idx] + interest[idx] - assigned[idx] > EPSILON
        ]
        candidates.sort(key=lambda idx: _priority_key(strategy, balances[idx], debts[idx].apr))

        allocated_this_pass = 0.0
        for idx in candidates:
            if leftover <= EPSILON:
                break
            room = balances[idx] + interest[idx] - assigned[idx]
            if room <= EPSILON:
                continue
            payment = min(room, leftover)
            if payment <= ALLOCATION_DUST:
                continue
            assigned[idx] += payment
            extra[idx] += payment
            leftover -= payment
            allocated_this_pass += payment

        if allocated_this_pass <= ALLOCATION_DUST:
            break
    return extra


def compute_plan(
    debts: Iterable[DebtAccount],
    strategy: Strategy | str,
    monthly_budget: float,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PlanOutcome:
    """Simulate paying off ``debts`` with ``monthly_budget`` each month.

    Returns a :class:`PlanResult` on success or a :class:`PlanError` when the
    budget is invalid, nothing is payable, the budget cannot cover minimums,
    or payoff would take longer than ``max_months``. Raises ``ValueError``
    only for an unknown strategy name.
    """

    strategy = Strategy.parse(strategy)
    all_debts = list(debts)

    try:
        budget = float(monthly_budget)
    except (TypeError, ValueError):
        budget = math.nan
    if not math.isfinite(budget) or budget <= 0:
        return _fail(PlanErrorKind.INVALID_BUDGET, "Please enter a positive monthly budget.")

    # resolved rows contribute nothing, so their other fields are not checked
    if _has_invalid_numbers([debt for debt in all_debts if not debt.is_resolved]):
        return _fail(
            PlanErrorKind.INVALID_INPUT,
            "Debt values must be finite numbers and APR cannot be negative.",
        )

    payable = [debt for debt in all_debts if debt.is_payable]
    if not payable:
        return _fail(
            PlanErrorKind.NO_PAYABLE_DEBTS,
            "Add at least one debt with a positive balance and minimum payment.",
        )

    total_minimum = sum(debt.minimum_payment for debt in payable)
    if total_minimum > budget + BUDGET_TOLERANCE:
        return _fail(
            PlanErrorKind.BUDGET_BELOW_MINIMUMS,
            "Your total minimum payments are higher than your monthly budget. "
            "Increase your budget or adjust card data.",
        )

    # Working arena; the caller's records stay untouched.
    balances = [float(debt.balance) for debt in payable]
    starting_balance = sum(balances)
    schedule: list[ScheduleRow] = []
    total_interest = 0.0

    for month in range(1, max_months + 1):
        interest, minimum_due = _accrue(payable, balances)
        sum_min_due = sum(minimum_due)
        if sum_min_due > budget + BUDGET_TOLERANCE:
            return _fail(
                PlanErrorKind.BUDGET_BELOW_MINIMUMS,
                f"In month {month} the minimum payments due exceed your monthly budget. "
                "Increase your budget or adjust card data.",
            )

        assigned = list(minimum_due)
        extra = _allocate_leftover(
            debts=payable,
            balances=balances,
            interest=interest,
            assigned=assigned,
            leftover=max(0.0, budget - sum_min_due),
            strategy=strategy,
        )

        payments: list[DebtPayment] = []
        for idx, debt in enumerate(payable):
            start = balances[idx]
            paid = assigned[idx]
            principal = max(0.0, paid - interest[idx])
            end = max(0.0, start + interest[idx] - paid)
            balances[idx] = end
            payments.append(
                DebtPayment(
                    debt_id=debt.id,
                    name=debt.name,
                    balance_start=start,
                    interest=interest[idx],
                    minimum_payment=minimum_due[idx],
                    extra_payment=extra[idx],
                    total_payment=paid,
                    principal_paid=principal,
                    balance_end=end,
                )
            )

        month_interest = sum(interest)
        total_interest += month_interest
        row = ScheduleRow(
            month=month,
            total_balance_end=sum(p.balance_end for p in payments),
            interest_paid=month_interest,
            principal_paid=sum(p.principal_paid for p in payments),
            total_payment=sum(p.total_payment for p in payments),
            total_balance_start=sum(p.balance_start for p in payments),
            payments=tuple(payments),
        )
        schedule.append(row)

        if all(balance <= EPSILON for balance in balances):
            logger.debug(
                "Payoff plan computed",
                extra={"strategy": strategy.value, "months": month, "debts": len(payable)},
            )
            return PlanResult(
                months=month,
                total_interest=total_interest,
                strategy_used=strategy,
                schedule=tuple(schedule),
                starting_balance=starting_balance,
                monthly_budget=budget,
            )

    years = max_months / 12
    return _fail(
        PlanErrorKind.PLAN_EXCEEDS_HORIZON,
        f"At this payment level it would take more than {years:g} years to become debt free. "
        "Increase your budget.",
    )


__all__ = [
    "DebtAccount",
    "DebtPayment",
    "PlanError",
    "PlanErrorKind",
    "PlanOutcome",
    "PlanResult",
    "ScheduleRow",
    "Strategy",
    "compute_plan",
]
