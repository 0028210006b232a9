"""Pytest configuration and shared fixtures for Payoff Planner tests.

This module provides database fixtures, debt factories and helper utilities
for testing the payoff engine, services and routes without touching a real
app database.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Keep logs and sqlite files out of the working tree for the whole session
os.environ.setdefault("PAYOFF_DATA_DIR", tempfile.mkdtemp(prefix="payoffplanner-tests-"))

from payoffplanner import create_app  # noqa: E402
from payoffplanner.infra.repositories.snapshot import SQLModelSnapshotRepository  # noqa: E402
from payoffplanner.models import PlanSnapshot  # noqa: E402,F401  # register table metadata
from payoffplanner.services.payoff import DebtAccount  # noqa: E402


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01) -> None:
    """Assert two floats are equal within ``tolerance`` (defaults to one cent)."""

    assert abs(actual - expected) <= tolerance, f"{actual} != {expected} (±{tolerance})"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Return a callable producing sessions, matching the repository contract."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def snapshot_repo(session_factory) -> SQLModelSnapshotRepository:
    return SQLModelSnapshotRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for engine-ready debt records.

    Returns:
        Callable: Function that builds DebtAccount instances
    """

    counter = {"next": 1}

    def _create_debt(
        balance: float = 1000.0,
        apr: float = 18.0,
        minimum_payment: float = 25.0,
        name: str | None = None,
        debt_id: int | None = None,
    ) -> DebtAccount:
        """Create a debt with sensible defaults and a unique id."""
        if debt_id is None:
            debt_id = counter["next"]
            counter["next"] += 1
        return DebtAccount(
            id=debt_id,
            name=name or f"Card {debt_id}",
            balance=balance,
            apr=apr,
            minimum_payment=minimum_payment,
        )

    return _create_debt


@pytest.fixture
def sample_debts(debt_factory) -> list[DebtAccount]:
    """Three cards with distinct balance, APR and interest-dollar orderings."""

    return [
        debt_factory(balance=5000.0, apr=12.0, minimum_payment=100.0, name="Big Low", debt_id=1),
        debt_factory(balance=800.0, apr=15.0, minimum_payment=30.0, name="Small Mid", debt_id=2),
        debt_factory(balance=2500.0, apr=29.99, minimum_payment=60.0, name="Mid High", debt_id=3),
    ]


@pytest.fixture
def raw_debt_rows() -> list[dict]:
    """Form-style rows as the web client sends them (text values)."""

    return [
        {"id": 1, "name": "Visa", "balance": "1,200.50", "apr": "19.99", "minPayment": "35"},
        {"id": 2, "name": "Store Card", "balance": "450", "apr": "26.5%", "minPayment": "25"},
        {"id": 3, "name": "", "balance": "", "apr": "", "minPayment": ""},
    ]


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def app():
    app = create_app("testing")
    app.config.update(TESTING=True)
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def cli_runner(app):
    return app.test_cli_runner()
