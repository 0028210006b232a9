"""Service module exports."""

from . import (
    advisor,
    export_csv,
    import_csv,
    insights,
    normalizer,
    payoff,
    reports,
    snapshots,
)

__all__ = [
    "advisor",
    "export_csv",
    "import_csv",
    "insights",
    "normalizer",
    "payoff",
    "reports",
    "snapshots",
]
