"""Plan snapshot repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.snapshot import PlanSnapshot


class SnapshotRepository(Protocol):
    """Repository for the last computed plan and its inputs."""

    def get(self, key: str) -> Optional[PlanSnapshot]:
        """Retrieve a snapshot by storage key."""
        ...

    def save(self, snapshot: PlanSnapshot) -> PlanSnapshot:
        """Insert or replace the snapshot stored under ``snapshot.key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove the snapshot stored under ``key`` if present."""
        ...
