"""Event snapshots loaded from a JSON file."""

import json
from pathlib import Path

from pydantic import ValidationError

from .errors import StoreError
from .models import EventSnapshot, Expense, Participant, Payment


class SnapshotStore:
    """
    Read-only store backed by a JSON file.

    The file holds either a single snapshot:
        {"event_id": "...", "participants": [...], "expenses": [...], "payments": [...]}
    or several keyed by event id:
        {"events": {"<event_id>": {...}, ...}}
    """

    def __init__(self, path: str | Path):
        """
        Initialize SnapshotStore.

        Args:
            path: JSON file to read

        Raises:
            StoreError: If the file is missing, not JSON, or not a valid snapshot
        """
        self.path = Path(path)
        self._events: dict[str, EventSnapshot] = {}
        self._load()

    def _load(self) -> None:
        """Load snapshots from disk."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise StoreError(f"Snapshot file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Expected a JSON object in {self.path}")

        try:
            if "events" in data:
                self._events = {
                    event_id: EventSnapshot.model_validate({"event_id": event_id, **snap})
                    for event_id, snap in data["events"].items()
                }
            else:
                snap = EventSnapshot.model_validate(data)
                self._events = {snap.event_id: snap}
        except ValidationError as e:
            raise StoreError(f"Invalid snapshot in {self.path}: {e}") from e

    def get(self, event_id: str) -> EventSnapshot:
        """Get an event snapshot by id."""
        snap = self._events.get(event_id)
        if snap is None:
            raise StoreError(f"Event '{event_id}' not found in {self.path}")
        return snap

    def list_events(self) -> list[str]:
        """List all event ids in the file."""
        return list(self._events.keys())

    def list_participants(self, event_id: str) -> list[Participant]:
        return list(self.get(event_id).participants)

    def list_expenses(self, event_id: str) -> list[Expense]:
        return list(self.get(event_id).expenses)

    def list_payments(self, event_id: str) -> list[Payment]:
        """Payments in creation order; file order breaks ties and fills in missing timestamps."""
        payments = self.get(event_id).payments
        if all(p.created_at is not None for p in payments):
            return sorted(payments, key=lambda p: p.created_at)
        return list(payments)
