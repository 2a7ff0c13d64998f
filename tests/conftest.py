"""Shared test fixtures for settleup tests."""

import json
from collections.abc import Generator
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from settleup.models import EventSnapshot, Expense, Participant, Payment


def make_expense(
    payer_id: str,
    amount: str | Decimal,
    consumers: list[str],
    expense_id: str = "e1",
    event_id: str = "ev1",
) -> Expense:
    """Build an expense with sensible defaults."""
    return Expense(
        id=expense_id,
        event_id=event_id,
        payer_id=payer_id,
        amount=amount,
        consumers=consumers,
    )


def make_payment(
    from_id: str,
    to_id: str,
    amount: str | Decimal,
    payment_id: str = "p1",
    event_id: str = "ev1",
) -> Payment:
    """Build a payment with sensible defaults."""
    return Payment(
        id=payment_id,
        event_id=event_id,
        from_id=from_id,
        to_id=to_id,
        amount=amount,
    )


@pytest.fixture
def participants() -> list[Participant]:
    """Three participants, A is admin."""
    return [
        Participant(id="A", name="Ana", is_admin=True, event_id="ev1"),
        Participant(id="B", name="Ben", event_id="ev1"),
        Participant(id="C", name="Cleo", event_id="ev1"),
    ]


@pytest.fixture
def dinner() -> Expense:
    """A paid 100.00 for A, B and C."""
    return make_expense("A", "100.00", ["A", "B", "C"], expense_id="dinner")


@pytest.fixture
def snapshot(participants: list[Participant], dinner: Expense) -> EventSnapshot:
    """Dinner plus B paying A back in full."""
    return EventSnapshot(
        event_id="ev1",
        name="Road Trip",
        participants=participants,
        expenses=[dinner],
        payments=[make_payment("B", "A", "33.33", payment_id="pay-b")],
    )


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot: EventSnapshot) -> Path:
    """Write the snapshot fixture to a JSON file."""
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps({"events": {"ev1": snapshot.model_dump(mode="json")}}, indent=2),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def log_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the audit log at a temporary file."""
    path = tmp_path / "computations.jsonl"
    monkeypatch.setenv("SETTLEUP_LOG_PATH", str(path))
    return path


@pytest.fixture
def mock_requests_get() -> Generator[MagicMock, None, None]:
    """Mock PostgREST calls to avoid network access."""
    with patch("settleup.rest.requests.get") as mock_get:
        mock_response = MagicMock()
        mock_response.json.return_value = []
        mock_response.raise_for_status = MagicMock()
        mock_get.return_value = mock_response
        yield mock_get
