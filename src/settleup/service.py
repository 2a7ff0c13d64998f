"""Read-side service tying a persistence store to the balance and settlement engine."""

from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol

from .balances import apply_payments, compute_balances
from .models import EventSnapshot, Expense, Participant, Payment, Settlement
from .money import to_decimal
from .reconcile import DEFAULT_POLICY, ReconcilePolicy, reconcile


class EventStore(Protocol):
    """Persistence collaborator. Each call returns one event's records."""

    def list_participants(self, event_id: str) -> list[Participant]: ...

    def list_expenses(self, event_id: str) -> list[Expense]: ...

    def list_payments(self, event_id: str) -> list[Payment]: ...


def snapshot_balances(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    payments: Sequence[Payment],
) -> dict[str, Decimal]:
    """Final balances (expenses and payments) as two-decimal Decimals."""
    balances = compute_balances(participants, expenses, payments)
    return {person: to_decimal(minor) for person, minor in balances.items()}


def snapshot_settlements(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    payments: Sequence[Payment],
    policy: ReconcilePolicy = DEFAULT_POLICY,
) -> list[Settlement]:
    """Settlement report for records already in memory."""
    expense_balances = compute_balances(participants, expenses)
    return reconcile(expense_balances, payments, policy)


class EventLedger:
    """
    Computes balances and settlements for events held in a store.

    Nothing is cached: every call reads a fresh snapshot and recomputes from
    the full history.
    """

    def __init__(self, store: EventStore, policy: ReconcilePolicy | str | None = None):
        """
        Initialize EventLedger.

        Args:
            store: Where participants, expenses and payments are read from
            policy: Reconciliation policy (default: ledger plus residual)
        """
        self.store = store
        self.policy = ReconcilePolicy(policy) if policy is not None else DEFAULT_POLICY

    def snapshot(self, event_id: str) -> EventSnapshot:
        """Read one consistent snapshot of an event."""
        return EventSnapshot(
            event_id=event_id,
            participants=self.store.list_participants(event_id),
            expenses=self.store.list_expenses(event_id),
            payments=self.store.list_payments(event_id),
        )

    def balances(self, event_id: str) -> dict[str, Decimal]:
        """Participant id -> signed balance, rounded to two decimals."""
        snap = self.snapshot(event_id)
        return snapshot_balances(snap.participants, snap.expenses, snap.payments)

    def settlements(self, event_id: str) -> list[Settlement]:
        """Paid and pending settlements for an event."""
        snap = self.snapshot(event_id)
        return snapshot_settlements(snap.participants, snap.expenses, snap.payments, self.policy)

