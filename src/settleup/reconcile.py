"""Reconcile suggested transfers against payments that were actually made."""

from collections.abc import Mapping, Sequence
from enum import Enum

from .balances import apply_payments, apply_transfers, payment_amount
from .errors import Inconsistent
from .models import Payment, Settlement
from .money import format_minor
from .simplifier import simplify


class ReconcilePolicy(str, Enum):
    """How recorded payments are matched against suggested transfers."""

    # Simplify expense-only balances, then consume matching payments per pair
    RECONSTRUCT_THEN_MATCH = "reconstruct"
    # Every payment verbatim, then simplify what is still outstanding
    LEDGER_PLUS_RESIDUAL = "ledger"


DEFAULT_POLICY = ReconcilePolicy.LEDGER_PLUS_RESIDUAL


def _match_payments(
    expense_balances: Mapping[str, int], payments: Sequence[Payment]
) -> list[Settlement]:
    remaining = [[payment, payment_amount(payment)] for payment in payments]
    settlements: list[Settlement] = []

    for transfer in simplify(expense_balances):
        left = transfer.amount
        for entry in remaining:
            if left <= 0:
                break
            payment, unused = entry
            if unused <= 0 or (payment.from_id, payment.to_id) != (
                transfer.from_id,
                transfer.to_id,
            ):
                continue
            chunk = min(left, unused)
            settlements.append(
                Settlement(
                    from_id=transfer.from_id,
                    to_id=transfer.to_id,
                    amount=chunk,
                    payment_id=payment.id,
                )
            )
            entry[1] -= chunk
            left -= chunk

        if left > 0:
            settlements.append(
                Settlement(from_id=transfer.from_id, to_id=transfer.to_id, amount=left)
            )

    unmatched = [(payment.id, unused) for payment, unused in remaining if unused > 0]
    if unmatched:
        detail = ", ".join(f"{pid} ({format_minor(unused)})" for pid, unused in unmatched)
        raise Inconsistent(f"Payments not covered by any suggested transfer: {detail}")

    return settlements


def _ledger_plus_residual(
    expense_balances: Mapping[str, int], payments: Sequence[Payment]
) -> list[Settlement]:
    final_balances = apply_payments(expense_balances, payments)

    settlements = [
        Settlement(
            from_id=payment.from_id,
            to_id=payment.to_id,
            amount=payment_amount(payment),
            payment_id=payment.id,
        )
        for payment in payments
    ]
    settlements.extend(
        Settlement(from_id=t.from_id, to_id=t.to_id, amount=t.amount)
        for t in simplify(final_balances)
    )
    return settlements


def verify_report(expense_balances: Mapping[str, int], settlements: Sequence[Settlement]) -> None:
    """
    Replay a settlement report against expense-only balances.

    Raises:
        Inconsistent: If any participant is left with a non-zero balance
    """
    leftover = {
        person: balance
        for person, balance in apply_transfers(expense_balances, settlements).items()
        if balance != 0
    }
    if leftover:
        raise Inconsistent(f"Settlement report leaves balances open: {leftover}")


def reconcile(
    expense_balances: Mapping[str, int],
    payments: Sequence[Payment],
    policy: ReconcilePolicy = DEFAULT_POLICY,
) -> list[Settlement]:
    """
    Build a settlement report: already-paid records plus still-pending transfers.

    Pending records have payment_id None. Payments are consumed in the order
    given, which callers keep as creation order.

    Args:
        expense_balances: Balances from expenses only (payments not yet applied)
        payments: Recorded payments, in creation order
        policy: Which reconciliation policy to use (one per call, never mixed)

    Returns:
        Ordered list of settlements

    Raises:
        UnknownParticipant: If a payment references an unknown participant
        Inconsistent: If a payment can't be accounted for or the report doesn't balance
    """
    policy = ReconcilePolicy(policy)
    if policy is ReconcilePolicy.RECONSTRUCT_THEN_MATCH:
        # Also rejects unknown payment participants before matching
        apply_payments(expense_balances, payments)
        settlements = _match_payments(expense_balances, payments)
    else:
        settlements = _ledger_plus_residual(expense_balances, payments)

    verify_report(expense_balances, settlements)
    return settlements


def settled(settlements: Sequence[Settlement]) -> list[Settlement]:
    """Records backed by an actual payment."""
    return [s for s in settlements if not s.is_pending]


def pending(settlements: Sequence[Settlement]) -> list[Settlement]:
    """Records still waiting to be paid."""
    return [s for s in settlements if s.is_pending]


def outstanding_total(settlements: Sequence[Settlement]) -> int:
    """Total still to be paid, in minor units."""
    return sum(s.amount for s in pending(settlements))
