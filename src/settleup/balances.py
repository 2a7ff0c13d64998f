"""Net balance per participant. Pure folds, no I/O, inputs never mutated."""

from collections.abc import Iterable, Mapping, Sequence

from .errors import Inconsistent, InvalidArgument, UnknownParticipant
from .models import Expense, Participant, Payment, Settlement, Transfer
from .money import format_minor, to_minor
from .splitter import split_expense


def _check_known(known: set[str] | Mapping[str, int], participant_id: str, context: str) -> None:
    if participant_id not in known:
        raise UnknownParticipant(participant_id, context)


def validate_references(
    participants: Sequence[Participant],
    expenses: Sequence[Expense] = (),
    payments: Sequence[Payment] = (),
) -> None:
    """
    Check every id referenced by the expenses and payments.

    Raises:
        UnknownParticipant: On the first id not in the participant set
    """
    known = {p.id for p in participants}
    for expense in expenses:
        _check_known(known, expense.payer_id, f"expense {expense.id}")
        for consumer in expense.consumers:
            _check_known(known, consumer, f"expense {expense.id}")
    for payment in payments:
        _check_known(known, payment.from_id, f"payment {payment.id}")
        _check_known(known, payment.to_id, f"payment {payment.id}")


def payment_amount(payment: Payment) -> int:
    """Payment amount in minor units, rejecting non-positive amounts."""
    amount = to_minor(payment.amount)
    if amount <= 0:
        raise InvalidArgument(f"Payment {payment.id} amount must be positive, got {payment.amount}")
    return amount


def check_zero_sum(balances: Mapping[str, int]) -> None:
    """
    Raise if balances don't sum to exactly zero.

    Raises:
        Inconsistent: If the sum is non-zero
    """
    total = sum(balances.values())
    if total != 0:
        raise Inconsistent(f"Balances sum to {format_minor(total)} instead of 0")


def compute_balances(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    payments: Sequence[Payment] = (),
) -> dict[str, int]:
    """
    Compute net balance per participant in minor units.

    Positive balance = participant is owed money
    Negative balance = participant owes money

    Every participant appears, at 0 if they have no activity, in participant
    order. References are validated before anything is accumulated, so a bad
    id fails the whole call.

    Args:
        participants: Known participants of the event
        expenses: Expenses to fold in
        payments: Payments already made, folded in after the expenses

    Returns:
        Dict mapping participant id to signed minor units

    Raises:
        UnknownParticipant: If an expense or payment references an unknown id
        InvalidArgument: If an amount is not positive or an expense has no consumers
        Inconsistent: If the result doesn't sum to zero
    """
    validate_references(participants, expenses, payments)

    # Split everything up front so a bad expense fails before accumulation
    splits = [(expense.payer_id, split_expense(expense)) for expense in expenses]
    paid = [(payment, payment_amount(payment)) for payment in payments]

    balances = {p.id: 0 for p in participants}

    for payer_id, shares in splits:
        for consumer, share in shares:
            balances[consumer] -= share
            balances[payer_id] += share

    for payment, amount in paid:
        balances[payment.from_id] += amount  # Payer's debt reduced
        balances[payment.to_id] -= amount  # Recipient's credit reduced

    check_zero_sum(balances)
    return balances


def apply_payments(balances: Mapping[str, int], payments: Iterable[Payment]) -> dict[str, int]:
    """Fold payments into existing balances, returning a new mapping."""
    payments = list(payments)
    for payment in payments:
        _check_known(balances, payment.from_id, f"payment {payment.id}")
        _check_known(balances, payment.to_id, f"payment {payment.id}")
    amounts = [payment_amount(payment) for payment in payments]

    result = dict(balances)
    for payment, amount in zip(payments, amounts):
        result[payment.from_id] += amount
        result[payment.to_id] -= amount
    return result


def apply_transfers(
    balances: Mapping[str, int], transfers: Iterable[Transfer | Settlement]
) -> dict[str, int]:
    """
    Apply transfers the same way payments are applied, returning a new mapping.

    Applying a complete settlement plan to the balances it was built from
    leaves every entry at zero.
    """
    result = dict(balances)
    for transfer in transfers:
        _check_known(result, transfer.from_id, "transfer")
        _check_known(result, transfer.to_id, "transfer")
        result[transfer.from_id] += transfer.amount
        result[transfer.to_id] -= transfer.amount
    return result
