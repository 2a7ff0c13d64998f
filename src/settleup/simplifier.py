"""Greedy two-pointer debt simplification."""

from collections.abc import Mapping

from .errors import Inconsistent
from .models import Transfer
from .money import EPSILON, format_minor


def simplify(balances: Mapping[str, int]) -> list[Transfer]:
    """
    Suggest transfers that bring every balance to zero.

    Creditors and debtors are walked in the mapping's own order (no sorting
    by size), each step moving min(credit left, debt left) from the current
    debtor to the current creditor and advancing whichever side reached
    zero. This is a deterministic heuristic: it never produces more than
    (creditors + debtors - 1) transfers, but it is not a minimum-transfer
    solver.

    Args:
        balances: Participant id -> signed minor units

    Returns:
        Ordered list of transfers with positive amounts

    Raises:
        Inconsistent: If positive and negative balances don't cancel out
    """
    creditors = [[person, balance] for person, balance in balances.items() if balance > EPSILON]
    debtors = [[person, -balance] for person, balance in balances.items() if balance < -EPSILON]

    owed = sum(amount for _, amount in creditors)
    owing = sum(amount for _, amount in debtors)
    if owed != owing:
        raise Inconsistent(
            f"Creditors are owed {format_minor(owed)} but debtors owe {format_minor(owing)}"
        )

    transfers: list[Transfer] = []
    i = j = 0
    while i < len(creditors) and j < len(debtors):
        creditor, debtor = creditors[i], debtors[j]
        amount = min(creditor[1], debtor[1])
        transfers.append(Transfer(from_id=debtor[0], to_id=creditor[0], amount=amount))

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] <= EPSILON:
            i += 1
        if debtor[1] <= EPSILON:
            j += 1

    leftover = creditors[i:] + debtors[j:]
    if any(amount > EPSILON for _, amount in leftover):
        raise Inconsistent(f"Unsettled balances left after matching: {leftover}")

    return transfers
