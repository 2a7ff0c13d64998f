"""Fair-cent splitting of an expense across its consumers."""

from .errors import InvalidArgument
from .models import Expense
from .money import to_minor


def split(total: int, n: int) -> list[int]:
    """
    Split an amount into n shares that sum exactly to the total.

    Every share gets floor(total / n); the first (total mod n) shares get one
    extra minor unit, so no two shares differ by more than one cent and the
    result only depends on consumer order.

    Args:
        total: Amount in minor units, at least 1
        n: Number of shares, at least 1

    Returns:
        List of n shares in minor units

    Raises:
        InvalidArgument: If total or n is not positive
    """
    if n <= 0:
        raise InvalidArgument("Cannot split among zero consumers")
    if total <= 0:
        raise InvalidArgument(f"Split total must be positive, got {total}")

    base, remainder = divmod(total, n)
    return [base + 1 if i < remainder else base for i in range(n)]


def validate_expense(expense: Expense) -> int:
    """Check an expense's amount and consumers. Returns the amount in minor units."""
    amount = to_minor(expense.amount)
    if amount <= 0:
        raise InvalidArgument(f"Expense {expense.id} amount must be positive, got {expense.amount}")
    if not expense.consumers:
        raise InvalidArgument(f"Expense {expense.id} has no consumers")
    return amount


def split_expense(expense: Expense) -> list[tuple[str, int]]:
    """Pair each consumer with their share of the expense, in consumer order."""
    amount = validate_expense(expense)
    shares = split(amount, len(expense.consumers))
    return list(zip(expense.consumers, shares))
