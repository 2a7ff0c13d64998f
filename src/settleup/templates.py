"""Output templates for the CLI - all user-facing text lives here.

Amounts are rendered as plain two-decimal numbers; currency symbols are left
to whoever presents the output.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from .models import Settlement
from .money import format_minor
from .reconcile import pending, settled

ALL_SETTLED = "✨ All settled up!"

BALANCES_HEADER = "📊 {event} balances:"
SETTLEMENTS_HEADER = "💸 {event} settlements:"
PAID_SECTION = "Paid:"
PENDING_SECTION = "Pending:"


def display_name(person: str, names: Mapping[str, str]) -> str:
    """Participant's display name, falling back to their id."""
    return names.get(person) or person


def format_balance_line(person: str, amount: Decimal, names: Mapping[str, str]) -> str:
    """Format one balance, signed so that '+' is owed and '-' owes."""
    sign = "+" if amount > 0 else ""
    return f"• {display_name(person, names)}: {sign}{amount}"


def format_balances(
    balances: Mapping[str, Decimal], names: Mapping[str, str], event: str = "Event"
) -> str:
    """Format all balances for display, in participant order."""
    lines = [BALANCES_HEADER.format(event=event)]
    lines.extend(format_balance_line(person, amount, names) for person, amount in balances.items())
    return "\n".join(lines)


def format_settlement_line(settlement: Settlement, names: Mapping[str, str]) -> str:
    """Format one settlement, tagging the payment it came from if any."""
    line = (
        f"• {display_name(settlement.from_id, names)} → "
        f"{display_name(settlement.to_id, names)}: {format_minor(settlement.amount)}"
    )
    if settlement.payment_id:
        line += f" (payment {settlement.payment_id})"
    return line


def format_settlements(
    settlements: Sequence[Settlement], names: Mapping[str, str], event: str = "Event"
) -> str:
    """Format a settlement report with paid and pending sections."""
    if not settlements:
        return ALL_SETTLED

    paid = settled(settlements)
    still_open = pending(settlements)

    lines = [SETTLEMENTS_HEADER.format(event=event)]
    if paid:
        lines.append(PAID_SECTION)
        lines.extend(format_settlement_line(s, names) for s in paid)
    if still_open:
        lines.append(PENDING_SECTION)
        lines.extend(format_settlement_line(s, names) for s in still_open)
    else:
        lines.append(ALL_SETTLED)
    return "\n".join(lines)


def format_split(shares: Sequence[int]) -> str:
    """Format a fair-cent split as a comma-separated list."""
    return ", ".join(format_minor(share) for share in shares)
