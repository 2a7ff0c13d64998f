"""Pydantic models for settleup events, expenses, payments and settlements."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .money import format_minor, to_decimal_amount


class Participant(BaseModel):
    """A member of an event."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    is_admin: bool = False
    event_id: str | None = None


class Expense(BaseModel):
    """An amount paid by one participant and shared by an ordered list of consumers."""

    model_config = ConfigDict(frozen=True)

    id: str
    event_id: str
    payer_id: str
    amount: Decimal
    # Duplicates count as one extra share each
    consumers: list[str]
    description: str | None = None
    created_at: datetime | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Decimal:
        return to_decimal_amount(v)

    @field_serializer("amount")
    def serialize_amount(self, v: Decimal) -> str:
        return str(v)


class Payment(BaseModel):
    """Money that actually moved from one participant to another."""

    model_config = ConfigDict(frozen=True)

    id: str
    event_id: str
    from_id: str
    to_id: str
    amount: Decimal
    created_at: datetime | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Decimal:
        return to_decimal_amount(v)

    @field_serializer("amount")
    def serialize_amount(self, v: Decimal) -> str:
        return str(v)


class EventSnapshot(BaseModel):
    """One consistent read of an event's records."""

    event_id: str
    name: str = ""
    participants: list[Participant] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)


class Transfer(BaseModel):
    """A suggested debtor -> creditor move, amount in minor units."""

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    amount: int


class Settlement(BaseModel):
    """
    A historical payment or a still-outstanding suggested transfer.

    payment_id is set only when the record is backed by an actual Payment.
    Amount is in minor units and serializes as a two-decimal string.
    """

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    amount: int
    payment_id: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.payment_id is None

    @field_serializer("amount")
    def serialize_amount(self, v: int) -> str:
        return format_minor(v)

    def as_dict(self) -> dict[str, str | None]:
        """Report shape: {from, to, amount, payment_reference}."""
        return {
            "from": self.from_id,
            "to": self.to_id,
            "amount": format_minor(self.amount),
            "payment_reference": self.payment_id,
        }
