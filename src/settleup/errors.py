"""Errors raised by the balance and settlement engine."""


class LedgerError(Exception):
    """Base class for computation failures. Never retried."""

    pass


class InvalidArgument(LedgerError, ValueError):
    """Non-positive amount, empty consumer list, or a zero-way split."""

    pass


class UnknownParticipant(LedgerError):
    """An expense or payment references an id outside the participant set."""

    def __init__(self, participant_id: str, context: str = ""):
        self.participant_id = participant_id
        message = f"Unknown participant '{participant_id}'"
        if context:
            message = f"{message} in {context}"
        super().__init__(message)


class Inconsistent(LedgerError):
    """Balances or a settlement report don't add up. Never silently corrected."""

    pass


class StoreError(Exception):
    """Error reading event records from a store."""

    pass
