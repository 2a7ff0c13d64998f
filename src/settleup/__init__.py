"""settleup - balance and settlement engine for shared-expense events."""

__version__ = "0.1.0"
