"""Append-only log of computations. Every CLI computation is recorded with its outcome."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from .config import get_log_path

Status = Literal["ok", "error"]


class AuditEntry(BaseModel):
    """One line of the computation log."""

    ts: datetime = Field(default_factory=datetime.now)
    event_id: str
    operation: str
    status: Status
    error_msg: str | None = None


def log_computation(
    event_id: str,
    operation: str,
    status: Status,
    error_msg: str | None = None,
    log_path: Path | None = None,
) -> AuditEntry:
    """
    Append a computation entry to the log file, creating its directory if needed.

    Args:
        event_id: Event the computation ran for
        operation: What was computed, e.g. "balances" or "settle"
        status: "ok" or "error"
        error_msg: Error message if status is "error"
        log_path: Optional custom log path (for testing)

    Returns:
        The entry that was written
    """
    path = log_path or get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    entry = AuditEntry(event_id=event_id, operation=operation, status=status, error_msg=error_msg)
    with path.open("a", encoding="utf-8") as f:
        f.write(entry.model_dump_json(exclude_none=True) + "\n")
    return entry


def read_log(
    log_path: Path | None = None,
    limit: int | None = None,
    event_id: str | None = None,
) -> list[AuditEntry]:
    """
    Read entries oldest first, optionally for one event and only the newest `limit`.

    A missing log file reads as empty.
    """
    path = log_path or get_log_path()
    if not path.exists():
        return []

    with path.open(encoding="utf-8") as f:
        entries = [AuditEntry.model_validate_json(line) for line in f if line.strip()]

    if event_id is not None:
        entries = [e for e in entries if e.event_id == event_id]
    return entries if limit is None else entries[-limit:]
