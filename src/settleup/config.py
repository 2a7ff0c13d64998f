"""Environment-driven configuration. CLI options take precedence."""

import os
from pathlib import Path

from .errors import InvalidArgument
from .reconcile import DEFAULT_POLICY, ReconcilePolicy

STATE_DIR = Path.home() / ".settleup"
DEFAULT_LOG_PATH = STATE_DIR / "computations.jsonl"


def get_policy(override: str | None = None) -> ReconcilePolicy:
    """Reconciliation policy from override, SETTLEUP_POLICY, or the default."""
    value = override or os.environ.get("SETTLEUP_POLICY")
    if not value:
        return DEFAULT_POLICY
    try:
        return ReconcilePolicy(value.strip().lower())
    except ValueError as e:
        choices = ", ".join(p.value for p in ReconcilePolicy)
        raise InvalidArgument(f"Unknown policy '{value}' (expected one of: {choices})") from e


def get_log_path() -> Path:
    """Get the audit log path, respecting SETTLEUP_LOG_PATH env var."""
    env_path = os.environ.get("SETTLEUP_LOG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_LOG_PATH


def get_supabase_credentials(
    url: str | None = None, key: str | None = None
) -> tuple[str | None, str | None]:
    """Supabase URL and key from overrides or SETTLEUP_SUPABASE_URL / SETTLEUP_SUPABASE_KEY."""
    return (
        url or os.environ.get("SETTLEUP_SUPABASE_URL"),
        key or os.environ.get("SETTLEUP_SUPABASE_KEY"),
    )
