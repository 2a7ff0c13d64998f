"""Click CLI entrypoint for settleup."""

import json
import sys
from collections.abc import Callable
from typing import NoReturn

import click

from . import __version__, templates
from .audit import log_computation
from .config import get_policy, get_supabase_credentials
from .errors import LedgerError, StoreError
from .models import EventSnapshot
from .money import to_minor
from .rest import RestStore
from .service import EventLedger, EventStore, snapshot_balances, snapshot_settlements
from .splitter import split
from .state import SnapshotStore


def _open_store(
    snapshot: str | None, supabase_url: str | None, supabase_key: str | None
) -> EventStore:
    """Snapshot file if given, otherwise Supabase from options or environment."""
    if snapshot:
        return SnapshotStore(snapshot)
    url, key = get_supabase_credentials(supabase_url, supabase_key)
    if not url or not key:
        raise StoreError(
            "No data source: pass --snapshot or set SETTLEUP_SUPABASE_URL and SETTLEUP_SUPABASE_KEY"
        )
    return RestStore(url, key)


def _names(snap: EventSnapshot) -> dict[str, str]:
    return {p.id: p.name for p in snap.participants}


def _fail(event_id: str, operation: str, error: Exception, audit: bool) -> NoReturn:
    if audit:
        log_computation(event_id, operation, "error", error_msg=str(error))
    click.echo(f"❌ {error}")
    sys.exit(1)


def source_options(f: Callable[..., None]) -> Callable[..., None]:
    """Options shared by commands that read an event."""
    f = click.option("--no-audit", is_flag=True, help="Don't record this computation")(f)
    f = click.option("--supabase-key", default=None, help="Supabase API key")(f)
    f = click.option("--supabase-url", default=None, help="Supabase project URL")(f)
    f = click.option(
        "--snapshot", default=None, help="JSON snapshot file to read instead of Supabase"
    )(f)
    return f


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """settleup - Balances and settlements for shared-expense events."""
    pass


@cli.command()
@click.argument("event_id")
@source_options
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def balances(
    event_id: str,
    snapshot: str | None,
    supabase_url: str | None,
    supabase_key: str | None,
    no_audit: bool,
    as_json: bool,
) -> None:
    """Show each participant's net balance for an event."""
    try:
        store = _open_store(snapshot, supabase_url, supabase_key)
        snap = EventLedger(store).snapshot(event_id)
        result = snapshot_balances(snap.participants, snap.expenses, snap.payments)
    except (LedgerError, StoreError) as e:
        _fail(event_id, "balances", e, not no_audit)

    if not no_audit:
        log_computation(event_id, "balances", "ok")

    if as_json:
        click.echo(json.dumps({person: str(amount) for person, amount in result.items()}, indent=2))
    else:
        click.echo(templates.format_balances(result, _names(snap), event=event_id))


@cli.command()
@click.argument("event_id")
@source_options
@click.option(
    "--policy",
    type=click.Choice(["ledger", "reconstruct"]),
    default=None,
    help="Reconciliation policy (default: SETTLEUP_POLICY or ledger)",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def settle(
    event_id: str,
    snapshot: str | None,
    supabase_url: str | None,
    supabase_key: str | None,
    no_audit: bool,
    policy: str | None,
    as_json: bool,
) -> None:
    """Show paid and pending settlements for an event."""
    try:
        store = _open_store(snapshot, supabase_url, supabase_key)
        ledger = EventLedger(store, get_policy(policy))
        snap = ledger.snapshot(event_id)
        report = snapshot_settlements(
            snap.participants, snap.expenses, snap.payments, ledger.policy
        )
        final = snapshot_balances(snap.participants, snap.expenses, snap.payments)
    except (LedgerError, StoreError) as e:
        _fail(event_id, "settle", e, not no_audit)

    if not no_audit:
        log_computation(event_id, "settle", "ok")

    if as_json:
        payload = {
            "balances": {person: str(amount) for person, amount in final.items()},
            "settlements": [s.as_dict() for s in report],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(templates.format_settlements(report, _names(snap), event=event_id))


@cli.command(name="split")
@click.argument("amount")
@click.argument("ways", type=int)
def split_command(amount: str, ways: int) -> None:
    """Split AMOUNT into WAYS fair shares (extra cents go first)."""
    try:
        shares = split(to_minor(amount), ways)
    except LedgerError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)
    click.echo(templates.format_split(shares))


@cli.command()
@click.argument("snapshot")
def events(snapshot: str) -> None:
    """List events in a snapshot file."""
    try:
        store = SnapshotStore(snapshot)
    except StoreError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)

    event_ids = store.list_events()
    if not event_ids:
        click.echo("No events found.")
        return

    click.echo("Events:")
    for event_id in event_ids:
        snap = store.get(event_id)
        label = f"{snap.name} " if snap.name else ""
        click.echo(
            f"  • {event_id} {label}- {len(snap.participants)} participants, "
            f"{len(snap.expenses)} expenses, {len(snap.payments)} payments"
        )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
