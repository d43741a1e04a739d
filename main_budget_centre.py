"""Mini README: Entry point CLI for the month budget tracker.

This script exposes a Typer CLI to inspect and edit a month from the
terminal, plus ``serve`` to launch the FastAPI interface with uvicorn. Every
command works on the current month unless ``--month YYYY-MM`` is given and
persists to the JSON document configured through ``MONTHBUDGET_`` settings.
"""

from __future__ import annotations

from typing import Callable, Optional

import typer
import uvicorn

from monthbudget.budget.money import InvalidAmountError, format_cents, format_timestamp
from monthbudget.configuration import get_settings
from monthbudget.logging_utils import configure_root_logger
from monthbudget.session import BudgetSession
from monthbudget.storage import store_from_settings

cli = typer.Typer(help="Track fixed charges, envelopes and cumulatives month by month.")
fixed_cli = typer.Typer(help="Manage fixed recurring charges.")
envelope_cli = typer.Typer(help="Manage capped spending envelopes.")
cumulative_cli = typer.Typer(help="Manage uncapped cumulative trackers.")
cli.add_typer(fixed_cli, name="fixed")
cli.add_typer(envelope_cli, name="envelope")
cli.add_typer(cumulative_cli, name="cumulative")

MONTH_HELP = "Month as YYYY-MM (defaults to the current month)."
YES_HELP = "Skip the confirmation prompt."


@cli.callback()
def main() -> None:
    """Apply the configured logging level before any command runs."""

    settings = get_settings()
    configure_root_logger(settings.effective_log_level, settings.log_file)


def _open_session(month: Optional[str], yes: bool = False) -> BudgetSession:
    settings = get_settings()
    confirm: Callable[[str], bool] = (lambda _prompt: True) if yes else typer.confirm
    try:
        return BudgetSession(store_from_settings(settings), month, confirm=confirm)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--month") from error


def _money(cents: int) -> str:
    return f"{format_cents(cents)} {get_settings().currency_symbol}"


def _run(action: Callable, *args: str) -> object:
    """Run a session mutation, reporting rejected amounts and no-ops."""

    try:
        outcome = action(*args)
    except InvalidAmountError as error:
        typer.secho(str(error), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    if outcome is None or outcome is False:
        typer.echo("Nothing changed.")
    return outcome


@cli.command()
def show(month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP)) -> None:
    """Print the month's totals, charges, envelopes and cumulatives."""

    session = _open_session(month)
    record = session.record
    totals = session.totals()
    limit = get_settings().recent_entry_limit

    typer.echo(f"Month {session.month}")
    typer.echo(f"  Income             {_money(record.income_cents)}")
    typer.echo(f"  Fixed total        {_money(totals.fixed_charges_total)}")
    typer.echo(f"  Fixed paid         {_money(totals.fixed_charges_paid)}")
    typer.echo(f"  Fixed remaining    {_money(totals.fixed_charges_remaining)}")
    typer.echo(f"  Net left           {_money(totals.net_left)}")
    typer.echo(f"  Current left       {_money(totals.current_left)}")

    typer.echo(f"\nFixed charges ({totals.paid_count} / {totals.charge_count} paid)")
    for group, charges in session.grouped_fixed_charges():
        typer.echo(f"  {group}")
        for charge in charges:
            mark = "x" if charge.paid else " "
            typer.echo(f"    [{mark}] {charge.name}  {_money(charge.amount_cents)}  ({charge.id})")

    typer.echo("\nEnvelopes")
    for envelope in record.envelopes:
        typer.echo(
            f"  {envelope.name} ({envelope.id}): left {_money(envelope.remaining_cents)}"
            f" / budget {_money(envelope.limit_cents)} / spent {_money(envelope.spent_cents)}"
        )
        for entry in session.recent_entries(envelope.entries, limit):
            typer.echo(f"    {format_timestamp(entry.ts)}  -{_money(entry.amount_cents)}  ({entry.id})")

    typer.echo("\nCumulatives")
    for cumulative in record.cumulatives:
        typer.echo(f"  {cumulative.name} ({cumulative.id}): total {_money(cumulative.spent_cents)}")
        for entry in session.recent_entries(cumulative.entries, limit):
            typer.echo(f"    {format_timestamp(entry.ts)}  -{_money(entry.amount_cents)}  ({entry.id})")


@cli.command()
def months() -> None:
    """List the months that have stored data."""

    for stored in store_from_settings(get_settings()).months():
        typer.echo(stored)


@cli.command()
def income(
    amount: str = typer.Argument(..., help="Monthly income, e.g. 2500,00."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Set the month's income."""

    session = _open_session(month)
    _run(session.set_income, amount)
    typer.echo(f"Income for {session.month}: {_money(session.record.income_cents)}")


@cli.command()
def reset(
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help=YES_HELP),
) -> None:
    """Un-mark fixed charges and empty envelopes and cumulatives."""

    session = _open_session(month, yes)
    if _run(session.reset_month):
        typer.echo(f"{session.month} reset.")


@fixed_cli.command("add")
def fixed_add(
    name: str = typer.Argument(..., help="Charge name, e.g. Rent."),
    amount: str = typer.Argument(..., help="Monthly amount, e.g. 650,00."),
    group: str = typer.Option("", "--group", "-g", help="Optional group label."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Add a fixed charge."""

    charge = _run(_open_session(month).add_fixed_charge, name, amount, group)
    if charge:
        typer.echo(f"Added {charge.name} ({charge.id}).")


@fixed_cli.command("toggle")
def fixed_toggle(
    charge_id: str = typer.Argument(..., help="Charge identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Flip the paid flag of a fixed charge."""

    charge = _run(_open_session(month).toggle_fixed_charge, charge_id)
    if charge:
        typer.echo(f"{charge.name}: {'paid' if charge.paid else 'unpaid'}.")


@fixed_cli.command("delete")
def fixed_delete(
    charge_id: str = typer.Argument(..., help="Charge identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help=YES_HELP),
) -> None:
    """Delete a fixed charge."""

    if _run(_open_session(month, yes).delete_fixed_charge, charge_id):
        typer.echo("Deleted.")


@envelope_cli.command("add")
def envelope_add(
    name: str = typer.Argument(..., help="Envelope name, e.g. Groceries."),
    limit: str = typer.Argument("", help="Monthly cap, e.g. 200,00."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Add a capped envelope."""

    envelope = _run(_open_session(month).add_envelope, name, limit)
    if envelope:
        typer.echo(f"Added {envelope.name} ({envelope.id}).")


@envelope_cli.command("rename")
def envelope_rename(
    envelope_id: str = typer.Argument(..., help="Envelope identifier."),
    name: str = typer.Argument(..., help="New name."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Rename an envelope."""

    envelope = _run(_open_session(month).rename_envelope, envelope_id, name)
    if envelope:
        typer.echo(f"Renamed to {envelope.name}.")


@envelope_cli.command("limit")
def envelope_limit(
    envelope_id: str = typer.Argument(..., help="Envelope identifier."),
    limit: str = typer.Argument(..., help="New monthly cap, e.g. 250,00."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Change an envelope's cap."""

    envelope = _run(_open_session(month).set_envelope_limit, envelope_id, limit)
    if envelope:
        typer.echo(
            f"{envelope.name}: budget {_money(envelope.limit_cents)},"
            f" left {_money(envelope.remaining_cents)}."
        )


@envelope_cli.command("delete")
def envelope_delete(
    envelope_id: str = typer.Argument(..., help="Envelope identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help=YES_HELP),
) -> None:
    """Delete an envelope and its entries."""

    if _run(_open_session(month, yes).delete_envelope, envelope_id):
        typer.echo("Deleted.")


@envelope_cli.command("spend")
def envelope_spend(
    envelope_id: str = typer.Argument(..., help="Envelope identifier."),
    amount: str = typer.Argument(..., help="Amount spent, e.g. 4,50."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Record a spend against an envelope."""

    entry = _run(_open_session(month).add_envelope_entry, envelope_id, amount)
    if entry:
        typer.echo(f"Recorded {_money(entry.amount_cents)} ({entry.id}).")


@envelope_cli.command("unspend")
def envelope_unspend(
    envelope_id: str = typer.Argument(..., help="Envelope identifier."),
    entry_id: str = typer.Argument(..., help="Entry identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Remove a recorded spend from an envelope."""

    entry = _run(_open_session(month).delete_envelope_entry, envelope_id, entry_id)
    if entry:
        typer.echo(f"Removed {_money(entry.amount_cents)} ({entry.id}).")


@cumulative_cli.command("add")
def cumulative_add(
    name: str = typer.Argument(..., help="Tracker name, e.g. Fuel."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Add an uncapped cumulative tracker."""

    cumulative = _run(_open_session(month).add_cumulative, name)
    if cumulative:
        typer.echo(f"Added {cumulative.name} ({cumulative.id}).")


@cumulative_cli.command("rename")
def cumulative_rename(
    cumulative_id: str = typer.Argument(..., help="Tracker identifier."),
    name: str = typer.Argument(..., help="New name."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Rename a cumulative tracker."""

    cumulative = _run(_open_session(month).rename_cumulative, cumulative_id, name)
    if cumulative:
        typer.echo(f"Renamed to {cumulative.name}.")


@cumulative_cli.command("delete")
def cumulative_delete(
    cumulative_id: str = typer.Argument(..., help="Tracker identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help=YES_HELP),
) -> None:
    """Delete a cumulative tracker and its entries."""

    if _run(_open_session(month, yes).delete_cumulative, cumulative_id):
        typer.echo("Deleted.")


@cumulative_cli.command("spend")
def cumulative_spend(
    cumulative_id: str = typer.Argument(..., help="Tracker identifier."),
    amount: str = typer.Argument(..., help="Amount spent, e.g. 10,00."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Record a spend against a cumulative tracker."""

    entry = _run(_open_session(month).add_cumulative_entry, cumulative_id, amount)
    if entry:
        typer.echo(f"Recorded {_money(entry.amount_cents)} ({entry.id}).")


@cumulative_cli.command("unspend")
def cumulative_unspend(
    cumulative_id: str = typer.Argument(..., help="Tracker identifier."),
    entry_id: str = typer.Argument(..., help="Entry identifier."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Remove a recorded spend from a cumulative tracker."""

    entry = _run(_open_session(month).delete_cumulative_entry, cumulative_id, entry_id)
    if entry:
        typer.echo(f"Removed {_money(entry.amount_cents)} ({entry.id}).")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI interface using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port

    # Browsers cannot open the 0.0.0.0 wildcard, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Serving month budget on {effective_host}:{effective_port}.\n"
        f"Open http://{browser_host}:{effective_port}/ in your browser."
    )
    uvicorn.run(
        "monthbudget.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
