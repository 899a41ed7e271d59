"""Helpers shared by the command modules."""

import os
import sys
import tomllib
from decimal import ROUND_DOWN, Decimal, localcontext
from pathlib import Path

from rich.console import Console

from spendlog.config import get_database_path, get_setting
from spendlog.domain.aggregation import BudgetState, BudgetStatus, budget_alert
from spendlog.store.expenses import ExpenseStore
from spendlog.store.kv import MemoryKeyValueStore, SqliteKeyValueStore
from spendlog.store.schema import database_exists, get_db_path

console = Console()


def resolve_db_path() -> Path:
    """Pick the database path: SPENDLOG_DB, then the config file, then XDG."""
    if os.environ.get("SPENDLOG_DB"):
        return get_db_path()
    return get_database_path() or get_db_path()


def open_store(create: bool = True) -> ExpenseStore:
    """Open the expense store on the sqlite substrate.

    Args:
        create: Create the database if it is missing. Read-only commands pass
            False and get an empty in-memory store instead, so nothing is
            written to disk.

    Exits with status 1 if the config or data directory is unusable.
    """
    try:
        db_path = resolve_db_path()
        if not create and not database_exists(db_path):
            return ExpenseStore(MemoryKeyValueStore())
        return ExpenseStore(SqliteKeyValueStore(db_path))
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def currency_symbol() -> str:
    """Get the configured currency symbol.

    Exits with status 1 if the config file cannot be parsed.
    """
    try:
        return str(get_setting("currency"))
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)


def format_money(amount: Decimal, currency: str) -> str:
    """Format an amount for display (e.g., "₹1,234.50")."""
    return f"{currency}{amount:,.2f}"


def format_percentage(value: Decimal) -> str:
    """Format a percentage to one decimal place, never rounding up (e.g., "79.9%")."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        shown = value.quantize(Decimal("0.1"), rounding=ROUND_DOWN)
    return f"{shown}%"


def format_budget_status(status: BudgetStatus, currency: str) -> str:
    """Format the budget status line with color based on state."""
    if status.kind is BudgetState.UNSET:
        return "[dim]Set Budget[/dim]"
    if status.kind is BudgetState.EXCEEDED:
        return f"[red]Over by {format_money(status.overage or Decimal(0), currency)}[/red]"

    left = f"{format_money(status.remaining or Decimal(0), currency)} left"
    if status.kind is BudgetState.WARNING:
        return f"[yellow]{left}[/yellow]"
    return f"[green]{left}[/green]"


def print_budget_alert(status: BudgetStatus) -> None:
    """Print the budget alert banner, if the status calls for one."""
    message = budget_alert(status)
    if message is None:
        return
    if status.kind is BudgetState.EXCEEDED:
        console.print(f"[bold red]⚠️  {message}[/bold red]")
    else:
        console.print(f"[bold yellow]⚡ {message}[/bold yellow]")
