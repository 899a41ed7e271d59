"""Expense commands (add, list, delete)."""

import sys
from datetime import date, timedelta

import typer
from rich.table import Table

from spendlog.commands.common import (
    console,
    currency_symbol,
    format_money,
    open_store,
    print_budget_alert,
)
from spendlog.config import get_setting
from spendlog.dates import format_display_date, month_range, parse_date
from spendlog.domain.aggregation import apply_filters, budget_status, monthly_total, total_spent
from spendlog.domain.models import Category
from spendlog.errors import StorageError, ValidationError
from spendlog.store.expenses import ExpenseStore


def alert_on_budget(store: ExpenseStore) -> None:
    """Change listener: re-read the store and show any budget alert."""
    budget = store.get_budget()
    if budget is None:
        return
    now = store.today()
    monthly = monthly_total(store.list_all(), now.year, now.month)
    print_budget_alert(budget_status(monthly, budget))


def add_command(
    amount: str,
    category: str,
    date: str | None = None,
    description: str = "",
) -> None:
    """Add an expense.

    Args:
        amount: Amount spent (must be greater than zero).
        category: Expense category name.
        date: Expense date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
        description: Optional description.
    """
    currency = currency_symbol()

    try:
        store = open_store()
        day = parse_date(date) if date else store.today()
        store.subscribe(alert_on_budget)
        expense = store.add(amount, category, day, description)

    except ValidationError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Expense added successfully!")
    console.print(f"  Date: {format_display_date(expense.date)}")
    console.print(f"  Category: {expense.category}")
    if expense.description:
        console.print(f"  Description: {expense.description}")
    console.print(f"  Amount: {format_money(expense.amount, currency)}")
    console.print(f"  [dim]ID: {expense.id}[/dim]")


def list_command(
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    limit: int | None = None,
    all: bool = False,
    month: str | None = None,
) -> None:
    """List expenses newest first, optionally filtered.

    Args:
        category: Only show this category.
        date_from: Earliest date to show (inclusive).
        date_to: Latest date to show (inclusive).
        limit: Maximum rows to show. Defaults to the list_limit setting.
        all: Show every matching expense regardless of limit.
        month: Only show this month (YYYY-MM). Cannot be combined with
            date_from or date_to.
    """
    currency = currency_symbol()

    if month and (date_from or date_to):
        console.print("[red]Use either --month or --from/--to, not both[/red]", style="bold")
        sys.exit(1)

    label = None
    try:
        category_name = Category.parse(category).value if category else None
        since = parse_date(date_from) if date_from else None
        until = parse_date(date_to) if date_to else None
        if month:
            first, next_first, label = month_range(month)
            since = date.fromisoformat(first)
            until = date.fromisoformat(next_first) - timedelta(days=1)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ValueError:
        console.print(f"[red]Invalid month format: {month}. Use YYYY-MM[/red]", style="bold")
        sys.exit(1)

    store = open_store(create=False)
    expenses = store.list_all()

    if not expenses:
        console.print("[yellow]No expenses yet. Add your first expense with 'spendlog add'.[/yellow]")
        return

    matched = apply_filters(expenses, category_name, since, until)
    if not matched:
        console.print("[yellow]No expenses match the filters[/yellow]")
        return

    if limit is None:
        limit = max(int(get_setting("list_limit")), 1)
    shown = matched if all else matched[:limit]

    heading = f"Expenses for {label}" if label else "Expenses"
    title = f"{heading} (showing {len(shown)} of {len(matched)})"
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim")

    for expense in shown:
        description = expense.description or "[dim]-[/dim]"
        table.add_row(
            format_display_date(expense.date),
            expense.category,
            description,
            f"[red]{format_money(expense.amount, currency)}[/red]",
            expense.id,
        )

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {format_money(total_spent(matched), currency)}")


def delete_command(expense_id: str, yes: bool = False) -> None:
    """Delete an expense after confirmation."""
    currency = currency_symbol()
    store = open_store(create=False)

    expense = store.get(expense_id)
    if expense is None:
        console.print(f"[yellow]No expense found with ID {expense_id}[/yellow]")
        sys.exit(1)

    console.print(
        f"{format_display_date(expense.date)}  {expense.category}  "
        f"{format_money(expense.amount, currency)}  {expense.description}"
    )
    if not yes and not typer.confirm("Are you sure you want to delete this expense?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        removed = store.delete(expense_id)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not removed:
        console.print(f"[yellow]No expense found with ID {expense_id}[/yellow]")
        sys.exit(1)

    console.print("[green]✓[/green] Expense deleted successfully!")
