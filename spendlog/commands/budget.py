"""Budget command for the monthly spending budget."""

import sys
from decimal import Decimal

from spendlog.commands.common import (
    console,
    currency_symbol,
    format_budget_status,
    format_money,
    format_percentage,
    open_store,
    print_budget_alert,
)
from spendlog.domain.aggregation import budget_status, monthly_total
from spendlog.errors import StorageError, ValidationError


def budget_command(set_amount: str | None = None, clear: bool = False) -> None:
    """Set, clear or show the monthly budget.

    Args:
        set_amount: New monthly budget; replaces any previous budget.
        clear: Remove the monthly budget.
    """
    currency = currency_symbol()
    store = open_store(create=set_amount is not None)

    try:
        if set_amount is not None:
            budget = store.set_budget(set_amount)
            console.print(f"[green]✓[/green] Budget set successfully! ({format_money(budget, currency)} per month)")
        elif clear:
            if store.clear_budget():
                console.print("[green]✓[/green] Budget cleared")
            else:
                console.print("[dim]No budget was set[/dim]")
                return

    except ValidationError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    budget = store.get_budget()
    now = store.today()
    monthly = monthly_total(store.list_all(), now.year, now.month)
    status = budget_status(monthly, budget)

    if budget is None:
        console.print("[dim]No monthly budget set. Use 'spendlog budget --set AMOUNT'.[/dim]")
        return

    console.print(f"\n[bold cyan]{now.strftime('%B %Y')}[/bold cyan]")
    console.print(f"  Budget: {format_money(budget, currency)}")
    used = format_percentage(status.percentage_used or Decimal(0))
    console.print(f"  Spent: {format_money(monthly, currency)} ({used})")
    console.print(f"  Status: {format_budget_status(status, currency)}")
    print_budget_alert(status)
