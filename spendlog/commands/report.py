"""Statistics and category breakdown commands."""

from decimal import Decimal

from rich.table import Table

from spendlog.commands.common import (
    console,
    currency_symbol,
    format_budget_status,
    format_money,
    open_store,
    print_budget_alert,
)
from spendlog.domain.aggregation import (
    CategoryShare,
    calculate_histogram_bar_length,
    category_breakdown,
    compute_statistics,
)

BAR_WIDTH = 30


def render_category_line(share: CategoryShare, currency: str, histogram: bool, max_amount: Decimal) -> None:
    """Render single category breakdown line.

    Args:
        share: CategoryShare with amount and percentage.
        currency: Currency symbol.
        histogram: Whether to show histogram bars.
        max_amount: Largest category amount, for histogram scaling.
    """
    amount_display = format_money(share.amount, currency)
    percentage_display = f"({share.percentage:.1f}%)"

    if histogram:
        bar_length = calculate_histogram_bar_length(share.amount, max_amount, BAR_WIDTH)
        bar = "█" * bar_length
        console.print(f"  {share.category:15} {amount_display:>14} {percentage_display:>8} [cyan]{bar}[/cyan]")
    else:
        console.print(f"  {share.category}: {amount_display} {percentage_display}")


def stats_command() -> None:
    """Show total spent, transaction count and this month's budget status."""
    currency = currency_symbol()
    store = open_store(create=False)

    now = store.today()
    stats = compute_statistics(store.list_all(), store.get_budget(), now)

    table = Table(title=now.strftime("%B %Y"), show_header=False)
    table.add_column("Statistic", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total Spent", format_money(stats.total_spent, currency))
    table.add_row("Transactions", str(stats.transaction_count))
    table.add_row("This Month", format_money(stats.monthly_total, currency))
    table.add_row("Budget Status", format_budget_status(stats.budget_status, currency))

    console.print(table)
    print_budget_alert(stats.budget_status)


def breakdown_command(histogram: bool = True) -> None:
    """Show spending by category, largest first."""
    currency = currency_symbol()
    store = open_store(create=False)

    shares = category_breakdown(store.list_all())
    if not shares:
        console.print("[dim]No data available[/dim]")
        return

    console.print("[bold cyan]Spending by category:[/bold cyan]\n")
    max_amount = max(share.amount for share in shares)
    for share in shares:
        render_category_line(share, currency, histogram, max_amount)

    total = sum((share.amount for share in shares), Decimal(0))
    console.print(f"\n  [bold]Total spent:[/bold] {format_money(total, currency)}")
