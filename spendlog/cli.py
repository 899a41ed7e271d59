"""CLI entry point for spendlog."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from spendlog.commands.admin import categories_command, init_command
from spendlog.commands.budget import budget_command
from spendlog.commands.expenses import add_command, delete_command, list_command
from spendlog.commands.report import breakdown_command, stats_command

app = typer.Typer(
    name="spendlog",
    help="spendlog - A personal expense tracker with a monthly budget",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """spendlog - A personal expense tracker with a monthly budget."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize spendlog database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount spent (greater than zero)"),
    category: str = typer.Argument(..., help="Category (see 'spendlog categories')"),
    date: str = typer.Option(None, "--date", help="Expense date (YYYY-MM-DD, default: today)"),
    description: str = typer.Option("", "--description", "-d", help="What the money was spent on"),
) -> None:
    """Add an expense."""
    add_command(amount, category, date, description)


@app.command(name="list")
def list_expenses(
    category: str = typer.Option(None, "--category", "-c", help="Only show this category"),
    date_from: str = typer.Option(None, "--from", help="Earliest date to show (inclusive)"),
    date_to: str = typer.Option(None, "--to", help="Latest date to show (inclusive)"),
    limit: int = typer.Option(None, "--limit", "-n", min=1, help="Maximum expenses to show (default from config)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching expenses"),
    month: str = typer.Option(None, "--month", "-m", help="Only show this month (YYYY-MM)"),
) -> None:
    """List your expenses, newest first."""
    list_command(category, date_from, date_to, limit, all, month)


@app.command()
def delete(
    expense_id: str = typer.Argument(..., help="ID of the expense to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command()
def stats() -> None:
    """Show your spending statistics and budget status."""
    stats_command()


@app.command()
def breakdown(
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your spending by category."""
    breakdown_command(histogram)


@app.command()
def budget(
    set_amount: str = typer.Option(None, "--set", help="Set your monthly budget"),
    clear: bool = typer.Option(False, "--clear", help="Remove your monthly budget"),
) -> None:
    """Show or change your monthly budget."""
    budget_command(set_amount, clear)


@app.command()
def categories() -> None:
    """List the expense categories."""
    categories_command()


if __name__ == "__main__":
    app()
