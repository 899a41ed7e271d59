"""Admin commands for initialization and reference data."""

import sqlite3
import sys
import tomllib

from spendlog.commands.common import console, resolve_db_path
from spendlog.config import create_default_config, get_config_path
from spendlog.domain.models import Category
from spendlog.store.schema import get_db_path, init_database


def init_command(force: bool = False) -> None:
    """Initialize spendlog database and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()
    try:
        db_path = resolve_db_path()
    except tomllib.TOMLDecodeError:
        db_path = get_db_path()
    db_exists = db_path.exists()

    # Guard: refuse to overwrite without force flag
    if not force and (db_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if db_exists:
            console.print(f"  Database already exists: {db_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'spendlog init --force' to reset the config[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def categories_command() -> None:
    """List the expense categories."""
    for name in Category.names():
        console.print(f"  {name}")
