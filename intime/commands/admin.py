"""Admin commands: set up intime and back up the purchase history."""

import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console

from intime.config import create_default_config, get_config_path, get_user_settings, load_config, save_config
from intime.store.queries import create_user
from intime.store.schema import backup_database, count_rows, database_exists, get_db_path, init_database

console = Console()


def describe_counts(counts: dict[str, int]) -> str:
    """Summarize row counts, e.g. '1 user, 12 purchases'."""
    users = counts["users"]
    purchases = counts["purchases"]
    return f"{users} user{'s' if users != 1 else ''}, {purchases} purchase{'s' if purchases != 1 else ''}"


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Write a timestamped copy of the purchase database and the config."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)

    if not config_path.exists():
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)

    backup_dir = Path(output_dir).expanduser() if output_dir else db_path.parent / "backups"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"intime_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_database(db_backup, db_path)
        console.print(f"[green]✓[/green] History backed up to: {db_backup}")
        console.print(f"[dim]{describe_counts(count_rows(db_backup))}[/dim]")

        # save_config keeps the copy at mode 0600
        save_config(load_config(config_path), config_backup)
        console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")

    except (sqlite3.Error, OSError) as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def update_schema(db_path: Path) -> None:
    """Create any missing tables or indexes, keeping existing purchases."""
    console.print(f"[cyan]Checking schema of {db_path}...[/cyan]")
    init_database(db_path)
    console.print(f"[green]✓[/green] Schema up to date ({describe_counts(count_rows(db_path))} kept)")



def run_full_init(db_path: Path, config_path: Path, uid: str, email: str) -> None:
    """Initialize new database, config and local user."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    if database_exists(db_path):
        db_path.unlink()
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path, uid=uid, email=email)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    uid, email = get_user_settings(load_config(config_path))
    create_user(uid, email, db_path=db_path)
    console.print(f"[green]✓[/green] User profile created: {email}")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print("[dim]Next: set your salary with 'intime profile --salary ... --hours ...'[/dim]")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, migrate: bool = False, uid: str = "local", email: str = "") -> None:
    """Initialize intime database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Migration path: update existing database only
        if migrate:
            if not db_exists:
                console.print("[red]No database found to migrate[/red]", style="bold")
                console.print(f"[dim]Expected location: {db_path}[/dim]")
                sys.exit(1)
            update_schema(db_path)
            return

        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'intime init --force' to overwrite[/yellow]")
            console.print("[yellow]Or 'intime init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path, uid, email)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
