"""History commands for listing, deleting, exporting and summarizing purchases."""

import sqlite3
import sys
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from intime.commands.profile import load_current_user
from intime.domain.purchases import (
    Purchase,
    display_description,
    filter_purchases,
    recent_purchases,
    sort_purchases,
    summarize_purchases,
)
from intime.domain.worktime import WorkTimeDuration, format_duration
from intime.export import export_purchases_csv
from intime.formatting import format_date, format_money, format_relative_date
from intime.store.queries import delete_purchase, get_purchases_by_user_id
from intime.store.schema import get_db_path

console = Console()

DEFAULT_EXPORT_NAME = "intime-historico.csv"


def purchase_work_time(purchase: Purchase) -> str:
    """Format the stored work time of a purchase."""
    return format_duration(
        WorkTimeDuration(hours=purchase.time_hours, minutes=purchase.time_minutes, total_minutes=purchase.work_minutes)
    )


def render_purchase_table(purchases: list[Purchase], title: str) -> None:
    """Print purchases as a table."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Value", justify="right")
    table.add_column("Work time", justify="right", style="bold")
    table.add_column("Type", style="magenta")

    for purchase in purchases:
        date = format_date(purchase.created_at) if purchase.created_at else "[dim]-[/dim]"
        table.add_row(
            str(purchase.id),
            date,
            display_description(purchase),
            format_money(purchase.value),
            purchase_work_time(purchase),
            purchase.type,
        )

    console.print(table)


def history_command(
    search: str | None = None,
    sort_by: str = "date",
    limit: int | None = None,
) -> None:
    """List saved purchases."""
    try:
        user, _ = load_current_user()
        purchases = get_purchases_by_user_id(user["id"], get_db_path())

        if not purchases:
            console.print("[yellow]No purchases saved yet[/yellow]")
            console.print("[dim]Use 'intime calc VALUE --save' or 'intime scan IMAGE --save'[/dim]")
            return

        shown = sort_purchases(filter_purchases(purchases, search), sort_by)
        if limit is not None:
            shown = shown[:limit]

        if not shown:
            console.print(f"[yellow]No purchases match '{search}'[/yellow]")
            return

        render_purchase_table(shown, f"Purchase history (showing {len(shown)} of {len(purchases)})")

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_command(purchase_id: int, yes: bool = False) -> None:
    """Remove a purchase from the history."""
    try:
        user, _ = load_current_user()

        if not yes and not typer.confirm(f"Remove purchase {purchase_id} from your history?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        if not delete_purchase(purchase_id, user["id"], get_db_path()):
            console.print(f"[red]Purchase {purchase_id} not found[/red]")
            sys.exit(1)

        console.print(f"[green]✓[/green] Purchase {purchase_id} removed")

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(output: str | None = None) -> None:
    """Export the purchase history to CSV."""
    output_path = Path(output).expanduser() if output else Path.cwd() / DEFAULT_EXPORT_NAME

    try:
        user, _ = load_current_user()
        purchases = get_purchases_by_user_id(user["id"], get_db_path())

        count = export_purchases_csv(purchases, output_path)
        console.print(f"[green]✓[/green] Exported {count} purchases to {output_path}")

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]Add some purchases first[/dim]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def dashboard_command() -> None:
    """Show spending totals and recent purchases."""
    try:
        user, profile = load_current_user()
        purchases = get_purchases_by_user_id(user["id"], get_db_path())
        summary = summarize_purchases(purchases)

        console.print(f"\n[bold]Hello, {user['email']}[/bold]\n")
        console.print(f"  Purchases:  {summary.count}")
        console.print(f"  Spent:      {format_money(summary.total_spent)}")
        console.print(f"  Work time:  [bold cyan]{summary.hours}h {summary.minutes}m[/bold cyan]")

        if not profile.is_configured:
            console.print("\n[yellow]Salary profile incomplete. Run 'intime profile' to set it.[/yellow]")

        recent = recent_purchases(purchases)
        if not recent:
            console.print("\n[dim]No purchases yet[/dim]")
            return

        console.print("\n[bold]Recent purchases[/bold]")
        now = datetime.now()
        for purchase in recent:
            when = format_relative_date(purchase.created_at, now) if purchase.created_at else ""
            console.print(
                f"  {display_description(purchase):30} {format_money(purchase.value):>14} "
                f"[cyan]{purchase_work_time(purchase):>8}[/cyan]  [dim]{when}[/dim]"
            )

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
