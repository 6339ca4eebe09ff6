"""Profile command for viewing and setting salary and weekly hours."""

import sqlite3
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from intime.config import get_user_settings, load_config, set_ocr_api_key
from intime.domain.worktime import UserRateProfile, validate_profile
from intime.formatting import format_currency
from intime.store.queries import create_user, get_user_by_uid, update_user
from intime.store.schema import get_db_path

console = Console()


def load_current_user() -> tuple[dict[str, Any], UserRateProfile]:
    """Load the configured local user and their salary profile.

    Returns:
        Tuple of (user_row, profile).

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If no user is configured.
        sqlite3.Error: If database operation fails.
    """
    uid, email = get_user_settings(load_config())
    db_path = get_db_path()

    user = get_user_by_uid(uid, db_path)
    if user is None:
        user = create_user(uid, email, db_path=db_path)

    profile = UserRateProfile(monthly_salary=user["monthly_salary"], weekly_hours=user["weekly_hours"])
    return user, profile


def render_profile(user: dict[str, Any], profile: UserRateProfile) -> None:
    """Print the profile with its derived pay rates."""
    table = Table(title="Your profile", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    salary = format_currency(profile.monthly_salary) if profile.monthly_salary else "[dim]-[/dim]"
    hours = f"{profile.weekly_hours:g}h" if profile.weekly_hours else "[dim]-[/dim]"

    table.add_row("Email", user["email"])
    table.add_row("Monthly salary", salary)
    table.add_row("Weekly hours", hours)

    if profile.is_configured:
        table.add_row("Hourly rate", format_currency(round(profile.hourly_rate, 2)))
        table.add_row("Daily rate", format_currency(round(profile.daily_rate, 2)))

    console.print(table)

    if not profile.is_configured:
        console.print("[yellow]Salary profile incomplete. Work time can't be calculated yet.[/yellow]")
        console.print("[dim]Use 'intime profile --salary 3500 --hours 40'[/dim]")


def profile_command(
    salary: float | None = None,
    hours: float | None = None,
    email: str | None = None,
    ocr_key: str | None = None,
) -> None:
    """Show or update the salary profile and the OCR API key."""
    try:
        user, profile = load_current_user()

        if ocr_key is not None:
            set_ocr_api_key(ocr_key.strip())
            console.print("[green]✓[/green] OCR API key saved to config")
            if salary is None and hours is None and email is None:
                return

        if salary is None and hours is None and email is None:
            render_profile(user, profile)
            return

        new_salary = salary if salary is not None else profile.monthly_salary
        new_hours = hours if hours is not None else profile.weekly_hours

        updates: dict[str, Any] = {}
        if salary is not None or hours is not None:
            error = validate_profile(new_salary, new_hours)
            if error:
                console.print(f"[red]{error}[/red]")
                sys.exit(1)
            updates["monthly_salary"] = new_salary
            updates["weekly_hours"] = new_hours
        if email is not None:
            updates["email"] = email

        updated = update_user(user["uid"], get_db_path(), **updates)
        if updated is None:
            console.print("[red]User not found[/red]")
            sys.exit(1)

        console.print("[green]✓[/green] Profile updated")
        render_profile(updated, UserRateProfile(updated["monthly_salary"], updated["weekly_hours"]))

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
