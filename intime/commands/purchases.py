"""Purchase commands: calculate work time manually or from a receipt photo."""

import sqlite3
import sys
from decimal import Decimal
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from intime.commands.profile import load_current_user
from intime.config import get_ocr_api_key, get_ocr_timeout, load_config
from intime.domain.models import PurchaseType
from intime.domain.purchases import build_purchase_draft
from intime.domain.worktime import UserRateProfile, WorkTimeDuration, convert_for_profile, format_duration
from intime.formatting import format_currency
from intime.ocr import OcrError, scan_receipt
from intime.store.queries import create_purchase
from intime.store.schema import get_db_path

console = Console()


def render_work_time(value: Decimal, duration: WorkTimeDuration) -> None:
    """Print how much work time a value costs."""
    console.print(f"\nThis purchase cost [bold cyan]{format_duration(duration)}[/bold cyan] of your work")
    console.print(f"[dim]Based on a value of {format_currency(value)}[/dim]")


def require_configured_profile(profile: UserRateProfile) -> None:
    """Exit with a hint if salary or weekly hours are missing."""
    if not profile.is_configured:
        console.print("[yellow]Set your salary and weekly hours first:[/yellow]")
        console.print("[dim]intime profile --salary 3500 --hours 40[/dim]")
        sys.exit(1)


def save_purchase(
    user_id: int,
    value: Decimal,
    profile: UserRateProfile,
    purchase_type: PurchaseType,
    description: str | None,
    image_path: str | None = None,
) -> None:
    """Store a purchase and confirm it."""
    draft = build_purchase_draft(user_id, value, profile, purchase_type, description, image_path)
    purchase = create_purchase(draft, get_db_path())
    console.print(f"[green]✓[/green] Saved to history (ID: {purchase.id})")


def calc_command(
    value: float,
    save: bool = False,
    description: str | None = None,
) -> None:
    """Show the work time for a value, optionally saving it as a manual purchase."""
    if value <= 0:
        console.print("[red]Value must be greater than zero[/red]")
        sys.exit(1)

    try:
        user, profile = load_current_user()
        require_configured_profile(profile)

        amount = Decimal(str(value))
        render_work_time(amount, convert_for_profile(amount, profile))

        if save:
            save_purchase(user["id"], amount, profile, "manual", description)

    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def scan_command(
    image: str,
    save: bool = False,
    description: str | None = None,
    value: float | None = None,
    show_text: bool = False,
) -> None:
    """Read a receipt photo, find its total and show the work time it cost."""
    image_path = Path(image).expanduser()
    if not image_path.is_file():
        console.print(f"[red]Image not found: {image_path}[/red]")
        sys.exit(1)

    try:
        config = load_config()
        api_key = get_ocr_api_key(config)
        if not api_key:
            console.print("[red]No OCR API key configured[/red]")
            console.print("[dim]Set OCR_API_KEY, or api_key in the ocr section of the config file[/dim]")
            sys.exit(1)

        user, profile = load_current_user()

        with console.status("[cyan]Reading receipt...[/cyan]"):
            result = scan_receipt(image_path, api_key, get_ocr_timeout(config))

        if show_text:
            console.print(Panel(result.raw_text.strip() or "[dim](empty)[/dim]", title="Receipt text"))

        if result.success:
            console.print(f"[green]✓[/green] Total found: {format_currency(result.total_value)}")
        else:
            console.print("[yellow]Couldn't find a total on this receipt[/yellow]")

        if value is not None:
            if value <= 0:
                console.print("[red]Value must be greater than zero[/red]")
                sys.exit(1)
            amount = Decimal(str(value))
            console.print(f"[dim]Using the value you entered: {format_currency(amount)}[/dim]")
        elif result.success:
            amount = result.total_value
        else:
            console.print("[dim]Enter it yourself with --value, or use 'intime calc'[/dim]")
            sys.exit(1)

        require_configured_profile(profile)
        render_work_time(amount, convert_for_profile(amount, profile))

        if save:
            save_purchase(user["id"], amount, profile, "ocr", description, str(image_path))

    except OcrError as e:
        console.print(f"[red]Couldn't process the receipt: {e}[/red]", style="bold")
        sys.exit(1)
    except FileNotFoundError:
        console.print("[red]Config not found. Run 'intime init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
