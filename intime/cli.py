"""CLI entry point for intime."""

import logging

import typer
from rich.logging import RichHandler

from intime.commands.admin import backup_command, init_command
from intime.commands.history import dashboard_command, delete_command, export_command, history_command
from intime.commands.profile import profile_command
from intime.commands.purchases import calc_command, scan_command

app = typer.Typer(
    name="intime",
    help="intime - See what your purchases cost in hours of work",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send library logs to the terminal through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """intime - See what your purchases cost in hours of work."""
    configure_logging(verbose)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Back up your purchase history and configuration."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
    email: str = typer.Option("", "--email", help="Email for your profile"),
) -> None:
    """Initialize intime database, configuration and your profile."""
    init_command(force, migrate, email=email)


@app.command()
def profile(
    salary: float = typer.Option(None, "--salary", help="Monthly salary (in R$)"),
    hours: float = typer.Option(None, "--hours", help="Hours worked per week"),
    email: str = typer.Option(None, "--email", help="Profile email"),
    ocr_key: str = typer.Option(None, "--ocr-key", help="OCR.space API key used by 'intime scan'"),
) -> None:
    """Show or update your salary profile."""
    profile_command(salary, hours, email, ocr_key)


@app.command()
def calc(
    value: float,
    save: bool = typer.Option(False, "--save", "-s", help="Save to your purchase history"),
    description: str = typer.Option(None, "--description", "-d", help="Purchase description"),
) -> None:
    """Calculate how much work time a value costs you."""
    calc_command(value, save, description)


@app.command()
def scan(
    image: str,
    save: bool = typer.Option(False, "--save", "-s", help="Save to your purchase history"),
    description: str = typer.Option(None, "--description", "-d", help="Purchase description"),
    value: float = typer.Option(None, "--value", help="Use this value (in R$) instead of the one found"),
    show_text: bool = typer.Option(False, "--show-text", help="Print the text read from the receipt"),
) -> None:
    """Read a receipt photo and show the work time it cost you."""
    scan_command(image, save, description, value, show_text)


@app.command()
def history(
    search: str = typer.Option(None, "--search", help="Filter by description"),
    sort_by: str = typer.Option("date", "--sort", help="Sort by 'date', 'value' or 'time'"),
    limit: int = typer.Option(None, "--limit", help="Maximum purchases to show"),
) -> None:
    """List your saved purchases."""
    history_command(search, sort_by, limit)


@app.command()
def delete(
    purchase_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Remove a purchase from your history."""
    delete_command(purchase_id, yes)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="CSV file (default: ./intime-historico.csv)"),
) -> None:
    """Export your purchase history to CSV."""
    export_command(output)


@app.command()
def dashboard() -> None:
    """Show your totals and most recent purchases."""
    dashboard_command()


if __name__ == "__main__":
    app()
