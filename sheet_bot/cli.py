from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .errors import ColumnNotFoundError, ConfigurationError, SourceUnavailableError
from .logging import setup_bot_logging
from .repositories import SheetRepository
from .settings import REQUIRED_SETTINGS, Settings, load_settings
from .sources import GoogleSheetSource

app = typer.Typer(
    add_completion=False,
    help="sheet_bot: browse a Google Sheet from Telegram",
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger(__name__)

EXIT_CONFIG = 2
EXIT_SOURCE = 3

# Shown as-is by `doctor`; everything else is masked.
PLAIN_SETTINGS = {"GOOGLE_SHEET_ID", "GOOGLE_SERVICE_ACCOUNT_EMAIL"}


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigurationError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {escape(str(e))}")
        console.print("[dim]→ Set the variables in the environment or in .env[/dim]")
        raise typer.Exit(code=EXIT_CONFIG)


def _repository(settings: Settings) -> SheetRepository:
    return SheetRepository(GoogleSheetSource.from_settings(settings))


def _mask(value: str | None) -> str:
    s = str(value or "")
    if not s:
        return "[red](not set)[/red]"
    if len(s) <= 8:
        return "****"
    return f"{s[:4]}…{s[-4:]}"


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("run", help="[bold cyan]R[/bold cyan]un the bot (long polling)")
def run() -> None:
    """Start the Telegram bot and poll for updates until interrupted."""
    from telegram import Update

    from .chat.transport import create_app

    s = _settings_or_exit()
    log_file = setup_bot_logging(s)
    application = create_app(s)
    console.print(f"[green]✓[/green] Bot started [dim](log: {log_file})[/dim]")
    # run_polling installs SIGINT/SIGTERM handlers and stops cleanly on them.
    application.run_polling(allowed_updates=Update.ALL_TYPES)
    logger.info("Bot stopped")


@app.command("doctor", help="[bold cyan]C[/bold cyan]heck configuration and sheet access")
def doctor() -> None:
    s = Settings()
    missing = s.missing_required()

    t = Table(title="[bold]Configuration[/bold]", show_header=False)
    t.add_column("Variable", style="bold")
    t.add_column("Value")
    for name in REQUIRED_SETTINGS:
        raw = getattr(s, name)
        if name in PLAIN_SETTINGS and raw:
            t.add_row(name, escape(str(raw)))
        else:
            t.add_row(name, _mask(raw))
    t.add_row("SHEET_BOT_WORKSHEET_INDEX", str(s.SHEET_BOT_WORKSHEET_INDEX))
    console.print(t)

    if missing:
        console.print(f"[bold red]✗ Missing:[/bold red] {', '.join(missing)}")
        raise typer.Exit(code=EXIT_CONFIG)

    try:
        headers = _repository(s).reload()
    except SourceUnavailableError as e:
        console.print(Panel.fit(
            f"[bold red]✗ Spreadsheet unavailable[/bold red]\n\n[yellow]Cause:[/yellow] {escape(str(e))}\n\n"
            "[dim]→ Share the sheet with the service account e-mail[/dim]",
            border_style="red",
            title="Error",
        ))
        raise typer.Exit(code=EXIT_SOURCE)

    console.print(f"[green]✓[/green] Spreadsheet reachable, {len(headers)} column(s)")


@app.command("columns", help="List the sheet's columns")
def columns() -> None:
    s = _settings_or_exit()
    try:
        headers = _repository(s).get_headers()
    except SourceUnavailableError as e:
        console.print(f"[red]Spreadsheet unavailable:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_SOURCE)

    if not headers:
        console.print("[yellow]No columns found.[/yellow]")
        return
    for header in headers:
        console.print(f"  {escape(header)}")


@app.command("values", help="List the unique values of a column")
def values(column: str = typer.Argument(..., help="Column name")) -> None:
    s = _settings_or_exit()
    try:
        found = _repository(s).get_unique_values(column)
    except SourceUnavailableError as e:
        console.print(f"[red]Spreadsheet unavailable:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_SOURCE)
    except ColumnNotFoundError:
        console.print(f'[red]Column "{escape(column)}" not found.[/red] Run [cyan]columns[/cyan] to list them.')
        raise typer.Exit(code=1)

    if not found:
        console.print(f'[yellow]Column "{escape(column)}" has no filled cells.[/yellow]')
        return
    for v in found:
        console.print(f"  {escape(v)}")
    console.print(f"\n[dim]{len(found)} unique value(s)[/dim]")


@app.command("find", help="Show the first row whose column matches a value")
def find(
    column: str = typer.Argument(..., help="Column name"),
    value: str = typer.Argument(..., help="Exact (trimmed, case-sensitive) cell value"),
) -> None:
    s = _settings_or_exit()
    try:
        row = _repository(s).find_row(column, value)
    except SourceUnavailableError as e:
        console.print(f"[red]Spreadsheet unavailable:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_SOURCE)
    except ColumnNotFoundError:
        console.print(f'[red]Column "{escape(column)}" not found.[/red] Run [cyan]columns[/cyan] to list them.')
        raise typer.Exit(code=1)

    if row is None:
        console.print(f'[yellow]Nothing found for "{escape(value)}".[/yellow]')
        raise typer.Exit(code=1)

    t = Table(title=f"[bold]{escape(column)} = {escape(value)}[/bold]", show_header=False)
    t.add_column("Column", style="bold")
    t.add_column("Value", style="cyan")
    for header, cell in row.items():
        t.add_row(escape(header), escape(cell))
    console.print(t)


def main():
    app()


if __name__ == "__main__":
    main()
