"""Config command for configuration management."""

import typer
from rich.console import Console
from rich.table import Table

from ditakit.config import get_settings
from ditakit.config.constants import DEFAULT_CONFIG_FILE

config_app = typer.Typer(help="Configuration management.")
console = Console()


def _or_fallback(value: str) -> str:
    return value or "[dim](system temp fallback)[/dim]"


@config_app.command("show")
def show() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print("\n[bold blue]Current Configuration[/bold blue]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Install Directory", _or_fallback(settings.install_dir))
    table.add_row("Output Directory", _or_fallback(settings.output_dir))
    table.add_row("Temp Directory", _or_fallback(settings.temp_dir))
    table.add_row("Bundle Archive", settings.bundle_archive or "[dim](packaged)[/dim]")
    timeout = settings.toolchain_timeout
    table.add_row("Toolchain Timeout", f"{timeout}s" if timeout else "none")
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Format", settings.log_format)
    table.add_row("Log Directory", settings.log_dir)

    console.print(table)
    console.print(f"\n[dim]Settings are read from DITAKIT_* variables and {DEFAULT_CONFIG_FILE}[/dim]\n")
