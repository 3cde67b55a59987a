"""Toolchain installation and inspection commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ditakit.cli.shared import fail, load_settings, start_task
from ditakit.config.constants import INSTALL_DIR_FALLBACK
from ditakit.exceptions import DitakitError
from ditakit.toolchain.bootstrap import (
    configured_dir,
    ensure_toolchain_available,
    is_installed,
    resolve_dir,
)
from ditakit.toolchain.processor import read_transtypes

toolchain_app = typer.Typer(help="DITA-OT installation management.")
console = Console()

InstallDirOption = Annotated[
    Path | None,
    typer.Option("--install-dir", help="DITA-OT installation directory.", resolve_path=True),
]


@toolchain_app.command("install")
def install(
    install_dir: InstallDirOption = None,
    archive: Annotated[
        Path | None,
        typer.Option(
            "--archive",
            help="Toolchain archive to unpack instead of the bundled one.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """Unpack DITA-OT into the install directory unless it is already there."""
    settings = load_settings(install_dir=install_dir)
    start_task(settings, prefix="install", verbose=False)

    bundle = archive or (Path(settings.bundle_archive) if settings.bundle_archive else None)
    try:
        target = resolve_dir(settings.install_dir, INSTALL_DIR_FALLBACK)
        with console.status("[bold blue]Unpacking DITA-OT..."):
            unpacked = ensure_toolchain_available(target, bundle)
    except DitakitError as e:
        fail(console, e)

    if unpacked:
        console.print(f"[green]✓[/green] DITA-OT installed in [bold]{target}[/bold]")
    else:
        console.print(f"[yellow]DITA-OT already installed in[/yellow] [bold]{target}[/bold]")


@toolchain_app.command("formats")
def formats(install_dir: InstallDirOption = None) -> None:
    """List the output formats (transtypes) of the installed DITA-OT."""
    settings = load_settings(install_dir=install_dir)
    target = configured_dir(settings.install_dir, INSTALL_DIR_FALLBACK)
    if not is_installed(target):
        console.print(f"[yellow]No DITA-OT installation in[/yellow] {target}")
        raise typer.Exit(1)

    try:
        transtypes = read_transtypes(target)
    except DitakitError as e:
        fail(console, e)

    if not transtypes:
        console.print(f"[yellow]No transtypes found in[/yellow] {target}")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Transtype", style="cyan")
    for transtype in transtypes:
        table.add_row(transtype)
    console.print(table)
