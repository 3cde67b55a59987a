"""Main CLI application using Typer."""

from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from ditakit import __version__
from ditakit.cli.commands.config import config_app
from ditakit.cli.commands.render import render, sequence
from ditakit.cli.commands.toolchain import toolchain_app

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="ditakit",
    help="Render topic sequences into publications with DITA Open Toolkit.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

app.command(name="render", help="Render the topic sequence of a processor.")(render)
app.command(name="sequence", help="Show the resolved topic order.")(sequence)
app.add_typer(toolchain_app, name="toolchain")
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ditakit[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ditakit - turn an authored chain of topics into a rendered publication."""
    pass


if __name__ == "__main__":
    app()
