"""Render and sequence commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ditakit.cli.shared import fail, load_settings, start_task
from ditakit.core.process import DitaProcess
from ditakit.core.runtime import DitaRuntime
from ditakit.core.sequence import SequenceResolver
from ditakit.exceptions import DitakitError
from ditakit.graph.loader import load_graph
from ditakit.utils.logging import get_logger

console = Console()
log = get_logger(__name__)

GraphArgument = Annotated[
    Path,
    typer.Argument(
        help="Topic graph document (YAML).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]
ProcessorOption = Annotated[
    int,
    typer.Option("--processor", "-p", help="Id of the processor configuration topic."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output."),
]


def render(
    graph_file: GraphArgument,
    processor: ProcessorOption,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for rendered files.",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = None,
    install_dir: Annotated[
        Path | None,
        typer.Option("--install-dir", help="DITA-OT installation directory.", resolve_path=True),
    ] = None,
    temp_dir: Annotated[
        Path | None,
        typer.Option("--temp-dir", help="Directory for intermediate files.", resolve_path=True),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the topic sequence of a processor configuration.

    Examples:
        ditakit render guide.yaml -p 1
        ditakit render guide.yaml -p 1 -o ./site --install-dir ~/dita-ot
    """
    settings = load_settings(install_dir=install_dir, output_dir=output, temp_dir=temp_dir)
    start_task(settings, prefix="render", verbose=verbose)

    try:
        graph = load_graph(graph_file)
        with console.status("[bold blue]Preparing DITA-OT..."):
            runtime = DitaRuntime.start(settings)
        with console.status("[bold blue]Rendering..."):
            output_dir = DitaProcess(processor, graph.id, graph, runtime).run()
    except DitakitError as e:
        fail(console, e)

    console.print(f"[green]✓[/green] Rendered to [bold]{output_dir}[/bold]")


def sequence(
    graph_file: GraphArgument,
    processor: ProcessorOption,
    verbose: VerboseOption = False,
) -> None:
    """Show the topic order a processor configuration would render."""
    settings = load_settings()
    start_task(settings, prefix="sequence", verbose=verbose)

    try:
        graph = load_graph(graph_file)
        topics = SequenceResolver(graph).resolve_sequence(processor)
    except DitakitError as e:
        fail(console, e)

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Topic", style="cyan")
    table.add_column("Title")
    for position, topic in enumerate(topics, start=1):
        table.add_row(str(position), str(topic.id), topic.value)

    console.print(table)
