"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from ditakit.config import DitakitSettings, get_settings
from ditakit.exceptions import DitakitError
from ditakit.utils.logging import get_logger, setup_task_logging

log = get_logger(__name__)


def load_settings(
    install_dir: Path | None = None,
    output_dir: Path | None = None,
    temp_dir: Path | None = None,
) -> DitakitSettings:
    """Settings from env/YAML with command line directory overrides applied."""
    settings = get_settings()
    overrides = {
        key: str(value)
        for key, value in (
            ("install_dir", install_dir),
            ("output_dir", output_dir),
            ("temp_dir", temp_dir),
        )
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def start_task(settings: DitakitSettings, prefix: str, verbose: bool) -> str:
    """Configure task logging and record the effective configuration."""
    task_id, log_path = setup_task_logging(
        settings.log_dir,
        prefix=prefix,
        verbose=verbose,
        json_format=settings.log_format == "json",
    )
    if verbose:
        log.info("Logs will be saved to", log_file=str(log_path))
    log.info("Task Configuration", task_id=task_id, config=settings.model_dump())
    return task_id


def fail(console: Console, error: DitakitError) -> NoReturn:
    """Report a domain error and exit with status 1."""
    log.error("Task failed", error=str(error), error_type=type(error).__name__)
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1) from error
