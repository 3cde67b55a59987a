"""Explicit startup of the render runtime."""

from dataclasses import dataclass
from pathlib import Path

from ditakit.config.settings import DitakitSettings
from ditakit.export.dita import DitaMapExporter, DocumentExporter
from ditakit.toolchain.bootstrap import (
    WorkingDirectories,
    ensure_toolchain_available,
    resolve_directories,
)
from ditakit.toolchain.processor import DitaToolchain
from ditakit.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class DitaRuntime:
    """Everything a render job needs that outlives the job.

    Create one with ``DitaRuntime.start`` at application startup and pass it
    to each ``DitaProcess``.
    """

    dirs: WorkingDirectories
    toolchain: DitaToolchain
    exporter: DocumentExporter

    @classmethod
    def start(cls, settings: DitakitSettings) -> "DitaRuntime":
        """Resolve directories and install the toolchain if it is missing.

        Safe to call repeatedly: an existing installation is left untouched.
        """
        dirs = resolve_directories(settings)
        bundle = Path(settings.bundle_archive).expanduser() if settings.bundle_archive else None
        ensure_toolchain_available(dirs.install, bundle)

        toolchain = DitaToolchain(
            install_dir=dirs.install,
            base_temp_dir=dirs.temp,
            timeout=settings.toolchain_timeout,
        )
        runtime = cls(dirs=dirs, toolchain=toolchain, exporter=DitaMapExporter(dirs.temp))
        log.info(
            "Runtime started",
            install_dir=str(dirs.install),
            transtypes=list(runtime.transtypes),
        )
        return runtime

    @property
    def transtypes(self) -> tuple[str, ...]:
        """Output formats supported by the installed toolchain."""
        return self.toolchain.transtypes
