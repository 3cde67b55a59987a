"""DITA Open Toolkit invocation.

``DitaToolchain`` plays the role of a processor factory bound to one
installation; ``Processor`` collects the input, output directory and
transtype of a single run and executes the ``dita`` launcher.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

from ditakit.config.constants import TOOLCHAIN_CONFIGURATION_FILES, TRANSTYPES_KEY
from ditakit.exceptions import RenderFailure, ToolchainUnavailable
from ditakit.toolchain.context import ExecutionContext, current_context
from ditakit.utils.logging import get_logger

log = get_logger(__name__)


def read_properties(path: Path) -> dict[str, str]:
    """Parse a Java ``.properties`` file (comments, ``=``/``:``, line continuations)."""
    properties: dict[str, str] = {}
    pending = ""
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = pending + raw_line.strip()
        pending = ""
        if not line or line[0] in "#!":
            continue
        if line.endswith("\\") and not line.endswith("\\\\"):
            pending = line[:-1]
            continue
        separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if separators:
            split = min(separators)
            properties[line[:split].strip()] = line[split + 1 :].strip()
        else:
            properties[line] = ""
    return properties


def read_transtypes(install_dir: Path) -> tuple[str, ...]:
    """Transtypes declared by the installed plugins, empty when unknown.

    Raises:
        ToolchainUnavailable: If a configuration file exists but cannot be read
    """
    properties: dict[str, str] = {}
    found = False
    for name in TOOLCHAIN_CONFIGURATION_FILES:
        config_file = install_dir / name
        if not config_file.is_file():
            continue
        found = True
        try:
            properties.update(read_properties(config_file))
        except (OSError, UnicodeDecodeError) as e:
            raise ToolchainUnavailable(
                f"Cannot read toolchain configuration {config_file}: {e}"
            ) from e
    if not found:
        log.warning("Toolchain configuration not found", install_dir=str(install_dir))
        return ()
    value = properties.get(TRANSTYPES_KEY, "")
    return tuple(t.strip() for t in value.replace(",", ";").split(";") if t.strip())


class Processor:
    """One configured toolchain run."""

    def __init__(self, toolchain: DitaToolchain, transtype: str) -> None:
        self.toolchain = toolchain
        self.transtype = transtype
        self.input_file: Path | None = None
        self.output_dir: Path | None = None

    def set_input(self, input_file: Path) -> Processor:
        self.input_file = input_file
        return self

    def set_output_dir(self, output_dir: Path) -> Processor:
        self.output_dir = output_dir
        return self

    def build_command(self, temp_dir: Path) -> list[str]:
        if self.input_file is None or self.output_dir is None:
            raise ValueError("Processor needs both an input file and an output directory")
        return [
            str(self.toolchain.executable),
            f"--input={self.input_file}",
            f"--format={self.transtype}",
            f"--output={self.output_dir}",
            f"--temp={temp_dir}",
        ]

    def new_temp_dir(self) -> Path:
        """Create a fresh directory under the base temp dir for one run."""
        base = self.toolchain.base_temp_dir
        base.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="temp", dir=base))

    def run(self, context: ExecutionContext | None = None) -> subprocess.CompletedProcess[str]:
        """Run the toolchain and wait for it to finish.

        DITA-OT gets its own temp directory per run, so its working files
        never mix with the input document.

        Args:
            context: Environment and working directory for the child process;
                     defaults to the active context

        Raises:
            RenderFailure: If the launcher cannot be started, exits non-zero,
                           or exceeds the configured timeout
        """
        context = context or current_context()
        try:
            temp_dir = self.new_temp_dir()
        except OSError as e:
            raise RenderFailure(f"Cannot create DITA-OT temp directory: {e}", cause=e) from e
        cmd = self.build_command(temp_dir)

        log.debug("Running DITA-OT", command=" ".join(cmd), context=context.name)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                env=dict(context.env),
                cwd=context.cwd,
                timeout=self.toolchain.timeout,
            )
        except subprocess.CalledProcessError as e:
            log.error("DITA-OT exited with an error", returncode=e.returncode, stderr=e.stderr)
            raise RenderFailure(
                f"DITA-OT processing failed (exit {e.returncode}): {(e.stderr or '').strip()}",
                cause=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            log.error("DITA-OT timed out", timeout=self.toolchain.timeout)
            raise RenderFailure(
                f"DITA-OT processing timed out after {self.toolchain.timeout}s", cause=e
            ) from e
        except OSError as e:
            raise RenderFailure(f"DITA-OT could not be started: {e}", cause=e) from e

        if result.stdout:
            log.debug("DITA-OT output", stdout=result.stdout)
        return result


class DitaToolchain:
    """An installed DITA Open Toolkit."""

    def __init__(
        self,
        install_dir: Path,
        base_temp_dir: Path,
        timeout: float | None = None,
    ) -> None:
        """Bind to an installation.

        Args:
            install_dir: Toolchain home containing ``bin/`` and ``config/``
            base_temp_dir: Parent of the per-run temp directories of the toolchain
            timeout: Seconds to wait for a run; None waits indefinitely
        """
        self.install_dir = install_dir
        self.base_temp_dir = base_temp_dir
        self.timeout = timeout
        self._transtypes: tuple[str, ...] | None = None

    @property
    def executable(self) -> Path:
        """Path to the ``dita`` launcher of this installation."""
        name = "dita.bat" if sys.platform == "win32" else "dita"
        launcher = self.install_dir / "bin" / name
        if launcher.is_file():
            return launcher
        found = shutil.which(name)
        if found:
            log.warning("Launcher missing from install dir, using PATH", launcher=found)
            return Path(found)
        raise ToolchainUnavailable(f"DITA-OT launcher not found in {launcher.parent}")

    @property
    def transtypes(self) -> tuple[str, ...]:
        """Supported output formats, read once from the installation."""
        if self._transtypes is None:
            self._transtypes = read_transtypes(self.install_dir)
        return self._transtypes

    def new_processor(self, transtype: str) -> Processor:
        if self.transtypes and transtype not in self.transtypes:
            log.warning(
                "Transtype not declared by installed plugins",
                transtype=transtype,
                available=list(self.transtypes),
            )
        return Processor(self, transtype)
