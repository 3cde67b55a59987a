"""Isolated execution context for toolchain invocations.

The toolchain must resolve its own runtime (Java classpath, launcher
scripts, plugins) independently of the interpreter hosting ditakit. An
``ExecutionContext`` captures the environment and working directory a child
process runs with. ``isolated_context`` publishes one as the active context
for the duration of a block and always restores the previous one.
"""

import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from ditakit.config.constants import HOST_RESOLUTION_VARS
from ditakit.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """Environment and working directory handed to a child process."""

    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    cwd: Path | None = None
    name: str = "ambient"

    @classmethod
    def ambient(cls) -> "ExecutionContext":
        """The caller's own context: current environment and directory."""
        return cls(env=MappingProxyType(dict(os.environ)), cwd=Path.cwd(), name="ambient")

    @classmethod
    def isolated(
        cls,
        install_dir: Path,
        work_dir: Path,
        base_env: Mapping[str, str] | None = None,
    ) -> "ExecutionContext":
        """Build a context rooted at a toolchain installation.

        Variables through which the host runtime leaks into children are
        dropped; the toolchain home and its launcher directory take their
        place.
        """
        env = dict(os.environ if base_env is None else base_env)
        for name in HOST_RESOLUTION_VARS:
            env.pop(name, None)

        bin_dir = str(install_dir / "bin")
        path = env.get("PATH", "")
        env["PATH"] = os.pathsep.join(p for p in (bin_dir, path) if p)
        env["DITA_HOME"] = str(install_dir)

        return cls(env=MappingProxyType(env), cwd=work_dir, name="toolchain")


_active_context: ContextVar[ExecutionContext | None] = ContextVar(
    "execution_context", default=None
)


def current_context() -> ExecutionContext:
    """Return the active execution context, or the ambient one when none is set."""
    return _active_context.get() or ExecutionContext.ambient()


def active_context() -> ExecutionContext | None:
    """Return the explicitly activated context, None outside any isolated block."""
    return _active_context.get()


@contextmanager
def isolated_context(
    install_dir: Path,
    work_dir: Path,
    base_env: Mapping[str, str] | None = None,
) -> Iterator[ExecutionContext]:
    """Activate an isolated context and restore the previous one on exit.

    Restoration happens on every exit path, including exceptions raised by
    the body.

    Example:
        >>> with isolated_context(install_dir, temp_dir) as ctx:
        ...     processor.run(ctx)
    """
    context = ExecutionContext.isolated(install_dir, work_dir, base_env)
    previous = _active_context.get()
    token = _active_context.set(context)
    log.debug(
        "Execution context isolated",
        previous=previous.name if previous else "ambient",
        dita_home=context.env.get("DITA_HOME"),
        cwd=str(work_dir),
    )
    try:
        yield context
    finally:
        _active_context.reset(token)
        log.debug("Execution context restored", current=previous.name if previous else "ambient")
