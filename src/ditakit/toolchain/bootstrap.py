"""Working directories and first-run installation of the toolchain."""

import contextlib
import importlib.resources
import shutil
import stat
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ditakit.config.constants import (
    BUNDLED_ARCHIVE,
    INSTALL_DIR_FALLBACK,
    INSTALLED_MARKER,
    OUTPUT_DIR_FALLBACK,
    RESOURCE_PACKAGE,
    TEMP_DIR_FALLBACK,
    TEMP_NAMESPACE,
)
from ditakit.config.settings import DitakitSettings
from ditakit.exceptions import BootstrapIOFailure, DirectoryCreationFailure, ToolchainUnavailable
from ditakit.utils.logging import get_logger

log = get_logger(__name__)

_COPY_BUFFER = 8192


@dataclass(frozen=True)
class WorkingDirectories:
    """Absolute, existing directories used by the render pipeline."""

    install: Path
    output: Path
    temp: Path


def configured_dir(raw: str | None, fallback_name: str) -> Path:
    """Absolute path of a configured directory, without touching the filesystem.

    A blank value falls back to ``<system tmp>/ditakit/<fallback_name>``.
    """
    raw = (raw or "").strip()
    if raw:
        return Path(raw).expanduser().absolute()
    return (Path(tempfile.gettempdir()) / TEMP_NAMESPACE / fallback_name).absolute()


def resolve_dir(raw: str | None, fallback_name: str) -> Path:
    """Resolve a configured directory, creating it when missing.

    Raises:
        DirectoryCreationFailure: If the directory cannot be created
    """
    directory = configured_dir(raw, fallback_name)

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationFailure(directory, cause=e) from e
    if not directory.is_dir():
        raise DirectoryCreationFailure(directory)
    return directory


def resolve_directories(settings: DitakitSettings) -> WorkingDirectories:
    """Resolve install, output and temp directories from settings."""
    dirs = WorkingDirectories(
        install=resolve_dir(settings.install_dir, INSTALL_DIR_FALLBACK),
        output=resolve_dir(settings.output_dir, OUTPUT_DIR_FALLBACK),
        temp=resolve_dir(settings.temp_dir, TEMP_DIR_FALLBACK),
    )
    log.debug(
        "Working directories resolved",
        install=str(dirs.install),
        output=str(dirs.output),
        temp=str(dirs.temp),
    )
    return dirs


def is_installed(install_dir: Path) -> bool:
    """True when install_dir already holds a toolchain installation."""
    return (install_dir / INSTALLED_MARKER).is_dir()


def ensure_toolchain_available(install_dir: Path, bundle: Path | None = None) -> bool:
    """Make sure a toolchain is installed, unpacking the bundled archive if needed.

    Args:
        install_dir: Target installation directory
        bundle: Archive to unpack; defaults to the one packaged with ditakit

    Returns:
        True if the archive was unpacked, False if an installation was present

    Raises:
        ToolchainUnavailable: If no installation exists and no archive is found
        BootstrapIOFailure: If a directory or file cannot be written
    """
    if is_installed(install_dir):
        log.debug("Toolchain already installed", install_dir=str(install_dir))
        return False

    with _locate_bundle(bundle) as archive:
        log.info("Unpacking bundled toolchain", archive=str(archive), install_dir=str(install_dir))
        try:
            with zipfile.ZipFile(archive) as zf:
                count = unzip(zf, install_dir)
        except zipfile.BadZipFile as e:
            raise BootstrapIOFailure(install_dir, f"corrupt archive {archive}", cause=e) from e
        except (RuntimeError, NotImplementedError) as e:
            # encrypted entries and unsupported compression methods
            raise BootstrapIOFailure(install_dir, f"unreadable archive entry: {e}", cause=e) from e
        except OSError as e:
            raise BootstrapIOFailure(install_dir, str(e), cause=e) from e

    if not is_installed(install_dir):
        raise BootstrapIOFailure(
            install_dir, f"archive has no '{INSTALLED_MARKER}' directory at its root"
        )
    log.info("Toolchain unpacked", install_dir=str(install_dir), entries=count)
    return True


def _locate_bundle(bundle: Path | None):
    """Context manager yielding a filesystem path to the toolchain archive."""
    if bundle is not None:
        if not bundle.is_file():
            raise ToolchainUnavailable(f"Toolchain archive not found: {bundle}")
        return contextlib.nullcontext(bundle)

    resource = importlib.resources.files(RESOURCE_PACKAGE).joinpath(BUNDLED_ARCHIVE)
    if not resource.is_file():
        raise ToolchainUnavailable(
            f"Bundled toolchain ({BUNDLED_ARCHIVE}) not found in {RESOURCE_PACKAGE}"
        )
    return importlib.resources.as_file(resource)


def _common_root(names: list[str]) -> str | None:
    """The single top-level directory shared by all entries, if there is one."""
    roots = {PurePosixPath(name).parts[0] for name in names if PurePosixPath(name).parts}
    if len(roots) != 1:
        return None
    root = roots.pop()
    if root == INSTALLED_MARKER or not any(name.startswith(root + "/") for name in names):
        return None
    return root


def unzip(zf: zipfile.ZipFile, target_dir: Path) -> int:
    """Extract an archive entry by entry, returning the number of entries written.

    A single top-level directory shared by every entry is stripped so the
    installation lands directly in target_dir. Unix permission bits stored in
    the archive are kept so that launchers stay executable.

    Raises:
        BootstrapIOFailure: If an entry would land outside target_dir
        OSError: If a directory or file cannot be written
    """
    root = target_dir.resolve()
    infos = zf.infolist()
    strip = _common_root([info.filename for info in infos])
    written = 0

    for info in infos:
        parts = PurePosixPath(info.filename).parts
        if strip is not None:
            parts = parts[1:]
        if not parts:
            continue

        out = (root / Path(*parts)).resolve()
        if out != root and root not in out.parents:
            raise BootstrapIOFailure(target_dir, f"entry escapes install dir: {info.filename}")

        if info.is_dir():
            out.mkdir(parents=True, exist_ok=True)
            continue

        out.parent.mkdir(parents=True, exist_ok=True)
        with zf.open(info) as src, open(out, "wb") as dst:
            shutil.copyfileobj(src, dst, _COPY_BUFFER)

        mode = (info.external_attr >> 16) & 0o777
        if mode & stat.S_IXUSR:
            out.chmod(mode)
        written += 1

    return written
