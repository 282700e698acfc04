"""Locate the cloc executable once per process.

Resolution order:
  1. explicit path from configuration (PYCLOC_EXECUTABLE / "executable"),
  2. a copy bundled in the package under `pycloc/bin/`,
  3. `cloc` on PATH.

A bundled copy that lives inside an archive (zip import) has no usable
filesystem path, so it is extracted to a private per-process temp directory, marked
executable and removed at interpreter exit.
"""

import atexit
import hashlib
import shutil
import stat
import sys
import tempfile
import threading
from importlib import resources
from pathlib import Path
from typing import Callable

from pycloc.config import GLOBAL_CONFIG
from pycloc.console import GLOBAL_CONSOLE
from pycloc.exceptions import ClocExecutableNotFoundError

CMD = "cloc"
BUNDLE_PACKAGE = "pycloc"
BUNDLE_DIR = "bin"


def bundled_name() -> str:
    return f"{CMD}.exe" if sys.platform == "win32" else CMD


def md5_digest(path: str | Path) -> str:
    """MD5 hex digest of a file, read in 8 KiB chunks."""
    h = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _remove_tree_quietly(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def extract_resource(
    resource,
    tmpdir: str | Path | None = None,
    register_cleanup: Callable[..., object] = atexit.register,
) -> Path:
    """Copy a packaged resource out to a private temp directory and return its path.

    Every process gets its own directory, removed at interpreter exit, so no
    process can delete or modify a copy another one is still using.
    """
    data = resource.read_bytes()
    digest = hashlib.md5(data).hexdigest()
    try:
        workdir = Path(tempfile.mkdtemp(prefix=f"{CMD}-", dir=tmpdir))
    except OSError as e:
        raise ClocExecutableNotFoundError(f"Unable to extract bundled {CMD}: {e}") from e
    register_cleanup(_remove_tree_quietly, workdir)

    target = workdir / resource.name
    try:
        target.write_bytes(data)
        _make_executable(target)
        copied = md5_digest(target)
    except OSError as e:
        raise ClocExecutableNotFoundError(f"Unable to extract bundled {CMD}: {e}") from e
    if copied != digest:
        raise ClocExecutableNotFoundError(f"Extracted {CMD} is corrupt: {target}")
    return target


def find_bundled(package: str = BUNDLE_PACKAGE, name: str | None = None) -> str | None:
    """Return a filesystem path for the bundled executable, if the package ships one."""
    name = name or bundled_name()
    try:
        resource = resources.files(package).joinpath(BUNDLE_DIR).joinpath(name)
    except ModuleNotFoundError:
        return None
    if not resource.is_file():
        return None

    # Loose file on disk: use it in place.
    if isinstance(resource, Path):
        return str(resource)
    return str(extract_resource(resource))


class ExecutableResolver:
    """Resolve-once, cache-forever lookup of the cloc executable."""

    def __init__(
        self,
        configured: Callable[[], str | None] = GLOBAL_CONFIG.get_executable,
        bundled: Callable[[], str | None] = find_bundled,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self._configured = configured
        self._bundled = bundled
        self._which = which
        self._lock = threading.Lock()
        self._path: str | None = None

    def _lookup(self) -> str:
        configured = self._configured()
        if configured:
            if not Path(configured).is_file():
                raise ClocExecutableNotFoundError(f"Configured cloc executable not found: {configured}")
            return configured

        bundled = self._bundled()
        if bundled:
            return bundled

        found = self._which(CMD)
        if found:
            return found

        raise ClocExecutableNotFoundError(
            f"Unable to locate '{CMD}': set PYCLOC_EXECUTABLE or install it on PATH"
        )

    def resolve(self) -> str:
        path = self._path
        if path is not None:
            return path
        with self._lock:
            if self._path is None:
                self._path = self._lookup()
                GLOBAL_CONSOLE.debug(f"Resolved cloc executable: {self._path}")
            return self._path


_RESOLVER = ExecutableResolver()


def executable_path() -> str:
    """Path of the cloc executable used by this process."""
    return _RESOLVER.resolve()
