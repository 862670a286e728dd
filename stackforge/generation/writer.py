"""Project directory and file writing.

Directories are never created explicitly by callers: they are implied by the
relative paths of the files written into the project.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class UnsafePathError(ValueError):
    """A relative path would resolve outside the project directory."""


def resolve_project_path(project_path: str | Path, relative_path: str) -> Path:
    """Join a POSIX relative path onto *project_path*.

    Raises:
        UnsafePathError: For absolute paths or paths containing ``..``.
    """
    pure = PurePosixPath(relative_path)
    if pure.is_absolute() or ".." in pure.parts or not pure.parts:
        raise UnsafePathError(f"Refusing to write outside the project: {relative_path!r}")
    return Path(project_path).joinpath(*pure.parts)


def ensure_project_directory(project_path: str | Path) -> Path:
    """Create the project directory if needed; an existing one is fine."""
    path = Path(project_path)
    existed = path.is_dir()
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Project directory ready", extra={"path": str(path), "existed": existed})
    return path


def write_project_file(project_path: str | Path, relative_path: str, content: str) -> Path:
    """Write *content* to *relative_path* under the project, creating parents."""
    target = resolve_project_path(project_path, relative_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote file", extra={"file": relative_path, "bytes": len(content.encode("utf-8"))})
    return target


def read_project_file(project_path: str | Path, relative_path: str) -> str:
    return resolve_project_path(project_path, relative_path).read_text(encoding="utf-8")


def remove_project_directory(project_path: str | Path) -> bool:
    """Delete the whole generated project directory.

    This is destructive and is only called from the reference-mismatch
    failure path when the mismatch policy is ``delete``.

    Returns:
        True if a directory was removed.
    """
    path = Path(project_path)
    if not path.is_dir():
        return False
    shutil.rmtree(path)
    logger.warning("Removed generated project directory", extra={"path": str(path)})
    return True
