"""Stack resolution and reference-file loading.

Maps a :class:`~stackforge.models.Preferences` record to a canonical stack id
and loads the byte-exact reference ("official") snapshot for that id, if one
exists on disk.

An unrecognised combination is not an error: it resolves to
:data:`CUSTOM_STACK` with an empty reference set, which turns the reference
differ into a no-op for the run.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from stackforge.models import Preferences
from stackforge.utils import load_json, walk_files

logger = logging.getLogger(__name__)

CUSTOM_STACK = "custom"

# First match wins. Each rule is (stack id, substrings that must all occur in
# the lowercased frontend name).
_FRONTEND_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("nextjs", ("next",)),
    ("react-vite", ("vite", "react")),
    ("vue-vite", ("vite", "vue")),
    ("vue-basic", ("vue",)),
    ("react-basic", ("react",)),
    ("angular-cli", ("angular",)),
]

# Consulted only when no frontend rule matched (backend-only projects).
_BACKEND_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("laravel", ("laravel",)),
    ("express", ("express",)),
]


class StackResolution(BaseModel):
    """Outcome of resolving a stack: its id and reference snapshot."""

    stack_id: str
    reference_dir: Path | None = Field(default=None, description="Where the snapshot was looked up")
    reference_files: dict[str, bytes] = Field(default_factory=dict)

    @property
    def is_custom(self) -> bool:
        return self.stack_id == CUSTOM_STACK

    @property
    def has_reference(self) -> bool:
        return bool(self.reference_files)


def _match(name: str, rules: list[tuple[str, tuple[str, ...]]]) -> str | None:
    lowered = name.lower()
    for stack_id, needles in rules:
        if all(needle in lowered for needle in needles):
            return stack_id
    return None


def resolve_stack_id(preferences: Preferences) -> str:
    """Return the canonical stack id for *preferences*.

    Only the most specific frontend name is matched (the framework when one
    was chosen), case-insensitively by substring.
    """
    frontend = _match(preferences.frontend_choice, _FRONTEND_RULES)
    if frontend is not None:
        return frontend

    backend = _match(preferences.backend_choice, _BACKEND_RULES)
    if backend is not None:
        return backend

    logger.info(
        "No stack rule matched; using custom stack",
        extra={"frontend": preferences.frontend_choice, "backend": preferences.backend_choice},
    )
    return CUSTOM_STACK


def official_files_dir(stack_id: str, root: str | Path) -> Path:
    """Directory holding the reference snapshot for *stack_id*."""
    return Path(root) / stack_id


def load_reference_files(source: str | Path) -> dict[str, bytes]:
    """Load a reference snapshot as ``{posix_relative_path: raw bytes}``.

    *source* may be a directory (read recursively) or a JSON file produced by
    :func:`export_reference_files`. A missing source yields an empty mapping.
    Content is never decoded, so binary files such as icons load unchanged.
    """
    path = Path(source)
    if path.is_file() and path.suffix == ".json":
        data = load_json(path)
        return {str(k): str(v).encode("utf-8", errors="surrogateescape") for k, v in data.items()}
    if not path.is_dir():
        return {}
    return {rel: (path / rel).read_bytes() for rel in walk_files(path)}


def export_reference_files(directory: str | Path, out_file: str | Path | None = None) -> Path:
    """Serialise a reference directory to ``<directory>-files.json``.

    Bytes that are not valid UTF-8 are kept as escaped surrogates, so
    :func:`load_reference_files` restores them exactly.

    Returns:
        The path of the JSON file written.
    """
    source = Path(directory)
    target = Path(out_file) if out_file else source.with_name(f"{source.name}-files.json")
    files = {
        rel: content.decode("utf-8", errors="surrogateescape")
        for rel, content in load_reference_files(source).items()
    }
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(files, indent=2), encoding="utf-8")
    return target


def resolve_stack(
    preferences: Preferences, official_root: str | Path, *, load_reference: bool = True
) -> StackResolution:
    """Resolve the stack id and, when *load_reference* is set, its snapshot.

    Custom stacks never have a snapshot. Only filesystem reads happen here.
    """
    stack_id = resolve_stack_id(preferences)
    if stack_id == CUSTOM_STACK:
        return StackResolution(stack_id=stack_id)

    reference_dir = official_files_dir(stack_id, official_root)
    reference_files = load_reference_files(reference_dir) if load_reference else {}
    logger.info(
        "Resolved stack",
        extra={
            "stack_id": stack_id,
            "reference_dir": str(reference_dir),
            "reference_count": len(reference_files),
        },
    )
    return StackResolution(
        stack_id=stack_id,
        reference_dir=reference_dir,
        reference_files=reference_files,
    )
