"""Stack resolution: preferences -> canonical stack id + reference snapshot."""

from stackforge.stack.resolver import (
    CUSTOM_STACK,
    StackResolution,
    export_reference_files,
    load_reference_files,
    official_files_dir,
    resolve_stack,
    resolve_stack_id,
)

__all__ = [
    "CUSTOM_STACK",
    "StackResolution",
    "export_reference_files",
    "load_reference_files",
    "official_files_dir",
    "resolve_stack",
    "resolve_stack_id",
]
