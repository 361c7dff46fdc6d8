"""
Workspace path helpers.

Notes store files relative to the workspace root with forward slashes so a
lessons directory can be committed and shared across machines.
"""

from pathlib import Path, PurePosixPath
from typing import Optional


def to_workspace_path(path: str | Path, workspace_root: Optional[Path]) -> str:
    """
    Convert an editor path to the stored, workspace-relative form.

    Absolute paths under the root become relative; anything else is kept
    as given. Backslashes are normalized to forward slashes either way.
    """
    candidate = Path(path)
    if workspace_root is not None and candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(Path(workspace_root).resolve())
        except ValueError:
            pass
    return candidate.as_posix().replace("\\", "/")


def resolve_workspace_path(relative: str, workspace_root: Path) -> Path:
    """Resolve a stored note path against the workspace root."""
    return Path(workspace_root) / PurePosixPath(relative)
