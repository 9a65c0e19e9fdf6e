"""Path utility helpers."""
from __future__ import annotations

from pathlib import Path
from typing import List


def normalise_path(path: Path) -> Path:
    """Return a normalised path handling Windows drive casing."""

    return Path(str(path).replace("\\", "/")).expanduser().resolve()


def split_repo_path(path: str) -> List[str]:
    """Split a repository path into its slash-delimited segments."""

    return path.split("/")


def join_repo_path(*parts: str) -> str:
    """Join repository path segments, skipping empty parts."""

    return "/".join(part for part in parts if part)
