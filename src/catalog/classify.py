"""Classification of flat repository paths into library, version and asset facts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from utils.paths import split_repo_path

DEFAULT_METADATA_FILENAME = "info.ini"


@dataclass(frozen=True, slots=True)
class MetadataRef:
    """``<library>/<metadata file>``: the per-library info file."""

    library: str
    source_path: str


@dataclass(frozen=True, slots=True)
class AssetRef:
    """``<library>/<version>/<file...>``: one file of one published version."""

    library: str
    version: str
    relative_path: str


@dataclass(frozen=True, slots=True)
class Ignore:
    """A path carrying no catalog information, such as a stray top-level file."""

    path: str


PathFact = Union[MetadataRef, AssetRef, Ignore]


def classify_path(
    path: str,
    segments: Optional[Sequence[str]] = None,
    metadata_filename: str = DEFAULT_METADATA_FILENAME,
) -> PathFact:
    """Classify ``path`` relative to the libraries root directory.

    Callers only pass paths holding at least one ``/``; single-segment paths
    are rejected with :class:`ValueError`.
    """

    parts = list(segments) if segments is not None else split_repo_path(path)
    if len(parts) < 2:
        raise ValueError(f"path {path!r} has no directory component")
    if len(parts) == 2:
        if parts[1] == metadata_filename:
            return MetadataRef(library=parts[0], source_path=path)
        return Ignore(path=path)
    return AssetRef(library=parts[0], version=parts[1], relative_path="/".join(parts[2:]))
