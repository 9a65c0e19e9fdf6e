"""Exception hierarchy raised while building a catalog."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for every failure reported by a catalog run."""


class SourceError(CatalogError):
    """A remote listing or raw fetch failed or returned an unusable payload."""


class MissingRootError(CatalogError):
    """The top-level directory holding the libraries is absent."""

    def __init__(self, root_dir: str) -> None:
        super().__init__(f"Repository has no top-level {root_dir!r} directory")
        self.root_dir = root_dir


class SubtreeFetchError(CatalogError):
    """Listing a single library subtree failed. Never fatal."""

    def __init__(self, directory: str, cause: BaseException) -> None:
        super().__init__(f"Failed to list {directory!r}: {cause}")
        self.directory = directory
        self.cause = cause


class MetadataFetchError(CatalogError):
    """A library metadata file could not be downloaded."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch metadata {path!r}: {cause}")
        self.path = path


class MetadataParseError(CatalogError):
    """A library metadata file could not be decoded or parsed."""


class PersistenceError(CatalogError):
    """The finished catalog could not be written."""
