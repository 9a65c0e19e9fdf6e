"""Catalog package building library/version/asset catalogs from a remote repository."""

from .builder import CatalogBuilder
from .classify import AssetRef, Ignore, MetadataRef, classify_path
from .errors import (
    CatalogError,
    MetadataFetchError,
    MetadataParseError,
    MissingRootError,
    PersistenceError,
    SourceError,
    SubtreeFetchError,
)
from .runner import CatalogRun, RunConfig, RunResult, update_catalog
from .schema import CatalogSummary, LibraryRecord, RootEntry, TreeEntry
from .versions import compare_versions, sort_descending
from .walker import TreeWalker

__all__ = [
    "AssetRef",
    "CatalogBuilder",
    "CatalogError",
    "CatalogRun",
    "CatalogSummary",
    "Ignore",
    "LibraryRecord",
    "MetadataFetchError",
    "MetadataParseError",
    "MetadataRef",
    "MissingRootError",
    "PersistenceError",
    "RootEntry",
    "RunConfig",
    "RunResult",
    "SourceError",
    "SubtreeFetchError",
    "TreeEntry",
    "TreeWalker",
    "classify_path",
    "compare_versions",
    "sort_descending",
    "update_catalog",
]
