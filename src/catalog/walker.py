"""Concurrent traversal of the remote libraries directory."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from utils.logging import get_logger
from utils.parallel import bounded_map
from utils.paths import join_repo_path

from .errors import MissingRootError, SourceError, SubtreeFetchError
from .schema import RootEntry, TreeEntry
from .sources.base import RepositorySource

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class WalkReport:
    """What a walk saw, including the library directories it had to skip."""

    directories: int = 0
    skipped: List[SubtreeFetchError] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)


class TreeWalker:
    """Enumerate every regular file below the repository's libraries directory.

    Each library directory is listed with one recursive tree call, with at most
    ``concurrency`` calls in flight. A directory whose listing fails is logged
    and left out; the walk itself still succeeds.
    """

    def __init__(self, source: RepositorySource, root_dir: str = "files", concurrency: int = 8) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.source = source
        self.root_dir = root_dir
        self.concurrency = concurrency
        self.last_report: Optional[WalkReport] = None

    async def _find_root(self) -> RootEntry:
        for entry in await self.source.get_top_level_entries():
            if entry.name == self.root_dir:
                return entry
        raise MissingRootError(self.root_dir)

    async def _list_directory(self, directory: TreeEntry) -> Optional[List[TreeEntry]]:
        try:
            entries = await self.source.get_tree(directory.sha, recursive=True)
        except SourceError as exc:
            error = SubtreeFetchError(directory.path, exc)
            LOGGER.warning("Skipping %s: %s", directory.path, exc)
            if self.last_report is not None:
                self.last_report.skipped.append(error)
            return None
        return [
            entry.model_copy(update={"path": join_repo_path(directory.path, entry.path)})
            for entry in entries
        ]

    async def walk(self) -> List[str]:
        """Return the deduplicated file paths, each holding at least one ``/``."""

        report = WalkReport()
        self.last_report = report

        root = await self._find_root()
        directories = [entry for entry in await self.source.get_tree(root.sha) if entry.is_directory]
        report.directories = len(directories)
        LOGGER.info("Listing %d library directories under %s", len(directories), self.root_dir)

        listings = await bounded_map(self._list_directory, directories, self.concurrency)

        paths: Dict[str, None] = {}
        for listing in listings:
            for entry in listing or ():
                if entry.is_file and "/" in entry.path:
                    paths[entry.path] = None
        report.paths = list(paths)
        LOGGER.info(
            "Found %d files in %d directories (%d skipped)",
            len(report.paths),
            report.directories - len(report.skipped),
            len(report.skipped),
        )
        return report.paths
