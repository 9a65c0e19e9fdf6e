"""Base interface for remote repositories the catalog is built from."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List
from urllib.parse import quote, urljoin

from ..schema import RootEntry, TreeEntry


class RepositorySource(ABC):
    """Abstract base class for repository listing and raw file access.

    Every remote failure must surface as :class:`~catalog.errors.SourceError`.
    """

    raw_base: str = ""

    @abstractmethod
    async def get_top_level_entries(self) -> List[RootEntry]:
        """Return the repository's top-level directory listing."""

    @abstractmethod
    async def get_tree(self, sha: str, recursive: bool = False) -> List[TreeEntry]:
        """Return the tree identified by ``sha``, optionally fully recursive."""

    @abstractmethod
    async def fetch_raw(self, url: str) -> bytes:
        """Download the raw bytes at the absolute ``url``."""

    def raw_url(self, path: str) -> str:
        """Return the absolute raw URL of ``path`` under the libraries root."""

        return urljoin(self.raw_base, quote(path))

    async def aclose(self) -> None:
        """Release any held connections."""

    async def __aenter__(self) -> "RepositorySource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
