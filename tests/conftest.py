from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Union

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog.errors import SourceError  # noqa: E402
from catalog.schema import RootEntry, TreeEntry  # noqa: E402
from catalog.sources.base import RepositorySource  # noqa: E402

RAW_BASE = "https://raw.example.test/files/"

TreeSpec = Union[List[TreeEntry], Exception]


def tree_dir(path: str, sha: Optional[str] = None) -> TreeEntry:
    return TreeEntry(path=path, sha=sha or f"sha-{path}", mode="040000")


def tree_file(path: str) -> TreeEntry:
    return TreeEntry(path=path, sha=f"blob-{path}", mode="100644")


class FakeSource(RepositorySource):
    """In-memory repository recording how many calls run at once."""

    raw_base = RAW_BASE

    def __init__(
        self,
        libraries: Mapping[str, Union[List[str], Exception]],
        raw: Optional[Mapping[str, Union[bytes, Exception]]] = None,
        root_dir: str = "files",
        extra_root_files: Optional[List[str]] = None,
    ) -> None:
        self.root_dir = root_dir
        self.trees: Dict[str, TreeSpec] = {}
        root_tree = [tree_dir(name) for name in libraries]
        root_tree += [tree_file(name) for name in extra_root_files or []]
        self.trees["sha-root"] = root_tree
        for name, files in libraries.items():
            if isinstance(files, Exception):
                self.trees[f"sha-{name}"] = files
            else:
                self.trees[f"sha-{name}"] = [tree_file(path) for path in files]
        self.raw = {RAW_BASE + path: value for path, value in (raw or {}).items()}
        self.in_flight = 0
        self.max_in_flight = 0
        self.tree_calls: List[str] = []
        self.raw_calls: List[str] = []

    async def _enter(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    async def get_top_level_entries(self) -> List[RootEntry]:
        return [
            RootEntry(name="README.md", sha="sha-readme", type="file"),
            RootEntry(name=self.root_dir, sha="sha-root", type="dir"),
        ]

    async def get_tree(self, sha: str, recursive: bool = False) -> List[TreeEntry]:
        self.tree_calls.append(sha)
        if sha == "sha-root":
            return list(self.trees[sha])  # type: ignore[arg-type]
        await self._enter()
        try:
            spec = self.trees.get(sha)
            if spec is None:
                raise SourceError(f"Missing tree for {sha}")
            if isinstance(spec, Exception):
                raise spec
            return list(spec)
        finally:
            self.in_flight -= 1

    async def fetch_raw(self, url: str) -> bytes:
        self.raw_calls.append(url)
        await self._enter()
        try:
            value = self.raw.get(url)
            if value is None:
                raise SourceError(f"HTTP 404 for {url}")
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            self.in_flight -= 1


@pytest.fixture
def make_source() -> Callable[..., FakeSource]:
    return FakeSource
