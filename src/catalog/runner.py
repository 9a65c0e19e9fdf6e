"""Sequencing of a full catalog update: walk, fold, order and write."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from utils.config import AppConfig
from utils.logging import get_logger

from .builder import CatalogBuilder
from .errors import CatalogError
from .schema import CatalogSummary, LibraryRecord
from .sources import RepositorySource, create_source
from .versions import sort_descending
from .walker import TreeWalker
from .writer import CatalogWriter

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class RunConfig:
    """Where a run writes and which logical target it updates."""

    output_dir: Path = Path("./outputs/catalog")
    target: str = "jsdelivr"
    root_dir: str = "files"
    metadata_filename: str = "info.ini"
    subtree_concurrency: int = 8
    metadata_concurrency: int = 4

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        if not self.target:
            raise ValueError("target must not be empty")

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "RunConfig":
        return cls(
            output_dir=config.output_dir,
            target=config.target,
            root_dir=config.root_dir,
            metadata_filename=config.metadata_filename,
            subtree_concurrency=config.subtree_concurrency,
            metadata_concurrency=config.metadata_concurrency,
        )


@dataclass(slots=True)
class RunResult:
    path: Path
    records: List[LibraryRecord] = field(default_factory=list)
    summary: Optional[CatalogSummary] = None


def order_versions(records: List[LibraryRecord]) -> List[LibraryRecord]:
    """Sort each record's versions newest first and set its last version."""

    for record in records:
        record.versions = sort_descending(record.versions)
        record.last_version = record.versions[0] if record.versions else None
    return records


class CatalogRun:
    """Run one update against ``source``; nothing is written unless every stage succeeds."""

    def __init__(self, source: RepositorySource, config: RunConfig) -> None:
        self.source = source
        self.config = config
        self.walker = TreeWalker(source, root_dir=config.root_dir, concurrency=config.subtree_concurrency)
        self.builder = CatalogBuilder(
            source,
            metadata_filename=config.metadata_filename,
            metadata_concurrency=config.metadata_concurrency,
        )
        self.writer = CatalogWriter(config.output_dir, config.target)

    async def execute(self) -> RunResult:
        target = self.config.target
        LOGGER.info("Starting to update %s data", target)
        try:
            paths = await self.walker.walk()
            records = order_versions(await self.builder.fold(paths))
            path = self.writer.write(records)
        except CatalogError as exc:
            LOGGER.error("Failed to update %s data! %s", target, exc)
            raise
        LOGGER.info("Updated %s data (%d libraries) at %s", target, len(records), path)
        return RunResult(path=path, records=records, summary=CatalogSummary.from_records(records))


async def update_catalog(config: AppConfig) -> RunResult:
    """Open the source configured for ``config.target`` and run one update."""

    async with create_source(config.target, config) as source:
        return await CatalogRun(source, RunConfig.from_app_config(config)).execute()
