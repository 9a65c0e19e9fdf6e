"""Folding of classified repository paths into per-library records."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from utils.logging import get_logger
from utils.parallel import bounded_map

from .classify import DEFAULT_METADATA_FILENAME, AssetRef, MetadataRef, classify_path
from .errors import MetadataFetchError, SourceError
from .metadata import load_metadata
from .schema import LibraryRecord
from .sources.base import RepositorySource

LOGGER = get_logger(__name__)


class CatalogBuilder:
    """Build :class:`LibraryRecord` objects from a flat list of file paths.

    Asset paths are folded locally. Metadata files are downloaded with at most
    ``metadata_concurrency`` requests in flight; any download or parse failure
    aborts the fold.
    """

    def __init__(
        self,
        source: RepositorySource,
        metadata_filename: str = DEFAULT_METADATA_FILENAME,
        metadata_concurrency: int = 4,
    ) -> None:
        if metadata_concurrency < 1:
            raise ValueError("metadata_concurrency must be >= 1")
        self.source = source
        self.metadata_filename = metadata_filename
        self.metadata_concurrency = metadata_concurrency
        self._records: Dict[str, LibraryRecord] = {}

    def _record(self, name: str) -> LibraryRecord:
        record = self._records.get(name)
        if record is None:
            record = self._records[name] = LibraryRecord(name=name)
        return record

    async def _fetch_metadata(self, ref: MetadataRef) -> Tuple[MetadataRef, Dict[str, Any]]:
        url = self.source.raw_url(ref.source_path)
        try:
            payload = await self.source.fetch_raw(url)
        except SourceError as exc:
            raise MetadataFetchError(ref.source_path, exc) from exc
        return ref, load_metadata(payload, source=ref.source_path)

    async def fold(self, paths: Iterable[str]) -> List[LibraryRecord]:
        """Return one record per library seen in ``paths``.

        Each call starts from an empty catalog, so folding the same paths
        twice gives equal results.
        """

        self._records = {}
        metadata_refs: List[MetadataRef] = []
        for path in paths:
            fact = classify_path(path, metadata_filename=self.metadata_filename)
            if isinstance(fact, AssetRef):
                self._record(fact.library).add_asset(fact.version, fact.relative_path)
            elif isinstance(fact, MetadataRef):
                self._record(fact.library)
                metadata_refs.append(fact)

        parsed = await bounded_map(self._fetch_metadata, metadata_refs, self.metadata_concurrency)
        for ref, values in parsed:
            LOGGER.debug("Merging %d metadata keys into %s", len(values), ref.library)
            self._records[ref.library].merge_metadata(values)

        return list(self._records.values())
