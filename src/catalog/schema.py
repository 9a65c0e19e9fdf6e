"""Pydantic models describing remote listings and the published catalog."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from utils.logging import get_logger

LOGGER = get_logger(__name__)

DIRECTORY_MODE_PREFIX = "040"
FILE_MODE_PREFIX = "100"

# Keys computed by the pipeline; metadata files cannot replace them.
COMPUTED_KEYS = frozenset({"versions", "assets", "lastversion"})


class RootEntry(BaseModel):
    """One item of the repository's top-level directory listing."""

    name: str
    sha: str
    type: str = "dir"
    path: Optional[str] = None


class TreeEntry(BaseModel):
    """One item of a git tree listing."""

    path: str
    sha: str = ""
    mode: str

    @property
    def is_directory(self) -> bool:
        return self.mode.startswith(DIRECTORY_MODE_PREFIX)

    @property
    def is_file(self) -> bool:
        return self.mode.startswith(FILE_MODE_PREFIX)


class AssetGroup(BaseModel):
    """Files published for one version, in the externally published shape."""

    version: str
    files: List[str] = Field(default_factory=list)


class LibraryRecord(BaseModel):
    """Aggregate of everything discovered for one library directory."""

    name: str
    versions: List[str] = Field(default_factory=list)
    assets: Dict[str, List[str]] = Field(default_factory=dict)
    archive_name: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)
    last_version: Optional[str] = None

    @field_validator("name")
    def validate_name(cls, value: str) -> str:
        if not value or "/" in value:
            raise ValueError(f"library name must be a single path segment; got {value!r}")
        return value

    def model_post_init(self, __context: Any) -> None:
        if not self.archive_name:
            self.archive_name = f"{self.name}.zip"

    def add_asset(self, version: str, relative_path: str) -> None:
        """Record ``relative_path`` under ``version``, registering the version once."""

        if version not in self.assets:
            self.versions.append(version)
            self.assets[version] = []
        self.assets[version].append(relative_path)

    def merge_metadata(self, values: Mapping[str, Any]) -> None:
        """Shallow-merge parsed metadata; present keys overwrite, absent keys stay."""

        for key, value in values.items():
            if key in COMPUTED_KEYS:
                LOGGER.warning("Ignoring computed key %r in metadata for %s", key, self.name)
                continue
            if key == "zip":
                self.archive_name = str(value)
            self.metadata[key] = value

    def asset_groups(self) -> List[AssetGroup]:
        return [AssetGroup(version=version, files=list(files)) for version, files in self.assets.items()]

    def as_record(self) -> Dict[str, Any]:
        """Return the JSON-serialisable mapping published for this library."""

        data: Dict[str, Any] = {
            "name": self.name,
            "versions": list(self.versions),
            "assets": [group.model_dump() for group in self.asset_groups()],
            "zip": self.archive_name,
        }
        data.update(self.metadata)
        if self.last_version is not None:
            data["lastversion"] = self.last_version
        return data


class CatalogSummary(BaseModel):
    """Aggregate summary information of a catalog."""

    total_libraries: int
    total_versions: int
    total_files: int
    with_metadata: int

    @classmethod
    def from_records(cls, records: Iterable[LibraryRecord]) -> "CatalogSummary":
        records_list = list(records)
        return cls(
            total_libraries=len(records_list),
            total_versions=sum(len(record.versions) for record in records_list),
            total_files=sum(len(files) for record in records_list for files in record.assets.values()),
            with_metadata=sum(1 for record in records_list if record.metadata),
        )

    @classmethod
    def from_published(cls, items: Iterable[Mapping[str, Any]]) -> "CatalogSummary":
        items_list = list(items)
        known = {"name", "versions", "assets", "zip", "lastversion"}
        return cls(
            total_libraries=len(items_list),
            total_versions=sum(len(item.get("versions", [])) for item in items_list),
            total_files=sum(len(group.get("files", [])) for item in items_list for group in item.get("assets", [])),
            with_metadata=sum(1 for item in items_list if set(item) - known),
        )
