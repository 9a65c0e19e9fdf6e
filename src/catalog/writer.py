"""Persistence of the finished catalog as a single JSON document."""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List

from utils.logging import get_logger

from .errors import PersistenceError
from .schema import LibraryRecord

LOGGER = get_logger(__name__)


class CatalogWriter:
    """Write ``<output_dir>/<target>.json`` in one atomic step."""

    def __init__(self, output_dir: Path, target: str) -> None:
        self.output_dir = Path(output_dir)
        self.target = target
        self.path = self.output_dir / f"{target}.json"

    def write(self, records: Iterable[LibraryRecord]) -> Path:
        payload = json.dumps([record.as_record() for record in records], ensure_ascii=False)
        tmp_name = None
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.output_dir, prefix=f".{self.target}.", suffix=".tmp", delete=False
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            LOGGER.error("Failed to write %s", self.path)
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc
        return self.path


def read_catalog(path: Path) -> List[Dict[str, Any]]:
    """Load a catalog file previously written by :class:`CatalogWriter`."""

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} does not hold a catalog array")
    return data
