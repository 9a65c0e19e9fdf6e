"""Example script showing how to run a catalog update programmatically."""
from __future__ import annotations

import asyncio
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import update_catalog  # type: ignore  # noqa: E402
from utils import AppConfig, configure_logging  # type: ignore  # noqa: E402


def main() -> None:
    configure_logging("INFO")
    config = AppConfig(output_dir=PROJECT_ROOT / "outputs" / "catalog")
    result = asyncio.run(update_catalog(config))
    print(result.summary.model_dump_json() if result.summary else "")


if __name__ == "__main__":
    main()
