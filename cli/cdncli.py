"""Typer-based command line interface for cdn-catalog."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
import yaml

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import CatalogError, update_catalog  # type: ignore  # noqa: E402
from catalog.report import print_libraries  # type: ignore  # noqa: E402
from catalog.schema import CatalogSummary  # type: ignore  # noqa: E402
from catalog.writer import read_catalog  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402
from utils.paths import normalise_path  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)


def _resolve_catalog(path: Path) -> Path:
    if not path.exists():
        raise typer.BadParameter(f"Catalog {path} not found")
    return path


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


@app.command()
def update(
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory for the catalog JSON file."),
    target: Optional[str] = typer.Option(None, "--target", help="Logical target name, e.g. jsdelivr."),
    config_path: Path = typer.Option(Path("cdn-catalog.yml"), "--config", help="Optional YAML configuration file."),
) -> None:
    overrides = {}
    if out is not None:
        overrides["output_dir"] = normalise_path(out)
    if target is not None:
        overrides["target"] = target
    try:
        config = load_config(config_path)
        if overrides:
            config = config.model_copy(update=overrides)
        result = asyncio.run(update_catalog(config))
    except (CatalogError, ValueError, yaml.YAMLError) as exc:
        typer.echo(f"Update failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Wrote {len(result.records)} libraries to {result.path}")


@app.command()
def summarize(catalog_path: Path = typer.Argument(..., help="Catalog JSON path.")) -> None:
    items = read_catalog(_resolve_catalog(catalog_path))
    summary = CatalogSummary.from_published(items)
    typer.echo(summary.model_dump_json(indent=2))


@app.command()
def libraries(
    catalog_path: Path = typer.Argument(..., help="Catalog JSON path."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Show at most this many libraries."),
) -> None:
    print_libraries(read_catalog(_resolve_catalog(catalog_path)), limit=limit)


if __name__ == "__main__":
    app()
