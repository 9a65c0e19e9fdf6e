"""Repository sources a catalog can be built from."""
from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict

from utils.config import AppConfig
from utils.logging import get_logger

from .base import RepositorySource
from .github import GitHubSource

LOGGER = get_logger(__name__)
SOURCE_ENTRYPOINT_GROUP = "cdn_catalog.sources"

SourceFactory = Callable[[AppConfig], RepositorySource]

BUILTIN_SOURCES: Dict[str, SourceFactory] = {"jsdelivr": GitHubSource}


def available_sources() -> Dict[str, SourceFactory]:
    """Return built-in sources plus those registered as entry-point plugins."""

    sources = dict(BUILTIN_SOURCES)
    for ep in metadata.entry_points().select(group=SOURCE_ENTRYPOINT_GROUP):
        try:
            sources[ep.name] = ep.load()
        except Exception as exc:  # pragma: no cover - plugin safety
            LOGGER.warning("Failed to load source plugin %s: %s", ep.name, exc)
    return sources


def create_source(target: str, config: AppConfig) -> RepositorySource:
    """Instantiate the source registered for ``target``."""

    sources = available_sources()
    try:
        factory = sources[target]
    except KeyError:
        raise ValueError(f"Unknown target {target!r}; expected one of {sorted(sources)}") from None
    return factory(config)


__all__ = [
    "BUILTIN_SOURCES",
    "GitHubSource",
    "RepositorySource",
    "available_sources",
    "create_source",
]
