from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from pydantic import ValidationError

from utils.config import AppConfig, load_config
from utils.parallel import bounded_map
from utils.paths import join_repo_path, normalise_path, split_repo_path


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yml")
    assert isinstance(config, AppConfig)
    assert config.subtree_concurrency == 8
    assert config.metadata_concurrency == 4
    assert config.raw_base == "https://raw.githubusercontent.com/jsdelivr/jsdelivr/master/files/"


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("owner: acme\nrepo: cdn\nref: main\ntarget: acme\nsubtree_concurrency: 2\n")
    config = load_config(path)
    assert config.target == "acme"
    assert config.subtree_concurrency == 2
    assert config.raw_base == "https://raw.githubusercontent.com/acme/cdn/main/files/"


def test_config_rejects_non_positive_limits() -> None:
    with pytest.raises(ValidationError):
        AppConfig(metadata_concurrency=0)


def test_config_adds_trailing_slash_to_raw_base() -> None:
    assert AppConfig(raw_base="https://mirror.test/files").raw_base == "https://mirror.test/files/"


def test_normalise_path(tmp_path: Path) -> None:
    test_path = tmp_path / "folder" / "file.txt"
    test_path.parent.mkdir(parents=True)
    test_path.write_text("data")
    resolved = normalise_path(Path(str(test_path)))
    assert resolved.exists()


def test_repo_path_helpers() -> None:
    assert split_repo_path("jquery/3.6.0/dist/jquery.js") == ["jquery", "3.6.0", "dist", "jquery.js"]
    assert join_repo_path("jquery", "", "3.6.0/dist") == "jquery/3.6.0/dist"


def test_bounded_map_preserves_order_and_limit() -> None:
    state = {"running": 0, "peak": 0}

    async def work(value: int) -> int:
        state["running"] += 1
        state["peak"] = max(state["peak"], state["running"])
        await asyncio.sleep(0.001 * (10 - value))
        state["running"] -= 1
        return value * 2

    results = asyncio.run(bounded_map(work, range(10), 3))
    assert results == [value * 2 for value in range(10)]
    assert state["peak"] == 3


def test_bounded_map_stops_after_first_failure() -> None:
    started = []

    async def work(value: int) -> int:
        started.append(value)
        await asyncio.sleep(0)
        if value == 1:
            raise RuntimeError("boom")
        return value

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(bounded_map(work, range(20), 2))
    assert len(started) < 20


def test_bounded_map_handles_empty_input_and_rejects_bad_limit() -> None:
    assert asyncio.run(bounded_map(lambda value: asyncio.sleep(0, value), [], 4)) == []
    with pytest.raises(ValueError):
        asyncio.run(bounded_map(lambda value: asyncio.sleep(0, value), [1], 0))
