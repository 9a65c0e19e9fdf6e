from __future__ import annotations

import asyncio
from typing import Any, Callable, List

import httpx
import pytest

from catalog.errors import SourceError
from catalog.sources import GitHubSource, create_source
from utils.config import AppConfig

Handler = Callable[[httpx.Request], httpx.Response]


def _run(handler: Handler, call: Callable[[GitHubSource], Any], config: AppConfig | None = None) -> Any:
    async def go() -> Any:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with GitHubSource(config or AppConfig(), client=client) as source:
            result = await call(source)
        await client.aclose()
        return result

    return asyncio.run(go())


def test_top_level_listing_uses_contents_api() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"name": "files", "path": "files", "sha": "abc", "type": "dir", "size": 0},
                {"name": "README.md", "path": "README.md", "sha": "def", "type": "file"},
            ],
        )

    entries = _run(handler, lambda source: source.get_top_level_entries())
    assert [entry.name for entry in entries] == ["files", "README.md"]
    assert seen[0].url.path == "/repos/jsdelivr/jsdelivr/contents/"
    assert seen[0].url.params["ref"] == "master"


def test_recursive_tree_request() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"sha": "abc", "tree": [{"path": "1.0/a.js", "mode": "100644", "type": "blob", "sha": "x"}]},
        )

    entries = _run(handler, lambda source: source.get_tree("abc", recursive=True))
    assert entries[0].path == "1.0/a.js" and entries[0].is_file
    assert seen[0].url.path == "/repos/jsdelivr/jsdelivr/git/trees/abc"
    assert seen[0].url.params["recursive"] == "1"


def test_non_recursive_tree_request_has_no_recursive_flag() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"tree": []})

    assert _run(handler, lambda source: source.get_tree("root")) == []
    assert "recursive" not in seen[0].url.params


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"message": "no tree here"}),
        httpx.Response(200, text="<html>"),
        httpx.Response(404, json={"message": "Not Found"}),
        httpx.Response(200, json={"tree": [{"path": "a"}]}),
    ],
)
def test_bad_tree_responses_raise_source_error(response: httpx.Response) -> None:
    with pytest.raises(SourceError):
        _run(lambda request: response, lambda source: source.get_tree("abc", recursive=True))


def test_transport_errors_raise_source_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SourceError):
        _run(handler, lambda source: source.fetch_raw("https://raw.example.test/files/a/info.ini"))


def test_fetch_raw_returns_bytes_and_raw_url_is_absolute() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "raw.githubusercontent.com"
        return httpx.Response(200, content=b"name = jQuery\n")

    async def call(source: GitHubSource) -> bytes:
        url = source.raw_url("jquery/info.ini")
        assert url == "https://raw.githubusercontent.com/jsdelivr/jsdelivr/master/files/jquery/info.ini"
        return await source.fetch_raw(url)

    assert _run(handler, call) == b"name = jQuery\n"


def test_token_is_sent_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDN_CATALOG_TEST_TOKEN", "secret")
    source = GitHubSource(AppConfig(token_env="CDN_CATALOG_TEST_TOKEN"), client=httpx.AsyncClient())
    assert source._headers()["Authorization"] == "Bearer secret"
    asyncio.run(source._client.aclose())


def test_create_source_rejects_unknown_target() -> None:
    with pytest.raises(ValueError):
        create_source("nope", AppConfig())
