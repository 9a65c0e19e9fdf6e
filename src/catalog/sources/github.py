"""GitHub REST API backed repository source."""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from utils.config import AppConfig
from utils.logging import get_logger

from ..errors import SourceError
from ..schema import RootEntry, TreeEntry
from .base import RepositorySource

LOGGER = get_logger(__name__)

USER_AGENT = "cdn-catalog updater"


class GitHubSource(RepositorySource):
    """List trees through the git data API and fetch files from the raw host."""

    def __init__(self, config: AppConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self.raw_base = config.raw_base or ""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=self._headers(),
            follow_redirects=True,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        token = os.environ.get(self.config.token_env, "").strip()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.config.owner}/{self.config.repo}"

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise SourceError(f"Request to {url} failed: {exc}") from exc
        if response.status_code >= 400:
            raise SourceError(f"HTTP {response.status_code} for {url}: {response.text[:200]}")
        return response

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.config.api_base.rstrip('/')}{path}"
        response = await self._get(url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(f"Invalid JSON from {url}: {exc}") from exc

    async def get_top_level_entries(self) -> List[RootEntry]:
        payload = await self._get_json(f"{self._repo_path}/contents/", params={"ref": self.config.ref})
        if not isinstance(payload, list):
            raise SourceError("Top-level contents listing is not a list")
        try:
            return [RootEntry.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise SourceError(f"Malformed top-level entry: {exc}") from exc

    async def get_tree(self, sha: str, recursive: bool = False) -> List[TreeEntry]:
        params = {"recursive": 1} if recursive else None
        payload = await self._get_json(f"{self._repo_path}/git/trees/{sha}", params=params)
        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise SourceError(f"Missing tree for {sha}")
        if isinstance(payload, dict) and payload.get("truncated"):
            LOGGER.warning("Tree %s was truncated by the API", sha)
        try:
            return [TreeEntry.model_validate(item) for item in tree]
        except ValidationError as exc:
            raise SourceError(f"Malformed tree entry in {sha}: {exc}") from exc

    async def fetch_raw(self, url: str) -> bytes:
        response = await self._get(url)
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
