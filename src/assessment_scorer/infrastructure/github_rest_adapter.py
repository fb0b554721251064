"""GitHub REST API adapter: repository metadata, directory listings and file content."""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from assessment_scorer.domain.exceptions import (
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
)
from assessment_scorer.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Thin client over the GitHub v3 contents API."""

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "assessment-scorer/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(self, url: GitHubUrl) -> dict[str, Any]:
        """GET /repos/{owner}/{repo} → raw metadata mapping."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}")
        data: dict[str, Any] = resp.json()
        return data

    async def list_directory(self, url: GitHubUrl, path: str = "") -> list[dict[str, Any]]:
        """GET /repos/{owner}/{repo}/contents/{path} → list of entries.

        A path that resolves to a single file yields an empty listing.
        """
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}/contents/{quote(path)}")
        data = resp.json()
        return data if isinstance(data, list) else []

    async def fetch_file_content(self, url: GitHubUrl, path: str) -> str | None:
        """Return the decoded text of *path*, or ``None`` when it does not exist."""
        try:
            resp = await self._api_get(f"/repos/{url.owner}/{url.repo}/contents/{quote(path)}")
        except RepositoryNotFoundError:
            return None

        data = resp.json()
        if not isinstance(data, dict) or data.get("type") != "file":
            return None
        if data.get("encoding") != "base64":
            return None

        try:
            raw = base64.b64decode(data.get("content", ""))
        except (binascii.Error, ValueError):
            logger.debug("Undecodable content for %s in %s", path, url.full_name)
            return None
        return raw.decode("utf-8", errors="replace")

    async def _api_get(self, endpoint: str) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{_GITHUB_API}{endpoint}"
        try:
            resp = await self._client.get(url, headers=self._api_headers)
        except httpx.HTTPError as exc:
            raise RepositoryUnavailableError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                f"Not found: {url}. Make sure the URL points to an accessible repository."
            )

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise RepositoryUnavailableError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )
