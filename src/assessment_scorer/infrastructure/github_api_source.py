"""API strategy: walk the GitHub contents API without cloning."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from assessment_scorer.domain.entities import FileInfo, FileType, RepositorySnapshot
from assessment_scorer.domain.exceptions import RepositoryUnavailableError
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.infrastructure.github_rest_adapter import GitHubRestAdapter
from assessment_scorer.services.file_filter import extension_of, should_skip

logger = logging.getLogger(__name__)


class GitHubApiSource:
    """``RepositorySource`` backed by recursive contents-API listings.

    Subject to the API rate limit: one request per directory plus one per
    file read.  A failing subdirectory is treated as empty; only failures
    on the repository itself (metadata or root listing) abort the walk.
    """

    def __init__(self, adapter: GitHubRestAdapter) -> None:
        self._adapter = adapter

    @asynccontextmanager
    async def acquire(self, url: GitHubUrl) -> AsyncIterator[RepositorySnapshot]:
        await self._adapter.fetch_metadata(url)
        root_listing = await self._adapter.list_directory(url, "")

        files: list[FileInfo] = []
        await self._walk(url, "", root_listing, files)
        logger.info("Listed %d entries from %s via API", len(files), url.full_name)
        yield RepositorySnapshot(location=url.full_name, files=tuple(files))

    async def read_text(self, snapshot: RepositorySnapshot, path: str) -> str | None:
        owner, _, repo = snapshot.location.partition("/")
        url = GitHubUrl(owner=owner, repo=repo, raw=snapshot.location)
        return await self._adapter.fetch_file_content(url, path)

    async def _walk(
        self,
        url: GitHubUrl,
        base: str,
        listing: list[dict[str, object]],
        files: list[FileInfo],
    ) -> None:
        for item in sorted(listing, key=lambda i: str(i.get("name", ""))):
            name = str(item.get("name", ""))
            if not name or should_skip(name):
                continue
            relative = f"{base}/{name}" if base else name
            kind = item.get("type")

            if kind == "dir":
                files.append(FileInfo(path=relative, type=FileType.DIRECTORY))
                try:
                    sub_listing = await self._adapter.list_directory(url, relative)
                except RepositoryUnavailableError as exc:
                    logger.warning(
                        "Error walking %s in %s: %s, treating as empty",
                        relative, url.full_name, exc,
                    )
                    continue
                await self._walk(url, relative, sub_listing, files)
            elif kind == "file":
                size = item.get("size")
                files.append(
                    FileInfo(
                        path=relative,
                        type=FileType.FILE,
                        size=size if isinstance(size, int) else 0,
                        extension=extension_of(name),
                    )
                )
