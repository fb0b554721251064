"""Helpers for building listings, analyses and in-memory repository sources."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any, AsyncIterator, Mapping

from assessment_scorer.domain.entities import (
    CodeAnalysis,
    FileInfo,
    FileType,
    RepositoryAnalysis,
    RepositorySnapshot,
)
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.services.file_filter import extension_of


def listing(*paths: str, contents: Mapping[str, str] | None = None) -> tuple[FileInfo, ...]:
    """Build a listing; parent directories are added before their children."""
    contents = contents or {}
    entries: list[FileInfo] = []
    seen_dirs: set[str] = set()
    for path in paths:
        parts = path.split("/")
        for depth in range(1, len(parts)):
            directory = "/".join(parts[:depth])
            if directory not in seen_dirs:
                seen_dirs.add(directory)
                entries.append(FileInfo(path=directory, type=FileType.DIRECTORY))
        text = contents.get(path)
        entries.append(
            FileInfo(
                path=path,
                type=FileType.FILE,
                size=len(text.encode()) if text is not None else 100,
                extension=extension_of(parts[-1]),
                content=text,
            )
        )
    return tuple(entries)


def make_analysis(
    *paths: str,
    contents: Mapping[str, str] | None = None,
    prompts_file: str | None = None,
    readme_file: str | None = None,
    package_json: dict[str, Any] | None = None,
    **code_analysis: Any,
) -> RepositoryAnalysis:
    return RepositoryAnalysis(
        files=listing(*paths, contents=contents),
        prompts_file=prompts_file,
        readme_file=readme_file,
        package_json=package_json,
        code_analysis=replace(CodeAnalysis(), **code_analysis),
    )


class FakeSource:
    """In-memory ``RepositorySource`` keyed by file path."""

    def __init__(self, files: Mapping[str, str], error: Exception | None = None) -> None:
        self.files = dict(files)
        self.error = error
        self.reads: list[str] = []
        self.released = 0

    @asynccontextmanager
    async def acquire(self, url: GitHubUrl) -> AsyncIterator[RepositorySnapshot]:
        if self.error is not None:
            raise self.error
        try:
            yield RepositorySnapshot(
                location=url.full_name,
                files=listing(*self.files, contents=None),
            )
        finally:
            self.released += 1

    async def read_text(self, snapshot: RepositorySnapshot, path: str) -> str | None:
        self.reads.append(path)
        return self.files.get(path)
