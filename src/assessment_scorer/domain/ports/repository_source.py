"""Port: repository source: defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from assessment_scorer.domain.entities import RepositorySnapshot
from assessment_scorer.domain.value_objects import GitHubUrl


class RepositorySource(Protocol):
    """Abstract contract for acquiring a repository snapshot."""

    def acquire(self, url: GitHubUrl) -> AbstractAsyncContextManager[RepositorySnapshot]:
        """Yield a snapshot; any local resources are released on exit."""
        ...

    async def read_text(self, snapshot: RepositorySnapshot, path: str) -> str | None:
        """Return the decoded content of *path*, or ``None`` if it is absent."""
        ...
