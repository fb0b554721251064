"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from assessment_scorer.domain.ports.repository_source import RepositorySource
from assessment_scorer.infrastructure.config import Settings, get_settings
from assessment_scorer.infrastructure.git_clone_source import GitCloneSource
from assessment_scorer.infrastructure.github_api_source import GitHubApiSource
from assessment_scorer.infrastructure.github_rest_adapter import GitHubRestAdapter
from assessment_scorer.services.score_repository import ScoreRepositoryUseCase
from assessment_scorer.services.structural_analyzer import StructuralAnalyzer

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources; called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def build_repository_source(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> RepositorySource:
    """Pick the acquisition strategy named by ``REPOSITORY_STRATEGY``."""
    if settings.repository_strategy == "api":
        assert client is not None, "the API strategy needs an HTTP client"
        token = settings.github_token.get_secret_value() if settings.github_token else None
        return GitHubApiSource(GitHubRestAdapter(client=client, token=token))
    return GitCloneSource(
        workspace_root=settings.clone_workspace_dir,
        timeout=settings.clone_timeout_seconds,
        git_executable=settings.git_executable,
    )


def get_use_case() -> ScoreRepositoryUseCase:
    """Build the use case with the configured repository source."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    return ScoreRepositoryUseCase(
        repository_source=build_repository_source(settings, _http_client),
        analyzer=StructuralAnalyzer(
            max_content_files=settings.max_content_files,
            max_file_size_kb=settings.max_file_size_kb,
        ),
    )
