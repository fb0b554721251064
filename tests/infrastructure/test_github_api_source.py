"""Tests for the GitHub REST adapter and the API strategy."""

from __future__ import annotations

import asyncio
import base64

import httpx
import pytest

from assessment_scorer.domain.exceptions import (
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
)
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.infrastructure.github_api_source import GitHubApiSource
from assessment_scorer.infrastructure.github_rest_adapter import GitHubRestAdapter
from assessment_scorer.services.score_repository import ScoreRepositoryUseCase

URL = GitHubUrl.from_string("https://github.com/octo/voting-app")
BASE = "/repos/octo/voting-app"


def _file(name: str, size: int = 10) -> dict:
    return {"name": name, "type": "file", "size": size}


def _dir(name: str) -> dict:
    return {"name": name, "type": "dir"}


ROUTES = {
    BASE: httpx.Response(200, json={"full_name": "octo/voting-app"}),
    f"{BASE}/contents/": httpx.Response(
        200,
        json=[_file("README.md"), _dir("src"), _dir("node_modules"), _dir(".github"), _dir("broken")],
    ),
    f"{BASE}/contents/src": httpx.Response(200, json=[_file("app.ts", 42)]),
    f"{BASE}/contents/broken": httpx.Response(500),
    f"{BASE}/contents/README.md": httpx.Response(
        200,
        json={
            "type": "file",
            "encoding": "base64",
            "content": base64.b64encode("# Voting ✓".encode()).decode(),
        },
    ),
}


def _adapter(routes=ROUTES, token: str | None = None, seen: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return routes.get(request.url.path, httpx.Response(404))

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubRestAdapter(client, token=token)


def test_api_walk_skips_hidden_build_and_broken_dirs() -> None:
    source = GitHubApiSource(_adapter())

    async def _run():
        async with source.acquire(URL) as snapshot:
            return snapshot, await source.read_text(snapshot, "README.md")

    snapshot, readme = asyncio.run(_run())

    assert snapshot.location == "octo/voting-app"
    assert [f.path for f in snapshot.files] == ["README.md", "broken", "src", "src/app.ts"]
    assert snapshot.files[-1].size == 42
    assert readme == "# Voting ✓"


def test_api_walk_propagates_missing_repository() -> None:
    source = GitHubApiSource(_adapter(routes={}))

    async def _run():
        async with source.acquire(URL):
            pass

    with pytest.raises(RepositoryNotFoundError):
        asyncio.run(_run())


def test_fetch_file_content_missing_or_not_a_file() -> None:
    routes = {
        f"{BASE}/contents/src": httpx.Response(200, json=[_file("a.ts")]),
        f"{BASE}/contents/big.bin": httpx.Response(200, json={"type": "file", "encoding": "none"}),
    }
    adapter = _adapter(routes)

    assert asyncio.run(adapter.fetch_file_content(URL, "nope.md")) is None
    assert asyncio.run(adapter.fetch_file_content(URL, "src")) is None
    assert asyncio.run(adapter.fetch_file_content(URL, "big.bin")) is None


def test_token_is_sent_as_bearer() -> None:
    seen: list[httpx.Request] = []
    adapter = _adapter(token="ghp_example", seen=seen)

    asyncio.run(adapter.fetch_metadata(URL))

    assert seen[0].headers["Authorization"] == "Bearer ghp_example"
    assert seen[0].headers["Accept"] == "application/vnd.github.v3+json"


@pytest.mark.parametrize(
    ("response", "error"),
    [
        (httpx.Response(404), RepositoryNotFoundError),
        (httpx.Response(403, headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": "0"}), GitHubRateLimitError),
        (httpx.Response(403), RepositoryAccessDeniedError),
        (httpx.Response(429), GitHubRateLimitError),
        (httpx.Response(502), RepositoryUnavailableError),
    ],
)
def test_error_translation(response: httpx.Response, error: type) -> None:
    adapter = _adapter(routes={BASE: response})

    with pytest.raises(error):
        asyncio.run(adapter.fetch_metadata(URL))


def test_network_errors_become_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = GitHubRestAdapter(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(RepositoryUnavailableError, match="Network error"):
        asyncio.run(adapter.fetch_metadata(URL))


def _content(text: str) -> dict:
    return {"type": "file", "encoding": "base64", "content": base64.b64encode(text.encode()).decode()}


def test_rate_limited_content_sampling_still_produces_a_report() -> None:
    sources = [f"f{i}.ts" for i in range(20)]

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == BASE:
            return httpx.Response(200, json={"full_name": "octo/voting-app"})
        if path == f"{BASE}/contents/":
            return httpx.Response(200, json=[_file("README.md"), _file("prompts.md"), _dir("src")])
        if path == f"{BASE}/contents/src":
            return httpx.Response(200, json=[_file(name) for name in sources])
        if path == f"{BASE}/contents/README.md":
            return httpx.Response(200, json=_content("# Voting\nWe chose SQLite."))
        if path == f"{BASE}/contents/prompts.md":
            return httpx.Response(200, json=_content("1. Setup the database schema"))
        return httpx.Response(403, headers={"x-ratelimit-remaining": "0"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    use_case = ScoreRepositoryUseCase(GitHubApiSource(GitHubRestAdapter(client)))

    report = asyncio.run(use_case.execute("https://github.com/octo/voting-app"))

    assert report.max_score == 315
    assert report.categories[0].score > 0


def test_paths_are_percent_encoded() -> None:
    seen: list[httpx.Request] = []
    adapter = _adapter(routes={}, seen=seen)

    assert asyncio.run(adapter.fetch_file_content(URL, "docs#old/what?.md")) is None
    with pytest.raises(RepositoryNotFoundError):
        asyncio.run(adapter.list_directory(URL, "docs#old"))

    assert [r.url.raw_path for r in seen] == [
        b"/repos/octo/voting-app/contents/docs%23old/what%3F.md",
        b"/repos/octo/voting-app/contents/docs%23old",
    ]
