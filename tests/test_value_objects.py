"""Tests for GitHub URL parsing."""

from __future__ import annotations

import pytest

from assessment_scorer.domain.exceptions import InvalidRepositoryUrlError
from assessment_scorer.domain.value_objects import GitHubUrl


@pytest.mark.parametrize(
    "raw",
    [
        "https://github.com/octo/voting-app",
        "https://github.com/octo/voting-app/",
        "https://github.com/octo/voting-app.git",
        "  https://github.com/octo/voting-app  ",
        "git@github.com:octo/voting-app.git",
    ],
)
def test_from_string_accepts_supported_shapes(raw: str) -> None:
    url = GitHubUrl.from_string(raw)

    assert url.owner == "octo"
    assert url.repo == "voting-app"
    assert url.full_name == "octo/voting-app"
    assert url.clone_url == "https://github.com/octo/voting-app.git"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "https://gitlab.com/octo/voting-app",
        "https://github.com/octo",
        "https://github.com/octo/voting-app/tree/main",
        "not a url",
    ],
)
def test_from_string_rejects_other_input(raw: str) -> None:
    with pytest.raises(InvalidRepositoryUrlError):
        GitHubUrl.from_string(raw)
