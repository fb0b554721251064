"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class AssessmentScorerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryUrlError(AssessmentScorerError):
    """The supplied URL cannot be decomposed into owner and repository."""


# ── Repository acquisition ──────────────────────────────────────────────────


class RepositoryUnavailableError(AssessmentScorerError):
    """The repository host could not be reached or refused the request."""


class RepositoryNotFoundError(RepositoryUnavailableError):
    """The repository does not exist or is not visible (404)."""


class RepositoryAccessDeniedError(RepositoryUnavailableError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(RepositoryUnavailableError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class CloneFailedError(AssessmentScorerError):
    """``git clone`` failed or exceeded its timeout.

    The workspace has already been removed when this is raised.
    """
