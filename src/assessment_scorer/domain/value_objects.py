"""Value objects: self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from assessment_scorer.domain.exceptions import InvalidRepositoryUrlError

_HTTPS_URL_RE = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)
_SSH_URL_RE = re.compile(
    r"^git@github\.com:(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?$"
)


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from a URL like
    ``https://github.com/psf/requests`` or ``git@github.com:psf/requests.git``.
    Rejects anything that does not match one of those shapes.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _HTTPS_URL_RE.match(url) or _SSH_URL_RE.match(url)
        if not match or match["repo"] in (".", ".."):
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"], raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def clone_url(self) -> str:
        """HTTPS clone URL; SSH input is normalised so no key is required."""
        return f"https://github.com/{self.owner}/{self.repo}.git"
