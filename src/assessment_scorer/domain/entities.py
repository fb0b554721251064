"""Domain entities: pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FileType(str, Enum):
    """Kind of entry in a repository listing."""

    FILE = "file"
    DIRECTORY = "directory"


class MobileType(str, Enum):
    """Flavour of mobile client found in a repository."""

    IOS = "ios"
    ANDROID = "android"
    CROSS_PLATFORM = "cross-platform"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class FileInfo:
    """A single entry of a repository listing (file or directory)."""

    path: str
    type: FileType
    size: int = 0
    extension: str | None = None
    content: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type is FileType.FILE


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """Point-in-time listing of a repository.

    ``location`` is the local workspace for cloned repositories or the
    ``owner/repo`` name for API walks.  Only valid inside the
    :meth:`RepositorySource.acquire` context that produced it.
    """

    location: str
    files: tuple[FileInfo, ...]


@dataclass(frozen=True, slots=True)
class CodeAnalysis:
    """Structural facts derived from the file listing."""

    languages: frozenset[str] = frozenset()
    frameworks: frozenset[str] = frozenset()
    has_tests: bool = False
    has_documentation: bool = False
    code_quality: int = 0
    has_database: bool = False
    has_backend_api: bool = False
    has_mobile_app: bool = False
    mobile_type: MobileType = MobileType.NONE


@dataclass(frozen=True, slots=True)
class RepositoryAnalysis:
    """Everything the rubric evaluators are allowed to look at."""

    files: tuple[FileInfo, ...] = ()
    prompts_file: str | None = None
    readme_file: str | None = None
    package_json: dict[str, Any] | None = None
    code_analysis: CodeAnalysis = field(default_factory=CodeAnalysis)


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Raw output of a single rubric evaluator."""

    score: float
    feedback: str
    evidence: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SubcategoryScore:
    name: str
    score: float
    max_score: int
    feedback: str
    evidence: tuple[str, ...] = ()

    @property
    def percentage(self) -> float:
        return self.score / self.max_score * 100 if self.max_score else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "feedback": self.feedback,
            "evidence": list(self.evidence),
        }


@dataclass(frozen=True, slots=True)
class CategoryScore:
    """Aggregate of one rubric category; totals are always derived."""

    category: str
    subcategories: tuple[SubcategoryScore, ...] = ()

    @property
    def score(self) -> float:
        return sum(sub.score for sub in self.subcategories)

    @property
    def max_score(self) -> int:
        return sum(sub.max_score for sub in self.subcategories)

    @property
    def percentage(self) -> float:
        return self.score / self.max_score * 100 if self.max_score else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "score": self.score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "subcategories": [sub.to_dict() for sub in self.subcategories],
        }


@dataclass(frozen=True, slots=True)
class ScoringReport:
    """The final structured output returned to the caller."""

    categories: tuple[CategoryScore, ...]
    recommendations: tuple[str, ...]
    timestamp: str

    @property
    def total_score(self) -> float:
        return sum(cat.score for cat in self.categories)

    @property
    def max_score(self) -> int:
        return sum(cat.max_score for cat in self.categories)

    @property
    def percentage(self) -> float:
        return self.total_score / self.max_score * 100 if self.max_score else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape stored alongside a candidate."""
        return {
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "categories": [cat.to_dict() for cat in self.categories],
            "recommendations": list(self.recommendations),
            "timestamp": self.timestamp,
        }
