"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from assessment_scorer.domain.entities import ScoringReport


class ScoreRequest(BaseModel):
    """Request body for ``POST /score``."""

    github_url: str
    prompts_text: str | None = None

    @field_validator("github_url")
    @classmethod
    def _must_be_github(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        if "github.com" not in stripped.lower():
            msg = (
                f"Invalid URL: '{stripped}'. "
                "Only GitHub repository URLs are supported."
            )
            raise ValueError(msg)
        return stripped


class SubcategoryScoreOut(BaseModel):
    name: str
    score: float
    max_score: int = Field(serialization_alias="maxScore")
    feedback: str
    evidence: list[str]


class CategoryScoreOut(BaseModel):
    category: str
    score: float
    max_score: int = Field(serialization_alias="maxScore")
    percentage: float
    subcategories: list[SubcategoryScoreOut]


class ScoringReportOut(BaseModel):
    """Successful response from ``POST /score``."""

    total_score: float = Field(serialization_alias="totalScore")
    max_score: int = Field(serialization_alias="maxScore")
    percentage: float
    categories: list[CategoryScoreOut]
    recommendations: list[str]
    timestamp: str

    @classmethod
    def from_report(cls, report: ScoringReport) -> ScoringReportOut:
        return cls(
            total_score=report.total_score,
            max_score=report.max_score,
            percentage=report.percentage,
            categories=[
                CategoryScoreOut(
                    category=cat.category,
                    score=cat.score,
                    max_score=cat.max_score,
                    percentage=cat.percentage,
                    subcategories=[
                        SubcategoryScoreOut(
                            name=sub.name,
                            score=sub.score,
                            max_score=sub.max_score,
                            feedback=sub.feedback,
                            evidence=list(sub.evidence),
                        )
                        for sub in cat.subcategories
                    ],
                )
                for cat in report.categories
            ],
            recommendations=list(report.recommendations),
            timestamp=report.timestamp,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
