"""Score-repository use case: the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`RepositorySource` port, the structural analyzer and the pure
rubric evaluators.  The interface layer injects the concrete source at runtime.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Sequence

from assessment_scorer.domain.entities import (
    CategoryScore,
    RepositoryAnalysis,
    ScoringReport,
    SubcategoryScore,
)
from assessment_scorer.domain.exceptions import AssessmentScorerError
from assessment_scorer.domain.ports.repository_source import RepositorySource
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.services.rubric import RUBRIC, RubricCategory
from assessment_scorer.services.structural_analyzer import StructuralAnalyzer

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 8
CATEGORY_RECOMMENDATION_THRESHOLD = 50.0
SUBCATEGORY_RECOMMENDATION_THRESHOLD = 30.0

_LOW_TIER_ADVICE = (
    "Consider reviewing the assignment requirements more carefully",
    "Focus on documenting your AI prompting strategy",
)
_MID_TIER_ADVICE = (
    "Good progress! Focus on technical implementation details",
    "Consider adding more comprehensive testing",
)

# ── Pure pipeline ───────────────────────────────────────────────────────────


def evaluate_category(
    category: RubricCategory, analysis: RepositoryAnalysis, prompts: str | None
) -> CategoryScore:
    """Run every evaluator of *category* in rubric order."""
    subcategories: list[SubcategoryScore] = []
    for item in category.items:
        result = item.evaluator(analysis, prompts)
        subcategories.append(
            SubcategoryScore(
                name=item.name,
                score=min(max(result.score, 0.0), float(item.max_score)),
                max_score=item.max_score,
                feedback=result.feedback,
                evidence=result.evidence,
            )
        )
    return CategoryScore(category=category.name, subcategories=tuple(subcategories))


def generate_recommendations(
    categories: Sequence[CategoryScore], overall_percentage: float
) -> tuple[str, ...]:
    """Category gaps first, then weak subcategories, then generic advice; max 8."""
    recommendations: list[str] = [
        f"Improve {cat.category} ({cat.percentage:.1f}%)"
        for cat in categories
        if cat.percentage < CATEGORY_RECOMMENDATION_THRESHOLD
    ]
    recommendations.extend(
        f"Focus on {sub.name} - {sub.feedback}"
        for cat in categories
        for sub in cat.subcategories
        if sub.percentage < SUBCATEGORY_RECOMMENDATION_THRESHOLD
    )

    if overall_percentage < 40:
        recommendations.extend(_LOW_TIER_ADVICE)
    elif overall_percentage < 70:
        recommendations.extend(_MID_TIER_ADVICE)

    return tuple(recommendations[:MAX_RECOMMENDATIONS])


def build_report(
    categories: Sequence[CategoryScore], timestamp: str | None = None
) -> ScoringReport:
    max_score = sum(cat.max_score for cat in categories)
    total = sum(cat.score for cat in categories)
    percentage = total / max_score * 100 if max_score else 0.0
    return ScoringReport(
        categories=tuple(categories),
        recommendations=generate_recommendations(categories, percentage),
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
    )


def evaluate_analysis(
    analysis: RepositoryAnalysis,
    prompts: str | None,
    timestamp: str | None = None,
) -> ScoringReport:
    """Synchronous evaluator pipeline; identical inputs give identical reports."""
    categories = [evaluate_category(cat, analysis, prompts) for cat in RUBRIC]
    return build_report(categories, timestamp)


# ── Use case ────────────────────────────────────────────────────────────────


class ScoreRepositoryUseCase:
    """Orchestrates the full repository → score pipeline.

    Parameters
    ----------
    repository_source:
        Strategy that acquires a snapshot (clone or API walk).
    analyzer:
        Structural analyzer; a default instance is built when omitted.
    """

    def __init__(
        self,
        repository_source: RepositorySource,
        analyzer: StructuralAnalyzer | None = None,
    ) -> None:
        self._source = repository_source
        self._analyzer = analyzer or StructuralAnalyzer()

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(
        self, github_url: str, prompts_text: str | None = None
    ) -> ScoringReport:
        """Score one repository; acquisition errors propagate, no partial report."""
        url = GitHubUrl.from_string(github_url)
        logger.info("Starting scoring for %s", url.full_name)
        started = time.perf_counter()

        analysis = await self._analyze(url)
        logger.info(
            "Analysis of %s done. Languages: %s. Frameworks: %s",
            url.full_name,
            ", ".join(sorted(analysis.code_analysis.languages)) or "none",
            ", ".join(sorted(analysis.code_analysis.frameworks)) or "none",
        )

        prompts = prompts_text or analysis.prompts_file or None
        logger.info(
            "Prompts %s (%d characters)",
            "found" if prompts else "not found",
            len(prompts or ""),
        )

        categories = await asyncio.gather(
            *(
                asyncio.to_thread(evaluate_category, category, analysis, prompts)
                for category in RUBRIC
            )
        )
        report = build_report(categories)

        for cat in report.categories:
            logger.debug(
                "  %s: %s/%s (%.1f%%)", cat.category, cat.score, cat.max_score, cat.percentage
            )
        logger.info(
            "Scoring of %s completed in %.0f ms. Final score: %s/%s (%.1f%%)",
            url.full_name,
            (time.perf_counter() - started) * 1000,
            report.total_score,
            report.max_score,
            report.percentage,
        )
        return report

    async def score_quietly(
        self, github_url: str, prompts_text: str | None = None
    ) -> ScoringReport | None:
        """Variant for side-effect callers: failures are logged, never raised."""
        try:
            return await self.execute(github_url, prompts_text)
        except Exception:
            logger.exception("Background scoring of %s failed", github_url)
            return None

    async def score_many(
        self,
        submissions: Sequence[tuple[str, str | None]],
        concurrency: int = 4,
    ) -> list[ScoringReport | None]:
        """Rescore a batch of ``(github_url, prompts_text)`` pairs, order preserved."""
        sem = asyncio.Semaphore(concurrency)

        async def _score_one(github_url: str, prompts_text: str | None) -> ScoringReport | None:
            async with sem:
                return await self.score_quietly(github_url, prompts_text)

        return list(
            await asyncio.gather(*(_score_one(url, text) for url, text in submissions))
        )

    # ── Acquisition ─────────────────────────────────────────────────────

    async def _analyze(self, url: GitHubUrl) -> RepositoryAnalysis:
        phase = "acquisition"
        try:
            async with self._source.acquire(url) as snapshot:
                phase = "analysis"
                return await self._analyzer.analyze(self._source, snapshot)
        except AssessmentScorerError as exc:
            logger.error("Scoring %s failed during %s: %s", url.raw, phase, exc)
            raise
