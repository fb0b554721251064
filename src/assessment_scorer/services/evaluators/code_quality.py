"""Code Quality & Best Practices (25 points)."""

from __future__ import annotations

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis
from assessment_scorer.services.evaluators._common import finish, project_structure_score


def evaluate_end_to_end(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """End-to-End Functionality (25): layout, layout-derived quality, docs."""
    score = 0
    evidence: list[str] = []

    structure = project_structure_score(analysis.files)
    if structure >= 8:
        score += 10
        evidence.append("Well-organized project structure")
    elif structure >= 5:
        score += 6
        evidence.append("Decent project organization")
    elif structure >= 3:
        score += 3
        evidence.append("Basic project structure")

    # code_quality is on a 0-100 scale
    quality = analysis.code_analysis.code_quality
    if quality >= 70:
        score += 10
        evidence.append(f"High code quality detected ({quality}/100)")
    elif quality >= 50:
        score += 6
        evidence.append(f"Good code quality ({quality}/100)")
    elif quality >= 30:
        score += 3
        evidence.append(f"Basic code quality ({quality}/100)")

    if analysis.readme_file:
        score += 3
        evidence.append("README documentation present")
    if analysis.code_analysis.has_documentation:
        score += 2
        evidence.append("Additional documentation found")

    return finish(
        score,
        25,
        [
            (20, "Excellent end-to-end implementation"),
            (15, "Good overall implementation"),
            (10, "Basic implementation"),
        ],
        "Poor implementation quality",
        evidence,
    )
