"""Reasoning & Decision Making (25 points)."""

from __future__ import annotations

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis
from assessment_scorer.services.evaluators._common import contains_any, finish


def evaluate_reasoning(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """Reasoning Documentation (25): decisions in the README, problems in the prompts."""
    score = 0
    evidence: list[str] = []

    if analysis.readme_file:
        readme = analysis.readme_file.lower()
        if contains_any(readme, ("chose", "selected", "decided")):
            score += 5
            evidence.append("Documents technology choices")
        if contains_any(readme, ("architecture", "structure", "design")):
            score += 5
            evidence.append("Explains architecture decisions")
        if contains_any(readme, ("trade-off", "pros", "cons")):
            score += 5
            evidence.append("Considers trade-offs")

    if prompts:
        lower = prompts.lower()
        if contains_any(lower, ("issue", "problem", "challenge")):
            score += 5
            evidence.append("Documents challenges encountered")
        if contains_any(lower, ("fix", "solve", "solution")):
            score += 5
            evidence.append("Documents solutions implemented")

    return finish(
        score,
        25,
        [
            (20, "Excellent reasoning documentation"),
            (15, "Good technical reasoning"),
            (10, "Basic reasoning trace"),
        ],
        "Poor reasoning documentation - limited or missing",
        evidence,
    )
