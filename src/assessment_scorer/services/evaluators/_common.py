"""Shared helpers for rubric evaluators."""

from __future__ import annotations

from typing import Iterable, Sequence

from assessment_scorer.domain.entities import EvaluationResult, FileInfo

# (threshold, feedback) pairs, highest first.
Ladder = Sequence[tuple[float, str]]


def finish(
    score: float,
    max_score: int,
    ladder: Ladder,
    fallback: str,
    evidence: Iterable[str],
) -> EvaluationResult:
    """Clamp *score* into ``[0, max_score]`` and pick feedback from *ladder*."""
    clamped = max(0.0, min(float(score), float(max_score)))
    feedback = fallback
    for threshold, text in ladder:
        if clamped >= threshold:
            feedback = text
            break
    return EvaluationResult(score=clamped, feedback=feedback, evidence=tuple(evidence))


def missing(feedback: str) -> EvaluationResult:
    return EvaluationResult(score=0.0, feedback=feedback, evidence=())


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def any_path(files: Sequence[FileInfo], *markers: str) -> bool:
    return any(marker in f.path for f in files for marker in markers)


def content_of(f: FileInfo) -> str:
    return f.content or ""


def project_structure_score(files: Sequence[FileInfo]) -> int:
    """0-10 points for conventional top-level layout directories."""
    score = 0
    if any_path(files, "src/"):
        score += 2
    if any_path(files, "api/", "backend/"):
        score += 3
    if any_path(files, "ios/", "android/"):
        score += 3
    if any_path(files, "database/", "db/"):
        score += 2
    return score
