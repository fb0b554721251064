"""API routes: thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from assessment_scorer.interface.dependencies import get_use_case
from assessment_scorer.interface.schemas import (
    ErrorResponse,
    ScoreRequest,
    ScoringReportOut,
)
from assessment_scorer.services.score_repository import ScoreRepositoryUseCase

router = APIRouter()


@router.post(
    "/score",
    response_model=ScoringReportOut,
    response_model_by_alias=True,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid GitHub URL"},
        403: {"model": ErrorResponse, "description": "Repository is private"},
        404: {"model": ErrorResponse, "description": "Repository not found"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "Repository could not be cloned or fetched"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)
async def score(
    body: ScoreRequest,
    use_case: ScoreRepositoryUseCase = Depends(get_use_case),
) -> ScoringReportOut:
    """Score a candidate's GitHub submission against the rubric."""
    report = await use_case.execute(body.github_url, body.prompts_text)
    return ScoringReportOut.from_report(report)
