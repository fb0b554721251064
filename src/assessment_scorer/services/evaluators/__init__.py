"""Rubric evaluators.

Every evaluator has the signature ``(analysis, prompts) -> EvaluationResult``
and is a pure function: no I/O, no mutation, safe to run from any thread.
"""

from __future__ import annotations

from typing import Callable, Optional

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis

Evaluator = Callable[[RepositoryAnalysis, Optional[str]], EvaluationResult]
