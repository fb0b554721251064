"""The fixed scoring rubric: categories, subcategories, point budgets."""

from __future__ import annotations

from dataclasses import dataclass

from assessment_scorer.services.evaluators import Evaluator
from assessment_scorer.services.evaluators.code_quality import evaluate_end_to_end
from assessment_scorer.services.evaluators.orchestration import (
    evaluate_ai_usage,
    evaluate_code_generation_strategy,
)
from assessment_scorer.services.evaluators.prompt_quality import (
    evaluate_feature_coverage,
    evaluate_problem_solving,
    evaluate_prompt_structure,
    evaluate_technical_specification,
)
from assessment_scorer.services.evaluators.reasoning import evaluate_reasoning
from assessment_scorer.services.evaluators.system_integration import (
    evaluate_backend_api,
    evaluate_database,
    evaluate_integration_quality,
    evaluate_mobile,
)


@dataclass(frozen=True, slots=True)
class RubricItem:
    name: str
    max_score: int
    evaluator: Evaluator


@dataclass(frozen=True, slots=True)
class RubricCategory:
    name: str
    items: tuple[RubricItem, ...]

    @property
    def max_score(self) -> int:
        return sum(item.max_score for item in self.items)


RUBRIC: tuple[RubricCategory, ...] = (
    RubricCategory(
        "Prompt Quality",
        (
            RubricItem("Structure & Organization", 25, evaluate_prompt_structure),
            RubricItem("Technical Specification", 25, evaluate_technical_specification),
            RubricItem("Feature Coverage", 25, evaluate_feature_coverage),
            RubricItem("Problem-Solving Approach", 25, evaluate_problem_solving),
        ),
    ),
    RubricCategory(
        "AI Tool Orchestration",
        (
            RubricItem("Effective AI Usage", 30, evaluate_ai_usage),
            RubricItem("Code Generation Strategy", 25, evaluate_code_generation_strategy),
        ),
    ),
    RubricCategory(
        "System Integration",
        (
            RubricItem("Database", 30, evaluate_database),
            RubricItem("Backend API", 30, evaluate_backend_api),
            RubricItem("Mobile", 25, evaluate_mobile),
            RubricItem("Integration Quality", 25, evaluate_integration_quality),
        ),
    ),
    RubricCategory(
        "Code Quality & Best Practices",
        (RubricItem("End-to-End Functionality", 25, evaluate_end_to_end),),
    ),
    RubricCategory(
        "Reasoning & Decision Making",
        (RubricItem("Reasoning Documentation", 25, evaluate_reasoning),),
    ),
)

RUBRIC_MAX_SCORE: int = sum(category.max_score for category in RUBRIC)  # 315
