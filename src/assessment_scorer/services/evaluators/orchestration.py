"""AI Tool Orchestration (55 points)."""

from __future__ import annotations

import re

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis
from assessment_scorer.services.evaluators._common import (
    any_path,
    contains_any,
    finish,
    missing,
    project_structure_score,
)

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n+")

_CONTEXT_WORDS = ("previous", "above", "earlier", "continue", "based on", "using the")
_BUILDING_WORDS = ("now", "next", "then", "add", "modify", "update")
_MOBILE_EXTENSIONS = frozenset({"swift", "kt", "java"})


def prompt_blocks(prompts: str) -> list[str]:
    """Split a transcript into prompts on blank lines."""
    return [block for block in _BLOCK_SPLIT_RE.split(prompts) if block.strip()]


def evaluate_ai_usage(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """Effective AI Usage (30): progression, context carry-over, prompt sizing."""
    if not prompts:
        return missing("No prompts file to evaluate AI orchestration")

    blocks = prompt_blocks(prompts)
    score = 0
    evidence: list[str] = []

    if len(blocks) >= 5:
        score += 10
        evidence.append(f"Shows progressive approach with {len(blocks)} distinct prompts")
    elif len(blocks) >= 3:
        score += 7
        evidence.append(f"Moderate progression with {len(blocks)} prompts")
    elif len(blocks) >= 2:
        score += 4
        evidence.append(f"Limited progression with {len(blocks)} prompts")

    if contains_any(prompts.lower(), _CONTEXT_WORDS):
        score += 10
        evidence.append("Good context preservation across prompts")

    average = sum(len(block) for block in blocks) / len(blocks) if blocks else 0.0
    if 100 < average < 500:
        score += 10
        evidence.append("Optimal prompt sizing - not too long or short")
    elif 50 < average < 1000:
        score += 6
        evidence.append("Reasonable prompt sizing")

    return finish(
        score,
        30,
        [
            (25, "Masterful AI orchestration"),
            (19, "Effective AI usage"),
            (13, "Basic AI usage"),
        ],
        "Poor AI usage - ineffective orchestration",
        evidence,
    )


def evaluate_code_generation_strategy(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Code Generation Strategy (25): component split, iteration, layout."""
    files = analysis.files
    score = 0.0
    evidence: list[str] = []

    components = [
        any_path(files, "schema", "model", "database"),
        any_path(files, "api", "route", "controller"),
        any(f.extension in _MOBILE_EXTENSIONS for f in files),
    ]
    component_count = sum(components)
    if component_count:
        score += component_count * 3.5
        evidence.append(f"Generated {component_count} distinct components")

    if prompts and contains_any(prompts.lower(), _BUILDING_WORDS):
        score += 8
        evidence.append("Shows iterative building approach")

    structure = project_structure_score(files)
    if structure >= 7:
        score += 7
        evidence.append("Well-organized file structure")
    elif structure >= 4:
        score += 4
        evidence.append("Basic file organization")

    return finish(
        score,
        25,
        [
            (20, "Clear component-based strategy"),
            (15, "Good separation of concerns"),
            (10, "Some strategic thinking"),
        ],
        "Poor strategy - no clear component separation",
        evidence,
    )
