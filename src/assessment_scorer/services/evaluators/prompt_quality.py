"""Prompt Quality (100 points): judged on the prompt transcript alone."""

from __future__ import annotations

import re

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis
from assessment_scorer.services.evaluators._common import contains_any, finish, missing

_HEADER_RE = re.compile(r"^#+\s|^[A-Z][A-Z\s]+:$")
_NUMBERED_RE = re.compile(r"^\d+[.)]\s")

_SETUP_WORDS = ("setup", "install", "create", "initialize", "start")
_IMPLEMENT_WORDS = ("implement", "add", "build", "develop")

_DB_TECH = ("sqlite", "postgresql", "mysql", "mongodb", "firebase", "supabase")
_API_TECH = ("express", "fastapi", "django", "rails", "nest", "spring")
_MOBILE_TECH = ("swift", "swiftui", "kotlin", "jetpack compose", "uikit", "android studio")

_FEATURES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Voting session creation", ("session", "create", "poll", "question")),
    ("Vote casting", ("vote", "cast", "submit", "choice")),
    ("Results display", ("result", "count", "tally", "display")),
    ("Duplicate prevention", ("duplicate", "prevent", "unique", "once")),
    ("User authentication", ("auth", "login", "user", "identity")),
)

_ERROR_WORDS = ("error", "fix", "debug", "issue", "problem", "handle")
_TEST_WORDS = ("test", "validate", "verify", "check", "ensure")
_PERF_WORDS = ("performance", "optimize", "efficient", "scale", "improve")
_SECURITY_WORDS = ("security", "secure", "protect", "sanitize", "validate")


def has_logical_progression(lines: list[str]) -> bool:
    """True when the first setup-style line precedes the first implementation line."""
    setup_at = implement_at = -1
    for index, line in enumerate(lines):
        lower = line.lower()
        if setup_at == -1 and contains_any(lower, _SETUP_WORDS):
            setup_at = index
        if implement_at == -1 and contains_any(lower, _IMPLEMENT_WORDS):
            implement_at = index
    return setup_at != -1 and implement_at != -1 and setup_at < implement_at


def evaluate_prompt_structure(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Structure & Organization (25)."""
    if not prompts:
        return missing("No prompts file found - missing critical documentation")

    lines = prompts.splitlines()
    lowered = [line.lower() for line in lines]
    score = 0
    evidence: list[str] = []

    has_headers = any(_HEADER_RE.match(line) for line in lines)
    has_numbering = any(_NUMBERED_RE.match(line) for line in lines)
    section_lines = sum(
        1 for line in lowered if contains_any(line, ("database", "api", "mobile"))
    )
    if has_headers or has_numbering:
        score += 8
        evidence.append("Uses clear headers or numbering for organization")
    elif section_lines >= 2:
        score += 4
        evidence.append("Shows some section organization")

    if has_logical_progression(lines):
        score += 8
        evidence.append("Logical progression from setup to implementation")

    components = [
        any(contains_any(line, ("database", "schema")) for line in lowered),
        any(contains_any(line, ("api", "backend")) for line in lowered),
        any(contains_any(line, ("mobile", "ios", "android")) for line in lowered),
    ]
    component_count = sum(components)
    score += component_count * 3
    if component_count:
        evidence.append(f"Clear separation of {component_count} components")

    return finish(
        score,
        25,
        [
            (20, "Excellent prompt structure and organization"),
            (15, "Good prompt organization"),
            (10, "Fair prompt structure"),
        ],
        "Poor organization - prompts lack clear structure",
        evidence,
    )


def evaluate_technical_specification(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Technical Specification (25)."""
    if not prompts:
        return missing("No prompts file to evaluate technical specificity")

    lower = prompts.lower()
    score = 0
    evidence: list[str] = []

    db = [tech for tech in _DB_TECH if tech in lower]
    api = [tech for tech in _API_TECH if tech in lower]
    mobile = [tech for tech in _MOBILE_TECH if tech in lower]
    score += min(10, (len(db) + len(api) + len(mobile)) * 3)
    if db:
        evidence.append(f"Specifies database: {', '.join(db)}")
    if api:
        evidence.append(f"Specifies API framework: {', '.join(api)}")
    if mobile:
        evidence.append(f"Specifies mobile platform: {', '.join(mobile)}")

    if contains_any(lower, ("model", "schema", "table")):
        score += 3
        evidence.append("Includes data model specifications")
    if contains_any(lower, ("endpoint", "route", "api")):
        score += 3
        evidence.append("Specifies API endpoints")
    if contains_any(lower, ("screen", "view", "component")):
        score += 2
        evidence.append("Mentions UI components")

    if contains_any(lower, ("auth", "security", "token")):
        score += 4
        evidence.append("Addresses authentication/security")
    if contains_any(lower, ("error", "validation", "exception")):
        score += 3
        evidence.append("Considers error handling")

    return finish(
        score,
        25,
        [
            (20, "Excellent technical specificity"),
            (15, "Good technical details"),
            (10, "Fair technical specification"),
        ],
        "Poor specification - lacks technical specifics",
        evidence,
    )


def evaluate_feature_coverage(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Feature Coverage (25), 5 points per assignment feature mentioned."""
    if not prompts:
        return missing("No prompts file to evaluate feature coverage")

    lower = prompts.lower()
    score = 0
    evidence: list[str] = []
    for name, keywords in _FEATURES:
        if contains_any(lower, keywords):
            score += 5
            evidence.append(f"Covers: {name}")

    return finish(
        score,
        25,
        [
            (20, "All features thoroughly covered"),
            (15, "Most features covered"),
            (10, "Basic features covered"),
        ],
        "Poor coverage - missing key features",
        evidence,
    )


def evaluate_problem_solving(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Problem-Solving Approach (25)."""
    if not prompts:
        return missing("No prompts file to evaluate problem-solving approach")

    lower = prompts.lower()
    score = 0
    evidence: list[str] = []

    error_hits = sum(1 for word in _ERROR_WORDS if word in lower)
    if error_hits >= 3:
        score += 7
        evidence.append("Strong focus on error handling")
    elif error_hits >= 1:
        score += 4
        evidence.append("Some error handling consideration")

    if contains_any(lower, _TEST_WORDS):
        score += 6
        evidence.append("Includes testing/validation approach")
    if contains_any(lower, _PERF_WORDS):
        score += 6
        evidence.append("Considers performance optimization")
    if contains_any(lower, _SECURITY_WORDS):
        score += 6
        evidence.append("Addresses security concerns")

    return finish(
        score,
        25,
        [
            (20, "Excellent iterative problem-solving"),
            (15, "Good problem-solving approach"),
            (10, "Basic problem-solving"),
        ],
        "Poor problem-solving - limited evidence",
        evidence,
    )
