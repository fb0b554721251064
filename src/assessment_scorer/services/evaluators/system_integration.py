"""System Integration (110 points): database, backend API, mobile client, glue."""

from __future__ import annotations

from assessment_scorer.domain.entities import EvaluationResult, RepositoryAnalysis
from assessment_scorer.services.evaluators._common import (
    contains_any,
    content_of,
    finish,
)

_SCHEMA_MARKERS = ("schema", "model", "migration", ".sql")
_RELATION_MARKERS_CI = ("foreign key", "references")
_RELATION_MARKERS = ("belongsTo", "hasMany", "@relation")
_API_MARKERS = ("route", "controller", "handler", "api")
_AUTH_CONTENT = ("authenticate", "jwt", "session")
_CROSS_PLATFORM_MARKERS = ("react-native", "flutter", "expo")
_MOBILE_HTTP_CLIENTS = ("URLSession", "Retrofit", "fetch")
_NATIVE_EXTENSIONS = frozenset({"swift", "kt"})


def evaluate_database(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """Database (30)."""
    files = analysis.files
    score = 0
    evidence: list[str] = []

    schema_entries = [
        f for f in files
        if contains_any(f.path, _SCHEMA_MARKERS)
        or ("prisma" in f.path and f.extension == "prisma")
    ]
    if len(schema_entries) >= 2:
        score += 12
        evidence.append(f"Found {len(schema_entries)} schema/model files")
    elif len(schema_entries) == 1:
        score += 8
        evidence.append("Found database schema definition")

    if any(
        contains_any(content_of(f).lower(), _RELATION_MARKERS_CI)
        or contains_any(content_of(f), _RELATION_MARKERS)
        for f in files
    ):
        score += 6
        evidence.append("Database includes proper relationships")

    if any(
        "database" in f.path and contains_any(f.path, ("config", "connection"))
        for f in files
    ):
        score += 6
        evidence.append("Database connection properly configured")

    if analysis.code_analysis.has_database:
        score += 6
        evidence.append("Database implementation detected")

    return finish(
        score,
        30,
        [
            (25, "Complete, well-designed database"),
            (19, "Good database with minor issues"),
            (13, "Basic database functionality"),
        ],
        "Incomplete or poor database",
        evidence,
    )


def evaluate_backend_api(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """Backend API (30)."""
    files = analysis.files
    score = 0
    evidence: list[str] = []

    api_entries = [f for f in files if contains_any(f.path, _API_MARKERS)]
    if len(api_entries) >= 4:
        score += 12
        evidence.append(f"Found {len(api_entries)} API endpoint files")
    elif len(api_entries) >= 2:
        score += 8
        evidence.append(f"Found {len(api_entries)} API endpoint files")
    elif api_entries:
        score += 4
        evidence.append("Found basic API endpoints")

    if analysis.code_analysis.has_backend_api:
        score += 6
        evidence.append("Backend API implementation detected")

    if any(
        contains_any(f.path, ("validation", "middleware")) or "validate" in content_of(f)
        for f in files
    ):
        score += 6
        evidence.append("Includes request validation")

    if any("auth" in f.path or contains_any(content_of(f), _AUTH_CONTENT) for f in files):
        score += 6
        evidence.append("Authentication implemented")

    return finish(
        score,
        30,
        [
            (25, "Production-ready API"),
            (19, "Well-implemented API"),
            (13, "Functional API with issues"),
        ],
        "Incomplete or poor API",
        evidence,
    )


def evaluate_mobile(analysis: RepositoryAnalysis, prompts: str | None) -> EvaluationResult:
    """Mobile (25): native clients are preferred over cross-platform ones."""
    files = analysis.files
    score = 0
    evidence: list[str] = []

    ios = [
        f for f in files
        if f.extension == "swift" or contains_any(f.path, (".xcodeproj", "Info.plist"))
    ]
    android = [
        f for f in files
        if f.extension in ("kt", "java") or "gradle" in f.path
    ]

    if len(ios) > 5:
        score += 15
        evidence.append(f"Native iOS app with {len(ios)} Swift files")
    elif len(android) > 5:
        score += 15
        evidence.append(f"Native Android app with {len(android)} Kotlin/Java files")
    elif ios or android:
        score += 8
        evidence.append("Basic native mobile implementation")

    if any(contains_any(f.path, _CROSS_PLATFORM_MARKERS) for f in files):
        score = max(0, score - 5)
        evidence.append("Warning: uses cross-platform framework (not native)")

    if analysis.code_analysis.has_mobile_app:
        score += 5
        evidence.append("Mobile UI components detected")

    if any(
        f.extension in _NATIVE_EXTENSIONS and contains_any(content_of(f), _MOBILE_HTTP_CLIENTS)
        for f in files
    ):
        score += 5
        evidence.append("Mobile app integrates with API")

    return finish(
        score,
        25,
        [
            (20, "Native app with good UX"),
            (15, "Functional native app"),
            (10, "Basic native app"),
        ],
        "Poor mobile implementation - non-native or incomplete",
        evidence,
    )


def evaluate_integration_quality(
    analysis: RepositoryAnalysis, prompts: str | None
) -> EvaluationResult:
    """Integration Quality (25): API calls, shared models, error handling."""
    files = analysis.files
    score = 0
    evidence: list[str] = []

    if any(
        f.extension in _NATIVE_EXTENSIONS
        and contains_any(content_of(f), ("api", "http", "request"))
        for f in files
    ):
        score += 10
        evidence.append("Mobile app makes API calls")

    model_entries = [
        f for f in files
        if "model" in f.path or contains_any(content_of(f), ("struct", "class"))
    ]
    if len(model_entries) >= 3:
        score += 8
        evidence.append("Consistent data models across layers")

    if any(contains_any(content_of(f), ("try", "catch", "error")) for f in files):
        score += 7
        evidence.append("Error handling implemented")

    return finish(
        score,
        25,
        [
            (20, "Seamless integration between components"),
            (15, "Good integration quality"),
            (10, "Basic integration"),
        ],
        "Poor or no integration",
        evidence,
    )
