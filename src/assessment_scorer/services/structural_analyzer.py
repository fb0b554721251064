"""Structural analysis: derive language, framework and layout facts from a listing.

All detectors are plain substring heuristics over relative paths, so
``contest.js`` counts as a test file.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from typing import Any, Mapping, Sequence

from assessment_scorer.domain.entities import (
    CodeAnalysis,
    FileInfo,
    MobileType,
    RepositoryAnalysis,
    RepositorySnapshot,
)
from assessment_scorer.domain.exceptions import RepositoryUnavailableError
from assessment_scorer.domain.ports.repository_source import RepositorySource
from assessment_scorer.services.file_filter import (
    CODE_EXTENSIONS,
    find_package_json,
    find_prompts_file,
    find_readme_file,
    select_content_files,
)

logger = logging.getLogger(__name__)

# ── Lookup tables ───────────────────────────────────────────────────────────

LANGUAGE_MAP: dict[str, str] = {
    "js": "JavaScript",
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "jsx": "JavaScript",
    "py": "Python",
    "java": "Java",
    "kt": "Kotlin",
    "swift": "Swift",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "go": "Go",
    "rs": "Rust",
    "php": "PHP",
    "rb": "Ruby",
    "dart": "Dart",
    "vue": "Vue.js",
    "svelte": "Svelte",
}

PACKAGE_FRAMEWORKS: dict[str, str] = {
    "react": "React",
    "next": "Next.js",
    "vue": "Vue.js",
    "angular": "Angular",
    "express": "Express",
    "fastify": "Fastify",
    "koa": "Koa",
    "nestjs": "NestJS",
    "prisma": "Prisma",
    "sequelize": "Sequelize",
    "mongoose": "Mongoose",
    "flutter": "Flutter",
    "react-native": "React Native",
}

PATH_FRAMEWORKS: dict[str, str] = {
    "flutter": "Flutter",
    "react-native": "React Native",
    "django": "Django",
    "rails": "Rails",
}

TEST_MARKERS: tuple[str, ...] = ("test", "spec", "__tests__", ".test.", ".spec.")
DOC_MARKERS: tuple[str, ...] = ("readme", "doc", "guide")

DATABASE_FRAMEWORKS = frozenset({"Prisma", "Sequelize", "Mongoose", "Django", "Rails"})
DATABASE_EXTENSIONS = frozenset({"sql", "prisma", "sqlite", "db"})
BACKEND_FRAMEWORKS = frozenset(
    {"Express", "Fastify", "Koa", "NestJS", "Next.js", "Django", "Rails"}
)
BACKEND_PATH_MARKERS: tuple[str, ...] = ("routes/", "controllers/", "api/")
CROSS_PLATFORM_FRAMEWORKS = frozenset({"Flutter", "React Native"})


# ── Pure detectors ──────────────────────────────────────────────────────────


def detect_languages(files: Sequence[FileInfo]) -> frozenset[str]:
    return frozenset(
        LANGUAGE_MAP[f.extension] for f in files if f.extension in LANGUAGE_MAP
    )


def _dependencies(package_json: Mapping[str, Any] | None) -> dict[str, Any]:
    if not isinstance(package_json, Mapping):
        return {}
    deps: dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        section = package_json.get(key)
        if isinstance(section, Mapping):
            deps.update(section)
    return deps


def detect_frameworks(
    files: Sequence[FileInfo], package_json: Mapping[str, Any] | None
) -> frozenset[str]:
    """Frameworks from manifest dependencies plus path-name signals."""
    deps = _dependencies(package_json)
    found = {name for pkg, name in PACKAGE_FRAMEWORKS.items() if deps.get(pkg)}
    for marker, name in PATH_FRAMEWORKS.items():
        if any(marker in f.path for f in files):
            found.add(name)
    return frozenset(found)


def detect_tests(files: Sequence[FileInfo]) -> bool:
    return any(marker in f.path for f in files for marker in TEST_MARKERS)


def detect_documentation(files: Sequence[FileInfo]) -> bool:
    return any(
        f.extension == "md" or any(marker in f.path.lower() for marker in DOC_MARKERS)
        for f in files
    )


def calculate_code_quality(files: Sequence[FileInfo]) -> int:
    """Additive 0-100 layout score; never reads file contents."""
    score = 0
    code_files = [f for f in files if f.is_file and f.extension in CODE_EXTENSIONS]
    ts_files = [f for f in files if f.extension in ("ts", "tsx")]

    if code_files:
        score += 30
        if len(ts_files) >= len(code_files) * 0.5:
            score += 20

    def _any(marker: str) -> bool:
        return any(marker in f.path for f in files)

    if _any("src/"):
        score += 15
    if _any("lib/"):
        score += 10
    if _any("components/"):
        score += 10
    if _any("tsconfig.json"):
        score += 5
    if _any("eslint"):
        score += 5
    if _any("prettier"):
        score += 5

    return min(score, 100)


def detect_mobile_type(files: Sequence[FileInfo], frameworks: frozenset[str]) -> MobileType:
    if frameworks & CROSS_PLATFORM_FRAMEWORKS:
        return MobileType.CROSS_PLATFORM
    if any(f.extension == "swift" or ".xcodeproj" in f.path for f in files):
        return MobileType.IOS
    if any(
        f.extension == "kt"
        or f.path.endswith("AndroidManifest.xml")
        or f.path.endswith("build.gradle")
        for f in files
    ):
        return MobileType.ANDROID
    return MobileType.NONE


def detect_database(files: Sequence[FileInfo], frameworks: frozenset[str]) -> bool:
    if frameworks & DATABASE_FRAMEWORKS:
        return True
    return any(
        f.extension in DATABASE_EXTENSIONS or "migration" in f.path.lower()
        for f in files
    )


def detect_backend_api(files: Sequence[FileInfo], frameworks: frozenset[str]) -> bool:
    if frameworks & BACKEND_FRAMEWORKS:
        return True
    return any(marker in f.path for f in files for marker in BACKEND_PATH_MARKERS)


def build_code_analysis(
    files: Sequence[FileInfo], package_json: Mapping[str, Any] | None
) -> CodeAnalysis:
    frameworks = detect_frameworks(files, package_json)
    mobile_type = detect_mobile_type(files, frameworks)
    return CodeAnalysis(
        languages=detect_languages(files),
        frameworks=frameworks,
        has_tests=detect_tests(files),
        has_documentation=detect_documentation(files),
        code_quality=calculate_code_quality(files),
        has_database=detect_database(files, frameworks),
        has_backend_api=detect_backend_api(files, frameworks),
        has_mobile_app=mobile_type is not MobileType.NONE,
        mobile_type=mobile_type,
    )


def parse_package_json(text: str | None) -> dict[str, Any] | None:
    """Parse a manifest; anything that is not a JSON object yields ``None``."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Ignoring unparsable package.json")
        return None
    return data if isinstance(data, dict) else None


# ── Analyzer ────────────────────────────────────────────────────────────────


class StructuralAnalyzer:
    """Turns a :class:`RepositorySnapshot` into a :class:`RepositoryAnalysis`.

    Parameters
    ----------
    max_content_files:
        Upper bound on files whose text is sampled into ``FileInfo.content``.
    max_file_size_kb:
        Files larger than this are never sampled.
    """

    def __init__(self, max_content_files: int = 200, max_file_size_kb: int = 200) -> None:
        self._max_content_files = max_content_files
        self._max_size_kb = max_file_size_kb

    async def analyze(
        self, source: RepositorySource, snapshot: RepositorySnapshot
    ) -> RepositoryAnalysis:
        files = snapshot.files

        prompts_info = find_prompts_file(files)
        readme_info = find_readme_file(files)
        package_info = find_package_json(files)

        prompts_text, readme_text, package_text = await asyncio.gather(
            self._read(source, snapshot, prompts_info),
            self._read(source, snapshot, readme_info),
            self._read(source, snapshot, package_info),
        )
        package_json = parse_package_json(package_text)

        sampled = await self._sample_contents(source, snapshot, files)
        if sampled:
            files = tuple(
                replace(f, content=sampled[f.path]) if f.path in sampled else f
                for f in files
            )

        return RepositoryAnalysis(
            files=files,
            prompts_file=prompts_text,
            readme_file=readme_text,
            package_json=package_json,
            code_analysis=build_code_analysis(files, package_json),
        )

    @staticmethod
    async def _read(
        source: RepositorySource, snapshot: RepositorySnapshot, info: FileInfo | None
    ) -> str | None:
        if info is None:
            return None
        return await source.read_text(snapshot, info.path)

    async def _sample_contents(
        self,
        source: RepositorySource,
        snapshot: RepositorySnapshot,
        files: Sequence[FileInfo],
    ) -> dict[str, str]:
        """Read small source files concurrently (bounded) for content-aware rules."""
        targets = select_content_files(files, self._max_content_files, self._max_size_kb)
        if not targets:
            return {}
        sem = asyncio.Semaphore(10)

        async def _read_one(info: FileInfo) -> tuple[str, str | None]:
            async with sem:
                try:
                    return info.path, await source.read_text(snapshot, info.path)
                except RepositoryUnavailableError as exc:
                    logger.warning("Skipping content of %s: %s", info.path, exc)
                    return info.path, None

        results = await asyncio.gather(*(_read_one(f) for f in targets))
        logger.debug("Sampled %d file(s) from %s", len(results), snapshot.location)
        return {path: text for path, text in results if text is not None}
