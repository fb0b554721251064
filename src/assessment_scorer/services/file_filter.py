"""File filtering: decide which entries to walk and which files matter."""

from __future__ import annotations

from typing import Iterable, Sequence

from assessment_scorer.domain.entities import FileInfo

SKIP_DIRS: frozenset[str] = frozenset({"node_modules", "dist", "build"})

PROMPT_KEYWORDS: tuple[str, ...] = (
    "prompt", "ai", "claude", "gpt", "conversation", "chat",
)

# Checked in order; the first file matching any of these wins.
PREFERRED_PROMPT_KEYWORDS: tuple[str, ...] = (
    "prompts", "ai-prompts", "claude-prompts",
)

PACKAGE_MANIFEST = "package.json"

CODE_EXTENSIONS: frozenset[str] = frozenset(
    {"js", "ts", "tsx", "jsx", "py", "java", "kt", "swift"}
)

CONTENT_EXTENSIONS: frozenset[str] = CODE_EXTENSIONS | frozenset(
    {
        "go", "rs", "rb", "php", "cs", "dart", "vue", "svelte",
        "sql", "prisma", "json", "yaml", "yml",
    }
)


def should_skip(name: str) -> bool:
    """Return *True* for hidden entries and build/dependency directories."""
    return name.startswith(".") or name in SKIP_DIRS


def extension_of(name: str) -> str | None:
    """Final suffix without the dot, ``None`` when there is none."""
    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1:
        return None
    return name[dot + 1:]


def _files(entries: Iterable[FileInfo]) -> list[FileInfo]:
    return [entry for entry in entries if entry.is_file]


def find_prompts_file(files: Sequence[FileInfo]) -> FileInfo | None:
    """Best-matching AI prompt transcript, preferring explicit ``prompts`` names."""
    candidates = [
        f for f in _files(files)
        if any(keyword in f.path.lower() for keyword in PROMPT_KEYWORDS)
    ]
    if not candidates:
        return None

    for candidate in candidates:
        if any(keyword in candidate.path.lower() for keyword in PREFERRED_PROMPT_KEYWORDS):
            return candidate
    return candidates[0]


def find_readme_file(files: Sequence[FileInfo]) -> FileInfo | None:
    for f in _files(files):
        if f.path.lower().startswith("readme"):
            return f
    return None


def find_package_json(files: Sequence[FileInfo]) -> FileInfo | None:
    for f in _files(files):
        if f.path == PACKAGE_MANIFEST:
            return f
    return None


def select_content_files(
    files: Sequence[FileInfo],
    max_files: int,
    max_size_kb: int = 200,
) -> list[FileInfo]:
    """Pick the small source/config files whose text is sampled for evaluators."""
    selected: list[FileInfo] = []
    for f in _files(files):
        if len(selected) >= max_files:
            break
        if f.extension not in CONTENT_EXTENSIONS:
            continue
        if f.size > max_size_kb * 1024:
            continue
        selected.append(f)
    return selected
