"""Tests for listing filters and special-file locators."""

from __future__ import annotations

from assessment_scorer.services.file_filter import (
    extension_of,
    find_package_json,
    find_prompts_file,
    find_readme_file,
    select_content_files,
    should_skip,
)
from tests._fixtures.builders import listing


def test_should_skip_hidden_and_build_directories() -> None:
    for name in (".git", ".env", "node_modules", "dist", "build"):
        assert should_skip(name)
    for name in ("src", "builder", "distribution", "README.md"):
        assert not should_skip(name)


def test_extension_of() -> None:
    assert extension_of("app.test.ts") == "ts"
    assert extension_of("Makefile") is None
    assert extension_of(".eslintrc") is None
    assert extension_of("trailing.") is None


def test_prompts_file_prefers_explicit_prompts_name() -> None:
    files = listing("docs/chat-log.txt", "main.py", "notes/claude-prompts.md")

    found = find_prompts_file(files)

    assert found is not None
    assert found.path == "notes/claude-prompts.md"


def test_prompts_file_falls_back_to_first_candidate() -> None:
    files = listing("README.md", "docs/gpt-session.txt", "docs/chat.txt")

    found = find_prompts_file(files)

    assert found is not None
    assert found.path == "docs/gpt-session.txt"


def test_prompts_file_ignores_directories() -> None:
    files = listing("prompts/notes.txt")
    assert find_prompts_file(files[:1]) is None


def test_readme_and_manifest_locators() -> None:
    files = listing("Readme.rst", "web/package.json", "package.json")

    readme = find_readme_file(files)
    manifest = find_package_json(files)

    assert readme is not None and readme.path == "Readme.rst"
    assert manifest is not None and manifest.path == "package.json"
    assert find_package_json(listing("web/package.json")) is None


def test_select_content_files_respects_limits() -> None:
    files = listing("a.py", "b.png", "c.ts", "d.sql", "e.go")

    selected = select_content_files(files, max_files=3)

    assert [f.path for f in selected] == ["a.py", "c.ts", "d.sql"]
    assert select_content_files(files, max_files=10, max_size_kb=0) == []
