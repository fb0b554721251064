"""Tests for the clone strategy; git itself is replaced by an injected runner."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Sequence

import pytest

from assessment_scorer.domain.entities import FileType
from assessment_scorer.domain.exceptions import CloneFailedError
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.infrastructure.git_clone_source import (
    GitCloneSource,
    run_git,
    walk_directory,
)

URL = GitHubUrl.from_string("https://github.com/octo/voting-app")

REPO_FILES = {
    "README.md": "# Voting",
    "src/app.ts": "export const app = 1;",
    "src/api/routes.ts": "router.get('/')",
    ".git/HEAD": "ref: refs/heads/main",
    ".env": "SECRET=1",
    "node_modules/left-pad/index.js": "module.exports = 1",
    "dist/bundle.js": "built",
}


class RecordingRunner:
    """Writes a fake checkout into the clone target instead of calling git."""

    def __init__(self, error: Exception | None = None, files=REPO_FILES) -> None:
        self.error = error
        self.files = files
        self.calls: list[list[str]] = []

    async def __call__(self, args: Sequence[str], timeout: float) -> None:
        self.calls.append(list(args))
        target = Path(args[-1])
        for relative, text in self.files.items():
            path = target / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        if self.error is not None:
            raise self.error


def _drain(source: GitCloneSource):
    async def _run():
        async with source.acquire(URL) as snapshot:
            workspace = Path(snapshot.location)
            assert workspace.is_dir()
            readme = await source.read_text(snapshot, "README.md")
            return snapshot, workspace, readme

    return asyncio.run(_run())


def test_acquire_lists_repository_and_cleans_up(tmp_path: Path) -> None:
    runner = RecordingRunner()
    source = GitCloneSource(tmp_path / "work", timeout=12, runner=runner)

    snapshot, workspace, readme = _drain(source)

    assert readme == "# Voting"
    assert [f.path for f in snapshot.files] == [
        "README.md",
        "src",
        "src/api",
        "src/api/routes.ts",
        "src/app.ts",
    ]
    assert snapshot.files[1].type is FileType.DIRECTORY
    assert snapshot.files[0].extension == "md"
    assert not workspace.exists()
    assert runner.calls == [
        [
            "git", "clone", "--depth", "1", "--single-branch",
            "https://github.com/octo/voting-app.git", str(workspace),
        ]
    ]


def test_workspace_removed_when_clone_fails(tmp_path: Path) -> None:
    root = tmp_path / "work"
    source = GitCloneSource(root, runner=RecordingRunner(CloneFailedError("fatal: nope")))

    with pytest.raises(CloneFailedError, match="Failed to clone repository .*fatal: nope"):
        _drain(source)

    assert list(root.iterdir()) == []


def test_workspace_removed_when_caller_raises(tmp_path: Path) -> None:
    root = tmp_path / "work"
    source = GitCloneSource(root, runner=RecordingRunner())

    async def _run():
        async with source.acquire(URL):
            raise KeyError("caller")

    with pytest.raises(KeyError):
        asyncio.run(_run())

    assert list(root.iterdir()) == []


def test_workspaces_are_unique(tmp_path: Path) -> None:
    source = GitCloneSource(tmp_path)

    paths = {source.new_workspace() for _ in range(50)}

    assert len(paths) == 50
    assert all(p.parent == tmp_path and p.name.startswith("repo-") for p in paths)


def test_read_text_refuses_paths_outside_workspace(tmp_path: Path) -> None:
    (tmp_path / "secret.txt").write_text("top secret")
    source = GitCloneSource(tmp_path / "work", runner=RecordingRunner())

    async def _run():
        async with source.acquire(URL) as snapshot:
            return (
                await source.read_text(snapshot, "../../secret.txt"),
                await source.read_text(snapshot, "missing.txt"),
            )

    assert asyncio.run(_run()) == (None, None)


def test_walk_directory_skips_hidden_and_build_dirs(tmp_path: Path) -> None:
    for relative in ("a/.hidden/x.py", "a/b.py", "build/out.js", ".github/ci.yml", "c"):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x")

    assert [f.path for f in walk_directory(tmp_path)] == ["a", "a/b.py", "c"]


def test_run_git_missing_executable() -> None:
    with pytest.raises(CloneFailedError, match="Could not start git"):
        asyncio.run(run_git(["definitely-not-a-real-git-binary", "--version"], 5))


def test_run_git_nonzero_exit_carries_stderr() -> None:
    args = [sys.executable, "-c", "import sys; sys.stderr.write('fatal: bad'); sys.exit(128)"]

    with pytest.raises(CloneFailedError, match="fatal: bad"):
        asyncio.run(run_git(args, 30))


def test_run_git_times_out() -> None:
    args = [sys.executable, "-c", "import time; time.sleep(5)"]

    with pytest.raises(CloneFailedError, match="timed out after 0.1s"):
        asyncio.run(run_git(args, 0.1))


def test_run_git_kills_child_when_cancelled(monkeypatch: pytest.MonkeyPatch) -> None:
    spawned = []
    real_exec = asyncio.create_subprocess_exec

    async def recording_exec(*args, **kwargs):
        proc = await real_exec(*args, **kwargs)
        spawned.append(proc)
        return proc

    monkeypatch.setattr(asyncio, "create_subprocess_exec", recording_exec)
    args = [sys.executable, "-c", "import time; time.sleep(30)"]

    async def _run():
        await asyncio.wait_for(run_git(args, 60), timeout=0.5)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(_run())

    assert len(spawned) == 1
    assert spawned[0].returncode is not None
