"""Clone strategy: shallow ``git clone`` into a disposable workspace."""

from __future__ import annotations

import asyncio
import logging
import os
import secrets
import shutil
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Sequence

from assessment_scorer.domain.entities import FileInfo, FileType, RepositorySnapshot
from assessment_scorer.domain.exceptions import CloneFailedError
from assessment_scorer.domain.value_objects import GitHubUrl
from assessment_scorer.services.file_filter import extension_of, should_skip

logger = logging.getLogger(__name__)

GitRunner = Callable[[Sequence[str], float], Awaitable[None]]


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_git(args: Sequence[str], timeout: float) -> None:
    """Run a git command, killing it on timeout or cancellation."""
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except OSError as exc:
        raise CloneFailedError(f"Could not start git: {exc}") from exc

    try:
        _, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        await _kill(proc)
        raise CloneFailedError(f"git clone timed out after {timeout:g}s") from exc
    except BaseException:
        # cancelled from outside; git must not keep writing into the workspace
        await _kill(proc)
        raise

    if proc.returncode != 0:
        message = stderr.decode("utf-8", errors="replace").strip()
        raise CloneFailedError(message or f"git exited with status {proc.returncode}")


def walk_directory(root: Path) -> list[FileInfo]:
    """Depth-first listing of *root*, skipping hidden and build directories."""
    files: list[FileInfo] = []

    def _walk(directory: Path, base: str) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError:
            logger.debug("Cannot list %s, skipping", directory)
            return

        for entry in entries:
            if should_skip(entry.name):
                continue
            relative = f"{base}/{entry.name}" if base else entry.name
            try:
                if entry.is_dir(follow_symlinks=False):
                    files.append(FileInfo(path=relative, type=FileType.DIRECTORY))
                    _walk(Path(entry.path), relative)
                elif entry.is_file(follow_symlinks=False):
                    files.append(
                        FileInfo(
                            path=relative,
                            type=FileType.FILE,
                            size=entry.stat(follow_symlinks=False).st_size,
                            extension=extension_of(entry.name),
                        )
                    )
            except OSError:
                continue

    _walk(root, "")
    return files


def _remove_workspace(workspace: Path) -> None:
    if not workspace.exists():
        return
    logger.info("Cleaning up workspace %s", workspace)
    try:
        shutil.rmtree(workspace)
    except OSError:
        logger.exception("Failed to remove workspace %s", workspace)


class GitCloneSource:
    """``RepositorySource`` that shallow-clones into ``<workspace_root>/repo-<ts>-<rand>``."""

    def __init__(
        self,
        workspace_root: str | Path,
        timeout: float = 300.0,
        git_executable: str = "git",
        runner: GitRunner = run_git,
    ) -> None:
        self._root = Path(workspace_root)
        self._timeout = timeout
        self._git = git_executable
        self._runner = runner

    def new_workspace(self) -> Path:
        """Collision-free workspace path; not created on disk."""
        suffix = secrets.token_hex(4)
        return self._root / f"repo-{int(time.time() * 1000)}-{suffix}"

    @asynccontextmanager
    async def acquire(self, url: GitHubUrl) -> AsyncIterator[RepositorySnapshot]:
        workspace = self.new_workspace()
        try:
            await self._clone(url, workspace)
            files = await asyncio.to_thread(walk_directory, workspace)
            logger.info("Listed %d entries from %s", len(files), url.full_name)
            yield RepositorySnapshot(location=str(workspace), files=tuple(files))
        finally:
            await asyncio.to_thread(_remove_workspace, workspace)

    async def read_text(self, snapshot: RepositorySnapshot, path: str) -> str | None:
        root = Path(snapshot.location).resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            logger.warning("Refusing to read %s outside workspace", path)
            return None
        try:
            raw = await asyncio.to_thread(target.read_bytes)
        except OSError:
            return None
        return raw.decode("utf-8", errors="replace")

    async def _clone(self, url: GitHubUrl, workspace: Path) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        args = [
            self._git, "clone", "--depth", "1", "--single-branch",
            url.clone_url, str(workspace),
        ]
        logger.info("Cloning %s into %s", url.full_name, workspace)
        try:
            await self._runner(args, self._timeout)
        except CloneFailedError as exc:
            logger.error("Clone of %s failed: %s", url.full_name, exc)
            raise CloneFailedError(
                f"Failed to clone repository {url.raw}: {exc}"
            ) from exc
