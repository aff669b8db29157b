"""RepoManager — read-only status queries against a git working tree.

All git operations use :func:`subprocess.run`; no GitPython dependency.
Commands run with every ``GIT_*`` variable stripped from the environment:
inside a hook git exports ``GIT_DIR``, ``GIT_INDEX_FILE`` and friends, and
a nested status query would otherwise report on the outer repository.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git cannot be started or returns a non-zero exit code."""

    def __init__(self, message: str, output: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.output = output
        self.returncode = returncode


def sanitized_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of *environ* (default: ``os.environ``) without ``GIT_*`` keys."""
    if environ is None:
        environ = os.environ
    return {k: v for k, v in environ.items() if not k.startswith("GIT_")}


def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and return the result.

    stdout and stderr are captured together.  No timeout is applied.

    Parameters
    ----------
    *args:
        Arguments passed after ``git``.
    cwd:
        Working directory for the command.
    check:
        If *True*, raise :class:`GitError` on non-zero exit.
    """
    cmd = ["git", *args]
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            env=sanitized_env(),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise GitError(f"git {' '.join(args)} could not be started: {exc}") from exc
    if check and result.returncode != 0:
        raise GitError(
            f"git {' '.join(args)} failed (rc={result.returncode}): "
            f"{result.stdout.strip()}",
            output=result.stdout,
            returncode=result.returncode,
        )
    return result


class RepoManager:
    """Query a git working tree.

    Parameters
    ----------
    path:
        Working directory of the repository (or submodule).  Used as given;
        callers resolve it if they need an absolute path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def status(self) -> str:
        """Return the output of ``git status --porcelain``."""
        result = _run_git("status", "--porcelain", cwd=self.path)
        return result.stdout
