"""Cleanliness verifier — a submodule must have no pending changes."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

from vgnguard.report import FailureLog
from vgnguard.vcs.repo import GitError, RepoManager

logger = logging.getLogger(__name__)


class Cleanliness(str, Enum):
    """Outcome of the status query for one submodule."""

    CLEAN = "clean"
    DIRTY = "dirty"
    QUERY_FAILED = "query_failed"


def _absolute(path: str | Path) -> str:
    return os.path.abspath(path)


def verify_clean(submodule: str, failures: FailureLog, root: str | Path = ".") -> Cleanliness:
    """Run ``git status --porcelain`` inside *submodule* and record any output.

    If the absolute path cannot be resolved the failure is recorded and the
    query still runs against the unresolved path.
    """
    workdir: str | Path = Path(root) / submodule
    try:
        workdir = _absolute(workdir)
    except OSError as exc:
        # TODO: decide whether an unresolvable path should skip the status query
        failures.fail(
            "cleanliness",
            f"Failed to get absolute path for submodule: {exc}",
            submodule,
        )

    try:
        output = RepoManager(workdir).status()
    except GitError as exc:
        detail = exc.output.strip() or str(exc)
        failures.fail(
            "cleanliness",
            f'Failed to run git status on "{submodule}": {detail}',
            submodule,
        )
        return Cleanliness.QUERY_FAILED

    if output:
        failures.fail(
            "cleanliness",
            f'Found pending changes in "{submodule}":\n\n{output}',
            submodule,
        )
        return Cleanliness.DIRTY

    logger.debug("%s is clean", submodule)
    return Cleanliness.CLEAN
