"""vgnguard — pre-commit consistency gate for the vgn dependency.

Verifies that ``go.kwusen.ca/vgn`` is pinned consistently across
``go.mod``, the submodules registered in ``.gitmodules`` and each
submodule's ``vgn-version.txt``, and that every submodule working tree
is clean.
"""

__version__ = "1.0.0"

from vgnguard.checker import CheckReport, ConsistencyChecker, SubmoduleResult
from vgnguard.cleanliness import Cleanliness, verify_clean
from vgnguard.config import CheckerSettings
from vgnguard.manifest import extract_target_version
from vgnguard.matching import LineMatch, LinePattern, find_matches, read_matches
from vgnguard.reconcile import Reconciliation, reconcile_submodule, versions_match
from vgnguard.registry import extract_submodule_paths
from vgnguard.report import Failure, FailureLog
from vgnguard.vcs.repo import GitError, RepoManager

__all__ = [
    "__version__",
    # Orchestration
    "CheckReport",
    "ConsistencyChecker",
    "SubmoduleResult",
    "CheckerSettings",
    # Extraction
    "LineMatch",
    "LinePattern",
    "extract_submodule_paths",
    "extract_target_version",
    "find_matches",
    "read_matches",
    # Per-submodule checks
    "Cleanliness",
    "Reconciliation",
    "reconcile_submodule",
    "verify_clean",
    "versions_match",
    # Failures
    "Failure",
    "FailureLog",
    # Git
    "GitError",
    "RepoManager",
]
