"""ConsistencyChecker — main entry point for the vgn consistency gate.

Usage::

    from vgnguard import ConsistencyChecker

    report = ConsistencyChecker(repo_root).run()
    for line in report.failures.lines():
        print(line)
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from vgnguard.cleanliness import Cleanliness, verify_clean
from vgnguard.config import CheckerSettings
from vgnguard.manifest import extract_target_version
from vgnguard.reconcile import Reconciliation, reconcile_submodule
from vgnguard.registry import extract_submodule_paths
from vgnguard.report import FailureLog

logger = logging.getLogger(__name__)


class SubmoduleResult(BaseModel):
    """Per-submodule outcome.  *cleanliness* is None when it was not evaluated."""

    path: str
    reconciliation: Reconciliation
    cleanliness: Cleanliness | None = None


class CheckReport(BaseModel):
    """Aggregate result of one checker run."""

    target_version: str | None = None
    submodules: list[SubmoduleResult] = Field(default_factory=list)
    failures: FailureLog = Field(default_factory=FailureLog)

    @property
    def passed(self) -> bool:
        return not self.failures.failed

    @property
    def exit_code(self) -> int:
        return self.failures.exit_code


class ConsistencyChecker:
    """Run every check against one repository root.

    Parameters
    ----------
    root:
        Repository root containing the manifest and the submodule registry.
    settings:
        File conventions; defaults to :class:`CheckerSettings`.
    """

    def __init__(self, root: str | Path = ".", settings: CheckerSettings | None = None) -> None:
        self.root = Path(root)
        self.settings = settings or CheckerSettings()

    def run(self, failures: FailureLog | None = None) -> CheckReport:
        """Check the manifest, then every registered submodule in order.

        Problems are recorded, never raised; each submodule is evaluated
        regardless of what happened to the previous ones.
        """
        failures = failures if failures is not None else FailureLog()
        s = self.settings

        target = extract_target_version(self.root / s.manifest_file, failures, s.module_path)
        paths = extract_submodule_paths(self.root / s.registry_file, failures)

        results: list[SubmoduleResult] = []
        for path in paths:
            reconciliation = reconcile_submodule(
                path, target, failures,
                root=self.root,
                marker_file=s.marker_file,
                manifest=s.manifest_file,
            )
            result = SubmoduleResult(path=path, reconciliation=reconciliation)
            if reconciliation == Reconciliation.CONSISTENT:
                result.cleanliness = verify_clean(path, failures, root=self.root)
            results.append(result)

        logger.info(
            "Checked %d submodule(s): %d failure(s)",
            len(results), len(failures.failures),
        )
        return CheckReport(target_version=target, submodules=results, failures=failures)
