"""Version reconciler — compare each submodule's marker with the target.

The marker must be a *prefix* of the target version, not equal to it: the
manifest may carry a longer pseudo-version (``v1.2.3-0.20240101-abcdef``)
while the marker only tracks ``v1.2.3`` or ``v1.2``.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from vgnguard.config import MANIFEST_FILE, MARKER_FILE
from vgnguard.report import FailureLog

logger = logging.getLogger(__name__)


class Reconciliation(str, Enum):
    """Outcome of reconciling one submodule marker."""

    CONSISTENT = "consistent"
    MARKER_MISSING = "marker_missing"
    MARKER_UNREADABLE = "marker_unreadable"
    VERSION_MISMATCH = "version_mismatch"


_MISSING_TEMPLATE = """\
Submodule file not found for vgn version validation:
  "{path}"

  Create and commit the file at the submodule path and copy the version
  that is pointed at in {manifest}"""

_MISMATCH_TEMPLATE = """\
Version of vgn in {manifest} ({target}) does not start with "{marker}":
  File with incorrect version: "{path}\""""

_NO_TARGET_TEMPLATE = """\
Cannot validate vgn version "{marker}" without a target version from {manifest}:
  File: "{path}\""""


def versions_match(marker: str, target: str | None) -> bool:
    """Return *True* if *marker* is a prefix of a non-empty *target*.

    An empty marker matches any non-empty target.
    """
    if not target:
        return False
    return target.startswith(marker)


def marker_path(submodule: str, root: str | Path = ".", marker_file: str = MARKER_FILE) -> Path:
    return Path(root) / submodule / marker_file


def read_marker(submodule: str, root: str | Path = ".", marker_file: str = MARKER_FILE) -> str:
    """Read and strip a submodule's marker file.  :class:`OSError` propagates."""
    return marker_path(submodule, root, marker_file).read_text(encoding="utf-8").strip()


def reconcile_submodule(
    submodule: str,
    target: str | None,
    failures: FailureLog,
    root: str | Path = ".",
    marker_file: str = MARKER_FILE,
    manifest: str = MANIFEST_FILE,
) -> Reconciliation:
    """Check the marker of *submodule* against *target*.

    Every outcome other than :attr:`Reconciliation.CONSISTENT` has been
    recorded in *failures* and ends the checks for that submodule.
    """
    path = marker_path(submodule, root, marker_file)
    shown = str(Path(submodule) / marker_file)

    try:
        marker = read_marker(submodule, root, marker_file)
    except FileNotFoundError:
        failures.fail(
            "version",
            _MISSING_TEMPLATE.format(path=shown, manifest=manifest),
            str(path),
        )
        return Reconciliation.MARKER_MISSING
    except (OSError, UnicodeDecodeError) as exc:
        failures.fail("version", f'Could not read "{shown}": {exc}', str(path))
        return Reconciliation.MARKER_UNREADABLE

    if not target:
        failures.fail(
            "version",
            _NO_TARGET_TEMPLATE.format(marker=marker, manifest=manifest, path=shown),
            str(path),
        )
        return Reconciliation.VERSION_MISMATCH

    if not versions_match(marker, target):
        failures.fail(
            "version",
            _MISMATCH_TEMPLATE.format(manifest=manifest, target=target, marker=marker, path=shown),
            str(path),
        )
        return Reconciliation.VERSION_MISMATCH

    logger.debug("%s: marker %s matches %s", submodule, marker, target)
    return Reconciliation.CONSISTENT
