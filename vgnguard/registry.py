"""Submodule registry extractor — list submodule paths from .gitmodules."""

from __future__ import annotations

import logging
from pathlib import Path

from vgnguard.matching import LinePattern, read_matches
from vgnguard.report import FailureLog

logger = logging.getLogger(__name__)

PATH_PATTERN = LinePattern("path", r"path\s*=\s*(.*)")


def extract_submodule_paths(registry_path: str | Path, failures: FailureLog) -> list[str]:
    """Return the ``path = ...`` values of the registry, in file order.

    Duplicates are kept.  An entry with an empty value is recorded as a
    failure and skipped.  An unreadable registry is recorded as a failure
    and yields no paths.
    """
    registry_path = Path(registry_path)
    try:
        matches = read_matches(registry_path, PATH_PATTERN)
    except OSError as exc:
        failures.fail(
            "registry",
            f"Could not open {registry_path.name}: {exc}",
            str(registry_path),
        )
        return []

    paths: list[str] = []
    for m in matches:
        path = m.value.strip()
        if not path:
            failures.fail(
                "registry",
                f'Empty submodule path in {registry_path.name} on line {m.line_number}: "{m.text.strip()}"',
                str(registry_path),
            )
            continue
        paths.append(path)
    logger.debug("Registered submodules: %s", paths)
    return paths
