"""Manifest version extractor — read the targeted vgn version from go.mod.

Two line patterns are scanned in one pass:

* the version requirement (``go.kwusen.ca/vgn v1.2.3``), at the start of a
  line either as a single-line ``require`` or inside a ``require ( ... )``
  block.  ``exclude`` lines, comments and the left side of a ``replace``
  never set the target;
* a ``replace go.kwusen.ca/vgn ...`` directive, which is always a failure:
  a redirected dependency must never be committed.  Only the single-line
  form is detected; an entry inside a ``replace ( ... )`` block is not.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from vgnguard.config import MODULE_PATH
from vgnguard.matching import LinePattern, read_matches
from vgnguard.report import FailureLog

logger = logging.getLogger(__name__)

VERSION = "version"
REPLACE = "replace"

_REPLACE_TEMPLATE = """\
Found "replace" in {manifest} for {module}.

  Comment out this line:
  "{line}"
  And update require block to point entry for "{module}" to a new
  version, after committing and releasing, if necessary"""


def manifest_patterns(module_path: str = MODULE_PATH) -> tuple[LinePattern, LinePattern]:
    """Return the (version requirement, override directive) patterns for *module_path*."""
    module = re.escape(module_path)
    return (
        LinePattern(VERSION, rf"^\s*(?:require\s+)?{module}\s+(v\S+)"),
        LinePattern(REPLACE, rf"^\s*(replace)\s+{module}(?:\s|$).*"),
    )


def extract_target_version(
    manifest_path: str | Path,
    failures: FailureLog,
    module_path: str = MODULE_PATH,
) -> str | None:
    """Return the version of *module_path* required by the manifest.

    Every ``replace`` directive for the module is recorded as a failure.
    When several requirement lines exist the last one wins.  An unreadable
    manifest is recorded and scanning continues with no matches, so a
    missing target version is then reported as well.

    Returns *None* when no version could be determined.
    """
    manifest_path = Path(manifest_path)
    manifest = manifest_path.name

    try:
        matches = read_matches(manifest_path, *manifest_patterns(module_path))
    except OSError as exc:
        failures.fail("manifest", f"Could not open {manifest}: {exc}", str(manifest_path))
        matches = []

    target: str | None = None
    for m in matches:
        if m.pattern == REPLACE:
            failures.fail(
                "manifest",
                _REPLACE_TEMPLATE.format(manifest=manifest, module=module_path, line=m.text),
                str(manifest_path),
            )
        else:
            # Last write wins
            target = m.value.strip()
            logger.debug("%s:%d requires %s %s", manifest, m.line_number, module_path, target)

    if not target:
        failures.fail(
            "manifest",
            f"Could not find version of vgn to target in {manifest}.",
            str(manifest_path),
        )
        return None

    logger.info("Target version of %s is %s", module_path, target)
    return target
