"""Command-line entry point: ``python -m vgnguard`` or ``vgnguard``.

Checks the repository in the current working directory, prints each
failure as ``- <message>`` on stdout and exits 1 if anything failed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from vgnguard.checker import ConsistencyChecker


def configure_logging(level: int = logging.WARNING) -> None:
    """Send ``vgnguard`` log records to stderr, keeping stdout for failures."""
    pkg_logger = logging.getLogger("vgnguard")
    if pkg_logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vgnguard",
        description=(
            "Verify that go.kwusen.ca/vgn is pinned consistently in go.mod, "
            "in every submodule's vgn-version.txt, and that submodules are clean."
        ),
    )
    # The pre-commit framework passes staged filenames; the whole tree is
    # checked regardless.
    parser.add_argument("filenames", nargs="*", help=argparse.SUPPRESS)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the gate against the current directory and return the exit code."""
    build_parser().parse_args(argv)
    configure_logging()

    report = ConsistencyChecker().run()
    for line in report.failures.lines():
        print(line)
    return report.exit_code


def run() -> None:
    sys.exit(main())
