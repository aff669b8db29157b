"""Line matcher — run a set of single-group regexes over a text source.

Every line is tested against every pattern independently, so one line may
produce several matches.  Captured values are returned untouched; trimming
is left to the caller.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class LinePattern:
    """A named regular expression with one designated capture group."""

    def __init__(self, name: str, regex: str | re.Pattern[str], group: int = 1) -> None:
        self.name = name
        self.regex = re.compile(regex) if isinstance(regex, str) else regex
        self.group = group

    def __repr__(self) -> str:
        return f"LinePattern({self.name!r}, {self.regex.pattern!r})"


class LineMatch:
    """A single pattern match on one source line."""

    def __init__(self, pattern: str, text: str, value: str, line_number: int = 0) -> None:
        self.pattern = pattern
        self.text = text  # full matched text
        self.value = value  # captured group
        self.line_number = line_number

    def __repr__(self) -> str:
        return f"LineMatch({self.pattern!r}, {self.text!r}, line={self.line_number})"


def find_matches(lines: Iterable[str], *patterns: LinePattern) -> Iterator[LineMatch]:
    """Yield matches of *patterns* over *lines*, in line order.

    Parameters
    ----------
    lines:
        Any iterable of text lines (an open file works).  Consumed once.
    *patterns:
        Patterns evaluated per line, in argument order.

    A pattern matches when its regex is found anywhere in the line and its
    capture group participated in the match.
    """
    if not patterns:
        raise ValueError("find_matches requires at least one pattern")

    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        for pattern in patterns:
            m = pattern.regex.search(line)
            if m is None or m.group(pattern.group) is None:
                continue
            yield LineMatch(pattern.name, m.group(0), m.group(pattern.group), number)


def read_matches(path: str | Path, *patterns: LinePattern) -> list[LineMatch]:
    """Run :func:`find_matches` over a UTF-8 text file.

    Undecodable bytes are replaced rather than raised, so a stray Latin-1
    comment cannot stop the scan.  The file is closed before returning.
    :class:`OSError` propagates.
    """
    with open(path, encoding="utf-8", errors="replace") as fh:
        found = list(find_matches(fh, *patterns))
    logger.debug("%d match(es) in %s", len(found), path)
    return found
