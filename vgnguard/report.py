"""FailureLog model — the per-run accumulator every check writes into."""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Failure(BaseModel):
    """A single recorded failure."""

    check: str = ""  # manifest, registry, version, cleanliness
    message: str = ""
    path: str | None = None


class FailureLog(BaseModel):
    """Ordered, append-only collection of failures for one run.

    Passed explicitly to every check; nothing here is process-global.
    """

    failures: list[Failure] = Field(default_factory=list)

    def fail(self, check: str, message: str, path: str | None = None) -> Failure:
        """Record a failure and return it."""
        failure = Failure(check=check, message=message, path=path)
        self.failures.append(failure)
        logger.info("[%s] %s", check, message.splitlines()[0] if message else "")
        return failure

    @property
    def failed(self) -> bool:
        return len(self.failures) > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def lines(self) -> list[str]:
        """Render each failure as ``- <message>``; multi-line text is kept."""
        return [f"- {f.message}" for f in self.failures]

    def by_check(self, check: str) -> list[Failure]:
        return [f for f in self.failures if f.check == check]

    def to_json(self) -> str:
        """Return structured JSON for audit/debugging."""
        return json.dumps(self.model_dump(), indent=2)
