"""Git access for the gate: read-only status queries."""

from vgnguard.vcs.repo import GitError, RepoManager

__all__ = ["GitError", "RepoManager"]
