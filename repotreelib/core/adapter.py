"""Collaborator contracts for tree construction.

The engine never talks to the remote service directly. A
RepositoryListingClient adapts whatever SDK is in use, and a
PatternMatcher decides glob matches for repository and file names.
"""

from abc import ABC, abstractmethod
from typing import List

from wcmatch import fnmatch

from ..config import RecursionMode
from .node import RawEntry, RepositoryRef


class RepositoryListingClient(ABC):
    """Abstract base class for repository listing clients.

    Implementations wrap a remote version-control API. All calls are
    async; the engine awaits them one at a time.
    """

    @abstractmethod
    async def list_repositories(self, project_id: str) -> List[RepositoryRef]:
        """List the repositories of a project.

        Args:
            project_id: Project identifier

        Returns:
            Repositories in the order the service reports them
        """
        pass

    @abstractmethod
    async def list_items(
        self,
        repository_id: str,
        project_id: str,
        path: str,
        recursion: RecursionMode,
        branch: str,
    ) -> List[RawEntry]:
        """List the entries under a path on a branch.

        The listed path itself is normally included in the result.
        Unreadable entries must come back with ``ObjectKind.BAD`` rather
        than raising.

        Args:
            repository_id: Repository identifier
            project_id: Project identifier
            path: Folder path, ``/`` for the repository root
            recursion: ONE_LEVEL for immediate children, FULL for all
            branch: Short branch name (without ``refs/heads/``)

        Returns:
            Raw entries in service order
        """
        pass

    async def close(self):
        """Clean up client resources.

        Override if the client holds connections.
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


class PatternMatcher(ABC):
    """Boolean glob match of a name against a pattern."""

    @abstractmethod
    def matches_glob(self, name: str, pattern: str) -> bool:
        pass


class GlobPatternMatcher(PatternMatcher):
    """Case-sensitive minimatch-style matching.

    Supports ``*``, ``?``, ``[seq]``, brace alternatives (``*.{ts,js}``)
    and extended globs (``+(a|b)``). A leading dot must be matched
    explicitly, so ``*`` does not match ``.env``. Matching is against the
    full name: ``*api*`` matches ``repo3-api`` but ``api`` does not.
    """

    FLAGS = fnmatch.CASE | fnmatch.BRACE | fnmatch.EXTMATCH

    def matches_glob(self, name: str, pattern: str) -> bool:
        return fnmatch.fnmatch(name or '', pattern, flags=self.FLAGS)
