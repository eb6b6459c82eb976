"""Test fixtures for repotreelib consumers.

InMemoryListingClient stands in for a remote repository service so that
tree builds can be exercised without network access. It records every
call it receives for later assertions.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..config import RecursionMode
from ..core.adapter import RepositoryListingClient
from ..core.node import ObjectKind, RawEntry, RepositoryRef
from ..core.paths import ROOT_PATH, parent_path


def entries_from_paths(paths: Iterable[Union[str, RawEntry]]) -> List[RawEntry]:
    """Build raw entries from path strings.

    A trailing ``/`` marks a folder (``/src/``); anything else is a file.
    Missing ancestor folders are added. RawEntry objects pass through
    unchanged.
    """
    entries: Dict[str, RawEntry] = {}

    def add_folder(path: str) -> None:
        while path and path not in entries:
            entries[path] = RawEntry(path, is_folder=True, object_kind=ObjectKind.TREE)
            path = parent_path(path)

    for value in paths:
        if isinstance(value, RawEntry):
            entries[value.path] = value
            add_folder(parent_path(value.path))
            continue
        if value.endswith('/'):
            add_folder(value.rstrip('/'))
        else:
            entries[value] = RawEntry(value, is_folder=False, object_kind=ObjectKind.BLOB)
            add_folder(parent_path(value))

    return list(entries.values())


class InMemoryListingClient(RepositoryListingClient):
    """Dictionary-backed listing client.

    Example:
        client = InMemoryListingClient()
        client.add_repository('r1', 'repo1', ['/README.md', '/src/index.ts'])
        client.fail_path('r1', '/src')
        response = await build_all(client, 'project')
    """

    def __init__(self, listing_error: Optional[Exception] = None):
        """Initialize client.

        Args:
            listing_error: If set, ``list_repositories`` raises it
        """
        self.listing_error = listing_error
        self.repositories: List[RepositoryRef] = []
        self.trees: Dict[str, List[RawEntry]] = {}
        self.failures: Dict[Tuple[str, str], Exception] = {}
        self.calls: List[Tuple[str, str, RecursionMode, str]] = []
        self.closed = False

    def add_repository(
        self,
        repository_id: str,
        name: Optional[str],
        paths: Iterable[Union[str, RawEntry]] = (),
        default_branch: Optional[str] = 'refs/heads/main'
    ) -> RepositoryRef:
        """Register a repository and its files."""
        repository = RepositoryRef(repository_id, name, default_branch)
        self.repositories.append(repository)
        self.trees[repository_id] = entries_from_paths(paths)
        return repository

    def fail_path(
        self,
        repository_id: str,
        path: str,
        error: Optional[Exception] = None
    ) -> None:
        """Make listings of ``path`` in a repository raise ``error``."""
        self.failures[(repository_id, path)] = error or OSError(f"Cannot list {path}")

    def calls_for(self, repository_id: str) -> List[Tuple[str, RecursionMode]]:
        """(path, recursion) of every listing made for a repository."""
        return [
            (path, recursion)
            for repo_id, path, recursion, _ in self.calls
            if repo_id == repository_id
        ]

    async def list_repositories(self, project_id: str) -> List[RepositoryRef]:
        if self.listing_error is not None:
            raise self.listing_error
        return list(self.repositories)

    async def list_items(self, repository_id, project_id, path, recursion, branch):
        self.calls.append((repository_id, path, recursion, branch))

        failure = self.failures.get((repository_id, path))
        if failure is not None:
            raise failure

        entries = self.trees.get(repository_id, [])
        key = '' if path == ROOT_PATH else path

        if recursion is RecursionMode.FULL:
            prefix = key + '/'
            children = [entry for entry in entries if entry.path.startswith(prefix)]
        else:
            children = [entry for entry in entries if parent_path(entry.path) == key]

        own = RawEntry(path, is_folder=True, object_kind=ObjectKind.TREE)
        return [own] + children

    async def close(self):
        self.closed = True
