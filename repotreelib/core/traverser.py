"""Repository traversal strategies.

Two ways of walking a repository through a flat "list items under a path"
call:

- FullTraverser asks for the whole tree in one deep listing and derives
  each item's level from its path.
- LeveledTraverser lists one level at a time, issuing one more call per
  discovered folder until the depth bound is reached.

Calls are awaited one after another; nothing is listed concurrently.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from ..config import DepthConfig, RecursionMode, TraversalStrategy
from ..error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .adapter import RepositoryListingClient
from .collector import TreeCollector
from .node import RawEntry, RepositoryRef
from .paths import ROOT_PATH, level_of

logger = logging.getLogger(__name__)


def sort_entries(entries: Iterable[RawEntry]) -> List[RawEntry]:
    """Sort entries folders first, then by full path ignoring case."""
    return sorted(
        entries,
        key=lambda entry: (not entry.is_folder, entry.path.casefold(), entry.path)
    )


def prepare_entries(entries: Iterable[RawEntry], listed_path: str = ROOT_PATH) -> List[RawEntry]:
    """Drop entries that never become tree items and sort the rest.

    The synthetic root, the listed folder itself (one-level listings
    include it) and Bad entries are discarded.
    """
    kept = [
        entry for entry in entries
        if entry.path not in (ROOT_PATH, listed_path) and not entry.is_bad
    ]
    return sort_entries(kept)


@dataclass
class Listing:
    """Outcome of listing one path: entries on success, the error otherwise."""

    path: str
    entries: List[RawEntry] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RepositoryTraverser(ABC):
    """Abstract base class for repository traversers.

    A traverser is bound to one listing client and project and feeds
    every accepted entry of a repository into a TreeCollector.
    """

    strategy: TraversalStrategy

    def __init__(
        self,
        client: RepositoryListingClient,
        project_id: str,
        depth_config: Optional[DepthConfig] = None,
        error_policy: Optional[ErrorPolicy] = None
    ):
        """Initialize traverser.

        Args:
            client: Listing collaborator
            project_id: Project the repositories belong to
            depth_config: Depth bound (defaults to unlimited)
            error_policy: Handling of failed folder listings
        """
        self.client = client
        self.project_id = project_id
        self.depth_config = depth_config or DepthConfig()
        self.error_policy = error_policy or ContinueOnErrorsPolicy()
        self.calls = 0

    async def list_path(
        self,
        repository: RepositoryRef,
        branch: str,
        path: str,
        recursion: RecursionMode
    ) -> Listing:
        """List one path, capturing any failure in the returned Listing."""
        self.calls += 1
        logger.debug(
            "Listing %s in %s@%s (%s)",
            path, repository.display_name, branch, recursion.value
        )
        try:
            entries = await self.client.list_items(
                repository.id, self.project_id, path, recursion, branch
            )
        except Exception as exc:
            return Listing(path, error=exc)
        return Listing(path, prepare_entries(entries or [], path))

    @abstractmethod
    async def traverse(
        self,
        repository: RepositoryRef,
        branch: str,
        collector: TreeCollector
    ) -> None:
        """Walk a repository and collect its items.

        Failure to list the repository root propagates; it is the
        caller's job to turn it into a repository-level error.
        """
        pass


class FullTraverser(RepositoryTraverser):
    """Single deep listing from the root.

    The collaborator already returned the whole subtree, so each item's
    level is read straight from its path.
    """

    strategy = TraversalStrategy.FULL

    async def traverse(self, repository, branch, collector):
        listing = await self.list_path(repository, branch, ROOT_PATH, RecursionMode.FULL)
        if not listing.ok:
            raise listing.error

        for entry in listing.entries:
            collector.collect(entry, level_of(entry.path))


class LeveledTraverser(RepositoryTraverser):
    """One-level listings, folder by folder, up to ``depth_config.max_depth``.

    Siblings are emitted folders first and by path; each folder is
    expanded right after it is emitted, before its next sibling. A folder
    whose listing fails is handed to the error policy and, unless the
    policy re-raises, contributes no children.
    """

    strategy = TraversalStrategy.LEVELED

    async def traverse(self, repository, branch, collector):
        root = await self.list_path(repository, branch, ROOT_PATH, RecursionMode.ONE_LEVEL)
        if not root.ok:
            raise root.error

        await self._collect_level(repository, branch, root.entries, 1, collector)

    async def _collect_level(
        self,
        repository: RepositoryRef,
        branch: str,
        entries: List[RawEntry],
        level: int,
        collector: TreeCollector
    ) -> None:
        """Collect one level of siblings and expand their folders."""
        for entry in entries:
            item = collector.collect(entry, level)
            if item is None or not item.is_folder:
                continue
            if not self.depth_config.should_explore(level):
                continue

            children = await self.list_path(
                repository, branch, entry.path, RecursionMode.ONE_LEVEL
            )
            if not children.ok:
                fallback = await self.error_policy.handle(children.error, entry.path)
                children = Listing(entry.path, prepare_entries(fallback or [], entry.path))

            await self._collect_level(
                repository, branch, children.entries, level + 1, collector
            )


def create_traverser(
    client: RepositoryListingClient,
    project_id: str,
    depth: Union[int, DepthConfig] = 0,
    error_policy: Optional[ErrorPolicy] = None
) -> RepositoryTraverser:
    """Select a traversal strategy for the requested depth.

    Args:
        client: Listing collaborator
        project_id: Project the repositories belong to
        depth: Maximum level (0 = unlimited) or a DepthConfig
        error_policy: Handling of failed folder listings

    Returns:
        FullTraverser for unlimited depth, LeveledTraverser otherwise

    Raises:
        ValueError: If depth is negative
    """
    depth_config = depth if isinstance(depth, DepthConfig) else DepthConfig(max_depth=depth)
    if depth_config.max_depth < 0:
        raise ValueError(f"Invalid depth {depth_config.max_depth}")

    if depth_config.strategy is TraversalStrategy.FULL:
        return FullTraverser(client, project_id, depth_config, error_policy)
    return LeveledTraverser(client, project_id, depth_config, error_policy)
