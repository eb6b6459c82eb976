"""Core abstractions for repository tree construction.

Data model, collaborator contracts, traversal strategies and the
collector that turns listed entries into tree items.
"""

from .node import (
    ObjectKind,
    RawEntry,
    RepositoryRef,
    TreeItem,
    Stats,
    RepositoryTreeResult,
    AllRepositoriesTreeResponse,
)
from .paths import level_of, name_of, parent_path
from .adapter import RepositoryListingClient, PatternMatcher, GlobPatternMatcher
from .collector import TreeCollector
from .traverser import (
    Listing,
    RepositoryTraverser,
    FullTraverser,
    LeveledTraverser,
    create_traverser,
    prepare_entries,
    sort_entries,
)

__all__ = [
    # Data model
    'ObjectKind',
    'RawEntry',
    'RepositoryRef',
    'TreeItem',
    'Stats',
    'RepositoryTreeResult',
    'AllRepositoriesTreeResponse',
    # Paths
    'level_of',
    'name_of',
    'parent_path',
    # Collaborators
    'RepositoryListingClient',
    'PatternMatcher',
    'GlobPatternMatcher',
    # Collection
    'TreeCollector',
    # Traversers
    'Listing',
    'RepositoryTraverser',
    'FullTraverser',
    'LeveledTraverser',
    'create_traverser',
    'prepare_entries',
    'sort_entries',
]
