"""repotreelib - Repository tree construction and rendering.

Rebuilds the directory trees of remote source repositories from a flat
"list items under a path" call, counts their folders and files, filters
them by name and renders them as ASCII trees.

    from repotreelib import TreeRequest, get_all_repositories_tree, format_all_repositories

    response = await get_all_repositories_tree(client, TreeRequest(project_id='web', depth=2))
    print(format_all_repositories(response))

The listing client is supplied by the caller; see
``repotreelib.core.RepositoryListingClient``.
"""

__version__ = "0.1.0"

from .config import (
    MAX_DEPTH,
    DepthConfig,
    RecursionMode,
    TraversalStrategy,
    TreeRequest,
)
from .core import (
    ObjectKind,
    RawEntry,
    RepositoryRef,
    TreeItem,
    Stats,
    RepositoryTreeResult,
    AllRepositoriesTreeResponse,
    RepositoryListingClient,
    PatternMatcher,
    GlobPatternMatcher,
    TreeCollector,
    FullTraverser,
    LeveledTraverser,
    create_traverser,
    level_of,
)
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
)
from .exceptions import RepoTreeError, ValidationError, RepositoryListingError
from .api import (
    build_all,
    build_repository_tree,
    filter_repositories,
    get_all_repositories_tree,
)
from .render import (
    build_node_graph,
    format_repository_tree,
    format_all_repositories,
)

__all__ = [
    "__version__",
    # Configuration
    "MAX_DEPTH",
    "DepthConfig",
    "RecursionMode",
    "TraversalStrategy",
    "TreeRequest",
    # Data model
    "ObjectKind",
    "RawEntry",
    "RepositoryRef",
    "TreeItem",
    "Stats",
    "RepositoryTreeResult",
    "AllRepositoriesTreeResponse",
    # Collaborators
    "RepositoryListingClient",
    "PatternMatcher",
    "GlobPatternMatcher",
    # Traversal
    "TreeCollector",
    "FullTraverser",
    "LeveledTraverser",
    "create_traverser",
    "level_of",
    # Errors
    "ErrorPolicy",
    "FailFastPolicy",
    "CollectErrorsPolicy",
    "ContinueOnErrorsPolicy",
    "RepoTreeError",
    "ValidationError",
    "RepositoryListingError",
    # High-level API
    "build_all",
    "build_repository_tree",
    "filter_repositories",
    "get_all_repositories_tree",
    # Rendering
    "build_node_graph",
    "format_repository_tree",
    "format_all_repositories",
]
