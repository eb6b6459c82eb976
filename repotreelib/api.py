"""High-level async API for repotreelib.

This module builds repository trees across a project: it enumerates the
repositories, filters them by name, walks each one with the strategy
matching the requested depth and returns one result per repository.

Failures are turned into data as close to where they happen as possible:
a folder that cannot be listed is skipped, a repository that cannot be
walked gets an ``error`` instead of a tree, and only the initial
repository enumeration can fail the whole call.
"""

import logging
from typing import List, Optional

from .config import DepthConfig, TreeRequest
from .core import (
    AllRepositoriesTreeResponse,
    GlobPatternMatcher,
    PatternMatcher,
    RepositoryListingClient,
    RepositoryRef,
    RepositoryTreeResult,
    TreeCollector,
    create_traverser,
)
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .exceptions import RepoTreeError, RepositoryListingError, ValidationError

logger = logging.getLogger(__name__)

NO_DEFAULT_BRANCH = "No default branch found"


def filter_repositories(
    repositories: List[RepositoryRef],
    repository_pattern: Optional[str] = None,
    matcher: Optional[PatternMatcher] = None
) -> List[RepositoryRef]:
    """Keep repositories whose full name matches the pattern.

    Args:
        repositories: Candidate repositories
        repository_pattern: Glob pattern, or None to keep all
        matcher: Glob matcher (defaults to GlobPatternMatcher)

    Returns:
        Matching repositories in their original order
    """
    if not repository_pattern:
        return list(repositories)
    matcher = matcher or GlobPatternMatcher()
    return [
        repo for repo in repositories
        if matcher.matches_glob(repo.name or '', repository_pattern)
    ]


async def build_repository_tree(
    client: RepositoryListingClient,
    repository: RepositoryRef,
    project_id: str,
    depth: int = 0,
    pattern: Optional[str] = None,
    matcher: Optional[PatternMatcher] = None,
    error_policy: Optional[ErrorPolicy] = None
) -> RepositoryTreeResult:
    """Build the tree of a single repository.

    Never raises for repository problems: a missing default branch or a
    failed traversal comes back as a result with ``error`` set.

    Args:
        client: Listing collaborator
        repository: Repository to walk
        project_id: Project the repository belongs to
        depth: Maximum level, 0 for unlimited
        pattern: Optional glob applied to file names
        matcher: Glob matcher (defaults to GlobPatternMatcher)
        error_policy: Handling of failed folder listings

    Returns:
        RepositoryTreeResult for the repository
    """
    name = repository.display_name
    branch = repository.branch_name
    if not branch:
        logger.warning("Skipping repository %s: %s", name, NO_DEFAULT_BRANCH)
        return RepositoryTreeResult.failed(name, NO_DEFAULT_BRANCH)

    collector = TreeCollector(pattern, matcher)
    try:
        traverser = create_traverser(
            client, project_id, DepthConfig(max_depth=depth), error_policy
        )
        logger.debug(
            "Building tree for %s@%s using %s strategy",
            name, branch, traverser.strategy.value
        )
        await traverser.traverse(repository, branch, collector)
    except Exception as exc:
        logger.warning("Error processing repository %s: %s", name, exc)
        return RepositoryTreeResult.failed(name, f"Error processing repository: {exc}")

    tree, stats = collector.get_result()
    return RepositoryTreeResult(name=name, tree=tree, stats=stats)


async def build_all(
    client: RepositoryListingClient,
    project_id: str,
    repository_pattern: Optional[str] = None,
    depth: int = 0,
    pattern: Optional[str] = None,
    matcher: Optional[PatternMatcher] = None,
    error_policy: Optional[ErrorPolicy] = None
) -> AllRepositoriesTreeResponse:
    """Build trees for every matching repository of a project.

    Repositories are processed one at a time, in listing order.

    Args:
        client: Listing collaborator
        project_id: Project whose repositories are walked
        repository_pattern: Optional glob matched against repository names
        depth: Maximum level, 0 for unlimited
        pattern: Optional glob applied to file names
        matcher: Glob matcher (defaults to GlobPatternMatcher)
        error_policy: Handling of failed folder listings (a fresh
            ContinueOnErrorsPolicy per call by default)

    Returns:
        AllRepositoriesTreeResponse with one result per repository

    Raises:
        RepositoryListingError: If the repositories cannot be enumerated
    """
    matcher = matcher or GlobPatternMatcher()
    error_policy = error_policy or ContinueOnErrorsPolicy()

    try:
        repositories = await client.list_repositories(project_id)
    except RepoTreeError:
        raise
    except Exception as exc:
        raise RepositoryListingError(f"Failed to get repository tree: {exc}") from exc

    selected = filter_repositories(repositories or [], repository_pattern, matcher)
    logger.debug(
        "Building trees for %d of %d repositories in %s",
        len(selected), len(repositories or []), project_id
    )

    response = AllRepositoriesTreeResponse()
    for repository in selected:
        result = await build_repository_tree(
            client, repository, project_id, depth, pattern, matcher, error_policy
        )
        response.repositories.append(result)
    return response


async def get_all_repositories_tree(
    client: RepositoryListingClient,
    request: TreeRequest,
    default_project_id: Optional[str] = None,
    matcher: Optional[PatternMatcher] = None,
    error_policy: Optional[ErrorPolicy] = None
) -> AllRepositoriesTreeResponse:
    """Tool-style entry point: validate a TreeRequest and build the trees.

    Args:
        client: Listing collaborator
        request: Tool request
        default_project_id: Project used when the request names none
        matcher: Glob matcher (defaults to GlobPatternMatcher)
        error_policy: Handling of failed folder listings

    Returns:
        AllRepositoriesTreeResponse with one result per repository

    Raises:
        ValidationError: If the request is invalid or no project is known
        RepositoryListingError: If the repositories cannot be enumerated
    """
    problems = request.validate()
    project_id = request.project_id or default_project_id
    if not project_id:
        problems.append("project_id is required")
    if problems:
        raise ValidationError(problems)

    return await build_all(
        client,
        project_id,
        repository_pattern=request.repository_pattern,
        depth=request.depth,
        pattern=request.pattern,
        matcher=matcher,
        error_policy=error_policy,
    )
