"""Configuration for repository tree requests.

This module defines how callers specify what they want from a tree build:
which project, which repositories, how deep and which files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Upper bound on a leveled traversal; deeper requests should use depth 0
MAX_DEPTH = 10


class RecursionMode(Enum):
    """How far a single ``list_items`` call descends."""
    ONE_LEVEL = "one_level"   # The path and its immediate children
    FULL = "full"             # The path and every descendant


class TraversalStrategy(Enum):
    """How a repository is walked.

    FULL issues a single deep listing call; LEVELED issues one listing
    call per folder, level by level, up to the requested depth.
    """
    FULL = "full"
    LEVELED = "leveled"


@dataclass
class DepthConfig:
    """Depth bound for a traversal (0 means unlimited)."""

    max_depth: int = 0

    @property
    def unlimited(self) -> bool:
        return self.max_depth == 0

    @property
    def strategy(self) -> TraversalStrategy:
        return TraversalStrategy.FULL if self.unlimited else TraversalStrategy.LEVELED

    def should_explore(self, level: int) -> bool:
        """Check if the children of a folder at this level should be listed.

        Args:
            level: Level of the folder

        Returns:
            True if the folder's children fall within the bound
        """
        if self.unlimited:
            return True
        return level < self.max_depth


@dataclass
class TreeRequest:
    """Tool-style request for the trees of a project's repositories.

    Attributes:
        organization_id: Organization the project belongs to (informational)
        project_id: Project whose repositories are listed; defaulted by the
            caller when omitted
        repository_pattern: Glob matched against repository names
        depth: Maximum level to traverse, 0 for unlimited
        pattern: Glob matched against file names (folders are never filtered)
    """

    organization_id: Optional[str] = None
    project_id: Optional[str] = None
    repository_pattern: Optional[str] = None
    depth: int = 0
    pattern: Optional[str] = None

    # Tool field names, in the form callers send them
    FIELD_NAMES = {
        'organizationId': 'organization_id',
        'projectId': 'project_id',
        'repositoryPattern': 'repository_pattern',
        'depth': 'depth',
        'pattern': 'pattern',
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TreeRequest':
        """Build a request from tool arguments.

        Both camelCase tool names and snake_case attribute names are
        accepted. Unknown keys are ignored; ``None`` values fall back to
        the defaults.
        """
        kwargs = {}
        for key, value in data.items():
            attribute = cls.FIELD_NAMES.get(key, key)
            if attribute in cls.FIELD_NAMES.values() and value is not None:
                kwargs[attribute] = value
        return cls(**kwargs)

    def validate(self) -> List[str]:
        """Validate the request.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            errors.append("depth must be an integer")
        elif self.depth < 0:
            errors.append("depth cannot be negative")
        elif self.depth > MAX_DEPTH:
            errors.append(f"depth cannot exceed {MAX_DEPTH}")

        for name in ('repository_pattern', 'pattern'):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, str) or not value:
                errors.append(f"{name} must be a non-empty string")

        if self.project_id is not None and not isinstance(self.project_id, str):
            errors.append("project_id must be a string")

        return errors
