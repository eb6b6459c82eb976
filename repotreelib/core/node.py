"""Data model for repository tree construction.

Entries arrive from the listing collaborator as RawEntry records and leave
the engine as flat TreeItem lists with Stats, grouped per repository.
Everything here is created fresh per call; nothing is shared between calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


BRANCH_REF_PREFIX = "refs/heads/"
UNKNOWN_REPOSITORY_NAME = "Unknown"


class ObjectKind(Enum):
    """Kind of object behind a listed entry."""
    BLOB = "blob"   # File content
    TREE = "tree"   # Folder
    BAD = "bad"     # Unreadable entry, always discarded


@dataclass(frozen=True)
class RawEntry:
    """One entry as returned by ``list_items``."""

    path: str
    is_folder: bool = False
    object_kind: ObjectKind = ObjectKind.BLOB

    @property
    def is_bad(self) -> bool:
        return self.object_kind is ObjectKind.BAD


@dataclass(frozen=True)
class RepositoryRef:
    """Reference to a repository supplied by the listing collaborator.

    Attributes:
        id: Opaque repository identifier passed back to ``list_items``
        name: Repository display name (may be missing)
        default_branch: Full default branch ref, e.g. ``refs/heads/main``
    """

    id: str
    name: Optional[str] = None
    default_branch: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or UNKNOWN_REPOSITORY_NAME

    @property
    def branch_name(self) -> Optional[str]:
        """Short branch name with the ``refs/heads/`` prefix removed.

        Returns:
            Branch name, or None when the repository has no default branch
        """
        if not self.default_branch:
            return None
        if self.default_branch.startswith(BRANCH_REF_PREFIX):
            return self.default_branch[len(BRANCH_REF_PREFIX):] or None
        return self.default_branch


@dataclass
class TreeItem:
    """Flat, depth-annotated record of one file or folder."""

    name: str
    path: str
    is_folder: bool
    level: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'isFolder': self.is_folder,
            'level': self.level,
        }


@dataclass
class Stats:
    """Directory and file counts for one repository."""

    directories: int = 0
    files: int = 0

    def record(self, is_folder: bool) -> None:
        """Count one emitted item."""
        if is_folder:
            self.directories += 1
        else:
            self.files += 1

    @property
    def total(self) -> int:
        return self.directories + self.files

    def to_dict(self) -> Dict[str, int]:
        return {'directories': self.directories, 'files': self.files}


@dataclass
class RepositoryTreeResult:
    """Tree of a single repository, or the reason it could not be built.

    A failed repository is still a result: ``tree`` is empty, ``stats`` are
    zeroed and ``error`` explains what went wrong.
    """

    name: str
    tree: List[TreeItem] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)
    error: Optional[str] = None

    @classmethod
    def failed(cls, name: str, error: str) -> 'RepositoryTreeResult':
        return cls(name=name, tree=[], stats=Stats(), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'tree': [item.to_dict() for item in self.tree],
            'stats': self.stats.to_dict(),
        }
        if self.error is not None:
            data['error'] = self.error
        return data


@dataclass
class AllRepositoriesTreeResponse:
    """Per-repository results in repository listing order."""

    repositories: List[RepositoryTreeResult] = field(default_factory=list)

    def get(self, name: str) -> Optional[RepositoryTreeResult]:
        """Find a repository result by name."""
        for result in self.repositories:
            if result.name == name:
                return result
        return None

    @property
    def failed(self) -> List[RepositoryTreeResult]:
        return [result for result in self.repositories if not result.ok]

    def to_dict(self) -> Dict[str, Any]:
        return {'repositories': [result.to_dict() for result in self.repositories]}
