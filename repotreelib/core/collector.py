"""Tree item collector.

The collector turns accepted RawEntry records into TreeItems and keeps
the directory and file counts in step with what it emits.
"""

from typing import List, Optional, Tuple

from .adapter import GlobPatternMatcher, PatternMatcher
from .node import RawEntry, Stats, TreeItem
from .paths import name_of


class TreeCollector:
    """Collects TreeItems and Stats for one repository.

    If a file-name pattern is given, files whose name does not match are
    dropped entirely: not emitted and not counted. Folders are never
    filtered, even when none of their files match.
    """

    def __init__(
        self,
        pattern: Optional[str] = None,
        matcher: Optional[PatternMatcher] = None
    ):
        """Initialize collector.

        Args:
            pattern: Optional glob applied to file names
            matcher: Glob matcher (defaults to GlobPatternMatcher)
        """
        self.pattern = pattern
        self.matcher = matcher or GlobPatternMatcher()
        self.reset()

    def reset(self):
        """Reset collected items and counters."""
        self.items: List[TreeItem] = []
        self.stats = Stats()

    def accepts(self, entry: RawEntry) -> bool:
        """Check if an entry passes the file-name filter."""
        if entry.is_folder or not self.pattern:
            return True
        return self.matcher.matches_glob(name_of(entry.path), self.pattern)

    def collect(self, entry: RawEntry, level: int) -> Optional[TreeItem]:
        """Collect one entry at the given level.

        Args:
            entry: Entry from the listing collaborator
            level: Level to tag the item with

        Returns:
            The emitted TreeItem, or None if the entry was filtered out
        """
        if not self.accepts(entry):
            return None

        item = TreeItem(
            name=name_of(entry.path),
            path=entry.path,
            is_folder=entry.is_folder,
            level=level,
        )
        self.items.append(item)
        self.stats.record(entry.is_folder)
        return item

    def get_result(self) -> Tuple[List[TreeItem], Stats]:
        """Get collected items and their counts."""
        return self.items, self.stats
