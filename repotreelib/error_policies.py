"""
Subtree error policies for repotreelib.

When a leveled traversal fails to list one folder's children, the failure
is handed to an ErrorPolicy. The policy decides whether the subtree is
treated as empty (traversal continues with the folder's siblings) or the
error is re-raised, which fails the whole repository instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .core.node import RawEntry

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for subtree error handling policies.
    """

    @abstractmethod
    async def handle(self, error: Exception, path: str) -> List[RawEntry]:
        """
        Handle a failed child listing.

        Args:
            error: The exception raised by the listing call
            path: Folder whose children could not be listed

        Returns:
            Entries to use in place of the listing (normally none),
            or re-raises the exception to fail the repository.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that re-raises any error.

    A single unreadable folder then fails the repository it belongs to.
    Other repositories in the same call are unaffected.
    """

    async def handle(self, error: Exception, path: str) -> List[RawEntry]:
        raise error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors silently and skips the failed subtree.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []

    async def handle(self, error: Exception, path: str) -> List[RawEntry]:
        self._record(error, path)
        return []

    def _record(self, error: Exception, path: str) -> None:
        self.errors.append({
            'path': path,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        self.skipped_paths.append(path)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that logs errors and continues traversal.

    This is the default: the failed folder stays in the result, its
    children are simply missing, and sibling folders are still listed.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for each error; otherwise
                errors are only logged at debug level
        """
        super().__init__()
        self.verbose = verbose

    async def handle(self, error: Exception, path: str) -> List[RawEntry]:
        self._record(error, path)
        level = logging.WARNING if self.verbose else logging.DEBUG
        logger.log(level, "Error processing folder %s: %s", path, error)
        return []
