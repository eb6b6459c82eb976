"""Exception hierarchy for repotreelib."""


class RepoTreeError(Exception):
    """Base error for all custom exceptions."""


class ValidationError(RepoTreeError):
    """Raised when a tree request is invalid."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid tree request: " + "; ".join(self.problems))


class RepositoryListingError(RepoTreeError):
    """Raised when the project's repositories cannot be enumerated.

    This is the only failure that aborts a whole tree build; every later
    problem is reported per repository.
    """
