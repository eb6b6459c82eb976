"""Testing utilities for repotreelib consumers."""

from .fixtures import InMemoryListingClient, entries_from_paths

__all__ = ['InMemoryListingClient', 'entries_from_paths']
