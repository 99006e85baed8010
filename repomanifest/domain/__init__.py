"""
Domain layer for repomanifest.

Contains pure domain objects with no I/O or side effects:
- RepositoryMetadata: Input to categorization
- Repository: A tracked sub-repository record
- UpstreamSync: Upstream branch tracking settings
- RepositoryManifest: The versioned list of all records

The pydantic models double as the manifest schema.
"""

from .repository import (
    Category,
    Priority,
    Status,
    RepositoryMetadata,
    Repository,
    UpstreamSync,
)
from .manifest import RepositoryManifest

__all__ = [
    'Category',
    'Priority',
    'Status',
    'RepositoryMetadata',
    'Repository',
    'UpstreamSync',
    'RepositoryManifest',
]
