"""
Infrastructure layer for repomanifest.

Contains abstractions for external systems:
- GitClient: Git command execution
- ManifestStore: Manifest file persistence

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .manifest_store import ManifestStore, DEFAULT_MANIFEST_PATH

__all__ = [
    'GitClient',
    'ManifestStore',
    'DEFAULT_MANIFEST_PATH',
]
