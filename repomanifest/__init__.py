"""
repomanifest - A schema-validated registry of the sub-repositories in a monorepo.

Quick Start:
    from repomanifest import (
        RepositoryMetadata, categorize_repository, get_workspace_path,
        serialize_manifest, deserialize_manifest,
    )

    meta = RepositoryMetadata(
        name="wayru-sdk",
        description="Core library",
        technologies=("Go",),
    )
    category = categorize_repository(meta)              # Category.PACKAGE
    path = get_workspace_path(category, meta.name)      # "packages/wayru-sdk"

    manifest = deserialize_manifest(text)               # ParseError / ValidationError
    text = serialize_manifest(manifest)                 # ValidationError

Domain Objects:
    RepositoryMetadata - Input to categorization
    Repository - A tracked sub-repository record
    RepositoryManifest - The versioned list of records

Errors:
    ParseError - Text is not well-formed JSON
    ValidationError - Value violates the schema (lists every violation)
"""

__version__ = "0.1.0"

# Domain objects
from .domain import (
    Category,
    Priority,
    Status,
    RepositoryMetadata,
    Repository,
    UpstreamSync,
    RepositoryManifest,
)

# Categorization
from .categorization import categorize_repository, get_workspace_path

# Codec
from .serialization import (
    serialize_manifest,
    deserialize_manifest,
    validate_manifest,
    validate_repository,
)

# Errors
from .errors import ManifestError, ParseError, ValidationError, Violation

# Configuration
from .config import load_config, save_config

__all__ = [
    "__version__",
    # Domain objects
    "Category",
    "Priority",
    "Status",
    "RepositoryMetadata",
    "Repository",
    "UpstreamSync",
    "RepositoryManifest",
    # Categorization
    "categorize_repository",
    "get_workspace_path",
    # Codec
    "serialize_manifest",
    "deserialize_manifest",
    "validate_manifest",
    "validate_repository",
    # Errors
    "ManifestError",
    "ParseError",
    "ValidationError",
    "Violation",
    # Configuration
    "load_config",
    "save_config",
]
