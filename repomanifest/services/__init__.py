"""
Service layer for repomanifest.

Contains business logic that orchestrates domain objects and infrastructure:
- WorkspaceService: Listing, registration, status changes, scaffolding
- SyncService: Upstream synchronization

Services are the primary API for commands to use.
"""

from .workspace_service import WorkspaceService
from .sync_service import SyncService, SyncResult, SyncOutcome

__all__ = [
    'WorkspaceService',
    'SyncService',
    'SyncResult',
    'SyncOutcome',
]
