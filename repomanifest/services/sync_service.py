"""
Upstream sync service for repomanifest.

Brings forked workspaces up to date with their upstream sources:
for each repository with sync enabled, add the upstream remote, fetch
the tracked branch and merge it. Successful runs record lastSync.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from ..domain import Repository, RepositoryManifest
from ..exit_codes import NoReposFoundError
from ..infra import GitClient, ManifestStore
from ..utils import utc_timestamp

logger = logging.getLogger(__name__)


class SyncOutcome(Enum):
    """What happened to one repository during a sync run."""
    SYNCED = "synced"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncResult:
    """Result of syncing a single repository."""
    name: str
    outcome: SyncOutcome
    message: str = ""
    synced_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'outcome': self.outcome.value,
            'message': self.message,
            'synced_at': self.synced_at,
        }


class SyncService:
    """
    Service for syncing workspaces with their upstream repositories.

    Example:
        service = SyncService(root=Path("."), store=store)
        for result in service.sync():
            print(result.name, result.outcome.value)
    """

    def __init__(
        self,
        root: Path,
        store: ManifestStore,
        git_client: Optional[GitClient] = None,
        remote_name: str = "upstream",
    ):
        """
        Initialize SyncService.

        Args:
            root: Monorepo root that workspace paths are relative to
            store: Manifest store to read and write
            git_client: Git client instance (creates default if None)
            remote_name: Name of the remote that points at the upstream source
        """
        self.root = Path(root)
        self.store = store
        self.git = git_client or GitClient()
        self.remote_name = remote_name

    def sync(self, name: Optional[str] = None) -> List[SyncResult]:
        """
        Sync every repository, or just the one named.

        A failure in one repository does not stop the others. The manifest
        is saved once, after all repositories are processed, and only if
        something was synced.

        Raises:
            NoReposFoundError: if name is given but not in the manifest
        """
        manifest = self.store.load()
        repos = manifest.repositories
        if name is not None:
            repos = [r for r in repos if r.name == name]
            if not repos:
                raise NoReposFoundError(f"No repositories found matching: {name}")

        logger.info(f"Syncing {len(repos)} repositories")
        results = [self.sync_repository(repo) for repo in repos]

        synced = {r.name: r.synced_at for r in results if r.outcome is SyncOutcome.SYNCED}
        if synced:
            def record(current: RepositoryManifest) -> RepositoryManifest:
                for repo_name, timestamp in synced.items():
                    repo = current.get(repo_name)
                    if repo is not None:
                        current = current.replace_repository(repo.with_last_sync(timestamp))
                return current

            self.store.update(record)

        return results

    def sync_repository(self, repo: Repository) -> SyncResult:
        """Sync one repository's workspace with its upstream branch."""
        if not repo.upstream_sync.enabled:
            logger.info(f"Skipping {repo.name} (sync disabled)")
            return SyncResult(repo.name, SyncOutcome.SKIPPED, "sync disabled")

        workspace = self.root / repo.workspace
        if not workspace.is_dir():
            logger.info(f"Skipping {repo.name} (workspace not found: {repo.workspace})")
            return SyncResult(repo.name, SyncOutcome.SKIPPED, f"workspace not found: {repo.workspace}")

        cwd = str(workspace)
        branch = repo.upstream_sync.branch

        output, code = self.git.add_remote(cwd, self.remote_name, repo.source)
        if code != 0:
            return self._failed(repo, "add remote", output)

        output, code = self.git.fetch(cwd, self.remote_name, branch)
        if code != 0:
            return self._failed(repo, "fetch", output)

        output, code = self.git.merge(cwd, f"{self.remote_name}/{branch}")
        if code != 0:
            return self._failed(repo, "merge", output)

        logger.info(f"Synced {repo.name}")
        return SyncResult(repo.name, SyncOutcome.SYNCED, output or "", synced_at=utc_timestamp())

    def _failed(self, repo: Repository, step: str, output: Optional[str]) -> SyncResult:
        message = f"{step} failed" + (f": {output}" if output else "")
        logger.error(f"Failed to sync {repo.name}: {message}")
        return SyncResult(repo.name, SyncOutcome.FAILED, message)
