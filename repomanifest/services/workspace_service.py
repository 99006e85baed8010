"""
Workspace service for repomanifest.

High-level operations over the manifest for the list, add and status
commands: filtering and grouping records, building new records from
raw metadata, registering them, and laying out their workspace
directories.
"""

from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
import logging

from ..categorization import categorize_repository, get_workspace_path
from ..domain import Category, Priority, Repository, RepositoryManifest, RepositoryMetadata, Status
from ..exit_codes import CommandError
from ..infra import ManifestStore
from ..serialization import parse_repository

logger = logging.getLogger(__name__)

README_TEMPLATE = """# {name}

{description}

- Category: {category}
- Source: {source}
- Upstream branch: {branch}
"""


class WorkspaceService:
    """
    Service for querying and registering tracked repositories.

    Example:
        service = WorkspaceService(root=Path("."), store=ManifestStore(path))
        for repo in service.list(category="app"):
            print(repo.name, service.workspace_exists(repo))
    """

    def __init__(self, root: Path, store: ManifestStore):
        """
        Initialize WorkspaceService.

        Args:
            root: Monorepo root that workspace paths are relative to
            store: Manifest store to read and write
        """
        self.root = Path(root)
        self.store = store

    def list(
        self,
        category: Optional[Union[Category, str]] = None,
        status: Optional[Union[Status, str]] = None,
    ) -> List[Repository]:
        """
        Repositories from the manifest, sorted by name.

        Args:
            category: Only this category
            status: Only this lifecycle status
        """
        repos = list(self.store.load().repositories)
        if category is not None:
            wanted_category = Category(category)
            repos = [r for r in repos if r.category is wanted_category]
        if status is not None:
            wanted_status = Status(status)
            repos = [r for r in repos if r.status is wanted_status]
        return sorted(repos, key=lambda r: r.name)

    @staticmethod
    def group_by_category(repos: Iterable[Repository]) -> Dict[Category, List[Repository]]:
        """Group repositories by category, categories in alphabetical order."""
        groups: Dict[Category, List[Repository]] = {}
        for repo in repos:
            groups.setdefault(repo.category, []).append(repo)
        return OrderedDict(sorted(groups.items(), key=lambda item: item[0].value))

    @staticmethod
    def summary(repos: Iterable[Repository]) -> Dict[str, int]:
        """Count repositories per status; every status is present."""
        counts = {status.value: 0 for status in Status}
        for repo in repos:
            counts[repo.status.value] += 1
        return counts

    def workspace_dir(self, repo: Repository) -> Path:
        return self.root / repo.workspace

    def workspace_exists(self, repo: Repository) -> bool:
        """Check whether the repository's workspace has been materialized."""
        return self.workspace_dir(repo).is_dir()

    def build_repository(
        self,
        name: str,
        source: str,
        description: str,
        technologies: Iterable[str],
        category: Optional[Union[Category, str]] = None,
        priority: Union[Priority, str] = Priority.IMPORTANT,
        status: Union[Status, str] = Status.PENDING,
        maintainers: Iterable[str] = (),
        branch: str = "main",
        sync_enabled: bool = True,
        workspace: Optional[str] = None,
    ) -> Repository:
        """
        Build a validated Repository from raw metadata.

        The category is derived by the categorizer unless given, and the
        workspace path from the category unless given.

        Raises:
            ValidationError: if any field is invalid
        """
        technologies = list(technologies)
        if category is None:
            category = categorize_repository(
                RepositoryMetadata(name=name, description=description, technologies=tuple(technologies))
            )
            logger.debug(f"Categorized {name} as {category.value}")
        category_value = category.value if isinstance(category, Category) else category

        if workspace is None:
            workspace = get_workspace_path(category_value, name)

        return parse_repository({
            'name': name,
            'source': source,
            'workspace': workspace,
            'category': category_value,
            'priority': priority.value if isinstance(priority, Priority) else priority,
            'status': status.value if isinstance(status, Status) else status,
            'description': description,
            'technologies': technologies,
            'maintainers': list(maintainers),
            'upstreamSync': {
                'enabled': sync_enabled,
                'lastSync': None,
                'branch': branch,
            },
        })

    def register(self, repository: Repository) -> RepositoryManifest:
        """
        Append a repository to the manifest and save it.

        Raises:
            ValidationError: if the name is already registered or the record is invalid
        """
        manifest = self.store.update(lambda m: m.add_repository(parse_repository(repository)))
        logger.info(f"Registered {repository.name} at {repository.workspace}")
        return manifest

    def set_status(self, name: str, status: Union[Status, str]) -> Repository:
        """
        Move a repository to a new lifecycle status.

        Raises:
            CommandError: if no repository has that name
        """
        new_status = Status(status)

        def apply(manifest: RepositoryManifest) -> RepositoryManifest:
            repo = manifest.get(name)
            if repo is None:
                raise CommandError(f"No repository named '{name}' in manifest")
            return manifest.replace_repository(repo.with_status(new_status))

        manifest = self.store.update(apply)
        logger.info(f"{name} is now {new_status.value}")
        return manifest.get(name)

    def scaffold(self, repo: Repository) -> List[Path]:
        """
        Create the workspace directory tree for a repository.

        Lays out <workspace>/src/__tests__/.gitkeep and a README.md.

        Returns:
            Paths of the files created

        Raises:
            CommandError: if the workspace already exists
        """
        workspace = self.workspace_dir(repo)
        if workspace.exists():
            raise CommandError(f"Workspace already exists: {repo.workspace}")

        tests_dir = workspace / 'src' / '__tests__'
        tests_dir.mkdir(parents=True)

        gitkeep = tests_dir / '.gitkeep'
        gitkeep.write_text('')

        readme = workspace / 'README.md'
        readme.write_text(README_TEMPLATE.format(
            name=repo.name,
            description=repo.description,
            category=repo.category.value,
            source=repo.source,
            branch=repo.upstream_sync.branch,
        ))

        logger.info(f"Created workspace {repo.workspace}")
        return [gitkeep, readme]
