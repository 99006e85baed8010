"""
RepositoryManifest: the root document listing every tracked repository.

The manifest is loaded wholesale, changed in memory and rewritten
wholesale. Like Repository it is immutable; the mutating helpers
return a new manifest.
"""

from collections import Counter
from typing import Any, Callable, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator
from pydantic_core import PydanticCustomError

from ..errors import ValidationError, Violation
from ..utils import is_iso_datetime, is_semver, utc_timestamp
from .repository import Repository
from .validators import validate_with_problems


class RepositoryManifest(BaseModel):
    """
    Versioned, ordered list of repository records.

    Attributes:
        version: Manifest schema version (MAJOR.MINOR.PATCH)
        last_updated: ISO 8601 timestamp of the last rewrite ("lastUpdated" on disk)
        repositories: Records in insertion order; names are unique
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    version: StrictStr
    last_updated: StrictStr = Field(alias="lastUpdated")
    repositories: List[Repository]

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if not is_semver(v):
            raise PydanticCustomError('semver', "Version must be in semver format (MAJOR.MINOR.PATCH)")
        return v

    @field_validator("last_updated")
    @classmethod
    def validate_last_updated(cls, v: str) -> str:
        if not is_iso_datetime(v):
            raise PydanticCustomError('iso_datetime', "Last updated must be a valid ISO 8601 datetime")
        return v

    @model_validator(mode="wrap")
    @classmethod
    def check_unique_names(
        cls, data: Any, handler: Callable[[Any], 'RepositoryManifest']
    ) -> 'RepositoryManifest':
        problems = []
        duplicates = duplicate_names(raw_names(data))
        if duplicates:
            problems.append(((), PydanticCustomError(
                'duplicate_name',
                "Repository names must be unique; duplicated: {names}",
                {'names': ", ".join(duplicates)},
            )))
        return validate_with_problems(cls.__name__, data, handler, problems)

    @classmethod
    def empty(cls, version: str = "1.0.0", last_updated: Optional[str] = None) -> 'RepositoryManifest':
        """Create a manifest with no repositories."""
        return cls(
            version=version,
            last_updated=last_updated or utc_timestamp(),
            repositories=[],
        )

    def get(self, name: str) -> Optional[Repository]:
        """Find a repository by name."""
        for repo in self.repositories:
            if repo.name == name:
                return repo
        return None

    def __contains__(self, name: object) -> bool:
        return any(repo.name == name for repo in self.repositories)

    @property
    def names(self) -> List[str]:
        return [repo.name for repo in self.repositories]

    def add_repository(self, repository: Repository) -> 'RepositoryManifest':
        """
        Append a repository, keeping names unique.

        Raises:
            ValidationError: if a repository with the same name exists
        """
        if repository.name in self:
            raise ValidationError(
                [Violation("repositories", f"Repository '{repository.name}' is already registered")]
            )
        return self.model_copy(update={'repositories': [*self.repositories, repository]})

    def replace_repository(self, repository: Repository) -> 'RepositoryManifest':
        """
        Swap in a new version of an existing record, keeping its position.

        Raises:
            KeyError: if no repository has that name
        """
        if repository.name not in self:
            raise KeyError(repository.name)
        repos = [repository if r.name == repository.name else r for r in self.repositories]
        return self.model_copy(update={'repositories': repos})

    def remove_repository(self, name: str) -> 'RepositoryManifest':
        """
        Drop a repository from tracking.

        Raises:
            KeyError: if no repository has that name
        """
        if name not in self:
            raise KeyError(name)
        repos = [r for r in self.repositories if r.name != name]
        return self.model_copy(update={'repositories': repos})

    def touch(self, timestamp: Optional[str] = None) -> 'RepositoryManifest':
        """Stamp lastUpdated, defaulting to now."""
        return self.model_copy(update={'last_updated': timestamp or utc_timestamp()})


def raw_names(data: Any) -> List[str]:
    """Repository names present in raw manifest input, skipping malformed entries."""
    if isinstance(data, RepositoryManifest):
        return data.names
    if not isinstance(data, Mapping):
        return []
    repos = data.get('repositories')
    if not isinstance(repos, list):
        return []
    names = []
    for repo in repos:
        name = repo.name if isinstance(repo, Repository) else (
            repo.get('name') if isinstance(repo, Mapping) else None
        )
        if isinstance(name, str) and name:
            names.append(name)
    return names


def duplicate_names(names: Iterable[str]) -> List[str]:
    """Names that occur more than once, in first-seen order."""
    counts = Counter(names)
    return [name for name in counts if counts[name] > 1]
