"""
Repository domain objects for repomanifest.

A Repository is one tracked sub-repository of the monorepo. The
pydantic models in this module are the schema: every field constraint
lives here and nowhere else, and the codec in serialization.py only
ever asks these models to validate.

Models are immutable. To "update" a record, use the with_* helpers,
which return a new instance.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from ..utils import is_iso_datetime, is_url, is_workspace_path
from .validators import validate_with_problems


class Category(str, Enum):
    """Role of a repository; also decides its workspace namespace."""
    APP = "app"
    PACKAGE = "package"
    CONTRACT = "contract"
    TOOL = "tool"

    @property
    def namespace(self) -> str:
        """Top-level workspace directory for this category."""
        if self is Category.APP:
            return "apps"
        if self is Category.CONTRACT:
            return "contracts"
        # Tools share the packages/ namespace
        return "packages"


class Priority(str, Enum):
    """How urgently a repository should be forked and integrated."""
    CRITICAL = "critical"
    IMPORTANT = "important"
    NICE_TO_HAVE = "nice-to-have"


class Status(str, Enum):
    """Lifecycle state of the integration effort."""
    PENDING = "pending"
    FORKED = "forked"
    INTEGRATED = "integrated"
    DEPRECATED = "deprecated"


@dataclass(frozen=True)
class RepositoryMetadata:
    """
    Input to categorization.

    Attributes:
        name: Repository identifier (e.g., "wayru-sdk")
        description: Free text description
        technologies: Technology stack, e.g. ("TypeScript", "React")
        purpose: Reserved; not consulted by the categorizer
    """
    name: str
    description: str = ""
    technologies: Tuple[str, ...] = field(default_factory=tuple)
    purpose: Optional[str] = None

    def __post_init__(self):
        # Accept None or any iterable (lists from JSON, generators) but store a tuple
        object.__setattr__(self, 'technologies', tuple(self.technologies or ()))

    @property
    def search_text(self) -> str:
        """Lowercased name, description and technologies joined by spaces."""
        parts = [self.name or "", self.description or ""]
        parts.extend(tech or "" for tech in self.technologies)
        return " ".join(parts).lower()


NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class UpstreamSync(BaseModel):
    """Upstream synchronization settings for a forked repository."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    enabled: StrictBool
    last_sync: Optional[StrictStr] = Field(default=None, alias="lastSync")
    branch: NonEmptyStr

    @field_validator("last_sync")
    @classmethod
    def validate_last_sync(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_iso_datetime(v):
            raise PydanticCustomError(
                'iso_datetime',
                "Last sync must be a valid ISO 8601 datetime or null",
            )
        return v


class Repository(BaseModel):
    """
    A tracked sub-repository.

    Example:
        repo = Repository(
            name="wayru-sdk",
            source="https://github.com/Wayru-Network/wayru-sdk",
            workspace="packages/wayru-sdk",
            category=Category.PACKAGE,
            priority=Priority.CRITICAL,
            status=Status.PENDING,
            description="Core client library",
            technologies=["TypeScript"],
            maintainers=[],
            upstream_sync=UpstreamSync(enabled=True, branch="main"),
        )
        forked = repo.with_status(Status.FORKED)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: NonEmptyStr
    source: StrictStr
    workspace: StrictStr
    category: Category
    priority: Priority
    status: Status
    description: NonEmptyStr
    technologies: List[NonEmptyStr] = Field(min_length=1)
    maintainers: List[StrictStr]
    upstream_sync: UpstreamSync = Field(alias="upstreamSync")

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        if not is_url(v):
            raise PydanticCustomError('url', "Source must be a valid URL")
        return v

    @field_validator("workspace")
    @classmethod
    def validate_workspace(cls, v: str) -> str:
        if not is_workspace_path(v):
            raise PydanticCustomError(
                'workspace_path',
                "Workspace must be a lowercase relative path of [a-z0-9-] segments separated by single '/'",
            )
        return v

    @model_validator(mode="wrap")
    @classmethod
    def check_workspace_namespace(cls, data: Any, handler: Callable[[Any], 'Repository']) -> 'Repository':
        problems = []
        error = workspace_namespace_error(data)
        if error is not None:
            problems.append(((), error))
        return validate_with_problems(cls.__name__, data, handler, problems)

    def with_status(self, status: Union[Status, str]) -> 'Repository':
        """Create a new Repository with an updated lifecycle status."""
        return self.model_copy(update={'status': Status(status)})

    def with_priority(self, priority: Union[Priority, str]) -> 'Repository':
        """Create a new Repository with an updated priority."""
        return self.model_copy(update={'priority': Priority(priority)})

    def with_last_sync(self, timestamp: Optional[str]) -> 'Repository':
        """Create a new Repository recording the last upstream sync time."""
        sync = self.upstream_sync.model_copy(update={'last_sync': timestamp})
        return self.model_copy(update={'upstream_sync': sync})

    def metadata(self) -> RepositoryMetadata:
        """The categorization input this record was (or would be) built from."""
        return RepositoryMetadata(
            name=self.name,
            description=self.description,
            technologies=tuple(self.technologies),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.workspace})"


def workspace_namespace_error(data: Any) -> Optional[PydanticCustomError]:
    """
    Check a raw record's workspace against its category's namespace.

    Only runs when both fields are individually well-formed; otherwise
    their own field errors describe the problem.
    """
    if not isinstance(data, Mapping):
        return None
    workspace = data.get('workspace')
    if not isinstance(workspace, str) or not is_workspace_path(workspace):
        return None
    try:
        category = Category(data.get('category'))
    except (ValueError, TypeError):
        return None

    expected = category.namespace
    if workspace.split('/', 1)[0] == expected:
        return None
    return PydanticCustomError(
        'workspace_category',
        "Workspace '{workspace}' must live under '{expected}/' for category '{category}'",
        {'workspace': workspace, 'expected': expected, 'category': category.value},
    )


def technologies_from(values: Iterable[str]) -> List[str]:
    """Strip technology names and drop blanks, keeping order."""
    return [v.strip() for v in values if v and v.strip()]
