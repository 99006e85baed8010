"""
Repository categorization.

Decides which category a repository belongs to from its name,
description and technology stack, and where in the monorepo its
workspace lives.

Rules are checked in order and the first match wins:
1. contract: a contract language in the stack, or a contract keyword
2. tool: a tool/infrastructure keyword
3. app: an application keyword
4. package: a library keyword, a general-purpose language, or nothing at all

Keywords are matched as substrings of the combined lowercase text, not
as whole words, so "client" matches "cli" and "typescript" matches
"script". Existing categorization decisions depend on this, so it is kept.
"""

import re
from typing import Iterable, Union

from .domain.repository import Category, RepositoryMetadata

CONTRACT_LANGUAGES = ('solidity', 'rust', 'vyper', 'cairo')

CONTRACT_KEYWORDS = (
    'contract',
    'solidity',
    'rust',
    'program',
    'token',
    'staking',
    'rewards',
    'governance',
    'erc-20',
    'erc20',
)

TOOL_KEYWORDS = (
    'tool',
    'cli',
    'script',
    'automation',
    'deploy',
    'infra',
    'infrastructure',
    'devops',
    'ci',
    'cd',
)

APP_KEYWORDS = (
    'app',
    'web',
    'frontend',
    'ui',
    'dashboard',
    'portal',
    'client',
    'mobile',
    'desktop',
    'hotspot',
    'explorer',
    'interface',
)

PACKAGE_KEYWORDS = (
    'sdk',
    'lib',
    'library',
    'package',
    'utils',
    'helper',
    'component',
    'config',
    'plugin',
    'middleware',
    'service',
)

GENERAL_LANGUAGES = ('typescript', 'javascript', 'python', 'go', 'rust')

_INVALID_NAME_CHARS = re.compile(r'[^a-z0-9-]')


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs anywhere in text."""
    return any(keyword in text for keyword in keywords)


def uses_any(technologies: Iterable[str], languages: Iterable[str]) -> bool:
    """True if any technology case-insensitively equals one of languages."""
    wanted = set(languages)
    return any((tech or '').lower() in wanted for tech in technologies)


def categorize_repository(metadata: RepositoryMetadata) -> Category:
    """
    Categorize a repository from its metadata.

    Total and deterministic: every input maps to exactly one category and
    the same input always maps to the same category.

    Args:
        metadata: Name, description and technologies of the repository

    Returns:
        The category
    """
    text = metadata.search_text
    technologies = metadata.technologies

    if uses_any(technologies, CONTRACT_LANGUAGES) or contains_any(text, CONTRACT_KEYWORDS):
        return Category.CONTRACT

    if contains_any(text, TOOL_KEYWORDS):
        return Category.TOOL

    if contains_any(text, APP_KEYWORDS):
        return Category.APP

    if contains_any(text, PACKAGE_KEYWORDS):
        return Category.PACKAGE

    if uses_any(technologies, GENERAL_LANGUAGES):
        return Category.PACKAGE

    return Category.PACKAGE


def normalize_name(repository_name: str) -> str:
    """
    Lowercase a name and replace anything outside [a-z0-9-] with '-'.

    Replacement is one-to-one; runs of invalid characters are not collapsed.
    """
    return _INVALID_NAME_CHARS.sub('-', repository_name.lower())


def workspace_prefix(category: Union[Category, str]) -> str:
    """Top-level workspace directory for a category; unknown values map to packages."""
    try:
        return Category(category).namespace
    except ValueError:
        return Category.PACKAGE.namespace


def get_workspace_path(category: Union[Category, str], repository_name: str) -> str:
    """
    Workspace path for a repository.

    Examples:
        get_workspace_path(Category.PACKAGE, "wayru-sdk") -> "packages/wayru-sdk"
        get_workspace_path("app", "Hotspot-App")          -> "apps/hotspot-app"
        get_workspace_path("tool", "deploy_scripts")      -> "packages/deploy-scripts"
    """
    return f"{workspace_prefix(category)}/{normalize_name(repository_name)}"
