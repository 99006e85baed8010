"""
Handles the 'categorize' command: shows where a repository would land.
"""

import click

from ..categorization import categorize_repository, get_workspace_path
from ..cli_utils import print_json
from ..domain import RepositoryMetadata
from ..domain.repository import technologies_from


@click.command(name='categorize')
@click.argument('name')
@click.option('-d', '--description', default='', help='Repository description')
@click.option('-t', '--tech', 'technologies', multiple=True, help='Technology (repeatable)')
def categorize_handler(name, description, technologies):
    """Categorize a repository and show its workspace path.

    \b
    Examples:
        repomanifest categorize wayru-sdk -d "Core client library" -t TypeScript
        repomanifest categorize staking-contracts -t Solidity
    """
    metadata = RepositoryMetadata(
        name=name,
        description=description,
        technologies=tuple(technologies_from(technologies)),
    )
    category = categorize_repository(metadata)
    print_json({
        'name': name,
        'category': category.value,
        'workspace': get_workspace_path(category, name),
    }, pretty=False)
