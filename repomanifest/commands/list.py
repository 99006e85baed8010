"""
Handles the 'list' command for displaying tracked workspaces.
"""

import click

from ..cli_utils import pass_app, print_json, standard_command
from ..domain import Category, Status
from ..render import render_workspaces
from ..serialization import repository_to_dict
from ..services import WorkspaceService


@click.command(name='list')
@click.option('-c', '--category', type=click.Choice([c.value for c in Category]),
              help='Only show repositories in this category')
@click.option('-s', '--status', type=click.Choice([s.value for s in Status]),
              help='Only show repositories with this status')
@click.option('--json', 'as_json', is_flag=True, help='Output a JSON array instead of tables')
@pass_app
@standard_command
def list_handler(app, category, status, as_json):
    """List workspaces in the monorepo.

    \b
    Examples:
        repomanifest list                   # All, grouped by category
        repomanifest list --category app    # Only apps
        repomanifest list --json            # JSON output
    """
    service = WorkspaceService(app.root, app.store)
    repos = service.list(category=category, status=status)

    if as_json:
        print_json([repository_to_dict(repo) for repo in repos])
        return

    render_workspaces(
        service.group_by_category(repos),
        service.summary(repos),
        service.workspace_exists,
    )
