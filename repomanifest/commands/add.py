"""
Handles the 'add' and 'status' commands, which change manifest records.
"""

import click

from ..cli_utils import pass_app, print_json, standard_command
from ..domain import Category, Priority, Status
from ..domain.repository import technologies_from
from ..exit_codes import CommandError
from ..serialization import repository_to_dict
from ..services import WorkspaceService


@click.command(name='add')
@click.argument('name')
@click.argument('source')
@click.option('-d', '--description', required=True, help='Human-readable description')
@click.option('-t', '--tech', 'technologies', multiple=True, help='Technology (repeatable, at least one)')
@click.option('-c', '--category', type=click.Choice([c.value for c in Category]),
              help='Category (derived from name, description and technologies if omitted)')
@click.option('-p', '--priority', type=click.Choice([p.value for p in Priority]), default=None,
              help='Priority (default from config)')
@click.option('-s', '--status', type=click.Choice([s.value for s in Status]), default=None,
              help='Initial status (default from config)')
@click.option('-m', '--maintainer', 'maintainers', multiple=True, help='Maintainer (repeatable)')
@click.option('-b', '--branch', default=None, help='Upstream branch to track (default from config)')
@click.option('--workspace', default=None, help='Override the derived workspace path')
@click.option('--no-sync', is_flag=True, help='Disable upstream sync for this repository')
@click.option('--scaffold', is_flag=True, help='Create the workspace directory tree')
@pass_app
@standard_command
def add_handler(app, name, source, description, technologies, category, priority, status,
                maintainers, branch, workspace, no_sync, scaffold):
    """Register a repository in the manifest.

    \b
    Examples:
        repomanifest add wayru-sdk https://github.com/Wayru-Network/wayru-sdk \\
            -d "Core client library" -t TypeScript
        repomanifest add hotspot-app https://github.com/Wayru-Network/hotspot-app \\
            -d "Mobile dashboard" -t "React Native" --scaffold
    """
    defaults = app.config['repository']
    service = WorkspaceService(app.root, app.store)

    repo = service.build_repository(
        name=name,
        source=source,
        description=description,
        technologies=technologies_from(technologies),
        category=category,
        priority=priority or defaults['default_priority'],
        status=status or defaults['default_status'],
        maintainers=maintainers,
        branch=branch or defaults['default_branch'],
        sync_enabled=False if no_sync else bool(defaults.get('sync_enabled', True)),
        workspace=workspace,
    )
    # Refuse before touching the manifest, so a failed scaffold registers nothing
    if scaffold and service.workspace_dir(repo).exists():
        raise CommandError(f"Workspace already exists: {repo.workspace}")

    service.register(repo)

    if scaffold:
        for path in service.scaffold(repo):
            click.echo(f"Created {path}", err=True)

    print_json(repository_to_dict(repo), pretty=False)


@click.command(name='status')
@click.argument('name')
@click.argument('new_status', type=click.Choice([s.value for s in Status]))
@pass_app
@standard_command
def status_handler(app, name, new_status):
    """Set the lifecycle status of a repository."""
    service = WorkspaceService(app.root, app.store)
    repo = service.set_status(name, new_status)
    print_json(repository_to_dict(repo), pretty=False)
