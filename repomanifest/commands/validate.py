"""
Handles the 'validate' and 'init' commands.
"""

import click

from ..cli_utils import pass_app, print_json, standard_command
from ..services import WorkspaceService


@click.command(name='validate')
@pass_app
@standard_command
def validate_handler(app):
    """Check the manifest against the schema.

    Prints a summary when valid. Otherwise every violation is listed
    and the exit code is 70.
    """
    manifest = app.store.load()
    summary = WorkspaceService.summary(manifest.repositories)
    print_json({
        'valid': True,
        'path': str(app.store.path),
        'version': manifest.version,
        'lastUpdated': manifest.last_updated,
        'repositories': len(manifest.repositories),
        'by_status': summary,
    }, pretty=False)


@click.command(name='init')
@click.option('--version', 'version', default=None, help='Manifest version (default from config)')
@pass_app
@standard_command
def init_handler(app, version):
    """Create an empty manifest if none exists."""
    existed = app.store.exists()
    version = version or app.config['manifest']['default_version']
    manifest = app.store.init(version=version)
    if existed:
        click.echo(f"Manifest already exists at {app.store.path} ({len(manifest.repositories)} repositories)")
    else:
        click.echo(f"Created {app.store.path}")
