#!/usr/bin/env python3

import click
from pathlib import Path

from repomanifest.cli_utils import AppContext
from repomanifest.config import configure_logging, load_config
from repomanifest.infra import ManifestStore
from repomanifest.commands.list import list_handler
from repomanifest.commands.categorize import categorize_handler
from repomanifest.commands.validate import validate_handler, init_handler
from repomanifest.commands.add import add_handler, status_handler
from repomanifest.commands.sync import sync_handler
from repomanifest.commands.config import config_cmd


@click.group()
@click.version_option(package_name='repomanifest')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              envvar='REPOMANIFEST_CONFIG', help='Configuration file to use')
@click.option('--manifest', 'manifest_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Manifest file (default from config: .wayruco/manifest.json under --root)')
@click.option('--root', type=click.Path(file_okay=False, path_type=Path), default='.',
              help='Monorepo root that workspace paths are relative to')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, manifest_path, root, verbose):
    """repomanifest - Registry of the sub-repositories in a monorepo.

    Categorizes repositories, keeps the manifest valid, lists workspaces
    and syncs forks with their upstream sources.
    """
    config = load_config(config_path)
    configure_logging(config, verbose=verbose)

    if manifest_path is None:
        manifest_path = root / config['manifest']['path']

    ctx.obj = AppContext(
        config=config,
        root=root,
        store=ManifestStore(manifest_path),
        config_path=config_path,
        verbose=verbose,
    )


cli.add_command(list_handler, name='list')
cli.add_command(categorize_handler, name='categorize')
cli.add_command(validate_handler, name='validate')
cli.add_command(init_handler, name='init')
cli.add_command(add_handler, name='add')
cli.add_command(status_handler, name='status')
cli.add_command(sync_handler, name='sync')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
