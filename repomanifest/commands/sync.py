"""
Handles the 'sync' command for merging upstream changes into forks.
"""

import click

from ..cli_utils import pass_app, print_json, standard_command
from ..exit_codes import PartialSuccessError
from ..infra import GitClient
from ..render import render_sync_results
from ..services import SyncOutcome, SyncService


@click.command(name='sync')
@click.argument('name', required=False)
@click.option('--json', 'as_json', is_flag=True, help='Output one JSON object per repository')
@pass_app
@standard_command
def sync_handler(app, name, as_json):
    """Sync forked workspaces with their upstream sources.

    NAME limits the run to a single repository.

    \b
    Examples:
        repomanifest sync              # Sync all
        repomanifest sync wayru-sdk    # Sync one
    """
    sync_config = app.config['sync']
    service = SyncService(
        app.root,
        app.store,
        git_client=GitClient(timeout=int(sync_config['timeout_seconds'])),
        remote_name=sync_config['remote_name'],
    )
    results = service.sync(name)

    if as_json:
        for result in results:
            print_json(result.to_dict(), pretty=False)
    else:
        render_sync_results(results)

    failed = sum(1 for r in results if r.outcome is SyncOutcome.FAILED)
    if failed:
        raise PartialSuccessError(
            f"{failed} of {len(results)} repositories failed to sync",
            succeeded=len(results) - failed,
            failed=failed,
        )
