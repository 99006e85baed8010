import click

from ..cli_utils import pass_app, print_json
from ..config import get_config_path


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSON")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@pass_app
def show_config(app, pretty, path):
    """Show the current configuration with all merges applied."""
    if path:
        print_json({"config_path": str(app.config_path or get_config_path())}, pretty=False)
        return

    print_json(app.config, pretty=pretty)
