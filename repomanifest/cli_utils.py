"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .errors import ParseError, ValidationError
from .exit_codes import (
    DATA_ERROR, INTERRUPTED,
    CommandError, get_exit_code_for_exception
)
from .infra import ManifestStore


@dataclass
class AppContext:
    """Shared state handed to every command through click's ctx.obj."""
    config: Dict[str, Any]
    root: Path
    store: ManifestStore
    config_path: Optional[Path] = None
    verbose: bool = False


pass_app = click.make_pass_decorator(AppContext)


def print_json(data: Any, pretty: bool = True) -> None:
    """Print data as JSON on stdout."""
    if pretty:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        click.echo(json.dumps(data, ensure_ascii=False))


def standard_command(func):
    """
    Decorator that provides consistent error handling:
    - ValidationError: every violation is shown, exit DATA_ERROR
    - ParseError: message shown verbatim, exit DATA_ERROR
    - CommandError: message shown, exit with its own code
    - KeyboardInterrupt: exit INTERRUPTED

    Failures never fall back to a default category or an empty manifest.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except ValidationError as e:
            from .render import render_violations
            render_violations(e)
            sys.exit(DATA_ERROR)
        except ParseError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(DATA_ERROR)
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(e.exit_code)
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper
