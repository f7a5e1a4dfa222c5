from functools import wraps
from traceback import print_exc
from typing import Callable, Optional

import click
from click import Group

from shopify_rest.cli.helpers.printer import OutputFormat
from shopify_rest.common.logger import get_logger
from shopify_rest.feature_flags import in_global_debug_mode

_logger = get_logger('@command')


def command(command_group: Group, alternate_command_name: Optional[str] = None, hidden: bool = False):
    """
    Register the handler to the command group with the graceful error handling

    :param command_group: the command group
    :param alternate_command_name: the alternate command name - by default, the command name is derived from the name
                                   of the decorated callable.
    """

    def decorator(handler: Callable):
        command_name = alternate_command_name if alternate_command_name else handler.__name__.replace('_', '-')

        @wraps(handler)
        def handle_invocation(*args, **kwargs):
            if in_global_debug_mode:
                # In the debug mode, no error will be handled gracefully so that the developers can see the full detail.
                return handler(*args, **kwargs)

            try:
                return handler(*args, **kwargs)
            except (IOError, TypeError, AttributeError, IndexError, KeyError) as e:
                click.secho('Unexpected programming error', fg='red', err=True)

                print_exc()

                raise SystemExit(1) from e
            except Exception as e:
                click.secho(f'{type(e).__name__}: ', fg='red', bold=True, nl=False, err=True)
                click.secho(str(e), fg='red', err=True)

                raise SystemExit(1) from e

        _logger.debug(f'Registered {command_group.name} {command_name}')

        return command_group.command(command_name, hidden=hidden)(handle_invocation)

    return decorator


def output_option(default: str = OutputFormat.DEFAULT_FOR_RESOURCE):
    return click.option('-o', '--output',
                        type=click.Choice(OutputFormat.choices()),
                        default=default,
                        show_default=True,
                        help='Output format')


def list_options(handler: Callable):
    """ Options shared by every list command """
    handler = click.option('--limit', type=int, default=None, help='Page size requested from the server')(handler)
    handler = click.option('--page-info', default=None, help='Start from the page of the given cursor')(handler)
    handler = click.option('--max-results', type=int, default=None,
                           help='Stop after this number of items')(handler)
    return handler
