from textwrap import indent
from typing import Any, Iterable

import click

from shopify_rest.cli.helpers.exporter import normalize, to_json, to_yaml


class OutputFormat:
    JSON = 'json'
    YAML = 'yaml'

    DEFAULT_FOR_RESOURCE = YAML
    DEFAULT_FOR_DATA = JSON

    @classmethod
    def choices(cls):
        return [cls.JSON, cls.YAML]


def _check_format(output_format: str):
    if output_format not in OutputFormat.choices():
        raise ValueError(f'The given output format ({output_format}) is not available.')


def _encode(content: Any, output_format: str) -> str:
    normalized = normalize(content)
    return (to_json(normalized) if output_format == OutputFormat.JSON else to_yaml(normalized)).rstrip('\n')


def print_resource(content: Any, output_format: str = OutputFormat.DEFAULT_FOR_RESOURCE):
    _check_format(output_format)
    click.echo(_encode(content, output_format))


def print_items(items: Iterable[Any], output_format: str = OutputFormat.DEFAULT_FOR_DATA) -> int:
    """
    Print the items as a single JSON array or YAML sequence

    Each item is written as soon as it is available so that a long listing shows up page by page.
    Returns the number of printed items.
    """
    _check_format(output_format)

    item_count = 0

    for item in items:
        encoded = _encode(item, output_format)

        if output_format == OutputFormat.JSON:
            click.echo('[' if item_count == 0 else ',')
            click.echo(indent(encoded, '  '), nl=False)
        else:
            # The first line takes the place of the indentation.
            click.echo(f'- {indent(encoded, "  ")[2:]}')

        item_count += 1

    if item_count == 0:
        click.echo('[]')
    elif output_format == OutputFormat.JSON:
        click.echo('\n]')

    return item_count
