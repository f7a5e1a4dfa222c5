import sys
from typing import Optional

import click

from shopify_rest.cli.helpers.command import command
from shopify_rest.cli.payouts import payouts_command_group
from shopify_rest.cli.products import products_command_group
from shopify_rest.common.logger import get_logger
from shopify_rest.constants import __version__

APP_NAME = 'shopify-rest'

__library_version = __version__
__python_version = str(sys.version).replace("\n", " ")
__app_signature = f'{APP_NAME} {__library_version} with Python {__python_version}'


@click.group(APP_NAME)
@click.version_option(__version__, message="%(version)s")
@click.option('--shop', default=None, help='Shop name, overriding SHOPIFY_SHOP')
@click.option('--api-version', default=None, help='Admin API version, overriding SHOPIFY_API_VERSION')
@click.pass_context
def shopify(ctx: click.Context, shop: Optional[str], api_version: Optional[str]):
    """
    Shopify Admin REST API Client CLI

    The access token is read from SHOPIFY_ACCESS_TOKEN.
    """
    ctx.obj = dict(shop=shop, api_version=api_version)
    get_logger(APP_NAME).debug(__app_signature)


@command(shopify)
def version():
    """ Show the version of CLI/library """
    click.echo(__app_signature)


# noinspection PyTypeChecker
shopify.add_command(products_command_group)
# noinspection PyTypeChecker
shopify.add_command(payouts_command_group)

if __name__ == "__main__":
    shopify.main(prog_name=APP_NAME)
