from typing import Optional

import click

from shopify_rest.client.base_client import ShopifyClient
from shopify_rest.client.models import ShopEndpoint


def get_client(shop: Optional[str] = None, api_version: Optional[str] = None) -> ShopifyClient:
    """ Create a client from the environment variables, overridden by the global CLI options """
    return ShopifyClient(ShopEndpoint.from_env(shop_name=shop, api_version=api_version))


def get_client_from_context() -> ShopifyClient:
    ctx = click.get_current_context()
    settings = ctx.find_root().obj or dict()
    return get_client(shop=settings.get('shop'), api_version=settings.get('api_version'))
