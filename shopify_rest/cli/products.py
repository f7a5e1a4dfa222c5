from typing import Optional

import click

from shopify_rest.cli.helpers.client_factory import get_client_from_context
from shopify_rest.cli.helpers.command import command, output_option, list_options
from shopify_rest.cli.helpers.printer import print_resource, print_items, OutputFormat
from shopify_rest.client.base_exceptions import MissingResourceError
from shopify_rest.client.metafield import MetafieldListOptions
from shopify_rest.client.product import ProductService, ProductListOptions


@click.group('products')
def products_command_group():
    """ Interact with the products of the shop """


@click.group('metafields')
def product_metafields_command_group():
    """ Interact with the metafields of a product """


def _get_service() -> ProductService:
    return ProductService(get_client_from_context())


@command(products_command_group, 'list')
@list_options
@click.option('--vendor', default=None, help='Filter by vendor')
@click.option('--product-type', default=None, help='Filter by product type')
@click.option('--status', type=click.Choice(['active', 'archived', 'draft']), default=None, help='Filter by status')
@output_option(OutputFormat.DEFAULT_FOR_DATA)
def list_products(limit: Optional[int],
                  page_info: Optional[str],
                  max_results: Optional[int],
                  vendor: Optional[str],
                  product_type: Optional[str],
                  status: Optional[str],
                  output: str):
    """ List products, following the pagination until the last page """
    list_options = ProductListOptions(limit=limit,
                                      page_info=page_info,
                                      vendor=vendor,
                                      product_type=product_type,
                                      status=status)
    print_items(_get_service().list_all(list_options, max_results=max_results), output)


@command(products_command_group, 'get')
@click.argument('product_id', type=int)
@output_option()
def get_product(product_id: int, output: str):
    """ Show a product """
    product = _get_service().get(product_id)
    if product is None:
        raise MissingResourceError('', 404, f'Product {product_id} not found')
    print_resource(product, output)


@command(products_command_group, 'count')
@click.option('--vendor', default=None, help='Filter by vendor')
@click.option('--product-type', default=None, help='Filter by product type')
def count_products(vendor: Optional[str], product_type: Optional[str]):
    """ Count products """
    click.echo(_get_service().count(dict(vendor=vendor, product_type=product_type)))


@command(product_metafields_command_group, 'list')
@click.argument('product_id', type=int)
@list_options
@click.option('--namespace', default=None, help='Filter by namespace')
@output_option(OutputFormat.DEFAULT_FOR_DATA)
def list_product_metafields(product_id: int,
                            limit: Optional[int],
                            page_info: Optional[str],
                            max_results: Optional[int],
                            namespace: Optional[str],
                            output: str):
    """ List the metafields of a product """
    list_options = MetafieldListOptions(limit=limit, page_info=page_info, namespace=namespace)
    print_items(_get_service().metafields_of(product_id).list_all(list_options, max_results=max_results), output)


# noinspection PyTypeChecker
products_command_group.add_command(product_metafields_command_group)
