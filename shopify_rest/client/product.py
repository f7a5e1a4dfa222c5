from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel

from shopify_rest.client.base_client import ShopifyClient
from shopify_rest.client.metafield import Metafield, MetafieldsMixin
from shopify_rest.client.models import ListOptions, ListResource, Options, Pagination
from shopify_rest.client.result_iterator import ResultIterator

PRODUCTS_BASE_PATH = 'products'
PRODUCTS_RESOURCE_NAME = 'products'


class ProductOption(BaseModel):
    """ The options provided by Shopify, e.g., "Size" or "Color" """
    id: Optional[int] = None
    product_id: Optional[int] = None
    name: Optional[str] = None
    position: Optional[int] = None
    values: Optional[List[str]] = None


class Variant(BaseModel):
    id: Optional[int] = None
    product_id: Optional[int] = None
    title: Optional[str] = None
    sku: Optional[str] = None
    position: Optional[int] = None
    grams: Optional[int] = None
    inventory_policy: Optional[str] = None
    price: Optional[Decimal] = None
    compare_at_price: Optional[Decimal] = None
    fulfillment_service: Optional[str] = None
    inventory_management: Optional[str] = None
    inventory_item_id: Optional[int] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    taxable: Optional[bool] = None
    tax_code: Optional[str] = None
    barcode: Optional[str] = None
    image_id: Optional[int] = None
    inventory_quantity: Optional[int] = None
    weight: Optional[Decimal] = None
    weight_unit: Optional[str] = None
    old_inventory_quantity: Optional[int] = None
    requires_shipping: Optional[bool] = None
    admin_graphql_api_id: Optional[str] = None
    metafields: Optional[List[Metafield]] = None


class Image(BaseModel):
    id: Optional[int] = None
    product_id: Optional[int] = None
    position: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    width: Optional[int] = None
    height: Optional[int] = None
    src: Optional[str] = None
    attachment: Optional[str] = None
    """ Base64-encoded image content (upload only) """
    filename: Optional[str] = None
    alt: Optional[str] = None
    variant_ids: Optional[List[int]] = None
    admin_graphql_api_id: Optional[str] = None


class Product(BaseModel):
    id: Optional[int] = None
    title: Optional[str] = None
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    handle: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    published_scope: Optional[str] = None
    tags: Optional[str] = None
    """ Comma-separated tags """
    status: Optional[str] = None
    options: Optional[List[ProductOption]] = None
    variants: Optional[List[Variant]] = None
    image: Optional[Image] = None
    images: Optional[List[Image]] = None
    template_suffix: Optional[str] = None
    metafields_global_title_tag: Optional[str] = None
    metafields_global_description_tag: Optional[str] = None
    metafields: Optional[List[Metafield]] = None
    admin_graphql_api_id: Optional[str] = None


class ProductListOptions(ListOptions):
    collection_id: Optional[int] = None
    product_type: Optional[str] = None
    handle: Optional[str] = None
    published_at_min: Optional[datetime] = None
    published_at_max: Optional[datetime] = None
    published_status: Optional[str] = None
    presentment_currencies: Optional[str] = None
    status: Optional[str] = None


class ProductResource(BaseModel):
    """ Body of products/<id>.json """
    product: Optional[Product] = None


class ProductsResource(ListResource):
    """ Body of products.json """
    products: List[Product]

    def items(self) -> List[Product]:
        return self.products


class ProductService(MetafieldsMixin):
    """ Products of the shop

        See https://shopify.dev/docs/api/admin-rest/2023-01/resources/product
    """
    _resource_name = PRODUCTS_RESOURCE_NAME

    def __init__(self, client: ShopifyClient):
        self._client = client

    def list(self, options: Options = None) -> List[Product]:
        products, _ = self.list_with_pagination(options)
        return products

    def list_with_pagination(self, options: Options = None) -> Tuple[List[Product], Pagination]:
        """ List one page of products with the cursors to the next and previous pages """
        resource, pagination = self._client.list_with_pagination(f'{PRODUCTS_BASE_PATH}.json',
                                                                 ProductsResource,
                                                                 options)
        return resource.products, pagination

    def list_all(self, options: Options = None, max_results: Optional[int] = None) -> ResultIterator:
        return self._client.iterate(f'{PRODUCTS_BASE_PATH}.json', ProductsResource, options, max_results=max_results)

    def count(self, options: Options = None) -> int:
        return self._client.count(f'{PRODUCTS_BASE_PATH}/count.json', options)

    def get(self, product_id: int, options: Options = None) -> Optional[Product]:
        return self._client.get(f'{PRODUCTS_BASE_PATH}/{product_id}.json', ProductResource, options).product

    def create(self, product: Product) -> Optional[Product]:
        return self._client.post(f'{PRODUCTS_BASE_PATH}.json',
                                 ProductResource(product=product),
                                 ProductResource).product

    def update(self, product: Product) -> Optional[Product]:
        if product.id is None:
            raise ValueError('Unable to update a product without ID')

        return self._client.put(f'{PRODUCTS_BASE_PATH}/{product.id}.json',
                                ProductResource(product=product),
                                ProductResource).product

    def delete(self, product_id: int):
        self._client.delete(f'{PRODUCTS_BASE_PATH}/{product_id}.json')
