from shopify_rest.client.base_client import ShopifyClient
from shopify_rest.client.base_exceptions import ApiError, ResponseDecodingError
from shopify_rest.client.metafield import Metafield, MetafieldService
from shopify_rest.client.models import ShopEndpoint, ListOptions, CountOptions, Pagination
from shopify_rest.client.pagination import extract_pagination, parse_link_header
from shopify_rest.client.payouts import PayoutsService, Payout, PayoutTransaction, PayoutsListOptions, PayoutStatus
from shopify_rest.client.product import ProductService, Product, ProductListOptions
from shopify_rest.constants import __version__
