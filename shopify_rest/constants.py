__version__ = '1.2.0'

DEFAULT_API_VERSION = '2023-01'

SHOP_DOMAIN_SUFFIX = 'myshopify.com'
ACCESS_TOKEN_HEADER = 'X-Shopify-Access-Token'
