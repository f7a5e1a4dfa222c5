import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from shopify_rest.common.environments import env
from shopify_rest.constants import DEFAULT_API_VERSION, SHOP_DOMAIN_SUFFIX


class ShopEndpoint(BaseModel):
    """ Connection settings of a single shop """
    shop_name: str
    """ Either the short name ("acme") or the full domain ("acme.myshopify.com") """

    access_token: Optional[str] = None
    """ Admin API access token, sent as the X-Shopify-Access-Token header """

    api_version: str = DEFAULT_API_VERSION
    """ Admin API version, e.g., "2023-01" or "unstable" """

    timeout: Optional[float] = None
    """ Request timeout in seconds, handed over to "requests" """

    base_url: Optional[str] = None
    """ Overriding base URL (scheme + host), e.g., for a proxy or a local mock server """

    def shop_full_name(self) -> str:
        name = re.sub(r'^https?://', '', self.shop_name.strip()).strip('/').strip('.')

        if SHOP_DOMAIN_SUFFIX in name:
            return name

        return f'{name}.{SHOP_DOMAIN_SUFFIX}'

    def shop_short_name(self) -> str:
        return self.shop_full_name().replace(f'.{SHOP_DOMAIN_SUFFIX}', '')

    @property
    def url(self) -> str:
        """ The base URL of the versioned Admin REST API, always with a trailing slash """
        base_url = (self.base_url or f'https://{self.shop_full_name()}').rstrip('/')
        return f'{base_url}/admin/api/{self.api_version}/'

    @classmethod
    def from_env(cls, **overrides):
        """ Read the settings from the environment variables. Non-null ``overrides`` take precedence. """
        settings = {k: v for k, v in overrides.items() if v is not None}

        if 'shop_name' not in settings:
            settings['shop_name'] = env('SHOPIFY_SHOP',
                                        required=True,
                                        hint='e.g., acme or acme.myshopify.com',
                                        description='Shop name')

        if 'access_token' not in settings:
            settings['access_token'] = env('SHOPIFY_ACCESS_TOKEN', description='Admin API access token', secret=True)

        if 'api_version' not in settings:
            settings['api_version'] = env('SHOPIFY_API_VERSION',
                                          default=DEFAULT_API_VERSION,
                                          description='Admin API version')

        if 'timeout' not in settings:
            settings['timeout'] = env('SHOPIFY_TIMEOUT', description='Request timeout in seconds', transform=float)

        if 'base_url' not in settings:
            settings['base_url'] = env('SHOPIFY_BASE_URL', description='Overriding base URL')

        return cls(**settings)


class ListOptions(BaseModel):
    """ General list options

        Unknown query parameters (carried over from a pagination link) are kept as extra fields.
    """
    model_config = ConfigDict(extra='allow')

    page_info: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    since_id: Optional[int] = None
    created_at_min: Optional[datetime] = None
    created_at_max: Optional[datetime] = None
    updated_at_min: Optional[datetime] = None
    updated_at_max: Optional[datetime] = None
    order: Optional[str] = None
    fields: Optional[str] = None
    vendor: Optional[str] = None
    ids: Optional[List[int]] = None

    @field_validator('ids', mode='before')
    @classmethod
    def split_comma_separated_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [i.strip() for i in value.split(',') if i.strip()]
        return value


class CountOptions(BaseModel):
    """ General count options """
    model_config = ConfigDict(extra='allow')

    created_at_min: Optional[datetime] = None
    created_at_max: Optional[datetime] = None
    updated_at_min: Optional[datetime] = None
    updated_at_max: Optional[datetime] = None


class Pagination(BaseModel):
    """ Cursors to the adjacent pages

        An absent cursor means that there is no page in that direction.
    """
    next_page_options: Optional[ListOptions] = None
    previous_page_options: Optional[ListOptions] = None

    def has_next_page(self) -> bool:
        return self.next_page_options is not None

    def has_previous_page(self) -> bool:
        return self.previous_page_options is not None


class ListResource(BaseModel):
    """ JSON container wrapping a list of items under a resource-named property """

    def items(self) -> List[Any]:
        raise NotImplementedError()


class CountResource(BaseModel):
    count: int


# Anything accepted as list/count options
Options = Union[BaseModel, Dict[str, Any], None]


def __is_default_value(value: Any) -> bool:
    if value is None or value is False:
        return True
    elif isinstance(value, (str, list, tuple, set, dict)):
        return len(value) == 0
    elif isinstance(value, (int, float, Decimal)):
        return value == 0
    else:
        return False


def __render_value(value: Any) -> str:
    if isinstance(value, Enum):
        return __render_value(value.value)
    elif isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, (list, tuple, set)):
        return ','.join(__render_value(v) for v in value)
    else:
        return str(value)


def to_query_params(options: Options) -> Dict[str, str]:
    """ Convert the options to query parameters, omitting every property holding its default value """
    if options is None:
        return dict()
    elif isinstance(options, BaseModel):
        raw_params = options.model_dump()
    elif isinstance(options, dict):
        raw_params = dict(options)
    else:
        raise TypeError(f'Unable to convert {type(options).__name__} to query parameters')

    return {
        name: __render_value(value)
        for name, value in raw_params.items()
        if not __is_default_value(value)
    }
