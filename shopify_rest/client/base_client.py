from json import JSONDecodeError
from typing import Any, Dict, Optional, Tuple, Type, TypeVar
from urllib.parse import urljoin, urlsplit, parse_qsl, urlunsplit
from uuid import uuid4

from pydantic import BaseModel, ValidationError
from requests import Response

from shopify_rest.client.base_exceptions import ApiError, UnauthenticatedApiAccessError, \
    UnauthorizedApiAccessError, MissingResourceError, RateLimitError, ResponseDecodingError
from shopify_rest.client.models import ShopEndpoint, Options, Pagination, ListResource, CountResource, \
    to_query_params
from shopify_rest.client.pagination import extract_pagination
from shopify_rest.client.result_iterator import ResultIterator, LinkPaginatedResultLoader
from shopify_rest.common.logger import get_logger
from shopify_rest.feature_flags import in_global_debug_mode
from shopify_rest.http.session import HttpSession, HttpError

M = TypeVar('M', bound=BaseModel)
R = TypeVar('R', bound=ListResource)


class ShopifyClient:
    """ Client of the Shopify Admin REST API

        All paths are relative to the versioned API root, e.g., "products.json" or "products/123/metafields.json".
        Every call is a single request/response cycle. Nothing is retried.
    """

    def __init__(self, endpoint: ShopEndpoint, http_session: Optional[HttpSession] = None):
        self._uuid = str(uuid4())
        self._endpoint = endpoint
        self._http_session = http_session
        self._logger = get_logger(f'{type(self).__name__}/{endpoint.shop_short_name()}'
                                  if in_global_debug_mode
                                  else type(self).__name__)

    @property
    def endpoint(self) -> ShopEndpoint:
        return self._endpoint

    @property
    def url(self) -> str:
        """The base URL to the versioned API"""
        return self._endpoint.url

    @classmethod
    def make(cls, endpoint: Optional[ShopEndpoint] = None):
        """Create this class with the given `endpoint` or the one configured via the environment variables."""
        return cls(endpoint or ShopEndpoint.from_env())

    def create_http_session(self, suppress_error: bool = False) -> HttpSession:
        """Create HTTP session wrapper"""
        if self._http_session:
            return self._http_session

        return HttpSession(self._uuid,
                           access_token=self._endpoint.access_token,
                           suppress_error=suppress_error,
                           timeout=self._endpoint.timeout)

    def resolve_url(self, path: str) -> str:
        return urljoin(self.url, path.lstrip('/'))

    def list_with_pagination(self,
                             path: str,
                             resource_type: Type[R],
                             options: Options = None) -> Tuple[R, Pagination]:
        """ Fetch one page of a list

            The cursors to the adjacent pages are extracted from the "Link" header. Pass
            ``pagination.next_page_options`` (or ``previous_page_options``) as ``options`` to continue.
        """
        response = self._request('get', path, params=options)
        resource = self._decode(response, resource_type)
        pagination = extract_pagination(response.headers.get('Link'))

        return resource, pagination

    def iterate(self,
                path: str,
                resource_type: Type[ListResource],
                options: Options = None,
                max_results: Optional[int] = None) -> ResultIterator:
        """ Iterate through every item of every page, following the "next" cursors """
        return ResultIterator(LinkPaginatedResultLoader(self.list_with_pagination,
                                                        path,
                                                        resource_type,
                                                        list_options=options,
                                                        max_results=max_results))

    def count(self, path: str, options: Options = None) -> int:
        response = self._request('get', path, params=options)
        return self._decode(response, CountResource).count

    def get(self, path: str, resource_type: Type[M], options: Options = None) -> M:
        response = self._request('get', path, params=options)
        return self._decode(response, resource_type)

    def post(self, path: str, data: BaseModel, resource_type: Type[M]) -> M:
        response = self._request('post', path, json=self._encode(data))
        return self._decode(response, resource_type)

    def put(self, path: str, data: BaseModel, resource_type: Type[M]) -> M:
        response = self._request('put', path, json=self._encode(data))
        return self._decode(response, resource_type)

    def delete(self, path: str):
        self._request('delete', path)

    @staticmethod
    def _encode(data: BaseModel) -> Dict[str, Any]:
        return data.model_dump(mode='json', exclude_none=True)

    def _build_url_and_params(self, path: str, options: Options) -> Tuple[str, Dict[str, str]]:
        """ Separate the query string embedded in the path, then merge the options on top of it """
        split_url = urlsplit(self.resolve_url(path))
        params = dict(parse_qsl(split_url.query, keep_blank_values=True))
        params.update(to_query_params(options))

        return urlunsplit((split_url.scheme, split_url.netloc, split_url.path, '', '')), params

    def _request(self, method: str, path: str, params: Options = None, **kwargs) -> Response:
        url, query_params = self._build_url_and_params(path, params)

        session = self.create_http_session()

        try:
            return session.submit(method, url, params=query_params or None, **kwargs)
        except HttpError as e:
            raise self._convert_http_error(url, e.response) from e
        finally:
            # The shared session is owned by whoever injected it.
            if session is not self._http_session:
                session.close()

    def _convert_http_error(self, url: str, response: Response) -> ApiError:
        status_code = response.status_code
        details: Any = response.text

        try:
            body = response.json() if response.text else None
            if isinstance(body, dict) and 'errors' in body:
                details = body['errors']
            elif isinstance(body, dict) and 'error' in body:
                details = body['error']
        except ValueError:
            pass  # Not a JSON body. Keep the raw text.

        self._logger.debug(f'HTTP {status_code} from {url}: {details}')

        if status_code == 401:
            return UnauthenticatedApiAccessError(url, status_code, details)
        elif status_code == 403:
            return UnauthorizedApiAccessError(url, status_code, details)
        elif status_code == 404:
            return MissingResourceError(url, status_code, details)
        elif status_code == 429:
            retry_after = response.headers.get('Retry-After')
            try:
                retry_after = float(retry_after) if retry_after else None
            except ValueError:
                retry_after = None
            return RateLimitError(url, status_code, details, retry_after=retry_after)
        else:
            return ApiError(url, status_code, details)

    def _decode(self, response: Response, resource_type: Type[M]) -> M:
        try:
            response_body = response.json()
        except (JSONDecodeError, ValueError) as e:
            self._logger.error(f'Unexpectedly non-JSON response body from {response.url}')
            raise ResponseDecodingError(f'Unable to deserialize JSON from the response: {e}',
                                        url=response.url,
                                        status=response.status_code,
                                        body=response.text) from e

        if not isinstance(response_body, dict):
            raise ResponseDecodingError(f'Expected a JSON object but received {type(response_body).__name__}',
                                        url=response.url,
                                        status=response.status_code,
                                        body=response.text)

        try:
            return resource_type(**response_body)
        except ValidationError as e:
            raise ResponseDecodingError(f'Invalid Response Body for {resource_type.__name__}: {e}',
                                        url=response.url,
                                        status=response.status_code,
                                        body=response.text) from e
