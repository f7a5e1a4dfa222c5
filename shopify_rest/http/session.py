import platform
import sys
from contextlib import AbstractContextManager
from typing import Optional, Dict
from uuid import uuid4

from requests import Session, Response

from shopify_rest.common.logger import get_logger_for
from shopify_rest.constants import __version__, ACCESS_TOKEN_HEADER


class HttpError(RuntimeError):
    def __init__(self, response: Response):
        super(HttpError, self).__init__(response)

    @property
    def response(self) -> Response:
        return self.args[0]

    def __str__(self):
        response: Response = self.response

        error_feedback = f'HTTP {response.status_code}'

        # Handle the response body.
        response_text = response.text.strip()
        if len(response_text) == 0:
            error_feedback = f'{error_feedback} (empty response)'
        else:
            error_feedback = f'{error_feedback}: {response_text}'

        return error_feedback


class ClientError(HttpError):
    pass


class ServerError(HttpError):
    pass


class HttpSession(AbstractContextManager):
    """ Thin wrapper around :class:`requests.Session`

        Transport failures from ``requests`` are never caught here. Retrying is up to the caller.
    """

    def __init__(self,
                 uuid: Optional[str] = None,
                 access_token: Optional[str] = None,
                 suppress_error: bool = False,
                 timeout: Optional[float] = None,
                 session: Optional[Session] = None):
        super().__init__()

        self.__id = uuid or str(uuid4())
        self.__logger = get_logger_for(self)
        self.__access_token = access_token
        self.__session: Optional[Session] = session
        self.__suppress_error = suppress_error
        self.__timeout = timeout

    @property
    def _session(self) -> Session:
        if not self.__session:
            self.__session = Session()
            self.__session.headers.update(self.generate_default_headers())

        return self.__session

    def generate_default_headers(self) -> Dict[str, str]:
        headers = {
            'User-Agent': self.generate_http_user_agent(),
            'Accept': 'application/json',
        }

        if self.__access_token:
            headers[ACCESS_TOKEN_HEADER] = self.__access_token

        return headers

    def __enter__(self):
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        super().__exit__(exc_type, exc_val, exc_tb)
        self.close()

    def submit(self, method: str, url: str, **kwargs) -> Response:
        http_method = method.lower()
        params = kwargs.get('params', None)

        self.__logger.debug(f'{self.__id}: {http_method.upper()} {url} {params or ""}'.strip())

        if self.__timeout is not None:
            kwargs.setdefault('timeout', self.__timeout)

        if self.__access_token:
            # Sessions given by the caller do not carry the default headers.
            headers = kwargs.get('headers') or dict()
            headers.setdefault(ACCESS_TOKEN_HEADER, self.__access_token)
            kwargs['headers'] = headers

        response = getattr(self._session, http_method)(url, **kwargs)

        self.__logger.debug(f'{self.__id}: Response/URL {url}')
        self.__logger.debug(f'{self.__id}: Response/HTTP {response.status_code} ({len(response.text)}B)')
        self.__logger.debug(f'{self.__id}: Response/Body:\n{response.text}')

        if response.ok:
            return response
        elif self.__suppress_error:
            self.__logger.debug('Error suppressed by the caller of this method.')
            return response
        else:
            self._raise_http_error(response)

    def get(self, url, **kwargs) -> Response:
        return self.submit(method='get', url=url, **kwargs)

    def post(self, url, **kwargs) -> Response:
        return self.submit(method='post', url=url, **kwargs)

    def put(self, url, **kwargs) -> Response:
        return self.submit(method='put', url=url, **kwargs)

    def delete(self, url, **kwargs) -> Response:
        return self.submit(method='delete', url=url, **kwargs)

    def close(self):
        if self.__session:
            self.__session.close()
            self.__session = None

    def _raise_http_error(self, response: Response):
        raise (ClientError if response.status_code < 500 else ServerError)(response)

    def __del__(self):
        self.close()

    @staticmethod
    def generate_http_user_agent() -> str:
        # NOTE: https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/User-Agent
        interested_module_names = [
            'IPython',  # indicates that it is probably used in a notebook
            'unittest',  # indicates that it is used by a test code
        ]

        final_comments = [
            f'Platform/{platform.platform()}',  # OS information + CPU architecture
            'Python/{}.{}.{}'.format(*sys.version_info),  # Python version
            *[
                f'Module/{interested_module_name}'
                for interested_module_name in interested_module_names
                if interested_module_name in sys.modules
            ]
        ]

        return f'shopify-rest-client/{__version__} {" ".join(final_comments)}'.strip()
