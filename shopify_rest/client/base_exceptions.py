from typing import Any, Optional

from shopify_rest.feature_flags import detailed_error, in_global_debug_mode


class ApiError(RuntimeError):
    """ Raised when the server responds an error for unexpected reason. """

    def __init__(self, url: str, response_status: int, response_body: Any, message: Optional[str] = None):
        super(ApiError, self).__init__(url, response_status, response_body)

        self.__url = url
        self.__status = response_status
        self.__details = response_body
        self.__message = message

    @property
    def url(self) -> str:
        return self.__url

    @property
    def status(self) -> int:
        return self.__status

    @property
    def details(self) -> Any:
        """ The "errors" payload of the response if available, otherwise the raw response body """
        return self.__details

    @property
    def message(self) -> str:
        if self.__message:
            return self.__message
        elif isinstance(self.__details, str):
            return self.__details
        elif isinstance(self.__details, dict):
            # e.g., {"title": ["can't be blank"]}
            return ', '.join(sorted(
                f'{field}: {", ".join(str(m) for m in messages) if isinstance(messages, list) else messages}'
                for field, messages in self.__details.items()
            ))
        elif isinstance(self.__details, list):
            return ', '.join(str(m) for m in self.__details)
        else:
            return ''

    def __str__(self):
        feedback = f'HTTP {self.status}: {self.message}' if self.message else f'HTTP {self.status}'

        if in_global_debug_mode or detailed_error:
            feedback += f'\nURL: {self.url}'

        return feedback


class UnauthenticatedApiAccessError(ApiError):
    """ Raised when the access to the API requires an authentication. """


class UnauthorizedApiAccessError(ApiError):
    """ Raised when the access to the API is denied. """


class MissingResourceError(ApiError):
    """ Raised when the requested resource is not found. """


class RateLimitError(ApiError):
    """ Raised when the server throttles the request (HTTP 429)

        The client never retries. The hint from the server is exposed via ``retry_after`` (in seconds).
    """

    def __init__(self,
                 url: str,
                 response_status: int,
                 response_body: Any,
                 message: Optional[str] = None,
                 retry_after: Optional[float] = None):
        super(RateLimitError, self).__init__(url, response_status, response_body, message)
        self.__retry_after = retry_after

    @property
    def retry_after(self) -> Optional[float]:
        return self.__retry_after


class ResponseDecodingError(RuntimeError):
    """ Raised when the response body cannot be decoded into the expected model. """

    def __init__(self, message: str, url: str, status: Optional[int] = None, body: Optional[str] = None):
        super(ResponseDecodingError, self).__init__(message)
        self.__url = url
        self.__status = status
        self.__body = body

    @property
    def url(self) -> str:
        return self.__url

    @property
    def status(self) -> Optional[int]:
        return self.__status

    @property
    def body(self) -> Optional[str]:
        return self.__body
