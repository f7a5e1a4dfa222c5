from abc import ABC
from logging import Logger
from threading import Lock
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar
from uuid import uuid4

from shopify_rest.client.models import ListResource, Options, Pagination
from shopify_rest.common.logger import get_logger_for

R = TypeVar('R', bound=ListResource)


class InactiveLoaderError(StopIteration):
    """ Raised when the loader has ended its session """


class ResultLoader(ABC):
    __uuid__: Optional[str] = None
    __logger__: Optional[Logger] = None

    @property
    def uuid(self):
        if not self.__uuid__:
            self.__uuid__ = str(uuid4())
        return self.__uuid__

    @property
    def logger(self):
        if not self.__logger__:
            self.__logger__ = get_logger_for(self)
        return self.__logger__

    def load(self) -> List[Any]:
        raise NotImplementedError()

    def has_more(self) -> bool:
        raise NotImplementedError()


class ResultIterator:
    def __init__(self, loader: ResultLoader):
        self.__read_lock = Lock()
        self.__loader = loader
        self.__buffer: List[Any] = []
        self.__depleted = False

    def __iter__(self):
        return self

    def __next__(self):
        with self.__read_lock:
            if self.__depleted:
                raise StopIteration('Already depleted')

            while not self.__buffer:
                # Refill the buffer
                if self.__loader.has_more():
                    try:
                        self.__buffer.extend(self.__loader.load())
                    except StopIteration as e:
                        self.__depleted = True
                        raise e
                else:
                    self.__depleted = True
                    raise StopIteration('No more result to iterate')

            # Read within the lock
            item = self.__buffer.pop(0)

        return item


# (path, resource type, options) -> (decoded resource, pagination)
PageFetcher = Callable[[str, Type[R], Options], Tuple[R, Pagination]]


class LinkPaginatedResultLoader(ResultLoader):
    """ Load one page per call by following the "next" cursor until the server stops providing one """

    def __init__(self,
                 fetch_page: PageFetcher,
                 path: str,
                 resource_type: Type[ListResource],
                 list_options: Options = None,
                 max_results: Optional[int] = None):
        self.__fetch_page = fetch_page
        self.__path = path
        self.__resource_type = resource_type
        self.__list_options = list_options
        self.__max_results = int(max_results) if max_results else None
        self.__loaded_results = 0
        self.__loaded_pages = 0
        self.__active = True

    @property
    def loaded_pages(self) -> int:
        return self.__loaded_pages

    def has_more(self) -> bool:
        return self.__active

    def load(self) -> List[Any]:
        if not self.__active:
            raise InactiveLoaderError(self.__path)

        resource, pagination = self.__fetch_page(self.__path, self.__resource_type, self.__list_options)
        self.__loaded_pages += 1

        items = resource.items() or []

        self.logger.debug(f'{self.uuid}: Page #{self.__loaded_pages} of {self.__path}: {len(items)} item(s), '
                          f'next page: {"yes" if pagination.has_next_page() else "no"}')

        if pagination.has_next_page():
            self.__list_options = pagination.next_page_options
        else:
            self.__active = False

        if self.__max_results and (self.__loaded_results + len(items)) >= self.__max_results:
            self.__active = False
            num_of_loadable_results = self.__max_results - self.__loaded_results
            self.__loaded_results = self.__max_results
            return items[0:num_of_loadable_results]
        else:
            self.__loaded_results += len(items)
            return items
