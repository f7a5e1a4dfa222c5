""" Cursor-based pagination via the "Link" response header

    Shopify returns the cursors to the adjacent pages as a header like::

        Link: <https://acme.myshopify.com/admin/api/2023-01/products.json?limit=50&page_info=abc>; rel="previous",
              <https://acme.myshopify.com/admin/api/2023-01/products.json?limit=50&page_info=def>; rel="next"

    Either entry may be absent. The absence of the header means that the result fits in a single page.
"""
import re
from typing import Dict, Optional
from urllib.parse import urlsplit, parse_qsl

from pydantic import ValidationError

from shopify_rest.client.models import ListOptions, Pagination
from shopify_rest.common.logger import get_logger

LINK_PATTERN = re.compile(r'^ *<([^>]+)>; rel="(previous|next)" *$')

REL_NEXT = 'next'
REL_PREVIOUS = 'previous'

_logger = get_logger('pagination')


def parse_link_url(url: str) -> Optional[ListOptions]:
    """ Convert the query string of a pagination link to list options

        Return None if the URL does not carry a usable cursor.
    """
    try:
        query = urlsplit(url).query
    except ValueError as e:
        _logger.debug(f'Ignored the malformed pagination link {url} ({e})')
        return None

    params: Dict[str, str] = dict()
    for name, value in parse_qsl(query, keep_blank_values=True):
        params[name] = value

    if not params.get('page_info'):
        _logger.debug(f'Ignored the pagination link {url} as it has no page_info')
        return None

    try:
        return ListOptions(**params)
    except ValidationError as e:
        _logger.debug(f'Ignored the pagination link {url} due to invalid parameters: {e}')
        return None


def parse_link_header(link_header: Optional[str]) -> Dict[str, ListOptions]:
    """ Map each relation ("next" and "previous") to the list options of the linked page

        Entries with other relations or with malformed URLs are skipped. If the same relation appears more than once,
        the last one wins.
    """
    cursors: Dict[str, ListOptions] = dict()

    if not link_header:
        return cursors

    for link in link_header.split(','):
        match = LINK_PATTERN.match(link)

        if not match:
            _logger.debug(f'Ignored the unrecognized link entry: {link.strip()}')
            continue

        url, rel = match.groups()
        options = parse_link_url(url)

        if options is not None:
            cursors[rel] = options

    return cursors


def extract_pagination(link_header: Optional[str]) -> Pagination:
    cursors = parse_link_header(link_header)
    return Pagination(next_page_options=cursors.get(REL_NEXT),
                      previous_page_options=cursors.get(REL_PREVIOUS))
