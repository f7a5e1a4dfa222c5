import json
import re
import threading
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any, Dict, List, Optional
from unittest import TestCase
from urllib.parse import urlsplit, parse_qsl, urlencode

from pydantic import BaseModel, Field
from requests import Response

API_PREFIX = '/admin/api/2023-01'
TEST_SHOP_URL = 'https://acme.myshopify.com/admin/api/2023-01/'


def make_response(status_code: int = 200,
                  body: Any = None,
                  headers: Optional[Dict[str, str]] = None,
                  url: str = f'{TEST_SHOP_URL}products.json') -> Response:
    """ Build a real response object without the network """
    response = Response()
    response.status_code = status_code
    response.url = url
    response.encoding = 'utf-8'
    response.headers.update(headers or dict())

    if body is None:
        response._content = b''
    elif isinstance(body, (str, bytes)):
        response._content = body.encode('utf-8') if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode('utf-8')

    return response


def sample_products(count: int) -> List[Dict[str, Any]]:
    return [
        dict(id=1000 + i,
             title=f'Product {i}',
             vendor='Acme',
             handle=f'product-{i}',
             variants=[dict(id=2000 + i, product_id=1000 + i, price=f'{i}.50', sku=f'SKU-{i}')])
        for i in range(count)
    ]


def sample_payouts(count: int) -> List[Dict[str, Any]]:
    return [
        dict(id=500 + i, date=f'2023-01-{i + 1:02d}', currency='USD', amount=f'{100 + i}.25', status='paid')
        for i in range(count)
    ]


def sample_transactions(payout_id: int, count: int) -> List[Dict[str, Any]]:
    return [
        dict(id=700 + i,
             type='charge',
             test=False,
             payout_id=payout_id,
             payout_status='paid',
             currency='USD',
             amount='11.50',
             fee='0.65',
             net='10.85',
             source_id=800 + i,
             source_type='charge',
             processed_at='2023-01-02T10:00:00-05:00')
        for i in range(count)
    ]


class HandledRequest(BaseModel):
    path: str

    # Assume that only one header name can appear once per request.
    headers: Dict[str, str]


class DataCollection(BaseModel):
    handled_requests: List[HandledRequest] = Field(default_factory=list)

    def reset(self):
        self.handled_requests.clear()


class MockShopHandler(BaseHTTPRequestHandler):
    """ Minimal imitation of the Admin REST API with cursor-based pagination """
    _data_collection = DataCollection()

    products = sample_products(5)
    payouts = sample_payouts(3)
    transactions = sample_transactions(500, 3)
    metafields = [
        dict(id=9001, namespace='inventory', key='warehouse', value=25, type='number_integer',
             owner_id=1000, owner_resource='product'),
    ]

    @classmethod
    def reset_collected_data(cls):
        """ Reset the collected data. """
        cls._data_collection.reset()

    @classmethod
    def get_collected_data(cls) -> DataCollection:
        """ Provide a copy of the collected data. """
        return cls._data_collection.model_copy(deep=True)

    def log_message(self, format, *args):
        pass  # Keep the test output clean.

    def _collect_request_data(self):
        self._data_collection.handled_requests.append(
            HandledRequest(
                path=self.path,
                headers={
                    name: value
                    for name, value in self.headers.items()
                }
            )
        )

    def _respond(self, status: int, body: Any, headers: Optional[Dict[str, str]] = None):
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        for name, value in (headers or dict()).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(json.dumps(body).encode('utf-8'))

    def _paginate(self, path: str, query: Dict[str, str], property_name: str, items: List[Dict[str, Any]]):
        limit = int(query.get('limit') or 50)
        page_info = query.get('page_info')
        offset = int(page_info.split('-')[1]) if page_info else 0

        # Only the cursor, the limit and the owner ID are carried over to the pagination links.
        carried_over = {k: v for k, v in query.items() if k in ('payout_id',)}
        base_url = f'http://{self.headers["Host"]}{path}'

        links = []
        if offset > 0:
            previous_query = dict(limit=limit, page_info=f'cursor-{max(offset - limit, 0)}', **carried_over)
            links.append(f'<{base_url}?{urlencode(previous_query)}>; rel="previous"')
        if offset + limit < len(items):
            next_query = dict(limit=limit, page_info=f'cursor-{offset + limit}', **carried_over)
            links.append(f'<{base_url}?{urlencode(next_query)}>; rel="next"')

        self._respond(200,
                      {property_name: items[offset:offset + limit]},
                      {'Link': ', '.join(links)} if links else None)

    def do_GET(self):
        self._collect_request_data()

        split_url = urlsplit(self.path)
        path = split_url.path
        query = dict(parse_qsl(split_url.query))

        if path == f'{API_PREFIX}/products.json':
            self._paginate(path, query, 'products', self.products)
        elif path == f'{API_PREFIX}/products/count.json':
            self._respond(200, dict(count=len(self.products)))
        elif re.match(rf'^{API_PREFIX}/products/\d+/metafields\.json$', path):
            self._paginate(path, query, 'metafields', self.metafields)
        elif re.match(rf'^{API_PREFIX}/products/\d+\.json$', path):
            product_id = int(re.search(r'/products/(\d+)\.json$', path).group(1))
            matches = [p for p in self.products if p['id'] == product_id]
            if matches:
                self._respond(200, dict(product=matches[0]))
            else:
                self._respond(404, dict(errors='Not Found'))
        elif path == f'{API_PREFIX}/shopify_payments/payouts.json':
            self._paginate(path, query, 'payouts', self.payouts)
        elif re.match(rf'^{API_PREFIX}/shopify_payments/payouts/\d+\.json$', path):
            payout_id = int(re.search(r'/payouts/(\d+)\.json$', path).group(1))
            matches = [p for p in self.payouts if p['id'] == payout_id]
            if matches:
                self._respond(200, dict(payout=matches[0]))
            else:
                self._respond(404, dict(errors='Not Found'))
        elif path == f'{API_PREFIX}/shopify_payments/balance/transactions.json':
            payout_id = int(query.get('payout_id') or 0)
            self._paginate(path,
                           query,
                           'transactions',
                           [t for t in self.transactions if t['payout_id'] == payout_id])
        else:
            self._respond(404, dict(errors='Not Found'))


class MockShopTestCase(TestCase):
    """ Run the mock shop on a random local port for every test """

    def setUp(self):
        MockShopHandler.reset_collected_data()
        self.server = HTTPServer(('127.0.0.1', 0), MockShopHandler)
        self.server_thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.server_thread.start()

    def tearDown(self):
        self.server.shutdown()
        self.server.server_close()
        self.server_thread.join()

    @property
    def base_url(self) -> str:
        return f'http://127.0.0.1:{self.server.server_address[1]}'

    def get_handled_requests(self) -> List[HandledRequest]:
        return MockShopHandler.get_collected_data().handled_requests
