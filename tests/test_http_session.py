from unittest import TestCase
from unittest.mock import MagicMock

from requests import Session
from requests.exceptions import ConnectionError

from shopify_rest.http.session import HttpSession, ClientError, ServerError
from tests.mock_shop import make_response, MockShopTestCase


class TestHttpSession(TestCase):
    def test_submit_403_status_code(self):
        session_mock = MagicMock(Session)
        session_mock.get.return_value = make_response(403, dict(errors='Forbidden'))

        http_session = HttpSession(session=session_mock)
        with self.assertRaises(ClientError) as e:
            http_session.submit(method='get', url='http://example-url.com')
        self.assertEqual(e.exception.response.status_code, 403)
        self.assertIn('HTTP 403', str(e.exception))

    def test_submit_500_status_code(self):
        session_mock = MagicMock(Session)
        session_mock.post.return_value = make_response(503, '')

        http_session = HttpSession(session=session_mock)
        with self.assertRaises(ServerError) as e:
            http_session.post('http://example-url.com', json=dict())
        self.assertEqual('HTTP 503 (empty response)', str(e.exception))

    def test_suppressed_error(self):
        session_mock = MagicMock(Session)
        session_mock.delete.return_value = make_response(404, dict(errors='Not Found'))

        http_session = HttpSession(session=session_mock, suppress_error=True)
        response = http_session.delete('http://example-url.com')
        self.assertEqual(404, response.status_code)

    def test_transport_error_is_not_wrapped(self):
        session_mock = MagicMock(Session)
        session_mock.get.side_effect = ConnectionError('Connection refused')

        http_session = HttpSession(session=session_mock)
        with self.assertRaises(ConnectionError):
            http_session.get('http://example-url.com')

    def test_access_token_and_timeout(self):
        session_mock = MagicMock(Session)
        session_mock.put.return_value = make_response(200, dict())

        http_session = HttpSession(access_token='shpat_test', timeout=3, session=session_mock)
        http_session.put('http://example-url.com', json=dict(a=1))

        session_mock.put.assert_called_once_with('http://example-url.com',
                                                 json=dict(a=1),
                                                 timeout=3,
                                                 headers={'X-Shopify-Access-Token': 'shpat_test'})

    def test_requests_are_logged_with_session_id(self):
        session_mock = MagicMock(Session)
        session_mock.get.return_value = make_response(200, dict())

        http_session = HttpSession('client-1', session=session_mock)
        with self.assertLogs('shopify_rest.HttpSession', level='DEBUG') as captured:
            http_session.get('http://example-url.com', params=dict(limit='5'))

        self.assertIn("client-1: GET http://example-url.com {'limit': '5'}", captured.output[0])

    def test_user_agent(self):
        user_agent = HttpSession.generate_http_user_agent()
        self.assertTrue(user_agent.startswith('shopify-rest-client/'))
        self.assertIn('Module/unittest', user_agent)


class TestHttpSessionWithServer(MockShopTestCase):
    def test_default_headers(self):
        with HttpSession(access_token='shpat_test') as http_session:
            response = http_session.get(f'{self.base_url}/admin/api/2023-01/products/count.json')

        self.assertEqual(200, response.status_code)
        self.assertEqual(5, response.json()['count'])

        handled_requests = self.get_handled_requests()
        self.assertEqual(1, len(handled_requests))
        self.assertEqual('shpat_test', handled_requests[0].headers['X-Shopify-Access-Token'])
        self.assertIn('shopify-rest-client/', handled_requests[0].headers['User-Agent'])
        self.assertEqual('application/json', handled_requests[0].headers['Accept'])
