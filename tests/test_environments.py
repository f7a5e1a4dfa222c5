import os
from unittest import TestCase
from unittest.mock import patch

from shopify_rest.client.models import ShopEndpoint
from shopify_rest.common.environments import env, flag, EnvironmentVariableRequired, InvalidEnvironmentVariable


class TestEnvironments(TestCase):
    def test_default_value(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual('fallback', env('TEST_ENV_DEFAULT', default='fallback'))

    def test_required_value(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(EnvironmentVariableRequired) as e:
                env('TEST_ENV_REQUIRED', required=True, hint='e.g., acme')

        self.assertEqual('Environment variable required: TEST_ENV_REQUIRED (e.g., acme)', str(e.exception))

    def test_transform(self):
        with patch.dict(os.environ, {'TEST_ENV_NUMBER': '2.5'}):
            self.assertEqual(2.5, env('TEST_ENV_NUMBER', transform=float))

    def test_invalid_value(self):
        with patch.dict(os.environ, {'SHOPIFY_SHOP': 'acme', 'SHOPIFY_TIMEOUT': 'soon'}):
            with self.assertRaises(InvalidEnvironmentVariable) as e:
                ShopEndpoint.from_env()

        self.assertEqual('SHOPIFY_TIMEOUT', e.exception.environment_variable_name)
        self.assertIn("'soon'", str(e.exception))

    def test_flag(self):
        for value, expected in [('1', True), ('TRUE', True), (' yes ', True), ('on', True),
                                ('0', False), ('false', False), ('', False)]:
            with patch.dict(os.environ, {'TEST_ENV_FLAG': value}):
                self.assertEqual(expected, flag('TEST_ENV_FLAG'), f'Unexpected flag from {value!r}')

        with patch.dict(os.environ, {}, clear=True):
            self.assertFalse(flag('TEST_ENV_FLAG'))

    def test_secret_is_masked_in_log(self):
        with patch.dict(os.environ, {'TEST_ENV_SECRET': 'shpat_very_secret'}):
            with self.assertLogs('shopify_rest.environment', level='DEBUG') as captured:
                self.assertEqual('shpat_very_secret',
                                 env('TEST_ENV_SECRET', description='Access token', secret=True))

        self.assertEqual(1, len(captured.output))
        self.assertIn('"TEST_ENV_SECRET" (Access token) -> "***"', captured.output[0])
        self.assertNotIn('shpat_very_secret', captured.output[0])
