import json
from decimal import Decimal
from unittest import TestCase

import click
import yaml
from click.testing import CliRunner

from shopify_rest.cli.helpers.printer import print_items, print_resource, OutputFormat
from shopify_rest.client.payouts import Payout, PayoutStatus


def _payouts(count: int):
    return (Payout(id=500 + i, status=PayoutStatus.PAID, amount=Decimal('1.50'), currency='USD') for i in range(count))


class TestPrinter(TestCase):
    _runner = CliRunner()

    def _print_items(self, count: int, output_format: str) -> str:
        printed_counts = []

        @click.command()
        def show():
            printed_counts.append(print_items(_payouts(count), output_format))

        result = self._runner.invoke(show)
        self.assertEqual(0, result.exit_code, result.output)
        self.assertEqual([count], printed_counts)

        return result.output

    def test_json_array(self):
        payouts = json.loads(self._print_items(3, OutputFormat.JSON))

        self.assertEqual([500, 501, 502], [p['id'] for p in payouts])
        self.assertEqual('1.50', payouts[0]['amount'])
        self.assertEqual('paid', payouts[0]['status'])
        # The identifier comes first.
        self.assertEqual('id', list(payouts[0].keys())[0])

    def test_yaml_sequence(self):
        payouts = yaml.safe_load(self._print_items(2, OutputFormat.YAML))

        self.assertEqual([500, 501], [p['id'] for p in payouts])
        self.assertEqual('USD', payouts[1]['currency'])

    def test_no_items(self):
        for output_format in OutputFormat.choices():
            self.assertEqual([], yaml.safe_load(self._print_items(0, output_format)))

    def test_unknown_format(self):
        with self.assertRaises(ValueError):
            print_items(_payouts(1), 'xml')

        with self.assertRaises(ValueError):
            print_resource(dict(id=1), 'xml')
