from datetime import datetime
from typing import Optional

import click

from shopify_rest.cli.helpers.client_factory import get_client_from_context
from shopify_rest.cli.helpers.command import command, output_option, list_options
from shopify_rest.cli.helpers.printer import print_resource, print_items, OutputFormat
from shopify_rest.client.base_exceptions import MissingResourceError
from shopify_rest.client.payouts import PayoutsService, PayoutsListOptions, PayoutStatus


@click.group('payouts')
def payouts_command_group():
    """ Interact with the Shopify Payments payouts """


def _get_service() -> PayoutsService:
    return PayoutsService(get_client_from_context())


@command(payouts_command_group, 'list')
@list_options
@click.option('--status', type=click.Choice([s.value for s in PayoutStatus]), default=None, help='Filter by status')
@click.option('--date-min', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Payouts paid on or after the date (YYYY-MM-DD)')
@click.option('--date-max', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Payouts paid on or before the date (YYYY-MM-DD)')
@output_option(OutputFormat.DEFAULT_FOR_DATA)
def list_payouts(limit: Optional[int],
                 page_info: Optional[str],
                 max_results: Optional[int],
                 status: Optional[str],
                 date_min: Optional[datetime],
                 date_max: Optional[datetime],
                 output: str):
    """ List payouts, following the pagination until the last page """
    list_options = PayoutsListOptions(limit=limit,
                                      page_info=page_info,
                                      status=status,
                                      date_min=date_min.date() if date_min else None,
                                      date_max=date_max.date() if date_max else None)
    print_items(_get_service().list_all(list_options, max_results=max_results), output)


@command(payouts_command_group, 'get')
@click.argument('payout_id', type=int)
@output_option()
def get_payout(payout_id: int, output: str):
    """ Show a payout """
    payout = _get_service().get(payout_id)
    if payout is None:
        raise MissingResourceError('', 404, f'Payout {payout_id} not found')
    print_resource(payout, output)


@command(payouts_command_group, 'transactions')
@click.argument('payout_id', type=int)
@click.option('--max-results', type=int, default=None, help='Stop after this number of items')
@output_option(OutputFormat.DEFAULT_FOR_DATA)
def list_payout_transactions(payout_id: int, max_results: Optional[int], output: str):
    """ List the balance transactions of a payout """
    print_items(_get_service().list_transactions_for_payout(payout_id, max_results=max_results), output)
