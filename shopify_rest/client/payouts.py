import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel

from shopify_rest.client.base_client import ShopifyClient
from shopify_rest.client.models import ListResource, Options, Pagination
from shopify_rest.client.result_iterator import ResultIterator

PAYOUTS_BASE_PATH = 'shopify_payments/payouts'
PAYOUT_TRANSACTIONS_BASE_PATH = 'shopify_payments/balance/transactions'


class PayoutStatus(str, Enum):
    SCHEDULED = 'scheduled'
    IN_TRANSIT = 'in_transit'
    PAID = 'paid'
    FAILED = 'failed'
    CANCELED = 'canceled'


class Payout(BaseModel):
    id: Optional[int] = None
    date: Optional[dt.date] = None
    currency: Optional[str] = None
    amount: Optional[Decimal] = None
    status: Optional[PayoutStatus] = None


class PayoutsListOptions(BaseModel):
    page_info: Optional[str] = None
    limit: Optional[int] = None
    fields: Optional[str] = None
    last_id: Optional[int] = None
    since_id: Optional[int] = None
    status: Optional[PayoutStatus] = None
    date_min: Optional[dt.date] = None
    date_max: Optional[dt.date] = None
    date: Optional[dt.date] = None


class PayoutTransaction(BaseModel):
    id: int
    type: str
    test: bool = False
    payout_id: Optional[int] = None
    payout_status: Optional[str] = None
    currency: str
    amount: Decimal
    fee: Decimal
    net: Decimal
    source_id: Optional[int] = None
    source_type: Optional[str] = None
    source_order_id: Optional[int] = None
    source_order_transaction_id: Optional[int] = None
    processed_at: dt.datetime


class PayoutResource(BaseModel):
    """ Body of shopify_payments/payouts/<id>.json """
    payout: Optional[Payout] = None


class PayoutsResource(ListResource):
    """ Body of shopify_payments/payouts.json """
    payouts: List[Payout]

    def items(self) -> List[Payout]:
        return self.payouts


class PayoutTransactionsResource(ListResource):
    """ Body of shopify_payments/balance/transactions.json """
    transactions: List[PayoutTransaction]

    def items(self) -> List[PayoutTransaction]:
        return self.transactions


class PayoutsService:
    """ Shopify Payments payouts (read-only)

        See https://shopify.dev/docs/api/admin-rest/2023-01/resources/payouts
    """

    def __init__(self, client: ShopifyClient):
        self._client = client

    def list(self, options: Options = None) -> List[Payout]:
        payouts, _ = self.list_with_pagination(options)
        return payouts

    def list_with_pagination(self, options: Options = None) -> Tuple[List[Payout], Pagination]:
        resource, pagination = self._client.list_with_pagination(f'{PAYOUTS_BASE_PATH}.json',
                                                                 PayoutsResource,
                                                                 options)
        return resource.payouts, pagination

    def list_all(self, options: Options = None, max_results: Optional[int] = None) -> ResultIterator:
        return self._client.iterate(f'{PAYOUTS_BASE_PATH}.json', PayoutsResource, options, max_results=max_results)

    def get(self, payout_id: int, options: Options = None) -> Optional[Payout]:
        return self._client.get(f'{PAYOUTS_BASE_PATH}/{payout_id}.json', PayoutResource, options).payout

    def transactions_for_payout(self, payout_id: int) -> List[PayoutTransaction]:
        """ Load the first page of the balance transactions of the given payout """
        resource, _ = self._client.list_with_pagination(
            f'{PAYOUT_TRANSACTIONS_BASE_PATH}.json?payout_id={payout_id}',
            PayoutTransactionsResource
        )
        return resource.transactions

    def list_transactions_for_payout(self,
                                     payout_id: int,
                                     max_results: Optional[int] = None) -> ResultIterator:
        """ Iterate through every balance transaction of the given payout, page by page """
        return self._client.iterate(f'{PAYOUT_TRANSACTIONS_BASE_PATH}.json',
                                    PayoutTransactionsResource,
                                    dict(payout_id=payout_id),
                                    max_results=max_results)
