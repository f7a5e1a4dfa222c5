from datetime import datetime
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel

from shopify_rest.client.base_client import ShopifyClient
from shopify_rest.client.models import ListOptions, ListResource, Options, Pagination
from shopify_rest.client.result_iterator import ResultIterator

METAFIELDS_BASE_PATH = 'metafields'


class Metafield(BaseModel):
    id: Optional[int] = None
    namespace: Optional[str] = None
    key: Optional[str] = None
    value: Optional[Any] = None
    type: Optional[str] = None
    value_type: Optional[str] = None
    """ Legacy type declaration, superseded by "type" """
    description: Optional[str] = None
    owner_id: Optional[int] = None
    owner_resource: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    admin_graphql_api_id: Optional[str] = None


class MetafieldListOptions(ListOptions):
    namespace: Optional[str] = None
    key: Optional[str] = None
    type: Optional[str] = None


class MetafieldResource(BaseModel):
    metafield: Optional[Metafield] = None


class MetafieldsResource(ListResource):
    metafields: List[Metafield]

    def items(self) -> List[Metafield]:
        return self.metafields


def metafield_path_prefix(resource: Optional[str] = None, resource_id: Optional[int] = None) -> str:
    if resource:
        return f'{resource}/{resource_id}/{METAFIELDS_BASE_PATH}'
    return METAFIELDS_BASE_PATH


class MetafieldService:
    """ Metafields of the shop itself or, with ``resource`` and ``resource_id``, of a single owning resource """

    def __init__(self, client: ShopifyClient, resource: Optional[str] = None, resource_id: Optional[int] = None):
        if resource and resource_id is None:
            raise ValueError(f'The ID of the owning {resource} is required.')

        self._client = client
        self._prefix = metafield_path_prefix(resource, resource_id)

    def list(self, options: Options = None) -> List[Metafield]:
        metafields, _ = self.list_with_pagination(options)
        return metafields

    def list_with_pagination(self, options: Options = None) -> Tuple[List[Metafield], Pagination]:
        resource, pagination = self._client.list_with_pagination(f'{self._prefix}.json', MetafieldsResource, options)
        return resource.metafields, pagination

    def list_all(self, options: Options = None, max_results: Optional[int] = None) -> ResultIterator:
        return self._client.iterate(f'{self._prefix}.json', MetafieldsResource, options, max_results=max_results)

    def count(self, options: Options = None) -> int:
        return self._client.count(f'{self._prefix}/count.json', options)

    def get(self, metafield_id: int, options: Options = None) -> Optional[Metafield]:
        return self._client.get(f'{self._prefix}/{metafield_id}.json', MetafieldResource, options).metafield

    def create(self, metafield: Metafield) -> Optional[Metafield]:
        return self._client.post(f'{self._prefix}.json',
                                 MetafieldResource(metafield=metafield),
                                 MetafieldResource).metafield

    def update(self, metafield: Metafield) -> Optional[Metafield]:
        if metafield.id is None:
            raise ValueError('Unable to update a metafield without ID')

        return self._client.put(f'{self._prefix}/{metafield.id}.json',
                                MetafieldResource(metafield=metafield),
                                MetafieldResource).metafield

    def delete(self, metafield_id: int):
        self._client.delete(f'{self._prefix}/{metafield_id}.json')


class MetafieldsMixin:
    """ Delegate the metafield operations of an owning resource to :class:`MetafieldService` """
    _client: ShopifyClient
    _resource_name: str

    def metafields_of(self, resource_id: int) -> MetafieldService:
        return MetafieldService(self._client, self._resource_name, resource_id)

    def list_metafields(self, resource_id: int, options: Options = None) -> List[Metafield]:
        return self.metafields_of(resource_id).list(options)

    def count_metafields(self, resource_id: int, options: Options = None) -> int:
        return self.metafields_of(resource_id).count(options)

    def get_metafield(self, resource_id: int, metafield_id: int, options: Options = None) -> Optional[Metafield]:
        return self.metafields_of(resource_id).get(metafield_id, options)

    def create_metafield(self, resource_id: int, metafield: Metafield) -> Optional[Metafield]:
        return self.metafields_of(resource_id).create(metafield)

    def update_metafield(self, resource_id: int, metafield: Metafield) -> Optional[Metafield]:
        return self.metafields_of(resource_id).update(metafield)

    def delete_metafield(self, resource_id: int, metafield_id: int):
        self.metafields_of(resource_id).delete(metafield_id)
