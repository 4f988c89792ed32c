"""DynamoDB table access for the gallery repositories.

Each adapter is bound to one table and to the name of that table's
partition key attribute, so callers address items by key value alone.
Errors from boto3 are not caught here; the repositories translate them.
"""

import os
from typing import Any, Protocol

import boto3

from core.infrastructure.aws.pagination import collect_pages
from core.utils.constants import ENV_AWS_ENDPOINT_URL, ENV_AWS_REGION

Item = dict[str, Any]


class DynamoDBAdapterProtocol(Protocol):
    """Repository-facing table protocol."""

    table_name: str
    key_attribute: str

    def fetch(self, key_value: str, *, consistent: bool = False) -> Item | None: ...
    def insert(self, item: Item) -> None: ...
    def replace(self, item: Item) -> None: ...
    def remove(self, key_value: str) -> None: ...
    def scan_all(self, *, filter_expression: Any = None) -> list[Item]: ...
    def query_index(
        self,
        index_name: str,
        key_condition: Any,
        *,
        filter_expression: Any = None,
        newest_first: bool = True,
    ) -> list[Item]: ...
    def insert_request(self, item: Item) -> Item: ...
    def replace_request(self, item: Item) -> Item: ...
    def remove_request(self, key_value: str) -> Item: ...
    def transact(self, requests: list[Item]) -> None: ...


class DynamoDBAdapter:
    """Single-table DynamoDB operations keyed by one string attribute."""

    def __init__(self, table_env_var: str, *, key_attribute: str) -> None:
        table_name = os.getenv(table_env_var)
        if not table_name:
            raise RuntimeError(f"{table_env_var} environment variable is not set")

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

        self.table_name = table_name
        self.key_attribute = key_attribute
        self._table = dynamodb.Table(table_name)
        # The resource's client accepts native Python types like the table does
        self._client = dynamodb.meta.client

    def fetch(self, key_value: str, *, consistent: bool = False) -> Item | None:
        """Return the item stored under `key_value`, or None."""
        response = self._table.get_item(
            Key={self.key_attribute: key_value},
            ConsistentRead=consistent,
        )
        item: Item | None = response.get("Item")
        return item

    def insert(self, item: Item) -> None:
        """Write a new item, failing with ConditionalCheckFailedException if the key exists."""
        self._table.put_item(
            Item=item,
            ConditionExpression=f"attribute_not_exists({self.key_attribute})",
        )

    def replace(self, item: Item) -> None:
        self._table.put_item(Item=item)

    def remove(self, key_value: str) -> None:
        self._table.delete_item(Key={self.key_attribute: key_value})

    def scan_all(self, *, filter_expression: Any = None) -> list[Item]:
        """Scan the whole table, following pagination."""
        kwargs: dict[str, Any] = {}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression
        return collect_pages(self._table.scan, **kwargs)

    def query_index(
        self,
        index_name: str,
        key_condition: Any,
        *,
        filter_expression: Any = None,
        newest_first: bool = True,
    ) -> list[Item]:
        """Query a secondary index, following pagination.

        Results are ordered by the index sort key, descending unless
        `newest_first` is False.
        """
        kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": not newest_first,
        }
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression
        return collect_pages(self._table.query, **kwargs)

    def insert_request(self, item: Item) -> Item:
        """Transaction entry that creates `item` only if its key is unused."""
        return self._put_request(item, f"attribute_not_exists({self.key_attribute})")

    def replace_request(self, item: Item) -> Item:
        """Transaction entry that overwrites `item` only if its key already exists."""
        return self._put_request(item, f"attribute_exists({self.key_attribute})")

    def remove_request(self, key_value: str) -> Item:
        return {
            "Delete": {
                "TableName": self.table_name,
                "Key": {self.key_attribute: key_value},
            }
        }

    def transact(self, requests: list[Item]) -> None:
        """Apply all requests atomically; any failed condition cancels every write."""
        self._client.transact_write_items(TransactItems=requests)

    def _put_request(self, item: Item, condition: str) -> Item:
        return {
            "Put": {
                "TableName": self.table_name,
                "Item": item,
                "ConditionExpression": condition,
            }
        }
