"""Exhaustive paging over DynamoDB query/scan results."""

from collections.abc import Callable
from typing import Any

Item = dict[str, Any]


def collect_pages(operation: Callable[..., dict[str, Any]], **kwargs: Any) -> list[Item]:
    """Run a query or scan until `LastEvaluatedKey` is exhausted."""
    items: list[Item] = []
    last_evaluated_key: dict[str, Any] | None = None

    while True:
        if last_evaluated_key:
            kwargs["ExclusiveStartKey"] = last_evaluated_key

        response = operation(**kwargs)
        page_items = response.get("Items", [])

        if not isinstance(page_items, list):
            raise TypeError("DynamoDB response 'Items' is not a list")

        items.extend(page_items)

        last_evaluated_key = response.get("LastEvaluatedKey")
        if not last_evaluated_key:
            return items
