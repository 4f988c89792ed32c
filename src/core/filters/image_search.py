"""
Search dispatch and ordering for image listings.

The mapping from search parameters to repository queries is an explicit
decision table:

    contributor | fragment | mode
    ----------- | -------- | ------------------------
    set         | set      | CONTRIBUTOR_AND_FRAGMENT
    set         | absent   | CONTRIBUTOR
    absent      | set      | FRAGMENT
    absent      | absent   | ALL

An empty fragment counts as absent.
"""

from collections.abc import Iterable
from enum import Enum

from core.models.image import Image


class SearchMode(str, Enum):
    """Which combination of search criteria is in effect."""

    ALL = "all"
    CONTRIBUTOR = "contributor"
    FRAGMENT = "fragment"
    CONTRIBUTOR_AND_FRAGMENT = "contributor_and_fragment"


def resolve_search_mode(*, has_contributor: bool, fragment: str | None) -> SearchMode:
    has_fragment = bool(fragment)

    if has_contributor and has_fragment:
        return SearchMode.CONTRIBUTOR_AND_FRAGMENT
    if has_contributor:
        return SearchMode.CONTRIBUTOR
    if has_fragment:
        return SearchMode.FRAGMENT
    return SearchMode.ALL


def merge_unique(*result_sets: Iterable[Image]) -> list[Image]:
    """Concatenate result sets, keeping the first occurrence of each image id."""
    seen: set[str] = set()
    merged: list[Image] = []

    for results in result_sets:
        for image in results:
            if image.id is None or image.id in seen:
                continue
            seen.add(image.id)
            merged.append(image)

    return merged


def sort_images(images: Iterable[Image]) -> list[Image]:
    """Order images by natural key ascending, ties by creation time descending.

    Python's sort is stable, so sorting by the tie-breaker first and the
    primary key second yields the combined order.
    """
    newest_first = sorted(images, key=lambda image: image.created or "", reverse=True)
    return sorted(newest_first, key=lambda image: image.natural_key)
