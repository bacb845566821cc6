"""Greedy diversity balancing over an already ranked result list."""

from typing import TypeVar

from .config import MAX_DISTINCT_CATEGORIES, MAX_DISTINCT_TAGS, MAX_DISTINCT_TYPES
from .models import ContentItem

T = TypeVar("T", bound=ContentItem)


def check_tag_diversity(item_tags: list[str], used_tags: set[str]) -> bool:
    """
    Whether an item adds tag variety.

    Untagged items always pass. Once MAX_DISTINCT_TAGS tags have been seen,
    repeats are allowed.
    """
    if not item_tags:
        return True

    new_tags = [tag for tag in item_tags if tag not in used_tags]
    return len(new_tags) > 0 or len(used_tags) >= MAX_DISTINCT_TAGS


def apply_diversity_balancing(sorted_items: list[T], limit: int) -> list[T]:
    """
    Select up to `limit` items, preferring variety over raw rank.

    First pass walks the ranked list and admits an item only if its category
    and type are new (until 4 categories / 3 types are in) and it brings a
    new tag (until 10 tags are in). If that leaves the page short, a second
    pass backfills with the remaining items in rank order. Items are never
    re-scored.

    Args:
        sorted_items: Items sorted by discovery score, best first
        limit: Maximum number of items to return

    Returns:
        At most `limit` items, min(limit, len(sorted_items)) of them
    """
    selected: list[T] = []
    selected_positions: set[int] = set()
    used_categories: set[str] = set()
    used_types: set[str] = set()
    used_tags: set[str] = set()

    for position, item in enumerate(sorted_items):
        if len(selected) >= limit:
            break

        category_diverse = item.category not in used_categories or len(used_categories) >= MAX_DISTINCT_CATEGORIES
        type_diverse = item.type not in used_types or len(used_types) >= MAX_DISTINCT_TYPES
        tag_diverse = check_tag_diversity(item.tags, used_tags)

        if category_diverse and type_diverse and tag_diverse:
            selected.append(item)
            selected_positions.add(position)
            used_categories.add(item.category)
            used_types.add(item.type)
            used_tags.update(item.tags)

    # Backfill remaining slots in rank order
    if len(selected) < limit:
        for position, item in enumerate(sorted_items):
            if len(selected) >= limit:
                break
            if position not in selected_positions:
                selected.append(item)

    return selected
