"""
Hard-constraint filtering of the candidate pool.

Each filter only applies to items that carry the attribute it checks: an
item without a date, location or price is never excluded by the date,
radius or price filter. Ranges are not validated, so min > max simply
rejects every priced item.
"""

from .geo import as_utc, calculate_distance
from .models import ContentItem, DiscoveryFilters


def _passes_category(item: ContentItem, filters: DiscoveryFilters) -> bool:
    return not filters.categories or item.category in filters.categories


def _passes_content_type(item: ContentItem, filters: DiscoveryFilters) -> bool:
    return not filters.content_types or item.type in filters.content_types


def _passes_date_range(item: ContentItem, filters: DiscoveryFilters) -> bool:
    if filters.date_range is None or item.date is None:
        return True
    item_date = as_utc(item.date)
    return as_utc(filters.date_range.start) <= item_date <= as_utc(filters.date_range.end)


def _passes_location(item: ContentItem, filters: DiscoveryFilters) -> bool:
    if filters.location is None or item.location is None or not item.location.has_coordinates:
        return True
    distance = calculate_distance(
        filters.location.latitude,
        filters.location.longitude,
        item.location.latitude,
        item.location.longitude,
    )
    return distance <= filters.location.radius


def _passes_price(item: ContentItem, filters: DiscoveryFilters) -> bool:
    if filters.price_range is None or item.price is None:
        return True
    return filters.price_range.min <= item.price <= filters.price_range.max


def _passes_tags(item: ContentItem, filters: DiscoveryFilters) -> bool:
    if not filters.tags:
        return True
    wanted = set(filters.tags)
    return any(tag in wanted for tag in item.tags)


FILTER_PREDICATES = (
    _passes_category,
    _passes_content_type,
    _passes_date_range,
    _passes_location,
    _passes_price,
    _passes_tags,
)


def passes_filters(item: ContentItem, filters: DiscoveryFilters) -> bool:
    """True if the item satisfies every applicable filter."""
    return all(predicate(item, filters) for predicate in FILTER_PREDICATES)


def apply_discovery_filters(items: list[ContentItem], filters: DiscoveryFilters) -> list[ContentItem]:
    """Return the items that pass all filters, preserving input order."""
    return [item for item in items if passes_filters(item, filters)]
