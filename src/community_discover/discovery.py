"""Personalized discovery: filter, score, rank and balance candidate content."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .config import DEFAULT_LIMIT, GOOD_MATCH_RATIO, PERFECT_MATCH_RATIO
from .diversity import apply_diversity_balancing
from .filters import apply_discovery_filters
from .models import ContentItem, DiscoveryFilters, InterestMatches, Location, ScoredContentItem
from .scoring import calculate_discovery_scores, interest_overlap_ratio

logger = logging.getLogger(__name__)


def score_content(
    user_interests: list[str],
    user_location: Location | None,
    items: list[ContentItem],
    filters: DiscoveryFilters,
    now: datetime,
) -> list[ScoredContentItem]:
    """Attach a discovery score to copies of the items, in input order."""
    scored: list[ScoredContentItem] = []
    for item in items:
        scores = calculate_discovery_scores(user_interests, user_location, item, filters, now)
        scored.append(ScoredContentItem(
            **item.model_dump(include=set(ContentItem.model_fields)),
            discovery_score=scores.final_score,
            scores=scores,
        ))
    return scored


def rank_by_discovery_score(scored: list[ScoredContentItem]) -> list[ScoredContentItem]:
    # sorted() is stable, so equal scores keep input order
    return sorted(scored, key=lambda x: x.discovery_score, reverse=True)


def discover_content(
    user_interests: list[str],
    user_location: Location | None,
    available_content: list[ContentItem],
    filters: DiscoveryFilters,
    limit: int = DEFAULT_LIMIT,
    now: datetime | None = None,
) -> list[ScoredContentItem]:
    """
    Produce a bounded, diversity-balanced, score-ordered discovery page.

    Input items are never modified; the returned items are new objects
    carrying `discovery_score` and the full `scores` breakdown.

    Args:
        user_interests: Free-text interests, empty means no signal
        user_location: Where the user is, or None for no signal
        available_content: Candidate pool, already loaded in memory
        filters: Hard constraints applied before scoring
        limit: Maximum number of results
        now: Reference time for freshness, defaults to the current UTC time

    Returns:
        At most `limit` scored items

    Raises:
        ValueError: If a required argument is None or limit is negative
    """
    if user_interests is None:
        raise ValueError("user_interests is required (pass [] for no interests)")
    if available_content is None:
        raise ValueError("available_content is required")
    if filters is None:
        raise ValueError("filters is required (pass DiscoveryFilters() for none)")
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    if now is None:
        now = datetime.now(timezone.utc)

    filtered = apply_discovery_filters(available_content, filters)
    scored = score_content(user_interests, user_location, filtered, filters, now)
    ranked = rank_by_discovery_score(scored)
    results = apply_diversity_balancing(ranked, limit)

    logger.debug(
        f"Discovery: {len(available_content)} candidates, {len(filtered)} after filters, "
        f"{len(results)} returned"
    )
    return results


def match_content_with_interests(user_interests: list[str], content: list[ContentItem]) -> InterestMatches:
    """
    Bucket items by how strongly they overlap the user's interests.

    - perfect: overlap >= 0.8
    - good: overlap >= 0.4
    - serendipitous: some overlap below 0.4

    Items with no overlap are left out. With no interests every bucket is
    empty.
    """
    if user_interests is None:
        raise ValueError("user_interests is required (pass [] for no interests)")
    if content is None:
        raise ValueError("content is required")

    matches = InterestMatches()
    if not user_interests:
        return matches

    for item in content:
        ratio = interest_overlap_ratio(user_interests, item)
        if ratio >= PERFECT_MATCH_RATIO:
            matches.perfect_matches.append(item)
        elif ratio >= GOOD_MATCH_RATIO:
            matches.good_matches.append(item)
        elif ratio > 0:
            matches.serendipitous_matches.append(item)

    return matches
