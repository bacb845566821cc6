# src/community_discover/scoring.py
"""
Scoring functions for the discovery engine.

All scoring functions return normalized values between 0.0 and 1.0:
- 1.0 = perfect match/highest quality
- 0.0 = no match/lowest quality

Missing optional data never raises; it maps to a neutral or conservative
score instead. These scores are combined using the weights defined in
config.py.
"""

import math
from datetime import datetime

from .config import (
    ATTENDEES_REFERENCE,
    ATTENDEES_SCALE,
    CATEGORY_SCALE,
    CATEGORY_WEIGHTS,
    CONTENT_TYPE_SCALE,
    CONTENT_TYPE_WEIGHTS,
    DEFAULT_CATEGORY_WEIGHT,
    DEFAULT_CONTENT_TYPE_WEIGHT,
    DISTANT_LOCATION_SCORE,
    DIVERSITY_BASE,
    ENGAGEMENT_BASE,
    ENGAGEMENT_REFERENCE_TOTAL,
    ENGAGEMENT_SCALE,
    FRESHNESS_DECAY_RATE,
    FRESHNESS_FLOOR,
    LOCATION_REFERENCE_KM,
    MAX_RATING,
    MIN_DESCRIPTION_LENGTH,
    MIN_TITLE_LENGTH,
    NEUTRAL_SCORE,
    NO_LOCATION_SCORE,
    QUALITY_BONUS,
    RATING_SCALE,
    SAME_CITY_SCORE,
    SAME_STATE_SCORE,
    SERENDIPITY_NONE_SCORE,
    SERENDIPITY_PARTIAL_SCORE,
    SERENDIPITY_UPPER_RATIO,
    TAG_VARIETY_SCALE,
    TAG_VARIETY_TARGET,
    DiscoveryWeights,
)
from .geo import calculate_distance, hours_between
from .models import ContentItem, DiscoveryFilters, DiscoveryScore, Location


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


def interest_overlap_ratio(user_interests: list[str], item: ContentItem) -> float:
    """
    Fraction of user interests found in the item's category or tags.

    An interest counts as found when it is a case-insensitive substring of
    the category or of any tag. Callers must handle the empty-interests case
    themselves; this returns 0.0 for it.
    """
    if not user_interests:
        return 0.0

    item_terms = [item.category.lower()] + [tag.lower() for tag in item.tags]
    matching = [
        interest for interest in user_interests
        if any(interest.lower() in term for term in item_terms)
    ]
    return len(matching) / len(user_interests)


def calculate_interest_match_score(user_interests: list[str], item: ContentItem) -> float:
    """
    Score based on overlap with the user's interests (0.0-1.0).

    Args:
        user_interests: Free-text interest strings, may be empty
        item: Content item to score

    Returns:
        0.5 when the user has no interests, otherwise the overlap ratio
    """
    if not user_interests:
        return NEUTRAL_SCORE

    return min(interest_overlap_ratio(user_interests, item), 1.0)


def calculate_diversity_score(item: ContentItem) -> float:
    """
    Score based on the intrinsic variety of the item's kind (0.0-1.0).

    This measures the item on its own, not relative to other results;
    result-set variety is handled by diversity balancing.

    - base 0.5
    - content type lookup weight * 0.3 (unlisted types: 0.5)
    - category lookup weight * 0.2 (unlisted categories: 0.5)
    - up to 0.2 for tag count, reaching the cap at 5 tags

    Args:
        item: Content item to score

    Returns:
        Score between 0.0 and 1.0
    """
    score = DIVERSITY_BASE
    score += CONTENT_TYPE_WEIGHTS.get(item.type, DEFAULT_CONTENT_TYPE_WEIGHT) * CONTENT_TYPE_SCALE
    score += CATEGORY_WEIGHTS.get(item.category, DEFAULT_CATEGORY_WEIGHT) * CATEGORY_SCALE

    if item.tags:
        score += min(len(item.tags) / TAG_VARIETY_TARGET, 1.0) * TAG_VARIETY_SCALE

    return _clamp(score)


def calculate_freshness_score(item: ContentItem, now: datetime) -> float:
    """
    Score based on creation time (0.0-1.0, recent = higher).

    Uses exponential decay of 3% per hour since creation:
    - just created: 1.0
    - 24 hours: ~0.49
    - 77+ hours: floored at 0.1

    Args:
        item: Content item with created_at
        now: Reference time for the request

    Returns:
        Score between 0.1 and 1.0
    """
    hours = hours_between(item.created_at, now)
    score = math.exp(-FRESHNESS_DECAY_RATE * hours)

    # Future timestamps would decay above 1.0
    return min(1.0, max(score, FRESHNESS_FLOOR))


def calculate_location_relevance_score(user_location: Location | None, item: ContentItem) -> float:
    """
    Score based on proximity to the user (0.0-1.0).

    - either side without location: 0.5
    - same city: 1.0
    - same state: 0.8
    - both sides with coordinates: 1 - distance / 100km, floored at 0.0
    - otherwise: 0.3

    Args:
        user_location: Where the user is, or None
        item: Content item to score

    Returns:
        Score between 0.0 and 1.0
    """
    if user_location is None or item.location is None:
        return NO_LOCATION_SCORE

    item_location = item.location

    if user_location.city and user_location.city == item_location.city:
        return SAME_CITY_SCORE

    if user_location.state and user_location.state == item_location.state:
        return SAME_STATE_SCORE

    if item_location.has_coordinates and user_location.has_coordinates:
        distance = calculate_distance(
            user_location.latitude,
            user_location.longitude,
            item_location.latitude,
            item_location.longitude,
        )
        return _clamp(1 - distance / LOCATION_REFERENCE_KM)

    return DISTANT_LOCATION_SCORE


def calculate_engagement_prediction_score(item: ContentItem) -> float:
    """
    Score based on quality and popularity indicators (0.0-1.0).

    Starts at 0.5 and adds:
    - up to 0.3 for likes + comments + shares (cap at 1000)
    - 0.1 each for a title over 10 chars, a description over 50 chars, an image
    - up to 0.2 for attendees (cap at 100)
    - up to 0.2 for rating out of 5

    Args:
        item: Content item to score

    Returns:
        Score between 0.0 and 1.0
    """
    score = ENGAGEMENT_BASE

    if item.engagement is not None:
        score += min(item.engagement.total / ENGAGEMENT_REFERENCE_TOTAL, 1.0) * ENGAGEMENT_SCALE

    if len(item.title) > MIN_TITLE_LENGTH:
        score += QUALITY_BONUS

    if len(item.description) > MIN_DESCRIPTION_LENGTH:
        score += QUALITY_BONUS

    if item.image:
        score += QUALITY_BONUS

    if item.attendees_count is not None:
        score += min(item.attendees_count / ATTENDEES_REFERENCE, 1.0) * ATTENDEES_SCALE

    if item.rating is not None:
        score += (item.rating / MAX_RATING) * RATING_SCALE

    return _clamp(score)


def calculate_serendipity_score(user_interests: list[str], item: ContentItem) -> float:
    """
    Score for unexpected but relevant content (0.0-1.0).

    Partial overlap is rewarded over both no overlap and near-total overlap:
    - no interests: 0.5
    - overlap in (0, 0.7): 0.8
    - no overlap: 0.3
    - overlap >= 0.7: 0.5

    Args:
        user_interests: Free-text interest strings, may be empty
        item: Content item to score

    Returns:
        Score between 0.0 and 1.0
    """
    if not user_interests:
        return NEUTRAL_SCORE

    ratio = interest_overlap_ratio(user_interests, item)

    if 0 < ratio < SERENDIPITY_UPPER_RATIO:
        return SERENDIPITY_PARTIAL_SCORE
    elif ratio == 0:
        return SERENDIPITY_NONE_SCORE
    else:
        return NEUTRAL_SCORE


def calculate_composite_score(
    interest_match_score: float,
    diversity_score: float,
    freshness_score: float,
    location_relevance_score: float,
    engagement_prediction_score: float,
    serendipity_score: float,
    weights: type[DiscoveryWeights] = DiscoveryWeights,
) -> float:
    """
    Weighted combination of all sub-scores.

    The weights sum to 1.0, so the result is also in the range 0.0-1.0.

    Returns:
        Final score between 0.0 and 1.0
    """
    composite = (
        interest_match_score * weights.INTEREST_MATCH +
        diversity_score * weights.DIVERSITY +
        freshness_score * weights.FRESHNESS +
        location_relevance_score * weights.LOCATION_RELEVANCE +
        engagement_prediction_score * weights.ENGAGEMENT_PREDICTION +
        serendipity_score * weights.SERENDIPITY
    )

    return _clamp(composite)


def calculate_discovery_scores(
    user_interests: list[str],
    user_location: Location | None,
    item: ContentItem,
    filters: DiscoveryFilters | None,
    now: datetime,
) -> DiscoveryScore:
    """
    Compute all six sub-scores for an item and combine them.

    Args:
        user_interests: Free-text interest strings, may be empty
        user_location: Where the user is, or None
        item: Content item being scored
        filters: Active filters (not used in calculation, for API consistency)
        now: Reference time for freshness

    Returns:
        Immutable DiscoveryScore with the breakdown and final score
    """
    interest = calculate_interest_match_score(user_interests, item)
    diversity = calculate_diversity_score(item)
    freshness = calculate_freshness_score(item, now)
    location = calculate_location_relevance_score(user_location, item)
    engagement = calculate_engagement_prediction_score(item)
    serendipity = calculate_serendipity_score(user_interests, item)

    return DiscoveryScore(
        interest_match_score=interest,
        diversity_score=diversity,
        freshness_score=freshness,
        location_relevance_score=location,
        engagement_prediction_score=engagement,
        serendipity_score=serendipity,
        final_score=calculate_composite_score(
            interest, diversity, freshness, location, engagement, serendipity,
        ),
    )
