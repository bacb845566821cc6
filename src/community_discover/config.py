# src/community_discover/config.py
"""
Discovery Engine Configuration

SCORING WEIGHTS:
These weights control how each sub-score influences the final discovery score.
Total must sum to 1.0 (100%) so scores stay comparable across requests.

Personal relevance (target: 50%):
- INTEREST_MATCH: Overlap between user interests and item category/tags
- LOCATION_RELEVANCE: Proximity to the user

Content signals (target: 50%):
- FRESHNESS: Preference for newly created content
- DIVERSITY: Intrinsic variety of the item's kind
- ENGAGEMENT_PREDICTION: Quality and popularity indicators
- SERENDIPITY: Reward for partial, unexpected overlap
"""

import os


class DiscoveryWeights:
    # Personal relevance (50% total)
    INTEREST_MATCH = 0.30
    LOCATION_RELEVANCE = 0.20

    # Content signals (50% total)
    FRESHNESS = 0.20
    DIVERSITY = 0.15
    ENGAGEMENT_PREDICTION = 0.10
    SERENDIPITY = 0.05

    @classmethod
    def validate(cls):
        """Ensure weights sum to 1.0"""
        total = sum([
            cls.INTEREST_MATCH,
            cls.DIVERSITY,
            cls.FRESHNESS,
            cls.LOCATION_RELEVANCE,
            cls.ENGAGEMENT_PREDICTION,
            cls.SERENDIPITY,
        ])
        if abs(total - 1.0) >= 0.001:
            raise AssertionError(f"Weights must sum to 1.0, got {total}")
        return True


# Validate on import
DiscoveryWeights.validate()


# Intrinsic variety lookups, unknown keys fall back to the defaults below
CONTENT_TYPE_WEIGHTS: dict[str, float] = {
    "event": 1.0,
    "artist": 0.9,
    "post": 0.8,
    "group": 0.7,
    "business": 0.6,
}
DEFAULT_CONTENT_TYPE_WEIGHT = 0.5

CATEGORY_WEIGHTS: dict[str, float] = {
    "music": 1.0,
    "art": 0.9,
    "food": 0.8,
    "sports": 0.9,
    "business": 0.7,
    "education": 0.8,
}
DEFAULT_CATEGORY_WEIGHT = 0.5

DIVERSITY_BASE = 0.5
CONTENT_TYPE_SCALE = 0.3
CATEGORY_SCALE = 0.2
TAG_VARIETY_SCALE = 0.2
TAG_VARIETY_TARGET = 5

# Freshness: exp(-rate * hours), never below the floor
FRESHNESS_DECAY_RATE = 0.03
FRESHNESS_FLOOR = 0.1

# Location relevance
EARTH_RADIUS_KM = 6371.0
LOCATION_REFERENCE_KM = 100.0
SAME_CITY_SCORE = 1.0
SAME_STATE_SCORE = 0.8
NO_LOCATION_SCORE = 0.5
DISTANT_LOCATION_SCORE = 0.3

# Engagement prediction
ENGAGEMENT_BASE = 0.5
ENGAGEMENT_REFERENCE_TOTAL = 1000
ENGAGEMENT_SCALE = 0.3
QUALITY_BONUS = 0.1
MIN_TITLE_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 50
ATTENDEES_REFERENCE = 100
ATTENDEES_SCALE = 0.2
MAX_RATING = 5
RATING_SCALE = 0.2

# Serendipity
NEUTRAL_SCORE = 0.5
SERENDIPITY_UPPER_RATIO = 0.7
SERENDIPITY_PARTIAL_SCORE = 0.8
SERENDIPITY_NONE_SCORE = 0.3

# Diversity balancing: repeats allowed once this many distinct values are in
MAX_DISTINCT_CATEGORIES = 4
MAX_DISTINCT_TYPES = 3
MAX_DISTINCT_TAGS = 10

# Interest match buckets
PERFECT_MATCH_RATIO = 0.8
GOOD_MATCH_RATIO = 0.4

# Insights
TOP_CATEGORIES_COUNT = 5
TRENDING_TOPICS_COUNT = 10
MIN_TOP_CATEGORIES = 3
MIN_TRENDING_TOPICS = 5
LOCAL_CONTENT_RATIO = 0.7


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


# Deployment settings
DEFAULT_LIMIT = _env_int("DISCOVERY_DEFAULT_LIMIT", 20)
MAX_LIMIT = _env_int("DISCOVERY_MAX_LIMIT", 100)
MAX_CANDIDATES = _env_int("DISCOVERY_MAX_CANDIDATES", 5000)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("DISCOVERY_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
