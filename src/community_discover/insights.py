"""Summary statistics and canned observations about a discovery page."""

from collections import Counter

from .config import (
    LOCAL_CONTENT_RATIO,
    MIN_TOP_CATEGORIES,
    MIN_TRENDING_TOPICS,
    TOP_CATEGORIES_COUNT,
    TRENDING_TOPICS_COUNT,
)
from .models import ContentItem, DiscoveryInsights

EXPLORE_CATEGORIES = "Explore more diverse categories to discover new interests"
SEARCH_TRENDING = "Try searching for trending topics in your area"
MUSIC_INSIGHT = "You seem to enjoy music-related content"
FOOD_INSIGHT = "Food and dining experiences are popular in your area"
LOCAL_INSIGHT = "Most of your discoveries are local events and activities"


def generate_discovery_insights(
    user_interests: list[str],
    discovered_content: list[ContentItem],
) -> DiscoveryInsights:
    """
    Summarize what a discovery page surfaced.

    Works on the final result list only and never feeds back into ranking.
    An empty page yields empty category and topic lists plus both
    recommendations.

    Args:
        user_interests: The user's interests (currently informational only)
        discovered_content: Items returned by discover_content

    Returns:
        DiscoveryInsights with top categories, trending tags, recommendations
        and insights
    """
    if discovered_content is None:
        raise ValueError("discovered_content is required")

    # Counter.most_common keeps first-seen order among equal counts
    category_counts = Counter(item.category for item in discovered_content)
    top_categories = [category for category, _ in category_counts.most_common(TOP_CATEGORIES_COUNT)]

    tag_counts = Counter(tag for item in discovered_content for tag in item.tags)
    trending_topics = [tag for tag, _ in tag_counts.most_common(TRENDING_TOPICS_COUNT)]

    recommendations = []
    if len(top_categories) < MIN_TOP_CATEGORIES:
        recommendations.append(EXPLORE_CATEGORIES)
    if len(trending_topics) < MIN_TRENDING_TOPICS:
        recommendations.append(SEARCH_TRENDING)

    insights = []
    if "music" in top_categories:
        insights.append(MUSIC_INSIGHT)
    if "food" in top_categories:
        insights.append(FOOD_INSIGHT)

    local_count = sum(
        1 for item in discovered_content
        if item.location is not None and item.location.city
    )
    if local_count > len(discovered_content) * LOCAL_CONTENT_RATIO:
        insights.append(LOCAL_INSIGHT)

    return DiscoveryInsights(
        top_categories=top_categories,
        trending_topics=trending_topics,
        recommendations=recommendations,
        insights=insights,
    )
