from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    latitude: float | None = None
    longitude: float | None = None
    city: str = ""
    state: str = ""

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class Engagement(BaseModel):
    likes: int = 0
    comments: int = 0
    shares: int = 0

    @property
    def total(self) -> int:
        return self.likes + self.comments + self.shares


class ContentItem(BaseModel):
    id: str
    category: str = ""
    type: str = ""  # event | artist | post | group | business | ...
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    date: datetime | None = None  # scheduled occurrence, distinct from created_at
    location: Location | None = None
    price: float | None = None
    engagement: Engagement | None = None
    attendees_count: int | None = None
    rating: float | None = None  # 0-5
    title: str = ""
    description: str = ""
    image: str | None = None


class DateRange(BaseModel):
    start: datetime
    end: datetime


class LocationFilter(BaseModel):
    latitude: float
    longitude: float
    radius: float  # km


class PriceRange(BaseModel):
    min: float
    max: float


class DiscoveryFilters(BaseModel):
    categories: list[str] = Field(default_factory=list)  # empty = any
    content_types: list[str] = Field(default_factory=list)  # empty = any
    date_range: DateRange | None = None
    location: LocationFilter | None = None
    price_range: PriceRange | None = None
    tags: list[str] = Field(default_factory=list)  # item needs at least one


class DiscoveryScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    interest_match_score: float
    diversity_score: float
    freshness_score: float
    location_relevance_score: float
    engagement_prediction_score: float
    serendipity_score: float
    final_score: float


class ScoredContentItem(ContentItem):
    discovery_score: float
    scores: DiscoveryScore


class DiscoveryInsights(BaseModel):
    top_categories: list[str] = Field(default_factory=list)
    trending_topics: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)


class InterestMatches(BaseModel):
    perfect_matches: list[ContentItem] = Field(default_factory=list)
    good_matches: list[ContentItem] = Field(default_factory=list)
    serendipitous_matches: list[ContentItem] = Field(default_factory=list)
