"""Community-Discover REST API: FastAPI wrapper around the discovery engine."""

import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import CORS_ORIGINS, DEFAULT_LIMIT, MAX_CANDIDATES, MAX_LIMIT
from .discovery import discover_content, match_content_with_interests
from .insights import generate_discovery_insights
from .models import ContentItem, DiscoveryFilters, Location, ScoredContentItem

logger = logging.getLogger(__name__)

app = FastAPI(title="Community Discover", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _check_pool_size(content: list) -> None:
    if len(content) > MAX_CANDIDATES:
        raise HTTPException(
            status_code=413,
            detail=f"Too many candidate items: {len(content)} (max {MAX_CANDIDATES})",
        )


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# --- Discovery ---


class DiscoverRequest(BaseModel):
    user_interests: list[str] = Field(default_factory=list)
    user_location: Location | None = None
    content: list[ContentItem] = Field(default_factory=list)
    filters: DiscoveryFilters = Field(default_factory=DiscoveryFilters)
    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=MAX_LIMIT)


@app.post("/api/discover")
async def discover(req: DiscoverRequest):
    _check_pool_size(req.content)
    items = discover_content(
        req.user_interests,
        req.user_location,
        req.content,
        req.filters,
        limit=req.limit,
    )
    logger.info(f"Discover: {len(req.content)} candidates -> {len(items)} items")
    return {"items": [item.model_dump(mode="json") for item in items], "count": len(items)}


# --- Insights & Matching ---


class InsightsRequest(BaseModel):
    user_interests: list[str] = Field(default_factory=list)
    content: list[ScoredContentItem] = Field(default_factory=list)


@app.post("/api/insights")
async def insights(req: InsightsRequest):
    _check_pool_size(req.content)
    result = generate_discovery_insights(req.user_interests, req.content)
    logger.info(f"Insights generated for {len(req.content)} items")
    return result.model_dump()


class MatchRequest(BaseModel):
    user_interests: list[str] = Field(default_factory=list)
    content: list[ContentItem] = Field(default_factory=list)


@app.post("/api/match")
async def match(req: MatchRequest):
    _check_pool_size(req.content)
    result = match_content_with_interests(req.user_interests, req.content)
    logger.info(
        f"Match: {len(result.perfect_matches)} perfect, {len(result.good_matches)} good, "
        f"{len(result.serendipitous_matches)} serendipitous"
    )
    return result.model_dump(mode="json")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="127.0.0.1", port=8000)
