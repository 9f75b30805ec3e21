"""Recent-activity feed assembly.

The dashboard shows a single feed that merges every kind of record the user
has created.  Each record is reduced to an :class:`ActivityItem` with a short
human-readable title, the merged list is sorted newest first, and only the
first ``limit`` items are returned.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel

from craftai.core.records import (
    RECORD_CONFIG,
    HeritageStory,
    ImageAnalysis,
    Portfolio,
    ProductListing,
    SocialPost,
    Story,
)

DEFAULT_ACTIVITY_LIMIT = 10


class ActivityItem(BaseModel):
    """One entry of the recent-activity feed."""

    model_config = RECORD_CONFIG

    type: str
    title: str
    created_at: datetime


def build_activity_feed(
    *,
    stories: Iterable[Story] = (),
    images: Iterable[ImageAnalysis] = (),
    social_posts: Iterable[SocialPost] = (),
    product_listings: Iterable[ProductListing] = (),
    heritage_stories: Iterable[HeritageStory] = (),
    portfolios: Iterable[Portfolio] = (),
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """Merge records of every type into a newest-first feed.

    Args:
        stories: Generated stories.
        images: Image analyses.
        social_posts: Optimized social posts.
        product_listings: Optimized product listings.
        heritage_stories: Heritage stories.
        portfolios: Portfolios.
        limit: Maximum number of items to return.

    Returns:
        At most ``limit`` items ordered by descending ``created_at``.  Items
        with equal timestamps keep their merge order.
    """
    items: list[ActivityItem] = []
    items.extend(
        ActivityItem(type="story", title=f"Generated story for {s.craft_type}", created_at=s.created_at)
        for s in stories
    )
    items.extend(
        ActivityItem(type="image", title="Analyzed product image", created_at=i.created_at)
        for i in images
    )
    items.extend(
        ActivityItem(type="social", title=f"Optimized {p.platform} content", created_at=p.created_at)
        for p in social_posts
    )
    items.extend(
        ActivityItem(
            type="product",
            title=f"Optimized {p.platform} listing for {p.product_name}",
            created_at=p.created_at,
        )
        for p in product_listings
    )
    items.extend(
        ActivityItem(
            type="heritage",
            title=f"Created heritage story for {h.technique}",
            created_at=h.created_at,
        )
        for h in heritage_stories
    )
    items.extend(
        ActivityItem(type="portfolio", title=f'Created portfolio "{p.title}"', created_at=p.created_at)
        for p in portfolios
    )

    items.sort(key=lambda item: item.created_at, reverse=True)
    return items[: max(limit, 0)]
