"""Tests for craftai.core.activity — recent-activity feed assembly."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from craftai.core.activity import build_activity_feed
from craftai.core.records import (
    HeritageStory,
    ImageAnalysis,
    Portfolio,
    ProductListing,
    SocialPost,
    Story,
)

BASE = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return BASE + timedelta(minutes=minutes)


def _story(minutes: int, craft: str = "Pottery") -> Story:
    return Story(user_id="u", title="t", content="c", craft_type=craft, created_at=_at(minutes))


class TestActivityTitles:
    """Each record type gets its own title."""

    def test_titles_per_type(self):
        feed = build_activity_feed(
            stories=[_story(0)],
            images=[
                ImageAnalysis(user_id="u", image_url="x", description="d", marketing_copy="m", created_at=_at(1))
            ],
            social_posts=[
                SocialPost(user_id="u", platform="Instagram", content="c", caption="c", created_at=_at(2))
            ],
            product_listings=[
                ProductListing(
                    user_id="u",
                    product_name="Bowl",
                    platform="Etsy",
                    optimized_title="t",
                    description="d",
                    created_at=_at(3),
                )
            ],
            heritage_stories=[
                HeritageStory(user_id="u", technique="Raku", cultural_context="c", story="s", created_at=_at(4))
            ],
            portfolios=[
                Portfolio(user_id="u", title="Earth", artist_statement="a", description="d", created_at=_at(5))
            ],
        )
        titles = {item.type: item.title for item in feed}
        assert titles == {
            "story": "Generated story for Pottery",
            "image": "Analyzed product image",
            "social": "Optimized Instagram content",
            "product": "Optimized Etsy listing for Bowl",
            "heritage": "Created heritage story for Raku",
            "portfolio": 'Created portfolio "Earth"',
        }


class TestActivityOrdering:
    """Feed is newest first, merged across types, and limited."""

    def test_sorted_newest_first_across_types(self):
        feed = build_activity_feed(
            stories=[_story(0), _story(10)],
            social_posts=[
                SocialPost(user_id="u", platform="X", content="c", caption="c", created_at=_at(5))
            ],
        )
        assert [item.created_at for item in feed] == [_at(10), _at(5), _at(0)]
        assert [item.type for item in feed] == ["story", "social", "story"]

    def test_default_limit_is_ten(self):
        feed = build_activity_feed(stories=[_story(i) for i in range(15)])
        assert len(feed) == 10
        assert feed[0].created_at == _at(14)
        assert feed[-1].created_at == _at(5)

    def test_custom_limit(self):
        feed = build_activity_feed(stories=[_story(i) for i in range(5)], limit=2)
        assert [item.created_at for item in feed] == [_at(4), _at(3)]

    def test_equal_timestamps_keep_merge_order(self):
        feed = build_activity_feed(
            stories=[_story(0, craft="A")],
            images=[ImageAnalysis(user_id="u", image_url="x", description="d", marketing_copy="m", created_at=_at(0))],
        )
        assert [item.type for item in feed] == ["story", "image"]

    def test_empty_feed(self):
        assert build_activity_feed() == []
