"""In-memory record storage for CraftAI Studio.

:class:`MemoryStore` keeps one dictionary per entity type, keyed by the
generated record id, plus an analytics dictionary keyed by user id.  Nothing
is persisted: the store lives for the lifetime of the process.

Listing is a linear scan filtered by ``user_id`` and returns records in
insertion order.  Every ``create_*`` call bumps the matching analytics
counter for the record's user exactly once.

Usage
-----
::

    store = MemoryStore()
    story = store.create_story(
        user_id="demo-user-1",
        title="Clay and Memory",
        content="...",
        craft_type="Pottery",
        focus="heritage",
    )
    store.list_stories("demo-user-1")
"""

from __future__ import annotations

import logging

from craftai.core.activity import DEFAULT_ACTIVITY_LIMIT, ActivityItem, build_activity_feed
from craftai.core.records import (
    COUNTER_FIELDS,
    Analytics,
    HeritageStory,
    ImageAnalysis,
    Portfolio,
    ProductListing,
    SocialPost,
    Story,
    User,
    utcnow,
)

logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user-1"

_DEMO_PROFILE_IMAGE = (
    "https://images.unsplash.com/photo-1544717297-fa95b6ee9643"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150"
)


class MemoryStore:
    """Process-local storage for users, generated content and analytics."""

    def __init__(self, *, seed_demo: bool = True, demo_user_id: str = DEMO_USER_ID):
        """Create an empty store, optionally seeded with the demo user.

        Args:
            seed_demo: Whether to insert the demo user and its analytics.
            demo_user_id: Identifier given to the seeded demo user.
        """
        self._users: dict[str, User] = {}
        self._stories: dict[str, Story] = {}
        self._image_analyses: dict[str, ImageAnalysis] = {}
        self._social_posts: dict[str, SocialPost] = {}
        self._product_listings: dict[str, ProductListing] = {}
        self._heritage_stories: dict[str, HeritageStory] = {}
        self._portfolios: dict[str, Portfolio] = {}
        self._analytics: dict[str, Analytics] = {}

        if seed_demo:
            self._seed_demo_data(demo_user_id)

    def _seed_demo_data(self, user_id: str) -> None:
        user = User(
            id=user_id,
            username="maria",
            name="Maria",
            craft_type="Pottery",
            email="maria@craftai.com",
            profile_image=_DEMO_PROFILE_IMAGE,
        )
        self._users[user.id] = user
        self._analytics[user.id] = Analytics(
            user_id=user.id,
            stories_generated=24,
            images_analyzed=156,
            social_posts=48,
            revenue_growth=34,
        )
        logger.info(f"Seeded demo user {user.id}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(
        self,
        *,
        username: str,
        name: str,
        craft_type: str,
        email: str,
        profile_image: str | None = None,
    ) -> User:
        """Create a user together with a zeroed analytics record."""
        user = User(
            username=username,
            name=name,
            craft_type=craft_type,
            email=email,
            profile_image=profile_image,
        )
        self._users[user.id] = user
        self._analytics[user.id] = Analytics(user_id=user.id)
        logger.info(f"Created user {user.id} ({username})")
        return user

    # ------------------------------------------------------------------
    # Stories
    # ------------------------------------------------------------------

    def create_story(
        self,
        *,
        user_id: str,
        title: str,
        content: str,
        craft_type: str,
        focus: str | None = None,
    ) -> Story:
        story = Story(
            user_id=user_id,
            title=title,
            content=content,
            craft_type=craft_type,
            focus=focus or None,
        )
        self._stories[story.id] = story
        self.increment_counter(user_id, "stories_generated")
        return story

    def list_stories(self, user_id: str) -> list[Story]:
        return [s for s in self._stories.values() if s.user_id == user_id]

    def get_story(self, story_id: str) -> Story | None:
        return self._stories.get(story_id)

    # ------------------------------------------------------------------
    # Image analyses
    # ------------------------------------------------------------------

    def create_image_analysis(
        self,
        *,
        user_id: str,
        image_url: str,
        description: str,
        marketing_copy: str,
    ) -> ImageAnalysis:
        analysis = ImageAnalysis(
            user_id=user_id,
            image_url=image_url,
            description=description,
            marketing_copy=marketing_copy,
        )
        self._image_analyses[analysis.id] = analysis
        self.increment_counter(user_id, "images_analyzed")
        return analysis

    def list_image_analyses(self, user_id: str) -> list[ImageAnalysis]:
        return [a for a in self._image_analyses.values() if a.user_id == user_id]

    # ------------------------------------------------------------------
    # Social posts
    # ------------------------------------------------------------------

    def create_social_post(
        self,
        *,
        user_id: str,
        platform: str,
        content: str,
        hashtags: list[str] | None = None,
        caption: str,
    ) -> SocialPost:
        post = SocialPost(
            user_id=user_id,
            platform=platform,
            content=content,
            hashtags=list(hashtags or []),
            caption=caption,
        )
        self._social_posts[post.id] = post
        self.increment_counter(user_id, "social_posts")
        return post

    def list_social_posts(self, user_id: str) -> list[SocialPost]:
        return [p for p in self._social_posts.values() if p.user_id == user_id]

    # ------------------------------------------------------------------
    # Product listings
    # ------------------------------------------------------------------

    def create_product_listing(
        self,
        *,
        user_id: str,
        product_name: str,
        platform: str,
        optimized_title: str,
        description: str,
        keywords: list[str] | None = None,
    ) -> ProductListing:
        listing = ProductListing(
            user_id=user_id,
            product_name=product_name,
            platform=platform,
            optimized_title=optimized_title,
            description=description,
            keywords=list(keywords or []),
        )
        self._product_listings[listing.id] = listing
        self.increment_counter(user_id, "product_listings")
        return listing

    def list_product_listings(self, user_id: str) -> list[ProductListing]:
        return [p for p in self._product_listings.values() if p.user_id == user_id]

    # ------------------------------------------------------------------
    # Heritage stories
    # ------------------------------------------------------------------

    def create_heritage_story(
        self,
        *,
        user_id: str,
        technique: str,
        cultural_context: str,
        story: str,
    ) -> HeritageStory:
        heritage = HeritageStory(
            user_id=user_id,
            technique=technique,
            cultural_context=cultural_context,
            story=story,
        )
        self._heritage_stories[heritage.id] = heritage
        self.increment_counter(user_id, "heritage_stories")
        return heritage

    def list_heritage_stories(self, user_id: str) -> list[HeritageStory]:
        return [h for h in self._heritage_stories.values() if h.user_id == user_id]

    # ------------------------------------------------------------------
    # Portfolios
    # ------------------------------------------------------------------

    def create_portfolio(
        self,
        *,
        user_id: str,
        title: str,
        artist_statement: str,
        description: str,
        tags: list[str] | None = None,
        is_public: bool = False,
    ) -> Portfolio:
        portfolio = Portfolio(
            user_id=user_id,
            title=title,
            artist_statement=artist_statement,
            description=description,
            tags=list(tags or []),
            is_public=is_public,
        )
        self._portfolios[portfolio.id] = portfolio
        self.increment_counter(user_id, "portfolios")
        return portfolio

    def list_portfolios(self, user_id: str) -> list[Portfolio]:
        return [p for p in self._portfolios.values() if p.user_id == user_id]

    def get_portfolio(self, portfolio_id: str) -> Portfolio | None:
        return self._portfolios.get(portfolio_id)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def get_analytics(self, user_id: str) -> Analytics | None:
        return self._analytics.get(user_id)

    def update_analytics(self, user_id: str, **updates: int) -> Analytics:
        """Apply field updates to a user's analytics, creating it if absent.

        Args:
            user_id: Owner of the analytics record.
            **updates: Analytics field values to overwrite.

        Returns:
            The stored (replaced) analytics record.

        Raises:
            ValueError: If an update names an unknown analytics field.
        """
        unknown = set(updates) - set(COUNTER_FIELDS | {"revenue_growth"})
        if unknown:
            raise ValueError(f"Unknown analytics fields: {', '.join(sorted(unknown))}")

        existing = self._analytics.get(user_id) or Analytics(user_id=user_id)
        updated = existing.model_copy(update={**updates, "updated_at": utcnow()})
        self._analytics[user_id] = updated
        return updated

    def increment_counter(self, user_id: str, field: str) -> Analytics | None:
        """Bump one analytics counter by one.

        Users without an analytics record are left untouched.

        Returns:
            The updated analytics record, or ``None`` if the user has none.
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Not an analytics counter: {field}")

        existing = self._analytics.get(user_id)
        if existing is None:
            return None
        return self.update_analytics(user_id, **{field: getattr(existing, field) + 1})

    # ------------------------------------------------------------------
    # Activity feed
    # ------------------------------------------------------------------

    def recent_activity(self, user_id: str, limit: int = DEFAULT_ACTIVITY_LIMIT) -> list[ActivityItem]:
        """Return the user's newest activity across every record type."""
        return build_activity_feed(
            stories=self.list_stories(user_id),
            images=self.list_image_analyses(user_id),
            social_posts=self.list_social_posts(user_id),
            product_listings=self.list_product_listings(user_id),
            heritage_stories=self.list_heritage_stories(user_id),
            portfolios=self.list_portfolios(user_id),
            limit=limit,
        )
