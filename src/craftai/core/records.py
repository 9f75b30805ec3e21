"""Record models held by the in-memory store.

Every record is a flat, frozen Pydantic model with a generated UUID
identifier, a ``user_id`` reference (except :class:`User` itself), free-text
fields and a UTC creation timestamp.  Records are never edited after
creation; the only exception is :class:`Analytics`, whose counters are bumped
by replacing the stored instance with an updated copy.

On the wire every field uses its camelCase alias (``createdAt``, ``userId``,
``storiesGenerated``).  Constructors accept either the field name or the
alias.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Records serialize with camelCase keys and accept either spelling on input.
RECORD_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def new_id() -> str:
    """Return a fresh record identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """Base for immutable records: id and creation timestamp."""

    model_config = RECORD_CONFIG

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)


class User(Record):
    username: str
    name: str
    craft_type: str
    email: str
    profile_image: str | None = None


class Story(Record):
    user_id: str
    title: str
    content: str
    craft_type: str
    focus: str | None = None


class ImageAnalysis(Record):
    user_id: str
    image_url: str
    description: str
    marketing_copy: str


class SocialPost(Record):
    user_id: str
    platform: str
    content: str
    hashtags: list[str] = Field(default_factory=list)
    caption: str


class ProductListing(Record):
    user_id: str
    product_name: str
    platform: str
    optimized_title: str
    description: str
    keywords: list[str] = Field(default_factory=list)


class HeritageStory(Record):
    user_id: str
    technique: str
    cultural_context: str
    story: str


class Portfolio(Record):
    user_id: str
    title: str
    artist_statement: str
    description: str
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class Analytics(BaseModel):
    """Per-user dashboard counters.

    Stored per user and replaced wholesale on every update, so instances are
    frozen like the other records.
    """

    model_config = RECORD_CONFIG

    id: str = Field(default_factory=new_id)
    user_id: str
    stories_generated: int = 0
    images_analyzed: int = 0
    social_posts: int = 0
    product_listings: int = 0
    heritage_stories: int = 0
    portfolios: int = 0
    revenue_growth: int = 0
    updated_at: datetime = Field(default_factory=utcnow)


# Analytics fields that are plain counters (revenue_growth is a percentage
# supplied by callers, not a counter).
COUNTER_FIELDS: frozenset[str] = frozenset(
    {
        "stories_generated",
        "images_analyzed",
        "social_posts",
        "product_listings",
        "heritage_stories",
        "portfolios",
    }
)
