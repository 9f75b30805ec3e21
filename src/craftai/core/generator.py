"""Gemini-backed content generation for CraftAI Studio.

This module provides :class:`GeminiGenerator`, the only component that talks
to the external language model.  Every public coroutine performs exactly one
``generate_content`` call through the ``google-genai`` SDK's async surface and
returns either a Pydantic result model (structured calls) or plain text.

Structured calls
----------------
Stories, image analyses, social posts, product listings and market trends ask
the model for JSON (``response_mime_type="application/json"`` plus the result
model as ``response_schema``).  The response text is parsed with
:func:`parse_structured`, which tolerates markdown code fences around the JSON.

Plain-text calls
----------------
Heritage stories and artist statements return the model text as-is, falling
back to a fixed apology string when the model returns nothing.

Failures
--------
All SDK and parsing failures leave this module as
:class:`~craftai.core.errors.GeneratorError` subclasses, classified by
:func:`~craftai.core.errors.classify_upstream_error`.  The one exception is
:meth:`GeminiGenerator.analyze_market_trends`, which returns a default
estimate instead of raising.

Usage
-----
::

    generator = GeminiGenerator(api_key="...", model_name="gemini-2.5-pro")
    draft = await generator.generate_story("Pottery", "family tradition")
    print(draft.title)
"""

from __future__ import annotations

import json
import logging
import re
from typing import TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from craftai.core import prompt_builder
from craftai.core.errors import GeneratorError, InvalidCredentialError, classify_upstream_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

HERITAGE_FALLBACK = "Unable to generate heritage story at this time."
STATEMENT_FALLBACK = "Unable to generate artist statement at this time."


# ---------------------------------------------------------------------------
# Result models (also used as Gemini response schemas).
# ---------------------------------------------------------------------------


class StoryDraft(BaseModel):
    title: str
    content: str


class ImageInsight(BaseModel):
    description: str
    marketing_copy: str


class SocialDraft(BaseModel):
    optimized_content: str
    hashtags: list[str] = Field(default_factory=list)
    caption: str


class ListingDraft(BaseModel):
    optimized_title: str
    optimized_description: str
    keywords: list[str] = Field(default_factory=list)


class MarketTrends(BaseModel):
    """Trend estimate, returned as-is by ``/api/market-trends``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    demand_increase: float
    avg_price: float
    keywords: list[str] = Field(default_factory=list)


DEFAULT_MARKET_TRENDS = MarketTrends(
    demand_increase=28,
    avg_price=45,
    keywords=["sustainable", "handmade", "eco-friendly"],
)


# ---------------------------------------------------------------------------
# Response parsing.
# ---------------------------------------------------------------------------


def _strip_code_fences(text: str) -> str:
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def parse_structured(raw_text: str | None, schema: type[T]) -> T:
    """Parse a JSON model response into *schema*.

    Args:
        raw_text: The response text returned by the model.
        schema: Pydantic model the JSON must validate against.

    Returns:
        The validated model instance.

    Raises:
        GeneratorError: If the text is empty, not JSON, or does not match
            the schema.
    """
    text = _strip_code_fences(raw_text or "")
    if not text:
        raise GeneratorError("Empty response from model")
    try:
        return schema.model_validate(json.loads(text, strict=False))
    except (json.JSONDecodeError, ValidationError) as e:
        raise GeneratorError(f"Unparseable {schema.__name__} response: {e}") from e


# ---------------------------------------------------------------------------
# Generator.
# ---------------------------------------------------------------------------


class GeminiGenerator:
    """Thin async wrapper around the Gemini ``generate_content`` endpoint."""

    def __init__(self, api_key: str | None, model_name: str = "gemini-2.5-pro", client=None):
        """Create a generator.

        The SDK client is created lazily so that a missing API key does not
        prevent the application from starting.

        Args:
            api_key: Gemini Developer API key.
            model_name: Model used for every request.
            client: Pre-built ``genai.Client`` (mainly for tests).
        """
        self.api_key = api_key
        self.model_name = model_name
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise InvalidCredentialError("GEMINI_API_KEY is not set")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def _generate(self, contents, schema: type[BaseModel] | None = None) -> str:
        """Issue one generate_content call and return the response text."""
        config = None
        if schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )
        client = self.client
        try:
            logger.info(f"Issuing request to model {self.model_name}")
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise classify_upstream_error(e) from e
        return response.text or ""

    async def _generate_structured(self, contents, schema: type[T]) -> T:
        return parse_structured(await self._generate(contents, schema), schema)

    async def generate_story(self, craft_type: str, focus: str) -> StoryDraft:
        prompt = prompt_builder.story_prompt(craft_type, focus)
        return await self._generate_structured(prompt, StoryDraft)

    async def analyze_image(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ImageInsight:
        contents = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            prompt_builder.image_analysis_prompt(),
        ]
        return await self._generate_structured(contents, ImageInsight)

    async def optimize_social_content(self, platform: str, content: str, craft_type: str) -> SocialDraft:
        prompt = prompt_builder.social_prompt(platform, content, craft_type)
        return await self._generate_structured(prompt, SocialDraft)

    async def optimize_product_listing(
        self, product_name: str, platform: str, description: str = ""
    ) -> ListingDraft:
        prompt = prompt_builder.product_listing_prompt(product_name, platform, description)
        return await self._generate_structured(prompt, ListingDraft)

    async def generate_heritage_story(self, technique: str, cultural_context: str) -> str:
        prompt = prompt_builder.heritage_prompt(technique, cultural_context)
        text = await self._generate(prompt)
        return text.strip() or HERITAGE_FALLBACK

    async def generate_artist_statement(
        self,
        artist_journey: str,
        inspiration: str | None = None,
        philosophy: str | None = None,
    ) -> str:
        prompt = prompt_builder.artist_statement_prompt(artist_journey, inspiration, philosophy)
        text = await self._generate(prompt)
        return text.strip() or STATEMENT_FALLBACK

    async def analyze_market_trends(self, craft_type: str) -> MarketTrends:
        """Estimate market trends, returning a default estimate on failure."""
        prompt = prompt_builder.market_trends_prompt(craft_type)
        try:
            return await self._generate_structured(prompt, MarketTrends)
        except GeneratorError as e:
            logger.warning(f"Market trend analysis failed for {craft_type}, using defaults: {e}")
            return DEFAULT_MARKET_TRENDS.model_copy(deep=True)
