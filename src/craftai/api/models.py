"""Pydantic request and response models for the CraftAI Studio API.

Request bodies declare every field as optional.  A missing or blank
required field must produce an HTTP 400 with a readable message (checked by
:func:`missing_fields` in the route handlers), not FastAPI's default 422
validation response.

Field names are snake_case in Python.  Bodies may use either the snake_case
name or its camelCase alias (``craftType``, ``culturalContext``), matching
the camelCase keys of the records returned by the API.

Models
------
StoryRequest
    Payload for ``POST /api/stories/generate``.
SocialRequest
    Payload for ``POST /api/social/optimize``.
ProductRequest
    Payload for ``POST /api/products/optimize``.
HeritageRequest
    Payload for ``POST /api/heritage/generate``.
ArtistStatementRequest
    Payload for ``POST /api/portfolio/generate-statement``.
PortfolioRequest
    Payload for ``POST /api/portfolio``.
StatementResponse
    Response of ``POST /api/portfolio/generate-statement``.
HealthResponse
    Response of ``GET /api/health``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelRequest(BaseModel):
    """Request body accepting both ``craft_type`` and ``craftType`` spellings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoryRequest(CamelRequest):
    """Request body for ``POST /api/stories/generate``.

    Attributes:
        craft_type: The artisan's craft (e.g. ``"Pottery"``).  Required.
        focus: What the story should emphasise.  Required.
    """

    craft_type: str | None = Field(default=None, description="Craft type, e.g. 'Pottery'.")
    focus: str | None = Field(default=None, description="Focus area of the story.")


class SocialRequest(CamelRequest):
    """Request body for ``POST /api/social/optimize``.

    Attributes:
        platform: Target social platform.  Required.
        content: Draft post content.  Required.
        craft_type: The artisan's craft.  Required.
    """

    platform: str | None = Field(default=None, description="Social platform, e.g. 'Instagram'.")
    content: str | None = Field(default=None, description="Draft content to optimize.")
    craft_type: str | None = Field(default=None, description="Craft type.")


class ProductRequest(CamelRequest):
    """Request body for ``POST /api/products/optimize``.

    Attributes:
        product_name: Name of the product.  Required.
        platform: Marketplace the listing targets.  Required.
        description: Existing description.  Optional.
    """

    product_name: str | None = Field(default=None, description="Product name.")
    platform: str | None = Field(default=None, description="Marketplace, e.g. 'Etsy'.")
    description: str | None = Field(default=None, description="Optional existing description.")


class HeritageRequest(CamelRequest):
    technique: str | None = Field(default=None, description="Traditional technique or tradition.")
    cultural_context: str | None = Field(default=None, description="Cultural context of the technique.")


class ArtistStatementRequest(CamelRequest):
    artist_journey: str | None = Field(default=None, description="The artist's journey.  Required.")
    inspiration: str | None = Field(default=None, description="Optional inspiration.")
    philosophy: str | None = Field(default=None, description="Optional artistic philosophy.")


class PortfolioRequest(CamelRequest):
    """Request body for ``POST /api/portfolio``.

    Attributes:
        title: Portfolio title.  Required.
        artist_statement: Statement shown with the portfolio.  Required.
        description: Portfolio description.  Required.
        tags: Optional list of tags.
    """

    title: str | None = Field(default=None, description="Portfolio title.")
    artist_statement: str | None = Field(default=None, description="Artist statement.")
    description: str | None = Field(default=None, description="Portfolio description.")
    tags: list[str] | None = Field(default=None, description="Optional tags.")


class StatementResponse(BaseModel):
    statement: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


def missing_fields(req: BaseModel, *names: str) -> list[str]:
    """Return the names of required fields that are absent or blank.

    Args:
        req: The parsed request model.
        *names: Field names that must carry a non-blank value.

    Returns:
        The missing field names, in the order given.
    """
    missing = []
    for name in names:
        value = getattr(req, name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
