"""CraftAI Studio — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
Every mutating endpoint is one linear sequence:

1. Validate that the required fields are present (400 otherwise).
2. Make a single generator call through :class:`~craftai.core.generator.GeminiGenerator`.
3. Store the result in the :class:`~craftai.core.store.MemoryStore`.
4. Return the created record as JSON.

Generator failures are mapped by :mod:`craftai.api.errors` to 401 (bad API
key), 503 (model overloaded) or 500 (anything else).  All requests act on
behalf of the configured demo user.

Endpoints
---------
========  ====================================  ===============================
Method    Path                                  Purpose
========  ====================================  ===============================
GET       ``/api/health``                       Liveness and version
GET       ``/api/user``                         Current user
GET       ``/api/analytics``                    Dashboard counters
POST      ``/api/stories/generate``             Generate a craft story
GET       ``/api/stories``                      List stories
POST      ``/api/images/analyze``               Analyze an uploaded image
GET       ``/api/images``                       List image analyses
POST      ``/api/social/optimize``              Optimize social content
GET       ``/api/social``                       List social posts
POST      ``/api/products/optimize``            Optimize a product listing
GET       ``/api/products``                     List product listings
POST      ``/api/heritage/generate``            Generate a heritage story
GET       ``/api/heritage``                     List heritage stories
POST      ``/api/portfolio/generate-statement`` Generate an artist statement
POST      ``/api/portfolio``                    Create a portfolio
GET       ``/api/portfolio``                    List portfolios
GET       ``/api/market-trends``                Market trend estimate
GET       ``/api/activity``                     Recent activity feed
========  ====================================  ===============================

Usage
-----
CLI (installed entry point)::

    craftai

Direct invocation::

    python -m craftai.api.main
"""

from __future__ import annotations

import io
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from PIL import Image, UnidentifiedImageError

from craftai import __version__
from craftai.api.errors import OverloadedHTTPException, generator_http_error
from craftai.api.models import (
    ArtistStatementRequest,
    HealthResponse,
    HeritageRequest,
    PortfolioRequest,
    ProductRequest,
    SocialRequest,
    StatementResponse,
    StoryRequest,
    missing_fields,
)
from craftai.core.activity import ActivityItem
from craftai.core.config import config
from craftai.core.errors import GeneratorError
from craftai.core.generator import GeminiGenerator, MarketTrends
from craftai.core.records import (
    Analytics,
    HeritageStory,
    ImageAnalysis,
    Portfolio,
    ProductListing,
    SocialPost,
    Story,
    User,
)
from craftai.core.store import MemoryStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Values resolved from the global configuration instance.
# ---------------------------------------------------------------------------
UPLOADS_DIR: Path = config.uploads_dir
MAX_UPLOAD_BYTES: int = config.max_upload_bytes
CURRENT_USER_ID: str = config.demo_user_id


# ---------------------------------------------------------------------------
# Application lifecycle — store and generator setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory store and the generator on startup.

    Both are kept on ``app.state`` so route handlers (and tests) share a
    single instance.  The store is discarded on shutdown; nothing is
    persisted.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.store = MemoryStore(demo_user_id=CURRENT_USER_ID)
    app.state.generator = GeminiGenerator(
        api_key=config.gemini_api_key,
        model_name=config.gemini_model,
    )
    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; generator calls will fail with 401.")
    logger.info(f"CraftAI Studio {__version__} ready (model {config.gemini_model}).")

    yield

    logger.info("CraftAI Studio shutting down; in-memory records discarded.")


app = FastAPI(
    title="CraftAI Studio",
    description="AI marketing content generation for artisans.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers.
# ---------------------------------------------------------------------------


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(OverloadedHTTPException)
async def overloaded_handler(request: Request, exc: OverloadedHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "retry_after": exc.retry_after},
        headers=exc.headers,
    )


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _store() -> MemoryStore:
    return app.state.store


def _generator() -> GeminiGenerator:
    return app.state.generator


def _require(req, message: str, *names: str) -> None:
    """Raise a 400 if any of *names* is missing or blank on *req*."""
    missing = missing_fields(req, *names)
    if missing:
        logger.info(f"Rejected request, missing fields: {', '.join(missing)}")
        raise HTTPException(status_code=400, detail=message)


def _generator_failed(exc: GeneratorError, action: str, fallback_message: str) -> HTTPException:
    logger.error(f"{action} failed: {exc}", exc_info=True)
    return generator_http_error(exc, fallback_message)


def _sniff_image(content: bytes) -> tuple[str, str]:
    """Verify *content* is an image Pillow can read.

    Returns:
        The MIME type and the file suffix for the detected format.  The
        client-supplied file name is never used.

    Raises:
        HTTPException: 400 if the bytes are not a recognisable image.
    """
    try:
        with Image.open(io.BytesIO(content)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise HTTPException(status_code=400, detail="Uploaded file is not a valid image") from e
    image_format = image_format or "JPEG"
    return Image.MIME.get(image_format, "image/jpeg"), f".{image_format.lower()}"


def _format_size(num_bytes: int) -> str:
    """Render an upload limit as whole MB when exact, otherwise in bytes."""
    mib = 1024 * 1024
    if num_bytes % mib == 0:
        return f"{num_bytes // mib}MB"
    return f"{num_bytes} bytes"


# ---------------------------------------------------------------------------
# Routes — user and analytics.
# ---------------------------------------------------------------------------


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(version=__version__)


@app.get("/api/user", response_model=User)
async def get_user() -> User:
    """Return the current (demo) user.

    Raises:
        HTTPException: 404 if the user does not exist.
    """
    user = _store().get_user(CURRENT_USER_ID)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.get("/api/analytics", response_model=Analytics)
async def get_analytics() -> Analytics:
    """Return the current user's dashboard counters.

    Raises:
        HTTPException: 404 if the user has no analytics record.
    """
    analytics = _store().get_analytics(CURRENT_USER_ID)
    if analytics is None:
        raise HTTPException(status_code=404, detail="Analytics not found")
    return analytics


# ---------------------------------------------------------------------------
# Routes — stories.
# ---------------------------------------------------------------------------


@app.post("/api/stories/generate", response_model=Story)
async def generate_story(req: StoryRequest) -> Story:
    """Generate a craft story and store it.

    Raises:
        HTTPException: 400 if ``craft_type`` or ``focus`` is missing;
            401/503/500 on generator failure.
    """
    _require(req, "Craft type and focus are required", "craft_type", "focus")

    try:
        draft = await _generator().generate_story(req.craft_type, req.focus)
    except GeneratorError as e:
        raise _generator_failed(
            e, "Story generation", "Failed to generate story. Please try again later."
        ) from e

    story = _store().create_story(
        user_id=CURRENT_USER_ID,
        title=draft.title,
        content=draft.content,
        craft_type=req.craft_type,
        focus=req.focus,
    )
    logger.info(f"Stored story {story.id} for {req.craft_type}")
    return story


@app.get("/api/stories", response_model=list[Story])
async def list_stories() -> list[Story]:
    return _store().list_stories(CURRENT_USER_ID)


# ---------------------------------------------------------------------------
# Routes — image analysis.
# ---------------------------------------------------------------------------


@app.post("/api/images/analyze", response_model=ImageAnalysis)
async def analyze_image(image: UploadFile | None = File(default=None)) -> ImageAnalysis:
    """Analyze an uploaded product image and store the generated copy.

    The upload is written to the uploads directory for the duration of the
    request and removed afterwards, whether the analysis succeeds or not.

    Raises:
        HTTPException: 400 if no file or a non-image is uploaded, 413 if the
            file exceeds the upload limit, 401/503/500 on generator failure.
    """
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image file provided")

    # Read one byte past the limit so oversize uploads are detected without
    # buffering arbitrarily large bodies.
    content = await image.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds the {_format_size(MAX_UPLOAD_BYTES)} upload limit",
        )
    if not content:
        raise HTTPException(status_code=400, detail="No image file provided")

    mime_type, suffix = _sniff_image(content)

    stored_name = f"{uuid.uuid4().hex}{suffix}"
    upload_path = UPLOADS_DIR / stored_name
    UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    upload_path.write_bytes(content)

    try:
        insight = await _generator().analyze_image(content, mime_type)
    except GeneratorError as e:
        raise _generator_failed(
            e, "Image analysis", "Failed to analyze image. Please try again later."
        ) from e
    finally:
        upload_path.unlink(missing_ok=True)

    analysis = _store().create_image_analysis(
        user_id=CURRENT_USER_ID,
        image_url=f"uploads/{stored_name}",
        description=insight.description,
        marketing_copy=insight.marketing_copy,
    )
    logger.info(f"Stored image analysis {analysis.id}")
    return analysis


@app.get("/api/images", response_model=list[ImageAnalysis])
async def list_image_analyses() -> list[ImageAnalysis]:
    return _store().list_image_analyses(CURRENT_USER_ID)


# ---------------------------------------------------------------------------
# Routes — social and product optimisation.
# ---------------------------------------------------------------------------


@app.post("/api/social/optimize", response_model=SocialPost)
async def optimize_social(req: SocialRequest) -> SocialPost:
    """Optimize social media content for a platform and store the post.

    Raises:
        HTTPException: 400 if ``platform``, ``content`` or ``craft_type`` is
            missing; 401/503/500 on generator failure.
    """
    _require(
        req,
        "Platform, content, and craft type are required",
        "platform",
        "content",
        "craft_type",
    )

    try:
        draft = await _generator().optimize_social_content(req.platform, req.content, req.craft_type)
    except GeneratorError as e:
        raise _generator_failed(
            e, "Social optimization", "Failed to optimize social content"
        ) from e

    post = _store().create_social_post(
        user_id=CURRENT_USER_ID,
        platform=req.platform,
        content=draft.optimized_content,
        hashtags=draft.hashtags,
        caption=draft.caption,
    )
    logger.info(f"Stored {req.platform} post {post.id}")
    return post


@app.get("/api/social", response_model=list[SocialPost])
async def list_social_posts() -> list[SocialPost]:
    return _store().list_social_posts(CURRENT_USER_ID)


@app.post("/api/products/optimize", response_model=ProductListing)
async def optimize_product(req: ProductRequest) -> ProductListing:
    """Optimize a product listing for a marketplace and store it.

    Raises:
        HTTPException: 400 if ``product_name`` or ``platform`` is missing;
            401/503/500 on generator failure.
    """
    _require(req, "Product name and platform are required", "product_name", "platform")

    try:
        draft = await _generator().optimize_product_listing(
            req.product_name, req.platform, req.description or ""
        )
    except GeneratorError as e:
        raise _generator_failed(
            e, "Product optimization", "Failed to optimize product listing"
        ) from e

    listing = _store().create_product_listing(
        user_id=CURRENT_USER_ID,
        product_name=req.product_name,
        platform=req.platform,
        optimized_title=draft.optimized_title,
        description=draft.optimized_description,
        keywords=draft.keywords,
    )
    logger.info(f"Stored {req.platform} listing {listing.id}")
    return listing


@app.get("/api/products", response_model=list[ProductListing])
async def list_product_listings() -> list[ProductListing]:
    return _store().list_product_listings(CURRENT_USER_ID)


# ---------------------------------------------------------------------------
# Routes — heritage and portfolio.
# ---------------------------------------------------------------------------


@app.post("/api/heritage/generate", response_model=HeritageStory)
async def generate_heritage(req: HeritageRequest) -> HeritageStory:
    _require(
        req,
        "Technique and cultural context are required",
        "technique",
        "cultural_context",
    )

    try:
        text = await _generator().generate_heritage_story(req.technique, req.cultural_context)
    except GeneratorError as e:
        raise _generator_failed(
            e, "Heritage story generation", "Failed to generate heritage story"
        ) from e

    heritage = _store().create_heritage_story(
        user_id=CURRENT_USER_ID,
        technique=req.technique,
        cultural_context=req.cultural_context,
        story=text,
    )
    logger.info(f"Stored heritage story {heritage.id} for {req.technique}")
    return heritage


@app.get("/api/heritage", response_model=list[HeritageStory])
async def list_heritage_stories() -> list[HeritageStory]:
    return _store().list_heritage_stories(CURRENT_USER_ID)


@app.post("/api/portfolio/generate-statement", response_model=StatementResponse)
async def generate_statement(req: ArtistStatementRequest) -> StatementResponse:
    """Generate an artist statement.  The statement is returned, not stored."""
    _require(req, "Artist journey is required", "artist_journey")

    try:
        statement = await _generator().generate_artist_statement(
            req.artist_journey, req.inspiration, req.philosophy
        )
    except GeneratorError as e:
        raise _generator_failed(
            e, "Artist statement generation", "Failed to generate artist statement"
        ) from e

    return StatementResponse(statement=statement)


@app.post("/api/portfolio", response_model=Portfolio)
async def create_portfolio(req: PortfolioRequest) -> Portfolio:
    """Create a private portfolio.  No generator call is involved."""
    _require(
        req,
        "Title, artist statement, and description are required",
        "title",
        "artist_statement",
        "description",
    )

    portfolio = _store().create_portfolio(
        user_id=CURRENT_USER_ID,
        title=req.title,
        artist_statement=req.artist_statement,
        description=req.description,
        tags=req.tags or [],
        is_public=False,
    )
    logger.info(f"Stored portfolio {portfolio.id}")
    return portfolio


@app.get("/api/portfolio", response_model=list[Portfolio])
async def list_portfolios() -> list[Portfolio]:
    return _store().list_portfolios(CURRENT_USER_ID)


# ---------------------------------------------------------------------------
# Routes — market trends and activity.
# ---------------------------------------------------------------------------


@app.get("/api/market-trends", response_model=MarketTrends)
async def market_trends(
    craft_type: str | None = None,
    craft_type_camel: str | None = Query(default=None, alias="craftType"),
) -> MarketTrends:
    """Return a market trend estimate for a craft type.

    The craft type is read from ``craft_type`` or ``craftType``, falling back
    to ``config.market_trends_default_craft`` when neither is given.  The
    generator returns a default estimate if the model call fails, so this
    endpoint does not surface upstream errors.
    """
    craft = (craft_type or craft_type_camel or "").strip() or config.market_trends_default_craft
    return await _generator().analyze_market_trends(craft)


@app.get("/api/activity", response_model=list[ActivityItem])
async def recent_activity() -> list[ActivityItem]:
    """Return the newest items across every record type, newest first."""
    return _store().recent_activity(CURRENT_USER_ID, limit=config.activity_limit)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Configure logging and launch the uvicorn ASGI server.

    Host, port and log level come from :data:`~craftai.core.config.config`
    (``CRAFTAI_SERVER_HOST``, ``CRAFTAI_SERVER_PORT``, ``CRAFTAI_LOG_LEVEL``).

    This function is registered as the ``craftai`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "craftai.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
