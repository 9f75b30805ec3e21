"""Shared pytest fixtures for CraftAI Studio tests."""

from __future__ import annotations

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from craftai.api import main as api_main
from craftai.core.config import CraftAIConfig
from craftai.core.generator import (
    ImageInsight,
    ListingDraft,
    MarketTrends,
    SocialDraft,
    StoryDraft,
)
from craftai.core.store import MemoryStore


class FakeGenerator:
    """In-process stand-in for GeminiGenerator.

    Every call is recorded in ``calls`` as ``(method_name, args)``.  Setting
    ``error`` makes every call (except market trends) raise it instead.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self.error: Exception | None = None
        self.market_trends = MarketTrends(demand_increase=31, avg_price=52, keywords=["stoneware"])

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error

    async def generate_story(self, craft_type, focus):
        self._record("generate_story", craft_type, focus)
        return StoryDraft(title=f"The {craft_type} Story", content=f"A tale about {focus}.")

    async def analyze_image(self, image_bytes, mime_type="image/jpeg"):
        self._record("analyze_image", len(image_bytes), mime_type)
        return ImageInsight(description="A glazed bowl.", marketing_copy="Bring home the glow.")

    async def optimize_social_content(self, platform, content, craft_type):
        self._record("optimize_social_content", platform, content, craft_type)
        return SocialDraft(
            optimized_content=f"{content} ✨",
            hashtags=["handmade", craft_type.lower()],
            caption="Made by hand, with love.",
        )

    async def optimize_product_listing(self, product_name, platform, description=""):
        self._record("optimize_product_listing", product_name, platform, description)
        return ListingDraft(
            optimized_title=f"Handmade {product_name}",
            optimized_description=description or "A one-of-a-kind piece.",
            keywords=["handmade", "gift"],
        )

    async def generate_heritage_story(self, technique, cultural_context):
        self._record("generate_heritage_story", technique, cultural_context)
        return f"{technique} has deep roots in {cultural_context}."

    async def generate_artist_statement(self, artist_journey, inspiration=None, philosophy=None):
        self._record("generate_artist_statement", artist_journey, inspiration, philosophy)
        return f"My work began with {artist_journey}."

    async def analyze_market_trends(self, craft_type):
        self.calls.append(("analyze_market_trends", (craft_type,)))
        return self.market_trends


def make_png_bytes(size: tuple[int, int] = (8, 8)) -> bytes:
    """Return the bytes of a small solid-colour PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color="#a0522d").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> CraftAIConfig:
    """Create a test configuration with a temporary uploads directory."""
    return CraftAIConfig(
        _env_file=None,
        gemini_api_key="test-key",
        uploads_dir=str(temp_dir / "uploads"),
    )


@pytest.fixture
def store() -> MemoryStore:
    """A store seeded with the demo user and analytics."""
    return MemoryStore()


@pytest.fixture
def empty_store() -> MemoryStore:
    """A store with no seeded data."""
    return MemoryStore(seed_demo=False)


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png_bytes()


@pytest.fixture
def test_client(monkeypatch, temp_dir: Path, store: MemoryStore, fake_generator: FakeGenerator) -> TestClient:
    """TestClient wired to a fresh store and the fake generator.

    The client is not entered as a context manager, so the application
    lifespan does not run and the injected state is kept.
    """
    uploads_dir = temp_dir / "uploads"
    uploads_dir.mkdir()
    monkeypatch.setattr(api_main, "UPLOADS_DIR", uploads_dir)
    monkeypatch.setattr(api_main, "CURRENT_USER_ID", "demo-user-1")

    api_main.app.state.store = store
    api_main.app.state.generator = fake_generator
    return TestClient(api_main.app)
