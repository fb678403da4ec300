"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from carbon_enrichment.config import Settings
from carbon_enrichment.models.product import ProductInput


VALID_RESPONSE_TEXT = (
    '{"co2Value": 0.8, "conciseTitle": "Bamboo Toothbrush", '
    '"conciseDescription": "Biodegradable toothbrush"}'
)


class FakeClock:
    """Manually advanced clock, usable as a time.monotonic replacement."""
    
    def __init__(self, start: float = 1000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """asyncio.sleep replacement that records delays and advances a FakeClock."""
    
    def __init__(self, clock: FakeClock | None = None):
        self.clock = clock
        self.delays: list[float] = []
    
    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="Carbon Enrichment Service (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        GEMINI_BASE_URL="https://gemini.test",
        GEMINI_API_KEY=None,
        GEMINI_MODELS=["model-a", "model-b", "model-c"],
        MIN_REQUEST_INTERVAL=0.0,
        RETRY_INITIAL_DELAY=0.0,
        RETRY_MAX_DELAY=0.0,
        CREDENTIAL_BACKEND="settings",
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_product_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample product fixture as dict (includes scraper-only fields)."""
    with open(fixtures_dir / "sample_product.json") as f:
        return json.load(f)


@pytest.fixture
def sample_product(sample_product_data: Dict[str, Any]) -> ProductInput:
    """Parsed ProductInput from the sample fixture."""
    return ProductInput(**sample_product_data)


@pytest.fixture
def gemini_response_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load a successful generateContent response envelope."""
    with open(fixtures_dir / "gemini_generate_response.json") as f:
        return json.load(f)


@pytest.fixture
def bamboo_product() -> ProductInput:
    """The minimal Bamboo Toothbrush product."""
    return ProductInput(
        id="bamboo-1",
        title="Bamboo Toothbrush",
        description="",
        details={"material": "Bamboo handle, Nylon bristles", "weight": "Not specified"},
    )


@pytest.fixture
def create_product():
    """Factory fixture to create ProductInput with custom values.
    
    Usage:
        def test_something(create_product):
            product = create_product(id="p2", details={"brand": "Acme"})
    """
    def _create(
        id: str = "prod-001",
        title: str = "Stainless Steel Water Bottle",
        description: str = "Insulated 750ml bottle",
        details: Dict[str, str] | None = None,
        about: list[str] | None = None,
    ) -> ProductInput:
        return ProductInput(
            id=id,
            title=title,
            description=description,
            details=details if details is not None else {"material": "Stainless steel"},
            about=about or [],
        )
    
    return _create


@pytest.fixture
def valid_response_text() -> str:
    """Well-formed model output for the Bamboo Toothbrush."""
    return VALID_RESPONSE_TEXT


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep(fake_clock: FakeClock) -> RecordingSleep:
    return RecordingSleep(fake_clock)


@pytest.fixture
def make_sleep(fake_clock: FakeClock):
    """Factory for additional RecordingSleep instances.
    
    advance_clock=False records delays without moving the shared clock.
    """
    def _make(advance_clock: bool = True) -> RecordingSleep:
        return RecordingSleep(fake_clock if advance_clock else None)
    
    return _make
