"""
Pytest fixtures for RateMySpeak backend tests.

Gemini is never called: analysis runs use fake clients or fake analyze
functions from tests.configs.
"""
import httpx
import pytest
import pytest_asyncio

from src.config import AnalyzerConfig
from tests.configs import make_result


@pytest.fixture
def analyzer_config() -> AnalyzerConfig:
    """Analyzer configuration with a dummy key and the default three runs."""
    return AnalyzerConfig(api_key="test-key")


@pytest.fixture
def sample_result():
    """A single valid analysis report."""
    return make_result()


@pytest_asyncio.fixture
async def api_client():
    """Async HTTP client bound to the FastAPI app (no network)."""
    from app import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
