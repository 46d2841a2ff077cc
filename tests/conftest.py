"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from retention_insights.config import Config
from retention_insights.models import (
    RetentionCurve,
    RetentionPoint,
    Transcript,
    TranscriptSegment,
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-llm-tests",
        action="store_true",
        default=False,
        help="Run LLM integration tests (expensive, makes real API calls)",
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "llm_integration: mark test as requiring real LLM calls"
    )


def pytest_collection_modifyitems(config, items):
    """Skip LLM tests unless --run-llm-tests is provided."""
    if not config.getoption("--run-llm-tests", default=False):
        skip_llm = pytest.mark.skip(
            reason="LLM integration tests skipped. Use --run-llm-tests to run."
        )
        for item in items:
            if "llm_integration" in item.keywords:
                item.add_marker(skip_llm)


def build_curve(values: list[float], video_id: str = "video1", step: float = 1.0) -> RetentionCurve:
    """Build a curve with one point per value, `step` seconds apart."""
    return RetentionCurve(
        video_id=video_id,
        points=[
            RetentionPoint(timestamp=i * step, percentage=value)
            for i, value in enumerate(values)
        ],
    )


def build_event_curve() -> RetentionCurve:
    """100 points at 0.7 with a -0.32 dip at index 32 and a +0.22 spike at index 80."""
    values = [0.7] * 100
    values[32] = 0.38
    values[80] = 0.92
    return build_curve(values)


@pytest.fixture
def make_curve():
    """Factory for retention curves from a list of percentages."""
    return build_curve


@pytest.fixture
def event_curve() -> RetentionCurve:
    return build_event_curve()


@pytest.fixture
def transcript() -> Transcript:
    """Transcript for video1 with a gap between 40s and 50s."""
    return Transcript(
        video_id="video1",
        entries=[
            TranscriptSegment(start_time=0, end_time=20, text="Welcome back to the channel."),
            TranscriptSegment(start_time=20, end_time=40, text="Here is the price comparison."),
            TranscriptSegment(start_time=50, end_time=100, text="Grab the free cheatsheet below."),
        ],
    )


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def mock_config() -> Config:
    """Provide a test configuration with mock LLM provider."""
    config = Config()
    config.llm.provider = "mock"
    return config


@pytest.fixture
def fallback_config() -> Config:
    """Provide a test configuration with text generation disabled."""
    config = Config()
    config.llm.provider = "none"
    return config


@pytest.fixture
def llm_provider():
    """LLM provider double whose generate_json is an AsyncMock."""
    provider = MagicMock()
    provider.generate_json = AsyncMock(
        return_value={
            "reasons": ["Reason one", "Reason two"],
            "suggestion": "Do the thing",
        }
    )
    return provider
