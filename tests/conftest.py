"""Shared test fixtures for the vaizify test suite."""

from __future__ import annotations

import pytest

from vaizify.config import VaizifyConfig
from vaizify.models import UploadedFile


@pytest.fixture
def config() -> VaizifyConfig:
    """Fast, deterministic test configuration with a dummy key."""
    return VaizifyConfig(
        api_key="test-key-1234",
        space_id="space-1",
        retry_max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
    )


@pytest.fixture
def image_file() -> UploadedFile:
    """An uploaded 1920x1080 PNG."""
    return UploadedFile(
        id="file-1",
        url="https://cdn.vaiz.com/files/chart.png",
        name="chart.png",
        ext="png",
        type="Image",
        size=20480,
        dimension=[1920, 1080],
        mime="image/png",
        dominant_color={"color": "#112233", "isDark": True},
    )
