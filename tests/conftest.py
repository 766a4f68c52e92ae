"""
Pytest configuration and fixtures for test environment.

This file provides:
- Pytest configuration and markers
- A scripted macOS command runner (FakeMac)
- Capture settings pointing at a temporary screenshots directory
"""

import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))
sys.path.insert(0, str(Path(__file__).parent))

from screenshot_mcp.config.models import CaptureSettings, TimeoutSettings  # noqa: E402
from screenshot_mcp.services.screenshot_service import ScreenshotService  # noqa: E402
from fixtures.fake_mac import FakeMac  # noqa: E402


@pytest.fixture
def fake_mac():
    """Scripted osascript/screencapture/sips runner."""
    return FakeMac()


@pytest.fixture
def screenshot_dir(tmp_path):
    return tmp_path / "Screenshots"


@pytest.fixture
def capture_settings(screenshot_dir):
    """Settings with no settle delay and a temporary screenshots directory."""
    return CaptureSettings(
        screenshot_dir=str(screenshot_dir),
        settle_delay_seconds=0,
        timeouts=TimeoutSettings(),
    )


@pytest.fixture
def environ():
    """Isolated environment mapping; tests add variables as needed."""
    return {}


@pytest.fixture
def service(capture_settings, fake_mac, environ):
    return ScreenshotService(capture_settings, runner=fake_mac, environ=environ, system="darwin")


@pytest.fixture
def restore_root_logging():
    """Undo setup_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require macOS)"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on file location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
