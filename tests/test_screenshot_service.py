"""
Test the tool-facing screenshot operations end to end against a scripted Mac.
"""

import base64
import json

import pytest

from screenshot_mcp.services.screenshot_service import (
    REGION_SAVED_LABEL,
    SCREENSHOT_SAVED_LABEL,
    ScreenshotService,
)
from screenshot_mcp.utils.process_runner import CommandResult

from fixtures.fake_mac import FAKE_PNG


class TestTakeScreenshot:
    @pytest.mark.asyncio
    async def test_small_capture_embedded_automatically(self, service):
        result = await service.take_screenshot("Finder")

        assert not result.is_error
        assert len(result.images) == 1
        assert base64.b64decode(result.images[0].data) == FAKE_PNG
        assert result.texts == [f"{SCREENSHOT_SAVED_LABEL}{result.path} (embedded inline, 4 KB)"]

    @pytest.mark.asyncio
    async def test_large_capture_returned_as_path(self, service, environ):
        environ["MCP_SCREENSHOT_EMBED_MAX_BYTES"] = "1024"

        result = await service.take_screenshot("Finder", return_data=True)

        assert not result.is_error
        assert result.images == []
        assert result.texts[0].startswith(SCREENSHOT_SAVED_LABEL)
        assert "not embedded" in result.texts[0]

    @pytest.mark.asyncio
    async def test_tiny_inline_limit_not_embedded(self, service):
        result = await service.take_screenshot("Finder", return_data=True, inline_max_bytes=10)

        assert not result.is_error
        assert result.images == []
        assert "not embedded" in result.texts[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["inf", "1e400"])
    async def test_non_finite_env_threshold_ignored(self, service, environ, raw):
        environ["MCP_SCREENSHOT_EMBED_MAX_BYTES"] = raw

        result = await service.take_screenshot("Finder")

        assert not result.is_error
        assert len(result.images) == 1

    @pytest.mark.asyncio
    async def test_per_call_threshold_wins(self, service, environ):
        environ["MCP_SCREENSHOT_EMBED_MAX_BYTES"] = "1024"

        result = await service.take_screenshot("Finder", inline_max_bytes=10_000)

        assert len(result.images) == 1

    @pytest.mark.asyncio
    async def test_unknown_app(self, service, fake_mac):
        result = await service.take_screenshot("DefinitelyNotRunning__12345")

        assert result.is_error
        assert result.texts == [
            "Screenshot failed: Application 'DefinitelyNotRunning__12345' not found. "
            "Running applications: Finder, TextEdit, Visual Studio Code"
        ]
        assert fake_mac.commands("screencapture") == []

    @pytest.mark.asyncio
    async def test_window_query_error_noted(self, service, fake_mac):
        fake_mac.window_result = CommandResult("", "execution error", 1)

        result = await service.take_screenshot("Finder")

        assert not result.is_error
        assert result.texts[-1] == "Note: WindowQueryError: execution error"

    @pytest.mark.asyncio
    async def test_capture_failure(self, service, fake_mac):
        fake_mac.capture_result = CommandResult("", "screencapture: cannot write file", 1)

        result = await service.take_screenshot("Finder")

        assert result.is_error
        assert result.texts == ["Screenshot failed: screencapture: cannot write file"]

    @pytest.mark.asyncio
    async def test_unsupported_platform(self, capture_settings, fake_mac):
        service = ScreenshotService(capture_settings, runner=fake_mac, environ={}, system="linux")

        result = await service.take_screenshot("Finder")

        assert result.is_error
        assert result.texts[0].startswith("Screenshot failed: Screenshot functionality is not available on Linux")
        assert fake_mac.calls == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_reported(self, service, monkeypatch):
        async def explode(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(service.capture, "capture_app", explode)

        result = await service.take_screenshot("Finder")

        assert result.is_error
        assert result.texts == ["Error taking screenshot: kaboom"]


class TestListRunningApps:
    @pytest.mark.asyncio
    async def test_sorted_json_array(self, service, fake_mac):
        fake_mac.apps = ["zsh Helper", "Finder", "Émoji App", "activity Monitor"]

        result = await service.list_running_apps()

        assert not result.is_error
        names = json.loads(result.texts[0])
        assert names == sorted(names, key=str.casefold)
        assert names[0] == "activity Monitor"
        assert "Émoji App" in result.texts[0]

    @pytest.mark.asyncio
    async def test_empty_list(self, service, fake_mac):
        fake_mac.apps = []

        result = await service.list_running_apps()

        assert result.texts == ["[]"]

    @pytest.mark.asyncio
    async def test_timeout(self, service, fake_mac, capture_settings):
        fake_mac.list_result = CommandResult("", "[TIMEOUT]", 124)

        result = await service.list_running_apps()

        assert result.is_error
        assert result.texts == ["App listing failed: [TIMEOUT] Operation exceeded 10 second timeout"]
        assert fake_mac.timeouts == [capture_settings.timeouts.list_apps]

    @pytest.mark.asyncio
    async def test_permission_failure(self, service, fake_mac):
        fake_mac.list_result = CommandResult("", "System Events got an error: osascript is not allowed assistive access.", 1)

        result = await service.list_running_apps()

        assert result.is_error
        assert result.texts[0].startswith("App listing failed: Automation permission denied")


class TestCaptureRegion:
    @pytest.mark.asyncio
    async def test_region_capture(self, service, fake_mac):
        result = await service.capture_region(0, 0, 50, 50)

        assert not result.is_error
        assert len(result.images) == 1
        assert result.texts[0].startswith(REGION_SAVED_LABEL)
        assert "0_0_50x50" in result.path
        assert fake_mac.commands("osascript") == []

    @pytest.mark.asyncio
    async def test_invalid_region(self, service, fake_mac):
        result = await service.capture_region(-1, 0, 50, 50)

        assert result.is_error
        assert result.texts[0].startswith("Region capture failed: Invalid coordinates.")
        assert "Invalid: x=-1" in result.texts[0]
        assert fake_mac.calls == []

    @pytest.mark.asyncio
    async def test_region_timeout(self, service, fake_mac):
        fake_mac.capture_result = CommandResult("", "[TIMEOUT]", 124)

        result = await service.capture_region(0, 0, 10, 10)

        assert result.is_error
        assert result.texts == ["Region capture failed: [TIMEOUT] Operation exceeded 10 second timeout"]

    @pytest.mark.asyncio
    async def test_compression_failure_noted(self, service, fake_mac):
        fake_mac.sips_result = CommandResult("", "sips failed", 1)

        result = await service.capture_region(0, 0, 10, 10, compress=True)

        assert not result.is_error
        assert result.texts[-1] == "Note: CompressionFailed: original file kept"

    @pytest.mark.asyncio
    async def test_unsupported_platform(self, capture_settings, fake_mac):
        service = ScreenshotService(capture_settings, runner=fake_mac, environ={}, system="win32")

        result = await service.capture_region(0, 0, 10, 10)

        assert result.is_error
        assert result.texts[0].startswith("Region capture failed: Screenshot functionality is not available on Windows")
