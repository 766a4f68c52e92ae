"""
Tests for the LangChain screenshot tools.
"""

import pytest

from screenshot_mcp.agent import SCREEN_AGENT_TOOLS
from screenshot_mcp.agent import screen_agent
from screenshot_mcp.utils.process_runner import CommandResult


@pytest.fixture
def patched_service(service, monkeypatch):
    monkeypatch.setattr(screen_agent, "_build_service", lambda: service)
    return service


def test_tool_registry():
    assert [t.name for t in SCREEN_AGENT_TOOLS] == [
        "take_app_screenshot",
        "list_foreground_apps",
        "capture_screen_region",
    ]
    assert "app_name" in screen_agent.take_app_screenshot.args


@pytest.mark.asyncio
async def test_take_app_screenshot(patched_service, fake_mac):
    output = await screen_agent.take_app_screenshot.ainvoke({"app_name": "code", "window_strategy": "by-id"})

    assert output["success"] is True
    assert output["screenshot_path"].endswith(".png")
    assert output["embedded_inline"] is True
    assert "error" not in output


@pytest.mark.asyncio
async def test_take_app_screenshot_not_found(patched_service):
    output = await screen_agent.take_app_screenshot.ainvoke({"app_name": "DefinitelyNotRunning__12345"})

    assert output["success"] is False
    assert output["error"] is True
    assert "not found" in output["error_message"]


@pytest.mark.asyncio
async def test_list_foreground_apps(patched_service, fake_mac):
    output = await screen_agent.list_foreground_apps.ainvoke({})

    assert output["success"] is True
    assert "Visual Studio Code" in output["messages"][0]

    fake_mac.list_result = CommandResult("", "[TIMEOUT]", 124)
    output = await screen_agent.list_foreground_apps.ainvoke({})
    assert output["success"] is False


@pytest.mark.asyncio
async def test_capture_screen_region(patched_service):
    output = await screen_agent.capture_screen_region.ainvoke({"x": 0, "y": 0, "width": 10, "height": 10})
    assert output["success"] is True

    output = await screen_agent.capture_screen_region.ainvoke({"x": 0, "y": 0, "width": 0, "height": 10})
    assert output["success"] is False
    assert "Invalid coordinates" in output["error_message"]
