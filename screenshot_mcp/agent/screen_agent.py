"""
Screen Agent - screenshot tools for LangChain agents.
"""

import logging
from typing import Any, Dict, Optional

from langchain_core.tools import tool

from ..config.models import load_capture_settings
from ..results import ToolResult
from ..services.screenshot_service import ScreenshotService
from ..utils import load_config

logger = logging.getLogger(__name__)


def _build_service() -> ScreenshotService:
    return ScreenshotService(load_capture_settings(load_config()))


def _to_tool_output(result: ToolResult) -> Dict[str, Any]:
    output: Dict[str, Any] = {
        "success": not result.is_error,
        "messages": result.texts,
    }
    if result.path:
        output["screenshot_path"] = result.path
    output["embedded_inline"] = bool(result.images)
    if result.is_error:
        output["error"] = True
        output["error_message"] = "\n".join(result.texts)
    return output


@tool
async def take_app_screenshot(
    app_name: str,
    window_strategy: Optional[str] = None,
    compress: bool = False,
) -> Dict[str, Any]:
    """
    Capture the front window of a running macOS application.

    The name is matched fuzzily against running apps ("code" finds
    "Code", "safari" finds "Safari").

    Args:
        app_name: Application to capture (e.g., "Safari", "Visual Studio Code")
        window_strategy: "auto" (default), "by-id", "by-bounds" or "interactive"
        compress: Recompress the PNG to reduce file size

    Returns:
        Dictionary with success, screenshot_path and status messages
    """
    logger.info(f"[SCREEN AGENT] Tool: take_app_screenshot(app_name='{app_name}', strategy='{window_strategy}')")
    result = await _build_service().take_screenshot(app_name, compress=compress, strategy=window_strategy)
    return _to_tool_output(result)


@tool
async def list_foreground_apps() -> Dict[str, Any]:
    """
    List running macOS applications that have a user interface.

    Use this when a screenshot fails because the app name was not found.
    """
    logger.info("[SCREEN AGENT] Tool: list_foreground_apps()")
    result = await _build_service().list_running_apps()
    return _to_tool_output(result)


@tool
async def capture_screen_region(x: int, y: int, width: int, height: int, compress: bool = False) -> Dict[str, Any]:
    """
    Capture a rectangle of the screen.

    Args:
        x: Left edge in points (>= 0)
        y: Top edge in points (>= 0)
        width: Width in points (> 0)
        height: Height in points (> 0)
        compress: Recompress the PNG to reduce file size
    """
    logger.info(f"[SCREEN AGENT] Tool: capture_screen_region({x}, {y}, {width}, {height})")
    result = await _build_service().capture_region(x, y, width, height, compress=compress)
    return _to_tool_output(result)


# Export tools
SCREEN_AGENT_TOOLS = [
    take_app_screenshot,
    list_foreground_apps,
    capture_screen_region,
]
