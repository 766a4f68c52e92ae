"""
MCP server exposing the screenshot tools over stdio.

stdout carries the JSON-RPC stream; all logging goes to stderr.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from .automation.platform_support import get_platform_info
from .results import ImageContent, ToolResult
from .schemas import CaptureRegionParams, ListRunningAppsParams, TakeScreenshotParams, ToolParams
from .services.screenshot_service import ScreenshotService

logger = logging.getLogger(__name__)

SERVER_NAME = "screenshot-mcp"


class ToolExecutionError(Exception):
    """Raised inside the MCP handler so the client receives isError=true."""


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params: Type[ToolParams]
    error_prefix: str


TOOL_SPECS: List[ToolSpec] = [
    ToolSpec(
        name="take_screenshot",
        description="Take a screenshot of the specified app and return the screenshot file path",
        params=TakeScreenshotParams,
        error_prefix="Screenshot",
    ),
    ToolSpec(
        name="list_running_apps",
        description="Get a JSON array of currently running applications with visible windows",
        params=ListRunningAppsParams,
        error_prefix="App listing",
    ),
    ToolSpec(
        name="capture_region",
        description="Capture a specific rectangular region of the screen by coordinates",
        params=CaptureRegionParams,
        error_prefix="Region capture",
    ),
]

TOOLS_BY_NAME: Dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}


async def dispatch_tool(service: ScreenshotService, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """Validate arguments for a tool and run it."""
    spec = TOOLS_BY_NAME.get(name)
    if spec is None:
        return ToolResult.text(f"Unknown tool: {name}", is_error=True)

    try:
        params = spec.params.model_validate(arguments or {})
    except ValidationError as e:
        return ToolResult.text(f"{spec.error_prefix} failed: Invalid input - {e}", is_error=True)

    logger.info(f"[SERVER] Tool call: {name}")

    if isinstance(params, TakeScreenshotParams):
        return await service.take_screenshot(
            params.app_name,
            compress=params.compress,
            strategy=params.window_strategy,
            return_data=params.return_data,
            inline_max_bytes=params.inline_max_bytes,
        )
    if isinstance(params, CaptureRegionParams):
        return await service.capture_region(
            params.x,
            params.y,
            params.width,
            params.height,
            compress=params.compress,
            return_data=params.return_data,
            inline_max_bytes=params.inline_max_bytes,
        )
    return await service.list_running_apps()


def to_mcp_content(result: ToolResult) -> List[types.TextContent | types.ImageContent]:
    blocks: List[types.TextContent | types.ImageContent] = []
    for item in result.content:
        if isinstance(item, ImageContent):
            blocks.append(types.ImageContent(type="image", data=item.data, mimeType=item.mime_type))
        else:
            blocks.append(types.TextContent(type="text", text=item.text))
    return blocks


def build_server(service: ScreenshotService) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=spec.name, description=spec.description, inputSchema=spec.params.input_schema())
            for spec in TOOL_SPECS
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent | types.ImageContent]:
        result = await dispatch_tool(service, name, arguments)
        if result.is_error:
            raise ToolExecutionError("\n".join(result.texts))
        return to_mcp_content(result)

    return server


def log_platform_banner() -> None:
    info = get_platform_info()
    support = "✅ Supported" if info.supports_screenshots else "❌ Not Supported"
    logger.info("Screenshot MCP Server running on stdio")
    logger.info(f"Platform: {info.platform} (Screenshots: {support})")
    if not info.supports_screenshots:
        logger.info(f"Screenshot method: {info.screenshot_method}")
        logger.info(f"Limitations: {', '.join(info.limitations)}")


async def serve(service: ScreenshotService) -> None:
    server = build_server(service)
    async with stdio_server() as (read_stream, write_stream):
        log_platform_banner()
        await server.run(read_stream, write_stream, server.create_initialization_options())
