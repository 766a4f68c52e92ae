"""Pydantic models describing the tool parameters."""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

WindowStrategyName = Literal["auto", "by-id", "by-bounds", "interactive", "id", "bounds"]

INLINE_MAX_BYTES_DESCRIPTION = (
    "Optional override for maximum embedded image size in bytes "
    "(default 1,000,000; can also set MCP_SCREENSHOT_EMBED_MAX_BYTES env)"
)
RETURN_DATA_DESCRIPTION = (
    "If true, attempt to embed image data (subject to size threshold). "
    "Image still returned automatically when small."
)
COMPRESS_DESCRIPTION = "Whether to compress the PNG file to reduce size (default: false)"


class ToolParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def input_schema(cls) -> Dict[str, Any]:
        schema = cls.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema


class TakeScreenshotParams(ToolParams):
    app_name: str = Field(
        ...,
        alias="appName",
        max_length=100,
        description="The name of the app to screenshot (e.g., 'Visual Studio Code', 'Safari')",
    )
    compress: Optional[bool] = Field(default=None, description=COMPRESS_DESCRIPTION)
    format: Literal["png"] = Field(
        default="png", description="Screenshot format (currently only 'png' is supported)"
    )
    window_strategy: WindowStrategyName = Field(
        default="auto",
        alias="windowStrategy",
        description=(
            "Window capture strategy: 'auto' (smart detection), 'by-id' (window ID), "
            "'by-bounds' (window bounds), 'interactive' (user selection)"
        ),
    )
    return_data: Optional[bool] = Field(default=None, alias="returnData", description=RETURN_DATA_DESCRIPTION)
    inline_max_bytes: Optional[int] = Field(
        default=None, alias="inlineMaxBytes", gt=0, description=INLINE_MAX_BYTES_DESCRIPTION
    )


class ListRunningAppsParams(ToolParams):
    pass


class CaptureRegionParams(ToolParams):
    x: int = Field(..., ge=0, description="X coordinate of the top-left corner of the region (must be non-negative integer)")
    y: int = Field(..., ge=0, description="Y coordinate of the top-left corner of the region (must be non-negative integer)")
    width: int = Field(..., ge=1, description="Width of the region to capture in pixels (must be positive integer)")
    height: int = Field(..., ge=1, description="Height of the region to capture in pixels (must be positive integer)")
    compress: Optional[bool] = Field(default=None, description=COMPRESS_DESCRIPTION)
    return_data: Optional[bool] = Field(default=None, alias="returnData", description=RETURN_DATA_DESCRIPTION)
    inline_max_bytes: Optional[int] = Field(
        default=None, alias="inlineMaxBytes", gt=0, description=INLINE_MAX_BYTES_DESCRIPTION
    )
