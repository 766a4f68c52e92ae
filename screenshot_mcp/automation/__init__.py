"""Capture engine for macOS screenshots."""

from .app_resolver import AppResolver
from .capture_strategy import CAPTURE_TABLE, CapturePlan, select_capture
from .models import (
    AppNotFound,
    Bounds,
    CaptureMethod,
    CaptureOutcome,
    CaptureStrategy,
    ErrorType,
    NoWindows,
    QueryError,
    ResolvedApplication,
    StableId,
)
from .platform_support import describe_unsupported, get_platform_info, is_capture_supported
from .screen_capture import ScreenCapture, validate_region
from .window_locator import WindowLocator

__all__ = [
    "AppResolver",
    "AppNotFound",
    "Bounds",
    "CAPTURE_TABLE",
    "CaptureMethod",
    "CaptureOutcome",
    "CapturePlan",
    "CaptureStrategy",
    "ErrorType",
    "NoWindows",
    "QueryError",
    "ResolvedApplication",
    "ScreenCapture",
    "StableId",
    "WindowLocator",
    "describe_unsupported",
    "get_platform_info",
    "is_capture_supported",
    "select_capture",
    "validate_region",
]
