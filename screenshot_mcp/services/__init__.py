"""Service layer exposing the screenshot operations as tool results."""

from .screenshot_service import REGION_SAVED_LABEL, SCREENSHOT_SAVED_LABEL, ScreenshotService

__all__ = ["ScreenshotService", "SCREENSHOT_SAVED_LABEL", "REGION_SAVED_LABEL"]
