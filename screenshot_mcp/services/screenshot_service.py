"""
Tool-facing screenshot operations.

Turns capture outcomes into ToolResults with the fixed message prefixes that
clients match on. Secondary failures (window query, compression, oversized
images) are reported as text next to a successful result.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from ..automation.app_resolver import parse_app_list, query_foreground_apps
from ..automation.models import CaptureOutcome, CaptureStrategy, ErrorType
from ..automation.platform_support import describe_unsupported, is_capture_supported
from ..automation.post_processing import embed_file_content
from ..automation.screen_capture import ScreenCapture
from ..config.models import CaptureSettings
from ..results import TextContent, ToolResult
from ..utils.applescript_utils import describe_applescript_error
from ..utils.process_runner import CommandRunner

logger = logging.getLogger(__name__)

SCREENSHOT_SAVED_LABEL = "Screenshot successfully taken and saved to: "
REGION_SAVED_LABEL = "Region screenshot successfully captured and saved to: "


class ScreenshotService:
    """Entry points for take_screenshot, list_running_apps and capture_region."""

    def __init__(
        self,
        settings: Optional[CaptureSettings] = None,
        runner: Optional[CommandRunner] = None,
        environ: Optional[Mapping[str, str]] = None,
        system: Optional[str] = None,
    ):
        self.settings = settings or CaptureSettings()
        self.capture = ScreenCapture(self.settings, runner=runner, environ=environ)
        self.runner = self.capture.runner
        self._environ = environ
        self.system = system

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _unsupported(self, prefix: str) -> ToolResult:
        reason = describe_unsupported(self.system)
        logger.warning(f"[SCREENSHOT SERVICE] {ErrorType.PLATFORM_UNSUPPORTED.value}: {reason}")
        return ToolResult.text(f"{prefix}: {reason}", is_error=True)

    def _finish(
        self,
        outcome: CaptureOutcome,
        label: str,
        return_data: Optional[bool],
        inline_max_bytes: Optional[int],
    ) -> ToolResult:
        if outcome.path and Path(outcome.path).exists():
            result = embed_file_content(
                outcome.path,
                label,
                inline_max_bytes=inline_max_bytes,
                requested=bool(return_data),
                environ=self.environ,
            )
        else:
            result = ToolResult.text(f"{label}{outcome.path or '<unknown path>'}", path=outcome.path)

        for notice in outcome.notices:
            result.content.append(TextContent(f"Note: {notice}"))
        return result

    async def take_screenshot(
        self,
        app_name: str,
        compress: Optional[bool] = None,
        strategy: Union[str, CaptureStrategy, None] = None,
        return_data: Optional[bool] = None,
        inline_max_bytes: Optional[int] = None,
    ) -> ToolResult:
        """
        Screenshot the front window of an application.

        Args:
            app_name: Application name, matched fuzzily against running apps
            compress: Recompress the PNG after capture
            strategy: Window capture strategy (auto, by-id, by-bounds, interactive)
            return_data: Caller asked for inline image data
            inline_max_bytes: Override for the inline size threshold

        Returns:
            ToolResult; small images are embedded inline automatically
        """
        try:
            if not is_capture_supported(self.system):
                return self._unsupported("Screenshot failed")

            outcome = await self.capture.capture_app(app_name, strategy=strategy, compress=compress)
            if not outcome.success:
                return ToolResult.text(f"Screenshot failed: {outcome.error or 'Unknown error'}", is_error=True)

            return self._finish(outcome, SCREENSHOT_SAVED_LABEL, return_data, inline_max_bytes)

        except Exception as e:
            logger.exception(f"[SCREENSHOT SERVICE] Error taking screenshot of {app_name!r}")
            return ToolResult.text(f"Error taking screenshot: {e}", is_error=True)

    async def list_running_apps(self) -> ToolResult:
        """JSON array of running applications with a user interface, sorted by name."""
        try:
            if not is_capture_supported(self.system):
                return self._unsupported("App listing failed")

            timeout = self.settings.timeouts.list_apps
            result = await query_foreground_apps(timeout, runner=self.runner)

            if result.timed_out:
                return ToolResult.text(
                    f"App listing failed: [TIMEOUT] Operation exceeded {timeout:g} second timeout",
                    is_error=True,
                )
            if not result.ok:
                return ToolResult.text(f"App listing failed: {describe_applescript_error(result)}", is_error=True)

            names = sorted(parse_app_list(result.stdout), key=str.casefold)
            if not names:
                return ToolResult.text("[]")
            return ToolResult.text(json.dumps(names, indent=2, ensure_ascii=False))

        except Exception as e:
            logger.exception("[SCREENSHOT SERVICE] Error listing running apps")
            return ToolResult.text(f"Error listing running apps: {e}", is_error=True)

    async def capture_region(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        compress: Optional[bool] = None,
        return_data: Optional[bool] = None,
        inline_max_bytes: Optional[int] = None,
    ) -> ToolResult:
        """Capture a screen rectangle given by its top-left corner and size."""
        try:
            if not is_capture_supported(self.system):
                return self._unsupported("Region capture failed")

            outcome = await self.capture.capture_region(x, y, width, height, compress=compress)
            if not outcome.success:
                return ToolResult.text(f"Region capture failed: {outcome.error or 'Unknown error'}", is_error=True)

            return self._finish(outcome, REGION_SAVED_LABEL, return_data, inline_max_bytes)

        except Exception as e:
            logger.exception("[SCREENSHOT SERVICE] Error capturing region")
            return ToolResult.text(f"Error capturing region: {e}", is_error=True)
