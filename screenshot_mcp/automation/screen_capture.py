"""
Screenshot orchestration for macOS.

Captures:
- The front window of a named application (fuzzy name resolution, window
  classification, strategy selection with fallbacks)
- A caller-specified screen region

Every OS interaction is an awaited subprocess with its own deadline, and a
capture-by-name call as a whole is bounded by the overall timeout.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..config.models import CaptureSettings
from ..utils.process_runner import CommandResult, CommandRunner, run_command
from ..utils.screenshot import app_screenshot_filename, get_screenshot_dir, region_screenshot_filename
from .app_resolver import AppResolver
from .capture_strategy import run_capture, select_capture
from .models import AppNotFound, CaptureMethod, CaptureOutcome, CaptureStrategy, ErrorType, QueryError
from .post_processing import compress_png, compression_requested
from .window_locator import WindowLocator

logger = logging.getLogger(__name__)

WINDOW_STRATEGY_ENV = "WINDOW_STRATEGY"


def validate_region(x: int, y: int, width: int, height: int) -> List[str]:
    """Return ``field=value`` for every coordinate that violates the region invariant."""
    violations = []
    if x < 0:
        violations.append(f"x={x}")
    if y < 0:
        violations.append(f"y={y}")
    if width <= 0:
        violations.append(f"width={width}")
    if height <= 0:
        violations.append(f"height={height}")
    return violations


def _failure_type(result: CommandResult) -> ErrorType:
    return ErrorType.TIMEOUT if result.timed_out else ErrorType.CAPTURE_SUBPROCESS_FAILED


class ScreenCapture:
    """
    Screen capture using the macOS screencapture command.
    """

    def __init__(
        self,
        settings: Optional[CaptureSettings] = None,
        runner: Optional[CommandRunner] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize screen capture.

        Args:
            settings: Capture settings (directory, timeouts, settle delay)
            runner: Command runner; tests substitute a scripted fake
            environ: Environment mapping consulted per call (defaults to os.environ)
        """
        self.settings = settings or CaptureSettings()
        self.runner = runner or run_command
        self._environ = environ
        self.resolver = AppResolver(self.runner, self.settings.timeouts)
        self.locator = WindowLocator(self.runner, self.settings.timeouts, self.settings.settle_delay_seconds)

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def default_strategy(self) -> CaptureStrategy:
        """WINDOW_STRATEGY from the environment when valid, otherwise auto."""
        configured = self.environ.get(WINDOW_STRATEGY_ENV)
        if configured:
            try:
                return CaptureStrategy.parse(configured)
            except ValueError:
                logger.warning(f"[SCREEN CAPTURE] Ignoring invalid {WINDOW_STRATEGY_ENV}={configured!r}")
        return CaptureStrategy.AUTO

    async def capture_app(
        self,
        app_name: str,
        strategy: Union[str, CaptureStrategy, None] = None,
        compress: Optional[bool] = None,
    ) -> CaptureOutcome:
        """
        Capture the front window of a running application.

        Args:
            app_name: Free-text application name (e.g., "Safari", "code")
            strategy: auto, by-id, by-bounds or interactive; None uses the default
            compress: Recompress the PNG with sips after capture

        Returns:
            CaptureOutcome with the saved path and the diagnostic lines
        """
        lines: List[str] = []
        overall = self.settings.timeouts.overall
        try:
            return await asyncio.wait_for(self._capture_app(app_name, strategy, compress, lines), timeout=overall)
        except asyncio.TimeoutError:
            logger.error(f"[SCREEN CAPTURE] Capture of {app_name!r} exceeded {overall:g}s")
            lines.append("❌ Failed to capture screenshot")
            return CaptureOutcome.failure(
                f"[TIMEOUT] Operation exceeded {overall:g} second timeout", ErrorType.TIMEOUT, lines
            )

    async def _capture_app(
        self,
        app_name: str,
        strategy: Union[str, CaptureStrategy, None],
        compress: Optional[bool],
        lines: List[str],
    ) -> CaptureOutcome:
        if not app_name:
            lines.append("❌ Error: No app name provided")
            return CaptureOutcome.failure("No app name", ErrorType.INVALID_INPUT, lines)

        try:
            chosen = CaptureStrategy.parse(strategy) if strategy is not None else self.default_strategy()
        except ValueError:
            lines.append(f"❌ Unknown window strategy: {strategy}")
            return CaptureOutcome.failure(f"Unknown window strategy '{strategy}'", ErrorType.INVALID_INPUT, lines)

        lines.append(f"🔍 Looking for app: {app_name}")
        resolved = await self.resolver.resolve(app_name)
        if isinstance(resolved, AppNotFound):
            return self._not_found(resolved, lines)

        lines.append(f"✅ Found app: {resolved.name}")
        classification = await self.locator.locate(resolved.name)
        lines.append(f"🔍 Window info: {classification.describe()}")
        notices = []
        if isinstance(classification, QueryError):
            notices.append(f"{ErrorType.WINDOW_QUERY_ERROR.value}: {classification.detail}")

        await self.locator.bring_to_front(resolved.name)
        lines.append("📸 Taking screenshot...")
        lines.append(f"🎯 Using window strategy: {chosen.value}")

        screenshot_dir = get_screenshot_dir(self.settings.screenshot_dir)
        output_path = str(screenshot_dir / app_screenshot_filename(resolved.name))

        plan = select_capture(chosen, classification, output_path)
        lines.extend(plan.notes)
        logger.info(f"[SCREEN CAPTURE] Capturing {resolved.name!r} via {plan.method.value} -> {output_path}")

        result = await run_capture(plan, self.settings.timeouts.capture, self.runner)
        if not result.ok or not Path(output_path).exists():
            lines.append("❌ Failed to capture screenshot")
            error = result.stderr.strip() or result.stdout.strip() or "Capture failed"
            logger.error(f"[SCREEN CAPTURE] {plan.method.value} capture failed: {error}")
            return CaptureOutcome.failure(error, _failure_type(result), lines)

        lines.append(f"📸 Screenshot saved: {output_path}")

        if compression_requested(compress, self.environ):
            lines.append("🗜️  Compressing PNG file...")
            await self._compress(output_path, lines, notices)

        lines.append("🎉 Done!")
        return CaptureOutcome(success=True, path=output_path, method=plan.method, lines=lines, notices=notices)

    def _not_found(self, not_found: AppNotFound, lines: List[str]) -> CaptureOutcome:
        lines.append(f"❌ Could not find app '{not_found.input_name}'")
        lines.append("💡 Make sure the app is running and try one of these:")
        lines.append("")
        error = f"Application '{not_found.input_name}' not found"
        if not_found.running_apps:
            lines.append("Available running apps:")
            lines.extend(f"• {name}" for name in not_found.running_apps)
            error += f". Running applications: {', '.join(not_found.running_apps)}"
        return CaptureOutcome.failure(error, ErrorType.APPLICATION_NOT_FOUND, lines)

    async def _compress(self, path: str, lines: List[str], notices: List[str]) -> None:
        try:
            report = await compress_png(path, self.settings.timeouts.compress, self.runner)
        except OSError as e:
            logger.warning(f"[SCREEN CAPTURE] Compression of {path} failed: {e}")
            lines.append("⚠️  Compression failed, using original file")
            notices.append(f"{ErrorType.COMPRESSION_FAILED.value}: {e}")
            return

        lines.append(report.line)
        if not report.replaced:
            notices.append(f"{ErrorType.COMPRESSION_FAILED.value}: original file kept")

    async def capture_region(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        compress: Optional[bool] = None,
    ) -> CaptureOutcome:
        """
        Capture a rectangle of the screen, bypassing application resolution.

        Coordinates are validated before anything is spawned.
        """
        violations = validate_region(x, y, width, height)
        if violations:
            error = (
                "Invalid coordinates. x and y must be non-negative, width and height must be positive. "
                f"Invalid: {', '.join(violations)}. Got: x={x}, y={y}, width={width}, height={height}"
            )
            logger.info(f"[SCREEN CAPTURE] Rejected region: {', '.join(violations)}")
            return CaptureOutcome.failure(error, ErrorType.INVALID_REGION)

        lines: List[str] = []
        screenshot_dir = get_screenshot_dir(self.settings.screenshot_dir)
        output_path = str(screenshot_dir / region_screenshot_filename(x, y, width, height))
        region = f"{x},{y},{width},{height}"
        lines.append(f"📐 Capturing region {region}")

        result = await self.runner(
            ["screencapture", "-R", region, "-o", output_path],
            timeout=self.settings.timeouts.region_capture,
        )
        if not result.ok:
            if result.timed_out:
                error = f"[TIMEOUT] Operation exceeded {self.settings.timeouts.region_capture:g} second timeout"
            else:
                error = result.stderr.strip() or result.stdout.strip() or "Unknown error"
            logger.error(f"[SCREEN CAPTURE] Region capture failed: {error}")
            return CaptureOutcome.failure(error, _failure_type(result), lines)

        if not Path(output_path).exists():
            error = (
                f"Region capture appears to have been taken but file not found at expected location: "
                f"{output_path}. The capture may have failed silently."
            )
            return CaptureOutcome.failure(error, ErrorType.CAPTURE_SUBPROCESS_FAILED, lines, path=output_path)

        lines.append(f"📸 Screenshot saved: {output_path}")
        notices: List[str] = []
        if compression_requested(compress, self.environ):
            lines.append("🗜️  Compressing PNG file...")
            await self._compress(output_path, lines, notices)

        return CaptureOutcome(
            success=True, path=output_path, method=CaptureMethod.BOUNDS, lines=lines, notices=notices
        )
