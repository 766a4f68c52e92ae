"""
Command line entry point.

    screenshot-mcp [serve]                 Run the MCP server on stdio
    screenshot-mcp shoot "App Name"        Screenshot an application window
    screenshot-mcp apps                    List running applications
    screenshot-mcp region X Y WIDTH HEIGHT Screenshot a screen region
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .automation.models import CaptureStrategy
from .automation.platform_support import describe_unsupported, is_capture_supported
from .config.models import load_capture_settings
from .server import serve
from .services.screenshot_service import ScreenshotService
from .utils import load_config, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="screenshot-mcp", description="macOS screenshot tools over MCP")
    parser.add_argument("--config", help="Path to config.yaml (default: $SCREENSHOT_MCP_CONFIG or ./config.yaml)")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")

    shoot = subparsers.add_parser("shoot", help="Screenshot the front window of an application")
    shoot.add_argument("app_name", help="Application name, e.g. 'Visual Studio Code'")
    shoot.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in CaptureStrategy],
        help="Window capture strategy (default: $WINDOW_STRATEGY or auto)",
    )
    shoot.add_argument("--compress", action="store_true", help="Recompress the PNG with sips")

    subparsers.add_parser("apps", help="List running foreground applications")

    region = subparsers.add_parser("region", help="Screenshot a rectangle of the screen")
    region.add_argument("x", type=int)
    region.add_argument("y", type=int)
    region.add_argument("width", type=int)
    region.add_argument("height", type=int)
    region.add_argument("--compress", action="store_true", help="Recompress the PNG with sips")

    return parser


def _shoot(service: ScreenshotService, args: argparse.Namespace) -> int:
    if not is_capture_supported():
        print(f"❌ {describe_unsupported()}")
        return 1

    outcome = asyncio.run(
        service.capture.capture_app(args.app_name, strategy=args.strategy, compress=args.compress or None)
    )
    for line in outcome.lines:
        print(line)
    if not outcome.success:
        if outcome.error:
            print(f"Error: {outcome.error}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(config)
    service = ScreenshotService(load_capture_settings(config))

    command = args.command or "serve"

    if command == "serve":
        asyncio.run(serve(service))
        return 0

    if command == "shoot":
        return _shoot(service, args)

    if command == "apps":
        result = asyncio.run(service.list_running_apps())
    else:
        result = asyncio.run(
            service.capture_region(args.x, args.y, args.width, args.height, compress=args.compress or None)
        )

    for text in result.texts:
        print(text)
    return 1 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
