"""
Platform detection and screenshot capability checks.

Only macOS has a capture backend. Linux and Windows are described so callers
get an explanation instead of a failed subprocess.
"""

import sys
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PlatformInfo:
    platform: str
    is_mac: bool
    is_linux: bool
    is_windows: bool
    supports_screenshots: bool
    screenshot_method: str
    limitations: List[str] = field(default_factory=list)


def get_platform_info(system: Optional[str] = None) -> PlatformInfo:
    """
    Describe screenshot support for a platform.

    Args:
        system: A ``sys.platform`` value; defaults to the running interpreter's
    """
    system = system or sys.platform

    if system == "darwin":
        return PlatformInfo(
            platform="macOS",
            is_mac=True,
            is_linux=False,
            is_windows=False,
            supports_screenshots=True,
            screenshot_method="screencapture + AppleScript",
        )

    if system.startswith("linux"):
        return PlatformInfo(
            platform="Linux",
            is_mac=False,
            is_linux=True,
            is_windows=False,
            supports_screenshots=False,
            screenshot_method="grim + slurp (planned)",
            limitations=[
                "Not yet implemented",
                "Requires Wayland compositor support",
                "grim and slurp dependencies needed",
                "X11 support requires different tooling",
            ],
        )

    if system in ("win32", "cygwin"):
        return PlatformInfo(
            platform="Windows",
            is_mac=False,
            is_linux=False,
            is_windows=True,
            supports_screenshots=False,
            screenshot_method="PowerShell + Windows.Graphics.Capture (planned)",
            limitations=[
                "Not yet implemented",
                "Requires Windows 10+ for modern APIs",
                "PowerShell execution policy considerations",
                "Application permission challenges",
            ],
        )

    return PlatformInfo(
        platform=system,
        is_mac=False,
        is_linux=False,
        is_windows=False,
        supports_screenshots=False,
        screenshot_method="unknown",
        limitations=["Unsupported platform", "No screenshot implementation available"],
    )


def is_capture_supported(system: Optional[str] = None) -> bool:
    return get_platform_info(system).supports_screenshots


def describe_unsupported(system: Optional[str] = None) -> str:
    """Human-readable explanation of why capture is unavailable."""
    info = get_platform_info(system)
    if info.supports_screenshots:
        return "Platform is supported"

    main_limitation = info.limitations[0] if info.limitations else "Not supported"
    return (
        f"Screenshot functionality is not available on {info.platform}. "
        f"{main_limitation}. Planned implementation: {info.screenshot_method}"
    )
