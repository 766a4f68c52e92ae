"""
Utilities for working with screenshot output paths.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

DEFAULT_SCREENSHOT_DIR = "~/Desktop/Screenshots"

_UNSAFE_CHARS = re.compile(r"[\s/]+")


def get_screenshot_dir(base_dir: Union[str, Path, None] = None, ensure_exists: bool = True) -> Path:
    """
    Resolve the base directory for storing screenshots.

    Args:
        base_dir: Configured directory; defaults to ~/Desktop/Screenshots.
        ensure_exists: When True, create the directory if it does not exist.

    Returns:
        Absolute Path pointing to the screenshot directory.
    """
    path = Path(base_dir or DEFAULT_SCREENSHOT_DIR).expanduser().resolve()

    if ensure_exists:
        path.mkdir(parents=True, exist_ok=True)

    return path


def app_screenshot_filename(app_name: str, now: Optional[datetime] = None) -> str:
    """screenshot_<App_Name>_YYYYMMDD_HHMMSS.png"""
    now = now or datetime.now()
    safe_name = _UNSAFE_CHARS.sub("_", app_name)
    return f"screenshot_{safe_name}_{now.strftime('%Y%m%d_%H%M%S')}.png"


def region_screenshot_filename(x: int, y: int, width: int, height: int, now: Optional[datetime] = None) -> str:
    """screenshot_region_<x>_<y>_<w>x<h>_YYYY-MM-DDTHH-MM-SS.png"""
    now = now or datetime.now()
    return f"screenshot_region_{x}_{y}_{width}x{height}_{now.strftime('%Y-%m-%dT%H-%M-%S')}.png"
