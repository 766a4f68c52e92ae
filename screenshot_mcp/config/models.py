"""
Typed configuration models for the capture engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from ..utils.screenshot import DEFAULT_SCREENSHOT_DIR


@dataclass(frozen=True)
class TimeoutSettings:
    """Per-subprocess deadlines, in seconds."""

    resolve: float = 7.0
    list_apps: float = 10.0
    app_enumeration: float = 6.0
    window_query: float = 6.0
    activate: float = 4.0
    capture: float = 12.0
    region_capture: float = 10.0
    compress: float = 8.0
    overall: float = 15.0


@dataclass(frozen=True)
class CaptureSettings:
    screenshot_dir: str = DEFAULT_SCREENSHOT_DIR
    settle_delay_seconds: float = 1.0
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)


def _timeouts_from_dict(raw: Optional[Dict[str, Any]]) -> TimeoutSettings:
    raw = raw or {}
    known = {f.name for f in fields(TimeoutSettings)}
    values = {key: float(value) for key, value in raw.items() if key in known and value is not None}
    return TimeoutSettings(**values)


def load_capture_settings(config: Optional[Dict[str, Any]]) -> CaptureSettings:
    """
    Build CaptureSettings from the ``screenshots`` section of a config dict.

    Unknown keys are ignored and missing keys keep their defaults.
    """
    section = (config or {}).get("screenshots", {}) or {}
    return CaptureSettings(
        screenshot_dir=section.get("base_dir") or DEFAULT_SCREENSHOT_DIR,
        settle_delay_seconds=float(section.get("settle_delay_seconds", 1.0)),
        timeouts=_timeouts_from_dict(section.get("timeouts")),
    )
