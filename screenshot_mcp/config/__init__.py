"""Configuration models for the capture engine."""

from .models import CaptureSettings, TimeoutSettings, load_capture_settings

__all__ = ["CaptureSettings", "TimeoutSettings", "load_capture_settings"]
