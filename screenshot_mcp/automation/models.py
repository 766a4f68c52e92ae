"""
Data types shared by the capture engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class ErrorType(str, Enum):
    PLATFORM_UNSUPPORTED = "PlatformUnsupported"
    APPLICATION_NOT_FOUND = "ApplicationNotFound"
    WINDOW_QUERY_ERROR = "WindowQueryError"
    CAPTURE_SUBPROCESS_FAILED = "CaptureSubprocessFailed"
    TIMEOUT = "Timeout"
    INVALID_REGION = "InvalidRegion"
    INVALID_INPUT = "InvalidInput"
    EMBEDDING_TOO_LARGE = "EmbeddingTooLarge"
    COMPRESSION_FAILED = "CompressionFailed"


class CaptureStrategy(str, Enum):
    """Window capture strategy requested by the caller."""

    AUTO = "auto"
    BY_ID = "by-id"
    BY_BOUNDS = "by-bounds"
    INTERACTIVE = "interactive"

    @classmethod
    def parse(cls, value: Union[str, "CaptureStrategy", None]) -> "CaptureStrategy":
        """
        Accept the canonical names plus the legacy ``id`` / ``bounds`` spellings.

        Raises:
            ValueError: for anything else
        """
        if isinstance(value, CaptureStrategy):
            return value
        if value is None:
            return cls.AUTO
        normalized = str(value).strip().lower()
        normalized = _STRATEGY_ALIASES.get(normalized, normalized)
        return cls(normalized)


_STRATEGY_ALIASES = {
    "id": "by-id",
    "bounds": "by-bounds",
}


class CaptureMethod(str, Enum):
    """Concrete screencapture invocation that actually ran."""

    WINDOW_ID = "window-id"
    BOUNDS = "bounds"
    INTERACTIVE = "interactive"
    FRONTMOST = "frontmost"


# Window classification: one variant per outcome of the window query.

@dataclass(frozen=True)
class StableId:
    window_id: int

    def describe(self) -> str:
        return f"window id {self.window_id}"


@dataclass(frozen=True)
class Bounds:
    x: int
    y: int
    width: int
    height: int

    def as_region(self) -> str:
        return f"{self.x},{self.y},{self.width},{self.height}"

    def describe(self) -> str:
        return f"bounds {self.as_region()}"


@dataclass(frozen=True)
class NoWindows:
    def describe(self) -> str:
        return "no windows"


@dataclass(frozen=True)
class QueryError:
    detail: str = ""

    def describe(self) -> str:
        return f"query error ({self.detail})" if self.detail else "query error"


WindowClassification = Union[StableId, Bounds, NoWindows, QueryError]


@dataclass(frozen=True)
class ResolvedApplication:
    """Canonical process name matched for a user-supplied application name."""

    name: str
    input_name: str
    match_pass: str


@dataclass(frozen=True)
class AppNotFound:
    input_name: str
    running_apps: List[str] = field(default_factory=list)


@dataclass
class CaptureOutcome:
    """Result of a capture attempt, with the diagnostic lines emitted along the way."""

    success: bool
    path: Optional[str] = None
    method: Optional[CaptureMethod] = None
    lines: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    notices: List[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_type: ErrorType,
        lines: Optional[List[str]] = None,
        path: Optional[str] = None,
    ) -> "CaptureOutcome":
        return cls(success=False, error=error, error_type=error_type, lines=list(lines or []), path=path)
