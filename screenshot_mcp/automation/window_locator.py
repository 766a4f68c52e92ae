"""
Front window lookup for a resolved application.

A single System Events query reports the first window's id, or its bounds when
the window exposes no id. The textual reply is converted into a
WindowClassification right here; nothing downstream parses it again.
"""

import asyncio
import logging
from typing import Optional

from ..config.models import TimeoutSettings
from ..utils.applescript_utils import describe_applescript_error, run_applescript
from ..utils.process_runner import CommandRunner
from .models import Bounds, NoWindows, QueryError, StableId, WindowClassification

logger = logging.getLogger(__name__)

WINDOW_INFO_SCRIPT = """
on run argv
    set targetName to item 1 of argv
    tell application "System Events"
        set appProcess to first process whose name is targetName
        if (count of windows of appProcess) is 0 then
            return "NO_WINDOWS"
        end if
        set frontWindow to first window of appProcess
        try
            set windowID to id of frontWindow
            return "WINDOW_ID:" & windowID
        on error
            set windowPosition to position of frontWindow
            set windowSize to size of frontWindow
            return "BOUNDS:" & (item 1 of windowPosition) & "," & (item 2 of windowPosition) & "," & (item 1 of windowSize) & "," & (item 2 of windowSize)
        end try
    end tell
end run
"""

BRING_TO_FRONT_SCRIPT = """
on run argv
    tell application "System Events" to set frontmost of first process whose name is (item 1 of argv) to true
end run
"""

_WINDOW_ID_PREFIX = "WINDOW_ID:"
_BOUNDS_PREFIX = "BOUNDS:"
_NO_WINDOWS = "NO_WINDOWS"


def _to_int(value: str) -> int:
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        return int(float(value))


def parse_window_info(output: str) -> WindowClassification:
    """Classify the window query reply."""
    reply = output.strip()

    if reply == _NO_WINDOWS:
        return NoWindows()

    try:
        if reply.startswith(_WINDOW_ID_PREFIX):
            return StableId(window_id=_to_int(reply[len(_WINDOW_ID_PREFIX):]))
        if reply.startswith(_BOUNDS_PREFIX):
            parts = reply[len(_BOUNDS_PREFIX):].split(",")
            if len(parts) == 4:
                x, y, width, height = (_to_int(part) for part in parts)
                return Bounds(x=x, y=y, width=width, height=height)
    except ValueError:
        pass

    return QueryError(detail=f"unexpected window info: {reply!r}" if reply else "empty reply")


class WindowLocator:
    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        timeouts: Optional[TimeoutSettings] = None,
        settle_delay_seconds: float = 1.0,
    ):
        self.runner = runner
        self.timeouts = timeouts or TimeoutSettings()
        self.settle_delay_seconds = settle_delay_seconds

    async def locate(self, app_name: str) -> WindowClassification:
        """Best-effort single query; window state is too volatile to retry."""
        result = await run_applescript(
            WINDOW_INFO_SCRIPT, app_name, timeout=self.timeouts.window_query, runner=self.runner
        )
        if not result.ok:
            detail = describe_applescript_error(result) or "window query failed"
            logger.warning(f"[WINDOW LOCATOR] Window query for {app_name!r} failed: {detail}")
            return QueryError(detail=detail)

        classification = parse_window_info(result.stdout)
        logger.info(f"[WINDOW LOCATOR] {app_name!r}: {classification.describe()}")
        return classification

    async def bring_to_front(self, app_name: str) -> bool:
        """
        Make the application frontmost and wait for window animations to settle.

        Failure is ignored; the capture proceeds against whatever is visible.
        """
        result = await run_applescript(
            BRING_TO_FRONT_SCRIPT, app_name, timeout=self.timeouts.activate, runner=self.runner
        )
        if not result.ok:
            logger.info(f"[WINDOW LOCATOR] Could not bring {app_name!r} to front: {result.stderr.strip()}")

        if self.settle_delay_seconds > 0:
            await asyncio.sleep(self.settle_delay_seconds)
        return result.ok
