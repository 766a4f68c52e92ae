"""
Capture strategy selection.

CAPTURE_TABLE maps (requested strategy, window classification) to the
screencapture invocation that runs. Planning is pure; only run_capture
touches the OS.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Type

from ..utils.process_runner import CommandResult, CommandRunner, run_command
from .models import (
    Bounds,
    CaptureMethod,
    CaptureStrategy,
    NoWindows,
    QueryError,
    StableId,
    WindowClassification,
)

INTERACTIVE_HINT = "💡 Click on the app window or area you want to capture when the crosshair appears"

CAPTURE_TABLE: Dict[Tuple[CaptureStrategy, Type], CaptureMethod] = {
    (CaptureStrategy.BY_ID, StableId): CaptureMethod.WINDOW_ID,
    (CaptureStrategy.BY_ID, Bounds): CaptureMethod.FRONTMOST,
    (CaptureStrategy.BY_ID, NoWindows): CaptureMethod.FRONTMOST,
    (CaptureStrategy.BY_ID, QueryError): CaptureMethod.FRONTMOST,
    (CaptureStrategy.BY_BOUNDS, StableId): CaptureMethod.FRONTMOST,
    (CaptureStrategy.BY_BOUNDS, Bounds): CaptureMethod.BOUNDS,
    (CaptureStrategy.BY_BOUNDS, NoWindows): CaptureMethod.FRONTMOST,
    (CaptureStrategy.BY_BOUNDS, QueryError): CaptureMethod.FRONTMOST,
    (CaptureStrategy.INTERACTIVE, StableId): CaptureMethod.INTERACTIVE,
    (CaptureStrategy.INTERACTIVE, Bounds): CaptureMethod.INTERACTIVE,
    (CaptureStrategy.INTERACTIVE, NoWindows): CaptureMethod.INTERACTIVE,
    (CaptureStrategy.INTERACTIVE, QueryError): CaptureMethod.INTERACTIVE,
    (CaptureStrategy.AUTO, StableId): CaptureMethod.WINDOW_ID,
    (CaptureStrategy.AUTO, Bounds): CaptureMethod.BOUNDS,
    (CaptureStrategy.AUTO, NoWindows): CaptureMethod.INTERACTIVE,
    (CaptureStrategy.AUTO, QueryError): CaptureMethod.FRONTMOST,
}

_FALLBACK_NOTES = {
    CaptureStrategy.BY_ID: "⚠️  Window ID not available, falling back to frontmost window",
    CaptureStrategy.BY_BOUNDS: "⚠️  Window bounds not available, falling back to frontmost window",
    CaptureStrategy.AUTO: "⚠️  Falling back to frontmost window capture",
}


@dataclass(frozen=True)
class CapturePlan:
    method: CaptureMethod
    argv: List[str]
    notes: List[str] = field(default_factory=list)


def _notes_for(strategy: CaptureStrategy, method: CaptureMethod, classification: WindowClassification) -> List[str]:
    if method is CaptureMethod.WINDOW_ID:
        return [f"✅ Using window ID method (ID: {classification.window_id})"]
    if method is CaptureMethod.BOUNDS:
        return [f"✅ Using bounds method ({classification.as_region()})"]
    if method is CaptureMethod.INTERACTIVE:
        if strategy is CaptureStrategy.AUTO:
            return ["⚠️  App has no windows. Starting interactive selection...", INTERACTIVE_HINT]
        return ["🖱️  Starting interactive selection...", INTERACTIVE_HINT]
    return [_FALLBACK_NOTES[strategy]]


def select_capture(
    strategy: CaptureStrategy,
    classification: WindowClassification,
    output_path: str,
) -> CapturePlan:
    """
    Choose the screencapture invocation for a strategy and window classification.

    All invocations exclude the cursor (-o) and write straight to output_path.
    """
    method = CAPTURE_TABLE[(strategy, type(classification))]

    if method is CaptureMethod.WINDOW_ID:
        argv = ["screencapture", "-l", str(classification.window_id), "-o", output_path]
    elif method is CaptureMethod.BOUNDS:
        argv = ["screencapture", "-R", classification.as_region(), "-o", output_path]
    elif method is CaptureMethod.INTERACTIVE:
        argv = ["screencapture", "-i", "-o", output_path]
    else:
        argv = ["screencapture", "-w", "-o", output_path]

    return CapturePlan(method=method, argv=argv, notes=_notes_for(strategy, method, classification))


async def run_capture(plan: CapturePlan, timeout: float, runner: Optional[CommandRunner] = None) -> CommandResult:
    runner = runner or run_command
    return await runner(plan.argv, timeout=timeout)
