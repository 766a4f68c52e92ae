"""
Tests for the capture strategy table and screencapture argument building.
"""

import pytest

from screenshot_mcp.automation.capture_strategy import (
    CAPTURE_TABLE,
    INTERACTIVE_HINT,
    run_capture,
    select_capture,
)
from screenshot_mcp.automation.models import (
    Bounds,
    CaptureMethod,
    CaptureStrategy,
    NoWindows,
    QueryError,
    StableId,
)

OUT = "/tmp/Screenshots/shot.png"

STABLE = StableId(window_id=12345)
BOUNDS = Bounds(x=0, y=25, width=1440, height=875)
NO_WINDOWS = NoWindows()
QUERY_ERROR = QueryError(detail="boom")

WINDOW_ID_ARGV = ["screencapture", "-l", "12345", "-o", OUT]
BOUNDS_ARGV = ["screencapture", "-R", "0,25,1440,875", "-o", OUT]
INTERACTIVE_ARGV = ["screencapture", "-i", "-o", OUT]
FRONTMOST_ARGV = ["screencapture", "-w", "-o", OUT]


@pytest.mark.parametrize(
    "strategy,classification,method,argv",
    [
        (CaptureStrategy.BY_ID, STABLE, CaptureMethod.WINDOW_ID, WINDOW_ID_ARGV),
        (CaptureStrategy.BY_ID, BOUNDS, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.BY_ID, NO_WINDOWS, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.BY_ID, QUERY_ERROR, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.BY_BOUNDS, STABLE, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.BY_BOUNDS, BOUNDS, CaptureMethod.BOUNDS, BOUNDS_ARGV),
        (CaptureStrategy.BY_BOUNDS, NO_WINDOWS, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.BY_BOUNDS, QUERY_ERROR, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
        (CaptureStrategy.INTERACTIVE, STABLE, CaptureMethod.INTERACTIVE, INTERACTIVE_ARGV),
        (CaptureStrategy.INTERACTIVE, BOUNDS, CaptureMethod.INTERACTIVE, INTERACTIVE_ARGV),
        (CaptureStrategy.INTERACTIVE, NO_WINDOWS, CaptureMethod.INTERACTIVE, INTERACTIVE_ARGV),
        (CaptureStrategy.INTERACTIVE, QUERY_ERROR, CaptureMethod.INTERACTIVE, INTERACTIVE_ARGV),
        (CaptureStrategy.AUTO, STABLE, CaptureMethod.WINDOW_ID, WINDOW_ID_ARGV),
        (CaptureStrategy.AUTO, BOUNDS, CaptureMethod.BOUNDS, BOUNDS_ARGV),
        (CaptureStrategy.AUTO, NO_WINDOWS, CaptureMethod.INTERACTIVE, INTERACTIVE_ARGV),
        (CaptureStrategy.AUTO, QUERY_ERROR, CaptureMethod.FRONTMOST, FRONTMOST_ARGV),
    ],
)
def test_select_capture(strategy, classification, method, argv):
    plan = select_capture(strategy, classification, OUT)

    assert plan.method is method
    assert plan.argv == argv


def test_table_covers_every_combination():
    assert len(CAPTURE_TABLE) == 16
    for strategy in CaptureStrategy:
        for variant in (StableId, Bounds, NoWindows, QueryError):
            assert (strategy, variant) in CAPTURE_TABLE


def test_every_invocation_excludes_cursor():
    for strategy in CaptureStrategy:
        for classification in (STABLE, BOUNDS, NO_WINDOWS, QUERY_ERROR):
            plan = select_capture(strategy, classification, OUT)
            assert "-o" in plan.argv
            assert plan.argv[-1] == OUT


def test_notes_describe_method():
    assert select_capture(CaptureStrategy.AUTO, STABLE, OUT).notes == ["✅ Using window ID method (ID: 12345)"]
    assert select_capture(CaptureStrategy.AUTO, BOUNDS, OUT).notes == ["✅ Using bounds method (0,25,1440,875)"]

    auto_interactive = select_capture(CaptureStrategy.AUTO, NO_WINDOWS, OUT).notes
    assert auto_interactive[0].startswith("⚠️  App has no windows")
    assert auto_interactive[-1] == INTERACTIVE_HINT

    explicit_interactive = select_capture(CaptureStrategy.INTERACTIVE, STABLE, OUT).notes
    assert "interactive selection" in explicit_interactive[0]
    assert explicit_interactive[-1] == INTERACTIVE_HINT

    assert "falling back" in select_capture(CaptureStrategy.BY_ID, BOUNDS, OUT).notes[0]
    assert "Falling back" in select_capture(CaptureStrategy.AUTO, QUERY_ERROR, OUT).notes[0]


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, CaptureStrategy.AUTO),
        ("auto", CaptureStrategy.AUTO),
        ("by-id", CaptureStrategy.BY_ID),
        ("id", CaptureStrategy.BY_ID),
        ("by-bounds", CaptureStrategy.BY_BOUNDS),
        ("bounds", CaptureStrategy.BY_BOUNDS),
        (" Interactive ", CaptureStrategy.INTERACTIVE),
        (CaptureStrategy.BY_ID, CaptureStrategy.BY_ID),
    ],
)
def test_strategy_parse(value, expected):
    assert CaptureStrategy.parse(value) is expected


def test_strategy_parse_rejects_unknown():
    with pytest.raises(ValueError):
        CaptureStrategy.parse("fullscreen")


@pytest.mark.asyncio
async def test_run_capture_uses_plan_argv(fake_mac, tmp_path):
    out = tmp_path / "shot.png"
    plan = select_capture(CaptureStrategy.AUTO, STABLE, str(out))

    result = await run_capture(plan, timeout=12, runner=fake_mac)

    assert result.ok
    assert fake_mac.calls == [plan.argv]
    assert fake_mac.timeouts == [12]
    assert out.exists()
