"""
AppleScript Utility Functions

Provides standardized execution and error descriptions for the System Events
queries used by the capture engine.
"""

import logging
from typing import Optional

from .process_runner import CommandResult, CommandRunner, run_command

logger = logging.getLogger(__name__)


async def run_applescript(
    script: str,
    *args: str,
    timeout: float = 8.0,
    runner: Optional[CommandRunner] = None,
) -> CommandResult:
    """
    Execute AppleScript through osascript.

    User-controlled values must be passed in ``args`` and read with
    ``on run argv`` inside the script; they are never spliced into the
    script source.

    Args:
        script: AppleScript source
        *args: Arguments exposed to the script as ``argv``
        timeout: Timeout in seconds
        runner: Command runner (defaults to run_command)

    Returns:
        CommandResult with returncode, stdout, stderr
    """
    runner = runner or run_command
    result = await runner(["osascript", "-e", script, *args], timeout=timeout)
    if not result.ok:
        logger.debug(f"[APPLESCRIPT] osascript exited {result.returncode}: {result.stderr.strip()}")
    return result


def describe_applescript_error(result: CommandResult) -> Optional[str]:
    """
    Turn a failed osascript invocation into a user-facing sentence.

    Returns:
        None if the invocation succeeded, otherwise an explanation
    """
    if result.ok:
        return None

    if result.timed_out:
        return "Script execution timed out. The operation may be taking too long, please try again."

    stderr = result.stderr.strip()
    stdout = result.stdout.strip()
    lowered = stderr.lower()

    if "not allowed assistive access" in lowered or "not allowed automation" in lowered or "not authorized" in lowered:
        return (
            "Automation permission denied. Grant access in System Settings → Privacy & Security → "
            "Accessibility/Automation for the terminal or host running this server."
        )
    if "can't get" in lowered or "can’t get" in lowered:
        return f"Application not accessible: {stderr}"
    if "syntax error" in lowered:
        return f"AppleScript syntax error: {stderr}"

    return stderr or stdout or "Unknown AppleScript error"
