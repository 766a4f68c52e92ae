"""
Async subprocess execution with a hard deadline.

Every OS interaction in the capture engine (osascript, screencapture, sips)
goes through run_command. Commands are always spawned from an argument vector,
never through a shell.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

TIMEOUT_SENTINEL = "[TIMEOUT]"
TIMEOUT_EXIT_CODE = 124
SPAWN_FAILURE_EXIT_CODE = 127


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished (or killed) subprocess."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def timed_out(self) -> bool:
        return self.returncode == TIMEOUT_EXIT_CODE and self.stderr == TIMEOUT_SENTINEL


CommandRunner = Callable[..., Awaitable[CommandResult]]


def _merge_env(overrides: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    if not overrides:
        return None
    env = dict(os.environ)
    env.update(overrides)
    return env


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()


async def run_command(
    argv: Sequence[str],
    *,
    env: Optional[Mapping[str, str]] = None,
    timeout: float = 10.0,
) -> CommandResult:
    """
    Run a command and collect its output.

    Args:
        argv: Command and arguments, passed to the OS as-is
        env: Variables merged over the current environment
        timeout: Seconds before the child is killed

    Returns:
        CommandResult. A command that exceeds its deadline is killed and
        reported as returncode 124 with stderr "[TIMEOUT]"; a command that
        cannot be started is reported as returncode 127.
    """
    args = [str(arg) for arg in argv]
    logger.debug(f"[PROCESS] Running {args[0]} (timeout={timeout}s)")

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_merge_env(env),
        )
    except OSError as e:
        logger.warning(f"[PROCESS] Failed to start {args[0]}: {e}")
        return CommandResult(stdout="", stderr=str(e), returncode=SPAWN_FAILURE_EXIT_CODE)

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(proc)
        logger.warning(f"[PROCESS] {args[0]} exceeded {timeout}s and was killed")
        return CommandResult(stdout="", stderr=TIMEOUT_SENTINEL, returncode=TIMEOUT_EXIT_CODE)
    except asyncio.CancelledError:
        await _kill(proc)
        raise

    return CommandResult(
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        returncode=proc.returncode if proc.returncode is not None else 0,
    )
