"""
Resolve a free-text application name to a running foreground process.

Matching runs in Python against the process list reported by System Events,
so the user's input never becomes part of an AppleScript or shell command.
"""

import logging
from typing import List, Optional, Sequence, Union

from ..config.models import TimeoutSettings
from ..utils.applescript_utils import run_applescript
from ..utils.process_runner import CommandResult, CommandRunner
from .models import AppNotFound, ResolvedApplication

logger = logging.getLogger(__name__)

LIST_FOREGROUND_APPS_SCRIPT = (
    'tell application "System Events" to get name of every process whose background only is false'
)


def parse_app_list(output: str) -> List[str]:
    """Split osascript's comma-delimited list, preserving enumeration order."""
    return [name.strip() for name in output.split(",") if name.strip()]


async def query_foreground_apps(timeout: float, runner: Optional[CommandRunner] = None) -> CommandResult:
    return await run_applescript(LIST_FOREGROUND_APPS_SCRIPT, timeout=timeout, runner=runner)


def find_substring_match(input_name: str, candidates: Sequence[str]) -> Optional[str]:
    """First candidate containing the input, or contained in it (case-sensitive)."""
    for candidate in candidates:
        if input_name in candidate or candidate in input_name:
            return candidate
    return None


def find_exact_match(input_name: str, candidates: Sequence[str]) -> Optional[str]:
    for candidate in candidates:
        if candidate == input_name:
            return candidate
    return None


def find_casefold_match(input_name: str, candidates: Sequence[str]) -> Optional[str]:
    """Bidirectional substring test with both sides case-folded."""
    needle = input_name.casefold()
    for candidate in candidates:
        folded = candidate.casefold()
        if needle in folded or folded in needle:
            return candidate
    return None


class AppResolver:
    """
    Two-pass fuzzy resolver.

    Pass 1 is a case-sensitive bidirectional substring match (with an exact
    match fallback over the same list); pass 2 repeats the substring test
    case-insensitively against a fresh process list. Ties go to the process
    that System Events enumerates first. A failed query counts as "no match"
    for its pass.
    """

    def __init__(self, runner: Optional[CommandRunner] = None, timeouts: Optional[TimeoutSettings] = None):
        self.runner = runner
        self.timeouts = timeouts or TimeoutSettings()

    async def _fetch_candidates(self, timeout: float, label: str) -> List[str]:
        result = await query_foreground_apps(timeout, runner=self.runner)
        if not result.ok:
            logger.warning(
                f"[APP RESOLVER] {label} process query failed (exit {result.returncode}): {result.stderr.strip()}"
            )
            return []
        return parse_app_list(result.stdout)

    async def list_foreground_apps(self) -> List[str]:
        """Running foreground application names, or [] if the query fails."""
        return await self._fetch_candidates(self.timeouts.app_enumeration, "Diagnostic")

    async def resolve(self, input_name: str) -> Union[ResolvedApplication, AppNotFound]:
        if not input_name:
            return AppNotFound(input_name=input_name, running_apps=[])

        logger.info(f"[APP RESOLVER] Resolving application name: {input_name!r}")

        candidates = await self._fetch_candidates(self.timeouts.resolve, "Pass 1")
        match = find_substring_match(input_name, candidates)
        if match is not None:
            return ResolvedApplication(name=match, input_name=input_name, match_pass="substring")
        match = find_exact_match(input_name, candidates)
        if match is not None:
            return ResolvedApplication(name=match, input_name=input_name, match_pass="exact")

        candidates = await self._fetch_candidates(self.timeouts.resolve, "Pass 2")
        match = find_casefold_match(input_name, candidates)
        if match is not None:
            logger.info(f"[APP RESOLVER] Case-insensitive match: {input_name!r} -> {match!r}")
            return ResolvedApplication(name=match, input_name=input_name, match_pass="case-insensitive")

        logger.info(f"[APP RESOLVER] No running application matches {input_name!r}")
        return AppNotFound(input_name=input_name, running_apps=await self.list_foreground_apps())
