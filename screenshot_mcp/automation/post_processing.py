"""
Post-processing of captured PNG files: optional recompression via sips and
the inline-embedding size gate.

Neither step can fail a capture. A saved file is a success even when
recompression or embedding does not work out.
"""

import base64
import logging
import math
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from ..results import ImageContent, TextContent, ToolResult
from ..utils.process_runner import CommandRunner, run_command
from .models import ErrorType

logger = logging.getLogger(__name__)

DEFAULT_INLINE_MAX_BYTES = 1_000_000
INLINE_MAX_BYTES_ENV = "MCP_SCREENSHOT_EMBED_MAX_BYTES"
COMPRESS_ENV = "COMPRESS"


@dataclass(frozen=True)
class CompressionReport:
    original_size: int
    final_size: int
    replaced: bool
    line: str

    @property
    def saved_bytes(self) -> int:
        return self.original_size - self.final_size


def compression_requested(explicit: Optional[bool], environ: Optional[Mapping[str, str]] = None) -> bool:
    """Per-call flag, or COMPRESS=1 in the environment."""
    environ = os.environ if environ is None else environ
    return bool(explicit) or environ.get(COMPRESS_ENV) == "1"


def _temp_sibling(path: Path) -> Path:
    return path.with_name(f"{path.stem}_temp.png")


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"[POST PROCESS] Could not remove temporary file {path}: {e}")


async def compress_png(
    path: str,
    timeout: float = 8.0,
    runner: Optional[CommandRunner] = None,
) -> CompressionReport:
    """
    Rewrite a PNG through sips into a temporary sibling and swap it in only
    if it came out smaller. The original bytes are kept otherwise.
    """
    runner = runner or run_command
    target = Path(path)
    temp = _temp_sibling(target)
    original_size = target.stat().st_size

    result = await runner(
        ["sips", "-s", "format", "png", "--setProperty", "formatOptions", "default", str(target), "--out", str(temp)],
        timeout=timeout,
    )

    if not result.ok or not temp.exists():
        logger.warning(f"[POST PROCESS] sips failed for {target} (exit {result.returncode}): {result.stderr.strip()}")
        _discard(temp)
        return CompressionReport(original_size, original_size, False, "⚠️  Compression failed, using original file")

    new_size = temp.stat().st_size
    if new_size >= original_size:
        _discard(temp)
        return CompressionReport(original_size, original_size, False, "⚠️  Compression did not reduce size")

    os.replace(temp, target)
    savings = original_size - new_size
    pct = round(savings * 100 / original_size) if original_size else 0
    logger.info(f"[POST PROCESS] Compressed {target.name}: {original_size} -> {new_size} bytes")
    return CompressionReport(
        original_size,
        new_size,
        True,
        f"✅ Compression complete: {original_size} bytes → {new_size} bytes (saved {savings} bytes, {pct}%)",
    )


class EmbeddingDecision(Enum):
    EMBED = "embed"
    TOO_LARGE_TEXT_ONLY = "too_large_text_only"


def resolve_inline_max_bytes(override: Optional[int] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Effective inline threshold: per-call override, else the environment
    variable (read on every call), else 1,000,000 bytes.
    """
    if override is not None:
        return int(override)

    environ = os.environ if environ is None else environ
    raw = environ.get(INLINE_MAX_BYTES_ENV)
    if raw:
        try:
            parsed = float(raw)
        except ValueError:
            logger.warning(f"[POST PROCESS] Ignoring non-numeric {INLINE_MAX_BYTES_ENV}={raw!r}")
        else:
            if math.isfinite(parsed) and parsed > 0:
                return int(parsed)
            logger.warning(f"[POST PROCESS] Ignoring out-of-range {INLINE_MAX_BYTES_ENV}={raw!r}")
    return DEFAULT_INLINE_MAX_BYTES


def should_embed(size: int, threshold: int) -> bool:
    return size <= threshold


def decide_embedding(size: int, threshold: int, requested: bool = False) -> EmbeddingDecision:
    """The request flag does not relax the threshold; it only affects messaging."""
    if should_embed(size, threshold):
        return EmbeddingDecision.EMBED
    return EmbeddingDecision.TOO_LARGE_TEXT_ONLY


def _kb(size: int) -> int:
    return round(size / 1024)


def embed_file_content(
    path: str,
    label: str,
    inline_max_bytes: Optional[int] = None,
    requested: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> ToolResult:
    """
    Build the success result for a saved screenshot.

    The file is stat'ed once and read at most once, and only when it is small
    enough to embed.
    """
    try:
        size = os.stat(path).st_size
        threshold = resolve_inline_max_bytes(inline_max_bytes, environ)
        decision = decide_embedding(size, threshold, requested)

        if decision is EmbeddingDecision.EMBED:
            with open(path, "rb") as f:
                data = base64.b64encode(f.read()).decode("ascii")
            return ToolResult(
                content=[
                    ImageContent(data=data),
                    TextContent(f"{label}{path} (embedded inline, {_kb(size)} KB)"),
                ],
                path=path,
            )

        if requested:
            logger.info(
                f"[POST PROCESS] {ErrorType.EMBEDDING_TOO_LARGE.value}: inline data requested but "
                f"{size} bytes exceeds {threshold} byte limit"
            )
        return ToolResult.text(
            f"{label}{path} (not embedded; {_kb(size)} KB exceeds {_kb(threshold)} KB limit)",
            path=path,
        )
    except OSError as e:
        logger.warning(f"[POST PROCESS] Embedding failed for {path}: {e}")
        return ToolResult.text(f"{label}{path} (embedding failed: {e})", path=path)
