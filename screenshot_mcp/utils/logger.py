"""
Logging setup with file rotation and optional JSON records.

Console output goes to stderr: stdout belongs to the MCP stdio transport.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Setup logging with file rotation.

    Args:
        config: Configuration dictionary (reads the ``logging`` section)
    """
    log_config = config.get('logging', {}) or {}
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_file = log_config.get('file')
    max_bytes = log_config.get('max_bytes', 10 * 1024 * 1024)  # 10MB default
    backup_count = log_config.get('backup_count', 5)
    json_format = log_config.get('json_format', False)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        if json_format:
            file_handler.setFormatter(JsonFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(file_handler)

    # Reduce noise from some libraries
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('mcp').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized: level={log_level}, file={log_file or '-'}")
