"""
Utility functions for configuration and logging.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

CONFIG_PATH_ENV = "SCREENSHOT_MCP_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    The project .env (if any) is loaded first so ``${VAR}`` values can be
    expanded. A missing file is not an error: an empty dict is returned and
    every consumer falls back to its defaults.

    Args:
        config_path: Path to config file; defaults to $SCREENSHOT_MCP_CONFIG,
            then ./config.yaml

    Returns:
        Configuration dictionary
    """
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)

    path = Path(config_path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH).expanduser()
    if not path.exists():
        return {}

    with open(path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    return _expand_env_vars(config)


def _expand_env_vars(config: Any) -> Any:
    """
    Recursively expand environment variables in config.

    Args:
        config: Configuration value

    Returns:
        Config with ``${VAR}`` strings replaced by their environment values
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):
        if config.startswith('${') and config.endswith('}'):
            var_name = config[2:-1]
            return os.getenv(var_name, config)
        return config
    else:
        return config


from .logger import setup_logging, JsonFormatter

__all__ = [
    'load_config',
    'setup_logging',
    'JsonFormatter',
    'CONFIG_PATH_ENV',
]
