"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.layercache/config.yaml), and turns the `cache.*`
settings into builder options.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from layercache.domain.exceptions import CacheConfigurationError
from layercache.domain.models.common import CacheOptions

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".layercache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "LAYERCACHE_"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def load_configuration(
    config_file: Path = DEFAULT_CONFIG_FILE,
    env_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Test overrides (see set_config_for_testing)
    2. Environment Variables
    3. .env file
    4. YAML configuration file
    5. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        force: Reload even if configuration was already loaded.
    """
    global _config, _loaded
    if _loaded and not force:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CacheConfigurationError(f"Failed to load or parse YAML config {config_file}: {e}") from e
        if isinstance(yaml_config, dict):
            _config.update(yaml_config)
            logger.info(f"Loaded configuration from YAML: {config_file}")
        elif yaml_config is not None:
            logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
        else:
            logger.debug(f"No variables loaded from {dotenv_path}")
    else:
        logger.debug(".env file not found at or above current directory.")

    # 3. Environment Variables (Highest priority) are read on demand in get_config

    _loaded = True
    logger.info("Configuration loading process completed.")


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def env_var_name(key: str) -> str:
    """Maps a dotted config key to its environment variable name.

    'cache.capacity' -> 'LAYERCACHE_CACHE_CAPACITY'
    """
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def _lookup_yaml(key: str) -> Any:
    """Finds key in the loaded YAML, as a flat key or as nested mappings."""
    if key in _config:
        return _config[key]
    node: Any = _config
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Args:
        key: The dotted configuration key (e.g., 'cache.capacity')
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if not _loaded:
        load_configuration()

    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    value = _lookup_yaml(key)
    if value is not None:
        return value

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def _as_int(key: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    # int() would truncate 2.5 to 2
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise CacheConfigurationError(f"Config '{key}' must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise CacheConfigurationError(f"Config '{key}' must be an integer, got {value!r}") from e
    if number <= 0:
        raise CacheConfigurationError(f"Config '{key}' must be greater than 0, got {number}")
    return number


def _as_seconds(key: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise CacheConfigurationError(f"Config '{key}' must be a number of seconds, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CacheConfigurationError(f"Config '{key}' must be a number of seconds, got {value!r}") from e


def _as_bool(key: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ('true', '1', 'yes', 'on'):
            return True
        if value.lower() in ('false', '0', 'no', 'off', ''):
            return False
    if isinstance(value, int):
        return bool(value)
    raise CacheConfigurationError(f"Config '{key}' must be a boolean, got {value!r}")


def get_cache_options() -> CacheOptions:
    """Builds CacheOptions from the `cache.*` configuration keys.

    Raises:
        CacheConfigurationError: If a value has the wrong type or range.
    """
    options = CacheOptions(
        capacity=_as_int('cache.capacity', get_config('cache.capacity')),
        ttl=_as_seconds('cache.ttl_seconds', get_config('cache.ttl_seconds')),
        flush_interval=_as_seconds('cache.flush_interval_seconds', get_config('cache.flush_interval_seconds')),
        thread_safe=_as_bool('cache.thread_safe', get_config('cache.thread_safe')),
    )
    logger.debug(f"Resolved cache options: {options}")
    return options


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
