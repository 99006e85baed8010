#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Optional

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("repomanifest")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
CONFIG_ENV_VAR = "REPOMANIFEST_CONFIG"
ENV_PREFIX = "REPOMANIFEST_"


def get_config_path():
    """Locate the configuration file.

    REPOMANIFEST_CONFIG wins when it names an existing file; otherwise the
    first non-empty config.{json,toml,yaml,yml} in ~/.repomanifest/.
    Falls back to ~/.repomanifest/config.json, the path save_config uses.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    config_dir = Path.home() / '.repomanifest'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.is_file() and path.stat().st_size > 0:
            return path

    return config_dir / 'config.json'


def read_config_file(config_path: Path) -> dict:
    """Read a JSON, TOML or YAML config file."""
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ('.yaml', '.yml'):
        import yaml
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    with open(config_path, 'r') as f:
        return json.load(f)


def load_config(config_path: Optional[Path] = None):
    """Load configuration from file, defaults and environment."""
    config_path = Path(config_path) if config_path else get_config_path()

    config = get_default_config()

    if config_path.exists():
        try:
            file_config = read_config_file(config_path)
            if not isinstance(file_config, dict):
                raise ValueError("top-level value must be a table/object")
            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    return apply_env_overrides(config)


def save_config(config, config_path: Optional[Path] = None):
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        suffix = config_path.suffix.lower()
        if suffix == '.toml':
            # tomllib is read-only
            import toml
            with open(config_path, 'w') as f:
                toml.dump(config, f)
        elif suffix in ('.yaml', '.yml'):
            import yaml
            with open(config_path, 'w') as f:
                yaml.safe_dump(config, f, default_flow_style=False)
        else:
            with open(config_path, 'w') as f:
                json.dump(config, f, indent=2)

        logger.info(f"Configuration saved to {config_path}")
    except Exception as e:
        logger.error(f"Error saving config to {config_path}: {e}")
        raise
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "manifest": {
            "path": ".wayruco/manifest.json",
            "default_version": "1.0.0"
        },
        "repository": {
            "default_priority": "important",
            "default_status": "pending",
            "default_branch": "main",
            "sync_enabled": True
        },
        "sync": {
            "remote_name": "upstream",
            "timeout_seconds": 60
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        }
    }


def configure_logging(config, verbose: bool = False):
    """Apply the configured log level (DEBUG when verbose)."""
    logging_config = config.get("logging", {})
    level_name = "DEBUG" if verbose else str(logging_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)
    fmt = logging_config.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))
    return level


def merge_configs(base_config, override_config):
    """Merge override_config into a copy of base_config; nested dicts merge key by key."""
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


def _env_value(raw: str):
    lowered = raw.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if raw.isdigit():
        return int(raw)
    return raw


def _assign(section: dict, parts: list, value) -> bool:
    """Set value at the key path spelled by parts; keys may contain underscores."""
    # Longest key first, so "remote_name" wins over a hypothetical "remote"
    for key in sorted(section, key=lambda k: len(k.split('_')), reverse=True):
        key_parts = key.split('_')
        if parts[:len(key_parts)] != key_parts:
            continue
        rest = parts[len(key_parts):]
        if not rest:
            section[key] = value
            return True
        if isinstance(section[key], dict):
            return _assign(section[key], rest, value)
        return False
    return False


def apply_env_overrides(config):
    """
    Overlay REPOMANIFEST_<SECTION>_<KEY> environment variables onto config.

    REPOMANIFEST_SYNC_REMOTE_NAME=fork sets config['sync']['remote_name'].
    Values true/yes/on and false/no/off become booleans, digit strings
    become ints. Variables naming no existing key are ignored.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX) or name == CONFIG_ENV_VAR:
            continue
        parts = name[len(ENV_PREFIX):].lower().split('_')
        if not _assign(config, parts, _env_value(raw)):
            logger.debug(f"Ignoring {name}: no such config key")
    return config
