"""Configuration loading from CLI args, env vars, and optional YAML file.

Precedence: CLI argument > environment variable > YAML > default.
"""

import os
import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    log_file: str | None = None
    poll_interval: float = 1.0      # seconds between fallback polls in follow mode
    extract_patterns: bool = True
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s (%s), using defaults", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_name: str, yaml_value, default):
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(env_name)
    if env_value is not None:
        return env_value
    if yaml_value is not None:
        return yaml_value
    return default


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data."""
    server = yaml_data.get("server") or {}
    defaults = Config()

    return Config(
        log_file=_pick(getattr(cli_args, "log_file", None), "GAMELOG_FILE",
                       yaml_data.get("log_file"), defaults.log_file),
        poll_interval=float(_pick(getattr(cli_args, "poll_interval", None), "GAMELOG_POLL_INTERVAL",
                                  yaml_data.get("poll_interval"), defaults.poll_interval)),
        extract_patterns=bool(yaml_data.get("extract_patterns", defaults.extract_patterns)),
        host=str(_pick(getattr(cli_args, "host", None), "GAMELOG_HOST",
                       server.get("host"), defaults.host)),
        port=int(_pick(getattr(cli_args, "port", None), "GAMELOG_PORT",
                       server.get("port"), defaults.port)),
        log_level=str(_pick(getattr(cli_args, "log_level", None), "GAMELOG_LOG_LEVEL",
                            yaml_data.get("log_level"), defaults.log_level)).upper(),
    )
