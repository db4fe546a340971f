"""Configuration loading from env vars and an optional YAML file.

Precedence: environment variable > YAML value > dataclass default.
CLI flags are applied on top of this by main.py.
"""

import logging
import os
from dataclasses import dataclass

import yaml

from logchain.formatter import FORMATS

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    input_dir: str = "InputOutput"
    input_file: str = "unparsedlogs.txt"
    output_file: str = "parsedlogs.txt"
    output_format: str = "text"
    file_encoding: str = "utf-8"
    log_level: str = "INFO"
    stats: bool = False


# Config field -> environment variable
_ENV_VARS = {
    "input_dir": "LOGCHAIN_INPUT_DIR",
    "input_file": "LOGCHAIN_INPUT_FILE",
    "output_file": "LOGCHAIN_OUTPUT_FILE",
    "output_format": "LOGCHAIN_OUTPUT_FORMAT",
    "file_encoding": "LOGCHAIN_FILE_ENCODING",
    "log_level": "LOGCHAIN_LOG_LEVEL",
    "stats": "LOGCHAIN_STATS",
}


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or unusable file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}
    if not isinstance(data, dict):
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from YAML data and environment variables.

    A YAML key left blank (``input_dir:``) counts as unset.
    """
    yaml_data = yaml_data or {}
    values = {}
    for name, env_var in _ENV_VARS.items():
        raw = yaml_data.get(name)
        if raw is None:
            raw = getattr(Config, name)
        raw = os.environ.get(env_var, raw)
        values[name] = _parse_bool(raw) if name == "stats" else str(raw)

    values["output_format"] = values["output_format"].lower()
    if values["output_format"] not in FORMATS:
        raise ValueError(
            f"Invalid output_format {values['output_format']!r}, expected one of {FORMATS}"
        )
    values["log_level"] = values["log_level"].upper()
    if values["log_level"] not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log_level {values['log_level']!r}, expected one of {LOG_LEVELS}"
        )
    return Config(**values)
