"""
Configuration for the office-meta command-line tool.

Settings come from an optional YAML file, then environment variables:

    OFFICE_META_CONFIG       path to a YAML settings file
    OFFICE_META_OUTPUT_DIR   directory for "<name>.meta.<ext>" output files
    OFFICE_META_UTC_OFFSET   default UTC offset for entered dates (hours)
    OFFICE_META_SOFFICE      LibreOffice executable used for .doc conversion

Example YAML file:
    ```yaml
    output_dir: ~/Documents/meta-out
    utc_offset: +2
    ```
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_OUTPUT_DIR
from .convert import SOFFICE_PATH_ENV
from .errors import ConfigError
from .models.date_parts import validate_offset

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "OFFICE_META_CONFIG"
OUTPUT_DIR_ENV = "OFFICE_META_OUTPUT_DIR"
UTC_OFFSET_ENV = "OFFICE_META_UTC_OFFSET"

_KNOWN_KEYS = {"output_dir", "utc_offset", "soffice_path"}


@dataclass
class Settings:
    """Resolved tool settings.

    Attributes:
        output_dir: Where derived output files are written
        utc_offset: Default UTC offset (hours) for entered dates
        soffice_path: LibreOffice executable, or None to search PATH
    """

    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    utc_offset: int = 0
    soffice_path: str | None = None


def parse_offset(value: Any) -> int:
    """Parse a UTC offset such as ``5``, ``"+5"`` or ``"-3"``.

    Raises:
        ConfigError: If the value is not an integer in [-12, 14]
    """
    try:
        if isinstance(value, str):
            value = int(value.strip())
        return validate_offset(value)
    except ValueError as e:
        raise ConfigError(f"Invalid UTC offset {value!r}: {e}") from e


def _read_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return data


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from defaults, an optional YAML file, and the environment.

    Args:
        config_path: YAML file to read; falls back to OFFICE_META_CONFIG
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: If the file or any value is invalid
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    path = config_path or env.get(CONFIG_PATH_ENV)
    if path:
        data = _read_config_file(Path(path).expanduser())
        if data.get("output_dir"):
            settings.output_dir = Path(str(data["output_dir"])).expanduser()
        if data.get("utc_offset") is not None:
            settings.utc_offset = parse_offset(data["utc_offset"])
        if data.get("soffice_path"):
            settings.soffice_path = str(data["soffice_path"])

    if env.get(OUTPUT_DIR_ENV):
        settings.output_dir = Path(env[OUTPUT_DIR_ENV]).expanduser()
    if env.get(UTC_OFFSET_ENV):
        settings.utc_offset = parse_offset(env[UTC_OFFSET_ENV])
    if env.get(SOFFICE_PATH_ENV):
        settings.soffice_path = env[SOFFICE_PATH_ENV]

    return settings
