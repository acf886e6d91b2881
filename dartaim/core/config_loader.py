"""
Shared helpers to load settings from YAML and build config dataclasses.

Tuning lives in `config/default_config.yaml` so difficulty and run parameters
can be adjusted without touching code. Unknown keys are ignored to keep the
loader backwards compatible.
"""
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

# Default location for the application-wide settings
DEFAULT_CONFIG_PATH = Path("config/default_config.yaml")


def load_yaml(filepath: Path) -> Any:
    """
    Parse a YAML file.

    An empty document yields an empty dict. The caller decides what to do
    with a document whose top level is not a mapping.

    Raises:
        FileNotFoundError: If the file is absent
        yaml.YAMLError: If the document cannot be parsed
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Could not parse {filepath}: {e}")
        raise

    logger.debug(f"Parsed {filepath}")
    return {} if data is None else data


def load_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load raw configuration dictionary from YAML.

    Args:
        config_path: Optional path to YAML file (defaults to DEFAULT_CONFIG_PATH)

    Returns:
        Dictionary with configuration values (empty dict on failure)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info("Config not found at %s, using defaults", path)
        return {}

    try:
        settings = load_yaml(path)
    except Exception as exc:  # YAML/IO errors fall back to safe defaults
        logger.warning("Failed to load config from %s: %s", path, exc)
        return {}

    if not isinstance(settings, dict):
        logger.warning("Config at %s is not a mapping, using defaults", path)
        return {}

    logger.info(f"Configuration loaded from {path}")
    return settings


def known_overrides(config_cls: type, overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Filter overrides down to the fields of a dataclass.

    Unknown keys are ignored to remain forward compatible with new YAML fields.

    Raises:
        ValueError: If the section is present but is not a mapping
    """
    if overrides is None:
        return {}
    if not isinstance(overrides, dict):
        raise ValueError(
            f"{config_cls.__name__} section must be a mapping, "
            f"got {type(overrides).__name__}"
        )

    names = {f.name for f in fields(config_cls) if f.init}
    accepted = {}
    for key, value in overrides.items():
        if key in names:
            accepted[key] = value
        else:
            logger.debug("Ignoring unknown config key: %s", key)
    return accepted


def build_config(config_cls: type, overrides: Optional[Dict[str, Any]] = None) -> Any:
    """
    Construct a (possibly frozen) config dataclass with YAML overrides applied.

    Raises:
        ValueError: If the section is malformed or the resulting config
            fails its own validation
    """
    return config_cls(**known_overrides(config_cls, overrides))
