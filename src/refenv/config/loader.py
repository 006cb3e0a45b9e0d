#
# config/loader.py
#
"""
Loads refenv configuration from a TOML file and the environment.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from refenv.config.models import DriverConfig, GlobalConfig, RefEnvConfig
from refenv.exceptions import ConfigurationError

log = structlog.get_logger("config.loader")

# Environment variables applied on top of the file, keyed by (section, option).
ENV_OVERRIDES: dict[tuple[str, str], str] = {
    ("driver", "executable"): "REFENV_EXECUTABLE",
    ("driver", "helper_functions"): "REFENV_HELPER_FUNCTIONS",
    ("global", "log_level"): "REFENV_LOG_LEVEL",
}


def _build(model: type, section: str, data: Mapping[str, Any]) -> Any:
    known = {a.name for a in attrs.fields(model)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) in [{section}]: {', '.join(sorted(unknown))}"
        )
    try:
        return model(**data)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value in [{section}]: {e}") from e


def _apply_env_overrides(sections: dict[str, dict[str, Any]]) -> None:
    for (section, option), env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            log.debug("Applying environment override", env_var=env_var, option=f"{section}.{option}")
            sections.setdefault(section, {})[option] = value


def config_from_mapping(data: Mapping[str, Any]) -> RefEnvConfig:
    """Builds a RefEnvConfig from parsed TOML data, applying environment overrides."""
    sections: dict[str, dict[str, Any]] = {}
    for name in ("driver", "global"):
        section = data.get(name, {})
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"[{name}] must be a table")
        sections[name] = dict(section)

    unknown = set(data) - {"driver", "global"}
    if unknown:
        raise ConfigurationError(f"Unknown section(s): {', '.join(sorted(unknown))}")

    _apply_env_overrides(sections)
    return RefEnvConfig(
        driver=_build(DriverConfig, "driver", sections["driver"]),
        global_config=_build(GlobalConfig, "global", sections["global"]),
    )


def load_config(config_path: Path | None) -> RefEnvConfig:
    """
    Loads and validates configuration.

    A `None` path yields the defaults (plus environment overrides).
    """
    if config_path is None:
        log.debug("No configuration file given, using defaults")
        return config_from_mapping({})

    log.info("Loading configuration", path=str(config_path), emoji_key="config")
    try:
        with open(config_path, "rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: '{config_path}'") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{config_path}': {e}") from e

    config = config_from_mapping(data)
    log.debug("Configuration loaded", path=str(config_path))
    return config


# 🔼⚙️
