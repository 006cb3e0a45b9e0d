#
# config/models.py
#
"""
Attrs-based data models for refenv configuration structure.
"""

import logging
from typing import Any

from attrs import define, field

from refenv.execution.subprocess_runner import DEFAULT_COVERAGE_COMMAND
from refenv.grading import DEFAULT_NEGATIVE_SUFFIX


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_positive_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures integer is positive."""
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


def _validate_non_empty(inst: Any, attr: Any, value: str) -> None:
    if not value:
        raise ValueError(f"Field '{attr.name}' must not be empty")


@define(frozen=True, slots=True)
class DriverConfig:
    """Settings for launching the reference shell and grading its output."""
    executable: str = field(default="js", validator=_validate_non_empty)
    helper_functions: str = field(default="shell.js", validator=_validate_non_empty)
    runner: str = field(default="subprocess")
    coverage_command: tuple[str, ...] = field(default=DEFAULT_COVERAGE_COMMAND, converter=tuple)
    negative_suffix: str = field(default=DEFAULT_NEGATIVE_SUFFIX, validator=_validate_non_empty)
    file_pattern: str = field(default="*.js")
    exclude: tuple[str, ...] = field(default=("shell.js", "browser.js"), converter=tuple)
    concurrency: int = field(default=1, validator=_validate_positive_int)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for refenv."""
    log_level: str = field(default="INFO", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@define(frozen=True, slots=True)
class RefEnvConfig:
    """Root configuration object for the refenv application."""
    driver: DriverConfig = field(factory=DriverConfig)
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})


# 🔼⚙️
