# src/refenv/cli/utils.py

"""
Options and logging setup shared by the refenv commands.

Logging options can be given on the group (`refenv -l DEBUG run ...`) and on
each command (`refenv run -l DEBUG ...`); command values win.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import click
import structlog
from attrs import define

from refenv.telemetry import StructLogger
from refenv.telemetry.logger import setup_logging

log: StructLogger = structlog.get_logger("cli.utils")

LOGGING_KEY = "logging"
FALLBACK_LEVEL = "INFO"

_LOGGING_OPTIONS: tuple[tuple[tuple[str, ...], dict[str, Any]], ...] = (
    (
        ("-l", "--log-level"),
        {
            "type": click.Choice(sorted(logging.getLevelNamesMapping()), case_sensitive=False),
            "envvar": "REFENV_LOG_LEVEL",
            "help": "Log level for this run (overrides the config file).",
        },
    ),
    (
        ("--log-file",),
        {
            "type": click.Path(dir_okay=False, writable=True, resolve_path=True),
            "envvar": "REFENV_LOG_FILE",
            "help": "Also write JSON logs to this file.",
        },
    ),
    (
        ("--json-logs",),
        {
            "is_flag": True,
            "envvar": "REFENV_JSON_LOGS",
            "help": "Render console logs as JSON.",
        },
    ),
)


@define(frozen=True, slots=True)
class LoggingSettings:
    """Logging choices taken from the command line; None means not given."""

    level: str | None = None
    file: str | None = None
    json: bool | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "LoggingSettings":
        return cls(
            level=options.get("log_level"),
            file=options.get("log_file"),
            json=options.get("json_logs"),
        )

    def over(self, parent: "LoggingSettings") -> "LoggingSettings":
        """Fills unset values from `parent`."""
        return LoggingSettings(
            level=self.level or parent.level,
            file=self.file or parent.file,
            json=self.json or parent.json,
        )


def logging_options(f: Callable) -> Callable:
    """Adds --log-level, --log-file and --json-logs to a command."""
    for decls, extra in reversed(_LOGGING_OPTIONS):
        f = click.option(*decls, default=None, **extra)(f)
    return f


def configure_logging(
    ctx: click.Context,
    options: Mapping[str, Any],
    default_level: str = FALLBACK_LEVEL,
) -> LoggingSettings:
    """Configures logging from the command's options over the group's."""
    parent = (ctx.obj or {}).get(LOGGING_KEY) or LoggingSettings()
    settings = LoggingSettings.from_options(options).over(parent)

    level_name = (settings.level or default_level).upper()
    level = logging.getLevelNamesMapping().get(level_name)
    if level is None:
        level_name, level = FALLBACK_LEVEL, logging.INFO

    setup_logging(level=level, json_logs=bool(settings.json), log_file=settings.file)
    log.debug("Logging configured", level=level_name, file=settings.file or "console", json=bool(settings.json))
    return settings


def config_path_option(f: Callable) -> Callable:
    """Adds --config-path (env REFENV_CONF) to a command."""
    return click.option(
        "-c",
        "--config-path",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
        default=None,
        envvar="REFENV_CONF",
        show_envvar=True,
        help="Path to the refenv TOML configuration file.",
    )(f)

# ⚙️🛠️
